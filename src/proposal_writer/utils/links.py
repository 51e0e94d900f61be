"""Pull a bare portfolio link out of a prose portfolio blurb."""

from __future__ import annotations

import re
from urllib.parse import urlparse

PLACEHOLDER_LINK = "https://www.upwork.com/freelancers/"

_URL_PATTERN = re.compile(r"(?:https?://|www\.)[^\s<>\"'()\[\]]+", re.IGNORECASE)
_TRAILING_PUNCTUATION = ".,;:!?"

_REPOSITORY_HOSTS = ("github.com", "gitlab.com", "bitbucket.org")


def find_urls(text: str) -> list[str]:
    """Return every http/https/www URL in ``text`` in order of appearance."""
    return [m.group(0).rstrip(_TRAILING_PUNCTUATION) for m in _URL_PATTERN.finditer(text)]


def is_repository_url(url: str) -> bool:
    candidate = url if "://" in url else f"https://{url}"
    host = (urlparse(candidate).hostname or "").lower()
    return any(host == h or host.endswith("." + h) for h in _REPOSITORY_HOSTS)


def extract_link(text: str | None) -> str:
    """Pick the link to show as "my portfolio" from a portfolio blurb.

    Non-repository URLs are preferred over source-repository ones; among
    equally preferred URLs the last one wins. Falls back to the last URL of
    any kind, then to ``PLACEHOLDER_LINK``.
    """
    urls = find_urls(text or "")
    if not urls:
        return PLACEHOLDER_LINK
    preferred = [u for u in urls if not is_repository_url(u)]
    if preferred:
        return preferred[-1]
    return urls[-1]
