"""Normalization of free-text caller input (name, technology, tone)."""

from __future__ import annotations

import re
from pathlib import Path

# Labels whose canonical casing is not "capitalize the first letter".
_IRREGULAR_TECHNOLOGIES: dict[str, str] = {
    "ai": "AI",
    "devops": "Devops",
}


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def normalize_name(raw: str | None) -> str | None:
    """Lowercase a persona name and capitalize its first character."""
    if not raw:
        return raw
    return _capitalize_first(raw.lower())


def normalize_technology(raw: str | None) -> str | None:
    """Canonicalize a technology token without checking it is a known category.

    >>> normalize_technology("DEVOPS")
    'Devops'
    >>> normalize_technology("react")
    'React'
    """
    if not raw:
        return raw
    lower = raw.lower()
    if lower in _IRREGULAR_TECHNOLOGIES:
        return _IRREGULAR_TECHNOLOGIES[lower]
    return _capitalize_first(lower)


def normalize_tone(raw: str | None) -> str | None:
    if not raw:
        return raw
    return raw.lower()


def clean_job_description(text: str) -> str:
    """Collapse runs of blank lines and spaces pasted in from a job board."""
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"[ \t]+", " ", text)
    return "\n".join(line.strip() for line in text.splitlines()).strip()


def load_job_description(path: str | Path) -> str:
    return clean_job_description(Path(path).read_text(encoding="utf-8"))
