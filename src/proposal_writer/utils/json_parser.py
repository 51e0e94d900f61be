"""Utility to read a JSON object out of an LLM response."""

from __future__ import annotations

import json
import re

_OPENING_FENCE = re.compile(r"^```[a-zA-Z]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(text: str) -> str:
    """Remove a markdown code fence (``` or ```json) wrapping the text."""
    text = text.strip()
    if not text.startswith("```"):
        return text
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def parse_json_object(text: str) -> dict:
    """Strictly parse a JSON object, tolerating only a code fence around it.

    No brace hunting or truncation repair is attempted: anything that is not
    a complete JSON object raises ``ValueError`` so the caller can take its
    own fallback path.
    """
    stripped = strip_code_fences(text)
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Could not parse JSON object: {stripped[:200]}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")
    return data
