"""Closed set of technology categories a proposal can be framed around."""

from __future__ import annotations

from enum import Enum

from proposal_writer.parsers.inputs import normalize_technology


class TechnologyCategory(str, Enum):
    AI = "AI"
    PYTHON = "Python"
    FRONTEND = "Frontend"
    BACKEND = "Backend"
    FULLSTACK = "Fullstack"
    REACT = "React"
    VUE = "Vue"
    SHOPIFY = "Shopify"
    DEVOPS = "Devops"

    @classmethod
    def from_label(cls, raw: str | None) -> TechnologyCategory | None:
        """Normalize a free-text label and return its category, or None.

        Used for both user-typed technologies and labels returned by the
        analysis model, so "react", "REACT" and " React " all resolve.
        """
        if raw is None:
            return None
        label = normalize_technology(raw.strip())
        try:
            return cls(label)
        except ValueError:
            return None

    @classmethod
    def labels(cls) -> list[str]:
        return [c.value for c in cls]
