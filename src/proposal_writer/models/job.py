"""Pydantic models for Job Analyzer output."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from proposal_writer.models.technology import TechnologyCategory


class JobAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: str
    detected_technology: TechnologyCategory | None = None
    tech_stack: list[str] = Field(default_factory=list)

    @field_validator("tech_stack")
    @classmethod
    def _dedupe_stack(cls, value: list[str]) -> list[str]:
        # First occurrence wins, order preserved
        return list(dict.fromkeys(value))
