"""Caller input for a single proposal run."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from proposal_writer.parsers.inputs import (
    normalize_name,
    normalize_technology,
    normalize_tone,
)


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    person_name: str
    requested_technology: str | None = None
    tone: str
    job_description: str
    client_name: str | None = None

    @field_validator("person_name", "tone", "job_description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @classmethod
    def from_raw(
        cls,
        name: str | None,
        tone: str | None,
        job_description: str | None,
        *,
        technology: str | None = None,
        client_name: str | None = None,
    ) -> GenerationRequest:
        """Build a request from untrusted caller input.

        Name, technology and tone are normalized; an empty technology or
        client name is treated as absent. Missing or blank required fields
        raise ``pydantic.ValidationError``.
        """
        return cls(
            person_name=normalize_name((name or "").strip()) or "",
            requested_technology=normalize_technology(technology) or None,
            tone=normalize_tone(tone) or "",
            job_description=job_description or "",
            client_name=client_name or None,
        )
