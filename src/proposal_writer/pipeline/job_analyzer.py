"""Job Analyzer - summarizes a job post and detects its technology focus."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from proposal_writer.clients.llm_client import DEFAULT_MODEL, LLMClient
from proposal_writer.models.job import JobAnalysis
from proposal_writer.models.technology import TechnologyCategory
from proposal_writer.utils.json_parser import parse_json_object

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You analyze freelance job posts so a developer can tailor a proposal to them.

Respond with a single JSON object in exactly this shape:
{
  "analysis": "short summary of the main requirements, the problem to solve and any pain points",
  "detectedTechnology": "one of: {labels} or null",
  "techStack": ["concrete tool or framework", "another one"]
}

Rules:
- detectedTechnology must be exactly one of the labels above, or null if none fits
- pick AI for machine learning, LLM or chatbot work even when it is written in Python
- pick Fullstack when the post clearly needs both frontend and backend work
- techStack lists only technologies the post actually names, most important first
- keep analysis under 120 words""".replace("{labels}", ", ".join(TechnologyCategory.labels()))

_FRONTEND = re.compile(r"\bfront[\s-]?end\b")
_BACKEND = re.compile(r"\bback[\s-]?end\b")
_FULLSTACK = re.compile(r"\bfull[\s-]?stack\b")


def _matches(pattern: str) -> Callable[[str], bool]:
    compiled = re.compile(pattern)
    return lambda text: compiled.search(text) is not None


# Checked in order, first match wins.
KEYWORD_RULES: list[tuple[TechnologyCategory, Callable[[str], bool]]] = [
    (
        TechnologyCategory.AI,
        _matches(
            r"\b(ai|ml|llms?|gpt(-?\d+\w*)?|chatgpt|openai|machine learning|deep learning"
            r"|artificial intelligence|nlp|langchain|rag|chatbots?)\b"
        ),
    ),
    (TechnologyCategory.PYTHON, _matches(r"\b(python|django|flask|fastapi)\b")),
    (TechnologyCategory.REACT, _matches(r"\b(react(\.?js)?|next\.?js)\b")),
    (TechnologyCategory.VUE, _matches(r"\b(vue(\.?js)?|nuxt(\.?js)?)\b")),
    (TechnologyCategory.SHOPIFY, _matches(r"\bshopify\b")),
    (
        TechnologyCategory.FULLSTACK,
        lambda text: bool(_FULLSTACK.search(text))
        or bool(_FRONTEND.search(text) and _BACKEND.search(text)),
    ),
    (TechnologyCategory.FRONTEND, lambda text: _FRONTEND.search(text) is not None),
    (TechnologyCategory.BACKEND, lambda text: _BACKEND.search(text) is not None),
    (
        TechnologyCategory.DEVOPS,
        _matches(r"\b(devops|docker|kubernetes|k8s|terraform|ansible|ci/cd|aws|gcp|azure)\b"),
    ),
]


def detect_technology(text: str) -> TechnologyCategory | None:
    """Guess a technology category from free text by keyword priority."""
    lowered = text.lower()
    for category, rule in KEYWORD_RULES:
        if rule(lowered):
            return category
    return None


@dataclass(frozen=True)
class AnalysisOutcome:
    """Parsed analysis plus whether it came from the keyword fallback."""

    analysis: JobAnalysis
    degraded: bool = False


def _clean_stack(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    items = (item.strip() for item in value if isinstance(item, str))
    return [item for item in items if item]


def parse_analysis(raw_text: str) -> AnalysisOutcome:
    """Turn the analysis model's reply into a JobAnalysis without raising.

    A reply that is a (possibly fenced) JSON object is read field by field;
    anything else is kept as the summary and scanned for keywords.
    """
    try:
        data = parse_json_object(raw_text)
    except ValueError:
        logger.warning("Analysis reply is not a JSON object, falling back to keyword scan")
        return AnalysisOutcome(
            analysis=JobAnalysis(
                summary=raw_text,
                detected_technology=detect_technology(raw_text),
            ),
            degraded=True,
        )

    summary = data.get("analysis")
    detected = data.get("detectedTechnology")
    return AnalysisOutcome(
        analysis=JobAnalysis(
            summary=summary if isinstance(summary, str) else raw_text,
            detected_technology=(
                TechnologyCategory.from_label(detected) if isinstance(detected, str) else None
            ),
            tech_stack=_clean_stack(data.get("techStack")),
        ),
    )


class JobAnalyzer:
    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        *,
        temperature: float = 0.3,
        max_tokens: int = 400,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def analyze_detailed(self, job_description: str) -> AnalysisOutcome:
        """Analyze a job post, keeping track of degraded parses."""
        prompt = f"""Analyze the following job post:

---
{job_description}
---

Respond with the JSON object only."""

        response = await self.llm.generate(
            prompt=prompt,
            system=SYSTEM_PROMPT,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            json_mode=True,
        )
        outcome = parse_analysis(response.text)
        logger.info(
            "Job analysis: technology=%s stack=%s degraded=%s",
            outcome.analysis.detected_technology.value if outcome.analysis.detected_technology else None,
            outcome.analysis.tech_stack,
            outcome.degraded,
        )
        return outcome

    async def analyze(self, job_description: str) -> JobAnalysis:
        """Analyze a job post and return structured analysis."""
        return (await self.analyze_detailed(job_description)).analysis
