"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from proposal_writer.models.technology import TechnologyCategory


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class LLMConfig:
    analysis_model: str = "claude-haiku-4-5-20251001"
    proposal_model: str = "claude-sonnet-4-5-20250929"
    timeout: int = 60

    def __post_init__(self) -> None:
        _check_range("timeout", self.timeout, 1, 600)


@dataclass(frozen=True)
class GenerationConfig:
    temperature: float
    max_tokens: int

    def __post_init__(self) -> None:
        _check_range("temperature", self.temperature, 0.0, 1.0)
        _check_range("max_tokens", self.max_tokens, 1, 8192)


@dataclass(frozen=True)
class AnalysisConfig(GenerationConfig):
    temperature: float = 0.3
    max_tokens: int = 400


@dataclass(frozen=True)
class ProposalConfig(GenerationConfig):
    temperature: float = 0.8
    max_tokens: int = 600


@dataclass(frozen=True)
class PipelineConfig:
    default_technology: str = "Fullstack"
    timeout_seconds: float = 180.0

    def __post_init__(self) -> None:
        if TechnologyCategory.from_label(self.default_technology) is None:
            raise ValueError(
                f"default_technology must be one of {TechnologyCategory.labels()}, "
                f"got {self.default_technology!r}"
            )
        _check_range("timeout_seconds", self.timeout_seconds, 1, 3600)

    @property
    def default_category(self) -> TechnologyCategory:
        return TechnologyCategory.from_label(self.default_technology)


@dataclass(frozen=True)
class CatalogConfig:
    path: str | None = None

    @property
    def resolved_path(self) -> Path | None:
        return Path(self.path).expanduser() if self.path else None


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    proposal: ProposalConfig = field(default_factory=ProposalConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**(raw.get("llm") or {})),
        analysis=AnalysisConfig(**(raw.get("analysis") or {})),
        proposal=ProposalConfig(**(raw.get("proposal") or {})),
        pipeline=PipelineConfig(**(raw.get("pipeline") or {})),
        catalog=CatalogConfig(**(raw.get("catalog") or {})),
    )
