"""Data models for the proposal pipeline."""

from proposal_writer.models.assets import NO_PORTFOLIO, AssetBundle
from proposal_writer.models.job import JobAnalysis
from proposal_writer.models.request import GenerationRequest
from proposal_writer.models.technology import TechnologyCategory

__all__ = [
    "AssetBundle",
    "GenerationRequest",
    "JobAnalysis",
    "NO_PORTFOLIO",
    "TechnologyCategory",
]
