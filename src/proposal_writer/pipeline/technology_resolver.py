"""Pick the single technology category a proposal is framed around."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from proposal_writer.models.technology import TechnologyCategory

logger = logging.getLogger(__name__)


class ResolutionTier(str, Enum):
    USER = "user"
    DETECTED = "detected"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class TechnologyResolution:
    technology: TechnologyCategory
    tier: ResolutionTier


def explain_resolution(
    user_provided: str | None,
    analyzer_detected: TechnologyCategory | None,
    default: TechnologyCategory = TechnologyCategory.FULLSTACK,
) -> TechnologyResolution:
    """Resolve the effective technology and report which tier decided it.

    A user-typed value that names a known category always wins, then the
    analyzer's detection, then ``default``.
    """
    requested = TechnologyCategory.from_label(user_provided)
    if requested is not None:
        resolution = TechnologyResolution(requested, ResolutionTier.USER)
    elif analyzer_detected is not None:
        resolution = TechnologyResolution(analyzer_detected, ResolutionTier.DETECTED)
    else:
        resolution = TechnologyResolution(default, ResolutionTier.FALLBACK)

    if user_provided and requested is None:
        logger.info("Ignoring unknown technology %r", user_provided)
    logger.info(
        "Resolved technology: %s (from %s)",
        resolution.technology.value,
        resolution.tier.value,
    )
    return resolution


def resolve_technology(
    user_provided: str | None,
    analyzer_detected: TechnologyCategory | None,
    default: TechnologyCategory = TechnologyCategory.FULLSTACK,
) -> TechnologyCategory:
    return explain_resolution(user_provided, analyzer_detected, default).technology
