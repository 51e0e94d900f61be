"""Main pipeline orchestrator - runs one proposal request end to end."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from proposal_writer.catalog.asset_catalog import AssetCatalog, load_catalog
from proposal_writer.clients.llm_client import LLMClient
from proposal_writer.config import AppConfig
from proposal_writer.models.assets import AssetBundle
from proposal_writer.models.job import JobAnalysis
from proposal_writer.models.request import GenerationRequest
from proposal_writer.models.technology import TechnologyCategory
from proposal_writer.pipeline.job_analyzer import JobAnalyzer
from proposal_writer.pipeline.proposal_composer import ProposalComposer
from proposal_writer.pipeline.technology_resolver import ResolutionTier, explain_resolution

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Complete result from the proposal pipeline."""

    proposal: str
    technology: TechnologyCategory
    resolution_tier: ResolutionTier
    analysis: JobAnalysis
    assets: AssetBundle
    degraded_analysis: bool = False
    elapsed_seconds: float = 0.0


class ProposalPipeline:
    """Analyze → resolve technology → look up assets → compose.

    The two model calls run strictly in sequence. Backend errors are not
    caught here; they propagate to the caller and no proposal is returned.
    """

    def __init__(
        self,
        llm: LLMClient,
        catalog: AssetCatalog,
        *,
        analyzer: JobAnalyzer | None = None,
        composer: ProposalComposer | None = None,
        default_technology: TechnologyCategory = TechnologyCategory.FULLSTACK,
    ):
        self.catalog = catalog
        self.analyzer = analyzer or JobAnalyzer(llm)
        self.composer = composer or ProposalComposer(llm)
        self.default_technology = default_technology

    @classmethod
    def from_config(
        cls,
        llm: LLMClient,
        config: AppConfig,
        catalog: AssetCatalog | None = None,
    ) -> ProposalPipeline:
        return cls(
            llm,
            catalog or load_catalog(config.catalog.resolved_path),
            analyzer=JobAnalyzer(
                llm,
                model=config.llm.analysis_model,
                temperature=config.analysis.temperature,
                max_tokens=config.analysis.max_tokens,
            ),
            composer=ProposalComposer(
                llm,
                model=config.llm.proposal_model,
                temperature=config.proposal.temperature,
                max_tokens=config.proposal.max_tokens,
            ),
            default_technology=config.pipeline.default_category,
        )

    async def run(
        self,
        request: GenerationRequest,
        *,
        on_phase: Callable[[str, str], None] | None = None,
    ) -> PipelineResult:
        """Run the full pipeline for one request.

        Args:
            request: Normalized caller input.
            on_phase: Optional callback(phase_name, detail) for progress.
        """
        start = time.monotonic()

        def _notify(phase: str, detail: str = ""):
            if on_phase:
                on_phase(phase, detail)

        _notify("analysis", "Analyzing job post")
        outcome = await self.analyzer.analyze_detailed(request.job_description)
        analysis = outcome.analysis

        resolution = explain_resolution(
            request.requested_technology,
            analysis.detected_technology,
            self.default_technology,
        )
        assets = self.catalog.lookup(resolution.technology, request.person_name)

        _notify("writing", f"Writing {resolution.technology.value} proposal")
        proposal = await self.composer.write(request, resolution.technology, analysis, assets)

        elapsed = time.monotonic() - start
        logger.info("Pipeline complete: %s proposal in %.1fs", resolution.technology.value, elapsed)
        _notify("done", f"Done in {elapsed:.1f}s")

        return PipelineResult(
            proposal=proposal,
            technology=resolution.technology,
            resolution_tier=resolution.tier,
            analysis=analysis,
            assets=assets,
            degraded_analysis=outcome.degraded,
            elapsed_seconds=elapsed,
        )

    async def generate(self, request: GenerationRequest) -> str:
        """Run the pipeline and return only the proposal text."""
        return (await self.run(request)).proposal
