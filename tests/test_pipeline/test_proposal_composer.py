"""Tests for proposal prompt assembly and generation."""

import logging

import pytest

from proposal_writer.models.assets import AssetBundle
from proposal_writer.models.job import JobAnalysis
from proposal_writer.models.request import GenerationRequest
from proposal_writer.models.technology import TechnologyCategory
from proposal_writer.pipeline.proposal_composer import (
    BANNED_PHRASES,
    ProposalComposer,
    check_quality_gates,
    format_tech_stack,
    greeting_for,
)
from proposal_writer.utils.links import PLACEHOLDER_LINK


@pytest.fixture
def react_assets() -> AssetBundle:
    return AssetBundle(
        portfolio_text="react dashboards https://github.com/maria/app https://maria.example.com/react",
        reference_link="https://github.com/maria/logistics-dashboard",
    )


class TestGreeting:
    def test_generic(self):
        assert greeting_for(None) == "hey there"

    @pytest.mark.parametrize("blank", ["", "   "])
    def test_blank_client_is_generic(self, blank):
        assert greeting_for(blank) == "hey there"

    def test_client_name_trimmed(self):
        assert greeting_for("  Dana ") == "hey Dana"


class TestFormatTechStack:
    def test_no_commas_and_deduplicated(self):
        assert format_tech_stack(["React", "Node", "React"]) == "React / Node"

    def test_empty(self):
        assert format_tech_stack([]) == ""


class TestCompose:
    def test_literal_fields_injected(self, sample_request, sample_job_analysis, react_assets):
        prompt = ProposalComposer(None).compose(
            sample_request, TechnologyCategory.REACT, sample_job_analysis, react_assets
        )

        assert "hey there" in prompt
        assert "Maria" in prompt
        assert "tone: friendly" in prompt
        assert "React developer" in prompt
        assert "React / TypeScript / Recharts / Node" in prompt
        assert "https://github.com/maria/logistics-dashboard" in prompt
        assert react_assets.portfolio_text in prompt
        assert "you can check more of my work here https://maria.example.com/react" in prompt
        assert sample_job_analysis.summary in prompt
        assert sample_request.job_description in prompt

    def test_section_order(self, sample_request, sample_job_analysis, react_assets):
        prompt = ProposalComposer(None).compose(
            sample_request, TechnologyCategory.REACT, sample_job_analysis, react_assets
        )
        markers = [
            "hey there",
            "introducing Maria",
            react_assets.reference_link,
            react_assets.portfolio_text,
            "you can check more of my work here",
            "best regards\nMaria",
        ]
        positions = [prompt.index(m) for m in markers]
        assert positions == sorted(positions)

    def test_client_greeting(self, sample_job_analysis, react_assets):
        request = GenerationRequest.from_raw("maria", "friendly", "job", client_name="Dana")
        prompt = ProposalComposer(None).compose(
            request, TechnologyCategory.REACT, sample_job_analysis, react_assets
        )
        assert "hey Dana" in prompt
        assert "hey there" not in prompt

    def test_fallback_assets(self, sample_request):
        prompt = ProposalComposer(None).compose(
            sample_request,
            TechnologyCategory.VUE,
            JobAnalysis(summary="x"),
            AssetBundle(),
        )
        assert "No portfolio available for this technology." in prompt
        assert PLACEHOLDER_LINK in prompt
        # Empty stack falls back to the category
        assert "tools to mention where they fit: Vue" in prompt

    def test_system_prompt_lists_banned_phrases(self):
        system = ProposalComposer(None).system_prompt
        assert "do not use commas" in system
        for phrase in BANNED_PHRASES:
            assert phrase in system


class TestWrite:
    async def test_returns_text_verbatim(
        self, mock_llm_client, llm_replies, sample_request, sample_job_analysis, react_assets
    ):
        mock_llm_client.generate.side_effect = llm_replies("  hey there\n\ni am Maria  ")

        text = await ProposalComposer(mock_llm_client).write(
            sample_request, TechnologyCategory.REACT, sample_job_analysis, react_assets
        )

        assert text == "  hey there\n\ni am Maria  "

    async def test_request_parameters(
        self, mock_llm_client, llm_replies, sample_request, sample_job_analysis, react_assets
    ):
        mock_llm_client.generate.side_effect = llm_replies("hey there")

        await ProposalComposer(mock_llm_client, model="m", temperature=0.9, max_tokens=550).write(
            sample_request, TechnologyCategory.REACT, sample_job_analysis, react_assets
        )

        kwargs = mock_llm_client.generate.call_args.kwargs
        assert kwargs["model"] == "m"
        assert kwargs["temperature"] == 0.9
        assert kwargs["max_tokens"] == 550
        assert "json_mode" not in kwargs


class TestQualityGates:
    def test_clean_text(self):
        assert check_quality_gates("hey there\ni built something like this") == []

    def test_findings_are_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            problems = check_quality_gates("hey there, i can leverage my proven track record")
        assert len(problems) == 2
        assert "QUALITY GATE" in caplog.text

    def test_word_limit(self):
        problems = check_quality_gates("word " * 300)
        assert problems == ["300 words (limit 220)"]
