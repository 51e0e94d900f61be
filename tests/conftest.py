"""Shared test fixtures."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from proposal_writer.catalog.asset_catalog import AssetCatalog
from proposal_writer.clients.llm_client import LLMClient, LLMResponse
from proposal_writer.models.job import JobAnalysis
from proposal_writer.models.request import GenerationRequest
from proposal_writer.models.technology import TechnologyCategory


@pytest.fixture
def sample_job_description() -> str:
    return """Need a React dashboard with charts

We run a small logistics company and want an internal dashboard that shows
shipments per day, late deliveries and driver utilization. Data comes from
our existing Node API. Charts should update without a page refresh.

Must have:
- React with TypeScript
- a charting library (Recharts or Chart.js)
- experience consuming REST APIs
"""


@pytest.fixture
def sample_request(sample_job_description) -> GenerationRequest:
    return GenerationRequest.from_raw(
        "maria", "friendly", sample_job_description, technology="react"
    )


@pytest.fixture
def sample_job_analysis() -> JobAnalysis:
    return JobAnalysis(
        summary="Internal logistics dashboard with live charts fed by an existing Node API.",
        detected_technology=TechnologyCategory.REACT,
        tech_stack=["React", "TypeScript", "Recharts", "Node"],
    )


@pytest.fixture
def analysis_json() -> str:
    return json.dumps({
        "analysis": "Internal logistics dashboard with live charts.",
        "detectedTechnology": "React",
        "techStack": ["React", "TypeScript", "Recharts"],
    })


@pytest.fixture
def sample_catalog() -> AssetCatalog:
    return AssetCatalog(
        portfolios={
            "React": {
                "Maria": "i built a react analytics dashboard https://maria.example.com/react",
            },
            "AI": {
                "Maria": "rag chatbot for a saas team https://github.com/maria/rag https://maria.example.com/ai",
            },
        },
        reference_links={
            "React": {"Maria": "https://github.com/maria/logistics-dashboard"},
            "AI": {"Maria": "https://github.com/maria/rag"},
        },
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    return client


@pytest.fixture
def llm_replies():
    """Build a side_effect list of LLM responses, one per call."""

    def _build(*texts: str) -> list[LLMResponse]:
        return [LLMResponse(text=t, input_tokens=100, output_tokens=50) for t in texts]

    return _build
