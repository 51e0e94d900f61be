"""Portfolio assets attached to a (technology, person) pair."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

NO_PORTFOLIO = "No portfolio available for this technology."


class AssetBundle(BaseModel):
    model_config = ConfigDict(frozen=True)

    portfolio_text: str = NO_PORTFOLIO
    reference_link: str = NO_PORTFOLIO
