"""Static portfolio catalog: technology -> person -> text."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

import yaml

from proposal_writer.models.assets import NO_PORTFOLIO, AssetBundle
from proposal_writer.models.technology import TechnologyCategory

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalog.yaml"

Table = Mapping[str, Mapping[str, str]]


def _freeze(table: Mapping | None) -> Table:
    if not table:
        return MappingProxyType({})
    return MappingProxyType({
        # A bare "Maria:" in YAML is a null entry, not the text "None"
        str(tech): MappingProxyType({
            str(person): str(text)
            for person, text in (people or {}).items()
            if text is not None
        })
        for tech, people in table.items()
    })


class AssetCatalog:
    """Read-only lookup of portfolio blurbs and reference links.

    The two tables are independent: a person can have a portfolio blurb for
    a technology without a reference link, and vice versa.
    """

    def __init__(
        self,
        portfolios: Mapping | None = None,
        reference_links: Mapping | None = None,
    ):
        self._portfolios = _freeze(portfolios)
        self._reference_links = _freeze(reference_links)

    @classmethod
    def from_yaml(cls, path: str | Path) -> AssetCatalog:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(
            portfolios=data.get("portfolios"),
            reference_links=data.get("reference_links"),
        )

    @staticmethod
    def _get(table: Table, technology: str, person: str) -> str | None:
        return table.get(technology, {}).get(person) or None

    def lookup(self, category: TechnologyCategory, person_name: str) -> AssetBundle:
        """Return the asset bundle for a pair, defaulting each missing field."""
        technology = category.value
        portfolio = self._get(self._portfolios, technology, person_name)
        link = self._get(self._reference_links, technology, person_name)
        if portfolio is None:
            logger.debug("No portfolio for %s/%s", technology, person_name)
        if link is None:
            logger.debug("No reference link for %s/%s", technology, person_name)
        return AssetBundle(
            portfolio_text=portfolio or NO_PORTFOLIO,
            reference_link=link or NO_PORTFOLIO,
        )

    def people(self, category: TechnologyCategory) -> list[str]:
        names = set(self._portfolios.get(category.value, {}))
        names.update(self._reference_links.get(category.value, {}))
        return sorted(names)


def load_catalog(path: str | Path | None = None) -> AssetCatalog:
    """Load the catalog from ``path``, or the one shipped with the package."""
    return AssetCatalog.from_yaml(path or DEFAULT_CATALOG_PATH)
