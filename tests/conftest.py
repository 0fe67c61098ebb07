"""Pytest configuration and shared fixtures."""

import os

import pytest

from crossnegatives.core.config import (
    PropagatorConfig,
    ReportConfig,
    Settings,
)
from crossnegatives.data_providers.mock_provider import MockAdsProvider
from crossnegatives.models.keyword import Keyword, KeywordMatchType


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep XNEG_ variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("XNEG_"):
            monkeypatch.delenv(key, raising=False)


def make_keyword(
    text: str,
    match_type: KeywordMatchType | None = KeywordMatchType.BROAD,
    cost: float = 0.0,
) -> Keyword:
    return Keyword(text=text, match_type=match_type, cost=cost)


@pytest.fixture
def keyword():
    """Factory for Keyword snapshots."""
    return make_keyword


@pytest.fixture
def settings_factory(tmp_path):
    """Build Settings without touching the environment or a .env file."""

    def _build(**propagator) -> Settings:
        report = propagator.pop("report", None) or ReportConfig(
            logging_enabled=True, output_dir=tmp_path / "reports"
        )
        return Settings(propagator=PropagatorConfig(**propagator), report=report)

    return _build


@pytest.fixture
def platform():
    """Two campaigns with two ad groups each."""
    provider = MockAdsProvider()

    brand = provider.add_campaign("Brand US")
    provider.add_ad_group(
        brand,
        "Shoes",
        [
            make_keyword("acme shoes", KeywordMatchType.EXACT, 50.0),
            make_keyword("acme sneakers", KeywordMatchType.PHRASE, 20.0),
        ],
    )
    provider.add_ad_group(
        brand, "Boots", [make_keyword("acme boots", KeywordMatchType.BROAD, 30.0)]
    )

    generic = provider.add_campaign("Generic UK")
    provider.add_ad_group(
        generic,
        "Running",
        [make_keyword("running shoes", KeywordMatchType.BROAD, 80.0)],
    )
    provider.add_ad_group(
        generic,
        "Walking",
        [make_keyword("walking shoes", KeywordMatchType.PHRASE, 10.0)],
    )
    return provider
