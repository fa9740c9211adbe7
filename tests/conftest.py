"""Shared pytest fixtures for scenematch tests."""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from models.asset import (  # noqa: E402
    AssetLicense,
    AssetSearchResult,
    AssetType,
    ElementType,
    ProviderConfig,
    SceneElement,
    VisualSearchCriteria,
    VisualStyle,
)
from services.asset_providers.base import AssetProvider  # noqa: E402

TEST_LICENSE = AssetLicense(type="Test License", requires_attribution=False)


class StubProvider(AssetProvider):
    """Provider returning canned results (or raising) without network access."""

    ASSET_TYPES = (AssetType.VIDEO,)

    def __init__(
        self,
        config: ProviderConfig,
        results: Optional[list[AssetSearchResult]] = None,
        error: Optional[Exception] = None,
        **kwargs,
    ):
        super().__init__(config, **kwargs)
        self.results = list(results or [])
        self.error = error
        self.search_calls = 0
        self.probe_calls = 0

    async def search_assets(self, criteria: VisualSearchCriteria) -> list[AssetSearchResult]:
        self.search_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.results)

    async def _query(self, query: str, per_page: int) -> dict:
        self.probe_calls += 1
        if self.error is not None:
            raise self.error
        return {}


class StaticAnalyzer:
    """Scene analyzer returning fixed criteria; records each description it is given."""

    def __init__(self, criteria: Optional[VisualSearchCriteria] = None):
        self.criteria = criteria
        self.calls: list[str] = []

    async def analyze_scene(self, scene_description: str) -> VisualSearchCriteria:
        self.calls.append(scene_description)
        if self.criteria is None:
            return VisualSearchCriteria(scene_description=scene_description)
        return replace(self.criteria, scene_description=scene_description)


@pytest.fixture
def make_result() -> Callable[..., AssetSearchResult]:
    """Factory for AssetSearchResult objects with sensible defaults."""

    def _make(
        url: str = "https://example.com/asset.mp4",
        provider: str = "Stub",
        tags: Optional[list[str]] = None,
        description: str = "",
        confidence: float = 0.0,
        **metadata,
    ) -> AssetSearchResult:
        return AssetSearchResult(
            url=url,
            thumbnail_url=url.replace(".mp4", ".jpg"),
            type=AssetType.VIDEO,
            provider=provider,
            license=TEST_LICENSE,
            metadata={
                "title": url.rsplit("/", 1)[-1],
                "description": description,
                "tags": tags or [],
                **metadata,
            },
            confidence=confidence,
        )

    return _make


@pytest.fixture
def beach_criteria() -> VisualSearchCriteria:
    """Criteria for a calm cinematic beach scene."""
    return VisualSearchCriteria(
        scene_description="a person walking on a beach at sunset",
        style=VisualStyle.CINEMATIC,
        mood="calm",
        elements=[
            SceneElement(type=ElementType.LOCATION, description="beach", importance=0.9),
            SceneElement(type=ElementType.CHARACTER, description="person", importance=0.6),
        ],
    )


@pytest.fixture
def stub_provider_factory() -> Callable[..., Optional[AssetProvider]]:
    """Provider factory that builds StubProviders keyed by config name.

    Set ``factory.results[name]`` / ``factory.errors[name]`` before use;
    names listed in ``factory.unknown`` produce None.
    """

    def factory(config: ProviderConfig, **kwargs) -> Optional[AssetProvider]:
        if config.name in factory.unknown:
            return None
        provider = StubProvider(
            config,
            results=factory.results.get(config.name),
            error=factory.errors.get(config.name),
            **kwargs,
        )
        factory.created.append(provider)
        return provider

    factory.results = {}
    factory.errors = {}
    factory.unknown = set()
    factory.created = []
    return factory


@pytest.fixture
def stub_provider_class() -> type[StubProvider]:
    return StubProvider


@pytest.fixture
def blank_analyzer() -> StaticAnalyzer:
    """Analyzer that finds nothing beyond the description, so caller options decide."""
    return StaticAnalyzer()


@pytest.fixture
def static_analyzer_class() -> type[StaticAnalyzer]:
    return StaticAnalyzer
