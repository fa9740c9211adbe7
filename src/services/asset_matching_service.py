"""Asset matching: scene description to a ranked, cross-provider list of media assets.

Responsibilities:
- Resolve structured search criteria (scene analysis merged with caller options)
- Fan the search out to every live provider concurrently
- Isolate provider failures (a failing provider contributes nothing)
- Merge and globally re-sort results by confidence
- Manage the live provider set (add / remove / list)
"""

import asyncio
from typing import Callable, Optional

from models.asset import (
    AssetMatchReport,
    AssetSearchResult,
    ProviderConfig,
    ProviderStatus,
    VisualSearchCriteria,
)
from services.asset_providers import AssetProvider, create_provider
from services.provider_auth_manager import ProviderAuthManager
from utils.errors import ConfigurationError
from utils.logging import get_logger

logger = get_logger(__name__)

# (provider name, config key holding its API key, priority)
ENV_PROVIDER_SEEDS = (
    ("Pexels", "pexels_api_key", 1),
    ("Unsplash", "unsplash_api_key", 2),
    ("Pixabay", "pixabay_api_key", 3),
)


def trusted_configs_from_env(config: dict) -> list[ProviderConfig]:
    """Build provider configs for every provider whose API key is set in config."""
    return [
        ProviderConfig(name=name, enabled=True, api_key=config[key], priority=priority)
        for name, key, priority in ENV_PROVIDER_SEEDS
        if config.get(key)
    ]


class AssetMatchingService:
    """Single entry point for finding assets and managing providers.

    Providers seeded from trusted (environment) configuration take precedence
    over persisted configs with the same name. Call ``initialize()`` once
    before use so persisted configs are loaded.
    """

    def __init__(
        self,
        auth_manager: ProviderAuthManager,
        scene_analyzer=None,
        trusted_configs: Optional[list[ProviderConfig]] = None,
        provider_factory: Callable[..., Optional[AssetProvider]] = create_provider,
        provider_timeout: Optional[float] = None,
        max_results_per_provider: int = 15,
    ):
        """Initialize the service.

        Args:
            auth_manager: Owner of persisted provider configs
            scene_analyzer: Object with ``async analyze_scene(description)``
                returning VisualSearchCriteria (SceneAnalyzer or SceneAnalysisClient);
                None disables scene analysis
            trusted_configs: Configs seeded ahead of persisted ones
            provider_factory: Builds a provider from a config
            provider_timeout: Seconds before a provider search is abandoned (None = no limit)
            max_results_per_provider: Results requested from each provider
        """
        self.auth_manager = auth_manager
        self.scene_analyzer = scene_analyzer
        self.trusted_configs = list(trusted_configs or [])
        self.provider_factory = provider_factory
        self.provider_timeout = provider_timeout
        self.max_results_per_provider = max_results_per_provider
        self.providers: dict[str, AssetProvider] = {}

        self._initialize_providers()

    async def initialize(self) -> None:
        """Load persisted configs and (re)build the live provider set."""
        await self.auth_manager.load()
        self._initialize_providers()
        logger.info("providers_initialized", providers=self.get_providers())

    def _initialize_providers(self) -> None:
        """Rebuild the live provider set from trusted and persisted configs.

        Instances whose config is unchanged are kept, along with their
        rate-limit counters.
        """
        desired: dict[str, ProviderConfig] = {}
        for config in self.trusted_configs:
            if config.enabled:
                desired[config.name] = config

        claimed = {name.lower() for name in desired}
        for config in self.auth_manager.get_enabled_providers():
            if config.name.lower() in claimed:
                continue
            desired[config.name] = config
            claimed.add(config.name.lower())

        providers: dict[str, AssetProvider] = {}
        for name, config in desired.items():
            existing = self.providers.get(name)
            if existing is not None and existing.config == config:
                providers[name] = existing
                continue

            provider = self.provider_factory(config, max_results=self.max_results_per_provider)
            if provider is None:
                logger.info("provider_skipped", provider=name, reason="no implementation")
                continue
            providers[name] = provider

        self.providers = providers

    async def find_assets(
        self, scene_description: str, options: Optional[dict] = None
    ) -> list[AssetSearchResult]:
        """Find assets for a scene across all live providers.

        Args:
            scene_description: Free-text scene description
            options: Partial criteria in the camelCase wire shape; caller fields win

        Returns:
            Merged results sorted by confidence, highest first (possibly empty)

        Raises:
            ValueError: If the scene description is empty
            ConfigurationError: If no scene analyzer is configured
            UpstreamError, ParseError: If scene analysis fails
        """
        report = await self.find_assets_with_report(scene_description, options)
        return report.assets

    async def find_assets_with_report(
        self, scene_description: str, options: Optional[dict] = None
    ) -> AssetMatchReport:
        """Like ``find_assets`` but also reports each provider's outcome."""
        if not scene_description or not scene_description.strip():
            raise ValueError("Scene description is required")

        criteria = await self.resolve_criteria(scene_description, options)

        providers = list(self.providers.items())
        logger.info(
            "asset_search_started",
            providers=[name for name, _ in providers],
            scene=scene_description[:80],
        )

        outcomes = await asyncio.gather(
            *(self._search_provider(provider, criteria) for _, provider in providers),
            return_exceptions=True,
        )

        assets: list[AssetSearchResult] = []
        statuses: list[ProviderStatus] = []
        for (name, _), outcome in zip(providers, outcomes):
            if isinstance(outcome, BaseException):
                error = str(outcome) or type(outcome).__name__
                logger.warning(
                    "provider_search_failed",
                    provider=name,
                    error_type=type(outcome).__name__,
                    error=error,
                )
                statuses.append(ProviderStatus(provider=name, ok=False, error=error))
                continue

            assets.extend(outcome)
            statuses.append(ProviderStatus(provider=name, ok=True, result_count=len(outcome)))

        # Scores are comparable across providers, so sort the merged set again
        assets.sort(key=lambda asset: asset.confidence, reverse=True)

        logger.info(
            "asset_search_completed",
            total_results=len(assets),
            failed_providers=[s.provider for s in statuses if not s.ok],
        )
        return AssetMatchReport(assets=assets, providers=self.get_providers(), statuses=statuses)

    async def resolve_criteria(
        self, scene_description: str, options: Optional[dict] = None
    ) -> VisualSearchCriteria:
        """Analyze the scene, then lay the caller's options over the result.

        Caller fields that are None or empty (``[]``, ``""``, ``{}``) count as
        not supplied, so they never blank out an analyzed value.
        ``sceneDescription`` is always forced to ``scene_description``.
        """
        if self.scene_analyzer is None:
            raise ConfigurationError(
                "Scene analysis is not configured. Set GEMINI_API_KEY or SCENE_ANALYSIS_URL."
            )
        analyzed = await self.scene_analyzer.analyze_scene(scene_description)

        supplied = {
            key: value
            for key, value in (options or {}).items()
            if value is not None and value not in ("", [], {})
        }
        merged = {**analyzed.to_dict(), **supplied}
        merged["sceneDescription"] = scene_description
        return VisualSearchCriteria.from_dict(merged)

    async def _search_provider(
        self, provider: AssetProvider, criteria: VisualSearchCriteria
    ) -> list[AssetSearchResult]:
        if self.provider_timeout:
            return await asyncio.wait_for(provider.search(criteria), timeout=self.provider_timeout)
        return await provider.search(criteria)

    async def add_provider(self, config: ProviderConfig) -> bool:
        """Validate, test and persist a provider config, then refresh the live set.

        Returns:
            True if the provider was saved, False if its key is empty or the
            connection test failed (nothing is persisted in that case)
        """
        if not await self.auth_manager.validate_api_key(config.name, config.api_key or ""):
            logger.warning("provider_add_rejected", provider=config.name, reason="empty API key")
            return False

        if not await self.auth_manager.test_connection(config):
            logger.warning(
                "provider_add_rejected", provider=config.name, reason="connection test failed"
            )
            return False

        await self.auth_manager.update_config(config)
        self._initialize_providers()
        logger.info("provider_added", provider=config.name)
        return True

    async def remove_provider(self, provider_name: str) -> None:
        """Remove the live instance and the persisted config; absent names are ignored."""
        self.providers.pop(provider_name, None)
        await self.auth_manager.remove_config(provider_name)

    def get_providers(self) -> list[str]:
        """Names of live (enabled and initialized) providers."""
        return list(self.providers.keys())

    def get_provider_configs(self) -> list[ProviderConfig]:
        """All persisted configs, enabled or not."""
        return self.auth_manager.get_all_configs()
