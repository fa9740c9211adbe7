"""Service singletons and dependency injection for the scenematch API."""

import logging

from services.asset_matching_service import AssetMatchingService, trusted_configs_from_env
from services.provider_auth_manager import ProviderAuthManager
from services.provider_config_store import ProviderConfigStore, create_config_store
from services.scene_analysis_client import SceneAnalysisClient
from services.scene_analyzer import SceneAnalyzer
from utils.config import load_config

logger = logging.getLogger(__name__)

# Service singletons
_config_store: ProviderConfigStore | None = None
_scene_analyzer: SceneAnalyzer | SceneAnalysisClient | None = None
_asset_matching_service: AssetMatchingService | None = None


def get_config_store() -> ProviderConfigStore:
    """Get or create the provider config store."""
    global _config_store
    if _config_store is None:
        config = load_config()
        _config_store = create_config_store(
            config["provider_config_backend"], config["provider_config_path"]
        )
    return _config_store


def get_scene_analyzer() -> SceneAnalyzer | SceneAnalysisClient | None:
    """Get or create the scene analysis backend.

    A configured SCENE_ANALYSIS_URL wins over a local Gemini analyzer.
    Returns None when neither is configured.
    """
    global _scene_analyzer
    if _scene_analyzer is None:
        config = load_config()
        if config.get("scene_analysis_url"):
            _scene_analyzer = SceneAnalysisClient(config["scene_analysis_url"])
        elif config.get("gemini_api_key"):
            _scene_analyzer = SceneAnalyzer(
                api_key=config["gemini_api_key"],
                model_name=config.get("gemini_model", "gemini-2.5-flash"),
            )
        else:
            logger.warning("Scene analysis disabled: set GEMINI_API_KEY or SCENE_ANALYSIS_URL")
    return _scene_analyzer


async def get_asset_matching_service() -> AssetMatchingService:
    """Get or create the asset matching service, loading persisted providers."""
    global _asset_matching_service
    if _asset_matching_service is None:
        config = load_config()
        service = AssetMatchingService(
            auth_manager=ProviderAuthManager(get_config_store()),
            scene_analyzer=get_scene_analyzer(),
            trusted_configs=trusted_configs_from_env(config),
            provider_timeout=config["provider_timeout_seconds"] or None,
            max_results_per_provider=config["results_per_provider"],
        )
        await service.initialize()
        _asset_matching_service = service
    return _asset_matching_service


async def close_services() -> None:
    """Release singleton resources. Call during application shutdown."""
    global _config_store, _scene_analyzer, _asset_matching_service
    if isinstance(_scene_analyzer, SceneAnalysisClient):
        await _scene_analyzer.close()
    if _config_store is not None:
        await _config_store.close()
    _config_store = None
    _scene_analyzer = None
    _asset_matching_service = None
