"""Lookup from configured provider names to provider implementations."""

import logging
from typing import Optional

from models.asset import ProviderConfig
from services.asset_providers.base import AssetProvider
from services.asset_providers.pexels import PexelsProvider
from services.asset_providers.pixabay import PixabayProvider
from services.asset_providers.unsplash import UnsplashProvider

logger = logging.getLogger(__name__)

PROVIDER_CLASSES: dict[str, type[AssetProvider]] = {
    "pexels": PexelsProvider,
    "unsplash": UnsplashProvider,
    "pixabay": PixabayProvider,
}


def supported_providers() -> list[str]:
    return [cls.NAME for cls in PROVIDER_CLASSES.values()]


def create_provider(config: ProviderConfig, **kwargs) -> Optional[AssetProvider]:
    """Instantiate the provider matching ``config.name`` (case-insensitive).

    Args:
        config: Provider configuration
        **kwargs: Passed through to the provider constructor

    Returns:
        Provider instance, or None if no implementation exists for the name
    """
    provider_class = PROVIDER_CLASSES.get(config.name.strip().lower())
    if provider_class is None:
        logger.info(f"No provider implementation for '{config.name}', skipping")
        return None
    return provider_class(config, **kwargs)
