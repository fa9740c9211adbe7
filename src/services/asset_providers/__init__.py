"""Asset providers package for multi-source stock media search."""

from services.asset_providers.base import AssetProvider
from services.asset_providers.pexels import PexelsProvider
from services.asset_providers.pixabay import PixabayProvider
from services.asset_providers.rate_limiter import RateLimiter
from services.asset_providers.registry import create_provider, supported_providers
from services.asset_providers.unsplash import UnsplashProvider

__all__ = [
    "AssetProvider",
    "PexelsProvider",
    "UnsplashProvider",
    "PixabayProvider",
    "RateLimiter",
    "create_provider",
    "supported_providers",
]
