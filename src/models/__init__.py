# Data models for scenematch
from .asset import (
    AssetLicense,
    AssetMatchReport,
    AssetSearchResult,
    AssetType,
    ElementType,
    ProviderConfig,
    ProviderStatus,
    RateLimit,
    SceneElement,
    VisualSearchCriteria,
    VisualStyle,
    clamp_importance,
)

__all__ = [
    "AssetLicense",
    "AssetMatchReport",
    "AssetSearchResult",
    "AssetType",
    "ElementType",
    "ProviderConfig",
    "ProviderStatus",
    "RateLimit",
    "SceneElement",
    "VisualSearchCriteria",
    "VisualStyle",
    "clamp_importance",
]
