"""Pydantic request/response models for the scenematch API.

Wire fields are camelCase (via aliases) to match the VisualSearchCriteria JSON shape.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Response Models
# =============================================================================


class RootResponse(BaseModel):
    """Root endpoint response."""

    message: str
    version: str

    model_config = {"json_schema_extra": {"examples": [{"message": "Scenematch API", "version": "1.0.0"}]}}


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"status": "healthy", "sceneAnalysis": True}]},
    )

    status: str
    scene_analysis: bool = Field(alias="sceneAnalysis")


class ErrorResponse(BaseModel):
    """Structured error payload."""

    error: str
    details: str | None = None


class AssetMatchResponse(BaseModel):
    """Ranked assets for a scene."""

    model_config = ConfigDict(populate_by_name=True)

    assets: list[dict[str, Any]]
    total_results: int = Field(alias="totalResults")
    providers: list[str]


class ProviderStatusResponse(BaseModel):
    """One provider's outcome within a match call."""

    model_config = ConfigDict(populate_by_name=True)

    provider: str
    ok: bool
    result_count: int = Field(alias="resultCount")
    error: str | None = None


class AssetMatchReportResponse(AssetMatchResponse):
    """Ranked assets plus per-provider outcomes."""

    statuses: list[ProviderStatusResponse]


class ProviderListResponse(BaseModel):
    """Names of live providers."""

    providers: list[str]


class ProviderConfigListResponse(BaseModel):
    """Persisted provider configs (API keys masked)."""

    configs: list[dict[str, Any]]


class SuccessResponse(BaseModel):
    """Outcome of a provider management operation."""

    success: bool


# =============================================================================
# Request Models
# =============================================================================


class AssetMatchRequest(BaseModel):
    """Find assets for a scene."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "sceneDescription": "a person walking on a beach at sunset",
                    "options": {"style": "cinematic", "mood": "calm"},
                }
            ]
        },
    )

    scene_description: str | None = Field(default=None, alias="sceneDescription")
    options: dict[str, Any] | None = None


class SceneAnalyzeRequest(BaseModel):
    """Analyze a scene description."""

    model_config = ConfigDict(populate_by_name=True)

    scene_description: str | None = Field(default=None, alias="sceneDescription")


class RateLimitBody(BaseModel):
    """Provider rate limit."""

    model_config = ConfigDict(populate_by_name=True)

    requests_per_minute: int = Field(alias="requestsPerMinute", ge=1)
    requests_per_day: int = Field(alias="requestsPerDay", ge=1)


class ProviderConfigRequest(BaseModel):
    """Add or update a provider configuration."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [{"name": "Pexels", "enabled": True, "apiKey": "your-key", "priority": 1}]
        },
    )

    name: str = Field(min_length=1)
    enabled: bool = True
    api_key: str | None = Field(default=None, alias="apiKey")
    api_endpoint: str | None = Field(default=None, alias="apiEndpoint")
    priority: int = 0
    rate_limit: RateLimitBody | None = Field(default=None, alias="rateLimit")
