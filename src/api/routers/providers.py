"""Provider management routes for the scenematch API."""

import logging

from api.dependencies import get_asset_matching_service
from api.schemas import (
    ProviderConfigListResponse,
    ProviderConfigRequest,
    ProviderListResponse,
    SuccessResponse,
)
from fastapi import APIRouter, Depends
from models.asset import ProviderConfig, RateLimit
from services.asset_matching_service import AssetMatchingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Providers"])


@router.get(
    "/api/providers",
    response_model=ProviderListResponse,
    summary="List live providers",
    description="Names of providers that are enabled and initialized.",
)
async def list_providers(
    service: AssetMatchingService = Depends(get_asset_matching_service),
) -> dict:
    return {"providers": service.get_providers()}


@router.get(
    "/api/providers/configs",
    response_model=ProviderConfigListResponse,
    summary="List provider configs",
    description="All persisted provider configs, enabled or not. API keys are masked.",
)
async def list_provider_configs(
    service: AssetMatchingService = Depends(get_asset_matching_service),
) -> dict:
    return {
        "configs": [
            config.to_dict(mask_api_key=True) for config in service.get_provider_configs()
        ]
    }


@router.post(
    "/api/providers",
    response_model=SuccessResponse,
    summary="Add a provider",
    description="Validate the API key, test the connection and save the provider config.",
)
async def add_provider(
    body: ProviderConfigRequest,
    service: AssetMatchingService = Depends(get_asset_matching_service),
) -> dict:
    config = ProviderConfig(
        name=body.name,
        enabled=body.enabled,
        api_key=body.api_key,
        api_endpoint=body.api_endpoint,
        priority=body.priority,
        rate_limit=(
            RateLimit(
                requests_per_minute=body.rate_limit.requests_per_minute,
                requests_per_day=body.rate_limit.requests_per_day,
            )
            if body.rate_limit
            else None
        ),
    )
    success = await service.add_provider(config)
    return {"success": success}


@router.delete(
    "/api/providers/{name}",
    response_model=SuccessResponse,
    summary="Remove a provider",
    description="Remove the live provider and its persisted config. Removing an unknown provider succeeds.",
)
async def remove_provider(
    name: str,
    service: AssetMatchingService = Depends(get_asset_matching_service),
) -> dict:
    await service.remove_provider(name)
    logger.info(f"Removed provider {name}")
    return {"success": True}
