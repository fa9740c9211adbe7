"""Asset matching and scene analysis routes for the scenematch API."""

import logging

from api.dependencies import get_asset_matching_service, get_scene_analyzer
from api.schemas import (
    AssetMatchReportResponse,
    AssetMatchRequest,
    AssetMatchResponse,
    ErrorResponse,
    SceneAnalyzeRequest,
)
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from services.asset_matching_service import AssetMatchingService
from utils.errors import ConfigurationError, ParseError, UpstreamError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Assets"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    """Build the structured ``{error, details}`` payload."""
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _failure_response(error: Exception, summary: str) -> JSONResponse:
    """Map a service exception to an HTTP error payload."""
    if isinstance(error, ValueError):
        return error_response(400, summary, str(error))
    if isinstance(error, ConfigurationError):
        return error_response(500, "Server Configuration Error", str(error))
    if isinstance(error, (UpstreamError, ParseError)):
        return error_response(502, summary, str(error))
    return error_response(500, summary, str(error) or "Unknown error")


@router.post(
    "/api/assets/match",
    response_model=AssetMatchResponse,
    responses=ERROR_RESPONSES,
    summary="Find assets for a scene",
    description="Analyze a scene and return ranked stock media from every enabled provider.",
)
async def match_assets(
    body: AssetMatchRequest,
    service: AssetMatchingService = Depends(get_asset_matching_service),
):
    """Find assets for a scene description."""
    if not body.scene_description:
        return error_response(400, "Scene description is required")

    logger.info(f"Searching assets for scene: {body.scene_description}")

    try:
        assets = await service.find_assets(body.scene_description, body.options)
    except Exception as e:
        logger.error(f"Asset matching error: {e}")
        return _failure_response(e, "Failed to match assets")

    logger.info(f"Found {len(assets)} matching assets")
    return {
        "assets": [asset.to_dict() for asset in assets],
        "totalResults": len(assets),
        "providers": service.get_providers(),
    }


@router.post(
    "/api/assets/match/report",
    response_model=AssetMatchReportResponse,
    responses=ERROR_RESPONSES,
    summary="Find assets with provider report",
    description="Same as /api/assets/match, plus the outcome of each provider.",
)
async def match_assets_with_report(
    body: AssetMatchRequest,
    service: AssetMatchingService = Depends(get_asset_matching_service),
):
    """Find assets and report per-provider outcomes."""
    if not body.scene_description:
        return error_response(400, "Scene description is required")

    try:
        report = await service.find_assets_with_report(body.scene_description, body.options)
    except Exception as e:
        logger.error(f"Asset matching error: {e}")
        return _failure_response(e, "Failed to match assets")

    return report.to_dict()


@router.post(
    "/api/scene/analyze",
    responses=ERROR_RESPONSES,
    summary="Analyze a scene",
    description="Extract elements, style, mood and color scheme from a scene description.",
)
async def analyze_scene(
    body: SceneAnalyzeRequest,
    analyzer=Depends(get_scene_analyzer),
):
    """Analyze a scene description into VisualSearchCriteria JSON."""
    if not body.scene_description:
        return error_response(
            400,
            "Scene description is required",
            "The request body must include a sceneDescription field",
        )

    if analyzer is None:
        return error_response(
            500, "Server Configuration Error", "Scene analysis is not configured on the server"
        )

    try:
        criteria = await analyzer.analyze_scene(body.scene_description)
    except Exception as e:
        logger.error(f"Scene analysis error: {e}")
        return _failure_response(e, "Failed to analyze scene")

    return criteria.to_dict()
