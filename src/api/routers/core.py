"""Root and health check routes."""

from api.dependencies import get_scene_analyzer
from api.schemas import HealthResponse, RootResponse
from fastapi import APIRouter, Depends

API_VERSION = "1.0.0"

router = APIRouter(tags=["Core"])


@router.get(
    "/",
    response_model=RootResponse,
    summary="API root",
    description="Returns API name and version.",
)
async def root() -> dict[str, str]:
    return {"message": "Scenematch API", "version": API_VERSION}


@router.get(
    "/api/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns server health and whether scene analysis is configured.",
)
async def health(analyzer=Depends(get_scene_analyzer)) -> dict:
    return {"status": "healthy", "sceneAnalysis": analyzer is not None}
