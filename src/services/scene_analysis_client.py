"""HTTP client for a remote scene-analysis endpoint."""

import logging
from typing import Optional

import httpx

from models.asset import VisualSearchCriteria
from utils.errors import ParseError, UpstreamError

logger = logging.getLogger(__name__)

SCENE_ANALYSIS_SOURCE = "scene-analysis"


class SceneAnalysisClient:
    """Delegates scene analysis to a service speaking the ``/api/scene/analyze`` contract.

    Request body: ``{"sceneDescription": "..."}``. A 2xx response carries a
    ``VisualSearchCriteria`` JSON object; anything else carries
    ``{"error": ..., "details": ...}``.
    """

    def __init__(
        self,
        endpoint_url: str,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the client.

        Args:
            endpoint_url: Full URL of the scene analysis endpoint
            timeout: Request timeout in seconds
            client: Pre-built httpx client (e.g. with a mock transport)
        """
        self.endpoint_url = endpoint_url
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def analyze_scene(self, scene_description: str) -> VisualSearchCriteria:
        """Request structured criteria for a scene description.

        Raises:
            UpstreamError: Network failure or non-success response
            ParseError: Response body is not a valid criteria object
        """
        try:
            response = await self.client.post(
                self.endpoint_url, json={"sceneDescription": scene_description}
            )
        except httpx.HTTPError as e:
            logger.error(f"Scene analysis request failed: {e}")
            raise UpstreamError(SCENE_ANALYSIS_SOURCE, f"Request failed: {e}") from e

        if response.is_error:
            detail = self._error_detail(response)
            logger.warning(f"Scene analysis returned {response.status_code}: {detail}")
            raise UpstreamError(SCENE_ANALYSIS_SOURCE, detail, status=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Scene analysis returned non-JSON body: {e}", raw=response.text) from e

        if not isinstance(data, dict):
            raise ParseError("Scene analysis returned a non-object body", raw=response.text)

        try:
            return VisualSearchCriteria.from_dict(data, scene_description=scene_description)
        except (KeyError, TypeError, ValueError) as e:
            raise ParseError(f"Invalid scene analysis payload: {e}", raw=response.text) from e

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200] or "Failed to analyze scene"
        if isinstance(body, dict):
            return str(body.get("details") or body.get("error") or "Failed to analyze scene")
        return "Failed to analyze scene"

    async def close(self) -> None:
        await self.client.aclose()
