"""Unit tests for the remote scene analysis HTTP client."""

import json

import httpx
import pytest

from models.asset import VisualStyle
from services.scene_analysis_client import SceneAnalysisClient
from utils.errors import ParseError, UpstreamError

ENDPOINT = "http://analysis.local/api/scene/analyze"


def make_client(handler) -> SceneAnalysisClient:
    transport = httpx.MockTransport(handler)
    return SceneAnalysisClient(ENDPOINT, client=httpx.AsyncClient(transport=transport))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_analyze_scene_success():
    """A 2xx body is decoded into criteria with the caller's description."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "sceneDescription": "server echo",
                "style": "documentary",
                "mood": "tense",
                "colorScheme": ["grey"],
                "elements": [{"type": "location", "description": "alley", "importance": 0.8}],
            },
        )

    client = make_client(handler)
    try:
        criteria = await client.analyze_scene("a dark alley at night")
    finally:
        await client.close()

    assert seen["body"] == {"sceneDescription": "a dark alley at night"}
    assert criteria.scene_description == "a dark alley at night"
    assert criteria.style is VisualStyle.DOCUMENTARY
    assert criteria.elements[0].description == "alley"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_error_status_raises_upstream_error_with_details():
    def handler(request):
        return httpx.Response(
            502, json={"error": "Failed to analyze scene", "details": "model overloaded"}
        )

    client = make_client(handler)
    try:
        with pytest.raises(UpstreamError) as exc_info:
            await client.analyze_scene("beach")
    finally:
        await client.close()

    assert exc_info.value.status == 502
    assert "model overloaded" in str(exc_info.value)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_network_error_raises_upstream_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = make_client(handler)
    try:
        with pytest.raises(UpstreamError):
            await client.analyze_scene("beach")
    finally:
        await client.close()


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"duration": "long"}),
    ],
)
async def test_bad_body_raises_parse_error(response):
    client = make_client(lambda request: response)
    try:
        with pytest.raises(ParseError):
            await client.analyze_scene("beach")
    finally:
        await client.close()
