"""Unit tests for SceneAnalyzer (Gemini-backed scene analysis)."""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from models.asset import ElementType, SceneElement, VisualSearchCriteria, VisualStyle
from services.scene_analyzer import SceneAnalyzer
from utils.errors import ConfigurationError, ParseError, UpstreamError

ANALYSIS = {
    "elements": [
        {"type": "object", "description": "surfboard", "importance": 0.4},
        {"type": "location", "description": "beach", "importance": 1.4},
        {"type": "creature", "description": "dog"},
        {
            "type": "character",
            "description": "surfer",
            "importance": 0.7,
            "attributes": {"gender": "male"},
        },
    ],
    "style": "Cinematic",
    "mood": "energetic",
    "colorScheme": ["blue", "gold"],
}


def make_analyzer(response_text):
    """Build an analyzer whose Gemini client returns ``response_text``."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=MagicMock(text=response_text))
    return SceneAnalyzer(client=client, model_name="test-model"), client


@pytest.mark.unit
class TestSceneAnalyzerInit:
    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            SceneAnalyzer()


@pytest.mark.unit
class TestAnalyzeScene:
    @pytest.mark.asyncio
    async def test_returns_sorted_clamped_elements(self):
        analyzer, client = make_analyzer(json.dumps(ANALYSIS))

        criteria = await analyzer.analyze_scene("a surfer on a beach with a dog")

        assert criteria.scene_description == "a surfer on a beach with a dog"
        assert [e.description for e in criteria.elements] == [
            "beach",
            "surfer",
            "dog",
            "surfboard",
        ]
        assert criteria.elements[0].importance == 1.0
        assert criteria.elements[2].type is ElementType.OBJECT
        assert criteria.elements[2].importance == 0.5
        assert criteria.elements[1].attributes == {"gender": "male"}
        assert criteria.style is VisualStyle.CINEMATIC
        assert criteria.mood == "energetic"
        assert criteria.color_scheme == ["blue", "gold"]

        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert "a surfer on a beach with a dog" in kwargs["contents"]
        assert kwargs["config"].response_mime_type == "application/json"

    @pytest.mark.asyncio
    async def test_strips_code_fence(self):
        analyzer, _ = make_analyzer(f"```json\n{json.dumps(ANALYSIS)}\n```")
        criteria = await analyzer.analyze_scene("beach")
        assert len(criteria.elements) == 4

    @pytest.mark.asyncio
    async def test_unknown_style_becomes_none(self):
        analyzer, _ = make_analyzer(json.dumps({**ANALYSIS, "style": "noir"}))
        criteria = await analyzer.analyze_scene("beach")
        assert criteria.style is None

    @pytest.mark.asyncio
    async def test_empty_description_rejected(self):
        analyzer, client = make_analyzer("{}")
        with pytest.raises(ValueError):
            await analyzer.analyze_scene("  ")
        client.aio.models.generate_content.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "not json",
            "[1, 2]",
            json.dumps({**ANALYSIS, "elements": "beach"}),
            json.dumps({key: value for key, value in ANALYSIS.items() if key != "mood"}),
            json.dumps({**ANALYSIS, "style": 3}),
            json.dumps({**ANALYSIS, "colorScheme": "blue"}),
        ],
    )
    async def test_invalid_output_raises_parse_error(self, text):
        analyzer, _ = make_analyzer(text)
        with pytest.raises(ParseError):
            await analyzer.analyze_scene("beach")

    @pytest.mark.asyncio
    async def test_transport_failure_raises_upstream_error(self):
        analyzer, client = make_analyzer("")
        client.aio.models.generate_content.side_effect = httpx.ConnectError("refused")

        with pytest.raises(UpstreamError) as exc_info:
            await analyzer.analyze_scene("beach")
        assert exc_info.value.provider == "scene-analysis"


@pytest.mark.unit
class TestEnhanceSearchCriteria:
    @pytest.mark.asyncio
    async def test_criteria_with_elements_unchanged(self):
        analyzer, client = make_analyzer(json.dumps(ANALYSIS))
        criteria = VisualSearchCriteria(
            scene_description="beach",
            elements=[SceneElement(type=ElementType.LOCATION, description="beach")],
        )

        assert await analyzer.enhance_search_criteria(criteria) is criteria
        client.aio.models.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_caller_fields_win(self):
        analyzer, _ = make_analyzer(json.dumps(ANALYSIS))
        criteria = VisualSearchCriteria(
            scene_description="beach",
            mood="calm",
            style=VisualStyle.MINIMAL,
            duration=12,
        )

        enhanced = await analyzer.enhance_search_criteria(criteria)

        assert len(enhanced.elements) == 4
        assert enhanced.mood == "calm"
        assert enhanced.style is VisualStyle.MINIMAL
        assert enhanced.color_scheme == ["blue", "gold"]
        assert enhanced.duration == 12
