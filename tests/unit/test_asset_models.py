"""Unit tests for asset matching data models."""

import pytest

from models.asset import (
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


class TestVisualStyle:
    """Tests for VisualStyle parsing."""

    def test_parse_is_case_insensitive(self):
        assert VisualStyle.parse("Cinematic") is VisualStyle.CINEMATIC
        assert VisualStyle.parse(" MINIMAL ") is VisualStyle.MINIMAL

    def test_parse_unknown_returns_none(self):
        assert VisualStyle.parse("vaporwave") is None
        assert VisualStyle.parse(None) is None
        assert VisualStyle.parse("") is None


class TestClampImportance:
    """Tests for importance clamping."""

    @pytest.mark.parametrize(
        "value,expected",
        [(1.7, 1.0), (-0.2, 0.0), (0.4, 0.4), ("0.8", 0.8)],
    )
    def test_clamps_into_unit_interval(self, value, expected):
        assert clamp_importance(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [None, "high", True, float("nan"), [1]])
    def test_invalid_values_use_default(self, value):
        assert clamp_importance(value) == 0.5
        assert clamp_importance(value, default=0.2) == 0.2


class TestSceneElement:
    """Tests for SceneElement."""

    def test_importance_clamped_on_construction(self):
        element = SceneElement(type=ElementType.OBJECT, description="chair", importance=3)
        assert element.importance == 1.0

    def test_from_dict_unknown_type_becomes_object(self):
        element = SceneElement.from_dict({"type": "animal", "description": "dog"})
        assert element.type is ElementType.OBJECT
        assert element.importance == 0.5
        assert element.attributes == {}

    def test_round_trip_keeps_attributes(self):
        data = {
            "type": "character",
            "description": "woman",
            "importance": 0.9,
            "attributes": {"age": "young", "gender": "female"},
        }
        assert SceneElement.from_dict(data).to_dict() == data


class TestVisualSearchCriteria:
    """Tests for VisualSearchCriteria."""

    def test_empty_description_rejected(self):
        with pytest.raises(ValueError):
            VisualSearchCriteria(scene_description="   ")

    def test_from_dict_parses_wire_shape(self):
        criteria = VisualSearchCriteria.from_dict(
            {
                "sceneDescription": "office meeting",
                "style": "Corporate",
                "mood": "focused",
                "duration": 10,
                "colorScheme": ["blue", "white"],
                "excludeKeywords": ["cartoon"],
                "elements": [{"type": "location", "description": "office", "importance": 0.8}],
            }
        )

        assert criteria.style is VisualStyle.CORPORATE
        assert criteria.duration == 10.0
        assert criteria.color_scheme == ["blue", "white"]
        assert criteria.exclude_keywords == ["cartoon"]
        assert criteria.elements[0].type is ElementType.LOCATION

    def test_from_dict_scene_description_override(self):
        criteria = VisualSearchCriteria.from_dict(
            {"sceneDescription": "ignored"}, scene_description="used"
        )
        assert criteria.scene_description == "used"

    def test_from_dict_unknown_style_dropped(self):
        criteria = VisualSearchCriteria.from_dict({"sceneDescription": "x", "style": "noir"})
        assert criteria.style is None

    def test_to_dict_omits_absent_hints(self):
        data = VisualSearchCriteria(scene_description="forest").to_dict()
        assert data == {"sceneDescription": "forest", "elements": []}


class TestAssetSearchResult:
    """Tests for AssetSearchResult."""

    def test_title_and_tags_default(self):
        result = AssetSearchResult(
            url="u",
            thumbnail_url="t",
            type=AssetType.IMAGE,
            provider="Stub",
            license=AssetLicense(type="Free", requires_attribution=False),
        )
        assert result.title == ""
        assert result.tags == []
        assert result.confidence == 0.0

    def test_with_confidence_returns_copy(self, make_result):
        result = make_result(tags=["beach"])
        scored = result.with_confidence(0.7)

        assert scored.confidence == 0.7
        assert result.confidence == 0.0
        scored.metadata["tags"] = ["changed"]
        assert result.tags == ["beach"]

    def test_to_dict_uses_camel_case(self, make_result):
        data = make_result(confidence=0.4).to_dict()
        assert data["thumbnailUrl"].endswith(".jpg")
        assert data["type"] == "video"
        assert data["license"] == {"type": "Test License", "requiresAttribution": False}


class TestProviderConfig:
    """Tests for ProviderConfig serialization."""

    def test_round_trip(self):
        config = ProviderConfig(
            name="Pexels",
            api_key="secret-key",
            priority=2,
            rate_limit=RateLimit(requests_per_minute=10, requests_per_day=100),
        )
        assert ProviderConfig.from_dict(config.to_dict()) == config

    def test_masked_key_shows_last_four(self):
        data = ProviderConfig(name="Pexels", api_key="abcdefgh1234").to_dict(mask_api_key=True)
        assert data["apiKey"] == "********1234"

    def test_short_key_fully_masked(self):
        data = ProviderConfig(name="Pexels", api_key="abc").to_dict(mask_api_key=True)
        assert data["apiKey"] == "***"

    def test_missing_key_omitted(self):
        assert "apiKey" not in ProviderConfig(name="Pixabay").to_dict(mask_api_key=True)


class TestAssetMatchReport:
    """Tests for AssetMatchReport."""

    def test_totals_and_failures(self, make_result):
        report = AssetMatchReport(
            assets=[make_result(), make_result(url="https://example.com/b.mp4")],
            providers=["A", "B"],
            statuses=[
                ProviderStatus(provider="A", ok=True, result_count=2),
                ProviderStatus(provider="B", ok=False, error="boom"),
            ],
        )

        assert report.total_results == 2
        assert report.failed_providers == ["B"]
        data = report.to_dict()
        assert data["totalResults"] == 2
        assert data["statuses"][1] == {
            "provider": "B",
            "ok": False,
            "resultCount": 0,
            "error": "boom",
        }
