"""Scene analysis: free-text scene description to structured search criteria via Gemini."""

import json
import logging
import os
from dataclasses import replace
from typing import Any, Optional

import httpx
from google.genai import Client, errors, types

from models.asset import (
    ElementType,
    SceneElement,
    VisualSearchCriteria,
    VisualStyle,
    clamp_importance,
)
from services.prompts import (
    SCENE_ANALYZER_SYSTEM,
    SCENE_ANALYZER_V1,
    strip_markdown_code_blocks,
)
from utils.errors import ConfigurationError, ParseError, UpstreamError

logger = logging.getLogger(__name__)

SCENE_ANALYSIS_SOURCE = "scene-analysis"


class SceneAnalyzer:
    """Extracts elements, style, mood and colors from a scene description using Gemini."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: str = "gemini-2.5-flash",
        client: Optional[Client] = None,
        temperature: float = 0.7,
    ):
        """Initialize the Gemini client.

        Args:
            api_key: Google GenAI API key (falls back to GEMINI_API_KEY)
            model_name: Gemini model to use
            client: Pre-built client (skips key lookup)
            temperature: Sampling temperature

        Raises:
            ConfigurationError: If no client is given and no API key is available
        """
        if client is None:
            api_key = api_key or os.getenv("GEMINI_API_KEY")
            if not api_key:
                raise ConfigurationError(
                    "GEMINI_API_KEY is not configured. Add a valid API key to your .env file "
                    "to enable scene analysis."
                )
            client = Client(api_key=api_key)

        self.client = client
        self.model_name = model_name
        self.temperature = temperature
        logger.info(f"Initialized scene analyzer with model: {model_name}")

    async def analyze_scene(self, scene_description: str) -> VisualSearchCriteria:
        """Analyze a scene description into search criteria.

        Elements come back with importance clamped to [0, 1] and sorted by
        importance, highest first.

        Args:
            scene_description: Free-text description of the scene

        Returns:
            VisualSearchCriteria for the scene

        Raises:
            ValueError: If the description is empty
            UpstreamError: If the Gemini request fails
            ParseError: If the response is not valid structured data
        """
        if not scene_description or not scene_description.strip():
            raise ValueError("Scene description cannot be empty")

        prompt = SCENE_ANALYZER_V1.format(
            scene_description=scene_description.strip(),
            styles="/".join(style.value for style in VisualStyle),
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=types.GenerateContentConfig(
                    system_instruction=SCENE_ANALYZER_SYSTEM,
                    temperature=self.temperature,
                    response_mime_type="application/json",
                ),
            )
        except (errors.APIError, httpx.HTTPError) as e:
            logger.error(f"Scene analysis request failed: {e}")
            raise UpstreamError(SCENE_ANALYSIS_SOURCE, f"Gemini request failed: {e}") from e

        analysis = self._parse_analysis(response.text)

        elements = sorted(analysis["elements"], key=lambda e: e.importance, reverse=True)
        criteria = VisualSearchCriteria(
            scene_description=scene_description,
            style=analysis["style"],
            elements=elements,
            mood=analysis["mood"],
            color_scheme=analysis["color_scheme"],
        )
        logger.info(
            f"Analyzed scene: {len(elements)} elements, "
            f"style={criteria.style.value if criteria.style else None}, mood={criteria.mood}"
        )
        return criteria

    async def enhance_search_criteria(
        self, criteria: VisualSearchCriteria
    ) -> VisualSearchCriteria:
        """Fill in elements (and missing style/mood/colors) by analyzing the scene.

        Criteria that already carry elements are returned unchanged.
        Caller-supplied mood, color scheme and style win over analyzed ones.
        """
        if criteria.elements:
            return criteria

        analysis = await self.analyze_scene(criteria.scene_description)

        return replace(
            criteria,
            elements=analysis.elements,
            mood=criteria.mood or analysis.mood,
            color_scheme=criteria.color_scheme or analysis.color_scheme,
            style=criteria.style or analysis.style,
        )

    def _parse_analysis(self, text: Optional[str]) -> dict[str, Any]:
        """Decode and validate the model output.

        Raises:
            ParseError: If the text is empty, not JSON, or missing required fields
        """
        if not text:
            raise ParseError("Empty response from scene analysis model")

        cleaned = strip_markdown_code_blocks(text)
        try:
            result = json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse scene analysis response: {cleaned[:200]}")
            raise ParseError(f"Invalid JSON response from scene analysis model: {e}", raw=text) from e

        if not isinstance(result, dict):
            raise ParseError("Invalid response: expected a JSON object", raw=text)
        if not isinstance(result.get("elements"), list):
            raise ParseError("Invalid response: missing or invalid elements array", raw=text)
        if not result.get("style") or not isinstance(result["style"], str):
            raise ParseError("Invalid response: missing or invalid style", raw=text)
        if not result.get("mood") or not isinstance(result["mood"], str):
            raise ParseError("Invalid response: missing or invalid mood", raw=text)
        if not isinstance(result.get("colorScheme"), list):
            raise ParseError("Invalid response: missing or invalid colorScheme", raw=text)

        style = VisualStyle.parse(result["style"])
        if style is None:
            logger.debug(f"Ignoring unknown style from scene analysis: {result['style']}")

        return {
            "elements": [
                self._normalize_element(element)
                for element in result["elements"]
                if isinstance(element, dict)
            ],
            "style": style,
            "mood": result["mood"],
            "color_scheme": [str(color) for color in result["colorScheme"]],
        }

    @staticmethod
    def _normalize_element(element: dict) -> SceneElement:
        """Fill defaults for a model-produced element and clamp its importance."""
        try:
            element_type = ElementType(str(element.get("type") or "object").lower())
        except ValueError:
            element_type = ElementType.OBJECT

        attributes = element.get("attributes")
        return SceneElement(
            type=element_type,
            description=str(element.get("description") or ""),
            importance=clamp_importance(element.get("importance"), default=0.5),
            attributes=dict(attributes) if isinstance(attributes, dict) else {},
        )
