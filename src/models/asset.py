"""Data models for scene-driven asset matching.

Python attributes are snake_case; ``to_dict()`` / ``from_dict()`` speak the
camelCase JSON shape used by the HTTP API and the persisted provider configs.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional, Union

AttributeValue = Union[str, int, float, bool]


class VisualStyle(Enum):
    """Closed set of visual styles a scene can be searched with."""
    CINEMATIC = "cinematic"
    DOCUMENTARY = "documentary"
    ANIMATED = "animated"
    CORPORATE = "corporate"
    CASUAL = "casual"
    ARTISTIC = "artistic"
    MINIMAL = "minimal"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["VisualStyle"]:
        """Return the style for ``value`` (case-insensitive), or None if unknown."""
        if not value or not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class ElementType(Enum):
    """Kind of visual component detected in a scene."""
    CHARACTER = "character"
    LOCATION = "location"
    OBJECT = "object"


class AssetType(Enum):
    """Media type of a search result."""
    VIDEO = "video"
    IMAGE = "image"
    AUDIO = "audio"


def clamp_importance(value: Any, default: float = 0.5) -> float:
    """Coerce an importance score into [0, 1].

    Non-numeric or missing values fall back to ``default``.
    """
    if isinstance(value, bool) or value is None:
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if number != number:  # NaN
        return default
    return max(0.0, min(1.0, number))


@dataclass
class SceneElement:
    """One visual component of a scene (a character, a location or an object)."""

    type: ElementType
    description: str
    importance: float = 0.5
    attributes: dict[str, AttributeValue] = field(default_factory=dict)

    def __post_init__(self):
        """Keep importance inside [0, 1]."""
        self.importance = clamp_importance(self.importance)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "description": self.description,
            "importance": self.importance,
            "attributes": dict(self.attributes),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SceneElement":
        try:
            element_type = ElementType(str(data.get("type", "object")).lower())
        except ValueError:
            element_type = ElementType.OBJECT
        attributes = data.get("attributes") or {}
        return cls(
            type=element_type,
            description=str(data.get("description") or ""),
            importance=clamp_importance(data.get("importance")),
            attributes=dict(attributes) if isinstance(attributes, dict) else {},
        )


@dataclass
class VisualSearchCriteria:
    """Normalized query handed to every asset provider.

    Only ``scene_description`` is mandatory; every other field is a hint
    that degrades to "no constraint" when absent.
    """

    scene_description: str
    style: Optional[VisualStyle] = None
    elements: list[SceneElement] = field(default_factory=list)
    duration: Optional[float] = None
    color_scheme: Optional[list[str]] = None
    mood: Optional[str] = None
    # Carried for API compatibility; no provider or scorer filters on it yet.
    exclude_keywords: Optional[list[str]] = None

    def __post_init__(self):
        if not self.scene_description or not self.scene_description.strip():
            raise ValueError("scene_description cannot be empty")

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "sceneDescription": self.scene_description,
            "elements": [element.to_dict() for element in self.elements],
        }
        if self.style is not None:
            data["style"] = self.style.value
        if self.duration is not None:
            data["duration"] = self.duration
        if self.color_scheme is not None:
            data["colorScheme"] = list(self.color_scheme)
        if self.mood is not None:
            data["mood"] = self.mood
        if self.exclude_keywords is not None:
            data["excludeKeywords"] = list(self.exclude_keywords)
        return data

    @classmethod
    def from_dict(
        cls, data: dict, scene_description: Optional[str] = None
    ) -> "VisualSearchCriteria":
        """Build criteria from the camelCase wire shape.

        Args:
            data: Dict shaped like the ``VisualSearchCriteria`` JSON body
            scene_description: Overrides ``data["sceneDescription"]`` when given

        Raises:
            ValueError: If no scene description is available
        """
        elements = data.get("elements") or []
        duration = data.get("duration")
        color_scheme = data.get("colorScheme")
        exclude_keywords = data.get("excludeKeywords")
        mood = data.get("mood")
        return cls(
            scene_description=scene_description or data.get("sceneDescription") or "",
            style=VisualStyle.parse(data.get("style")),
            elements=[
                SceneElement.from_dict(element)
                for element in elements
                if isinstance(element, dict)
            ],
            duration=float(duration) if duration is not None else None,
            color_scheme=[str(c) for c in color_scheme] if color_scheme is not None else None,
            mood=str(mood) if mood else None,
            exclude_keywords=(
                [str(k) for k in exclude_keywords] if exclude_keywords is not None else None
            ),
        )


@dataclass
class AssetLicense:
    """Licensing terms of the source a result came from."""

    type: str
    requires_attribution: bool
    restrictions: Optional[list[str]] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "type": self.type,
            "requiresAttribution": self.requires_attribution,
        }
        if self.restrictions is not None:
            data["restrictions"] = list(self.restrictions)
        return data


@dataclass
class AssetSearchResult:
    """One candidate media asset returned by a provider.

    ``confidence`` is computed locally by the provider scoring policy,
    never taken from the upstream API.
    """

    url: str
    thumbnail_url: str
    type: AssetType
    provider: str
    license: AssetLicense
    metadata: dict[str, Any] = field(default_factory=dict)
    confidence: float = 0.0

    def __post_init__(self):
        self.metadata.setdefault("title", "")
        self.metadata.setdefault("tags", [])

    @property
    def title(self) -> str:
        return self.metadata.get("title", "")

    @property
    def tags(self) -> list[str]:
        return list(self.metadata.get("tags") or [])

    def with_confidence(self, confidence: float) -> "AssetSearchResult":
        """Return a copy carrying the given confidence score."""
        return replace(self, confidence=confidence, metadata=dict(self.metadata))

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "thumbnailUrl": self.thumbnail_url,
            "type": self.type.value,
            "provider": self.provider,
            "confidence": self.confidence,
            "metadata": dict(self.metadata),
            "license": self.license.to_dict(),
        }


@dataclass
class RateLimit:
    """Request ceilings for a provider."""

    requests_per_minute: int
    requests_per_day: int

    def to_dict(self) -> dict:
        return {
            "requestsPerMinute": self.requests_per_minute,
            "requestsPerDay": self.requests_per_day,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RateLimit":
        return cls(
            requests_per_minute=int(data["requestsPerMinute"]),
            requests_per_day=int(data["requestsPerDay"]),
        )


@dataclass
class ProviderConfig:
    """Configuration of one asset provider.

    ``priority`` (higher = preferred) is stored and returned but does not
    influence dispatch order or scoring.
    """

    name: str
    enabled: bool = True
    api_key: Optional[str] = None
    api_endpoint: Optional[str] = None
    priority: int = 0
    rate_limit: Optional[RateLimit] = None

    def to_dict(self, mask_api_key: bool = False) -> dict:
        api_key = self.api_key
        if mask_api_key and api_key:
            # Keys of 4 characters or fewer are masked entirely
            visible = api_key[-4:] if len(api_key) > 4 else ""
            api_key = "*" * (len(api_key) - len(visible)) + visible
        data: dict[str, Any] = {
            "name": self.name,
            "enabled": self.enabled,
            "priority": self.priority,
        }
        if api_key is not None:
            data["apiKey"] = api_key
        if self.api_endpoint is not None:
            data["apiEndpoint"] = self.api_endpoint
        if self.rate_limit is not None:
            data["rateLimit"] = self.rate_limit.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ProviderConfig":
        rate_limit = data.get("rateLimit")
        return cls(
            name=str(data["name"]),
            enabled=bool(data.get("enabled", True)),
            api_key=data.get("apiKey"),
            api_endpoint=data.get("apiEndpoint"),
            priority=int(data.get("priority", 0)),
            rate_limit=RateLimit.from_dict(rate_limit) if rate_limit else None,
        )


@dataclass
class ProviderStatus:
    """Outcome of one provider's search within a single match call."""

    provider: str
    ok: bool
    result_count: int = 0
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "provider": self.provider,
            "ok": self.ok,
            "resultCount": self.result_count,
            "error": self.error,
        }


@dataclass
class AssetMatchReport:
    """Merged, confidence-sorted results plus per-provider outcomes."""

    assets: list[AssetSearchResult] = field(default_factory=list)
    providers: list[str] = field(default_factory=list)
    statuses: list[ProviderStatus] = field(default_factory=list)

    @property
    def total_results(self) -> int:
        return len(self.assets)

    @property
    def failed_providers(self) -> list[str]:
        return [status.provider for status in self.statuses if not status.ok]

    def to_dict(self) -> dict:
        return {
            "assets": [asset.to_dict() for asset in self.assets],
            "totalResults": self.total_results,
            "providers": list(self.providers),
            "statuses": [status.to_dict() for status in self.statuses],
        }
