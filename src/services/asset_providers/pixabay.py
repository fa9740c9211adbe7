"""Pixabay provider for royalty-free stock video."""

import logging
from typing import Optional

from models.asset import (
    AssetLicense,
    AssetSearchResult,
    AssetType,
    RateLimit,
    VisualSearchCriteria,
)
from services.asset_providers.base import AssetProvider
from utils.errors import UpstreamError

logger = logging.getLogger(__name__)

PIXABAY_LICENSE = AssetLicense(
    type="Pixabay Content License",
    requires_attribution=False,
    restrictions=[
        "Don't sell unaltered copies",
        "Don't portray identifiable people in an offensive way",
    ],
)

# large (1920x1080) > medium (1280x720) > small > tiny
QUALITY_ORDER = ["large", "medium", "small", "tiny"]


class PixabayProvider(AssetProvider):
    """Pixabay video provider.

    API Documentation: https://pixabay.com/api/docs/

    The API key is passed as the ``key`` query parameter rather than a header.
    """

    NAME = "Pixabay"
    ASSET_TYPES = (AssetType.VIDEO,)
    BASE_URL = "https://pixabay.com/api/videos/"
    DEFAULT_RATE_LIMIT = RateLimit(requests_per_minute=100, requests_per_day=5000)

    async def _query(self, query: str, per_page: int) -> dict:
        params = {
            "key": self.api_key or "",
            "q": query[:100],  # Pixabay rejects queries over 100 characters
            # Pixabay requires 3 <= per_page <= 200
            "per_page": max(3, min(per_page, 200)),
            "video_type": "all",
            "safesearch": "true",
        }
        return await self._get_json(self.base_url, params)

    async def search_assets(self, criteria: VisualSearchCriteria) -> list[AssetSearchResult]:
        query = self.build_search_query(criteria)
        logger.info(f"[Pixabay] Searching for: '{query}'")

        data = await self._query(query, self.max_results)
        hits = data.get("hits")
        if not isinstance(hits, list):
            raise UpstreamError(self.name, "Malformed response: missing 'hits' list")

        results = []
        for video in hits:
            result = self._parse_video(video, criteria)
            if result:
                results.append(result)

        logger.info(f"[Pixabay] Found {len(results)} videos")
        return results

    def _parse_video(
        self, video: dict, criteria: VisualSearchCriteria
    ) -> Optional[AssetSearchResult]:
        """Parse a Pixabay video hit into an AssetSearchResult.

        Returns:
            AssetSearchResult, or None if no rendition has a URL
        """
        try:
            video_id = str(video.get("id", ""))
            renditions = video.get("videos") or {}
            if not video_id or not renditions:
                return None

            best = None
            for quality in QUALITY_ORDER:
                rendition = renditions.get(quality) or {}
                if rendition.get("url"):
                    best = rendition
                    break

            if best is None:
                return None

            tags_field = video.get("tags") or ""
            tags = [tag.strip() for tag in tags_field.split(",") if tag.strip()]
            title = " ".join(" ".join(tags).split()[:5]).title() or f"Pixabay Video {video_id}"

            metadata = {
                "title": title,
                "description": ", ".join(tags),
                "duration": video.get("duration"),
                "resolution": f"{best.get('width', 0)}x{best.get('height', 0)}",
                "tags": tags,
                "style": criteria.style.value if criteria.style else None,
                "mood": criteria.mood,
                "attribution": {
                    "name": video.get("user", "Unknown"),
                    "url": video.get("pageURL"),
                },
            }

            return AssetSearchResult(
                url=best["url"],
                thumbnail_url=best.get("thumbnail") or "",
                type=AssetType.VIDEO,
                provider=self.name,
                license=PIXABAY_LICENSE,
                metadata=metadata,
            )

        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"[Pixabay] Failed to parse video: {e}")
            return None
