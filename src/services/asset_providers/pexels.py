"""Pexels provider for stock video footage."""

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

PEXELS_LICENSE = AssetLicense(
    type="Pexels License",
    requires_attribution=True,
    restrictions=[
        "No resale of the video itself",
        "Don't imply endorsement",
    ],
)

PLAYABLE_FILE_TYPE = "video/mp4"


class PexelsProvider(AssetProvider):
    """Pexels video provider.

    API Documentation: https://www.pexels.com/api/documentation/

    To get an API key:
    1. Create a free account at https://www.pexels.com
    2. Go to https://www.pexels.com/api/new/ to generate an API key
    """

    NAME = "Pexels"
    ASSET_TYPES = (AssetType.VIDEO,)
    BASE_URL = "https://api.pexels.com/videos"
    DEFAULT_RATE_LIMIT = RateLimit(requests_per_minute=100, requests_per_day=20000)

    async def _query(self, query: str, per_page: int) -> dict:
        headers = {"Authorization": self.api_key or ""}
        params = {
            "query": query,
            "per_page": min(per_page, 80),  # Pexels API limit
            "orientation": "landscape",
            "size": "large",
        }
        return await self._get_json(f"{self.base_url}/search", params, headers)

    async def search_assets(self, criteria: VisualSearchCriteria) -> list[AssetSearchResult]:
        query = self.build_search_query(criteria)
        logger.info(f"[Pexels] Searching for: '{query}'")

        data = await self._query(query, self.max_results)
        videos = data.get("videos")
        if not isinstance(videos, list):
            raise UpstreamError(self.name, "Malformed response: missing 'videos' list")

        results = []
        for video in videos:
            result = self._parse_video(video, criteria)
            if result:
                results.append(result)

        logger.info(f"[Pexels] Found {len(results)} videos")
        return results

    def _parse_video(
        self, video: dict, criteria: VisualSearchCriteria
    ) -> Optional[AssetSearchResult]:
        """Parse a Pexels video item into an AssetSearchResult.

        Args:
            video: Video dict from the Pexels API
            criteria: Criteria the search was issued with

        Returns:
            AssetSearchResult, or None if the video has no playable file
        """
        try:
            video_id = str(video.get("id", ""))
            if not video_id:
                return None

            playable = [
                f
                for f in video.get("video_files") or []
                if f.get("file_type") == PLAYABLE_FILE_TYPE and f.get("link")
            ]
            if not playable:
                return None

            # Highest resolution wins
            best_file = max(
                playable,
                key=lambda f: (f.get("width") or 0) * (f.get("height") or 0),
            )

            # Pexels URLs are like: https://www.pexels.com/video/title-here-12345/
            page_url = video.get("url") or f"https://www.pexels.com/video/{video_id}/"
            slug = page_url.rstrip("/").split("/")[-1]
            if slug.endswith(f"-{video_id}"):
                slug = slug[: -len(f"-{video_id}")]
            description = slug.replace("-", " ") if slug != video_id else ""
            title = description.title() if description else f"Pexels Video {video_id}"

            user = video.get("user") or {}
            metadata = {
                "title": title,
                "description": description,
                "duration": video.get("duration"),
                "resolution": f"{video.get('width', 0)}x{video.get('height', 0)}",
                "tags": [str(tag) for tag in video.get("tags") or []],
                "style": criteria.style.value if criteria.style else None,
                "mood": criteria.mood,
                "attribution": {
                    "name": user.get("name", "Unknown"),
                    "url": user.get("url"),
                },
                "pageUrl": page_url,
            }
            if video.get("avg_color"):
                metadata["color"] = video["avg_color"]

            return AssetSearchResult(
                url=best_file["link"],
                thumbnail_url=video.get("image") or "",
                type=AssetType.VIDEO,
                provider=self.name,
                license=PEXELS_LICENSE,
                metadata=metadata,
            )

        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"[Pexels] Failed to parse video: {e}")
            return None
