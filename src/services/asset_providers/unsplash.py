"""Unsplash provider for stock photography."""

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

UNSPLASH_LICENSE = AssetLicense(
    type="Unsplash License",
    requires_attribution=True,
    restrictions=[
        "Don't sell unaltered copies",
        "Don't compile photos from Unsplash to replicate a similar service",
    ],
)


class UnsplashProvider(AssetProvider):
    """Unsplash image provider.

    API Documentation: https://unsplash.com/documentation

    Authenticates with an application access key sent as ``Client-ID``.
    """

    NAME = "Unsplash"
    ASSET_TYPES = (AssetType.IMAGE,)
    BASE_URL = "https://api.unsplash.com"
    DEFAULT_RATE_LIMIT = RateLimit(requests_per_minute=50, requests_per_day=5000)

    async def _query(self, query: str, per_page: int) -> dict:
        headers = {"Authorization": f"Client-ID {self.api_key}"}
        params = {
            "query": query,
            "per_page": min(per_page, 30),  # Unsplash API limit
            "orientation": "landscape",
        }
        return await self._get_json(f"{self.base_url}/search/photos", params, headers)

    async def search_assets(self, criteria: VisualSearchCriteria) -> list[AssetSearchResult]:
        query = self.build_search_query(criteria)
        logger.info(f"[Unsplash] Searching for: '{query}'")

        data = await self._query(query, self.max_results)
        images = data.get("results")
        if not isinstance(images, list):
            raise UpstreamError(self.name, "Malformed response: missing 'results' list")

        results = []
        for image in images:
            result = self._parse_image(image, criteria)
            if result:
                results.append(result)

        logger.info(f"[Unsplash] Found {len(results)} images")
        return results

    def _parse_image(
        self, image: dict, criteria: VisualSearchCriteria
    ) -> Optional[AssetSearchResult]:
        """Parse an Unsplash photo item into an AssetSearchResult.

        Returns:
            AssetSearchResult, or None if the photo has no full-size URL
        """
        try:
            image_id = str(image.get("id", ""))
            urls = image.get("urls") or {}
            full_url = urls.get("full") or urls.get("raw")
            if not image_id or not full_url:
                return None

            tags = [
                str(tag["title"])
                for tag in image.get("tags") or []
                if isinstance(tag, dict) and tag.get("title")
            ]
            description_parts = [image.get("alt_description") or "", ", ".join(tags)]
            user = image.get("user") or {}

            metadata = {
                "title": f"Unsplash Image {image_id}",
                "description": "; ".join(part for part in description_parts if part),
                "resolution": f"{image.get('width', 0)}x{image.get('height', 0)}",
                "tags": tags,
                "style": criteria.style.value if criteria.style else None,
                "mood": criteria.mood,
                "color": image.get("color"),
                "attribution": {
                    "name": user.get("name", "Unknown"),
                    "url": (user.get("links") or {}).get("html"),
                },
            }

            return AssetSearchResult(
                url=full_url,
                thumbnail_url=urls.get("thumb") or urls.get("small") or "",
                type=AssetType.IMAGE,
                provider=self.name,
                license=UNSPLASH_LICENSE,
                metadata=metadata,
            )

        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"[Unsplash] Failed to parse image: {e}")
            return None
