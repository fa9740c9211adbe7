"""Base abstraction for stock media asset providers."""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

import aiohttp

from models.asset import (
    AssetSearchResult,
    AssetType,
    ProviderConfig,
    RateLimit,
    VisualSearchCriteria,
)
from services.asset_providers.query import build_search_query
from services.asset_providers.rate_limiter import RateLimiter
from services.asset_providers.scoring import calculate_confidence
from utils.errors import AuthenticationError, UpstreamError

logger = logging.getLogger(__name__)

# Query used for connectivity checks
CONNECTION_PROBE_QUERY = "nature"


class AssetProvider(ABC):
    """Abstract base class for asset providers (Pexels, Unsplash, Pixabay, etc.).

    ``search()`` applies the same policy to every provider: auth check, rate
    limit, provider-specific ``search_assets()``, confidence scoring, then a
    sort by confidence (highest first). Subclasses only translate criteria
    into an upstream request and map the response.
    """

    NAME: str = ""
    ASSET_TYPES: tuple[AssetType, ...] = (AssetType.VIDEO, AssetType.IMAGE)
    REQUIRES_AUTH: bool = True
    BASE_URL: str = ""
    # Applied when the ProviderConfig carries no rate limit of its own
    DEFAULT_RATE_LIMIT: Optional[RateLimit] = None
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    def __init__(
        self,
        config: ProviderConfig,
        max_results: int = 15,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the provider.

        Args:
            config: Provider configuration (API key, endpoint override, limits)
            max_results: Results requested per search
            clock: Time source for the rate limiter
        """
        self.config = config
        self.name = self.NAME or config.name
        self.api_key = config.api_key
        self.base_url = config.api_endpoint or self.BASE_URL
        self.max_results = max_results
        self.rate_limiter = RateLimiter(
            self.name, config.rate_limit or self.DEFAULT_RATE_LIMIT, clock=clock
        )

    @property
    def types(self) -> list[AssetType]:
        return list(self.ASSET_TYPES)

    def is_configured(self) -> bool:
        """Check if this provider has the credentials it needs."""
        return bool(self.api_key) or not self.REQUIRES_AUTH

    def validate_auth(self) -> None:
        """Raise if the provider requires an API key and has none.

        Raises:
            AuthenticationError: If no API key is configured
        """
        if self.REQUIRES_AUTH and not self.api_key:
            raise AuthenticationError(
                self.name, "provider requires authentication. Please provide an API key."
            )

    def build_search_query(self, criteria: VisualSearchCriteria) -> str:
        return build_search_query(criteria)

    def calculate_confidence(
        self, result: AssetSearchResult, criteria: VisualSearchCriteria
    ) -> float:
        return calculate_confidence(result, criteria)

    async def search(self, criteria: VisualSearchCriteria) -> list[AssetSearchResult]:
        """Search this provider and return scored results, best first.

        Args:
            criteria: Normalized search criteria

        Returns:
            Results sorted by confidence, descending

        Raises:
            AuthenticationError: Missing or rejected API key
            RateLimitError: Minute or day ceiling reached
            UpstreamError: Network failure or bad upstream response
        """
        self.validate_auth()
        self.rate_limiter.acquire()

        results = await self.search_assets(criteria)

        scored = [
            result.with_confidence(self.calculate_confidence(result, criteria))
            for result in results
        ]
        scored.sort(key=lambda r: r.confidence, reverse=True)
        return scored

    @abstractmethod
    async def search_assets(self, criteria: VisualSearchCriteria) -> list[AssetSearchResult]:
        """Run the provider-specific search and return unscored results.

        Args:
            criteria: Normalized search criteria

        Returns:
            List of AssetSearchResult objects (confidence not yet computed)
        """

    @abstractmethod
    async def _query(self, query: str, per_page: int) -> dict:
        """Issue the raw search request and return the decoded JSON body."""

    async def check_connection(self) -> bool:
        """Issue a one-result search to verify credentials and reachability.

        Does not count against the rate limiter.

        Raises:
            AuthenticationError: Missing or rejected API key
            UpstreamError: Provider unreachable or returned an error
        """
        self.validate_auth()
        await self._query(CONNECTION_PROBE_QUERY, 1)
        logger.info(f"[{self.name}] Connection check succeeded")
        return True

    async def _get_json(
        self,
        url: str,
        params: dict,
        headers: Optional[dict] = None,
    ) -> dict:
        """GET ``url`` and decode a JSON object body.

        Raises:
            AuthenticationError: On HTTP 401/403
            UpstreamError: On network errors, timeouts, other non-200 statuses
                or a body that is not a JSON object
        """
        timeout = aiohttp.ClientTimeout(total=self.REQUEST_TIMEOUT_SECONDS)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, headers=headers, params=params) as response:
                    if response.status in (401, 403):
                        logger.error(f"[{self.name}] Invalid API key")
                        raise AuthenticationError(
                            self.name, f"API rejected credentials (HTTP {response.status})"
                        )

                    if response.status != 200:
                        body = await response.text()
                        logger.warning(f"[{self.name}] API returned status {response.status}")
                        raise UpstreamError(
                            self.name,
                            f"API returned status {response.status}: {body[:200]}",
                            status=response.status,
                        )

                    data = await response.json(content_type=None)

        except aiohttp.ClientError as e:
            logger.error(f"[{self.name}] Network error: {e}")
            raise UpstreamError(self.name, f"Network error: {e}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"[{self.name}] Request timed out")
            raise UpstreamError(self.name, "Request timed out") from e
        except ValueError as e:
            logger.error(f"[{self.name}] Malformed JSON response: {e}")
            raise UpstreamError(self.name, f"Malformed JSON response: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamError(self.name, "Malformed response: expected a JSON object")
        return data
