"""Error types raised by asset matching, scene analysis and provider adapters."""

from typing import Optional


class AssetMatchingError(Exception):
    """Base class for all asset matching errors."""

    pass


class ConfigurationError(AssetMatchingError):
    """A required credential or setting is missing or invalid."""

    pass


class ProviderError(AssetMatchingError):
    """Error scoped to a single asset provider (or the scene-analysis backend)."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"[{provider}] {message}")


class AuthenticationError(ProviderError):
    """Provider has no API key, or rejected the one it was given."""

    pass


class RateLimitError(ProviderError):
    """Per-minute or per-day request ceiling reached for a provider."""

    def __init__(self, provider: str, window: str, limit: int):
        self.window = window
        self.limit = limit
        if window == "minute":
            detail = f"too many requests per minute (limit {limit})"
        else:
            detail = f"daily limit reached (limit {limit})"
        super().__init__(provider, f"Rate limit exceeded: {detail}")


class UpstreamError(ProviderError):
    """Network failure, non-success status or malformed body from an upstream API."""

    def __init__(self, provider: str, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(provider, message)


class ParseError(AssetMatchingError):
    """Scene analysis output was not valid structured data."""

    def __init__(self, message: str, raw: Optional[str] = None):
        self.raw = raw
        super().__init__(message)
