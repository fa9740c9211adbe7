"""Configuration loading and validation for scenematch."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Get the project root directory (parent of src)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load environment variables from .env file in project root
load_dotenv(PROJECT_ROOT / ".env")

PROVIDER_CONFIG_BACKENDS = ("sqlite", "json", "memory")


def load_config() -> dict:
    """Load configuration from environment variables."""

    # Helper function to resolve paths relative to project root
    def resolve_path(path: str | None, default_relative: str) -> str:
        if not path:
            return str(PROJECT_ROOT / default_relative)
        if Path(path).is_absolute():
            return path
        return str(PROJECT_ROOT / path)

    config = {
        # Scene analysis (Gemini) - required unless SCENE_ANALYSIS_URL is set
        "gemini_api_key": os.getenv("GEMINI_API_KEY"),
        "gemini_model": os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        # Optional remote scene analysis endpoint (used instead of Gemini when set)
        "scene_analysis_url": os.getenv("SCENE_ANALYSIS_URL"),
        # Asset provider keys (each one seeds a trusted provider)
        "pexels_api_key": os.getenv("PEXELS_API_KEY"),
        "unsplash_api_key": os.getenv("UNSPLASH_API_KEY"),
        "pixabay_api_key": os.getenv("PIXABAY_API_KEY"),
        # Persisted provider configuration
        "provider_config_backend": os.getenv("PROVIDER_CONFIG_BACKEND", "sqlite").lower(),
        "provider_config_path": resolve_path(
            os.getenv("PROVIDER_CONFIG_PATH"), ".scenematch/providers.db"
        ),
        # Search behavior
        "provider_timeout_seconds": float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "30")),
        "results_per_provider": int(os.getenv("RESULTS_PER_PROVIDER", "15")),
        # Logging
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_json": os.getenv("LOG_JSON", "false").lower() == "true",
    }

    return config


def validate_config(config: dict) -> list[str]:
    """Validate configuration and return list of errors."""
    errors = []

    if not config.get("gemini_api_key") and not config.get("scene_analysis_url"):
        errors.append(
            "GEMINI_API_KEY is required for scene analysis (or set SCENE_ANALYSIS_URL)"
        )

    if config.get("provider_config_backend") not in PROVIDER_CONFIG_BACKENDS:
        errors.append(
            f"PROVIDER_CONFIG_BACKEND must be one of: {', '.join(PROVIDER_CONFIG_BACKENDS)}"
        )

    if config.get("provider_timeout_seconds", 0) < 0:
        errors.append("PROVIDER_TIMEOUT_SECONDS cannot be negative")

    if config.get("results_per_provider", 1) < 1:
        errors.append("RESULTS_PER_PROVIDER must be at least 1")

    if not any(
        config.get(key) for key in ("pexels_api_key", "unsplash_api_key", "pixabay_api_key")
    ):
        errors.append(
            "No provider API keys set (PEXELS_API_KEY, UNSPLASH_API_KEY, PIXABAY_API_KEY); "
            "only persisted providers will be searched"
        )

    return errors
