"""Provider configuration management: CRUD over the config store plus credential checks."""

import logging
from typing import Callable, Optional

from models.asset import ProviderConfig
from services.asset_providers import AssetProvider, create_provider
from services.provider_config_store import ProviderConfigStore
from utils.errors import AssetMatchingError

logger = logging.getLogger(__name__)


class ProviderAuthManager:
    """Owns the persisted provider configurations.

    Keeps an in-memory view of the store (filled by ``load()``) and writes
    through to the store on every change.
    """

    def __init__(
        self,
        store: ProviderConfigStore,
        provider_factory: Callable[..., Optional[AssetProvider]] = create_provider,
    ):
        """Initialize the manager.

        Args:
            store: Backing configuration store
            provider_factory: Builds a provider from a config (used for connection tests)
        """
        self.store = store
        self.provider_factory = provider_factory
        self._configs: dict[str, ProviderConfig] = {}

    async def load(self) -> None:
        """Refresh the in-memory view from the store.

        A store that cannot be read leaves the view empty; the error is logged.
        """
        try:
            configs = await self.store.get_all()
        except Exception as e:
            logger.error(f"Failed to load provider configs: {e}")
            self._configs = {}
            return
        self._configs = {config.name: config for config in configs}
        logger.info(f"Loaded {len(self._configs)} provider configs")

    def get_config(self, provider_name: str) -> Optional[ProviderConfig]:
        return self._configs.get(provider_name)

    def get_all_configs(self) -> list[ProviderConfig]:
        return list(self._configs.values())

    def get_enabled_providers(self) -> list[ProviderConfig]:
        return [config for config in self._configs.values() if config.enabled]

    async def update_config(self, config: ProviderConfig) -> None:
        """Insert or overwrite the config for ``config.name``."""
        await self.store.put(config)
        self._configs[config.name] = config
        logger.info(f"Saved provider config: {config.name}")

    async def remove_config(self, provider_name: str) -> None:
        """Delete the config for ``provider_name``; absent names are ignored."""
        await self.store.delete(provider_name)
        self._configs.pop(provider_name, None)
        logger.info(f"Removed provider config: {provider_name}")

    async def validate_api_key(self, provider_name: str, api_key: str) -> bool:
        """Check that an API key was supplied at all.

        Whether the key is accepted is established by ``test_connection``.
        """
        return bool(api_key and api_key.strip())

    async def test_connection(self, config: ProviderConfig) -> bool:
        """Verify the provider is reachable and accepts the configured key.

        Args:
            config: Candidate configuration

        Returns:
            True if a probe search succeeded, False otherwise
        """
        provider = self.provider_factory(config)
        if provider is None:
            logger.warning(f"Cannot test connection: no implementation for '{config.name}'")
            return False

        try:
            return await provider.check_connection()
        except AssetMatchingError as e:
            logger.warning(f"Failed to test connection for {config.name}: {e}")
            return False
