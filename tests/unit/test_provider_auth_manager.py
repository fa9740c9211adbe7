"""Unit tests for ProviderAuthManager."""

from unittest.mock import AsyncMock

import pytest

from models.asset import ProviderConfig
from services.provider_auth_manager import ProviderAuthManager
from services.provider_config_store import InMemoryProviderConfigStore
from utils.errors import AuthenticationError, UpstreamError

PEXELS = ProviderConfig(name="Pexels", api_key="pexels-key")
UNSPLASH = ProviderConfig(name="Unsplash", api_key="unsplash-key", enabled=False)


@pytest.mark.unit
class TestProviderAuthManager:
    @pytest.mark.asyncio
    async def test_load_populates_view(self):
        manager = ProviderAuthManager(InMemoryProviderConfigStore([PEXELS, UNSPLASH]))
        assert manager.get_all_configs() == []

        await manager.load()

        assert manager.get_config("Pexels") == PEXELS
        assert len(manager.get_all_configs()) == 2
        assert manager.get_enabled_providers() == [PEXELS]

    @pytest.mark.asyncio
    async def test_load_failure_leaves_view_empty(self):
        store = InMemoryProviderConfigStore([PEXELS])
        store.get_all = AsyncMock(side_effect=OSError("disk unavailable"))
        manager = ProviderAuthManager(store)

        await manager.load()

        assert manager.get_all_configs() == []

    @pytest.mark.asyncio
    async def test_update_and_remove_write_through(self):
        store = InMemoryProviderConfigStore()
        manager = ProviderAuthManager(store)

        await manager.update_config(PEXELS)
        assert await store.get("Pexels") == PEXELS
        assert manager.get_config("Pexels") == PEXELS

        await manager.remove_config("Pexels")
        await manager.remove_config("Pexels")
        assert await store.get("Pexels") is None
        assert manager.get_config("Pexels") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key,expected", [("abc", True), ("", False), ("   ", False)])
    async def test_validate_api_key(self, key, expected):
        manager = ProviderAuthManager(InMemoryProviderConfigStore())
        assert await manager.validate_api_key("Pexels", key) is expected


@pytest.mark.unit
class TestConnectionTest:
    @pytest.mark.asyncio
    async def test_unknown_provider_fails(self, stub_provider_factory):
        stub_provider_factory.unknown.add("Mystery")
        manager = ProviderAuthManager(InMemoryProviderConfigStore(), stub_provider_factory)

        assert await manager.test_connection(ProviderConfig(name="Mystery", api_key="k")) is False

    @pytest.mark.asyncio
    async def test_successful_probe(self, stub_provider_factory):
        manager = ProviderAuthManager(InMemoryProviderConfigStore(), stub_provider_factory)

        assert await manager.test_connection(PEXELS) is True
        assert stub_provider_factory.created[0].probe_calls == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            AuthenticationError("Pexels", "API rejected credentials (HTTP 401)"),
            UpstreamError("Pexels", "Network error", status=None),
        ],
    )
    async def test_failed_probe(self, stub_provider_factory, error):
        stub_provider_factory.errors["Pexels"] = error
        manager = ProviderAuthManager(InMemoryProviderConfigStore(), stub_provider_factory)

        assert await manager.test_connection(PEXELS) is False

    @pytest.mark.asyncio
    async def test_missing_key_fails(self, stub_provider_factory):
        manager = ProviderAuthManager(InMemoryProviderConfigStore(), stub_provider_factory)
        assert await manager.test_connection(ProviderConfig(name="Pexels")) is False
