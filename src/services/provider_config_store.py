"""Persistent storage for asset provider configurations.

Three interchangeable backends share the async ``ProviderConfigStore``
interface:
- InMemoryProviderConfigStore: process-local dict (tests, ephemeral setups)
- JsonFileProviderConfigStore: a single JSON array on disk
- SqliteProviderConfigStore: one row per provider via aiosqlite
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import aiosqlite

from models.asset import ProviderConfig

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = ".scenematch/providers.db"


class ProviderConfigStore(ABC):
    """Key-value store of ProviderConfig records keyed by provider name."""

    @abstractmethod
    async def get_all(self) -> list[ProviderConfig]:
        """Return every stored config."""

    @abstractmethod
    async def get(self, name: str) -> Optional[ProviderConfig]:
        """Return the config for ``name``, or None."""

    @abstractmethod
    async def put(self, config: ProviderConfig) -> None:
        """Insert or overwrite the config for ``config.name``."""

    @abstractmethod
    async def delete(self, name: str) -> None:
        """Delete the config for ``name``; missing names are ignored."""

    async def close(self) -> None:
        """Release any held resources."""


class InMemoryProviderConfigStore(ProviderConfigStore):
    """Dict-backed store; contents are lost when the process exits."""

    def __init__(self, configs: Optional[list[ProviderConfig]] = None):
        self._configs: dict[str, ProviderConfig] = {c.name: c for c in configs or []}

    async def get_all(self) -> list[ProviderConfig]:
        return list(self._configs.values())

    async def get(self, name: str) -> Optional[ProviderConfig]:
        return self._configs.get(name)

    async def put(self, config: ProviderConfig) -> None:
        self._configs[config.name] = config

    async def delete(self, name: str) -> None:
        self._configs.pop(name, None)


class JsonFileProviderConfigStore(ProviderConfigStore):
    """Stores all configs as one JSON array, rewritten on every change.

    File I/O runs in a worker thread. Read-modify-write updates hold
    ``_write_lock``.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self._write_lock = asyncio.Lock()

    def _read(self) -> dict[str, ProviderConfig]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text())
        configs = [ProviderConfig.from_dict(item) for item in data]
        return {config.name: config for config in configs}

    def _write(self, configs: dict[str, ProviderConfig]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [config.to_dict() for config in configs.values()]
        self.path.write_text(json.dumps(payload, indent=2))
        logger.debug(f"Provider configs saved to {self.path}")

    async def get_all(self) -> list[ProviderConfig]:
        configs = await asyncio.to_thread(self._read)
        return list(configs.values())

    async def get(self, name: str) -> Optional[ProviderConfig]:
        configs = await asyncio.to_thread(self._read)
        return configs.get(name)

    async def put(self, config: ProviderConfig) -> None:
        async with self._write_lock:
            configs = await asyncio.to_thread(self._read)
            configs[config.name] = config
            await asyncio.to_thread(self._write, configs)

    async def delete(self, name: str) -> None:
        async with self._write_lock:
            configs = await asyncio.to_thread(self._read)
            if configs.pop(name, None) is not None:
                await asyncio.to_thread(self._write, configs)


class SqliteProviderConfigStore(ProviderConfigStore):
    """Async SQLite provider config storage.

    The connection is opened lazily on first use and creates the
    ``provider_configs`` table if needed.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        """Initialize store with database path.

        Args:
            db_path: Path to SQLite database file. Parent directory
                     will be created if it doesn't exist.
        """
        self.db_path = Path(db_path)
        self.db: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database connection and create the schema."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.db = await aiosqlite.connect(str(self.db_path))
        self.db.row_factory = aiosqlite.Row

        await self.db.execute("""
            CREATE TABLE IF NOT EXISTS provider_configs (
                name TEXT PRIMARY KEY,
                data JSON NOT NULL,
                updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
        """)
        await self.db.commit()
        logger.info(f"Provider config store connected: {self.db_path}")

    async def close(self) -> None:
        """Close database connection."""
        if self.db:
            await self.db.close()
            self.db = None
            logger.info("Provider config store connection closed")

    async def _connection(self) -> aiosqlite.Connection:
        if self.db is None:
            await self.connect()
        return self.db

    async def get_all(self) -> list[ProviderConfig]:
        db = await self._connection()
        async with db.execute("SELECT data FROM provider_configs ORDER BY name") as cursor:
            rows = await cursor.fetchall()
        return [ProviderConfig.from_dict(json.loads(row["data"])) for row in rows]

    async def get(self, name: str) -> Optional[ProviderConfig]:
        db = await self._connection()
        async with db.execute(
            "SELECT data FROM provider_configs WHERE name = ?", (name,)
        ) as cursor:
            row = await cursor.fetchone()
        if row is None:
            return None
        return ProviderConfig.from_dict(json.loads(row["data"]))

    async def put(self, config: ProviderConfig) -> None:
        db = await self._connection()
        await db.execute(
            """
            INSERT INTO provider_configs (name, data, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(name) DO UPDATE SET
                data = excluded.data,
                updated_at = CURRENT_TIMESTAMP
            """,
            (config.name, json.dumps(config.to_dict())),
        )
        await db.commit()

    async def delete(self, name: str) -> None:
        db = await self._connection()
        await db.execute("DELETE FROM provider_configs WHERE name = ?", (name,))
        await db.commit()


def create_config_store(backend: str, path: str) -> ProviderConfigStore:
    """Build the configured store backend.

    Args:
        backend: "sqlite", "json" or "memory"
        path: Database or JSON file path (ignored for "memory")

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = backend.strip().lower()
    if backend == "sqlite":
        return SqliteProviderConfigStore(path)
    if backend == "json":
        return JsonFileProviderConfigStore(path)
    if backend == "memory":
        return InMemoryProviderConfigStore()
    raise ValueError(f"Unknown provider config backend: {backend}")
