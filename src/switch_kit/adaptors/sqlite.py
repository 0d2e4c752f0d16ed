"""SQLiteAdaptor — durable, single-file switch storage using aiosqlite."""

from __future__ import annotations

import json
import logging

try:
    import aiosqlite
except ImportError as exc:
    raise ImportError(
        "SQLiteAdaptor requires the 'aiosqlite' package. "
        "Install it with: pip install switch-kit[sqlite]"
    ) from exc

from switch_kit.exceptions import (
    NamespaceResolutionError,
    NotInitializedError,
    SwitchFetchError,
    SwitchWriteError,
)
from switch_kit.result import AdaptorResult
from switch_kit.switch import Switch, SwitchMetadata

logger = logging.getLogger(__name__)

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS switches (
    namespace TEXT NOT NULL,
    key       TEXT NOT NULL,
    value     TEXT NOT NULL,
    metadata  TEXT,
    PRIMARY KEY (namespace, key)
)
"""


class SQLiteAdaptor:
    """Persistent adaptor backed by a single SQLite file.

    Several namespaces can share one database file; each adaptor only sees
    the rows of its own namespace.

    Parameters:
        namespace: Title of the namespace holding the switches.
        db_path:   Path to the SQLite database file.  Use ``":memory:"``
                   for an in-memory database (useful for testing).
    """

    def __init__(self, namespace: str, db_path: str = "switches.db") -> None:
        self._namespace = namespace
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def initialized(self) -> bool:
        return self._db is not None

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    # ── StorageAdaptor protocol ──────────────────────────────

    async def init(self) -> AdaptorResult[None]:
        if self._db is not None:
            return AdaptorResult.success()
        try:
            db = await aiosqlite.connect(self._db_path)
            await db.execute(_CREATE_TABLE)
            await db.commit()
        except aiosqlite.Error as e:
            return AdaptorResult.failure(
                NamespaceResolutionError(
                    f"Unable to prepare namespace: {self._namespace}",
                    {"errors": [{"code": 0, "message": str(e)}]},
                )
            )
        logger.debug("Opened switch database %s for namespace %s", self._db_path, self._namespace)
        self._db = db
        return AdaptorResult.success()

    async def get(self, key: str) -> AdaptorResult[Switch]:
        db = self._require_db()
        try:
            cursor = await db.execute(
                "SELECT value, metadata FROM switches WHERE namespace = ? AND key = ?",
                (self._namespace, key),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            return AdaptorResult.failure(
                SwitchFetchError(
                    "Failed to load switch value and/or metadata",
                    {"errors": [{"code": 0, "message": str(e)}]},
                )
            )
        if row is None:
            return AdaptorResult.success(None)
        metadata = json.loads(row[1]) if row[1] is not None else None
        return AdaptorResult.success(Switch(value=row[0], metadata=metadata))

    async def set(
        self,
        key: str,
        value: str,
        metadata: SwitchMetadata | None = None,
    ) -> AdaptorResult[None]:
        db = self._require_db()
        try:
            await db.execute(
                "INSERT OR REPLACE INTO switches (namespace, key, value, metadata) "
                "VALUES (?, ?, ?, ?)",
                (self._namespace, key, value, json.dumps(metadata or {})),
            )
            await db.commit()
        except aiosqlite.Error as e:
            return AdaptorResult.failure(
                SwitchWriteError(
                    "Failed to write key with metadata",
                    {"errors": [{"code": 0, "message": str(e)}]},
                )
            )
        return AdaptorResult.success()

    def _require_db(self) -> aiosqlite.Connection:
        if self._db is None:
            raise NotInitializedError()
        return self._db
