"""Feature flag persistence with async SQLAlchemy and an in-process read cache."""

import time
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

import structlog
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Integer,
    MetaData,
    String,
    Table,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.exc import IntegrityError

from libs.contracts.flag_spec import Flag, FlagCreate, FlagUpdate
from libs.utils.database_config import DatabaseConfig

from .models import FlagDefinition

logger = structlog.get_logger(__name__)

DEFAULT_ROLLOUT = 100

metadata = MetaData()

flags_table = Table(
    "flags",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("key", String(255), unique=True, nullable=False),
    Column("enabled", Boolean, nullable=False),
    Column("variants", JSON, nullable=True),
    Column("rollout", Integer, nullable=True),
    Column("updated_at", String(64), nullable=False),
)


class FlagConflictError(Exception):
    """A flag with the same key already exists."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"flag already exists: {key}")


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def _row_to_flag(row) -> Flag:
    return Flag(
        id=row["id"],
        key=row["key"],
        enabled=bool(row["enabled"]),
        variants=row["variants"] or {},
        rollout=DEFAULT_ROLLOUT if row["rollout"] is None else row["rollout"],
        updated_at=row["updated_at"],
    )


def to_definition(flag: Flag) -> FlagDefinition:
    """Snapshot a stored flag for the evaluation engine."""
    return FlagDefinition(
        key=flag.key,
        enabled=flag.enabled,
        rollout=flag.rollout,
        variants=flag.variants,
    )


class FlagStore:
    """CRUD access to flag records keyed by their unique key."""

    def __init__(self, database_url: str, cache_ttl_s: int = 60):
        self.db = DatabaseConfig(database_url)
        self.cache_ttl_s = cache_ttl_s
        self._cache: Dict[str, Tuple[Flag, float]] = {}
        # Bumped on every invalidation; a read only fills the cache if no write
        # landed while it was fetching.
        self._generations: Dict[str, int] = {}

    async def initialize(self) -> None:
        """Open the engine and create the flags table if missing."""
        await self.db.initialize(metadata)

    async def close(self) -> None:
        self._cache.clear()
        self._generations.clear()
        await self.db.close()

    async def health_check(self) -> bool:
        return await self.db.health_check()

    def _cache_get(self, key: str) -> Optional[Flag]:
        entry = self._cache.get(key)
        if entry is None:
            return None
        flag, expires_at = entry
        if time.monotonic() >= expires_at:
            del self._cache[key]
            return None
        return flag

    def _cache_put(self, flag: Flag) -> None:
        if self.cache_ttl_s > 0:
            self._cache[flag.key] = (flag, time.monotonic() + self.cache_ttl_s)

    def invalidate(self, key: str) -> None:
        self._generations[key] = self._generations.get(key, 0) + 1
        self._cache.pop(key, None)

    async def _fetch(self, session, key: str) -> Optional[Flag]:
        result = await session.execute(select(flags_table).where(flags_table.c.key == key))
        row = result.mappings().first()
        return _row_to_flag(row) if row is not None else None

    async def list_flags(self) -> List[Flag]:
        async with self.db.get_session() as session:
            result = await session.execute(select(flags_table).order_by(flags_table.c.id))
            return [_row_to_flag(row) for row in result.mappings().all()]

    async def get(self, key: str) -> Optional[Flag]:
        cached = self._cache_get(key)
        if cached is not None:
            return cached

        generation = self._generations.get(key, 0)
        async with self.db.get_session() as session:
            flag = await self._fetch(session, key)

        if flag is not None and self._generations.get(key, 0) == generation:
            self._cache_put(flag)
        return flag

    async def get_definition(self, key: str) -> Optional[FlagDefinition]:
        flag = await self.get(key)
        return to_definition(flag) if flag is not None else None

    async def create(self, payload: FlagCreate) -> Flag:
        """Insert a new flag.

        Raises:
            FlagConflictError: if the key is already taken.
        """
        try:
            async with self.db.get_session() as session:
                await session.execute(
                    insert(flags_table).values(
                        key=payload.key,
                        enabled=payload.enabled,
                        variants=payload.variants,
                        rollout=payload.rollout,
                        updated_at=_utcnow(),
                    )
                )
                flag = await self._fetch(session, payload.key)
        except IntegrityError as e:
            raise FlagConflictError(payload.key) from e

        self.invalidate(payload.key)
        logger.info("Feature flag created", flag_key=flag.key, enabled=flag.enabled, rollout=flag.rollout)
        return flag

    async def update(self, key: str, patch: FlagUpdate) -> Optional[Flag]:
        """Apply a partial update; returns None if the flag does not exist."""
        async with self.db.get_session() as session:
            existing = await self._fetch(session, key)
            if existing is None:
                return None

            await session.execute(
                update(flags_table)
                .where(flags_table.c.key == key)
                .values(
                    enabled=existing.enabled if patch.enabled is None else patch.enabled,
                    variants=existing.variants if patch.variants is None else patch.variants,
                    rollout=existing.rollout if patch.rollout is None else patch.rollout,
                    updated_at=_utcnow(),
                )
            )
            flag = await self._fetch(session, key)

        self.invalidate(key)
        logger.info("Feature flag updated", flag_key=key, enabled=flag.enabled, rollout=flag.rollout)
        return flag

    async def delete(self, key: str) -> bool:
        async with self.db.get_session() as session:
            result = await session.execute(delete(flags_table).where(flags_table.c.key == key))
            deleted = result.rowcount > 0

        self.invalidate(key)
        if deleted:
            logger.info("Feature flag deleted", flag_key=key)
        return deleted
