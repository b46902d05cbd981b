"""Shared test configuration and fixtures."""

from typing import Dict, Optional

import pytest
import pytest_asyncio

from apps.feature_flags_service.core.flag_store import FlagStore
from apps.feature_flags_service.core.models import FlagDefinition


@pytest.fixture
def db_url(tmp_path) -> str:
    """SQLite file URL unique to the test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'flags.db'}"


@pytest_asyncio.fixture
async def flag_store(db_url):
    """Store on a fresh SQLite file."""
    store = FlagStore(db_url, cache_ttl_s=60)
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def make_flag():
    """Factory for engine snapshots."""

    def _make(
        key: str = "new-homepage",
        enabled: bool = True,
        rollout: int = 100,
        variants: Optional[Dict[str, int]] = None,
    ) -> FlagDefinition:
        return FlagDefinition(key=key, enabled=enabled, rollout=rollout, variants=variants or {})

    return _make
