import pytest
from fastapi.testclient import TestClient

from apps.feature_flags_service.main import create_app
from apps.feature_flags_service.settings import Settings


@pytest.fixture
def app(tmp_path):
    return create_app(
        Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'flags.db'}", log_json=False)
    )


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
