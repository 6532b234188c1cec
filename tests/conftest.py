"""
Test configuration and fixtures
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from shoeshop.core.config import Settings
from shoeshop.core.security import create_access_token
from shoeshop.main import create_app
from shoeshop.repositories import InMemoryShoeRepository, InMemoryStore, SqlAlchemyStorage
from shoeshop.services.shoe_service import ShoeService

TEST_SECRET = "test-secret-key-for-testing-only-32chars"


def sqlite_settings(tmp_path, **kwargs) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'shoeshop_test.db'}",
        secret_key=TEST_SECRET,
        environment="test",
        log_level="WARNING",
        **kwargs,
    )


@pytest.fixture
def memory_repository():
    """Repositorio en memoria limpio para cada test"""
    return InMemoryShoeRepository(InMemoryStore())


@pytest.fixture
def sqlite_repository(tmp_path):
    """Repositorio SQLAlchemy sobre un archivo SQLite temporal"""
    storage = SqlAlchemyStorage(sqlite_settings(tmp_path))
    storage.init()
    with storage.session_scope() as repository:
        yield repository
    storage.dispose()


@pytest.fixture(params=["memory", "sqlite"])
def repository(request):
    """Mismo contrato, ambos backends"""
    return request.getfixturevalue(f"{request.param}_repository")


@pytest.fixture
def service(memory_repository):
    return ShoeService(memory_repository)


@pytest.fixture
def air_zoom_data():
    return {
        "name": "Air Zoom",
        "brand": "Nike",
        "size": "US 9",
        "base_color": "Blue",
        "price": Decimal("129.99"),
    }


@pytest.fixture
def settings(tmp_path):
    return sqlite_settings(tmp_path)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(settings):
    token = create_access_token(
        data={"sub": "tester@shoeshop.local", "email": "tester@shoeshop.local"},
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expires_delta=timedelta(minutes=5),
    )
    return {"Authorization": f"Bearer {token}"}
