import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("PASSWORD_SALT", "test-salt")
os.environ.setdefault("CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.config.database import Base, get_db
from app.config.settings import Settings
from app.core.auth.service import AuthService
from app.main import app
from app.shared.database.models import ROLE_EMPLOYEE, ROLE_MODERATOR, CITY_MOSCOW

from tests.fakes import (
    InMemoryStore, InMemoryUserRepository, InMemoryPickupPointRepository,
    InMemoryReceptionRepository, InMemoryProductRepository,
)


@pytest.fixture
def engine():
    """SQLite en memoria compartida por todas las sesiones del test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """TestClient con get_db apuntando a la BD de pruebas."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _headers_for(client, role):
    response = client.post("/api/v1/dummyLogin", json={"role": role})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def employee_headers(client):
    return _headers_for(client, ROLE_EMPLOYEE)


@pytest.fixture
def moderator_headers(client):
    return _headers_for(client, ROLE_MODERATOR)


@pytest.fixture
def pvz_id(client, moderator_headers):
    """PVZ creado vía API."""
    response = client.post("/api/v1/pvz", json={"city": CITY_MOSCOW}, headers=moderator_headers)
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def auth_settings():
    return Settings(
        secret_key="unit-test-secret",
        password_salt="unit-test-salt",
        access_token_expire_minutes=5,
    )


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def user_repository(store):
    return InMemoryUserRepository(store)


@pytest.fixture
def pvz_repository(store):
    return InMemoryPickupPointRepository(store)


@pytest.fixture
def reception_repository(store):
    return InMemoryReceptionRepository(store)


@pytest.fixture
def product_repository(store):
    return InMemoryProductRepository(store)


@pytest.fixture
def auth_service(user_repository, auth_settings):
    return AuthService(user_repository, auth_settings)
