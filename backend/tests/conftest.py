"""
Shared test fixtures.

Every test gets a fresh in-memory SQLite engine and an app built around it,
with the demo simulator switched off.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import Base, build_session_factory
from app.core.seed import seed_database
from app.main import create_app

TEST_JWT_SECRET = "test-secret-key-for-testing-only"

ADMIN = ("john@example.com", "admin123")
MANAGER = ("alice@example.com", "manager123")
USER = ("jane@example.com", "user123")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret_key=TEST_JWT_SECRET,
        database_url="sqlite://",
        simulator_enabled=False,
        seed_on_startup=False,
        log_level="WARNING",
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db):
    seed_database(db)
    return db


@pytest.fixture
def app(settings, engine):
    return create_app(settings=settings, engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seeded_client(client):
    response = client.post("/api/seed")
    assert response.status_code == 200
    return client


def login(client: TestClient, email: str, password: str) -> str:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(seeded_client) -> dict[str, str]:
    return bearer(login(seeded_client, *ADMIN))


@pytest.fixture
def manager_headers(seeded_client) -> dict[str, str]:
    return bearer(login(seeded_client, *MANAGER))


@pytest.fixture
def user_headers(seeded_client) -> dict[str, str]:
    return bearer(login(seeded_client, *USER))
