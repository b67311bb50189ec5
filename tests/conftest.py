import os
from typing import Dict, Generator, Tuple

# Avant tout import de l'app : base en mémoire, pas d'echo SQL, secret de test
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from app.db.session import get_session  # noqa: E402
from app.main import app  # noqa: E402

# In-memory SQLite database shared across connections via StaticPool.
engine_test = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

API = "/api"


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    """Fresh schema for every test function."""
    SQLModel.metadata.drop_all(engine_test)
    SQLModel.metadata.create_all(engine_test)
    with Session(engine_test) as session:
        yield session


@pytest.fixture()
def asgi_app(db_session):
    """The app with `get_session` bound to the in-memory test database."""

    def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(asgi_app) -> Generator[TestClient, None, None]:
    with TestClient(asgi_app) as c:
        yield c


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def signup(client):
    """Register then log in; returns (headers, user_id)."""

    def _signup(email: str = "a@x.com", password: str = "secret1") -> Tuple[Dict[str, str], int]:
        resp = client.post(f"{API}/auth/register", json={"email": email, "password": password})
        assert resp.status_code == 201, resp.text
        resp = client.post(f"{API}/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return bearer(body["token"]), body["userId"]

    return _signup


@pytest.fixture()
def alice(signup):
    return signup("alice@x.com", "alice-pw")


@pytest.fixture()
def bob(signup):
    return signup("bob@x.com", "bob-pw")
