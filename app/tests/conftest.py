import pytest
from fastapi.testclient import TestClient

# FORCE model registration
import app.models  # noqa

from app.core.config import Settings
from app.db.base import Base
from app.main import create_app
from app.services.auth_service import create_user

ADMIN_EMAIL = "admin@example.org"
ADMIN_PASSWORD = "admin-pass-123"


@pytest.fixture(scope="function")
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret_key="test-secret",
        upload_dir=str(tmp_path / "uploads"),
        log_level="WARNING",
    )


@pytest.fixture(scope="function")
def application(settings):
    app = create_app(settings)
    Base.metadata.create_all(app.state.engine)
    try:
        yield app
    finally:
        app.state.engine.dispose()


@pytest.fixture(scope="function")
def db(application):
    session = application.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(application):
    with TestClient(application) as c:
        yield c


@pytest.fixture(scope="function")
def admin_headers(client, db):
    create_user(db, ADMIN_EMAIL, ADMIN_PASSWORD)
    r = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    token = r.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}
