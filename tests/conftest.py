"""
Shared fixtures: an app wired to a throwaway SQLite database and upload
directory, a TestClient running its lifespan, and helpers that register and
log in users.
"""

import os
import tempfile

# main.py builds a module-level app on import; keep it away from the working tree
_scratch = tempfile.mkdtemp(prefix="postboard_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{_scratch}/import.db"
os.environ["UPLOAD_DIR"] = os.path.join(_scratch, "uploads")
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from main import create_app  # noqa: E402
from postboard.core.config import Settings  # noqa: E402
from postboard.db.session import Database  # noqa: E402

# Minimal PNG header, enough for anything that only looks at the declared type
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret",
        upload_dir=str(tmp_path / "uploads"),
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def upload_dir(app):
    return app.state.image_storage.root


@pytest.fixture
def database(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'crud.db'}")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


def register(client, username, password="secret", fullname=None):
    payload = {"username": username, "password": password}
    if fullname is not None:
        payload["fullname"] = fullname
    return client.post("/api/auth/register", json=payload)


def login(client, username, password="secret"):
    return client.post("/api/auth/login", json={"username": username, "password": password})


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(client):
    """Register + log in; returns ``(user_id, headers)``."""

    def _make_user(username, password="secret", fullname=None):
        assert register(client, username, password, fullname).status_code == 201
        token = login(client, username, password).json()["token"]
        headers = auth_headers(token)
        user_id = client.get("/api/auth/profile", headers=headers).json()["id"]
        return user_id, headers

    return _make_user


@pytest.fixture
def alice(make_user):
    return make_user("alice", "pw1", "Alice A")


@pytest.fixture
def bob(make_user):
    return make_user("bob", "pw2", "Bob B")


def image_part(name="photo.png", content=PNG_BYTES, content_type="image/png"):
    return ("images", (name, content, content_type))


@pytest.fixture
def create_post(client):
    def _create_post(headers, content="hi", images=()):
        files = list(images) or None
        return client.post("/api/posts", data={"content": content}, files=files, headers=headers)

    return _create_post
