# File: tests/conftest.py

"""
Shared fixtures.

Every test app gets its own in-memory SQLite database and upload directory,
plus a fake geocoder so no request leaves the process.
"""

import os
import tempfile
from pathlib import Path

# app.main builds a module-level app on import; keep it off postgres and
# out of the working tree
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "places-api-test-uploads"))

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_geocoder
from app.core.config import Settings
from app.core.errors import validation_error
from app.core.result import Err, Ok
from app.main import create_application
from app.schemas.place import Location
from app.services.geocoding import NO_COORDINATES_MESSAGE

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeGeocoder:
    """Resolves every address to a fixed point, except `unknown_addresses`."""

    def __init__(self, location: Location | None = None):
        self.location = location or Location(lat=40.7484405, lng=-73.9878584)
        self.unknown_addresses: set[str] = set()
        self.calls: list[str] = []

    def geocode(self, address: str):
        self.calls.append(address)
        if address in self.unknown_addresses:
            return Err(validation_error(NO_COORDINATES_MESSAGE))
        return Ok(self.location)

    def close(self) -> None:
        pass


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_KEY="test-secret-key-0123456789",
        BCRYPT_ROUNDS=4,
        UPLOAD_DIR=str(tmp_path / "uploads"),
    )


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def app(settings, geocoder):
    application = create_application(settings)
    application.dependency_overrides[get_geocoder] = lambda: geocoder
    return application


@pytest.fixture
def client(app):
    # entering the context runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def upload_dir(settings) -> Path:
    return Path(settings.UPLOAD_DIR)


def image_file(name: str = "photo.png", content_type: str = "image/png", data: bytes = PNG_BYTES):
    return {"image": (name, data, content_type)}


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def signup(client):
    """Sign a user up through the API and return the JSON body."""

    def _signup(name="Alice", email="alice@example.com", password="secret123"):
        resp = client.post(
            "/api/users/signup",
            data={"name": name, "email": email, "password": password},
            files=image_file(),
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _signup


@pytest.fixture
def post_place(client):
    """POST /api/places as the owner of `token`; returns the raw response."""

    def _post_place(
        token,
        title="Empire State Building",
        description="A famous skyscraper",
        address="20 W 34th St, New York, NY 10001",
        files=None,
    ):
        return client.post(
            "/api/places",
            data={"title": title, "description": description, "address": address},
            files=files if files is not None else image_file(),
            headers=auth_header(token),
        )

    return _post_place
