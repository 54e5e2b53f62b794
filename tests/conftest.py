"""Shared fixtures: an app wired to a throwaway SQLite database and upload dir."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from travelstory.api.main import create_app
from travelstory.core.config import Settings

TEST_SECRET = "test-secret"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'travelstory.db'}",
        access_token_secret=TEST_SECRET,
        bcrypt_rounds=4,
        upload_dir=str(tmp_path / "uploads"),
        assets_dir=str(tmp_path / "assets"),
        public_base_url="http://localhost:8000",
    )


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def register(client: TestClient, email: str = "ada@example.com", password: str = "s3cret!") -> str:
    """Create an account and return its bearer token."""
    response = client.post(
        "/create-account",
        json={"fullName": "Ada Lovelace", "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["accessToken"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def add_story(client: TestClient, token: str, **overrides) -> dict:
    """Create a story for the token's user and return its JSON."""
    body = {
        "title": "Cherry blossoms",
        "story": "Walked the Philosopher's Path at dawn.",
        "visitedLocation": ["Kyoto", "Japan"],
        "imageUrl": "http://localhost:8000/uploads/missing.jpg",
        "visitedDate": "1700000000000",
    }
    body.update(overrides)
    response = client.post("/add-travel-story", json=body, headers=bearer(token))
    assert response.status_code == 201, response.text
    return response.json()["story"]


@pytest.fixture
def token(client: TestClient) -> str:
    return register(client)
