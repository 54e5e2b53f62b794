"""Tests for image upload, static serving and deletion."""

from pathlib import Path

from fastapi.testclient import TestClient

from conftest import add_story, bearer
from travelstory.core.config import Settings


def upload(client: TestClient, name: str = "sunset.jpg", content: bytes = b"\xff\xd8fake-jpeg") -> str:
    response = client.post("/image-upload", files={"image": (name, content, "image/jpeg")})
    assert response.status_code == 200, response.text
    return response.json()["imageUrl"]


def uploaded_path(settings: Settings, image_url: str) -> Path:
    return Path(settings.upload_dir) / image_url.rsplit("/", 1)[-1]


class TestUpload:
    """POST /image-upload."""

    def test_upload_stores_file_and_returns_url(self, client: TestClient, settings: Settings) -> None:
        image_url = upload(client, "sunset.jpg", b"pixels")
        assert image_url.startswith("http://localhost:8000/uploads/")
        assert image_url.endswith(".jpg")

        path = uploaded_path(settings, image_url)
        assert path.read_bytes() == b"pixels"

    def test_uploaded_file_is_served(self, client: TestClient) -> None:
        image_url = upload(client, content=b"served-bytes")
        response = client.get(image_url.replace("http://localhost:8000", ""))
        assert response.status_code == 200
        assert response.content == b"served-bytes"

    def test_filenames_are_unique(self, client: TestClient) -> None:
        assert upload(client, "same.jpg") != upload(client, "same.jpg")

    def test_no_file(self, client: TestClient) -> None:
        response = client.post("/image-upload")
        assert response.status_code == 400
        assert response.json() == {"error": True, "message": "No image uploaded"}

    def test_upload_needs_no_session(self, client: TestClient) -> None:
        upload(client)


class TestStatic:
    """Static mounts."""

    def test_missing_upload_is_404(self, client: TestClient) -> None:
        assert client.get("/uploads/nothing-here.jpg").status_code == 404

    def test_assets_are_served(self, client: TestClient, settings: Settings) -> None:
        (Path(settings.assets_dir) / "placeholder.jpeg").write_bytes(b"placeholder")
        response = client.get("/assets/placeholder.jpeg")
        assert response.status_code == 200
        assert response.content == b"placeholder"


class TestDeleteImage:
    """DELETE /delete-image."""

    def test_delete_uploaded_image(self, client: TestClient, settings: Settings) -> None:
        image_url = upload(client)
        response = client.delete("/delete-image", params={"imageUrl": image_url})
        assert response.status_code == 200
        assert response.json() == {"message": "image deleted successfully"}
        assert not uploaded_path(settings, image_url).exists()

    def test_missing_param(self, client: TestClient) -> None:
        response = client.delete("/delete-image")
        assert response.status_code == 400
        assert response.json() == {"error": True, "message": "image Url is required"}

    def test_unknown_image(self, client: TestClient) -> None:
        response = client.delete(
            "/delete-image", params={"imageUrl": "http://localhost:8000/uploads/ghost.png"}
        )
        assert response.status_code == 404
        assert response.json() == {"error": True, "message": "Image not found"}

    def test_directory_names_are_not_deleted(self, client: TestClient, settings: Settings) -> None:
        response = client.delete("/delete-image", params={"imageUrl": "http://localhost:8000/uploads/.."})
        assert response.status_code == 404
        assert Path(settings.upload_dir).is_dir()


class TestStoryImageCleanup:
    """Deleting a story removes its uploaded image on a best-effort basis."""

    def test_delete_story_removes_its_image(self, client: TestClient, settings: Settings, token: str) -> None:
        image_url = upload(client)
        story = add_story(client, token, imageUrl=image_url)
        assert uploaded_path(settings, image_url).exists()

        response = client.delete(f"/delete-story/{story['id']}", headers=bearer(token))
        assert response.status_code == 200
        assert not uploaded_path(settings, image_url).exists()

    def test_delete_story_keeps_going_when_image_is_gone(self, client: TestClient, token: str) -> None:
        image_url = upload(client)
        story = add_story(client, token, imageUrl=image_url)
        client.delete("/delete-image", params={"imageUrl": image_url})

        response = client.delete(f"/delete-story/{story['id']}", headers=bearer(token))
        assert response.status_code == 200
