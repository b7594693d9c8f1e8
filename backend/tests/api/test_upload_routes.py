"""Tests for POST /api/upload."""

from tests.conftest import signup


class TestUpload:
    def test_upload_image(self, client, storage):
        headers = signup(client, "5551111111", "Alice")

        response = client.post(
            "/api/upload",
            files={"file": ("photo.png", b"\x89PNG data", "image/png")},
            headers=headers,
        )

        assert response.status_code == 200
        [key] = storage.objects
        assert key.startswith("uploads/") and key.endswith(".png")
        assert response.json()["url"].endswith(key)

    def test_heic_by_extension(self, client, storage):
        headers = signup(client, "5551111111", "Alice")

        response = client.post(
            "/api/upload",
            files={"file": ("IMG_1.heic", b"heic", "application/octet-stream")},
            headers=headers,
        )

        assert response.status_code == 200
        [(_, content_type)] = storage.objects.values()
        assert content_type == "image/heic"

    def test_rejects_non_image(self, client):
        headers = signup(client, "5551111111", "Alice")
        response = client.post(
            "/api/upload",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "NOT_AN_IMAGE"

    def test_rejects_oversize(self, client):
        """The test container caps uploads at 1 KB."""
        headers = signup(client, "5551111111", "Alice")
        response = client.post(
            "/api/upload",
            files={"file": ("big.png", b"x" * 2048, "image/png")},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "FILE_TOO_LARGE"

    def test_requires_session(self, client):
        response = client.post("/api/upload", files={"file": ("a.png", b"x", "image/png")})
        assert response.status_code == 401
