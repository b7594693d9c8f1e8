"""
Tests for IOU and contacts API endpoints.

Requests go through the real services over in-memory repositories.
"""

import pytest

from tests.conftest import signup
from tests.fakes import uuid_rejecting_db


@pytest.fixture
def alice(client):
    return signup(client, "5551111111", "Alice")


@pytest.fixture
def bob(client):
    return signup(client, "5552222222", "Bob")


@pytest.fixture
def carol(client):
    return signup(client, "5553333333", "Carol")


def create_iou(client, headers, **body) -> dict:
    response = client.post("/api/ious", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["iou"]


class TestCreateIOU:
    """Tests for POST /api/ious"""

    def test_create_to_phone(self, client, alice, bob):
        iou = create_iou(client, alice, to_phone="(555) 222-2222", description="lunch")

        assert iou["status"] == "pending"
        assert iou["to_phone"] == "5552222222"
        assert iou["to_user"]["display_name"] == "Bob"
        assert iou["from_user"]["display_name"] == "Alice"

    def test_empty_iou(self, client, alice):
        response = client.post("/api/ious", json={"description": ""}, headers=alice)
        assert response.status_code == 400
        assert response.json()["error"] == "IOU_EMPTY"

    def test_self_iou(self, client, alice):
        response = client.post("/api/ious", json={"to_phone": "5551111111"}, headers=alice)
        assert response.status_code == 400
        assert response.json()["error"] == "SELF_IOU"

    def test_requires_session(self, client):
        response = client.post("/api/ious", json={"description": "lunch"})
        assert response.status_code == 401

    def test_rejects_garbage_token(self, client):
        response = client.post(
            "/api/ious",
            json={"description": "lunch"},
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_SESSION"


class TestGetIOU:
    """Tests for GET /api/ious/{id}"""

    def test_parties_can_view(self, client, alice, bob):
        iou = create_iou(client, alice, to_phone="5552222222")
        for headers in (alice, bob):
            assert client.get(f"/api/ious/{iou['id']}", headers=headers).status_code == 200

    def test_stranger_forbidden(self, client, alice, bob, carol):
        iou = create_iou(client, alice, to_phone="5552222222")
        response = client.get(f"/api/ious/{iou['id']}", headers=carol)
        assert response.status_code == 403
        assert response.json()["error"] == "IOU_ACCESS_DENIED"

    def test_missing(self, client, carol):
        response = client.get("/api/ious/does-not-exist", headers=carol)
        assert response.status_code == 404
        assert response.json()["error"] == "IOU_NOT_FOUND"


class TestMarkRepaid:
    """Tests for PATCH /api/ious/{id}"""

    def test_repaid(self, client, alice, bob):
        iou = create_iou(client, alice, to_phone="5552222222")

        response = client.patch(f"/api/ious/{iou['id']}", json={"action": "repaid"}, headers=bob)

        assert response.status_code == 200
        assert response.json()["iou"]["status"] == "repaid"
        assert response.json()["iou"]["repaid_at"] is not None

    def test_twice(self, client, alice, bob):
        iou = create_iou(client, alice, to_phone="5552222222")
        client.patch(f"/api/ious/{iou['id']}", json={"action": "repaid"}, headers=bob)

        response = client.patch(f"/api/ious/{iou['id']}", json={"action": "repaid"}, headers=alice)

        assert response.status_code == 400
        assert response.json()["error"] == "IOU_ALREADY_REPAID"

    def test_unknown_action(self, client, alice):
        iou = create_iou(client, alice, description="lunch")
        response = client.patch(f"/api/ious/{iou['id']}", json={"action": "forgive"}, headers=alice)
        assert response.status_code == 400


class TestShareAndClaim:
    """Tests for GET /api/ious/share/{token} and POST /api/ious/{id}/claim"""

    def test_share_view_is_public_and_hides_phones(self, client, alice):
        iou = create_iou(client, alice, to_phone="5559999999", to_name="Pat", description="ride")

        response = client.get(f"/api/ious/share/{iou['share_token']}")

        assert response.status_code == 200
        shared = response.json()["iou"]
        assert shared["from_name"] == "Alice"
        assert shared["to_name"] == "Pat"
        assert shared["claimable"] is True
        assert "5559999999" not in response.text
        assert "5551111111" not in response.text

    def test_unknown_share_token(self, client):
        assert client.get("/api/ious/share/nope").status_code == 404

    def test_claim(self, client, alice, bob, carol):
        iou = create_iou(client, alice, to_name="Bob", description="ride")

        own = client.post(f"/api/ious/{iou['id']}/claim", headers=alice)
        assert own.status_code == 400
        assert own.json()["error"] == "CANNOT_CLAIM_OWN_IOU"

        claimed = client.post(f"/api/ious/{iou['id']}/claim", headers=bob)
        assert claimed.status_code == 200
        assert claimed.json()["iou"]["to_user"]["display_name"] == "Bob"

        again = client.post(f"/api/ious/{iou['id']}/claim", headers=carol)
        assert again.status_code == 409
        assert again.json()["error"] == "IOU_ALREADY_CLAIMED"

        shared = client.get(f"/api/ious/share/{iou['share_token']}").json()["iou"]
        assert shared["claimable"] is False
        assert shared["to_name"] == "Bob"


class TestListAndArchive:
    """Tests for GET /api/ious, /api/ious/archived and /api/ious/{id}/archive"""

    def test_list(self, client, alice, bob):
        owed = create_iou(client, alice, to_phone="5552222222", description="lunch")
        owing = create_iou(client, bob, to_phone="5551111111", description="coffee")

        data = client.get("/api/ious", headers=alice).json()

        assert [i["id"] for i in data["owed"]] == [owed["id"]]
        assert [i["id"] for i in data["owing"]] == [owing["id"]]
        assert data["has_more_owed"] is False

    def test_pagination_params(self, client, alice):
        for n in range(3):
            create_iou(client, alice, description=f"favor {n}")

        data = client.get("/api/ious?limit=2&offset=0", headers=alice).json()

        assert len(data["owed"]) == 2
        assert data["has_more_owed"] is True

    def test_archive_round_trip(self, client, alice, bob):
        iou = create_iou(client, alice, to_phone="5552222222")

        assert client.post(f"/api/ious/{iou['id']}/archive", headers=bob).json() == {"success": True}
        assert client.post(f"/api/ious/{iou['id']}/archive", headers=bob).json() == {"success": True}
        assert client.get("/api/ious", headers=bob).json()["owing"] == []
        archived = client.get("/api/ious/archived", headers=bob).json()["ious"]
        assert [i["id"] for i in archived] == [iou["id"]]

        assert client.delete(f"/api/ious/{iou['id']}/archive", headers=bob).status_code == 200
        assert len(client.get("/api/ious", headers=bob).json()["owing"]) == 1


class TestContacts:
    """Tests for GET /api/contacts"""

    def test_contacts(self, client, alice, bob):
        create_iou(client, alice, to_phone="5552222222")
        create_iou(client, alice, to_name="Pat")

        contacts = client.get("/api/contacts", headers=alice).json()["contacts"]

        assert [c["display_name"] for c in contacts] == ["Pat", "Bob"]


class TestApiRateLimit:
    def test_create_is_rate_limited(self, client, alice, monkeypatch):
        from api.dependencies import get_container
        from modules.ratelimit.models import RateLimitResult

        async def closed(user_id):
            return RateLimitResult(allowed=False, remaining=0, reset_at_ms=0)

        monkeypatch.setattr(get_container().rate_limiter, "check_api", closed)

        response = client.post("/api/ious", json={"description": "lunch"}, headers=alice)

        assert response.status_code == 429
        assert "Retry-After" in response.headers


class TestMalformedIds:
    """Non-UUID ids against the Supabase-backed repositories."""

    @pytest.fixture
    def alice_on_db(self, client, alice, user_repo, linker, notification_service):
        from api.dependencies import get_container
        from modules.ious.repository import IOURepository
        from modules.ious.service import IOUService

        get_container()._iou_service = IOUService(
            IOURepository(uuid_rejecting_db()), user_repo, linker, notification_service
        )
        return alice

    def test_get(self, client, alice_on_db):
        response = client.get("/api/ious/not-a-uuid", headers=alice_on_db)
        assert response.status_code == 404
        assert response.json()["error"] == "IOU_NOT_FOUND"

    def test_claim(self, client, alice_on_db):
        response = client.post("/api/ious/not-a-uuid/claim", headers=alice_on_db)
        assert response.status_code == 404

    def test_mark_repaid(self, client, alice_on_db):
        response = client.patch("/api/ious/not-a-uuid", json={"action": "repaid"}, headers=alice_on_db)
        assert response.status_code == 404

    def test_archive(self, client, alice_on_db):
        response = client.post("/api/ious/not-a-uuid/archive", headers=alice_on_db)
        assert response.status_code == 404

    def test_unknown_recipient_id(self, client, alice):
        response = client.post(
            "/api/ious", json={"to_user_id": "not-a-uuid", "description": "lunch"}, headers=alice
        )
        assert response.status_code == 404
        assert response.json()["error"] == "RECIPIENT_NOT_FOUND"
