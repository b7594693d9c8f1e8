"""
Tests for authentication API endpoints.

Runs the real credential and session services over in-memory repositories.
"""

from modules.users.pins import hash_pin

from tests.conftest import TEST_PIN, signup


class TestCheckPhone:
    """Tests for POST /api/auth/check"""

    def test_unknown_phone_signs_up(self, client):
        response = client.post("/api/auth/check", json={"phone": "555-123-4567"})
        assert response.status_code == 200
        assert response.json() == {"action": "signup", "needs_pin": True}

    def test_pinless_account_looks_like_signup(self, client, user_repo):
        """An account without a PIN is indistinguishable from no account."""
        user_repo.add("5551234567", "Legacy")
        response = client.post("/api/auth/check", json={"phone": "5551234567"})
        assert response.json() == {"action": "signup", "needs_pin": True}

    def test_account_with_pin_logs_in(self, client):
        signup(client, "5551234567", "Bo")
        response = client.post("/api/auth/check", json={"phone": "+1 555 123 4567"})
        assert response.json() == {"action": "login", "needs_pin": False}

    def test_invalid_phone(self, client):
        response = client.post("/api/auth/check", json={"phone": "no digits"})
        assert response.status_code == 400


class TestSignup:
    """Tests for POST /api/auth/signup"""

    def test_signup_issues_session(self, client):
        response = client.post(
            "/api/auth/signup",
            json={"phone": "(555) 123-4567", "display_name": "Bo", "pin": TEST_PIN},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["phone"] == "5551234567"
        assert data["user"]["display_name"] == "Bo"
        assert "pin_hash" not in data["user"]
        assert data["token"]
        assert data["needs_pin_upgrade"] is False
        assert response.cookies.get("session") == data["token"]

    def test_duplicate_phone(self, client):
        signup(client, "5551234567", "Bo")
        response = client.post(
            "/api/auth/signup",
            json={"phone": "5551234567", "display_name": "Again", "pin": "654321"},
        )
        assert response.status_code == 409
        assert response.json()["error"] == "PHONE_ALREADY_REGISTERED"

    def test_short_pin_rejected(self, client):
        response = client.post(
            "/api/auth/signup",
            json={"phone": "5551234567", "display_name": "Bo", "pin": "1234"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_PIN_FORMAT"

    def test_signup_on_pinless_account_sets_pin(self, client, user_repo):
        legacy = user_repo.add("5551234567", "Legacy")

        response = client.post(
            "/api/auth/signup",
            json={"phone": "5551234567", "display_name": "  Lee  ", "pin": TEST_PIN},
        )

        assert response.status_code == 201
        assert response.json()["user"]["id"] == legacy.id
        assert response.json()["user"]["display_name"] == "Lee"
        assert user_repo.get_by_id(legacy.id).has_pin
        assert user_repo.get_by_id(legacy.id).display_name == "Lee"

    def test_fullwidth_phone_is_invalid(self, client):
        response = client.post(
            "/api/auth/signup",
            json={"phone": "５５５１２３４５６７", "display_name": "Bo", "pin": TEST_PIN},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_PHONE"


class TestLogin:
    """Tests for POST /api/auth/login"""

    def test_login(self, client):
        signup(client, "5551234567", "Bo")
        response = client.post("/api/auth/login", json={"phone": "5551234567", "pin": TEST_PIN})
        assert response.status_code == 200
        assert response.json()["needs_pin_upgrade"] is False

    def test_wrong_pin_and_unknown_phone_look_the_same(self, client):
        signup(client, "5551234567", "Bo")

        wrong_pin = client.post("/api/auth/login", json={"phone": "5551234567", "pin": "000000"})
        unknown = client.post("/api/auth/login", json={"phone": "5559999999", "pin": TEST_PIN})

        assert wrong_pin.status_code == unknown.status_code == 401
        assert wrong_pin.json() == unknown.json()
        assert wrong_pin.json()["message"] == "Invalid phone or PIN"

    def test_legacy_pin_flags_upgrade(self, client, user_repo):
        user_repo.add("5551234567", "Legacy", hash_pin("1234"))
        response = client.post("/api/auth/login", json={"phone": "5551234567", "pin": "1234"})
        assert response.status_code == 200
        assert response.json()["needs_pin_upgrade"] is True


class TestSetPin:
    """Tests for POST /api/auth/set-pin"""

    def test_set_first_pin(self, client, user_repo):
        user_repo.add("5551234567", "Legacy")
        response = client.post("/api/auth/set-pin", json={"phone": "5551234567", "pin": TEST_PIN})
        assert response.status_code == 200
        assert response.json()["token"]

    def test_account_with_pin_is_refused(self, client):
        signup(client, "5551234567", "Bo")
        response = client.post("/api/auth/set-pin", json={"phone": "5551234567", "pin": "999999"})
        assert response.status_code == 401


class TestUpgradePin:
    """Tests for POST /api/auth/upgrade-pin"""

    def _legacy_login(self, client, user_repo) -> dict[str, str]:
        user_repo.add("5551234567", "Legacy", hash_pin("1234"))
        response = client.post("/api/auth/login", json={"phone": "5551234567", "pin": "1234"})
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['token']}"}

    def test_upgrade(self, client, user_repo):
        headers = self._legacy_login(client, user_repo)

        response = client.post(
            "/api/auth/upgrade-pin",
            json={"current_pin": "1234", "new_pin": "123456"},
            headers=headers,
        )

        assert response.status_code == 200
        login = client.post("/api/auth/login", json={"phone": "5551234567", "pin": "123456"})
        assert login.status_code == 200

    def test_wrong_current_pin(self, client, user_repo):
        headers = self._legacy_login(client, user_repo)
        response = client.post(
            "/api/auth/upgrade-pin",
            json={"current_pin": "9999", "new_pin": "123456"},
            headers=headers,
        )
        assert response.status_code == 401
        assert response.json()["error"] == "INCORRECT_PIN"

    def test_requires_session(self, client):
        response = client.post(
            "/api/auth/upgrade-pin",
            json={"current_pin": "1234", "new_pin": "123456"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "MISSING_TOKEN"


class TestMeAndLogout:
    """Tests for GET /api/auth/me and POST /api/auth/logout"""

    def test_me_with_bearer(self, client):
        headers = signup(client, "5551234567", "Bo")
        response = client.get("/api/auth/me", headers=headers)
        assert response.json()["user"]["display_name"] == "Bo"

    def test_me_with_cookie(self, client):
        client.post(
            "/api/auth/signup",
            json={"phone": "5551234567", "display_name": "Bo", "pin": TEST_PIN},
        )
        response = client.get("/api/auth/me")
        assert response.json()["user"]["phone"] == "5551234567"

    def test_me_anonymous(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 200
        assert response.json() == {"user": None}

    def test_me_with_invalid_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer nope"})
        assert response.json() == {"user": None}

    def test_logout_clears_cookie(self, client):
        client.post(
            "/api/auth/signup",
            json={"phone": "5551234567", "display_name": "Bo", "pin": TEST_PIN},
        )
        response = client.post("/api/auth/logout")
        assert response.status_code == 200
        assert client.get("/api/auth/me").json() == {"user": None}


class TestAuthRateLimit:
    """Credential endpoints are rate limited before any PIN check."""

    def test_rejected_attempt_returns_429(self, client, monkeypatch):
        from api.dependencies import get_container
        from modules.ratelimit.models import RateLimitResult

        limiter = get_container().rate_limiter

        async def closed(phone):
            return RateLimitResult(allowed=False, remaining=0, reset_at_ms=0)

        monkeypatch.setattr(limiter, "check_auth_attempt", closed)

        response = client.post("/api/auth/login", json={"phone": "5551234567", "pin": TEST_PIN})

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "1"
        assert response.json()["error"] == "RATE_LIMITED"
