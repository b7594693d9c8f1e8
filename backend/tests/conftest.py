"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
in-memory repositories, services wired to them, and a FastAPI TestClient
whose DI container points at the same fakes.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_container, reset_container
from modules.auth.service import SessionService, reset_session_service
from modules.ious.linking import IdentityLinker
from modules.ious.service import IOUService
from modules.notifications.service import NotificationService
from modules.ratelimit.service import RateLimitService
from modules.uploads.service import UploadService
from modules.users.service import CredentialService
from shared.config import get_settings

from tests.fakes import (
    FakeIOURepository,
    FakeNotificationRepository,
    FakeObjectStorage,
    FakeUserRepository,
)

# Test session secret (only for testing)
TEST_SESSION_SECRET = "test-session-secret-for-testing-only"

TEST_PIN = "123456"


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset settings, session and container singletons around each test."""
    get_settings.cache_clear()
    reset_session_service()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_session_service()
    reset_container()


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def iou_repo(user_repo: FakeUserRepository) -> FakeIOURepository:
    return FakeIOURepository(user_repo)


@pytest.fixture
def notification_repo() -> FakeNotificationRepository:
    return FakeNotificationRepository()


@pytest.fixture
def storage() -> FakeObjectStorage:
    return FakeObjectStorage()


@pytest.fixture
def linker(iou_repo, user_repo) -> IdentityLinker:
    return IdentityLinker(iou_repo, user_repo)


@pytest.fixture
def notification_service(notification_repo) -> NotificationService:
    return NotificationService(notification_repo)


@pytest.fixture
def credential_service(user_repo, linker) -> CredentialService:
    return CredentialService(user_repo, linker=linker)


@pytest.fixture
def iou_service(iou_repo, user_repo, linker, notification_service) -> IOUService:
    return IOUService(iou_repo, user_repo, linker, notification_service)


@pytest.fixture
def session_service() -> SessionService:
    return SessionService(TEST_SESSION_SECRET, ttl_days=30)


@pytest.fixture
def client(
    monkeypatch,
    user_repo,
    iou_repo,
    notification_repo,
    storage,
    linker,
    credential_service,
    notification_service,
    iou_service,
    session_service,
):
    """
    TestClient for a fresh app whose container is wired to the fakes.

    Rate limiting runs without Redis, so every check is allowed.
    """
    monkeypatch.setenv("SESSION_SECRET", TEST_SESSION_SECRET)
    monkeypatch.setenv("SESSION_COOKIE_SECURE", "false")
    monkeypatch.setenv("REDIS_URL", "")
    get_settings.cache_clear()

    container = get_container()
    container._user_repository = user_repo
    container._iou_repository = iou_repo
    container._notification_repository = notification_repo
    container._object_storage = storage
    container._linker = linker
    container._credential_service = credential_service
    container._notification_service = notification_service
    container._iou_service = iou_service
    container._session_service = session_service
    container._rate_limiter = RateLimitService(None, get_settings())
    container._upload_service = UploadService(storage, max_bytes=1024)

    from api.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


def signup(client: TestClient, phone: str, name: str, pin: str = TEST_PIN) -> dict[str, str]:
    """
    Sign up through the API and return Bearer headers for the new session.

    The session cookie is cleared so each request authenticates explicitly.
    """
    response = client.post(
        "/api/auth/signup",
        json={"phone": phone, "display_name": name, "pin": pin},
    )
    assert response.status_code == 201, response.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}
