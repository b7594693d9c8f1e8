"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Repositories receive the Supabase client here; services receive their
repositories and collaborators here. Nothing below the API layer reaches
for a global client.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import ISessionService
    from modules.ious.interfaces import IIOUService, IIOURepository
    from modules.ious.linking import IdentityLinker
    from modules.notifications.interfaces import INotificationService, INotificationRepository
    from modules.ratelimit.interfaces import IRateLimiter
    from modules.uploads.interfaces import IObjectStorage
    from modules.uploads.service import UploadService
    from modules.users.interfaces import ICredentialService, IUserRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Tests may assign the private attributes directly to wire in fakes,
    and use reset() to clear everything.
    """

    def __init__(self) -> None:
        self._user_repository: "IUserRepository | None" = None
        self._iou_repository: "IIOURepository | None" = None
        self._notification_repository: "INotificationRepository | None" = None
        self._object_storage: "IObjectStorage | None" = None
        self._linker: "IdentityLinker | None" = None
        self._credential_service: "ICredentialService | None" = None
        self._session_service: "ISessionService | None" = None
        self._notification_service: "INotificationService | None" = None
        self._iou_service: "IIOUService | None" = None
        self._rate_limiter: "IRateLimiter | None" = None
        self._upload_service: "UploadService | None" = None

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.users.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(get_supabase_client())
        return self._user_repository

    @property
    def iou_repository(self) -> "IIOURepository":
        """Get the IOU repository instance."""
        if self._iou_repository is None:
            from modules.ious.repository import IOURepository
            from shared.database import get_supabase_client
            self._iou_repository = IOURepository(get_supabase_client())
        return self._iou_repository

    @property
    def notification_repository(self) -> "INotificationRepository":
        """Get the notification repository instance."""
        if self._notification_repository is None:
            from modules.notifications.repository import NotificationRepository
            from shared.database import get_supabase_client
            self._notification_repository = NotificationRepository(get_supabase_client())
        return self._notification_repository

    @property
    def object_storage(self) -> "IObjectStorage":
        """Get the object storage instance."""
        if self._object_storage is None:
            from modules.uploads.storage import SupabaseObjectStorage
            from shared.config import get_settings
            from shared.database import get_supabase_client
            self._object_storage = SupabaseObjectStorage(
                get_supabase_client(),
                get_settings().supabase_storage_bucket,
            )
        return self._object_storage

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def linker(self) -> "IdentityLinker":
        """Get the identity linker instance."""
        if self._linker is None:
            from modules.ious.linking import IdentityLinker
            self._linker = IdentityLinker(self.iou_repository, self.user_repository)
        return self._linker

    @property
    def credentials(self) -> "ICredentialService":
        """Get the credential service instance."""
        if self._credential_service is None:
            from modules.users.service import CredentialService
            self._credential_service = CredentialService(
                repository=self.user_repository,
                linker=self.linker,
            )
        return self._credential_service

    @property
    def sessions(self) -> "ISessionService":
        """Get the session service instance."""
        if self._session_service is None:
            from modules.auth.service import get_session_service
            self._session_service = get_session_service()
        return self._session_service

    @property
    def notifications(self) -> "INotificationService":
        """Get the notification service instance."""
        if self._notification_service is None:
            from modules.notifications.service import NotificationService
            self._notification_service = NotificationService(self.notification_repository)
        return self._notification_service

    @property
    def ious(self) -> "IIOUService":
        """Get the IOU service instance."""
        if self._iou_service is None:
            from modules.ious.service import IOUService
            self._iou_service = IOUService(
                repository=self.iou_repository,
                users=self.user_repository,
                linker=self.linker,
                notifications=self.notifications,
            )
        return self._iou_service

    @property
    def rate_limiter(self) -> "IRateLimiter":
        """Get the rate limiter instance."""
        if self._rate_limiter is None:
            from modules.ratelimit.service import RateLimitService, create_redis_client
            from shared.config import get_settings
            settings = get_settings()
            self._rate_limiter = RateLimitService(create_redis_client(settings.redis_url), settings)
        return self._rate_limiter

    @property
    def uploads(self) -> "UploadService":
        """Get the upload service instance."""
        if self._upload_service is None:
            from modules.uploads.service import UploadService
            from shared.config import get_settings
            self._upload_service = UploadService(
                self.object_storage,
                max_bytes=get_settings().upload_max_bytes,
            )
        return self._upload_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._user_repository = None
        self._iou_repository = None
        self._notification_repository = None
        self._object_storage = None
        self._linker = None
        self._credential_service = None
        self._session_service = None
        self._notification_service = None
        self._iou_service = None
        self._rate_limiter = None
        self._upload_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_credential_service() -> "ICredentialService":
    """FastAPI dependency for credential service."""
    return get_container().credentials


def get_session_service() -> "ISessionService":
    """FastAPI dependency for session service."""
    return get_container().sessions


def get_iou_service() -> "IIOUService":
    """FastAPI dependency for IOU service."""
    return get_container().ious


def get_notification_service() -> "INotificationService":
    """FastAPI dependency for notification service."""
    return get_container().notifications


def get_rate_limiter() -> "IRateLimiter":
    """FastAPI dependency for the rate limiter."""
    return get_container().rate_limiter


def get_upload_service() -> "UploadService":
    """FastAPI dependency for upload service."""
    return get_container().uploads
