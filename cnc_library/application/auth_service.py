"""Authentication session.

Holds the logged-in user, keeps the API client's bearer token in sync and
gates dealer/admin surfaces by role on the client side. The backend
remains the authority on what a role may actually do.
"""

import structlog

from cnc_library.domain import (
    AuthUser,
    NotAuthenticatedError,
    PermissionDeniedError,
    UserRole,
)
from cnc_library.infrastructure.catalog_gateway import CatalogGateway
from cnc_library.infrastructure.session_store import SessionStore

logger = structlog.get_logger()


class AuthSession:
    """The current user's session."""

    def __init__(
        self,
        gateway: CatalogGateway,
        store: SessionStore | None = None,
    ) -> None:
        """Initialize the session, restoring a stored user if there is one.

        Args:
            gateway: Backend gateway; its client receives the token.
            store: Optional persistent session storage.
        """
        self.gateway = gateway
        self.store = store
        self._user: AuthUser | None = store.load() if store else None
        self.gateway.client.set_token(self._user.token if self._user else None)

    @property
    def user(self) -> AuthUser | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def is_admin(self) -> bool:
        return self._has_role(UserRole.ADMIN)

    @property
    def is_dealer(self) -> bool:
        return self._has_role(UserRole.DEALER)

    @property
    def is_vendor(self) -> bool:
        return self._has_role(UserRole.VENDOR)

    async def login(self, username: str, password: str) -> AuthUser:
        """Log in and remember the user.

        Raises:
            CatalogAPIError: If the backend rejects the credentials.
        """
        user = await self.gateway.login(username, password)
        self._user = user
        self.gateway.client.set_token(user.token)
        if self.store:
            self.store.save(user)
        logger.info("Logged in", username=user.username, role=user.role.value)
        return user

    def logout(self) -> None:
        """Forget the user and its token."""
        if self._user:
            logger.info("Logged out", username=self._user.username)
        self._user = None
        self.gateway.client.set_token(None)
        if self.store:
            self.store.clear()

    def require_user(self, action: str) -> AuthUser:
        """Return the logged-in user.

        Raises:
            NotAuthenticatedError: If nobody is logged in.
        """
        if self._user is None:
            raise NotAuthenticatedError(action)
        return self._user

    def require_role(self, *roles: UserRole) -> AuthUser:
        """Return the logged-in user if it holds one of roles.

        Raises:
            NotAuthenticatedError: If nobody is logged in.
            PermissionDeniedError: If the user's role is not in roles.
        """
        user = self.require_user("access this page")
        if user.role not in roles:
            raise PermissionDeniedError(user.role.value, [r.value for r in roles])
        return user

    def _has_role(self, role: UserRole) -> bool:
        return self._user is not None and self._user.role == role
