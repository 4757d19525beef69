import structlog

from boutique.core.core import Service
from boutique.core.modules.token.models import Principal
from boutique.core.modules.user.models import User, UserRole
from boutique.errors import AccessDeniedError, AuthenticationError

logger = structlog.get_logger(__name__)

BEARER_SCHEME = "bearer"


class AccessService(Service):
    """Request guards: authentication by bearer token and admin elevation."""

    def authenticate(self, authorization: str | None) -> Principal:
        """Verify the Authorization header value and return the Principal.

        Raises:
            AuthenticationError: If no Authorization header was sent
            AccessDeniedError: If the header is not a valid bearer token
        """
        if not authorization:
            raise AuthenticationError
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != BEARER_SCHEME or not token.strip():
            raise AccessDeniedError
        return self.core.services.token.verify_token(token.strip())

    async def ensure_admin(self, principal: Principal | None) -> User:
        """Ensure the principal belongs to an admin user.

        Must run after authenticate; a missing principal is a wiring bug, not a client error.
        """
        if principal is None:
            raise RuntimeError("ensure_admin called without an authenticated principal")

        user = await self.core.services.user.find_user_by_email(principal.email)
        if user is None:
            logger.info("access_denied", email=principal.email, reason="unknown_user")
            raise AccessDeniedError("Admin only access")

        match user.role:
            case UserRole.ADMIN:
                return user
            case UserRole.USER:
                logger.info("access_denied", email=principal.email, reason="not_admin")
                raise AccessDeniedError("Admin only access")
