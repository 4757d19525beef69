from datetime import timedelta

import structlog

from boutique.core.core import Service
from boutique.core.modules.token.models import AuthToken, TokenClaims
from boutique.core.modules.token.utils import decode_token, encode_token
from boutique.errors import ValidationError
from boutique.utils import now

logger = structlog.get_logger(__name__)


class TokenService(Service):
    """Issues and verifies stateless bearer tokens.

    Tokens cannot be revoked before they expire.
    """

    async def issue_token(self, email: str) -> AuthToken:
        """Issue a token for a registered email.

        Raises:
            ValidationError: If email is empty
            NotFoundError: If no user has this email
        """
        if not email:
            raise ValidationError("Email required")
        user = await self.core.services.user.get_user_by_email(email)
        ttl = timedelta(days=self.core.config.jwt_expires_days)
        token = encode_token(user.email, self.core.config.jwt_secret, now(), ttl)
        logger.debug("token_issued", email=user.email)
        return token

    def verify_token(self, token: str) -> TokenClaims:
        return decode_token(token, self.core.config.jwt_secret)
