"""Signing and verification of bearer tokens."""

from datetime import datetime, timedelta

import jwt

from boutique.core.modules.token.models import AuthToken, TokenClaims
from boutique.errors import InvalidTokenError

ALGORITHM = "HS256"


def encode_token(email: str, secret: str, issued_at: datetime, ttl: timedelta) -> AuthToken:
    """Sign a token embedding the email, valid for ttl from issued_at."""
    payload = {"email": email, "iat": issued_at, "exp": issued_at + ttl}
    return AuthToken(jwt.encode(payload, secret, algorithm=ALGORITHM))


def decode_token(token: str, secret: str) -> TokenClaims:
    """Verify signature and expiry, return the claims.

    Raises:
        InvalidTokenError: If the token is expired, malformed or badly signed
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM], options={"require": ["email", "iat", "exp"]})
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("Token expired") from None
    except jwt.InvalidTokenError:
        raise InvalidTokenError("Invalid token") from None
    return TokenClaims.model_validate(payload)
