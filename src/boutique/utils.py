from datetime import UTC, datetime
from uuid import UUID

from boutique.errors import InvalidIdError


def now() -> datetime:
    return datetime.now(UTC)


def parse_id(value: str) -> UUID:
    """Parse a path identifier, raising InvalidIdError when it is not a UUID."""
    try:
        return UUID(value)
    except (ValueError, TypeError):
        raise InvalidIdError(value) from None
