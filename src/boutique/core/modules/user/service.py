from typing import Any
from uuid import UUID

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from boutique.core.core import Service
from boutique.core.modules.user.models import User, UserRole
from boutique.core.results import DeleteResult, UpdateResult
from boutique.errors import ConflictError, NotFoundError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Manages users stored in the users collection.

    Uniqueness of email and mobile is enforced by unique indexes, so concurrent
    registrations cannot both succeed; the losing insert surfaces as ConflictError.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("email", 1)], unique=True)
        # Google users and some local users have no mobile, so only string values take part in uniqueness
        await self._collection.create_index(
            [("mobile", 1)], unique=True, partialFilterExpression={"mobile": {"$type": "string"}}
        )
        await self._collection.create_index([("created_at", -1)])

    async def find_user_by_email(self, email: str) -> User | None:
        return User.from_mongo(await self._collection.find_one({"email": email}))

    async def get_user_by_email(self, email: str) -> User:
        """Get user by email, raise NotFoundError if missing."""
        user = await self.find_user_by_email(email)
        if user is None:
            raise NotFoundError(f"User '{email}' not found")
        return user

    async def get_all_users(self) -> list[User]:
        """Get all users, newest first."""
        return await User.list_cursor(self._collection.find().sort("created_at", -1))

    async def register_user(self, first_name: str, last_name: str, email: str, mobile: str | None) -> User:
        """Register a local user with role user.

        Raises:
            ConflictError: If the email or mobile is already registered
        """
        user = User(first_name=first_name, last_name=last_name, email=email, mobile=mobile)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            logger.info("user_registration_conflict", email=email)
            raise ConflictError("User already registered") from e
        logger.info("user_registered", user_id=user.id, email=email)
        return user

    async def get_or_create_google_user(self, display_name: str | None, email: str, photo: str) -> tuple[User, bool]:
        """Return the user for a Google sign-in, creating it on first sign-in.

        Returns:
            Tuple of (user, created)
        """
        existing = await self.find_user_by_email(email)
        if existing is not None:
            return existing, False

        user = User(name=display_name, email=email, photo=photo)
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError:
            # A concurrent sign-in won the insert
            return await self.get_user_by_email(email), False
        logger.info("user_registered_via_google", user_id=user.id, email=email)
        return user, True

    async def set_role(self, user_id: UUID, role: UserRole) -> UpdateResult:
        result = await self._collection.update_one({"_id": user_id}, {"$set": {"role": role}})
        logger.info("user_role_changed", user_id=user_id, role=role, matched=result.matched_count)
        return UpdateResult.from_pymongo(result)

    async def delete_user(self, user_id: UUID) -> DeleteResult:
        result = await self._collection.delete_one({"_id": user_id})
        logger.info("user_deleted", user_id=user_id, deleted=result.deleted_count)
        return DeleteResult.from_pymongo(result)

    async def get_role(self, email: str) -> UserRole:
        """Get role by email, unknown emails default to user."""
        user = await self.find_user_by_email(email)
        if user is None:
            return UserRole.USER
        return user.role
