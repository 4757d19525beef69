from collections.abc import AsyncGenerator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any

from pymongo.asynchronous.database import AsyncDatabase

from boutique.config import Config
from boutique.core.core import Core
from boutique.core.modules.product.models import ProductView
from boutique.core.modules.product.validators import parse_price, parse_size
from boutique.core.modules.token.models import AuthToken, Principal
from boutique.core.modules.upload.models import IncomingFile
from boutique.core.modules.upload.storage import BlobStore
from boutique.core.modules.user.models import User, UserRole, UserView
from boutique.core.results import DeleteResult, InsertResult, UpdateResult
from boutique.errors import AuthenticationError, ConflictError, NotFoundError
from boutique.utils import parse_id


class App:
    """Facade for all application operations, applies guards before delegating to Core."""

    def __init__(
        self,
        config: Config,
        database: AsyncDatabase[dict[str, Any]] | None = None,
        blob_store: BlobStore | None = None,
    ) -> None:
        self._core = Core(config, database=database, blob_store=blob_store)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Guards ===
    def authenticate(self, authorization: str | None) -> Principal:
        """Verify the Authorization header and return the Principal."""
        return self._core.services.access.authenticate(authorization)

    async def ensure_admin(self, principal: Principal | None) -> User:
        """Ensure the Principal belongs to an admin user."""
        return await self._core.services.access.ensure_admin(principal)

    # === Tokens ===
    async def issue_token(self, email: str) -> AuthToken:
        """Issue a bearer token for a registered email."""
        try:
            return await self._core.services.token.issue_token(email)
        except NotFoundError:
            raise AuthenticationError("Unauthorized") from None

    # === Products ===
    async def create_product(
        self,
        title: str,
        price: str,
        size: str,
        description: str,
        files: Mapping[str, Sequence[IncomingFile]],
        base_url: str,
    ) -> InsertResult:
        """Create a product with uploaded photos. Callers must have passed the admin guard."""
        parsed_price = parse_price(price)
        parsed_size = parse_size(size)
        images = await self._core.services.upload.ingest(files, base_url)
        return await self._core.services.product.create_product(title, parsed_price, description, parsed_size, images)

    async def get_all_products(self) -> list[ProductView]:
        products = await self._core.services.product.get_all_products()
        return [ProductView.from_domain(product) for product in products]

    async def get_product(self, product_id: str) -> ProductView:
        product = await self._core.services.product.get_product(parse_id(product_id))
        return ProductView.from_domain(product)

    async def update_product(self, product_id: str, title: str, price: Any, description: str, size: Any) -> UpdateResult:
        return await self._core.services.product.update_product(
            parse_id(product_id), title, parse_price(price), description, parse_size(size)
        )

    async def delete_product(self, product_id: str) -> DeleteResult:
        return await self._core.services.product.delete_product(parse_id(product_id))

    # === Users ===
    async def register_user(self, first_name: str, last_name: str, email: str, mobile: str | None) -> UserView | None:
        """Register a local user. Returns None when the email or mobile is taken."""
        try:
            user = await self._core.services.user.register_user(first_name, last_name, email, mobile)
        except ConflictError:
            return None
        return UserView.from_domain(user)

    async def google_login(self, display_name: str | None, email: str, photo_url: str | None) -> tuple[UserView, bool]:
        """Return the user for a Google sign-in and whether it was just created."""
        user, created = await self._core.services.user.get_or_create_google_user(display_name, email, photo_url or "")
        return UserView.from_domain(user), created

    async def get_all_users(self) -> list[UserView]:
        users = await self._core.services.user.get_all_users()
        return [UserView.from_domain(user) for user in users]

    async def make_admin(self, user_id: str) -> UpdateResult:
        return await self._core.services.user.set_role(parse_id(user_id), UserRole.ADMIN)

    async def remove_admin(self, user_id: str) -> UpdateResult:
        return await self._core.services.user.set_role(parse_id(user_id), UserRole.USER)

    async def delete_user(self, user_id: str) -> DeleteResult:
        return await self._core.services.user.delete_user(parse_id(user_id))

    async def get_user_role(self, email: str) -> UserRole:
        """Get role by email, unknown emails report role user."""
        return await self._core.services.user.get_role(email)
