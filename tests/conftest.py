"""Shared pytest fixtures."""

import copy
from collections.abc import AsyncIterator, Iterator
from datetime import timedelta
from io import BytesIO
from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from pymongo.errors import DuplicateKeyError

from boutique.app import App
from boutique.config import Config
from boutique.core.core import Core
from boutique.core.modules.token.utils import encode_token
from boutique.core.modules.upload.storage import BlobStore
from boutique.core.modules.user.models import User, UserRole
from boutique.errors import StorageError
from boutique.utils import now
from boutique.web.server import create_fastapi_app

JWT_SECRET = "test-secret"


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, expected in query.items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in expected):
                return False
        elif doc.get(key) != expected:
            return False
    return True


class FakeCursor:
    """Subset of AsyncCursor: sort() and async iteration."""

    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._docs.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
        return self

    async def __aiter__(self) -> AsyncIterator[dict[str, Any]]:
        for doc in self._docs:
            yield doc


class FakeCollection:
    """In-memory stand-in for the AsyncCollection calls the services make.

    Unique single-field indexes are enforced on insert the way MongoDB does,
    raising DuplicateKeyError; partial indexes only cover string values.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.unique_fields: dict[str, bool] = {"_id": False}  # field -> partial on strings
        self.insert_calls = 0

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False, **kwargs: Any) -> str:
        field = keys[0][0]
        if unique:
            self.unique_fields[field] = "partialFilterExpression" in kwargs
        return f"{field}_1"

    def seed(self, doc: dict[str, Any]) -> None:
        self.docs.append(copy.deepcopy(doc))

    async def insert_one(self, doc: dict[str, Any]) -> SimpleNamespace:
        self.insert_calls += 1
        for field, partial in self.unique_fields.items():
            value = doc.get(field)
            if partial and not isinstance(value, str):
                continue
            if any(existing.get(field) == value for existing in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name} index: {field}_1")
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(acknowledged=True, inserted_id=doc["_id"])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(doc) for doc in self.docs if _matches(doc, query or {})])

    async def update_one(self, query: dict[str, Any], update: dict[str, Any]) -> SimpleNamespace:
        for doc in self.docs:
            if _matches(doc, query):
                changes = update["$set"]
                modified = any(doc.get(key) != value for key, value in changes.items())
                doc.update(copy.deepcopy(changes))
                return SimpleNamespace(acknowledged=True, matched_count=1, modified_count=int(modified))
        return SimpleNamespace(acknowledged=True, matched_count=0, modified_count=0)

    async def delete_one(self, query: dict[str, Any]) -> SimpleNamespace:
        for index, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[index]
                return SimpleNamespace(acknowledged=True, deleted_count=1)
        return SimpleNamespace(acknowledged=True, deleted_count=0)

    def count(self, query: dict[str, Any] | None = None) -> int:
        return sum(1 for doc in self.docs if _matches(doc, query or {}))


class FailingBlobStore(BlobStore):
    """Blob store whose backend is always down."""

    async def store(self, content: bytes, filename: str, content_type: str) -> str:
        raise StorageError("disk full")


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config(tmp_path):
    """Create a config using the local blob store under tmp_path."""
    return Config(
        _env_file=None,
        database_url="mongodb://localhost:27017/boutique_test",
        host="127.0.0.1",
        port=5000,
        debug=True,
        jwt_secret=JWT_SECRET,
        uploads_path=str(tmp_path / "uploads"),
    )


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
def users(database):
    return database.get_collection("users")


@pytest.fixture
def products(database):
    return database.get_collection("products")


@pytest.fixture
def core(config, database):
    """Core wired to the in-memory database; tests call on_start themselves."""
    return Core(config, database=database)


@pytest.fixture
def client(config, database) -> Iterator[TestClient]:
    app_instance = App(config, database=database)
    with TestClient(create_fastapi_app(app_instance, config)) as test_client:
        yield test_client


@pytest.fixture
def failing_blob_store():
    return FailingBlobStore()


@pytest.fixture
def make_user(users):
    """Insert a user directly into the store."""

    def _make_user(email: str, role: UserRole = UserRole.USER, mobile: str | None = None) -> User:
        user = User(first_name="Test", last_name="User", email=email, mobile=mobile, role=role)
        users.seed(user.to_mongo())
        return user

    return _make_user


@pytest.fixture
def make_token():
    def _make_token(email: str, age: timedelta = timedelta(0), secret: str = JWT_SECRET) -> str:
        return encode_token(email, secret, now() - age, timedelta(days=7))

    return _make_token


@pytest.fixture
def admin_headers(make_user, make_token):
    admin = make_user("admin@example.com", role=UserRole.ADMIN)
    return {"Authorization": f"Bearer {make_token(admin.email)}"}


@pytest.fixture
def png_bytes():
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()
