from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from boutique.config import Config
from boutique.core.modules.upload.storage import BlobStore, create_blob_store

logger = structlog.get_logger(__name__)


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from boutique.core.modules.access.service import AccessService  # noqa: PLC0415
    from boutique.core.modules.product.service import ProductService  # noqa: PLC0415
    from boutique.core.modules.token.service import TokenService  # noqa: PLC0415
    from boutique.core.modules.upload.service import UploadService  # noqa: PLC0415
    from boutique.core.modules.user.service import UserService  # noqa: PLC0415

    user: UserService
    token: TokenService
    access: AccessService
    upload: UploadService
    product: ProductService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._database = database

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for initialization - user must be first
        service_configs = [
            ("user", "boutique.core.modules.user.service", "UserService"),
            ("token", "boutique.core.modules.token.service", "TokenService"),
            ("access", "boutique.core.modules.access.service", "AccessService"),
            ("upload", "boutique.core.modules.upload.service", "UploadService"),
            ("product", "boutique.core.modules.product.service", "ProductService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, the document store, the blob store and all service instances.

    Both stores can be injected; otherwise they are built from config. A MongoDB
    client is only closed on shutdown when Core created it.
    """

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    database: AsyncDatabase[dict[str, Any]]
    blob_store: BlobStore
    services: Services

    def __init__(
        self,
        config: Config,
        database: AsyncDatabase[dict[str, Any]] | None = None,
        blob_store: BlobStore | None = None,
    ) -> None:
        self.config = config
        if database is None:
            self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard")
            database = self.mongo_client.get_database(urlparse(config.database_url).path[1:] or "fashionDB")
        else:
            self.mongo_client = None
        self.database = database
        self.blob_store = blob_store if blob_store is not None else create_blob_store(config)
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services on application startup."""
        await self.services.start_all()
        logger.info("core_started", blob_store=type(self.blob_store).__name__)

    async def on_stop(self) -> None:
        """Stop services and close MongoDB connection on shutdown."""
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
