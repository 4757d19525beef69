from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from boutique.app import App
from boutique.config import Config
from boutique.core.modules.upload.storage import UPLOADS_URL_PREFIX
from boutique.errors import StorageError, UserError
from boutique.web.error_handlers import (
    general_exception_handler,
    request_validation_error_handler,
    storage_error_handler,
    user_error_handler,
)
from boutique.web.openapi import set_custom_openapi
from boutique.web.routers import auth_router, products_router, users_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Boutique API",
        lifespan=lifespan,
    )
    # Available before lifespan runs so dependencies work in every test client mode
    app.state.app = app_instance
    app.state.config = config

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"message": "Server is running"}

    app.include_router(auth_router)
    app.include_router(products_router)
    app.include_router(users_router)

    if config.storage_backend == "local":
        Path(config.uploads_path).mkdir(parents=True, exist_ok=True)
        app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=config.uploads_path), name="uploads")

    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
