from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Boutique API",
            version="0.1.0",
            summary="Product catalog, customer accounts and product photo uploads",
            routes=app.routes,
        )

        # Guarded routes reference BearerAuth through their dependencies; describe it as HTTP bearer
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "Token from POST /jwt, valid for 7 days",
            },
        }

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = Field(False, description="Always false for errors")
    error: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"success": False, "error": "Unauthorized access", "type": "authentication_error"},
                {"success": False, "error": "Admin only access", "type": "access_denied"},
                {"success": False, "error": "Invalid ID: 'abc'", "type": "invalid_id"},
            ]
        }
    }
