import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from boutique.errors import (
    AccessDeniedError,
    AuthenticationError,
    ConflictError,
    InvalidIdError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    """Create JSON error response with a type for machine parsing."""
    return JSONResponse(status_code=status_code, content={"success": False, "error": message, "type": error_type})


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, AuthenticationError):
        status_code = 401
        error_type = "authentication_error"
    elif isinstance(exc, AccessDeniedError):
        status_code = 403
        error_type = "access_denied"
    elif isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, InvalidIdError):
        status_code = 400
        error_type = "invalid_id"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    elif isinstance(exc, ConflictError):
        status_code = 409
        error_type = "conflict"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Handle malformed request bodies and parameters (400) with the common error body."""
    problems = exc.errors() if isinstance(exc, RequestValidationError) else []
    details = "; ".join(".".join(str(part) for part in problem["loc"]) + f": {problem['msg']}" for problem in problems)
    return create_json_error_response(
        status_code=400, message=f"Invalid request: {details}" if details else "Invalid request", error_type="validation_error"
    )


async def storage_error_handler(_: Request, exc: Exception) -> Response:
    """Handle blob store failures (502)."""
    logger.error("storage_failed", error=str(exc))
    return create_json_error_response(status_code=502, message="Could not store uploaded file.", error_type="storage_error")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", error=str(exc))
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
