from fastapi import APIRouter
from pydantic import BaseModel, Field

from boutique.web.deps import AppDep
from boutique.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class TokenRequest(BaseModel):
    """Token request for a registered email."""

    email: str = Field("", description="Email of a registered user")


class TokenResponse(BaseModel):
    """Token response."""

    token: str = Field(..., description="Bearer token for subsequent requests, valid for 7 days")


@router.post(
    "/jwt",
    summary="Issue token",
    description="Issue a bearer token for a registered email.",
    operation_id="issueToken",
    responses={
        200: {"description": "Token issued"},
        400: {"model": ErrorResponse, "description": "Email missing"},
        401: {"model": ErrorResponse, "description": "Email not registered"},
    },
)
async def issue_token(token_request: TokenRequest, app: AppDep) -> TokenResponse:
    token = await app.issue_token(token_request.email)
    return TokenResponse(token=token)
