from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from boutique.app import App
from boutique.core.modules.token.models import Principal
from boutique.core.modules.user.models import User

# Raw header so a missing header (401) can be told apart from a malformed one (403)
authorization_header = APIKeyHeader(
    name="Authorization",
    scheme_name="BearerAuth",
    description="Bearer token issued by POST /jwt",
    auto_error=False,
)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_principal(
    request: Request,
    app: Annotated[App, Depends(get_app)],
    authorization: Annotated[str | None, Depends(authorization_header)] = None,
) -> Principal:
    """Authenticate the request and attach the Principal to it."""
    principal = app.authenticate(authorization)
    request.state.principal = principal
    return principal


async def require_admin(
    app: Annotated[App, Depends(get_app)],
    principal: Annotated[Principal, Depends(get_principal)],
) -> User:
    """Elevation guard, always composed after authentication."""
    return await app.ensure_admin(principal)


async def guard_mutation(
    request: Request,
    app: Annotated[App, Depends(get_app)],
    authorization: Annotated[str | None, Depends(authorization_header)] = None,
) -> None:
    """Admin guard for mutation routes that are public unless guard_all_mutations is set."""
    if not app.config.guard_all_mutations:
        return
    principal = await get_principal(request, app, authorization)
    await app.ensure_admin(principal)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
PrincipalDep = Annotated[Principal, Depends(get_principal)]
AdminDep = Annotated[User, Depends(require_admin)]
MutationGuard = Depends(guard_mutation)
