from fastapi import APIRouter
from pydantic import Field

from boutique.core.modules.user.models import UserRole, UserView
from boutique.core.results import ApiModel, DeleteResult, UpdateResult
from boutique.web.deps import AppDep, MutationGuard
from boutique.web.openapi import ErrorResponse

router = APIRouter(tags=["users"])


class RegisterRequest(ApiModel):
    """Request to register a local user."""

    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    email: str = Field(..., min_length=1, description="Email address, unique")
    mobile: str | None = Field(None, min_length=1, description="Mobile number, unique when given")


class GoogleLoginRequest(ApiModel):
    """Profile returned by Google sign-in."""

    display_name: str | None = Field(None, description="Google display name")
    email: str = Field(..., min_length=1, description="Google account email")
    photo_url: str | None = Field(None, alias="photoURL", description="Google profile photo URL")


class UserResponse(ApiModel):
    """Outcome of a registration or sign-in."""

    success: bool = Field(..., description="Whether the user is registered")
    message: str = Field(..., description="Human-readable outcome")
    user: UserView | None = Field(None, description="The registered user")


class UsersResponse(ApiModel):
    success: bool = Field(True, description="Always true")
    users: list[UserView] = Field(..., description="Users, newest first")


class RoleResponse(ApiModel):
    role: UserRole = Field(..., description="User role")


@router.post(
    "/register",
    summary="Register user",
    description="Register a local user. An email or mobile already in use yields success=false.",
    operation_id="registerUser",
    responses={200: {"description": "Registration outcome"}},
)
async def register(register_data: RegisterRequest, app: AppDep) -> UserResponse:
    user = await app.register_user(
        register_data.first_name, register_data.last_name, register_data.email, register_data.mobile
    )
    if user is None:
        return UserResponse(success=False, message="User already registered")
    return UserResponse(success=True, message="User registered successfully", user=user)


@router.post(
    "/google-login",
    summary="Google sign-in",
    description="Return the user for a Google account, registering it on first sign-in.",
    operation_id="googleLogin",
    responses={200: {"description": "Signed-in user"}},
)
async def google_login(login_data: GoogleLoginRequest, app: AppDep) -> UserResponse:
    user, created = await app.google_login(login_data.display_name, login_data.email, login_data.photo_url)
    message = "User registered via Google" if created else "User already exists"
    return UserResponse(success=True, message=message, user=user)


@router.get(
    "/users",
    summary="List all users",
    description="Get all users, newest first.",
    operation_id="listUsers",
    responses={200: {"description": "List of all users"}},
)
async def list_users(app: AppDep) -> UsersResponse:
    return UsersResponse(users=await app.get_all_users())


@router.get(
    "/users/role/{email}",
    summary="Get user role",
    description="Get the role of a user by email. Unknown emails report role 'user'.",
    operation_id="getUserRole",
    responses={200: {"description": "User role"}},
)
async def get_user_role(email: str, app: AppDep) -> RoleResponse:
    return RoleResponse(role=await app.get_user_role(email))


@router.patch(
    "/users/admin/{user_id}",
    summary="Promote to admin",
    description="Give a user the admin role.",
    operation_id="makeAdmin",
    dependencies=[MutationGuard],
    responses={
        200: {"description": "Update result"},
        400: {"model": ErrorResponse, "description": "Malformed user ID"},
    },
)
async def make_admin(user_id: str, app: AppDep) -> UpdateResult:
    return await app.make_admin(user_id)


@router.patch(
    "/users/remove-admin/{user_id}",
    summary="Demote to user",
    description="Set a user's role back to user.",
    operation_id="removeAdmin",
    dependencies=[MutationGuard],
    responses={
        200: {"description": "Update result"},
        400: {"model": ErrorResponse, "description": "Malformed user ID"},
    },
)
async def remove_admin(user_id: str, app: AppDep) -> UpdateResult:
    return await app.remove_admin(user_id)


@router.delete(
    "/users/{user_id}",
    summary="Delete user",
    description="Delete a user account.",
    operation_id="deleteUser",
    dependencies=[MutationGuard],
    responses={
        200: {"description": "Delete result"},
        400: {"model": ErrorResponse, "description": "Malformed user ID"},
    },
)
async def delete_user(user_id: str, app: AppDep) -> DeleteResult:
    return await app.delete_user(user_id)
