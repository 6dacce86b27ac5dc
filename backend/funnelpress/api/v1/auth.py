"""
Authentication endpoints.

Login happens within the tenant named by the X-Tenant-Id header; the issued
token is only accepted for that tenant.
"""
from fastapi import APIRouter

from funnelpress.core.deps import CurrentUser, QueriesDep
from funnelpress.core.exceptions import AuthenticationError
from funnelpress.core.security import create_access_token, verify_password
from funnelpress.schemas.auth import AuthResponse, LoginRequest, UserResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, queries: QueriesDep) -> AuthResponse:
    """Authenticate user and return access token."""
    user = await queries.user_queries.get_by_email(request.email)
    if user is None or not verify_password(request.password, user.password_hash):
        raise AuthenticationError("Invalid email or password")

    await queries.user_queries.update_last_login(user.id)
    await queries.log_activity("login", "user", user.id, user_id=user.id)

    access_token = create_access_token(
        data={"sub": str(user.id), "tenant_id": user.tenant_id}
    )

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Get current user information."""
    return UserResponse.model_validate(current_user)
