"""
Tenant user management. Admin only.
"""
from fastapi import APIRouter, status

from funnelpress.core.deps import AdminUser, QueriesDep
from funnelpress.core.exceptions import ConflictError, NotFoundError, ValidationError
from funnelpress.schemas.auth import UserCreate, UserEnvelope, UserListEnvelope, UserResponse
from funnelpress.schemas.common import SuccessResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UserListEnvelope)
async def list_users(queries: QueriesDep, current_user: AdminUser):
    users = await queries.user_queries.get_all_by_tenant()
    return UserListEnvelope(users=[UserResponse.model_validate(u) for u in users])


@router.post("", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def create_user(data: UserCreate, queries: QueriesDep, current_user: AdminUser):
    if await queries.user_queries.get_by_email(data.email):
        raise ConflictError("Email already registered")
    user = await queries.user_queries.create(data)
    await queries.log_activity("create", "user", user.id, {"email": user.email}, user_id=current_user.id)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=SuccessResponse)
async def delete_user(user_id: str, queries: QueriesDep, current_user: AdminUser):
    if user_id == current_user.id:
        raise ValidationError("You cannot delete your own account")
    if not await queries.user_queries.delete(user_id):
        raise NotFoundError("User")
    await queries.log_activity("delete", "user", user_id, user_id=current_user.id)
    return SuccessResponse()
