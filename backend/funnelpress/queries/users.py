"""
User queries. Every statement is filtered on the factory tenant.
"""
from funnelpress.core.security import hash_password
from funnelpress.models.base import utcnow
from funnelpress.models.user import User
from funnelpress.queries.base import EntityQueries
from funnelpress.schemas.auth import UserCreate, UserUpdate


class UserQueries(EntityQueries):
    entity = "users"
    model = User

    async def get_by_id(self, user_id: str) -> User | None:
        return await self._first(User.id == user_id)

    async def get_by_email(self, email: str) -> User | None:
        return await self._first(User.email == email.lower())

    async def get_all_by_tenant(self) -> list[User]:
        return await self._all(order_by=(User.created_at.desc(),))

    async def create(self, data: UserCreate) -> User:
        values = self._stamp(
            {
                "email": data.email.lower(),
                "password_hash": hash_password(data.password),
                "name": data.name,
                "role": data.role,
                "permissions": data.permissions,
            }
        )
        return await self._insert(User(**values), "Email already registered")

    async def update(self, user_id: str, data: UserUpdate) -> User | None:
        user = await self.get_by_id(user_id)
        if not user:
            return None
        values = data.model_dump(exclude_unset=True)
        if values.get("email"):
            values["email"] = values["email"].lower()
        return await self._patch(user, values, "Email already registered")

    async def update_password(self, user_id: str, password: str) -> bool:
        user = await self.get_by_id(user_id)
        if not user:
            return False
        await self._patch(user, {"password_hash": hash_password(password)}, "User conflict")
        return True

    async def update_last_login(self, user_id: str) -> None:
        user = await self.get_by_id(user_id)
        if user:
            user.last_login_at = utcnow()
            await self.db.flush()

    async def delete(self, user_id: str) -> bool:
        return await self._remove(await self.get_by_id(user_id))
