"""
FastAPI dependencies for tenancy, authentication, and services.
"""
from typing import Annotated

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from funnelpress.core.exceptions import AuthenticationError, PermissionDenied
from funnelpress.core.security import decode_token
from funnelpress.database import get_db
from funnelpress.models.user import User, UserRole
from funnelpress.queries import Queries, create_queries
from funnelpress.services.analytics_service import AnalyticsAggregator
from funnelpress.services.render_cache import RenderCache, get_render_cache
from funnelpress.services.subscription_service import SubscriptionService
from funnelpress.services.widget_registry import WidgetRegistry

security = HTTPBearer(auto_error=False)


async def get_tenant_id(
    x_tenant_id: Annotated[str | None, Header(alias="X-Tenant-Id")] = None,
) -> str | None:
    """Tenant carried by the request, if any."""
    if x_tenant_id and x_tenant_id.strip():
        return x_tenant_id.strip()
    return None


async def get_queries(
    db: Annotated[AsyncSession, Depends(get_db)],
    tenant_id: Annotated[str | None, Depends(get_tenant_id)],
) -> Queries:
    """Query bundle scoped to the request tenant."""
    return create_queries(db, tenant_id)


QueriesDep = Annotated[Queries, Depends(get_queries)]


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    queries: QueriesDep,
) -> User:
    """Get the current authenticated user from JWT token."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise AuthenticationError()

    if payload.get("tenant_id") != queries.tenant_id:
        raise PermissionDenied("Token does not belong to this tenant")

    user = await queries.user_queries.get_by_id(payload["sub"])
    if user is None:
        raise AuthenticationError()

    return user


def require_roles(*roles: UserRole):
    """Dependency factory for role checking."""

    async def role_checker(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if current_user.role not in roles:
            raise PermissionDenied(
                f"Role required: {', '.join(r.value for r in roles)}"
            )
        return current_user

    return role_checker


# Common dependencies
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_roles(UserRole.ADMIN))]


async def get_render_cache_dep() -> RenderCache:
    return get_render_cache()


async def get_widget_registry(
    queries: QueriesDep,
    cache: Annotated[RenderCache, Depends(get_render_cache_dep)],
) -> WidgetRegistry:
    return WidgetRegistry(queries, cache)


async def get_aggregator(queries: QueriesDep) -> AnalyticsAggregator:
    return AnalyticsAggregator(queries)


async def get_subscription_service(queries: QueriesDep) -> SubscriptionService:
    return SubscriptionService(queries)


Registry = Annotated[WidgetRegistry, Depends(get_widget_registry)]
Aggregator = Annotated[AnalyticsAggregator, Depends(get_aggregator)]
Subscriptions = Annotated[SubscriptionService, Depends(get_subscription_service)]
