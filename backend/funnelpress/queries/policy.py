"""
Tenant isolation policy per entity.

Isolation is intentionally not uniform: admin users are private to a tenant,
while published content must be reachable by any visitor regardless of which
tenant (if any) the request carries.
"""
from enum import Enum


class IsolationPolicy(str, Enum):
    # Every read and write filters on tenant_id; a missing tenant means
    # "tenant_id IS NULL", never "all tenants".
    TENANT_SCOPED = "tenant_scoped"
    # No tenant filter.
    UNSCOPED = "unscoped"
    # Reads unfiltered; writes record the factory's tenant.
    TENANT_STAMPED = "tenant_stamped"


ISOLATION_POLICIES: dict[str, IsolationPolicy] = {
    "users": IsolationPolicy.TENANT_SCOPED,
    "sites": IsolationPolicy.UNSCOPED,
    "articles": IsolationPolicy.UNSCOPED,
    "pages": IsolationPolicy.UNSCOPED,
    "emails": IsolationPolicy.UNSCOPED,
    "widgets": IsolationPolicy.UNSCOPED,
    "analytics": IsolationPolicy.UNSCOPED,
    "navigation_templates": IsolationPolicy.UNSCOPED,
    "activity_log": IsolationPolicy.TENANT_STAMPED,
}


def policy_for(entity: str) -> IsolationPolicy:
    try:
        return ISOLATION_POLICIES[entity]
    except KeyError:
        raise LookupError(f"No isolation policy declared for '{entity}'") from None
