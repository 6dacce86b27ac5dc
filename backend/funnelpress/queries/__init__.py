"""
Tenant-aware data access for FunnelPress.
"""
from funnelpress.queries.factory import Queries, create_queries
from funnelpress.queries.policy import ISOLATION_POLICIES, IsolationPolicy

__all__ = [
    "Queries",
    "create_queries",
    "ISOLATION_POLICIES",
    "IsolationPolicy",
]
