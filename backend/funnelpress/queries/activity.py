"""
Activity log writes, stamped with the factory tenant.
"""
from typing import Any

from funnelpress.models.activity import ActivityLogEntry
from funnelpress.queries.base import EntityQueries


class ActivityLogQueries(EntityQueries):
    entity = "activity_log"
    model = ActivityLogEntry

    async def log(
        self,
        action: str,
        resource_type: str,
        resource_id: str | None = None,
        details: dict[str, Any] | None = None,
        user_id: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> ActivityLogEntry:
        entry = ActivityLogEntry(
            **self._stamp(
                {
                    "user_id": user_id,
                    "action": action,
                    "resource_type": resource_type,
                    "resource_id": resource_id,
                    "details": details or {},
                    "ip_address": ip_address,
                    "user_agent": (user_agent or "")[:500] or None,
                }
            )
        )
        self.db.add(entry)
        await self.db.flush()
        return entry
