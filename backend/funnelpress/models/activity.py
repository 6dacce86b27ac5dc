"""
Activity log model.
"""
from sqlalchemy import Column, DateTime, String, func

from funnelpress.models.base import Base, JSONType, UUIDMixin, utcnow


class ActivityLogEntry(Base, UUIDMixin):
    """Append-only audit trail, stamped with the acting tenant when known."""

    __tablename__ = "activity_log"

    tenant_id = Column(String(36), nullable=True, index=True)
    user_id = Column(String(36), nullable=True)
    action = Column(String(100), nullable=False)
    resource_type = Column(String(100), nullable=False)
    resource_id = Column(String(100), nullable=True)
    details = Column(JSONType, default=dict)
    ip_address = Column(String(100), nullable=True)
    user_agent = Column(String(500), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ActivityLogEntry {self.action} {self.resource_type}>"
