"""
Email subscriber model.
"""
from enum import Enum as PyEnum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from funnelpress.models.base import Base, BaseModel, JSONType, utcnow


class SubscriberStatus(str, PyEnum):
    ACTIVE = "active"
    UNSUBSCRIBED = "unsubscribed"
    BOUNCED = "bounced"


class EmailSubscriber(Base, BaseModel):
    """Email signup captured on a site."""

    __tablename__ = "email_subscribers"

    site_id = Column(
        String(36),
        ForeignKey("sites.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    email = Column(String(320), nullable=False, index=True)
    name = Column(String(255), nullable=True)
    source = Column(String(100), nullable=False, default="website")
    tags = Column(JSONType, default=list)
    status = Column(
        Enum(SubscriberStatus, values_callable=lambda e: [m.value for m in e]),
        default=SubscriberStatus.ACTIVE,
        nullable=False,
    )
    ip_address = Column(String(100), nullable=True)
    user_agent = Column(Text, nullable=True)
    page_url = Column(String(2000), nullable=True)
    subscribed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    unsubscribed_at = Column(DateTime(timezone=True), nullable=True)

    site = relationship("Site", back_populates="subscribers")

    __table_args__ = (
        UniqueConstraint("site_id", "email", name="uq_subscriber_site_email"),
    )

    def __repr__(self) -> str:
        return f"<EmailSubscriber {self.email} ({self.status.value})>"
