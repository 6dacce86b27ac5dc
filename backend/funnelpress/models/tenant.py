"""
Tenant model for multi-tenancy.
"""
from enum import Enum as PyEnum

from sqlalchemy import Column, Enum, Integer, String
from sqlalchemy.orm import relationship

from funnelpress.models.base import Base, BaseModel, JSONType


class SubscriptionTier(str, PyEnum):
    STARTER = "starter"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class Tenant(Base, BaseModel):
    """Administrative owner of sites and users."""

    __tablename__ = "tenants"

    name = Column(String(255), nullable=False)
    subscription_tier = Column(
        Enum(SubscriptionTier, values_callable=lambda e: [m.value for m in e]),
        default=SubscriptionTier.STARTER,
        nullable=False,
    )
    settings = Column(JSONType, default=dict)
    max_sites = Column(Integer, default=10)
    max_users = Column(Integer, default=5)

    # Relationships
    users = relationship("User", back_populates="tenant")
    sites = relationship("Site", back_populates="tenant")

    def __repr__(self) -> str:
        return f"<Tenant {self.name} ({self.subscription_tier})>"
