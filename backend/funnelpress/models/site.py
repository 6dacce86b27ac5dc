"""
Site model for publicly served marketing sites.
"""
from enum import Enum as PyEnum

from sqlalchemy import Column, DateTime, Enum, Integer, String
from sqlalchemy.orm import relationship

from funnelpress.models.base import Base, BaseModel, JSONType, TenantMixin


class SiteStatus(str, PyEnum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Site(Base, BaseModel, TenantMixin):
    """A site addressable by subdomain or custom domain.

    The tenant column records ownership only; public serving looks sites up
    without it.
    """

    __tablename__ = "sites"

    name = Column(String(255), nullable=False)
    subdomain = Column(String(100), unique=True, nullable=True, index=True)
    domain = Column(String(255), unique=True, nullable=True, index=True)
    theme = Column(String(50), nullable=False, default="medical")
    settings = Column(JSONType, default=dict)
    brand_profile = Column(JSONType, default=dict)
    content_profile = Column(JSONType, default=dict)
    page_config = Column(JSONType, default=dict)
    status = Column(
        Enum(SiteStatus, values_callable=lambda e: [m.value for m in e]),
        default=SiteStatus.DRAFT,
        nullable=False,
        index=True,
    )
    created_by = Column(String(36), nullable=True)
    published_at = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False, default=1)

    # Relationships
    tenant = relationship("Tenant", back_populates="sites")
    articles = relationship("Article", back_populates="site", cascade="all, delete-orphan")
    pages = relationship("Page", back_populates="site", cascade="all, delete-orphan")
    widget_instances = relationship(
        "WidgetInstance", back_populates="site", cascade="all, delete-orphan"
    )
    subscribers = relationship(
        "EmailSubscriber", back_populates="site", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Site {self.name} ({self.subdomain or self.domain})>"
