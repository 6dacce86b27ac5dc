"""
Widget models: reusable definitions, their placements, and admin categories.
"""
from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from funnelpress.models.base import Base, BaseModel, JSONType


class WidgetCategory(Base, BaseModel):
    """Grouping for widget definitions in the admin library.

    Global categories have no site; site categories only show for that site.
    """

    __tablename__ = "widget_categories"

    site_id = Column(
        String(36),
        ForeignKey("sites.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    color_bg = Column(String(100), nullable=False, default="bg-gray-500/10")
    color_text = Column(String(100), nullable=False, default="text-gray-400")
    color_border = Column(String(100), nullable=False, default="border-gray-500/30")
    icon = Column(String(100), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_global = Column(Boolean, nullable=False, default=False)

    definitions = relationship("WidgetDefinition", back_populates="category_ref")

    def __repr__(self) -> str:
        return f"<WidgetCategory {self.slug}>"


class WidgetDefinition(Base, BaseModel):
    """Template for a widget type.

    The id is the stable type key (e.g. ``email-capture``); ``widget_type``
    selects the configuration variant the instances are validated against.
    """

    __tablename__ = "widget_definitions"

    id = Column(String(100), primary_key=True, index=True)
    widget_type = Column(String(100), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=False, default="content", index=True)
    category_id = Column(
        String(36),
        ForeignKey("widget_categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    version = Column(String(20), nullable=False, default="1.0.0")
    template = Column(Text, nullable=False)
    styles = Column(Text, nullable=True)
    script = Column(Text, nullable=True)
    default_config = Column(JSONType, default=dict)
    config_schema = Column(JSONType, default=dict)
    triggers = Column(JSONType, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    is_global = Column(Boolean, nullable=False, default=True)

    category_ref = relationship("WidgetCategory", back_populates="definitions")
    instances = relationship("WidgetInstance", back_populates="definition")

    def __repr__(self) -> str:
        return f"<WidgetDefinition {self.id} v{self.version}>"


class WidgetInstance(Base, BaseModel):
    """A definition placed on a site (page_id NULL) or on one page."""

    __tablename__ = "widget_instances"

    definition_id = Column(
        String(100),
        ForeignKey("widget_definitions.id"),
        nullable=False,
        index=True,
    )
    site_id = Column(
        String(36),
        ForeignKey("sites.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    page_id = Column(
        String(36),
        ForeignKey("pages.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    # Override values only; defaults come from the definition at render time
    config = Column(JSONType, nullable=False, default=dict)
    sort_order = Column(Integer, nullable=False, default=0)
    enabled = Column(Boolean, nullable=False, default=True)
    version = Column(Integer, nullable=False, default=1)

    definition = relationship("WidgetDefinition", back_populates="instances")
    site = relationship("Site", back_populates="widget_instances")
    page = relationship("Page", back_populates="widget_instances")

    __table_args__ = (
        Index("idx_widget_instances_scope_order", "site_id", "page_id", "sort_order"),
    )

    def __repr__(self) -> str:
        return f"<WidgetInstance {self.id} ({self.definition_id})>"
