"""
Navigation template model.
"""
from enum import Enum as PyEnum

from sqlalchemy import Boolean, Column, Enum, String, Text

from funnelpress.models.base import Base, BaseModel, JSONType


class NavigationBaseType(str, PyEnum):
    GLOBAL = "global"
    DIRECT_RESPONSE = "direct-response"
    MINIMAL = "minimal"


class NavigationTemplate(Base, BaseModel):
    """Reusable header/navigation configuration shared across sites."""

    __tablename__ = "navigation_templates"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    base_type = Column(
        Enum(NavigationBaseType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    is_system = Column(Boolean, nullable=False, default=False)
    config = Column(JSONType, nullable=False, default=dict)

    def __repr__(self) -> str:
        return f"<NavigationTemplate {self.name} ({self.base_type.value})>"
