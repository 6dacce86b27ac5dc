"""
SQLAlchemy models for FunnelPress.
"""
from funnelpress.models.base import Base, BaseModel
from funnelpress.models.tenant import Tenant, SubscriptionTier
from funnelpress.models.user import User, UserRole
from funnelpress.models.site import Site, SiteStatus
from funnelpress.models.content import Article, Page
from funnelpress.models.widget import WidgetCategory, WidgetDefinition, WidgetInstance
from funnelpress.models.subscriber import EmailSubscriber, SubscriberStatus
from funnelpress.models.analytics import ClickEvent, ViewEvent
from funnelpress.models.navigation import NavigationBaseType, NavigationTemplate
from funnelpress.models.activity import ActivityLogEntry

__all__ = [
    "Base",
    "BaseModel",
    "Tenant",
    "SubscriptionTier",
    "User",
    "UserRole",
    "Site",
    "SiteStatus",
    "Article",
    "Page",
    "WidgetCategory",
    "WidgetDefinition",
    "WidgetInstance",
    "EmailSubscriber",
    "SubscriberStatus",
    "ClickEvent",
    "ViewEvent",
    "NavigationBaseType",
    "NavigationTemplate",
    "ActivityLogEntry",
]
