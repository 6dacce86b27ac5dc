"""
API v1 router aggregating all endpoints.
"""
from fastapi import APIRouter

from funnelpress.api.v1.analytics import router as analytics_router
from funnelpress.api.v1.articles import router as articles_router
from funnelpress.api.v1.auth import router as auth_router
from funnelpress.api.v1.navigation_templates import router as navigation_templates_router
from funnelpress.api.v1.pages import router as pages_router
from funnelpress.api.v1.sites import router as sites_router
from funnelpress.api.v1.subscribers import router as subscribers_router
from funnelpress.api.v1.users import router as users_router
from funnelpress.api.v1.widget_categories import router as widget_categories_router
from funnelpress.api.v1.widgets import router as widgets_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(sites_router)
api_router.include_router(articles_router)
api_router.include_router(pages_router)
api_router.include_router(widgets_router)
api_router.include_router(widget_categories_router)
api_router.include_router(navigation_templates_router)
api_router.include_router(subscribers_router)
api_router.include_router(analytics_router)
