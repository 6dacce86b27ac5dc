"""
Widget Registry

Owns widget definitions, their placements on sites and pages, the admin
category library, and rendering of an instance to HTML.

Rendering merges a definition's ``default_config`` with the instance
override, validates the result against the configuration model of the
definition's widget type, and renders the stored Jinja2 template in a
sandboxed, auto-escaping environment.
"""

import logging
import re
from datetime import timezone
from typing import Any

import pydantic
from jinja2 import TemplateError
from jinja2.sandbox import SandboxedEnvironment
from sqlalchemy.ext.asyncio import AsyncSession

from funnelpress.core.exceptions import NotFoundError, ValidationError
from funnelpress.models.widget import WidgetCategory, WidgetDefinition, WidgetInstance
from funnelpress.queries import Queries, create_queries
from funnelpress.schemas.widget import CategoryOrder, WidgetCategoryCreate, WidgetDefinitionCreate
from funnelpress.schemas.widget_config import (
    WIDGET_CONFIG_MODELS,
    config_schema_for,
    template_context,
    unknown_default_keys,
    validate_widget_config,
)
from funnelpress.services.render_cache import RenderCache, get_render_cache

logger = logging.getLogger(__name__)

_template_env = SandboxedEnvironment(autoescape=True)

DEFAULT_CATEGORY_COLORS = {
    "color_bg": "bg-gray-500/10",
    "color_text": "text-gray-400",
    "color_border": "border-gray-500/30",
}


def not_found_comment(instance_id: str) -> str:
    return f"<!-- Widget instance {instance_id} not found -->"


def failed_comment(instance_id: str) -> str:
    return f"<!-- Widget instance {instance_id} failed to render -->"


def slugify(name: str) -> str:
    slug = re.sub(r"\s+", "-", name.strip().lower())
    return re.sub(r"[^a-z0-9-]", "", slug)


def render_revision(instance_version: int, definition: WidgetDefinition) -> str:
    """Cache revision of an instance rendered with a definition.

    Changes whenever the instance row is patched or the definition row is
    rewritten, so an entry computed from an older row is never looked up again.
    """
    updated = definition.updated_at
    if updated is None:
        return f"{instance_version}-0"
    if updated.tzinfo is not None:
        updated = updated.astimezone(timezone.utc)
    return f"{instance_version}-{updated.strftime('%Y%m%d%H%M%S%f')}"


def _format_errors(exc: pydantic.ValidationError) -> str:
    parts = []
    for error in exc.errors():
        # Drop the union tag from the location
        loc = ".".join(str(p) for p in error["loc"][1:] or error["loc"])
        parts.append(f"{loc}: {error['msg']}")
    return "; ".join(parts)


class WidgetRegistry:
    """Widget definitions, instances, categories, and rendering."""

    def __init__(self, queries: Queries, cache: RenderCache | None = None):
        self.queries = queries
        self.widgets = queries.widget_queries
        self.cache = cache or get_render_cache()

    # Definitions

    async def get_widget_definitions(self, category: str | None = None) -> list[WidgetDefinition]:
        return await self.widgets.get_definitions(category)

    async def get_widget_definition(self, definition_id: str) -> WidgetDefinition | None:
        definition = await self.widgets.get_definition(definition_id)
        if definition is None or not definition.active:
            return None
        return definition

    async def register_widget(self, data: WidgetDefinitionCreate) -> WidgetDefinition:
        """Create or replace a definition and drop cached renders of its instances."""
        widget_type = data.resolved_type
        if widget_type not in WIDGET_CONFIG_MODELS:
            raise ValidationError(
                f"Unknown widget type '{widget_type}'",
                details=f"Expected one of: {', '.join(sorted(WIDGET_CONFIG_MODELS))}",
            )

        extra = unknown_default_keys(widget_type, data.default_config)
        if extra:
            raise ValidationError(
                "Invalid default configuration",
                details=f"Unknown field(s) for {widget_type}: {', '.join(extra)}",
            )

        try:
            _template_env.parse(data.template)
        except TemplateError as e:
            raise ValidationError("Invalid widget template", details=str(e)) from e

        if data.category_id and await self.widgets.get_category(data.category_id) is None:
            raise NotFoundError("Widget category")

        values = data.model_dump(exclude={"widget_type"})
        values["widget_type"] = widget_type
        values["config_schema"] = config_schema_for(widget_type)

        previous = await self.widgets.get_definition(values["id"])
        stale: list[tuple[str, str]] = []
        if previous is not None:
            instances = await self.widgets.get_instance_versions_for_definition(previous.id)
            stale = [(i, render_revision(version, previous)) for i, version in instances]

        definition = await self.widgets.save_definition(values)
        await self.cache.invalidate_many(stale)

        logger.info(f"Registered widget {definition.id} v{definition.version}")
        return definition

    # Instances

    def _validate_config(self, definition: WidgetDefinition, config: dict[str, Any]) -> None:
        try:
            validate_widget_config(definition.widget_type, definition.default_config, config)
        except pydantic.ValidationError as e:
            raise ValidationError("Invalid widget configuration", details=_format_errors(e)) from e

    async def get_widget_instances(
        self,
        site_id: str,
        page_id: str | None = None,
        site_wide_only: bool = False,
        enabled_only: bool = True,
    ) -> list[WidgetInstance]:
        return await self.widgets.get_instances(site_id, page_id, site_wide_only, enabled_only)

    async def create_widget_instance(
        self,
        definition_id: str,
        site_id: str,
        page_id: str | None = None,
        config: dict[str, Any] | None = None,
    ) -> WidgetInstance:
        config = config or {}
        definition = await self.get_widget_definition(definition_id)
        if definition is None:
            raise NotFoundError("Widget definition")

        # Serializes concurrent placements on the same site
        site = await self.queries.site_queries.get_for_update(site_id)
        if site is None:
            raise NotFoundError("Site")

        if page_id:
            page = await self.queries.page_queries.get_by_id(page_id)
            if page is None or page.site_id != site_id:
                raise NotFoundError("Page")

        self._validate_config(definition, config)

        sort_order = await self.widgets.max_instance_sort_order(site_id, page_id) + 1
        instance = WidgetInstance(
            definition_id=definition.id,
            site_id=site_id,
            page_id=page_id,
            config=config,
            sort_order=sort_order,
            enabled=True,
        )
        return await self.widgets.add_instance(instance)

    async def _require_instance(self, instance_id: str) -> WidgetInstance:
        instance = await self.widgets.get_instance(instance_id)
        if instance is None:
            raise NotFoundError("Widget instance")
        return instance

    async def _forget_render(
        self, instance_id: str, version: int, definition: WidgetDefinition | None
    ) -> None:
        """Drop the cached render of the revision that was just replaced."""
        if definition is not None:
            await self.cache.invalidate(instance_id, render_revision(version, definition))

    async def update_widget_instance(
        self, instance_id: str, config: dict[str, Any]
    ) -> WidgetInstance:
        """Replace an instance's configuration override."""
        instance = await self._require_instance(instance_id)
        definition = await self.widgets.get_definition(instance.definition_id)
        if definition is None:
            raise NotFoundError("Widget definition")

        self._validate_config(definition, config)

        version = instance.version
        instance = await self.widgets.save_instance(instance, {"config": config})
        await self._forget_render(instance_id, version, definition)
        return instance

    async def set_widget_instance_enabled(self, instance_id: str, enabled: bool) -> WidgetInstance:
        instance = await self._require_instance(instance_id)
        definition = await self.widgets.get_definition(instance.definition_id)
        version = instance.version
        instance = await self.widgets.save_instance(instance, {"enabled": enabled})
        await self._forget_render(instance_id, version, definition)
        return instance

    async def delete_widget_instance(self, instance_id: str) -> None:
        instance = await self._require_instance(instance_id)
        definition = await self.widgets.get_definition(instance.definition_id)
        version = instance.version
        await self.widgets.delete_instance(instance)
        await self._forget_render(instance_id, version, definition)

    # Rendering

    async def render_widget(self, instance_id: str) -> str:
        """Render an instance to HTML. Never raises.

        The rows are loaded first so the cache is consulted with the revision
        of what is committed now; an entry written by a render that raced an
        update belongs to the old revision and is not served.
        """
        try:
            instance = await self.widgets.get_instance(instance_id)
            definition = (
                await self.widgets.get_definition(instance.definition_id) if instance else None
            )
        except Exception:
            logger.exception(f"Failed to load widget instance {instance_id}")
            return failed_comment(instance_id)

        if instance is None or not instance.enabled or definition is None or not definition.active:
            return not_found_comment(instance_id)

        revision = render_revision(instance.version, definition)
        cached = await self.cache.get(instance_id, revision)
        if cached is not None:
            return cached

        try:
            config = validate_widget_config(
                definition.widget_type, definition.default_config, instance.config
            )
            html = _template_env.from_string(definition.template).render(
                **template_context(config)
            )
        except (pydantic.ValidationError, TemplateError) as e:
            logger.error(f"Widget instance {instance_id} failed to render: {e}")
            return failed_comment(instance_id)

        if definition.styles:
            html = f"<style>{definition.styles}</style>\n{html}"
        if definition.script:
            html = f"{html}\n<script>{definition.script}</script>"

        await self.cache.set(instance_id, revision, html)
        return html

    # Categories

    async def list_categories(self, site_id: str | None = None) -> dict[str, list[WidgetCategory]]:
        site_categories = await self.widgets.get_site_categories(site_id) if site_id else []
        return {
            "global": await self.widgets.get_global_categories(),
            "site": site_categories,
        }

    async def create_category(self, data: WidgetCategoryCreate) -> WidgetCategory:
        is_global = data.is_global or not data.site_id
        site_id = None if is_global else data.site_id
        if site_id and await self.queries.site_queries.get_by_id(site_id) is None:
            raise NotFoundError("Site")

        slug = slugify(data.name)
        if not slug:
            raise ValidationError("Category name must contain letters or digits")

        colors = {
            key: getattr(data, key) or default
            for key, default in DEFAULT_CATEGORY_COLORS.items()
        }
        category = WidgetCategory(
            site_id=site_id,
            name=data.name,
            slug=slug,
            description=data.description,
            icon=data.icon,
            is_global=is_global,
            sort_order=await self.widgets.max_category_sort_order(site_id) + 1,
            **colors,
        )
        return await self.widgets.add_category(category)

    async def reorder_categories(self, orders: list[CategoryOrder]) -> None:
        for order in orders:
            if not await self.widgets.set_category_order(order.id, order.sort_order):
                logger.warning(f"Reorder skipped unknown category {order.id}")

    async def delete_category(self, category_id: str) -> None:
        """Delete a category; its definitions become uncategorized."""
        category = await self.widgets.get_category(category_id)
        if category is None:
            raise NotFoundError("Widget category")
        await self.widgets.uncategorize_definitions(category_id)
        await self.widgets.delete_category(category)


BUILT_IN_WIDGETS: list[dict[str, Any]] = [
    {
        "id": "email-capture",
        "name": "Email Capture",
        "description": "Collect email addresses with customizable lead magnets",
        "category": "conversion",
        "version": "1.0.0",
        "template": """
<div class="email-capture-widget" style="{{ container_styles }}">
  <h3>{{ title }}</h3>
  <p>{{ description }}</p>
  <form class="email-form" onsubmit="submitEmail(event)">
    <input type="email" placeholder="{{ email_placeholder }}" required>
    <button type="submit" style="{{ button_styles }}">{{ button_text }}</button>
  </form>
  <p class="privacy-text">{{ privacy_text }}</p>
</div>
""",
        "styles": """
.email-capture-widget {
  background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
  padding: 2rem;
  border-radius: 12px;
  color: white;
  text-align: center;
  max-width: 500px;
  margin: 2rem auto;
}
.email-form input {
  width: 100%;
  padding: 12px;
  border: none;
  border-radius: 6px;
  margin-bottom: 1rem;
}
.privacy-text {
  font-size: 0.8rem;
  opacity: 0.8;
}
""",
        "script": """
function submitEmail(event) {
  event.preventDefault();
  const email = event.target.querySelector('input[type="email"]').value;
  fetch('/api/v1/subscribers', {
    method: 'POST',
    headers: { 'Content-Type': 'application/json' },
    body: JSON.stringify({ email, site_id: document.body.dataset.siteId, source: 'email-capture-widget' })
  }).then(() => {
    alert('Thanks for signing up!');
    event.target.reset();
  });
}
""",
        "default_config": {
            "title": "Get Free Access",
            "description": "Join thousands getting our free resources!",
            "button_text": "Subscribe Now",
            "email_placeholder": "Enter your email address",
            "privacy_text": "No spam, ever. Unsubscribe anytime.",
            "button_styles": (
                "background: #ff6b6b; color: white; border: none; "
                "padding: 12px 24px; border-radius: 6px; cursor: pointer;"
            ),
            "container_styles": "",
        },
        "triggers": [{"event": "page_load", "delay": 2000}],
    },
    {
        "id": "exit-intent-popup",
        "name": "Exit Intent Popup",
        "description": "Show popup when user is about to leave the page",
        "category": "conversion",
        "version": "1.0.0",
        "template": """
<div id="exit-popup" class="exit-popup-overlay" style="display: none;">
  <div class="exit-popup-content">
    <button class="close-btn" onclick="closeExitPopup()">&times;</button>
    <h2>{{ headline }}</h2>
    <p>{{ message }}</p>
    <form onsubmit="submitExitEmail(event)">
      <input type="email" placeholder="{{ email_placeholder }}" required>
      <button type="submit">{{ button_text }}</button>
    </form>
  </div>
</div>
""",
        "styles": """
.exit-popup-overlay {
  position: fixed;
  top: 0;
  left: 0;
  width: 100%;
  height: 100%;
  background: rgba(0,0,0,0.8);
  z-index: 9999;
  display: flex;
  align-items: center;
  justify-content: center;
}
.exit-popup-content {
  background: white;
  padding: 2rem;
  border-radius: 12px;
  max-width: 500px;
  position: relative;
  text-align: center;
}
.close-btn {
  position: absolute;
  top: 10px;
  right: 15px;
  border: none;
  background: none;
  font-size: 24px;
  cursor: pointer;
}
""",
        "script": """
let exitIntentShown = false;
document.addEventListener('mouseleave', function(e) {
  if (e.clientY <= 0 && !exitIntentShown) {
    document.getElementById('exit-popup').style.display = 'flex';
    exitIntentShown = true;
  }
});
function closeExitPopup() {
  document.getElementById('exit-popup').style.display = 'none';
}
function submitExitEmail(event) {
  event.preventDefault();
  const email = event.target.querySelector('input[type="email"]').value;
  fetch('/api/v1/subscribers', {
    method: 'POST',
    headers: { 'Content-Type': 'application/json' },
    body: JSON.stringify({ email, site_id: document.body.dataset.siteId, source: 'exit-intent-popup' })
  }).then(() => {
    closeExitPopup();
    alert('Thanks! Check your email for your free resource.');
  });
}
""",
        "default_config": {
            "headline": "Wait! Before You Go...",
            "message": "Get our free guide delivered to your inbox!",
            "button_text": "Get Free Guide",
            "email_placeholder": "Your email address",
        },
        "triggers": [{"event": "exit_intent"}],
    },
]


async def initialize_built_in_widgets(db: AsyncSession, cache: RenderCache | None = None) -> None:
    """Register the built-in widget definitions. Safe to call repeatedly."""
    registry = WidgetRegistry(create_queries(db), cache)
    for widget in BUILT_IN_WIDGETS:
        await registry.register_widget(WidgetDefinitionCreate(**widget))
    logger.info(f"Registered {len(BUILT_IN_WIDGETS)} built-in widgets")
