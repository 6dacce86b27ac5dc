"""
Widget persistence: definitions, instances, and categories.

Business rules (validation, ordering, rendering) live in the widget registry
service; this module only reads and writes rows.
"""
from typing import Any

from sqlalchemy import func, or_, select, update

from funnelpress.models.widget import WidgetCategory, WidgetDefinition, WidgetInstance
from funnelpress.queries.base import EntityQueries


class WidgetQueries(EntityQueries):
    entity = "widgets"
    model = WidgetDefinition

    # Definitions

    async def get_definitions(self, category: str | None = None) -> list[WidgetDefinition]:
        criteria = [WidgetDefinition.active.is_(True)]
        if category:
            criteria.append(WidgetDefinition.category == category)
        return await self._all(*criteria, order_by=(WidgetDefinition.name,))

    async def get_definition(self, definition_id: str) -> WidgetDefinition | None:
        return await self.db.get(WidgetDefinition, definition_id)

    async def save_definition(self, values: dict[str, Any]) -> WidgetDefinition:
        """Insert or replace a definition keyed by its id."""
        definition = await self.get_definition(values["id"])
        if definition is None:
            return await self._insert(WidgetDefinition(**values), "Widget definition already exists")
        for field, value in values.items():
            setattr(definition, field, value)
        await self._flush("Widget definition conflict")
        await self.db.refresh(definition)
        return definition

    async def uncategorize_definitions(self, category_id: str) -> None:
        await self.db.execute(
            update(WidgetDefinition)
            .where(WidgetDefinition.category_id == category_id)
            .values(category_id=None)
            .execution_options(synchronize_session="fetch")
        )

    # Instances

    async def get_instance(self, instance_id: str) -> WidgetInstance | None:
        return await self.db.get(WidgetInstance, instance_id)

    async def get_instances(
        self,
        site_id: str,
        page_id: str | None = None,
        site_wide_only: bool = False,
        enabled_only: bool = True,
    ) -> list[WidgetInstance]:
        stmt = select(WidgetInstance).where(WidgetInstance.site_id == site_id)
        if page_id:
            stmt = stmt.where(
                or_(WidgetInstance.page_id == page_id, WidgetInstance.page_id.is_(None))
            )
        elif site_wide_only:
            stmt = stmt.where(WidgetInstance.page_id.is_(None))
        if enabled_only:
            stmt = stmt.where(WidgetInstance.enabled.is_(True))
        stmt = stmt.order_by(WidgetInstance.sort_order, WidgetInstance.created_at)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_instance_versions_for_definition(
        self, definition_id: str
    ) -> list[tuple[str, int]]:
        result = await self.db.execute(
            select(WidgetInstance.id, WidgetInstance.version).where(
                WidgetInstance.definition_id == definition_id
            )
        )
        return [(row.id, row.version) for row in result]

    async def max_instance_sort_order(self, site_id: str, page_id: str | None) -> int:
        page_clause = (
            WidgetInstance.page_id.is_(None) if page_id is None else WidgetInstance.page_id == page_id
        )
        result = await self.db.execute(
            select(func.max(WidgetInstance.sort_order)).where(
                WidgetInstance.site_id == site_id, page_clause
            )
        )
        return result.scalar() or 0

    async def add_instance(self, instance: WidgetInstance) -> WidgetInstance:
        return await self._insert(instance, "Widget instance conflict")

    async def save_instance(self, instance: WidgetInstance, values: dict[str, Any]) -> WidgetInstance:
        return await self._patch(instance, values, "Widget instance conflict")

    async def delete_instance(self, instance: WidgetInstance) -> bool:
        return await self._remove(instance)

    # Categories

    async def get_category(self, category_id: str) -> WidgetCategory | None:
        return await self.db.get(WidgetCategory, category_id)

    async def get_global_categories(self) -> list[WidgetCategory]:
        result = await self.db.execute(
            select(WidgetCategory)
            .where(WidgetCategory.site_id.is_(None))
            .order_by(WidgetCategory.sort_order, WidgetCategory.name)
        )
        return list(result.scalars().all())

    async def get_site_categories(self, site_id: str) -> list[WidgetCategory]:
        result = await self.db.execute(
            select(WidgetCategory)
            .where(WidgetCategory.site_id == site_id)
            .order_by(WidgetCategory.sort_order, WidgetCategory.name)
        )
        return list(result.scalars().all())

    async def max_category_sort_order(self, site_id: str | None) -> int:
        scope = WidgetCategory.site_id.is_(None) if site_id is None else WidgetCategory.site_id == site_id
        result = await self.db.execute(select(func.max(WidgetCategory.sort_order)).where(scope))
        return result.scalar() or 0

    async def add_category(self, category: WidgetCategory) -> WidgetCategory:
        return await self._insert(category, "Widget category already exists")

    async def set_category_order(self, category_id: str, sort_order: int) -> bool:
        result = await self.db.execute(
            update(WidgetCategory)
            .where(WidgetCategory.id == category_id)
            .values(sort_order=sort_order)
            .execution_options(synchronize_session="fetch")
        )
        return bool(result.rowcount)

    async def delete_category(self, category: WidgetCategory) -> bool:
        return await self._remove(category)
