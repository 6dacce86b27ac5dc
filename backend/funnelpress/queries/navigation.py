"""
Navigation template queries.
"""
from funnelpress.models.navigation import NavigationBaseType, NavigationTemplate
from funnelpress.queries.base import EntityQueries
from funnelpress.schemas.navigation import NavigationTemplateCreate, NavigationTemplateUpdate


class NavigationTemplateQueries(EntityQueries):
    entity = "navigation_templates"
    model = NavigationTemplate

    async def get_all(self) -> list[NavigationTemplate]:
        return await self._all(
            order_by=(NavigationTemplate.is_system.desc(), NavigationTemplate.name)
        )

    async def get_system_templates(self) -> list[NavigationTemplate]:
        return await self._all(
            NavigationTemplate.is_system.is_(True),
            order_by=(NavigationTemplate.name,),
        )

    async def get_by_base_type(self, base_type: NavigationBaseType) -> list[NavigationTemplate]:
        return await self._all(
            NavigationTemplate.base_type == base_type,
            order_by=(NavigationTemplate.is_system.desc(), NavigationTemplate.name),
        )

    async def get_by_id(self, template_id: str) -> NavigationTemplate | None:
        return await self._first(NavigationTemplate.id == template_id)

    async def create(self, data: NavigationTemplateCreate) -> NavigationTemplate:
        return await self._insert(
            NavigationTemplate(**data.model_dump()), "Navigation template already exists"
        )

    async def update(
        self, template_id: str, data: NavigationTemplateUpdate
    ) -> NavigationTemplate | None:
        template = await self.get_by_id(template_id)
        if not template:
            return None
        return await self._patch(
            template, data.model_dump(exclude_unset=True), "Navigation template conflict"
        )

    async def delete(self, template_id: str) -> bool:
        return await self._remove(await self.get_by_id(template_id))
