"""
Page queries. Scoped by site only.
"""
from sqlalchemy import delete

from funnelpress.core.exceptions import ConflictError
from funnelpress.models.base import utcnow
from funnelpress.models.content import Page
from funnelpress.queries.base import EntityQueries
from funnelpress.schemas.content import PageCreate, PageUpdate


class PageQueries(EntityQueries):
    entity = "pages"
    model = Page

    async def get_all_by_site(self, site_id: str, published_only: bool = False) -> list[Page]:
        criteria = [Page.site_id == site_id]
        if published_only:
            criteria.append(Page.published.is_(True))
        return await self._all(*criteria, order_by=(Page.updated_at.desc(),))

    async def get_by_id(self, page_id: str) -> Page | None:
        return await self._first(Page.id == page_id)

    async def get_by_slug(self, site_id: str, slug: str) -> Page | None:
        return await self._first(Page.site_id == site_id, Page.slug == slug)

    async def _check_slug(self, site_id: str, slug: str, exclude_id: str | None = None) -> None:
        criteria = [Page.site_id == site_id, Page.slug == slug]
        if exclude_id:
            criteria.append(Page.id != exclude_id)
        if await self._first(*criteria):
            raise ConflictError(f"A page with slug '{slug}' already exists on this site")

    async def create(self, data: PageCreate) -> Page:
        await self._check_slug(data.site_id, data.slug)
        page = Page(**data.model_dump())
        if page.published:
            page.published_at = utcnow()
        return await self._insert(page, "Page slug already exists on this site")

    async def update(self, page_id: str, data: PageUpdate) -> Page | None:
        page = await self.get_by_id(page_id)
        if not page:
            return None
        values = data.model_dump(exclude_unset=True)
        if values.get("slug"):
            await self._check_slug(page.site_id, values["slug"], exclude_id=page_id)
        if values.get("published") and page.published_at is None:
            values["published_at"] = utcnow()
        return await self._patch(page, values, "Page slug already exists on this site")

    async def delete(self, page_id: str) -> bool:
        return await self._remove(await self.get_by_id(page_id))

    async def delete_by_site(self, site_id: str) -> int:
        result = await self.db.execute(
            delete(Page)
            .where(Page.site_id == site_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
