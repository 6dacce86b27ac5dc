"""
Site queries. Sites are served publicly and are never tenant-filtered.
"""
from sqlalchemy import or_

from funnelpress.core.exceptions import ConflictError
from funnelpress.models.base import utcnow
from funnelpress.models.site import Site, SiteStatus
from funnelpress.queries.base import EntityQueries
from funnelpress.schemas.site import SiteCreate, SiteUpdate


class SiteQueries(EntityQueries):
    entity = "sites"
    model = Site

    async def get_by_id(self, site_id: str) -> Site | None:
        return await self._first(Site.id == site_id)

    async def get_by_subdomain(self, subdomain: str) -> Site | None:
        return await self._first(Site.subdomain == subdomain)

    async def get_by_domain(self, domain: str) -> Site | None:
        return await self._first(Site.domain == domain)

    async def get_all(self, published_only: bool = False) -> list[Site]:
        criteria = [Site.status == SiteStatus.PUBLISHED] if published_only else []
        return await self._all(*criteria, order_by=(Site.updated_at.desc(),))

    async def get_for_update(self, site_id: str) -> Site | None:
        """Load a site holding a row lock until the transaction ends."""
        result = await self.db.execute(
            self._select().where(Site.id == site_id).with_for_update()
        )
        return result.scalars().first()

    async def _check_unique(
        self,
        subdomain: str | None,
        domain: str | None,
        exclude_id: str | None = None,
    ) -> None:
        clauses = []
        if subdomain:
            clauses.append(Site.subdomain == subdomain)
        if domain:
            clauses.append(Site.domain == domain)
        if not clauses:
            return
        criteria = [or_(*clauses)]
        if exclude_id:
            criteria.append(Site.id != exclude_id)
        existing = await self._first(*criteria)
        if existing:
            field = "Subdomain" if subdomain and existing.subdomain == subdomain else "Domain"
            raise ConflictError(f"{field} already in use")

    async def create(self, data: SiteCreate, created_by: str | None = None) -> Site:
        await self._check_unique(data.subdomain, data.domain)
        site = Site(
            **data.model_dump(),
            # Ownership only; not used to filter reads
            tenant_id=self.tenant_id,
            created_by=created_by,
        )
        if site.status == SiteStatus.PUBLISHED:
            site.published_at = utcnow()
        return await self._insert(site, "Subdomain or domain already in use")

    async def update(self, site_id: str, data: SiteUpdate) -> Site | None:
        site = await self.get_by_id(site_id)
        if not site:
            return None
        values = data.model_dump(exclude_unset=True)
        await self._check_unique(values.get("subdomain"), values.get("domain"), exclude_id=site_id)
        if values.get("status") == SiteStatus.PUBLISHED and site.published_at is None:
            values["published_at"] = utcnow()
        return await self._patch(site, values, "Subdomain or domain already in use")

    async def delete(self, site_id: str) -> bool:
        return await self._remove(await self.get_by_id(site_id))
