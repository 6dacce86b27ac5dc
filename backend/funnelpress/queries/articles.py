"""
Article queries. Scoped by site only.
"""
from sqlalchemy import delete, update

from funnelpress.core.exceptions import ConflictError
from funnelpress.models.base import utcnow
from funnelpress.models.content import Article
from funnelpress.queries.base import EntityQueries
from funnelpress.schemas.content import ArticleCreate, ArticleUpdate


class ArticleQueries(EntityQueries):
    entity = "articles"
    model = Article

    async def get_all(self) -> list[Article]:
        return await self._all(order_by=(Article.updated_at.desc(),))

    async def get_all_by_site(self, site_id: str, published_only: bool = False) -> list[Article]:
        if published_only:
            return await self._all(
                Article.site_id == site_id,
                Article.published.is_(True),
                order_by=(Article.published_at.desc(),),
            )
        return await self._all(Article.site_id == site_id, order_by=(Article.updated_at.desc(),))

    async def get_by_id(self, article_id: str) -> Article | None:
        return await self._first(Article.id == article_id)

    async def get_by_slug(self, site_id: str, slug: str) -> Article | None:
        return await self._first(Article.site_id == site_id, Article.slug == slug)

    async def _check_slug(self, site_id: str, slug: str, exclude_id: str | None = None) -> None:
        criteria = [Article.site_id == site_id, Article.slug == slug]
        if exclude_id:
            criteria.append(Article.id != exclude_id)
        if await self._first(*criteria):
            raise ConflictError(f"An article with slug '{slug}' already exists on this site")

    async def _clear_hero(self, site_id: str, keep_id: str | None = None) -> None:
        stmt = update(Article).where(Article.site_id == site_id, Article.hero.is_(True))
        if keep_id:
            stmt = stmt.where(Article.id != keep_id)
        await self.db.execute(stmt.values(hero=False).execution_options(synchronize_session="fetch"))

    async def create(self, data: ArticleCreate) -> Article:
        await self._check_slug(data.site_id, data.slug)
        if data.hero:
            await self._clear_hero(data.site_id)
        article = Article(**data.model_dump())
        if article.published:
            article.published_at = utcnow()
        return await self._insert(article, "Article slug already exists on this site")

    async def update(self, article_id: str, data: ArticleUpdate) -> Article | None:
        article = await self.get_by_id(article_id)
        if not article:
            return None
        values = data.model_dump(exclude_unset=True)
        if values.get("slug"):
            await self._check_slug(article.site_id, values["slug"], exclude_id=article_id)
        if values.get("hero"):
            await self._clear_hero(article.site_id, keep_id=article_id)
        if values.get("published") and article.published_at is None:
            values["published_at"] = utcnow()
        return await self._patch(article, values, "Article slug already exists on this site")

    async def increment_views(self, article_id: str) -> None:
        await self.db.execute(
            update(Article)
            .where(Article.id == article_id)
            .values(views=Article.views + 1)
            .execution_options(synchronize_session=False)
        )

    async def delete(self, article_id: str) -> bool:
        return await self._remove(await self.get_by_id(article_id))

    async def delete_by_site(self, site_id: str) -> int:
        result = await self.db.execute(
            delete(Article)
            .where(Article.site_id == site_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
