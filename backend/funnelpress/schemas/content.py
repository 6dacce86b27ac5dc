"""
Article and page schemas.
"""
from datetime import datetime

from pydantic import Field

from funnelpress.schemas.common import BaseSchema, IDSchema, TimestampSchema

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class ArticleCreate(BaseSchema):
    """Create article request."""

    site_id: str
    title: str = Field(min_length=1, max_length=500)
    slug: str = Field(min_length=1, max_length=255, pattern=SLUG_PATTERN)
    excerpt: str | None = None
    content: str | None = None
    category: str | None = None
    image: str | None = None
    featured: bool = False
    trending: bool = False
    hero: bool = False
    boosted: bool = False
    published: bool = False
    read_time: int = Field(default=5, ge=0)
    author_name: str | None = None
    author_image: str | None = None
    tags: list[str] = []
    seo_title: str | None = None
    seo_description: str | None = None
    canonical_url: str | None = None
    tracking_config: dict | None = None


class ArticleUpdate(BaseSchema):
    """Partial article update."""

    title: str | None = Field(default=None, min_length=1, max_length=500)
    slug: str | None = Field(default=None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    excerpt: str | None = None
    content: str | None = None
    category: str | None = None
    image: str | None = None
    featured: bool | None = None
    trending: bool | None = None
    hero: bool | None = None
    boosted: bool | None = None
    published: bool | None = None
    read_time: int | None = Field(default=None, ge=0)
    author_name: str | None = None
    author_image: str | None = None
    tags: list[str] | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    canonical_url: str | None = None
    tracking_config: dict | None = None


class ArticleResponse(IDSchema, TimestampSchema):
    """Article response schema."""

    site_id: str
    title: str
    slug: str
    excerpt: str | None = None
    content: str | None = None
    category: str | None = None
    image: str | None = None
    featured: bool
    trending: bool
    hero: bool
    boosted: bool
    published: bool
    published_at: datetime | None = None
    read_time: int
    views: int
    author_name: str | None = None
    author_image: str | None = None
    tags: list[str] | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    canonical_url: str | None = None
    tracking_config: dict | None = None
    version: int


class PageCreate(BaseSchema):
    """Create page request."""

    site_id: str
    title: str = Field(min_length=1, max_length=500)
    slug: str = Field(min_length=1, max_length=255, pattern=SLUG_PATTERN)
    content: str | None = None
    template: str = "default"
    published: bool = False
    seo_title: str | None = None
    seo_description: str | None = None


class PageUpdate(BaseSchema):
    """Partial page update."""

    title: str | None = Field(default=None, min_length=1, max_length=500)
    slug: str | None = Field(default=None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    content: str | None = None
    template: str | None = None
    published: bool | None = None
    seo_title: str | None = None
    seo_description: str | None = None


class PageResponse(IDSchema, TimestampSchema):
    """Page response schema."""

    site_id: str
    title: str
    slug: str
    content: str | None = None
    template: str
    published: bool
    published_at: datetime | None = None
    seo_title: str | None = None
    seo_description: str | None = None
    version: int


class ArticleEnvelope(BaseSchema):
    article: ArticleResponse | None = None


class ArticleQueryResponse(BaseSchema):
    """Either a single lookup result or a listing."""

    article: ArticleResponse | None = None
    articles: list[ArticleResponse] | None = None


class PageEnvelope(BaseSchema):
    page: PageResponse | None = None


class PageQueryResponse(BaseSchema):
    """Either a single lookup result or a listing."""

    page: PageResponse | None = None
    pages: list[PageResponse] | None = None
