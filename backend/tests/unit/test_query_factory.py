"""
Unit tests for the query factory and per-entity tenant isolation.

Covers:
- The isolation policy table
- Tenant-scoped reads and writes for users
- Unscoped reads for public content
- Tenant stamping of the activity log
"""
import pytest
from sqlalchemy import select

from funnelpress.core.security import verify_password
from funnelpress.models import ActivityLogEntry, Site, User, UserRole
from funnelpress.queries import ISOLATION_POLICIES, IsolationPolicy, create_queries
from funnelpress.queries.base import EntityQueries
from funnelpress.queries.policy import policy_for
from funnelpress.schemas.auth import UserCreate

TENANT_ID = "00000000-0000-0000-0000-000000000001"
OTHER_TENANT_ID = "00000000-0000-0000-0000-000000000009"
ADMIN_ID = "00000000-0000-0000-0000-000000000002"
SITE_ID = "00000000-0000-0000-0000-000000000003"
ARTICLE_ID = "00000000-0000-0000-0000-000000000005"


class TestIsolationPolicies:
    """Test the per-entity policy table."""

    def test_users_are_tenant_scoped(self):
        assert ISOLATION_POLICIES["users"] is IsolationPolicy.TENANT_SCOPED

    def test_public_content_is_unscoped(self):
        for entity in ("sites", "articles", "pages", "emails", "widgets", "analytics", "navigation_templates"):
            assert ISOLATION_POLICIES[entity] is IsolationPolicy.UNSCOPED

    def test_activity_log_is_stamped(self):
        assert ISOLATION_POLICIES["activity_log"] is IsolationPolicy.TENANT_STAMPED

    def test_unknown_entity_raises(self):
        with pytest.raises(LookupError):
            policy_for("invoices")

    def test_query_class_without_policy_fails_at_construction(self, db_session):
        """A query object for an undeclared entity cannot be built."""

        class InvoiceQueries(EntityQueries):
            entity = "invoices"

        with pytest.raises(LookupError):
            InvoiceQueries(db_session, TENANT_ID)

    @pytest.mark.parametrize("model", [User, Site])
    def test_tenant_column_is_mapped(self, model):
        column = model.__table__.c.tenant_id

        assert column.nullable is True
        assert [fk.target_fullname for fk in column.foreign_keys] == ["tenants.id"]
        assert model.tenant_id.property.columns[0] is column


class TestQueriesBundle:
    """Test the bundle returned by create_queries."""

    def test_bundle_carries_tenant(self, db_session):
        queries = create_queries(db_session, TENANT_ID)

        assert queries.tenant_id == TENANT_ID
        assert queries.user_queries.tenant_id == TENANT_ID
        assert queries.site_queries.policy is IsolationPolicy.UNSCOPED
        assert queries.user_queries.policy is IsolationPolicy.TENANT_SCOPED

    def test_bundle_without_tenant(self, db_session):
        queries = create_queries(db_session)

        assert queries.tenant_id is None
        assert queries.activity_log_queries.tenant_id is None


class TestTenantScopedUsers:
    """Test that users never leak across tenants."""

    @pytest.mark.asyncio
    async def test_user_visible_to_own_tenant(self, db_session_with_data):
        queries = create_queries(db_session_with_data, TENANT_ID)

        user = await queries.user_queries.get_by_id(ADMIN_ID)

        assert user is not None
        assert user.email == "admin@example.com"

    @pytest.mark.asyncio
    async def test_user_hidden_from_other_tenant(self, db_session_with_data):
        queries = create_queries(db_session_with_data, OTHER_TENANT_ID)

        assert await queries.user_queries.get_by_id(ADMIN_ID) is None
        assert await queries.user_queries.get_by_email("admin@example.com") is None
        assert await queries.user_queries.get_all_by_tenant() == []

    @pytest.mark.asyncio
    async def test_missing_tenant_means_null_tenant(self, db_session_with_data):
        """No tenant filters on tenant_id IS NULL rather than returning everyone."""
        db = db_session_with_data
        db.add(
            User(
                email="orphan@example.com",
                name="Orphan",
                password_hash="x",
                role=UserRole.VIEWER,
            )
        )
        await db.flush()

        queries = create_queries(db)
        users = await queries.user_queries.get_all_by_tenant()

        assert [u.email for u in users] == ["orphan@example.com"]

    @pytest.mark.asyncio
    async def test_create_stamps_tenant(self, db_session_with_data):
        queries = create_queries(db_session_with_data, OTHER_TENANT_ID)

        user = await queries.user_queries.create(
            UserCreate(email="New@Example.com", password="long-enough-pw", name="New User")
        )

        assert user.tenant_id == OTHER_TENANT_ID
        assert user.email == "new@example.com"
        assert user.password_hash != "long-enough-pw"

    @pytest.mark.asyncio
    async def test_delete_other_tenant_user_is_noop(self, db_session_with_data):
        queries = create_queries(db_session_with_data, OTHER_TENANT_ID)

        assert await queries.user_queries.delete(ADMIN_ID) is False

        own = create_queries(db_session_with_data, TENANT_ID)
        assert await own.user_queries.get_by_id(ADMIN_ID) is not None

    @pytest.mark.asyncio
    async def test_update_password_is_tenant_scoped(self, db_session_with_data):
        other = create_queries(db_session_with_data, OTHER_TENANT_ID)
        assert await other.user_queries.update_password(ADMIN_ID, "another-password") is False

        own = create_queries(db_session_with_data, TENANT_ID)
        assert await own.user_queries.update_password(ADMIN_ID, "another-password") is True

        user = await own.user_queries.get_by_id(ADMIN_ID)
        assert verify_password("another-password", user.password_hash)


class TestUnscopedContent:
    """Test that public content resolves for any tenant."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tenant_id", [None, TENANT_ID, OTHER_TENANT_ID])
    async def test_site_lookup_ignores_tenant(self, db_session_with_data, tenant_id):
        queries = create_queries(db_session_with_data, tenant_id)

        assert (await queries.site_queries.get_by_subdomain("test-site")).id == SITE_ID
        assert (await queries.site_queries.get_by_domain("example.com")).id == SITE_ID

    @pytest.mark.asyncio
    async def test_articles_visible_without_tenant(self, db_session_with_data):
        queries = create_queries(db_session_with_data)

        article = await queries.article_queries.get_by_slug(SITE_ID, "test-article")

        assert article is not None
        assert article.id == ARTICLE_ID

    @pytest.mark.asyncio
    async def test_delete_by_site_removes_only_that_site(self, db_session_with_data):
        queries = create_queries(db_session_with_data)

        assert await queries.article_queries.delete_by_site("missing-site") == 0
        assert await queries.article_queries.delete_by_site(SITE_ID) == 1
        assert await queries.page_queries.delete_by_site(SITE_ID) == 1
        assert await queries.article_queries.get_by_id(ARTICLE_ID) is None


class TestActivityLog:
    """Test tenant stamping of activity entries."""

    @pytest.mark.asyncio
    async def test_log_activity_stamps_tenant(self, db_session_with_data):
        queries = create_queries(db_session_with_data, TENANT_ID)

        entry = await queries.log_activity("create", "site", SITE_ID, {"name": "Test Site"})

        assert entry.tenant_id == TENANT_ID
        assert entry.details == {"name": "Test Site"}

    @pytest.mark.asyncio
    async def test_log_activity_without_tenant(self, db_session_with_data):
        queries = create_queries(db_session_with_data)

        await queries.log_activity("view", "article", ARTICLE_ID)

        result = await db_session_with_data.execute(select(ActivityLogEntry))
        entries = result.scalars().all()
        assert len(entries) == 1
        assert entries[0].tenant_id is None
