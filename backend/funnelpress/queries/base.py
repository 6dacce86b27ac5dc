"""
Shared plumbing for entity query objects.
"""
import logging
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from funnelpress.core.exceptions import ConflictError
from funnelpress.queries.policy import IsolationPolicy, policy_for

logger = logging.getLogger(__name__)


class EntityQueries:
    """Base for per-entity query objects.

    Subclasses set ``entity`` (a key of the isolation policy table) and
    ``model``. The policy is resolved once, at construction.
    """

    entity: str = ""
    model: Any = None

    def __init__(self, db: AsyncSession, tenant_id: str | None = None):
        self.db = db
        self.tenant_id = tenant_id
        self.policy = policy_for(self.entity)

    def _scope(self, stmt: Select) -> Select:
        """Apply the tenant filter required by this entity's policy."""
        if self.policy is IsolationPolicy.TENANT_SCOPED:
            column = self.model.tenant_id
            if self.tenant_id is None:
                return stmt.where(column.is_(None))
            return stmt.where(column == self.tenant_id)
        return stmt

    def _stamp(self, values: dict[str, Any]) -> dict[str, Any]:
        """Record the factory tenant on a new row when the policy asks for it."""
        if self.policy in (IsolationPolicy.TENANT_SCOPED, IsolationPolicy.TENANT_STAMPED):
            values["tenant_id"] = self.tenant_id
        return values

    def _select(self) -> Select:
        return self._scope(select(self.model))

    async def _first(self, *criteria) -> Any | None:
        result = await self.db.execute(self._select().where(*criteria))
        return result.scalars().first()

    async def _all(self, *criteria, order_by: tuple = ()) -> list:
        stmt = self._select().where(*criteria).order_by(*order_by)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _flush(self, conflict_message: str) -> None:
        """Flush pending writes, translating constraint violations."""
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.warning(f"Integrity error on {self.entity}: {e.orig}")
            await self.db.rollback()
            raise ConflictError(conflict_message) from e

    async def _insert(self, row: Any, conflict_message: str) -> Any:
        self.db.add(row)
        await self._flush(conflict_message)
        await self.db.refresh(row)
        return row

    async def _patch(self, row: Any, values: dict[str, Any], conflict_message: str) -> Any:
        """Write only the given fields and bump the row version."""
        for field, value in values.items():
            setattr(row, field, value)
        if hasattr(row, "version") and isinstance(row.version, int):
            row.version = row.version + 1
        await self._flush(conflict_message)
        await self.db.refresh(row)
        return row

    async def _remove(self, row: Any | None) -> bool:
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.flush()
        return True
