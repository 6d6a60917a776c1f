import logging
from typing import Any, Mapping

from injector import inject
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from activity_log.db.models import (
    ActivityClientEmailModel,
    ActivityClientHistoryModel,
    ActivitySystemModel,
)
from activity_log.repositories.db_repository import DbRepository
from activity_log.schemas.filter import BaseFilterModel


logger = logging.getLogger(__name__)

SEARCH_COLUMNS = (
    "SELECT m.*, "
    "a.email AS staff_email, a.name AS staff_name, "
    "c.first_name AS client_first_name, c.last_name AS client_last_name, "
    "c.email AS client_email "
)


@inject
class ActivitySystemRepository(DbRepository[ActivitySystemModel]):
    """Repository for system activity log entries."""

    def __init__(self, db: AsyncSession):
        super().__init__(ActivitySystemModel, db)

    async def search(
        self,
        fragment: str,
        params: Mapping[str, Any],
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Mapping[str, Any]]:
        """
        Run a search fragment built by `build_search_query`, newest first.
        Rows come back as mappings including the joined staff/client columns.
        """
        sql = SEARCH_COLUMNS + fragment + " ORDER BY m.id DESC"
        bind = dict(params)
        if limit is not None:
            sql += " LIMIT :limit OFFSET :offset"
            bind.update(limit=limit, offset=skip)

        logger.debug(f"Activity search: {sql} {bind}")
        result = await self.db.execute(text(sql), bind)
        return result.mappings().all()

    async def count(self, fragment: str, params: Mapping[str, Any]) -> int:
        result = await self.db.execute(text("SELECT COUNT(m.id) " + fragment), dict(params))
        return result.scalar_one()

    async def get_by_client_id(self, client_id: int) -> list[ActivitySystemModel]:
        return await self.find_by(client_id=client_id)


@inject
class ActivityClientEmailRepository(DbRepository[ActivityClientEmailModel]):
    """Repository for emails sent to clients."""

    def __init__(self, db: AsyncSession):
        super().__init__(ActivityClientEmailModel, db)

    async def get_by_client_id(
        self, client_id: int, filter_obj: BaseFilterModel
    ) -> list[ActivityClientEmailModel]:
        stmt = select(ActivityClientEmailModel).where(
            ActivityClientEmailModel.client_id == client_id
        )
        stmt = self._apply_filters(stmt, filter_obj)
        stmt = self._apply_pagination(
            stmt.order_by(ActivityClientEmailModel.id.desc()), filter_obj
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()


@inject
class ActivityClientHistoryRepository(DbRepository[ActivityClientHistoryModel]):
    """Repository for client login history."""

    def __init__(self, db: AsyncSession):
        super().__init__(ActivityClientHistoryModel, db)
