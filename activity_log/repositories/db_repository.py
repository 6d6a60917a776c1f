import logging
from datetime import timedelta
from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar
from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from activity_log.core.exceptions.error_messages import ErrorKey
from activity_log.core.exceptions.exception_classes import AppException
from activity_log.db.base import Base
from activity_log.schemas.filter import BaseFilterModel


logger = logging.getLogger(__name__)
OrmModelT = TypeVar("OrmModelT", bound=Base)


class DbRepository(Generic[OrmModelT]):
    """
    Async persistence for one ORM model.

    Records are built by constructing the model, then stored with `create`,
    looked up with `get_by_id` / `find_by` and removed with `delete` or
    `delete_many`.
    """

    def __init__(self, model: Type[OrmModelT], db: AsyncSession):
        self.model = model
        self.db = db

    def _apply_filters(self, stmt: Select, filter_obj: BaseFilterModel) -> Select:
        """Restrict to the filter's creation date range. Both days are inclusive."""
        created_at = self.model.created_at
        if filter_obj.from_date:
            stmt = stmt.where(created_at >= filter_obj.from_date)
        if filter_obj.to_date:
            # up to midnight at the end of to_date
            stmt = stmt.where(created_at < filter_obj.to_date + timedelta(days=1))
        return stmt

    def _apply_pagination(self, stmt: Select, filter_obj: BaseFilterModel) -> Select:
        return stmt.offset(filter_obj.skip).limit(filter_obj.limit)

    async def _scalars(self, stmt: Select) -> List[OrmModelT]:
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def get_by_id(self, obj_id: int) -> Optional[OrmModelT]:
        result = await self.db.execute(select(self.model).where(self.model.id == obj_id))
        return result.scalars().first()

    async def get_existing_by_id(
            self, obj_id: int, error_key: ErrorKey = ErrorKey.NOT_FOUND
            ) -> OrmModelT:
        """Same as `get_by_id`, but a missing row raises a 404 `AppException`."""
        model = await self.get_by_id(obj_id)
        if model is None:
            logger.debug(f"{self.model.__tablename__} #{obj_id} does not exist")
            raise AppException(error_key=error_key, status_code=404,
                               error_variables=(str(obj_id),))
        return model

    async def get_by_ids(self, ids: Sequence[int]) -> List[OrmModelT]:
        if not ids:
            return []
        return await self._scalars(select(self.model).where(self.model.id.in_(ids)))

    async def find_by(self, **criteria: Any) -> List[OrmModelT]:
        """Rows whose columns equal every given value, oldest first."""
        stmt = select(self.model).filter_by(**criteria).order_by(self.model.id)
        return await self._scalars(stmt)

    async def create(self, obj: OrmModelT) -> OrmModelT:
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: OrmModelT) -> None:
        await self.db.delete(obj)
        await self.db.commit()

    async def delete_many(self, objs: Sequence[OrmModelT]) -> int:
        """Delete `objs` in one transaction; nothing is removed if any delete fails."""
        try:
            for obj in objs:
                await self.db.delete(obj)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return len(objs)
