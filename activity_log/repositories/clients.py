from injector import inject
from sqlalchemy.ext.asyncio import AsyncSession

from activity_log.db.models import ClientModel
from activity_log.repositories.db_repository import DbRepository


@inject
class ClientRepository(DbRepository[ClientModel]):
    def __init__(self, db: AsyncSession):
        super().__init__(ClientModel, db)
