import logging
from typing import Any, Mapping, Optional

from injector import inject

from activity_log.core.exceptions.error_messages import ErrorKey
from activity_log.core.utils.enums.activity_priority_enum import ActivityPriority
from activity_log.core.utils.search_query import build_search_query
from activity_log.db.models import (
    ActivityClientEmailModel,
    ActivityClientHistoryModel,
    ActivitySystemModel,
    ClientModel,
)
from activity_log.repositories.activity import (
    ActivityClientEmailRepository,
    ActivityClientHistoryRepository,
    ActivitySystemRepository,
)
from activity_log.repositories.clients import ClientRepository
from activity_log.schemas.activity import ActivityPage, ActivityRead, ActivitySearchParams
from activity_log.schemas.filter import BaseFilterModel


logger = logging.getLogger(__name__)


@inject
class ActivityService:
    """
    Handles activity log business logic: system events, client emails
    and client login history.
    """

    def __init__(
        self,
        repository: ActivitySystemRepository,
        email_repository: ActivityClientEmailRepository,
        history_repository: ActivityClientHistoryRepository,
        client_repository: ClientRepository,
    ):
        self.repository = repository
        self.email_repository = email_repository
        self.history_repository = history_repository
        self.client_repository = client_repository

    # ------------------------------------------------------------------
    # System log
    # ------------------------------------------------------------------
    def get_search_query(
        self, filters: Optional[Mapping[str, Any]] = None
    ) -> tuple[str, dict[str, Any]]:
        return build_search_query(filters)

    async def search(self, search_params: ActivitySearchParams) -> ActivityPage:
        """
        Search the system log with filters.
        Returns one page of entries, newest first, plus the total match count.
        """
        fragment, params = self.get_search_query(search_params.to_filters())
        rows = await self.repository.search(
            fragment, params, skip=search_params.skip, limit=search_params.limit
        )
        total = await self.repository.count(fragment, params)
        return ActivityPage(
            items=[ActivityRead.model_validate(dict(row)) for row in rows],
            total=total,
            skip=search_params.skip,
            limit=search_params.limit,
        )

    async def log_event(
        self,
        message: str,
        priority: int = ActivityPriority.INFO,
        client_id: Optional[int] = None,
        admin_id: Optional[int] = None,
        ip: Optional[str] = None,
    ) -> ActivitySystemModel:
        entry = ActivitySystemModel(
            message=message,
            priority=int(priority),
            client_id=client_id,
            admin_id=admin_id,
            ip=ip,
        )
        return await self.repository.create(entry)

    async def delete(self, activity_id: int):
        model = await self.repository.get_existing_by_id(
            activity_id, ErrorKey.ACTIVITY_NOT_FOUND
        )
        await self.repository.delete(model)
        return {"message": f"Activity log entry with ID {activity_id} has been deleted."}

    async def batch_delete(self, ids: list[int]) -> int:
        models = await self.repository.get_by_ids(ids)
        deleted = await self.repository.delete_many(models)
        logger.info(f"Deleted {deleted} of {len(ids)} requested activity entries")
        return deleted

    async def rm_by_client(self, client: ClientModel) -> None:
        """Remove every system log entry that references `client`."""
        models = await self.repository.get_by_client_id(client.id)
        deleted = await self.repository.delete_many(models)
        logger.debug(f"Removed {deleted} activity entries of client #{client.id}")

    async def rm_by_client_id(self, client_id: int) -> None:
        client = await self.client_repository.get_existing_by_id(
            client_id, ErrorKey.CLIENT_NOT_FOUND
        )
        await self.rm_by_client(client)

    # ------------------------------------------------------------------
    # Client emails
    # ------------------------------------------------------------------
    async def log_email(
        self,
        subject: str,
        client_id: Optional[int] = None,
        sender: Optional[str] = None,
        recipients: Optional[str] = None,
        content_html: Optional[str] = None,
        content_text: Optional[str] = None,
    ) -> bool:
        entry = ActivityClientEmailModel(
            client_id=client_id,
            sender=sender,
            recipients=recipients,
            subject=subject,
            content_html=content_html,
            content_text=content_text,
        )
        await self.email_repository.create(entry)
        return True

    async def get_client_emails(
        self, client_id: int, filter: BaseFilterModel = None
    ) -> list[ActivityClientEmailModel]:
        return await self.email_repository.get_by_client_id(
            client_id, filter or BaseFilterModel()
        )

    async def get_email(self, email_id: int) -> ActivityClientEmailModel:
        return await self.email_repository.get_existing_by_id(
            email_id, ErrorKey.EMAIL_NOT_FOUND
        )

    # ------------------------------------------------------------------
    # Client login history
    # ------------------------------------------------------------------
    async def log_client_login(self, client_id: int, ip: Optional[str]) -> ActivityClientHistoryModel:
        entry = ActivityClientHistoryModel(client_id=client_id, ip=ip)
        return await self.history_repository.create(entry)

    async def get_history(self, history_id: int) -> ActivityClientHistoryModel:
        return await self.history_repository.get_existing_by_id(
            history_id, ErrorKey.HISTORY_NOT_FOUND
        )

    async def to_api_array(self, history: ActivityClientHistoryModel) -> dict:
        client = await self.client_repository.get_existing_by_id(
            history.client_id, ErrorKey.CLIENT_NOT_FOUND
        )
        return {
            "id": history.id,
            "ip": history.ip,
            "created_at": history.created_at,
            "client": {
                "id": client.id,
                "first_name": client.first_name,
                "last_name": client.last_name,
                "email": client.email,
            },
        }
