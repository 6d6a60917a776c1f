from typing import Annotated, List
from fastapi import APIRouter, Depends, Query

from fastapi_injector import Injected

from activity_log.schemas.activity import (
    ActivityBatchDelete,
    ActivityCreate,
    ActivityPage,
    ActivityRead,
    ActivitySearchParams,
    ClientEmailCreate,
    ClientEmailRead,
    ClientHistoryRead,
)
from activity_log.schemas.filter import BaseFilterModel
from activity_log.services.activity import ActivityService


router = APIRouter()


@router.get("/log", response_model=ActivityPage)
async def search(
    search_params: Annotated[ActivitySearchParams, Query()],
    service: ActivityService = Injected(ActivityService),
):
    """
    Search the system activity log with optional filters:
    - only_clients / only_staff: 'yes' to restrict to client or staff entries
    - priority: exact priority level (0 emergency … 7 debug)
    - search: substring of the message or IP address
    - no_info / no_debug: hide low severity entries
    """
    return await service.search(search_params)


@router.post("/log", response_model=ActivityRead)
async def log_event(entry: ActivityCreate, service: ActivityService = Injected(ActivityService)):
    return await service.log_event(
        entry.message,
        priority=entry.priority,
        client_id=entry.client_id,
        admin_id=entry.admin_id,
        ip=entry.ip,
    )


@router.delete("/log/{activity_id}")
async def delete(activity_id: int, service: ActivityService = Injected(ActivityService)):
    return await service.delete(activity_id)


@router.post("/log/batch-delete")
async def batch_delete(payload: ActivityBatchDelete, service: ActivityService = Injected(ActivityService)):
    deleted = await service.batch_delete(payload.ids)
    return {"deleted": deleted}


@router.post("/email")
async def log_email(email: ClientEmailCreate, service: ActivityService = Injected(ActivityService)):
    result = await service.log_email(**email.model_dump())
    return {"result": result}


@router.get("/email", response_model=List[ClientEmailRead])
async def get_client_emails(
    client_id: int = Query(...),
    filter: BaseFilterModel = Depends(),
    service: ActivityService = Injected(ActivityService),
):
    return await service.get_client_emails(client_id, filter)


@router.get("/email/{email_id}", response_model=ClientEmailRead)
async def get_email(email_id: int, service: ActivityService = Injected(ActivityService)):
    return await service.get_email(email_id)


@router.get("/history/{history_id}", response_model=ClientHistoryRead)
async def get_history(history_id: int, service: ActivityService = Injected(ActivityService)):
    history = await service.get_history(history_id)
    return await service.to_api_array(history)


@router.delete("/client/{client_id}")
async def rm_by_client(client_id: int, service: ActivityService = Injected(ActivityService)):
    await service.rm_by_client_id(client_id)
    return {"message": f"Activity of client with ID {client_id} has been deleted."}
