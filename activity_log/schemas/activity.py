from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from activity_log.core.utils.enums.activity_priority_enum import ActivityPriority
from activity_log.schemas.filter import PaginationModel


SEARCH_FILTER_FIELDS = ("only_clients", "only_staff", "priority", "search", "no_info", "no_debug")


class ActivitySearchParams(PaginationModel):
    only_clients: Optional[str] = Field(None, description="'yes' to list client activity only")
    only_staff: Optional[str] = Field(None, description="'yes' to list staff activity only")
    priority: Optional[int] = Field(None, ge=0, le=7, description="Exact priority level")
    search: Optional[str] = Field(None, description="Substring matched against message and IP")
    no_info: Optional[bool] = Field(None, description="Hide info and debug entries")
    no_debug: Optional[bool] = Field(None, description="Hide debug entries")

    def to_filters(self) -> dict[str, Any]:
        return self.model_dump(include=set(SEARCH_FILTER_FIELDS), exclude_none=True)


class ActivityRead(BaseModel):
    id: int
    priority: int
    message: Optional[str] = None
    ip: Optional[str] = None
    admin_id: Optional[int] = None
    client_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    staff_email: Optional[str] = None
    staff_name: Optional[str] = None
    client_first_name: Optional[str] = None
    client_last_name: Optional[str] = None
    client_email: Optional[str] = None

    model_config = ConfigDict(
            from_attributes = True,
            )


class ActivityPage(BaseModel):
    items: list[ActivityRead]
    total: int
    skip: int
    limit: int


class ActivityCreate(BaseModel):
    message: str = Field(..., min_length=1)
    priority: ActivityPriority = ActivityPriority.INFO
    client_id: Optional[int] = None
    admin_id: Optional[int] = None
    ip: Optional[str] = Field(None, max_length=45)


class ActivityBatchDelete(BaseModel):
    ids: list[int] = Field(..., min_length=1)


class ClientEmailCreate(BaseModel):
    subject: str
    client_id: Optional[int] = None
    sender: Optional[str] = None
    recipients: Optional[str] = None
    content_html: Optional[str] = None
    content_text: Optional[str] = None


class ClientEmailRead(ClientEmailCreate):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
            from_attributes = True,
            )


class ClientSummary(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class ClientHistoryRead(BaseModel):
    id: int
    ip: Optional[str] = None
    created_at: Optional[datetime] = None
    client: ClientSummary
