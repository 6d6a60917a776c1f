from pydantic import BaseModel, Field
from typing import Optional
from datetime import date

from activity_log.core.config.settings import settings


class PaginationModel(BaseModel):
    skip: int = Field(
        0, ge=0, description="The number of rows to skip before returning results"
    )
    limit: int = Field(
        settings.ACTIVITY_PAGE_SIZE,
        ge=1,
        le=settings.ACTIVITY_MAX_PAGE_SIZE,
        description="The number of rows to return per page",
    )


class BaseFilterModel(PaginationModel):
    from_date: Optional[date] = Field(None, description="Start date (YYYY-MM-DD)")
    to_date: Optional[date] = Field(None, description="End date (YYYY-MM-DD)")
