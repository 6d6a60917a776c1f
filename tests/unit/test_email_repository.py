from datetime import date, datetime, timezone

import pytest
from sqlalchemy import func, select

from activity_log.db.models import ActivityClientEmailModel, ActivitySystemModel, ClientModel
from activity_log.repositories.activity import ActivityClientEmailRepository, ActivitySystemRepository
from activity_log.schemas.filter import BaseFilterModel


def _at(day: int, hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2024, 5, day, hour, minute, second, tzinfo=timezone.utc)


@pytest.fixture
async def email_repository(async_sqlite_session):
    async_sqlite_session.add_all([
        ClientModel(id=7, first_name="John", last_name="Doe", email="john@example.com"),
        ClientModel(id=8, first_name="Ann", last_name="Lee", email="ann@example.com"),
    ])
    async_sqlite_session.add_all([
        ActivityClientEmailModel(id=1, client_id=7, subject="Late evening", created_at=_at(2, 23, 30)),
        ActivityClientEmailModel(id=2, client_id=7, subject="Invoice", created_at=_at(3, 14)),
        ActivityClientEmailModel(id=3, client_id=7, subject="Reminder", created_at=_at(3, 23, 59, 59)),
        ActivityClientEmailModel(id=4, client_id=7, subject="Next day", created_at=_at(4, 0)),
        ActivityClientEmailModel(id=5, client_id=8, subject="Other client", created_at=_at(3, 10)),
    ])
    await async_sqlite_session.commit()
    return ActivityClientEmailRepository(async_sqlite_session)


@pytest.mark.asyncio
async def test_get_by_client_id_newest_first(email_repository):
    emails = await email_repository.get_by_client_id(7, BaseFilterModel())

    assert [e.id for e in emails] == [4, 3, 2, 1]

@pytest.mark.asyncio
async def test_to_date_includes_the_whole_day(email_repository):
    filter_obj = BaseFilterModel(from_date=date(2024, 5, 3), to_date=date(2024, 5, 3))

    emails = await email_repository.get_by_client_id(7, filter_obj)

    assert [e.id for e in emails] == [3, 2]

@pytest.mark.asyncio
async def test_to_date_only(email_repository):
    emails = await email_repository.get_by_client_id(7, BaseFilterModel(to_date=date(2024, 5, 2)))

    assert [e.id for e in emails] == [1]

@pytest.mark.asyncio
async def test_from_date_only(email_repository):
    emails = await email_repository.get_by_client_id(7, BaseFilterModel(from_date=date(2024, 5, 4)))

    assert [e.id for e in emails] == [4]

@pytest.mark.asyncio
async def test_pagination(email_repository):
    emails = await email_repository.get_by_client_id(7, BaseFilterModel(skip=1, limit=2))

    assert [e.id for e in emails] == [3, 2]

@pytest.mark.asyncio
async def test_delete_many_removes_rows_in_one_go(async_sqlite_session):
    async_sqlite_session.add_all([
        ActivitySystemModel(id=1, priority=6, client_id=7, message="one"),
        ActivitySystemModel(id=2, priority=6, client_id=7, message="two"),
        ActivitySystemModel(id=3, priority=6, client_id=8, message="three"),
    ])
    await async_sqlite_session.commit()
    repository = ActivitySystemRepository(async_sqlite_session)

    deleted = await repository.delete_many(await repository.get_by_client_id(7))

    assert deleted == 2
    remaining = await async_sqlite_session.execute(select(func.count(ActivitySystemModel.id)))
    assert remaining.scalar_one() == 1
