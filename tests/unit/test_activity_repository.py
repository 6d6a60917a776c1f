import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.ext.asyncio import AsyncSession

from activity_log.core.exceptions.error_messages import ErrorKey
from activity_log.core.exceptions.exception_classes import AppException
from activity_log.core.utils.search_query import build_search_query
from activity_log.repositories.activity import ActivitySystemRepository


@pytest.fixture
def mock_session():
    return AsyncMock(spec=AsyncSession)

@pytest.fixture
def repository(mock_session):
    return ActivitySystemRepository(mock_session)


def _executed_sql(mock_session):
    statement, bind = mock_session.execute.call_args.args
    return str(statement), bind


@pytest.mark.asyncio
async def test_search_with_pagination(repository, mock_session):
    # Setup
    result = MagicMock()
    result.mappings.return_value.all.return_value = [{"id": 2}, {"id": 1}]
    mock_session.execute.return_value = result
    fragment, params = build_search_query({"only_clients": "yes", "priority": 3})

    # Execute
    rows = await repository.search(fragment, params, skip=20, limit=10)

    # Assert
    sql, bind = _executed_sql(mock_session)
    assert sql.startswith("SELECT m.*, a.email AS staff_email")
    assert fragment in sql
    assert sql.endswith("ORDER BY m.id DESC LIMIT :limit OFFSET :offset")
    assert bind == {"priority": 3, "limit": 10, "offset": 20}
    assert rows == [{"id": 2}, {"id": 1}]

@pytest.mark.asyncio
async def test_search_without_limit(repository, mock_session):
    mock_session.execute.return_value = MagicMock()
    fragment, params = build_search_query({})

    await repository.search(fragment, params)

    sql, bind = _executed_sql(mock_session)
    assert sql.endswith("ORDER BY m.id DESC")
    assert "LIMIT" not in sql
    assert bind == {}

@pytest.mark.asyncio
async def test_search_does_not_mutate_params(repository, mock_session):
    mock_session.execute.return_value = MagicMock()
    fragment, params = build_search_query({"search": "invoice"})

    await repository.search(fragment, params, limit=5)

    assert params == {"search": "%invoice%", "search_ip": "%invoice%"}

@pytest.mark.asyncio
async def test_count(repository, mock_session):
    # Setup
    result = MagicMock()
    result.scalar_one.return_value = 17
    mock_session.execute.return_value = result
    fragment, params = build_search_query({"no_debug": True})

    # Execute
    total = await repository.count(fragment, params)

    # Assert
    sql, bind = _executed_sql(mock_session)
    assert sql == "SELECT COUNT(m.id) " + fragment
    assert bind == {"priority_threshold": 7}
    assert total == 17

@pytest.mark.asyncio
async def test_get_existing_by_id_not_found(repository, mock_session):
    # Setup
    result = MagicMock()
    result.scalars.return_value.first.return_value = None
    mock_session.execute.return_value = result

    # Execute and Assert
    with pytest.raises(AppException) as exc_info:
        await repository.get_existing_by_id(5, ErrorKey.ACTIVITY_NOT_FOUND)

    assert exc_info.value.error_key == ErrorKey.ACTIVITY_NOT_FOUND
    assert exc_info.value.status_code == 404
    assert exc_info.value.error_variables == ("5",)

@pytest.mark.asyncio
async def test_get_by_ids_empty(repository, mock_session):
    assert await repository.get_by_ids([]) == []
    mock_session.execute.assert_not_called()

@pytest.mark.asyncio
async def test_delete_commits(repository, mock_session):
    entry = MagicMock()

    await repository.delete(entry)

    mock_session.delete.assert_called_once_with(entry)
    mock_session.commit.assert_called_once()

@pytest.mark.asyncio
async def test_delete_many_commits_once(repository, mock_session):
    entries = [MagicMock(), MagicMock(), MagicMock()]

    deleted = await repository.delete_many(entries)

    assert deleted == 3
    assert mock_session.delete.call_count == 3
    mock_session.commit.assert_called_once()
    mock_session.rollback.assert_not_called()

@pytest.mark.asyncio
async def test_delete_many_rolls_back_on_failure(repository, mock_session):
    entries = [MagicMock(), MagicMock(), MagicMock()]
    mock_session.delete.side_effect = [None, RuntimeError("constraint failed"), None]

    with pytest.raises(RuntimeError):
        await repository.delete_many(entries)

    mock_session.commit.assert_not_called()
    mock_session.rollback.assert_called_once()
