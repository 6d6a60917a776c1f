import pytest
from datetime import date
from unittest.mock import AsyncMock

from fastapi.testclient import TestClient
from injector import InstanceProvider

from activity_log import create_app
from activity_log.core.exceptions.error_messages import ErrorKey
from activity_log.core.exceptions.exception_classes import AppException
from activity_log.db.models import ActivityClientEmailModel, ActivitySystemModel
from activity_log.dependencies.injector import create_injector
from activity_log.schemas.activity import ActivityPage, ActivitySearchParams
from activity_log.services.activity import ActivityService


@pytest.fixture
def mock_service():
    return AsyncMock(spec=ActivityService)

@pytest.fixture
def client(mock_service):
    def override(binder):
        binder.bind(ActivityService, to=InstanceProvider(mock_service))

    app = create_app(create_injector(override))
    # No context manager: the lifespan would try to reach the database
    return TestClient(app)


def test_search_passes_filters(client, mock_service):
    # Setup
    mock_service.search.return_value = ActivityPage(items=[], total=0, skip=0, limit=25)

    # Execute
    response = client.get(
        "/api/activity/log",
        params={"only_clients": "yes", "priority": 3, "no_info": "1", "limit": 25},
    )

    # Assert
    assert response.status_code == 200
    assert response.json() == {"items": [], "total": 0, "skip": 0, "limit": 25}
    search_params = mock_service.search.call_args.args[0]
    assert isinstance(search_params, ActivitySearchParams)
    assert search_params.to_filters() == {"only_clients": "yes", "priority": 3, "no_info": True}

@pytest.mark.parametrize("params", [
    {"priority": 9},
    {"limit": 501},
    {"skip": -1},
])
def test_search_rejects_invalid_params(client, mock_service, params):
    response = client.get("/api/activity/log", params=params)

    assert response.status_code == 422
    mock_service.search.assert_not_called()

def test_log_event(client, mock_service):
    mock_service.log_event.return_value = ActivitySystemModel(
        id=1, priority=3, message="Payment failed", client_id=4
    )

    response = client.post("/api/activity/log", json={"message": "Payment failed", "priority": 3, "client_id": 4})

    assert response.status_code == 200
    assert response.json()["id"] == 1
    mock_service.log_event.assert_called_once_with(
        "Payment failed", priority=3, client_id=4, admin_id=None, ip=None
    )

def test_delete_not_found(client, mock_service):
    # Setup
    mock_service.delete.side_effect = AppException(
        ErrorKey.ACTIVITY_NOT_FOUND, status_code=404, error_variables=("9",)
    )

    # Execute
    response = client.delete("/api/activity/log/9")

    # Assert
    assert response.status_code == 404
    body = response.json()
    assert body["error_key"] == ErrorKey.ACTIVITY_NOT_FOUND.value
    assert body["error"] == "Activity log entry #9 not found."

def test_batch_delete(client, mock_service):
    mock_service.batch_delete.return_value = 2

    response = client.post("/api/activity/log/batch-delete", json={"ids": [1, 2, 3]})

    assert response.status_code == 200
    assert response.json() == {"deleted": 2}
    mock_service.batch_delete.assert_called_once_with([1, 2, 3])

def test_batch_delete_requires_ids(client, mock_service):
    response = client.post("/api/activity/log/batch-delete", json={"ids": []})

    assert response.status_code == 422

def test_rm_by_client_translated_error(client, mock_service):
    mock_service.rm_by_client_id.side_effect = AppException(ErrorKey.CLIENT_NOT_FOUND, status_code=404)

    response = client.delete("/api/activity/client/5", params={"lang": "fr"})

    assert response.status_code == 404
    assert response.json()["error"] == "Client introuvable"

def test_get_history(client, mock_service):
    mock_service.to_api_array.return_value = {
        "id": 3,
        "ip": "172.16.0.4",
        "created_at": None,
        "client": {"id": 7, "first_name": "John", "last_name": "Doe", "email": "john@example.com"},
    }

    response = client.get("/api/activity/history/3")

    assert response.status_code == 200
    assert response.json()["client"]["email"] == "john@example.com"
    mock_service.get_history.assert_called_once_with(3)

def test_error_language_from_accept_language_header(client, mock_service):
    mock_service.get_email.side_effect = AppException(ErrorKey.CLIENT_NOT_FOUND, status_code=404)

    response = client.get("/api/activity/email/4", headers={"Accept-Language": "fr-FR,fr;q=0.9,en;q=0.8"})

    assert response.status_code == 404
    assert response.json()["error"] == "Client introuvable"

def test_log_email(client, mock_service):
    mock_service.log_email.return_value = True

    response = client.post(
        "/api/activity/email",
        json={"subject": "Your invoice", "client_id": 7, "recipients": "john@example.com"},
    )

    assert response.status_code == 200
    assert response.json() == {"result": True}
    mock_service.log_email.assert_called_once_with(
        subject="Your invoice",
        client_id=7,
        sender=None,
        recipients="john@example.com",
        content_html=None,
        content_text=None,
    )

def test_log_email_requires_subject(client, mock_service):
    response = client.post("/api/activity/email", json={"client_id": 7})

    assert response.status_code == 422
    mock_service.log_email.assert_not_called()

def test_get_client_emails_passes_date_range(client, mock_service):
    # Setup
    mock_service.get_client_emails.return_value = [
        ActivityClientEmailModel(id=2, client_id=7, subject="Invoice"),
    ]

    # Execute
    response = client.get(
        "/api/activity/email",
        params={"client_id": 7, "from_date": "2024-05-03", "to_date": "2024-05-03", "limit": 10},
    )

    # Assert
    assert response.status_code == 200
    assert [e["id"] for e in response.json()] == [2]
    client_id, filter_obj = mock_service.get_client_emails.call_args.args
    assert client_id == 7
    assert filter_obj.from_date == date(2024, 5, 3)
    assert filter_obj.to_date == date(2024, 5, 3)
    assert filter_obj.limit == 10

def test_get_client_emails_requires_client_id(client, mock_service):
    response = client.get("/api/activity/email")

    assert response.status_code == 422
