from activity_log.db.models.client import AdminModel, ClientModel
from activity_log.db.models.activity import (
    ActivityClientEmailModel,
    ActivityClientHistoryModel,
    ActivitySystemModel,
)

__all__ = [
    "AdminModel",
    "ClientModel",
    "ActivitySystemModel",
    "ActivityClientEmailModel",
    "ActivityClientHistoryModel",
]

models = [
    AdminModel,
    ClientModel,
    ActivitySystemModel,
    ActivityClientEmailModel,
    ActivityClientHistoryModel,
]
