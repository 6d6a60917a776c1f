import logging
from injector import Module, provider, singleton
from sqlalchemy.ext.asyncio import AsyncSession

from fastapi_injector import request_scope
from fastapi_injector import RequestScopeFactory
from activity_log.db.session import db_manager
from activity_log.repositories.activity import (
    ActivityClientEmailRepository,
    ActivityClientHistoryRepository,
    ActivitySystemRepository,
)
from activity_log.repositories.clients import ClientRepository
from activity_log.services.activity import ActivityService


logger = logging.getLogger(__name__)


class Dependencies(Module):

    # ------------------------------------------------------------------
    # PROVIDERS
    # ------------------------------------------------------------------
    @provider
    @request_scope
    def provide_session(
        self,
    ) -> AsyncSession:
        """
        Returns an AsyncSession instance managed by fastapi-injector's request scope.
        """
        logger.debug("DI: opening request session")
        session_factory = db_manager.get_session_factory()
        return session_factory()

    def configure(self, binder):
        binder.bind(ActivityService, scope=request_scope)
        binder.bind(ActivitySystemRepository, scope=request_scope)
        binder.bind(ActivityClientEmailRepository, scope=request_scope)
        binder.bind(ActivityClientHistoryRepository, scope=request_scope)

        binder.bind(ClientRepository, scope=request_scope)

        binder.bind(RequestScopeFactory, scope=singleton)
