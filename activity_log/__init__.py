import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi_injector import InjectorMiddleware, RequestScopeOptions, attach_injector
from injector import Injector
from activity_log.core.config.logging import init_logging
from activity_log.core.config.settings import settings
from activity_log.api.v1.routes._routes import register_routers
from activity_log.core.exceptions.exception_handler import init_error_handlers
from activity_log.middlewares._middleware import build_middlewares
from activity_log.db.session import db_manager
from activity_log.dependencies.injector import injector


logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    await db_manager.initialize()
    logger.info(f"Activity log API {settings.API_VERSION} started")
    try:
        yield
    finally:
        await db_manager.close()
        logger.info("Activity log API stopped")


def create_app(app_injector: Optional[Injector] = None) -> FastAPI:
    """
    Build the activity log API.
    Pass `app_injector` to swap service or repository bindings, e.g. in tests.
    """
    init_logging()

    app = FastAPI(
        title="Billing activity log",
        version=str(settings.API_VERSION),
        lifespan=_lifespan,
        middleware=build_middlewares(),
    )

    app_injector = app_injector or injector
    app.add_middleware(InjectorMiddleware, injector=app_injector)
    # request scoped AsyncSession is closed by fastapi-injector after each request
    attach_injector(app, app_injector, RequestScopeOptions(enable_cleanup=True))

    init_error_handlers(app)
    register_routers(app)
    return app
