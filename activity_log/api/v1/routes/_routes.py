from fastapi import FastAPI

from activity_log.api.v1.routes import router


def register_routers(app: FastAPI) -> None:
    app.include_router(router, prefix="/api")
