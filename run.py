"""
Development entry point: `python run.py`.
Set RELOAD=true to restart on code changes.
"""

import os
import uvicorn

from activity_log import create_app
from activity_log.core.config.settings import settings


app = create_app()


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "false").lower() == "true"


if __name__ == "__main__":
    uvicorn.run(
        "run:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=settings.FASTAPI_RUN_PORT,
        reload=_env_flag("RELOAD"),
        reload_dirs=["./activity_log"],
        log_level=settings.LOG_LEVEL.lower(),
        log_config=None,  # loguru owns the handlers
        workers=int(os.environ.get("WORKERS", 1)),
        access_log=_env_flag("ACCESS_LOG"),
        proxy_headers=_env_flag("PROXY_HEADERS"),
    )
