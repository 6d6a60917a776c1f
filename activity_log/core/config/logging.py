"""
Loguru setup for the activity log service.

`init_logging()` is called by the app factory before anything else logs.
Library and module loggers created with `logging.getLogger(__name__)` are
forwarded to loguru, and every record is stamped with the current request's
id, client ip, method and path taken from the context vars below.
"""

import logging
import sys

from contextvars import ContextVar
from loguru import logger
from activity_log.core.config.settings import settings
from activity_log.core.project_path import DATA_VOLUME


request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")
ip_ctx: ContextVar[str] = ContextVar("ip", default="-")
method_ctx: ContextVar[str] = ContextVar("method", default="-")
path_ctx: ContextVar[str] = ContextVar("path", default="-")
status_ctx: ContextVar = ContextVar("status", default=-1)
duration_ctx: ContextVar = ContextVar("duration", default=-1)

REQUEST_CONTEXT_VARS: dict[str, ContextVar] = {
    "request_id": request_id_ctx,
    "ip": ip_ctx,
    "method": method_ctx,
    "path": path_ctx,
}

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "<level>{level: <8}</level> "
    "[<cyan>{extra[request_id]}</cyan>] "
    "<blue>{extra[method]}</blue> <magenta>{extra[path]}</magenta> "
    "<dim>{name}</dim> | <level>{message}</level>"
)

JSON_FORMAT = (
    '{{"timestamp":"{time:YYYY-MM-DD HH:mm:ss.SSS}",'
    '"level":"{level}",'
    '"logger":"{name}",'
    '"message":{message!r},'
    '"request_id":"{extra[request_id]}",'
    '"ip":"{extra[ip]}",'
    '"method":"{extra[method]}",'
    '"path":"{extra[path]}",'
    '"status":"{extra[status]}",'
    '"duration_ms":"{extra[duration]}"}}'
)

# (file name, minimum level, rotation, retention)
FILE_SINKS = (
    ("activity.log", "DEBUG", "10 MB", "10 days"),
    ("error.log", "ERROR", "5 MB", "14 days"),
)


class _InterceptHandler(logging.Handler):
    """Sends stdlib log records to loguru, keeping the original caller."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def _add_request_context(record) -> None:
    extra = record["extra"]
    for key, var in REQUEST_CONTEXT_VARS.items():
        extra.setdefault(key, var.get())
    extra.setdefault("status", status_ctx.get())
    extra.setdefault("duration", duration_ctx.get())


def _library_levels() -> dict[str, int]:
    verbose = logging.DEBUG if settings.DEBUG else logging.INFO
    return {
        "uvicorn": verbose,
        "uvicorn.error": verbose,
        "uvicorn.access": logging.WARNING,
        "sqlalchemy.engine": logging.INFO if settings.DEBUG else logging.WARNING,
        "asyncpg": logging.WARNING,
        "asyncio": logging.WARNING,
    }


def init_logging() -> None:
    logger.remove()
    logger.configure(patcher=_add_request_context)

    logger.add(sys.stdout, level=settings.LOG_LEVEL, colorize=True, format=CONSOLE_FORMAT)

    if settings.LOG_TO_FILE:
        log_dir = DATA_VOLUME / settings.LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)
        for file_name, level, rotation, retention in FILE_SINKS:
            logger.add(
                log_dir / file_name,
                level=level,
                rotation=rotation,
                retention=retention,
                compression="zip",
                format=JSON_FORMAT,
            )

    logging.root.handlers[:] = [_InterceptHandler()]
    logging.root.setLevel(settings.LOG_LEVEL)
    for name, level in _library_levels().items():
        logging.getLogger(name).setLevel(level)

    logger.debug(f"Logging ready (level={settings.LOG_LEVEL}, files={settings.LOG_TO_FILE})")
