import time
import uuid
from loguru import logger
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette_context import context as sctx
from starlette_context.middleware import RawContextMiddleware
from starlette_context.plugins import RequestIdPlugin

from activity_log.core.config.settings import settings
from activity_log.core.config.logging import (
    REQUEST_CONTEXT_VARS,
    duration_ctx,
    status_ctx,
)


DEFAULT_ORIGINS = (
    "http://localhost:8080",
    "http://127.0.0.1:8080",
)


def get_allowed_origins() -> list[str]:
    """Local admin origins plus the comma separated CORS_ALLOWED_ORIGINS."""
    origins = list(DEFAULT_ORIGINS)
    extra = (settings.CORS_ALLOWED_ORIGINS or "").split(",")
    origins.extend(o.strip() for o in extra if o.strip() and o.strip() not in origins)
    return origins


def build_middlewares() -> list[Middleware]:
    """
    Outermost first: request id, log context, CORS, version header.
    The log context middleware reads the id created by RawContextMiddleware,
    so the two must stay in this order.
    """
    return [
        Middleware(RawContextMiddleware, plugins=(RequestIdPlugin(),)),
        Middleware(RequestContextMiddleware),
        Middleware(
            CORSMiddleware,
            allow_origins=get_allowed_origins(),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        ),
        Middleware(VersionHeaderMiddleware),
    ]


def _request_fields(request: Request) -> dict[str, str]:
    return {
        "request_id": sctx.get("X-Request-ID") or request.headers.get("X-Request-ID") or str(uuid.uuid4()),
        "ip": request.client.host if request.client else "-",
        "method": request.method,
        "path": request.url.path,
    }


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds request fields into the logging context vars and logs each request once it ends."""

    async def dispatch(self, request: Request, call_next):
        fields = _request_fields(request)
        tokens = [(REQUEST_CONTEXT_VARS[k], REQUEST_CONTEXT_VARS[k].set(v)) for k, v in fields.items()]
        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            elapsed = f"{(time.perf_counter() - started) * 1000:.2f}"
            status_ctx.set(status)
            duration_ctx.set(elapsed)
            bound = logger.bind(**fields, status=status, duration=elapsed)
            if status >= 500:
                bound.error(f"{fields['method']} {fields['path']} failed with {status}")
            else:
                bound.info(f"{fields['method']} {fields['path']} -> {status}")
            for var, token in tokens:
                var.reset(token)
            status_ctx.set(-1)
            duration_ctx.set(-1)


class VersionHeaderMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-API-Version"] = str(settings.API_VERSION)
        return response
