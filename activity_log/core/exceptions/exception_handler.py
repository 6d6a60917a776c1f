import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from activity_log.core.config.settings import settings
from activity_log.core.exceptions.error_messages import ErrorKey, get_error_message, validate_error_messages
from activity_log.core.exceptions.exception_classes import AppException


logger = logging.getLogger(__name__)


def _app_exception_body(request: Request, error: AppException) -> dict:
    return {
        "error": get_error_message(
            error.error_key,
            request=request,
            error_variables=error.error_variables,
        ),
        "error_code": error.status_code,
        "error_key": error.error_key.value,
        # internal detail only leaves the process in debug mode
        "error_detail": error.error_detail if settings.DEBUG else None,
    }


def init_error_handlers(app: FastAPI) -> None:
    validate_error_messages()

    @app.exception_handler(AppException)
    def handle_app_exception(request: Request, error: AppException):
        if error.error_detail:
            logger.error(f"{error.error_key.value}: {error.error_detail}")
        elif error.status_code == 404:
            logger.debug(f"Not found on {request.url.path}: {error.error_key.value}")
        else:
            logger.info(f"Rejected {request.method} {request.url.path}: {error.error_key.value}")
        return JSONResponse(
            content=jsonable_encoder(_app_exception_body(request, error)),
            status_code=error.status_code,
        )

    @app.exception_handler(500)
    def handle_internal_server_error(request: Request, _: Exception):
        body = {"error": get_error_message(ErrorKey.INTERNAL_ERROR, request=request)}
        return JSONResponse(content=jsonable_encoder(body), status_code=500)
