import logging
from enum import Enum
from typing import Optional
from fastapi import Request

from activity_log.core.config.settings import settings


logger = logging.getLogger(__name__)


class ErrorKey(Enum):
    INTERNAL_ERROR = "error_500"
    NOT_FOUND = "not_found"
    CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
    ACTIVITY_NOT_FOUND = "ACTIVITY_NOT_FOUND"
    EMAIL_NOT_FOUND = "EMAIL_NOT_FOUND"
    HISTORY_NOT_FOUND = "HISTORY_NOT_FOUND"


ERROR_MESSAGES = {
    "en": {
        ErrorKey.INTERNAL_ERROR: "An internal server error occurred. Please try again later.",
        ErrorKey.NOT_FOUND: "Resource not found.",
        ErrorKey.CLIENT_NOT_FOUND: "Client not found",
        ErrorKey.ACTIVITY_NOT_FOUND: "Activity log entry #{0} not found.",
        ErrorKey.EMAIL_NOT_FOUND: "Email not found.",
        ErrorKey.HISTORY_NOT_FOUND: "Login history entry not found.",
    },
    "fr": {
        ErrorKey.INTERNAL_ERROR: "Une erreur interne du serveur est survenue. Veuillez réessayer plus tard.",
        ErrorKey.CLIENT_NOT_FOUND: "Client introuvable",
    },
}


def _resolve_language(request: Optional[Request], lang: str) -> str:
    """
    `?lang=` wins over the first Accept-Language tag; region suffixes are
    dropped ("fr-CA" -> "fr"). Unsupported languages map to DEFAULT_LANGUAGE.
    """
    if request is not None:
        requested = request.query_params.get("lang") or request.headers.get("Accept-Language", "")
        lang = requested.split(",")[0].split(";")[0].strip()
    lang = lang.split("-")[0].lower()
    return lang if lang in settings.SUPPORTED_LANGUAGES else settings.DEFAULT_LANGUAGE


def get_error_message(
    error_key: ErrorKey,
    request: Optional[Request] = None,
    lang: str = "en",
    error_variables: tuple[str, ...] = (),
) -> str:
    """Message for `error_key` in the caller's language, English when untranslated."""
    if not isinstance(error_key, ErrorKey):
        raise ValueError(f"Invalid error key: {error_key}")

    messages = ERROR_MESSAGES.get(_resolve_language(request, lang), {})
    message = messages.get(error_key) or ERROR_MESSAGES["en"].get(error_key, error_key.value)
    return message.format(*error_variables)


def validate_error_messages() -> None:
    """Warn about translations missing some of the English keys."""
    expected = set(ERROR_MESSAGES["en"])
    for lang, messages in ERROR_MESSAGES.items():
        missing = expected - set(messages)
        if missing:
            logger.warning(f"Missing {lang} error messages: {sorted(k.name for k in missing)}")
