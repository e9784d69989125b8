"""Server error handling - sanitizes errors for client responses.

Respondents never see internal compiler or interpreter details: every error
is logged in full server-side and answered with a safe message and a
reference code for correlation.
"""

import logging
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse

from scriptflow.core.errors import (
    GraphError,
    InvalidAnswerError,
    ScriptError,
    ScriptflowError,
    SessionCompleteError,
)

logger = logging.getLogger(__name__)

# Error messages safe to expose to clients
SAFE_ERROR_MESSAGES = {
    "GraphError": "The builder document could not be read.",
    "ScriptError": "The service script could not be read.",
    "InvalidAnswerError": "That answer is not one of the choices. Please try again.",
    "SessionCompleteError": "This conversation is already complete.",
    "StuckTransitionError": "This service script is broken. Please contact the business.",
    "UnknownNodeError": "This service script is broken. Please contact the business.",
}

DEFAULT_ERROR_MESSAGE = "An internal error occurred. Please try again later."
SUPPORT_MESSAGE = "If this problem persists, contact support with the reference code."


def create_error_reference() -> str:
    """Generate unique error reference for client/server correlation."""
    return f"ERR-{uuid.uuid4().hex[:8].upper()}"


def get_safe_error_message(exception: Exception) -> str:
    """Get client-safe error message for exception type."""
    return SAFE_ERROR_MESSAGES.get(type(exception).__name__, DEFAULT_ERROR_MESSAGE)


def get_http_status_for_exception(exception: Exception) -> int:
    """Map exception types to appropriate HTTP status codes."""
    # Client errors (4xx)
    if isinstance(exception, (GraphError, ScriptError)):
        return 400
    if isinstance(exception, InvalidAnswerError):
        return 422
    if isinstance(exception, SessionCompleteError):
        return 409

    # StuckTransitionError, UnknownNodeError: corrupt stored script
    return 500


def log_error_with_context(error_ref: str, exception: Exception, endpoint: str | None) -> None:
    """Log full error details server-side for debugging."""
    logger.error(
        f"[{error_ref}] Error in {endpoint or 'unknown'}: {type(exception).__name__}: {exception}",
        exc_info=not isinstance(exception, ScriptflowError),
        extra={
            "error_reference": error_ref,
            "endpoint": endpoint,
            "exception_type": type(exception).__name__,
        },
    )


def error_payload(exception: Exception, error_ref: str) -> dict[str, str]:
    return {
        "error": get_safe_error_message(exception),
        "reference": error_ref,
        "message": SUPPORT_MESSAGE,
    }


async def scriptflow_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for engine errors raised while serving a request."""
    error_ref = create_error_reference()
    log_error_with_context(error_ref, exc, request.url.path)
    return JSONResponse(
        status_code=get_http_status_for_exception(exc),
        content=error_payload(exc, error_ref),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for uncaught exceptions."""
    error_ref = create_error_reference()
    log_error_with_context(error_ref, exc, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": DEFAULT_ERROR_MESSAGE,
            "reference": error_ref,
            "message": SUPPORT_MESSAGE,
        },
    )
