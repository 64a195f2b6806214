"""Maps errors raised under a view to user-safe JSON responses."""

import logging

from django.core.exceptions import PermissionDenied
from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response

from directory.domain.errors import (
    AuthError,
    DomainError,
    ErrorCode,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

INTERNAL_MESSAGE = "Internal server error"


def _status_for(error: DomainError) -> int:
    if isinstance(error, AuthError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(error, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _message_for(detail) -> str:
    if isinstance(detail, dict):
        for field, errors in detail.items():
            return f"{field}: {_message_for(errors)}"
    if isinstance(detail, list) and detail:
        return _message_for(detail[0])
    return str(detail)


def exception_handler(exc: Exception, context: dict) -> Response:
    """DRF EXCEPTION_HANDLER. Never lets a traceback reach the client."""
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else "unknown"

    if isinstance(exc, DatabaseError):
        logger.exception("Document store failure in %s", view_name)
        exc = StoreUnavailableError()

    if isinstance(exc, DomainError):
        response_status = _status_for(exc)
        if response_status >= 500:
            logger.error("%s failed: %s", view_name, exc)
        return Response({"message": exc.message, "code": exc.code.value}, status=response_status)

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, PermissionDenied):
        exc = exceptions.PermissionDenied()

    if isinstance(exc, exceptions.APIException):
        headers = {}
        if getattr(exc, "auth_header", None):
            headers["WWW-Authenticate"] = exc.auth_header
        codes = exc.get_codes()
        code = codes if isinstance(codes, str) else exc.default_code
        return Response(
            {"message": _message_for(exc.detail), "code": str(code).upper()},
            status=exc.status_code,
            headers=headers,
        )

    logger.exception("Unhandled error in %s", view_name)
    return Response(
        {"message": INTERNAL_MESSAGE, "code": ErrorCode.INTERNAL.value},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
