from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import (
    MethodNotAllowed,
    NotFound,
    ParseError,
    PermissionDenied,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

GENERIC_SERVER_MESSAGE = _("Something went wrong")

# (exception types, code, fallback message, keep DRF payload as details)
DRF_EXCEPTION_CODES = (
    (ValidationError, "VALIDATION_ERROR", _("Validation failed"), True),
    (ParseError, "VALIDATION_ERROR", _("Malformed request"), True),
    ((NotFound, Http404), "NOT_FOUND", _("Resource not found"), False),
    (PermissionDenied, "FORBIDDEN", _("Permission denied"), False),
    (MethodNotAllowed, "METHOD_NOT_ALLOWED", _("Method not allowed"), False),
    (UnsupportedMediaType, "UNSUPPORTED_MEDIA_TYPE", _("Unsupported media type"), False),
)

STATUS_CODE_DEFAULTS: Dict[int, Tuple[str, Any]] = {
    status.HTTP_403_FORBIDDEN: ("FORBIDDEN", _("Permission denied")),
    status.HTTP_422_UNPROCESSABLE_ENTITY: ("UNPROCESSABLE_ENTITY", _("Unprocessable entity")),
    status.HTTP_501_NOT_IMPLEMENTED: ("NOT_IMPLEMENTED", _("Not implemented")),
    status.HTTP_503_SERVICE_UNAVAILABLE: ("SERVICE_UNAVAILABLE", _("Service temporarily unavailable")),
}


class ApplicationError(Exception):
    """
    Error raised from views or services that already knows its envelope.

    The status comes from ``status_code`` or, when omitted, from the code
    mapping in ``apps.api.utils``.
    """

    def __init__(
        self,
        code: str,
        message: Any,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[Any] = None,
        extra: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(str(message))
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.hint = hint
        self.extra = extra

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            hint=self.hint,
            extra=self.extra,
        )


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Turn any exception raised inside a DRF view into the shared error envelope."""
    bound_logger = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        response = exc.to_response()
        bound_logger.info(
            "Handled application error",
            code=exc.code,
            status=response.status_code,
        )
        return response

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(_django_validation_messages(exc))

    response = drf_exception_handler(exc, context)
    if response is None:
        bound_logger.exception("Unhandled exception bubbled to global handler")
        return error_response(
            "SERVER_ERROR",
            GENERIC_SERVER_MESSAGE,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    status_code = response.status_code
    code, message, details = _describe(exc, response.data, status_code)
    if status_code >= 500:
        bound_logger.error("Converted server error", code=code, status=status_code)
    else:
        bound_logger.info("Converted API exception", code=code, status=status_code)
    headers = dict(response.headers) if getattr(response, "headers", None) else None
    return error_response(code, message, details, http_status=status_code, headers=headers)


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _django_validation_messages(exc: DjangoValidationError):
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    return list(exc.messages)


def _describe(exc: Exception, payload: Any, status_code: int) -> Tuple[str, str, Optional[Any]]:
    if status_code >= 500:
        return "SERVER_ERROR", str(GENERIC_SERVER_MESSAGE), None
    for types, code, fallback, keep_details in DRF_EXCEPTION_CODES:
        if isinstance(exc, types):
            return code, _message_from(payload, fallback), payload if keep_details else None

    code, fallback = STATUS_CODE_DEFAULTS.get(status_code, ("UNKNOWN_ERROR", _("Request failed")))
    details = payload if isinstance(payload, (dict, list)) and payload else None
    return code, _message_from(payload, fallback), details


def _message_from(payload: Any, fallback: Any) -> str:
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("detail"), str):
        return payload["detail"]
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return payload[0]
    return str(fallback)


__all__ = ["ApplicationError", "global_exception_handler"]
