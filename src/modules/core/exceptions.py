"""Standardized API error responses.

DRF's default handler emits ``{"detail": ...}`` or a field -> messages
mapping depending on the exception type.  ``api_exception_handler``
normalises every framework error into a single shape::

    {
        "type": "client_error" | "server_error",
        "errors": [{"code": "...", "detail": "...", "attr": "field" | None}],
    }

Domain errors raised by services are translated by the views and never
reach this handler.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from rest_framework.exceptions import ErrorDetail
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.core.middleware import get_correlation_id

logger = structlog.get_logger(__name__)


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """DRF ``EXCEPTION_HANDLER`` producing the standard error format.

    Returns ``None`` for exceptions DRF does not know how to handle, so
    they propagate as server errors.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    error_type = "server_error" if response.status_code >= 500 else "client_error"
    errors = _flatten_errors(response.data)

    logger.warning(
        "api.error",
        status_code=response.status_code,
        error_type=error_type,
        codes=[error["code"] for error in errors],
    )

    response.data = {"type": error_type, "errors": errors}
    cid = get_correlation_id()
    if cid:
        response.data["correlation_id"] = cid
    return response


def _flatten_errors(data: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    if isinstance(data, list):
        errors: List[Dict[str, Any]] = []
        for index, item in enumerate(data):
            if isinstance(item, (dict, list)):
                child = f"{attr}.{index}" if attr else str(index)
                errors.extend(_flatten_errors(item, child))
            else:
                errors.extend(_flatten_errors(item, attr))
        return errors

    if isinstance(data, dict):
        errors = []
        for key, value in data.items():
            if key == "detail" and attr is None:
                errors.extend(_flatten_errors(value, None))
                continue
            child = f"{attr}.{key}" if attr else str(key)
            if key == "non_field_errors":
                child = attr
            errors.extend(_flatten_errors(value, child))
        return errors

    code = getattr(data, "code", None) if isinstance(data, ErrorDetail) else None
    return [{"code": code or "error", "detail": str(data), "attr": attr}]
