"""
Global DRF exception handler for the citizen-science API.

Services raise the errors in ``core.domain.exceptions``; this handler is
the one place that turns them into HTTP.  Every mapped error becomes a
``{"detail": "<message>"}`` body:

====================  ======
ObservationRejected   400
PermissionDenied      403
NotFound              404
Conflict              409
ServiceUnavailable    502
other DomainError     400
====================  ======

Wired up through ``REST_FRAMEWORK["EXCEPTION_HANDLER"]`` in
``citizenscience/settings.py``.
"""

from __future__ import annotations

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from core.domain.exceptions import (
    Conflict,
    DomainError,
    NotFound,
    ObservationRejected,
    PermissionDenied,
    ServiceUnavailable,
)

logger = logging.getLogger(__name__)

# Checked in order, so subclasses precede DomainError.
_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ObservationRejected, 400),
    (PermissionDenied, 403),
    (NotFound, 404),
    (Conflict, 409),
    (ServiceUnavailable, 502),
    (DomainError, 400),
)


def domain_exception_handler(exc: Exception, context: dict) -> Response | None:
    """
    Let DRF render its own exceptions (validation, authentication,
    throttling); map domain errors by ``_STATUS_BY_ERROR``.  Anything
    else returns ``None`` and surfaces as a generic 500.
    """
    response = drf_exception_handler(exc, context)
    if response is not None or not isinstance(exc, DomainError):
        return response

    status_code = next(code for error, code in _STATUS_BY_ERROR if isinstance(exc, error))
    view = context.get("view")
    logger.warning(
        "%s -> %d in %s: %s",
        type(exc).__name__,
        status_code,
        type(view).__name__ if view is not None else "unknown view",
        exc,
    )
    return Response({"detail": str(exc)}, status=status_code)
