"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  The global DRF exception handler in
``core.domain.exception_handler`` maps them to HTTP responses.

Mapping cheatsheet
------------------
┌─────────────────────┬──────────────────────────────┬──────┐
│ Domain Exception    │ DRF / HTTP equivalent        │ Code │
├─────────────────────┼──────────────────────────────┼──────┤
│ DomainError         │ ValidationError / 400        │ 400  │
│ ObservationRejected │ ValidationError / 400        │ 400  │
│ PermissionDenied    │ PermissionDenied / 403       │ 403  │
│ NotFound            │ NotFound / 404               │ 404  │
│ Conflict            │ APIException / 409           │ 409  │
│ ServiceUnavailable  │ APIException / 502           │ 502  │
└─────────────────────┴──────────────────────────────┴──────┘

Recommended usage inside a service::

    from core.domain.exceptions import NotFound

    try:
        return Observation.objects.get(pk=observation_id)
    except Observation.DoesNotExist:
        raise NotFound(f"Observation {observation_id} not found.")
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Catch this at the view boundary and convert to a 400 Bad Request.
    """

    def __init__(self, message: str = "A business rule was violated.") -> None:
        self.message = message
        super().__init__(self.message)


class ObservationRejected(DomainError):
    """
    A submitted observation failed validation and was not stored.

    ``reason`` carries the specific failed rule (missing postcode, no
    measurement or visual tag) so callers can tell the citizen what to
    fix.  Maps to HTTP 400.
    """

    def __init__(self, reason: str | None = None) -> None:
        message = (
            "Invalid observation: must contain postcode AND at least one "
            "measurement or observation."
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.reason = reason


class PermissionDenied(DomainError):
    """
    The authenticated user does not have the required role for this
    operation.

    Maps to HTTP 403.
    """

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)


class NotFound(DomainError):
    """
    The requested resource does not exist.

    Maps to HTTP 404.
    """

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the resource.

    Typical usage: duplicate username or email at registration.
    Maps to HTTP 409.
    """

    def __init__(self, message: str = "The operation conflicts with the current state.") -> None:
        super().__init__(message)


class ServiceUnavailable(DomainError):
    """
    A downstream service could not be reached (connection refused,
    timeout, DNS failure).

    Raised by the gateway client.  The message names the service but
    never includes the underlying transport error text.  Maps to HTTP 502.
    """

    def __init__(self, service: str | None = None) -> None:
        if service:
            message = f"The {service} service is currently unavailable."
        else:
            message = "A downstream service is currently unavailable."
        super().__init__(message)
        self.service = service
