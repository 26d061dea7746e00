"""
core.domain.access — Role guards shared by every app's service layer.

Citizens have one of two roles (see ``accounts.models.UserRole``).
Administrative operations (ledger adjustments, resets, deletes,
recalculation) are reserved for administrators; everything else is
open to any citizen.

    ┌─────────┐      ┌────────────────┐      ┌──────────────────┐
    │  View   │─────▶│  App service   │─────▶│ core.domain      │
    │ (thin)  │      │ (owns logic)   │      │   .access        │
    └─────────┘      └────────────────┘      └──────────────────┘

Usage::

    from core.domain.access import require_administrator

    def reset(self, citizen_id, *, requested_by):
        require_administrator(requested_by)
        ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.domain.exceptions import PermissionDenied

if TYPE_CHECKING:
    from accounts.models import User

ADMIN_ROLE = "ADMIN"


def is_administrator(user: User | None) -> bool:
    """
    Return ``True`` for staff, superusers, and users holding the
    ``ADMIN`` role.  Anonymous users are never administrators.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return False
    if user.is_staff or user.is_superuser:
        return True
    return getattr(user, "role", None) == ADMIN_ROLE


def require_administrator(user: User | None, message: str = "") -> None:
    """
    Guard that raises ``PermissionDenied`` unless ``user`` is an
    administrator.

    Raises:
        core.domain.exceptions.PermissionDenied
    """
    if not is_administrator(user):
        raise PermissionDenied(
            message or "Only administrators may perform this action."
        )


def citizen_id_of(user: User | None) -> str | None:
    """Return the citizen id of an authenticated user, else ``None``."""
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return getattr(user, "citizen_id", None) or None
