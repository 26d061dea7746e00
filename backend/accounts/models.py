"""
Accounts app models.

Defines the custom ``User`` model that extends Django's ``AbstractUser``
with the citizen identity used throughout the platform.

The ``citizen_id`` is the only user attribute other apps ever see: the
observations and rewards apps store it as a plain string, never as a
foreign key to this table.
"""

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


def generate_citizen_id() -> str:
    """Return a fresh opaque citizen identifier (``CIT-<32 hex>``)."""
    return f"CIT-{uuid.uuid4().hex}"


class UserRole(models.TextChoices):
    CITIZEN = "CITIZEN", "Citizen"
    ADMIN = "ADMIN", "Administrator"


class User(AbstractUser):
    """
    Custom user model for the citizen science platform.

    Registration requires a username, email and password; ``full_name``
    is optional.  Login is supported via the username *or* the email
    together with the password (see ``accounts.backends``).

    Every user starts as a ``CITIZEN``.  ``ADMIN`` users (and Django
    staff) may perform ledger adjustments and other administrative
    operations.
    """

    citizen_id = models.CharField(
        max_length=100,
        unique=True,
        default=generate_citizen_id,
        editable=False,
        verbose_name="Citizen ID",
        help_text="Opaque identifier shared with the observations and rewards apps.",
    )
    email = models.EmailField(
        unique=True,
        verbose_name="Email Address",
    )
    full_name = models.CharField(
        max_length=150,
        blank=True,
        default="",
        verbose_name="Full Name",
    )
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.CITIZEN,
        verbose_name="Role",
    )

    REQUIRED_FIELDS = ["email"]

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.username} ({self.citizen_id}) - {self.role}"
