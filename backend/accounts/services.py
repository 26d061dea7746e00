"""
Accounts Service Layer.

This module is the **single source of truth** for all business logic
within the ``accounts`` app.  Views must remain *thin*: they validate
input through serializers, call a service function / method, and
return the result wrapped in a DRF ``Response``.

Architecture
------------
- ``UserRegistrationService``  — new citizen creation flow.
- ``AuthenticationService``    — JWT issuance for an authenticated user.
- ``TokenService``             — token validation and logout (revocation).
- ``AvailabilityService``      — username / email availability checks.
"""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken

from core.domain.exceptions import Conflict, DomainError

from .models import UserRole

User = get_user_model()

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Registration Service
# ═══════════════════════════════════════════════════════════════════


class UserRegistrationService:
    """Encapsulates the citizen registration flow."""

    @staticmethod
    def register_user(validated_data: dict[str, Any]) -> User:
        """
        Create a new user with the ``CITIZEN`` role and a fresh
        citizen id.

        Parameters
        ----------
        validated_data : dict
            Cleaned data from ``RegisterRequestSerializer`` containing
            ``username``, ``email``, ``password`` and optionally
            ``full_name``.

        Returns
        -------
        User
            The newly created (and saved) ``User`` instance.

        Raises
        ------
        core.domain.exceptions.Conflict
            If the username or email is already taken.
        """
        validated_data.pop("password_confirm", None)
        password = validated_data.pop("password")

        # Pre-check uniqueness — deterministic, field-specific errors
        if User.objects.filter(username=validated_data.get("username")).exists():
            raise Conflict("Username is already taken.")
        if User.objects.filter(email__iexact=validated_data.get("email")).exists():
            raise Conflict("Email is already registered.")

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    password=password,
                    role=UserRole.CITIZEN,
                    **validated_data,
                )
        except IntegrityError:
            raise Conflict(
                "A user with this username or email already exists."
            )

        logger.info(
            "Registered user %s with citizen id %s", user.username, user.citizen_id
        )
        return user


# ═══════════════════════════════════════════════════════════════════
#  Authentication Service
# ═══════════════════════════════════════════════════════════════════


class AuthenticationService:
    """Issues JWT pairs carrying the citizen claims."""

    @staticmethod
    def generate_tokens(user: User) -> dict[str, str]:
        """
        Issue a JWT access/refresh token pair for the given user.

        The refresh token is built by ``CustomTokenObtainPairSerializer``
        so freshly registered users receive the same ``citizen_id`` and
        ``role`` claims as users who log in.

        Returns
        -------
        dict
            ``{"access": "<token>", "refresh": "<token>"}``.
        """
        from .serializers import CustomTokenObtainPairSerializer

        refresh = CustomTokenObtainPairSerializer.get_token(user)
        return {
            "access": str(refresh.access_token),
            "refresh": str(refresh),
        }


# ═══════════════════════════════════════════════════════════════════
#  Token Service
# ═══════════════════════════════════════════════════════════════════


class TokenService:

    @staticmethod
    def is_valid_access_token(token: str) -> bool:
        """Return ``True`` when ``token`` is a well-formed, unexpired access token."""
        try:
            AccessToken(token)
        except TokenError:
            return False
        return True

    @staticmethod
    def logout(refresh_token: str) -> None:
        """
        Revoke a refresh token by adding it to SimpleJWT's blacklist.

        Raises
        ------
        core.domain.exceptions.DomainError
            If the token is malformed, expired, or already revoked.
        """
        try:
            RefreshToken(refresh_token).blacklist()
        except TokenError as exc:
            logger.warning("Rejected logout with unusable refresh token: %s", exc)
            raise DomainError("Invalid, expired or already revoked refresh token.")
        logger.info("Refresh token revoked")


# ═══════════════════════════════════════════════════════════════════
#  Availability Service
# ═══════════════════════════════════════════════════════════════════


class AvailabilityService:

    @staticmethod
    def username_available(username: str) -> bool:
        return not User.objects.filter(username=username).exists()

    @staticmethod
    def email_available(email: str) -> bool:
        return not User.objects.filter(email__iexact=email.strip()).exists()
