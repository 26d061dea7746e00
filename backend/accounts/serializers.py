"""
Accounts app serializers.

Contains all Request and Response serializers for the accounts API.
Serializers handle field definitions, read/write constraints, and
basic validation.  **No business logic** lives here — all domain
rules are delegated to ``services.py``.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model
from django.contrib.auth.validators import UnicodeUsernameValidator
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

User = get_user_model()


# ═══════════════════════════════════════════════════════════════════
#  Authentication Serializers
# ═══════════════════════════════════════════════════════════════════


class RegisterRequestSerializer(serializers.ModelSerializer):
    """
    Validates new-user registration data.

    Required fields: username, email, password, password_confirm.
    ``full_name`` is optional.

    Uniqueness of ``username`` and ``email`` is checked by the service
    layer so that duplicates surface as 409 Conflict rather than a
    field-level 400.
    """

    password = serializers.CharField(
        write_only=True,
        min_length=8,
        style={"input_type": "password"},
        help_text="Minimum 8 characters.",
    )
    password_confirm = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="Must match 'password'.",
    )

    class Meta:
        model = User
        fields = [
            "username",
            "email",
            "password",
            "password_confirm",
            "full_name",
        ]
        extra_kwargs = {
            "email": {"required": True, "validators": []},
            "username": {"validators": [UnicodeUsernameValidator()]},
        }

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if attrs["password"] != attrs["password_confirm"]:
            raise serializers.ValidationError(
                {"password_confirm": "Passwords do not match."}
            )
        attrs.pop("password_confirm")
        attrs["email"] = attrs["email"].strip().lower()
        return attrs


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Custom SimpleJWT serializer that:

    1. Accepts ``identifier`` + ``password`` instead of
       ``username`` + ``password``; the identifier may be a username
       or an email address.
    2. Resolves the user via ``UsernameOrEmailBackend``.
    3. Injects ``citizen_id``, ``role`` and ``username`` claims into the
       JWT payload so downstream apps can identify the citizen without
       a database round-trip.
    """

    username_field = "identifier"

    @classmethod
    def get_token(cls, user) -> Any:
        token = super().get_token(user)
        token["citizen_id"] = user.citizen_id
        token["role"] = user.role
        token["username"] = user.username
        return token


class TokenValidateSerializer(serializers.Serializer):
    token = serializers.CharField(help_text="Access token to check.")


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(help_text="Refresh token to revoke.")


# ═══════════════════════════════════════════════════════════════════
#  User Serializers
# ═══════════════════════════════════════════════════════════════════


class UserDetailSerializer(serializers.ModelSerializer):
    """Read-only profile of a user, including the citizen id."""

    class Meta:
        model = User
        fields = [
            "id",
            "citizen_id",
            "username",
            "email",
            "full_name",
            "role",
            "is_active",
            "date_joined",
        ]
        read_only_fields = fields


class TokenResponseSerializer(serializers.Serializer):
    """Shape of the register / login response (documentation only)."""

    access = serializers.CharField()
    refresh = serializers.CharField()
    user = UserDetailSerializer()

