"""
Accounts app tests — registration, login and token endpoints.

Covers:
  1. Registration creates a CITIZEN with a generated citizen id
  2. Duplicate username / email rejected with 409
  3. Login with username or email identifier
  4. Wrong password and inactive users get 401
  5. /me/, /validate/, /logout/ and availability checks
"""

from __future__ import annotations

import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import User, UserRole

REGISTER_URL = "/api/auth/register/"
LOGIN_URL = "/api/auth/login/"


def _register_payload(**overrides) -> dict:
    """Return a valid registration payload, with optional overrides."""
    data = {
        "username": "newuser",
        "password": "Str0ng!Pass123",
        "password_confirm": "Str0ng!Pass123",
        "email": "NewUser@Example.com",
        "full_name": "New User",
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestRegistration:

    def test_register_creates_citizen(self, api_client: APIClient):
        resp = api_client.post(REGISTER_URL, _register_payload(), format="json")
        assert resp.status_code == status.HTTP_201_CREATED, resp.data
        assert "access" in resp.data and "refresh" in resp.data

        user = User.objects.get(username="newuser")
        assert user.check_password("Str0ng!Pass123")
        assert user.role == UserRole.CITIZEN
        assert user.email == "newuser@example.com"
        assert user.citizen_id.startswith("CIT-")
        assert resp.data["user"]["citizen_id"] == user.citizen_id

    def test_password_mismatch_is_400(self, api_client: APIClient):
        resp = api_client.post(
            REGISTER_URL, _register_payload(password_confirm="Different!123"), format="json"
        )
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert "password_confirm" in resp.data

    def test_duplicate_username_is_409(self, api_client: APIClient, create_user):
        create_user(username="newuser")
        resp = api_client.post(REGISTER_URL, _register_payload(), format="json")
        assert resp.status_code == status.HTTP_409_CONFLICT
        assert resp.data["detail"] == "Username is already taken."

    def test_duplicate_email_is_409_regardless_of_case(self, api_client: APIClient, create_user):
        create_user(username="someone", email="newuser@example.com")
        resp = api_client.post(REGISTER_URL, _register_payload(), format="json")
        assert resp.status_code == status.HTTP_409_CONFLICT
        assert resp.data["detail"] == "Email is already registered."

    def test_citizen_ids_are_unique(self, create_user):
        first, second = create_user(), create_user()
        assert first.citizen_id != second.citizen_id


@pytest.mark.django_db
class TestLogin:

    def test_login_with_username(self, api_client: APIClient, create_user):
        user = create_user(username="alice", password="AlicePass123!")
        resp = api_client.post(
            LOGIN_URL, {"identifier": "alice", "password": "AlicePass123!"}, format="json"
        )
        assert resp.status_code == status.HTTP_200_OK, resp.data
        assert resp.data["user"]["citizen_id"] == user.citizen_id

    def test_login_with_email(self, api_client: APIClient, create_user):
        create_user(username="alice", email="alice@example.com", password="AlicePass123!")
        resp = api_client.post(
            LOGIN_URL, {"identifier": "ALICE@example.com", "password": "AlicePass123!"}, format="json"
        )
        assert resp.status_code == status.HTTP_200_OK, resp.data

    def test_wrong_password_is_401(self, api_client: APIClient, create_user):
        create_user(username="alice", password="AlicePass123!")
        resp = api_client.post(
            LOGIN_URL, {"identifier": "alice", "password": "wrong-password"}, format="json"
        )
        assert resp.status_code == status.HTTP_401_UNAUTHORIZED
        assert resp["WWW-Authenticate"].startswith("Bearer")

    def test_inactive_user_is_401(self, api_client: APIClient, create_user):
        create_user(username="alice", password="AlicePass123!", is_active=False)
        resp = api_client.post(
            LOGIN_URL, {"identifier": "alice", "password": "AlicePass123!"}, format="json"
        )
        assert resp.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestTokens:

    def test_me_requires_authentication(self, api_client: APIClient):
        resp = api_client.get(reverse("accounts:me"))
        assert resp.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_returns_profile(self, api_client: APIClient, auth_header):
        header = auth_header(username="bob")
        api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])
        resp = api_client.get(reverse("accounts:me"))
        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["username"] == "bob"
        assert resp.data["role"] == UserRole.CITIZEN

    def test_validate_token(self, api_client: APIClient, auth_header):
        token = auth_header()["Authorization"].split(" ", 1)[1]
        resp = api_client.post(reverse("accounts:token-validate"), {"token": token}, format="json")
        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["valid"] is True

    def test_validate_garbage_token_is_401(self, api_client: APIClient):
        resp = api_client.post(reverse("accounts:token-validate"), {"token": "nope"}, format="json")
        assert resp.status_code == status.HTTP_401_UNAUTHORIZED
        assert resp.data["valid"] is False

    def test_logout_revokes_refresh_token(self, api_client: APIClient):
        register = api_client.post(REGISTER_URL, _register_payload(), format="json")
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {register.data['access']}")
        refresh = register.data["refresh"]

        resp = api_client.post(reverse("accounts:logout"), {"refresh": refresh}, format="json")
        assert resp.status_code == status.HTTP_200_OK

        again = api_client.post(reverse("accounts:logout"), {"refresh": refresh}, format="json")
        assert again.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestAvailability:

    def test_username_availability(self, api_client: APIClient, create_user):
        create_user(username="taken")
        url = reverse("accounts:check-username")
        assert api_client.get(url, {"username": "taken"}).data["available"] is False
        assert api_client.get(url, {"username": "free"}).data["available"] is True

    def test_email_availability(self, api_client: APIClient, create_user):
        create_user(username="x", email="x@example.com")
        resp = api_client.get(reverse("accounts:check-email"), {"email": "X@example.com"})
        assert resp.data["available"] is False

    def test_missing_parameter_is_400(self, api_client: APIClient):
        resp = api_client.get(reverse("accounts:check-username"))
        assert resp.status_code == status.HTTP_400_BAD_REQUEST

    def test_health(self, api_client: APIClient):
        resp = api_client.get(reverse("accounts:health"))
        assert resp.data == {"status": "UP", "service": "auth"}
