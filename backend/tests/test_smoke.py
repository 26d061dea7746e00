"""
Smoke tests — verify that Django boots, URL routing resolves, and
the core domain modules behave.

These tests do NOT require real data — they just prove the plumbing
works.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from django.urls import resolve, reverse


# ════════════════════════════════════════════════════════════════════
#  URL Routing Smoke Tests
# ════════════════════════════════════════════════════════════════════

class TestURLRouting:
    """Ensure all top-level app URL namespaces resolve without 404."""

    EXPECTED_URLS = [
        # (url_name, expected_path)
        ("accounts:register",            "/api/auth/register/"),
        ("accounts:login",               "/api/auth/login/"),
        ("observations:observation-list", "/api/observations/"),
        ("observations:observation-recent", "/api/observations/recent/"),
        ("observations:health",          "/api/observations/health/"),
        ("rewards:leaderboard",          "/api/rewards/leaderboard/"),
        ("rewards:leaderboard-top3",     "/api/rewards/leaderboard/top3/"),
        ("rewards:statistics",           "/api/rewards/statistics/"),
        ("core:dashboard-stats",         "/api/core/dashboard/"),
        ("core:system-constants",        "/api/core/constants/"),
        ("gateway:observations",         "/gateway/observations/"),
        ("gateway:health",               "/gateway/health/"),
    ]

    @pytest.mark.parametrize("url_name,expected_path", EXPECTED_URLS)
    def test_url_reverses(self, url_name: str, expected_path: str):
        """Named URL reverses to the expected path."""
        url = reverse(url_name)
        assert url == expected_path, f"{url_name} resolved to {url}, expected {expected_path}"

    @pytest.mark.parametrize("url_name,expected_path", EXPECTED_URLS)
    def test_url_resolve_matches_view(self, url_name: str, expected_path: str):
        """Path resolves to a view function (not a 404)."""
        match = resolve(expected_path)
        assert match.func is not None

    @pytest.mark.parametrize("citizen_id", ["CIT-0a1b", "alice@example.com", "c_1.2:3"])
    def test_citizen_converter_accepts(self, citizen_id: str):
        url = reverse("rewards:citizen-detail", kwargs={"citizen_id": citizen_id})
        assert resolve(url).kwargs["citizen_id"] == citizen_id

    def test_observation_detail_requires_uuid(self):
        from django.urls import Resolver404

        with pytest.raises(Resolver404):
            resolve("/api/observations/not-a-uuid/")


# ════════════════════════════════════════════════════════════════════
#  Exception Behaviour Tests
# ════════════════════════════════════════════════════════════════════

class TestDomainExceptions:
    """Unit tests for domain exception classes."""

    def test_hierarchy(self):
        from core.domain.exceptions import (
            Conflict,
            DomainError,
            NotFound,
            ObservationRejected,
            PermissionDenied,
            ServiceUnavailable,
        )
        for exc_class in (Conflict, NotFound, ObservationRejected, PermissionDenied, ServiceUnavailable):
            assert issubclass(exc_class, DomainError)

    def test_domain_error_message(self):
        from core.domain.exceptions import DomainError
        assert str(DomainError("test message")) == "test message"

    def test_observation_rejected_carries_reason(self):
        from core.domain.exceptions import ObservationRejected
        err = ObservationRejected("missing postcode")
        assert "postcode" in str(err)
        assert "missing postcode" in str(err)

    def test_service_unavailable_names_service(self):
        from core.domain.exceptions import ServiceUnavailable
        err = ServiceUnavailable("rewards")
        assert str(err) == "The rewards service is currently unavailable."
        assert err.service == "rewards"


# ════════════════════════════════════════════════════════════════════
#  Access Helper Unit Tests
# ════════════════════════════════════════════════════════════════════

def _user(**fields) -> SimpleNamespace:
    defaults = {
        "is_authenticated": True,
        "is_staff": False,
        "is_superuser": False,
        "role": "CITIZEN",
        "citizen_id": "CIT-1",
    }
    defaults.update(fields)
    return SimpleNamespace(**defaults)


class TestAccessHelpers:
    """Unit tests for core.domain.access helpers."""

    def test_admin_role_is_administrator(self):
        from core.domain.access import is_administrator
        assert is_administrator(_user(role="ADMIN"))

    @pytest.mark.parametrize("flag", ["is_staff", "is_superuser"])
    def test_staff_and_superusers_are_administrators(self, flag):
        from core.domain.access import is_administrator
        assert is_administrator(_user(**{flag: True}))

    def test_citizen_and_anonymous_are_not(self):
        from core.domain.access import is_administrator
        assert not is_administrator(_user())
        assert not is_administrator(_user(is_authenticated=False, role="ADMIN"))
        assert not is_administrator(None)

    def test_require_administrator_raises(self):
        from core.domain.access import require_administrator
        from core.domain.exceptions import PermissionDenied

        with pytest.raises(PermissionDenied, match="Only administrators"):
            require_administrator(_user())

    def test_citizen_id_of(self):
        from core.domain.access import citizen_id_of
        assert citizen_id_of(_user()) == "CIT-1"
        assert citizen_id_of(_user(is_authenticated=False)) is None


# ════════════════════════════════════════════════════════════════════
#  Settings
# ════════════════════════════════════════════════════════════════════

class TestSettingsDefaults:
    """Values the settings module falls back to without a .env file."""

    @pytest.fixture()
    def fresh_settings(self, monkeypatch):
        import importlib

        import dotenv

        import citizenscience.settings as settings_module

        monkeypatch.setattr(dotenv, "load_dotenv", lambda *args, **kwargs: False)

        def load(**env):
            monkeypatch.delenv("DJANGO_DEBUG", raising=False)
            for name, value in env.items():
                monkeypatch.setenv(name, value)
            return importlib.reload(settings_module)

        yield load
        monkeypatch.undo()
        importlib.reload(settings_module)

    def test_debug_is_off_by_default(self, fresh_settings):
        assert fresh_settings().DEBUG is False

    def test_debug_can_be_enabled_from_the_environment(self, fresh_settings):
        assert fresh_settings(DJANGO_DEBUG="true").DEBUG is True
