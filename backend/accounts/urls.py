"""
Accounts app URL configuration.

All routes are namespaced under ``accounts`` and included in the
project-level ``urls.py`` as::

    path('api/auth/', include('accounts.urls')),

Endpoint Map
------------
Authentication
    POST   /register/                   → RegisterView
    POST   /login/                      → LoginView
    POST   /refresh/                    → TokenRefreshView (SimpleJWT)
    POST   /validate/                   → TokenValidateView
    POST   /logout/                     → LogoutView

Current User
    GET    /me/                         → MeView

Utility
    GET    /check-username/?username=   → CheckUsernameView
    GET    /check-email/?email=         → CheckEmailView
    GET    /health/                     → AuthHealthView
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import (
    AuthHealthView,
    CheckEmailView,
    CheckUsernameView,
    LoginView,
    LogoutView,
    MeView,
    RegisterView,
    TokenValidateView,
)

app_name = "accounts"

urlpatterns = [
    # ── Authentication ───────────────────────────────────────────────
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("validate/", TokenValidateView.as_view(), name="token-validate"),
    path("logout/", LogoutView.as_view(), name="logout"),

    # ── Current User (Me) ───────────────────────────────────────────
    path("me/", MeView.as_view(), name="me"),

    # ── Utility ──────────────────────────────────────────────────────
    path("check-username/", CheckUsernameView.as_view(), name="check-username"),
    path("check-email/", CheckEmailView.as_view(), name="check-email"),
    path("health/", AuthHealthView.as_view(), name="health"),
]
