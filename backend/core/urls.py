"""
Core app URL configuration.

Provides cross-app aggregation endpoints that serve a community
dashboard, plus the reward rules and enumerations.

URL prefix (registered in ``citizenscience/urls.py``)::

    path('api/core/', include('core.urls'))

Endpoint summary
----------------
GET  /api/core/dashboard/    — Aggregated dashboard statistics.
GET  /api/core/constants/    — Points rules, badge thresholds, enumerations.
"""

from django.urls import path

from . import views

app_name = "core"

urlpatterns = [
    # ── Dashboard ────────────────────────────────────────────────────
    path(
        "dashboard/",
        views.DashboardStatsView.as_view(),
        name="dashboard-stats",
    ),

    # ── System Constants / Enums ─────────────────────────────────────
    path(
        "constants/",
        views.SystemConstantsView.as_view(),
        name="system-constants",
    ),
]
