"""
Gateway app URL configuration.

URL prefix (registered in ``citizenscience/urls.py``)::

    path('gateway/', include('gateway.urls'))

Endpoint summary
----------------
GET    /observations/                              — observations: list.
POST   /observations/                              — observations: submit.
GET    /observations/citizen/{citizen_id}/         — observations: by citizen.
GET    /observations/recent/                       — observations: recent valid.
GET    /rewards/citizen/{citizen_id}/              — rewards: entry.
POST   /rewards/citizen/{citizen_id}/calculate/    — rewards: recalculate.
POST   /rewards/citizen/{citizen_id}/reward/       — rewards: adjustment.
GET    /rewards/leaderboard/?limit=N               — rewards: top N.
GET    /rewards/leaderboard/top3/                  — rewards: top three.
GET    /health/                                    — Gateway + service health.
"""

from django.urls import path

from . import views

app_name = "gateway"

urlpatterns = [
    # ── Observations ─────────────────────────────────────────────────
    path("observations/", views.ObservationsProxyView.as_view(), name="observations"),
    path(
        "observations/citizen/<citizen:citizen_id>/",
        views.CitizenObservationsProxyView.as_view(),
        name="citizen-observations",
    ),
    path(
        "observations/recent/",
        views.RecentObservationsProxyView.as_view(),
        name="recent-observations",
    ),

    # ── Rewards ──────────────────────────────────────────────────────
    path(
        "rewards/citizen/<citizen:citizen_id>/",
        views.CitizenRewardProxyView.as_view(),
        name="citizen-reward",
    ),
    path(
        "rewards/citizen/<citizen:citizen_id>/calculate/",
        views.RecalculateRewardProxyView.as_view(),
        name="citizen-calculate",
    ),
    path(
        "rewards/citizen/<citizen:citizen_id>/reward/",
        views.ApplyRewardProxyView.as_view(),
        name="citizen-apply-reward",
    ),
    path("rewards/leaderboard/", views.LeaderboardProxyView.as_view(), name="leaderboard"),
    path(
        "rewards/leaderboard/top3/",
        views.TopContributorsProxyView.as_view(),
        name="leaderboard-top3",
    ),

    path("health/", views.GatewayHealthView.as_view(), name="health"),
]
