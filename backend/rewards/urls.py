"""
Rewards app URL configuration.

URL prefix (registered in ``citizenscience/urls.py``)::

    path('api/rewards/', include('rewards.urls'))

Endpoint summary
----------------
Citizen entry
    POST   /citizen/                                  — Create profile.
    GET    /citizen/{citizen_id}/                     — Get (or create) entry.
    DELETE /citizen/{citizen_id}/                     — Delete entry (admin).
    POST   /citizen/{citizen_id}/observation/         — Credit one observation (admin).
    POST   /citizen/{citizen_id}/observations/batch/  — Credit several (admin).
    POST   /citizen/{citizen_id}/points/              — Add raw points (admin).
    POST   /citizen/{citizen_id}/reward/              — Generic adjustment (admin).
    POST   /citizen/{citizen_id}/reset/               — Zero the entry (admin).
    POST   /citizen/{citizen_id}/calculate/           — Rebuild from observations (admin).
    GET    /citizen/{citizen_id}/rank/                — Leaderboard rank.

Collections
    GET    /all/                                      — Every entry.
    GET    /leaderboard/?limit=N                      — Top N (default 10).
    GET    /leaderboard/full/                         — Everyone, ranked.
    GET    /leaderboard/top3/                         — Top three.
    GET    /badge/{level}/                            — By current badge.
    GET    /filter/points/?min_points=N               — At least N points.
    GET    /filter/observations/?min_observations=N   — At least N observations.

Statistics & maintenance
    GET    /statistics/                               — Aggregates.
    GET    /statistics/badges/                        — Badge distribution.
    POST   /refresh/                                  — Rebuild everyone (admin).
    DELETE /clear/                                    — Remove everything (admin).
    GET    /health/                                   — Liveness probe.
"""

from django.urls import path

from . import views

app_name = "rewards"

urlpatterns = [
    # ── Citizen entry ────────────────────────────────────────────────
    path("citizen/", views.CitizenRewardCreateView.as_view(), name="citizen-create"),
    path(
        "citizen/<citizen:citizen_id>/",
        views.CitizenRewardDetailView.as_view(),
        name="citizen-detail",
    ),
    path(
        "citizen/<citizen:citizen_id>/observation/",
        views.RecordObservationView.as_view(),
        name="citizen-observation",
    ),
    path(
        "citizen/<citizen:citizen_id>/observations/batch/",
        views.BatchObservationsView.as_view(),
        name="citizen-observations-batch",
    ),
    path(
        "citizen/<citizen:citizen_id>/points/",
        views.AddPointsView.as_view(),
        name="citizen-points",
    ),
    path(
        "citizen/<citizen:citizen_id>/reward/",
        views.ApplyRewardView.as_view(),
        name="citizen-reward",
    ),
    path(
        "citizen/<citizen:citizen_id>/reset/",
        views.ResetRewardView.as_view(),
        name="citizen-reset",
    ),
    path(
        "citizen/<citizen:citizen_id>/calculate/",
        views.RecalculateRewardView.as_view(),
        name="citizen-calculate",
    ),
    path(
        "citizen/<citizen:citizen_id>/rank/",
        views.CitizenRankView.as_view(),
        name="citizen-rank",
    ),

    # ── Collections & leaderboard ────────────────────────────────────
    path("all/", views.AllRewardsView.as_view(), name="all"),
    path("leaderboard/", views.LeaderboardView.as_view(), name="leaderboard"),
    path("leaderboard/full/", views.FullLeaderboardView.as_view(), name="leaderboard-full"),
    path("leaderboard/top3/", views.TopContributorsView.as_view(), name="leaderboard-top3"),

    # ── Filters ──────────────────────────────────────────────────────
    path("badge/<str:level>/", views.BadgeFilterView.as_view(), name="by-badge"),
    path("filter/points/", views.PointsFilterView.as_view(), name="filter-points"),
    path(
        "filter/observations/",
        views.ObservationsFilterView.as_view(),
        name="filter-observations",
    ),

    # ── Statistics & maintenance ─────────────────────────────────────
    path("statistics/", views.RewardStatisticsView.as_view(), name="statistics"),
    path("statistics/badges/", views.BadgeDistributionView.as_view(), name="statistics-badges"),
    path("refresh/", views.RefreshAllRewardsView.as_view(), name="refresh"),
    path("clear/", views.ClearRewardsView.as_view(), name="clear"),
    path("health/", views.RewardsHealthView.as_view(), name="health"),
]
