"""
Observations app URL configuration.

URL prefix (registered in ``citizenscience/urls.py``)::

    path('api/observations/', include('observations.urls'))

Endpoint summary
----------------
GET    /                               — All observations.
POST   /                               — Submit an observation.
GET    /{id}/                          — One observation (404 if absent).
DELETE /{id}/                          — Delete an observation (administrators).
GET    /valid/                         — All valid observations.
GET    /recent/                        — Five most recent valid observations.
GET    /citizen/{citizen_id}/          — A citizen's observations.
GET    /citizen/{citizen_id}/valid/    — A citizen's valid observations.
GET    /citizen/{citizen_id}/count/    — A citizen's observation counts.
GET    /postcode/{postcode}/           — Observations for a postcode.
GET    /health/                        — Liveness probe.
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from . import views

app_name = "observations"

router = SimpleRouter()
router.register(r"", views.ObservationViewSet, basename="observation")

urlpatterns = [
    # ── Citizen-scoped listings ──────────────────────────────────────
    path(
        "citizen/<citizen:citizen_id>/",
        views.CitizenObservationsView.as_view(),
        name="citizen-observations",
    ),
    path(
        "citizen/<citizen:citizen_id>/valid/",
        views.CitizenValidObservationsView.as_view(),
        name="citizen-valid-observations",
    ),
    path(
        "citizen/<citizen:citizen_id>/count/",
        views.CitizenObservationCountView.as_view(),
        name="citizen-observation-count",
    ),

    # ── Postcode listing ─────────────────────────────────────────────
    path(
        "postcode/<str:postcode>/",
        views.PostcodeObservationsView.as_view(),
        name="postcode-observations",
    ),

    path("health/", views.ObservationsHealthView.as_view(), name="health"),

    # ── Router-registered viewset (list, detail, valid/, recent/) ────
    path("", include(router.urls)),
]
