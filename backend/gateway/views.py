"""
Gateway app views.

Each view forwards its request to one downstream service through
``gateway.client.ServiceClient`` and relays the downstream status code
and body unchanged.  The gateway does no authentication of its own: the
caller's ``Authorization`` header is forwarded as-is and the downstream
service decides.

When a downstream service cannot be reached the client raises
``ServiceUnavailable``; the global exception handler turns it into
``502 {"detail": "The <service> service is currently unavailable."}``.
"""

from __future__ import annotations

import logging

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .client import get_client

logger = logging.getLogger(__name__)

_BODY_METHODS = {"POST", "PUT", "PATCH"}
_FORWARDED_HEADERS = ("Authorization",)

_UNAVAILABLE = OpenApiResponse(description="Downstream service unavailable.")


def _forwarded_headers(request: Request) -> dict[str, str]:
    return {
        name: request.headers[name]
        for name in _FORWARDED_HEADERS
        if name in request.headers
    }


class GatewayProxyView(APIView):
    """
    Base class for forwarding views.

    Subclasses set ``service`` (a key of ``settings.GATEWAY["SERVICES"]``)
    and ``path`` (formatted with the URL kwargs), then expose the HTTP
    methods they accept by delegating to ``forward``.
    """

    authentication_classes: list = []
    permission_classes: list = []

    service: str = ""
    path: str = ""
    # Gateway query parameter name -> downstream name.
    query_aliases: dict[str, str] = {}

    def downstream_params(self, request: Request) -> dict[str, list[str]]:
        params = {}
        for name, values in request.query_params.lists():
            params[self.query_aliases.get(name, name)] = values
        return params

    def forward(self, request: Request, **kwargs) -> Response:
        method = request.method.upper()
        result = get_client(self.service).request(
            method,
            self.path.format(**kwargs),
            params=self.downstream_params(request),
            json=request.data if method in _BODY_METHODS else None,
            headers=_forwarded_headers(request),
        )
        return Response(result.body, status=result.status_code)


# ═══════════════════════════════════════════════════════════════════
#  Observations
# ═══════════════════════════════════════════════════════════════════


class ObservationsProxyView(GatewayProxyView):
    """
    **GET  /gateway/observations/** — list every observation.
    **POST /gateway/observations/** — submit an observation.
    """

    service = "observations"
    path = ""

    @extend_schema(summary="List observations (proxied)", responses={200: OpenApiResponse(), 502: _UNAVAILABLE}, tags=["Gateway"])
    def get(self, request: Request) -> Response:
        return self.forward(request)

    @extend_schema(summary="Submit an observation (proxied)", request=None, responses={201: OpenApiResponse(), 502: _UNAVAILABLE}, tags=["Gateway"])
    def post(self, request: Request) -> Response:
        return self.forward(request)


class CitizenObservationsProxyView(GatewayProxyView):
    """**GET /gateway/observations/citizen/{citizen_id}/**"""

    service = "observations"
    path = "citizen/{citizen_id}/"

    @extend_schema(summary="A citizen's observations (proxied)", responses={200: OpenApiResponse(), 502: _UNAVAILABLE}, tags=["Gateway"])
    def get(self, request: Request, citizen_id: str) -> Response:
        return self.forward(request, citizen_id=citizen_id)


class RecentObservationsProxyView(GatewayProxyView):
    """**GET /gateway/observations/recent/**"""

    service = "observations"
    path = "recent/"

    @extend_schema(summary="Recent valid observations (proxied)", responses={200: OpenApiResponse(), 502: _UNAVAILABLE}, tags=["Gateway"])
    def get(self, request: Request) -> Response:
        return self.forward(request)


# ═══════════════════════════════════════════════════════════════════
#  Rewards
# ═══════════════════════════════════════════════════════════════════


class CitizenRewardProxyView(GatewayProxyView):
    """**GET /gateway/rewards/citizen/{citizen_id}/**"""

    service = "rewards"
    path = "citizen/{citizen_id}/"

    @extend_schema(summary="A citizen's rewards (proxied)", responses={200: OpenApiResponse(), 502: _UNAVAILABLE}, tags=["Gateway"])
    def get(self, request: Request, citizen_id: str) -> Response:
        return self.forward(request, citizen_id=citizen_id)


class RecalculateRewardProxyView(GatewayProxyView):
    """**POST /gateway/rewards/citizen/{citizen_id}/calculate/**"""

    service = "rewards"
    path = "citizen/{citizen_id}/calculate/"

    @extend_schema(summary="Recalculate a citizen's rewards (proxied)", request=None, responses={200: OpenApiResponse(), 502: _UNAVAILABLE}, tags=["Gateway"])
    def post(self, request: Request, citizen_id: str) -> Response:
        return self.forward(request, citizen_id=citizen_id)


class ApplyRewardProxyView(GatewayProxyView):
    """**POST /gateway/rewards/citizen/{citizen_id}/reward/**"""

    service = "rewards"
    path = "citizen/{citizen_id}/reward/"

    @extend_schema(summary="Apply a reward adjustment (proxied)", request=None, responses={200: OpenApiResponse(), 502: _UNAVAILABLE}, tags=["Gateway"])
    def post(self, request: Request, citizen_id: str) -> Response:
        return self.forward(request, citizen_id=citizen_id)


class LeaderboardProxyView(GatewayProxyView):
    """
    **GET /gateway/rewards/leaderboard/?limit=N**

    ``topN`` is accepted as an alias of ``limit``.
    """

    service = "rewards"
    path = "leaderboard/"
    query_aliases = {"topN": "limit"}

    @extend_schema(
        summary="Leaderboard (proxied)",
        parameters=[OpenApiParameter("limit", int, description="Number of entries (default 10).")],
        responses={200: OpenApiResponse(), 502: _UNAVAILABLE},
        tags=["Gateway"],
    )
    def get(self, request: Request) -> Response:
        return self.forward(request)


class TopContributorsProxyView(GatewayProxyView):
    """**GET /gateway/rewards/leaderboard/top3/**"""

    service = "rewards"
    path = "leaderboard/top3/"

    @extend_schema(summary="Top three contributors (proxied)", responses={200: OpenApiResponse(), 502: _UNAVAILABLE}, tags=["Gateway"])
    def get(self, request: Request) -> Response:
        return self.forward(request)


# ═══════════════════════════════════════════════════════════════════
#  Health
# ═══════════════════════════════════════════════════════════════════


class GatewayHealthView(APIView):
    """
    **GET /gateway/health/**

    Reports the gateway itself as ``UP`` and probes each configured
    service's ``health/`` endpoint::

        {"gateway": "UP", "auth": "UP", "observations": "DOWN", "rewards": "UP"}

    Always answers 200; a down service is reported, not raised.
    """

    authentication_classes: list = []
    permission_classes: list = []

    @extend_schema(summary="Gateway and downstream health", responses={200: OpenApiResponse()}, tags=["Gateway"])
    def get(self, request: Request) -> Response:
        report = {"gateway": "UP"}
        for name in settings.GATEWAY["SERVICES"]:
            report[name] = "UP" if get_client(name).is_up() else "DOWN"
        if "DOWN" in report.values():
            logger.warning("Gateway health degraded: %s", report)
        return Response(report)
