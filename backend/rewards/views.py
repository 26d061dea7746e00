"""
Rewards app views — **Thin Views**.

Each view delegates all business logic to ``rewards.services``.  Views
are responsible only for:

1. Extracting and validating query parameters / request bodies.
2. Calling the service with the authenticated user and parameters.
3. Serialising the result and returning an HTTP ``Response``.

Administrative endpoints declare ``IsAuthenticated`` so anonymous
callers get 401; the administrator check itself happens in the service
layer (403 via ``core.domain.exceptions.PermissionDenied``).
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from core.constants import DEFAULT_LEADERBOARD_LIMIT
from core.domain.exceptions import DomainError

from .serializers import (
    AddPointsSerializer,
    ApplyRewardSerializer,
    BadgeDistributionSerializer,
    BatchObservationsSerializer,
    CitizenRewardSerializer,
    CreateRewardProfileSerializer,
    RankSerializer,
    RecordObservationSerializer,
    RewardStatisticsSerializer,
)
from .services import RewardService, RewardStatisticsService


def _int_query_param(
    request: Request,
    name: str,
    *,
    default: int | None = None,
    minimum: int = 0,
) -> int:
    """Parse an integer query parameter, raising ``DomainError`` (400) when invalid."""
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        if default is None:
            raise DomainError(f"The '{name}' query parameter is required.")
        return default
    try:
        value = int(raw)
    except ValueError:
        raise DomainError(f"'{name}' must be an integer.")
    if value < minimum:
        raise DomainError(f"'{name}' must be at least {minimum}.")
    return value


def _many(entries) -> list:
    return CitizenRewardSerializer(entries, many=True).data


# ═══════════════════════════════════════════════════════════════════
#  Citizen ledger entry
# ═══════════════════════════════════════════════════════════════════


class CitizenRewardCreateView(APIView):
    """
    **POST /api/rewards/citizen/**

    Create a reward profile for ``citizen_id``.  Idempotent: an existing
    profile is returned unchanged.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Create a reward profile",
        request=CreateRewardProfileSerializer,
        responses={201: CitizenRewardSerializer},
        tags=["Rewards"],
    )
    def post(self, request: Request) -> Response:
        serializer = CreateRewardProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = RewardService().create(serializer.validated_data["citizen_id"])
        return Response(CitizenRewardSerializer(entry).data, status=status.HTTP_201_CREATED)


class CitizenRewardDetailView(APIView):
    """
    **GET    /api/rewards/citizen/{citizen_id}/** — never 404s; a zeroed
    entry is created on first read.

    **DELETE /api/rewards/citizen/{citizen_id}/** — administrators only;
    404 when the citizen has no entry.
    """

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [IsAuthenticated()]
        return [AllowAny()]

    @extend_schema(summary="Get a citizen's rewards", responses={200: CitizenRewardSerializer}, tags=["Rewards"])
    def get(self, request: Request, citizen_id: str) -> Response:
        entry = RewardService().get(citizen_id)
        return Response(CitizenRewardSerializer(entry).data)

    @extend_schema(
        summary="Delete a citizen's rewards",
        responses={200: OpenApiResponse(description="Deleted."),
                   404: OpenApiResponse(description="Citizen not found.")},
        tags=["Rewards"],
    )
    def delete(self, request: Request, citizen_id: str) -> Response:
        RewardService().delete(citizen_id, requested_by=request.user)
        return Response({"message": "Citizen reward deleted successfully."})


class RecordObservationView(APIView):
    """**POST /api/rewards/citizen/{citizen_id}/observation/** ``{"is_complete": bool}``"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Credit one observation",
        request=RecordObservationSerializer,
        responses={200: CitizenRewardSerializer},
        tags=["Rewards (admin)"],
    )
    def post(self, request: Request, citizen_id: str) -> Response:
        serializer = RecordObservationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = RewardService().record_observation(
            citizen_id,
            is_complete=serializer.validated_data["is_complete"],
            requested_by=request.user,
        )
        return Response(CitizenRewardSerializer(entry).data)


class BatchObservationsView(APIView):
    """
    **POST /api/rewards/citizen/{citizen_id}/observations/batch/**
    ``{"valid_count": int, "complete_count": int}``
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Credit several observations",
        request=BatchObservationsSerializer,
        responses={200: CitizenRewardSerializer},
        tags=["Rewards (admin)"],
    )
    def post(self, request: Request, citizen_id: str) -> Response:
        serializer = BatchObservationsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = RewardService().record_observations(
            citizen_id,
            valid_count=serializer.validated_data["valid_count"],
            complete_count=serializer.validated_data["complete_count"],
            requested_by=request.user,
        )
        return Response(CitizenRewardSerializer(entry).data)


class AddPointsView(APIView):
    """
    **POST /api/rewards/citizen/{citizen_id}/points/** ``{"points": int ≥ 1}``

    Raw adjustment: badges are not re-evaluated.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Add points",
        request=AddPointsSerializer,
        responses={200: CitizenRewardSerializer},
        tags=["Rewards (admin)"],
    )
    def post(self, request: Request, citizen_id: str) -> Response:
        serializer = AddPointsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = RewardService().add_points(
            citizen_id,
            points=serializer.validated_data["points"],
            requested_by=request.user,
        )
        return Response(CitizenRewardSerializer(entry).data)


class ApplyRewardView(APIView):
    """
    **POST /api/rewards/citizen/{citizen_id}/reward/**
    ``{"points": int ≥ 1, "valid_observations"?: int, "complete_observations"?: int}``

    Raw adjustment: badges are not re-evaluated.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Apply a reward adjustment",
        request=ApplyRewardSerializer,
        responses={200: CitizenRewardSerializer},
        tags=["Rewards (admin)"],
    )
    def post(self, request: Request, citizen_id: str) -> Response:
        serializer = ApplyRewardSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = RewardService().apply_reward(
            citizen_id,
            requested_by=request.user,
            **serializer.validated_data,
        )
        return Response(CitizenRewardSerializer(entry).data)


class ResetRewardView(APIView):
    """**POST /api/rewards/citizen/{citizen_id}/reset/**"""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Reset a citizen's rewards", request=None,
                   responses={200: CitizenRewardSerializer}, tags=["Rewards (admin)"])
    def post(self, request: Request, citizen_id: str) -> Response:
        entry = RewardService().reset(citizen_id, requested_by=request.user)
        return Response(CitizenRewardSerializer(entry).data)


class RecalculateRewardView(APIView):
    """
    **POST /api/rewards/citizen/{citizen_id}/calculate/**

    Rebuild the citizen's entry from their stored valid observations.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Recalculate from observations", request=None,
                   responses={200: CitizenRewardSerializer}, tags=["Rewards (admin)"])
    def post(self, request: Request, citizen_id: str) -> Response:
        entry = RewardService().recalculate(citizen_id, requested_by=request.user)
        return Response(CitizenRewardSerializer(entry).data)


class CitizenRankView(APIView):
    """**GET /api/rewards/citizen/{citizen_id}/rank/** — 404 when unranked."""

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Citizen rank",
        responses={200: RankSerializer, 404: OpenApiResponse(description="Citizen not found.")},
        tags=["Leaderboard"],
    )
    def get(self, request: Request, citizen_id: str) -> Response:
        return Response(RankSerializer(RewardService().rank(citizen_id)).data)


# ═══════════════════════════════════════════════════════════════════
#  Collections & leaderboard
# ═══════════════════════════════════════════════════════════════════


class AllRewardsView(APIView):
    """**GET /api/rewards/all/**"""

    permission_classes = [AllowAny]

    @extend_schema(summary="All reward entries", responses={200: CitizenRewardSerializer(many=True)}, tags=["Rewards"])
    def get(self, request: Request) -> Response:
        return Response(_many(RewardService().all()))


class LeaderboardView(APIView):
    """**GET /api/rewards/leaderboard/?limit=N** (default 10)"""

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Top contributors",
        parameters=[OpenApiParameter(name="limit", type=int, required=False,
                                     description=f"Positive integer, default {DEFAULT_LEADERBOARD_LIMIT}.")],
        responses={200: CitizenRewardSerializer(many=True)},
        tags=["Leaderboard"],
    )
    def get(self, request: Request) -> Response:
        limit = _int_query_param(request, "limit", default=DEFAULT_LEADERBOARD_LIMIT, minimum=1)
        return Response(_many(RewardService().leaderboard(limit)))


class FullLeaderboardView(APIView):
    """**GET /api/rewards/leaderboard/full/**"""

    permission_classes = [AllowAny]

    @extend_schema(summary="Full leaderboard", responses={200: CitizenRewardSerializer(many=True)}, tags=["Leaderboard"])
    def get(self, request: Request) -> Response:
        return Response(_many(RewardService().full_leaderboard()))


class TopContributorsView(APIView):
    """**GET /api/rewards/leaderboard/top3/**"""

    permission_classes = [AllowAny]

    @extend_schema(summary="Top three contributors", responses={200: CitizenRewardSerializer(many=True)}, tags=["Leaderboard"])
    def get(self, request: Request) -> Response:
        return Response(_many(RewardService().top_contributors()))


# ═══════════════════════════════════════════════════════════════════
#  Filters
# ═══════════════════════════════════════════════════════════════════


class BadgeFilterView(APIView):
    """**GET /api/rewards/badge/{level}/** — citizens whose current badge is ``level``."""

    permission_classes = [AllowAny]

    @extend_schema(summary="Citizens by badge", responses={200: CitizenRewardSerializer(many=True)}, tags=["Rewards"])
    def get(self, request: Request, level: str) -> Response:
        return Response(_many(RewardService().by_badge(level)))


class PointsFilterView(APIView):
    """**GET /api/rewards/filter/points/?min_points=N**"""

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Citizens with at least N points",
        parameters=[OpenApiParameter(name="min_points", type=int, required=True)],
        responses={200: CitizenRewardSerializer(many=True)},
        tags=["Rewards"],
    )
    def get(self, request: Request) -> Response:
        min_points = _int_query_param(request, "min_points")
        return Response(_many(RewardService().with_min_points(min_points)))


class ObservationsFilterView(APIView):
    """**GET /api/rewards/filter/observations/?min_observations=N**"""

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Citizens with at least N valid observations",
        parameters=[OpenApiParameter(name="min_observations", type=int, required=True)],
        responses={200: CitizenRewardSerializer(many=True)},
        tags=["Rewards"],
    )
    def get(self, request: Request) -> Response:
        min_observations = _int_query_param(request, "min_observations")
        return Response(_many(RewardService().with_min_observations(min_observations)))


# ═══════════════════════════════════════════════════════════════════
#  Statistics & maintenance
# ═══════════════════════════════════════════════════════════════════


class RewardStatisticsView(APIView):
    """**GET /api/rewards/statistics/**"""

    permission_classes = [AllowAny]

    @extend_schema(summary="Reward statistics", responses={200: RewardStatisticsSerializer}, tags=["Statistics"])
    def get(self, request: Request) -> Response:
        return Response(RewardStatisticsSerializer(RewardStatisticsService().summary()).data)


class BadgeDistributionView(APIView):
    """**GET /api/rewards/statistics/badges/**"""

    permission_classes = [AllowAny]

    @extend_schema(summary="Badge distribution", responses={200: BadgeDistributionSerializer}, tags=["Statistics"])
    def get(self, request: Request) -> Response:
        return Response(BadgeDistributionSerializer(RewardStatisticsService().badge_distribution()).data)


class RefreshAllRewardsView(APIView):
    """**POST /api/rewards/refresh/** — rebuild every citizen with observations."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Refresh all rewards", request=None, tags=["Rewards (admin)"])
    def post(self, request: Request) -> Response:
        refreshed = RewardService().refresh_all(requested_by=request.user)
        return Response({"message": "Rewards refreshed.", "citizens_refreshed": refreshed})


class ClearRewardsView(APIView):
    """**DELETE /api/rewards/clear/** — remove every ledger entry."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Clear all rewards", tags=["Rewards (admin)"])
    def delete(self, request: Request) -> Response:
        removed = RewardService().clear(requested_by=request.user)
        return Response({"message": "All rewards cleared.", "citizens_removed": removed})


class RewardsHealthView(APIView):
    """**GET /api/rewards/health/**"""

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(summary="Rewards service health", tags=["Health"])
    def get(self, request: Request) -> Response:
        return Response({"status": "UP", "service": "rewards"})
