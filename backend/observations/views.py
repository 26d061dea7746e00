"""
Observations app views — **Thin Views**.

Each view validates input through a serializer, delegates to
``observations.services`` and serialises the result.  Domain errors
(``ObservationRejected``, ``NotFound``, ``PermissionDenied``) are turned
into responses by the global exception handler.

View Map
--------
- ``ObservationViewSet``
    GET    /                        → list
    POST   /                        → create (submit)
    GET    /{id}/                   → retrieve
    DELETE /{id}/                   → destroy (administrators)
    GET    /valid/                  → valid
    GET    /recent/                 → recent
- ``CitizenObservationsView``       — GET /citizen/{citizen_id}/
- ``CitizenValidObservationsView``  — GET /citizen/{citizen_id}/valid/
- ``CitizenObservationCountView``   — GET /citizen/{citizen_id}/count/
- ``PostcodeObservationsView``      — GET /postcode/{postcode}/
- ``ObservationsHealthView``        — GET /health/
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    ObservationCountSerializer,
    ObservationSerializer,
    ObservationSubmitSerializer,
)
from .services import ObservationQueryService, ObservationSubmissionService

UUID_REGEX = (
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-"
    r"[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


class ObservationViewSet(viewsets.ViewSet):
    """
    Submission and retrieval of water-quality observations.

    Reads and submissions are public; a submission without a
    ``citizen_id`` falls back to the authenticated caller's id.
    Deleting requires an administrator.
    """

    lookup_value_regex = UUID_REGEX

    def get_permissions(self):
        if self.action == "destroy":
            return [IsAuthenticated()]
        return [AllowAny()]

    @extend_schema(
        summary="List all observations",
        responses={200: ObservationSerializer(many=True)},
        tags=["Observations"],
    )
    def list(self, request: Request) -> Response:
        observations = ObservationQueryService.all()
        return Response(ObservationSerializer(observations, many=True).data)

    @extend_schema(
        summary="Submit an observation",
        request=ObservationSubmitSerializer,
        responses={
            201: OpenApiResponse(description="Observation stored."),
            400: OpenApiResponse(description="Observation rejected with a reason."),
        },
        tags=["Observations"],
    )
    def create(self, request: Request) -> Response:
        serializer = ObservationSubmitSerializer(
            data=request.data,
            context={"request": request},
        )
        serializer.is_valid(raise_exception=True)
        observation = ObservationSubmissionService.submit(serializer.validated_data)
        return Response(
            {
                "message": "Observation submitted successfully.",
                "id": str(observation.pk),
                "valid": observation.is_valid,
                "complete": observation.is_complete,
                "observation": ObservationSerializer(observation).data,
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="Retrieve an observation",
        responses={200: ObservationSerializer, 404: OpenApiResponse(description="Not found.")},
        tags=["Observations"],
    )
    def retrieve(self, request: Request, pk: str = None) -> Response:
        observation = ObservationQueryService.get(pk)
        return Response(ObservationSerializer(observation).data)

    @extend_schema(
        summary="Delete an observation",
        responses={200: OpenApiResponse(description="Deleted."),
                   403: OpenApiResponse(description="Administrators only."),
                   404: OpenApiResponse(description="Not found.")},
        tags=["Observations"],
    )
    def destroy(self, request: Request, pk: str = None) -> Response:
        ObservationQueryService.delete(pk, requested_by=request.user)
        return Response({"message": "Observation deleted successfully."})

    @extend_schema(
        summary="All valid observations",
        responses={200: ObservationSerializer(many=True)},
        tags=["Observations"],
    )
    @action(detail=False, methods=["get"], url_path="valid")
    def valid(self, request: Request) -> Response:
        observations = ObservationQueryService.valid()
        return Response(ObservationSerializer(observations, many=True).data)

    @extend_schema(
        summary="Most recent valid observations",
        responses={200: ObservationSerializer(many=True)},
        tags=["Observations"],
    )
    @action(detail=False, methods=["get"], url_path="recent")
    def recent(self, request: Request) -> Response:
        observations = ObservationQueryService.recent()
        return Response(ObservationSerializer(observations, many=True).data)


# ═══════════════════════════════════════════════════════════════════
#  Citizen / postcode scoped listings
# ═══════════════════════════════════════════════════════════════════


class CitizenObservationsView(APIView):
    """GET /api/observations/citizen/{citizen_id}/"""

    permission_classes = [AllowAny]

    @extend_schema(responses={200: ObservationSerializer(many=True)}, tags=["Observations"])
    def get(self, request: Request, citizen_id: str) -> Response:
        observations = ObservationQueryService.by_citizen(citizen_id)
        return Response(ObservationSerializer(observations, many=True).data)


class CitizenValidObservationsView(APIView):
    """GET /api/observations/citizen/{citizen_id}/valid/"""

    permission_classes = [AllowAny]

    @extend_schema(responses={200: ObservationSerializer(many=True)}, tags=["Observations"])
    def get(self, request: Request, citizen_id: str) -> Response:
        observations = ObservationQueryService.valid_by_citizen(citizen_id)
        return Response(ObservationSerializer(observations, many=True).data)


class CitizenObservationCountView(APIView):
    """GET /api/observations/citizen/{citizen_id}/count/"""

    permission_classes = [AllowAny]

    @extend_schema(responses={200: ObservationCountSerializer}, tags=["Observations"])
    def get(self, request: Request, citizen_id: str) -> Response:
        counts = ObservationQueryService.counts_for_citizen(citizen_id)
        return Response(ObservationCountSerializer(counts).data)


class PostcodeObservationsView(APIView):
    """GET /api/observations/postcode/{postcode}/"""

    permission_classes = [AllowAny]

    @extend_schema(responses={200: ObservationSerializer(many=True)}, tags=["Observations"])
    def get(self, request: Request, postcode: str) -> Response:
        observations = ObservationQueryService.by_postcode(postcode)
        return Response(ObservationSerializer(observations, many=True).data)


class ObservationsHealthView(APIView):
    """GET /api/observations/health/"""

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(summary="Observations service health", tags=["Health"])
    def get(self, request: Request) -> Response:
        return Response({"status": "UP", "service": "observations"})
