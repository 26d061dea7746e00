"""
Observations app serializers.

Request serializers only check payload *shape* (types, lengths).  The
validity rules (postcode plus at least one reading) belong to
``observations.validation`` and are applied by the service layer, so a
blank postcode is accepted here and rejected there with a reason.
"""

from __future__ import annotations

from typing import Any

from rest_framework import serializers

from core.constants import CITIZEN_ID_MAX_LENGTH, CITIZEN_ID_PATTERN
from core.domain.access import citizen_id_of

from .models import Observation


class ObservationSubmitSerializer(serializers.Serializer):
    """
    Validates an observation submission.

    ``citizen_id`` may be omitted by an authenticated caller, in which
    case the caller's own citizen id is used.
    """

    citizen_id = serializers.RegexField(
        regex=rf"^{CITIZEN_ID_PATTERN}$",
        max_length=CITIZEN_ID_MAX_LENGTH,
        required=False,
        allow_blank=True,
    )
    postcode = serializers.CharField(
        max_length=20,
        required=False,
        allow_blank=True,
        default="",
        trim_whitespace=True,
    )
    temperature = serializers.FloatField(required=False, allow_null=True, default=None)
    ph = serializers.FloatField(required=False, allow_null=True, default=None)
    alkalinity = serializers.FloatField(required=False, allow_null=True, default=None)
    turbidity = serializers.FloatField(required=False, allow_null=True, default=None)
    visual_observations = serializers.ListField(
        child=serializers.CharField(max_length=100, allow_blank=True),
        required=False,
        default=list,
        help_text="Free-text tags, e.g. ['Clear', 'Algae'].",
    )
    image_paths = serializers.ListField(
        child=serializers.CharField(max_length=500, allow_blank=True),
        required=False,
        default=list,
    )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if not attrs.get("citizen_id"):
            request = self.context.get("request")
            attrs["citizen_id"] = citizen_id_of(getattr(request, "user", None))
        if not attrs["citizen_id"]:
            raise serializers.ValidationError(
                {"citizen_id": "This field is required for anonymous submissions."}
            )
        return attrs


class ObservationSerializer(serializers.ModelSerializer):
    """Read-only representation of a stored observation."""

    valid = serializers.BooleanField(source="is_valid", read_only=True)
    complete = serializers.BooleanField(source="is_complete", read_only=True)

    class Meta:
        model = Observation
        fields = [
            "id",
            "citizen_id",
            "postcode",
            "temperature",
            "ph",
            "alkalinity",
            "turbidity",
            "visual_observations",
            "image_paths",
            "submitted_at",
            "valid",
            "complete",
        ]
        read_only_fields = fields


class ObservationCountSerializer(serializers.Serializer):
    citizen_id = serializers.CharField()
    count = serializers.IntegerField()
    valid_count = serializers.IntegerField()
