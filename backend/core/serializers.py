"""
Core app serializers.

Response-only serializers for the cross-app endpoints in
``core.views``.  They render plain dicts built by ``core.services``.
"""

from __future__ import annotations

from rest_framework import serializers


# ═══════════════════════════════════════════════════════════════════
#  Dashboard
# ═══════════════════════════════════════════════════════════════════


class RecentObservationSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    citizen_id = serializers.CharField()
    postcode = serializers.CharField()
    submitted_at = serializers.DateTimeField()
    complete = serializers.BooleanField()


class TopContributorSerializer(serializers.Serializer):
    citizen_id = serializers.CharField()
    total_points = serializers.IntegerField()
    current_badge = serializers.CharField()


class DashboardStatsSerializer(serializers.Serializer):
    """
    Top-level response serializer for ``GET /api/core/dashboard/``.

    Response shape::

        {
            "total_observations": 42,
            "valid_observations": 40,
            "complete_observations": 12,
            "total_citizens": 9,
            "total_postcodes": 7,
            "recent_observations": [...],
            "top_contributors": [...]
        }
    """

    # ── Scalar counters ──────────────────────────────────────────────
    total_observations = serializers.IntegerField()
    valid_observations = serializers.IntegerField()
    complete_observations = serializers.IntegerField()
    total_citizens = serializers.IntegerField(
        help_text="Distinct citizens who submitted at least one observation.",
    )
    total_postcodes = serializers.IntegerField(
        help_text="Distinct postcodes observed.",
    )

    # ── Lists ────────────────────────────────────────────────────────
    recent_observations = RecentObservationSerializer(many=True)
    top_contributors = TopContributorSerializer(many=True)


# ═══════════════════════════════════════════════════════════════════
#  System constants
# ═══════════════════════════════════════════════════════════════════


class ChoiceItemSerializer(serializers.Serializer):
    """
    A single key-label pair representing one choice/enum option.

    Example::

        {"value": "Gold", "label": "Gold"}
    """

    value = serializers.CharField(
        help_text="Machine-readable value to send in API requests.",
    )
    label = serializers.CharField(
        help_text="Human-readable display label.",
    )


class PointsRulesSerializer(serializers.Serializer):
    base_observation = serializers.IntegerField()
    complete_observation_bonus = serializers.IntegerField()


class BadgeThresholdSerializer(serializers.Serializer):
    badge = serializers.CharField()
    points = serializers.IntegerField()


class SystemConstantsSerializer(serializers.Serializer):
    """
    Top-level response serializer for ``GET /api/core/constants/``.

    Response shape::

        {
            "points": {"base_observation": 10, "complete_observation_bonus": 10},
            "badge_thresholds": [{"badge": "Bronze", "points": 100}, ...],
            "badge_levels": [{"value": "None", "label": "None"}, ...],
            "roles": [{"value": "CITIZEN", "label": "Citizen"}, ...]
        }
    """

    points = PointsRulesSerializer()
    badge_thresholds = BadgeThresholdSerializer(many=True)
    badge_levels = ChoiceItemSerializer(many=True)
    roles = ChoiceItemSerializer(many=True)
