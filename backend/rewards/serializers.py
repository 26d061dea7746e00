"""
Rewards app serializers.

Response serializers render ``rewards.ledger.LedgerEntry`` snapshots
(plain dataclasses, not model instances).  Request serializers validate
the administrative payloads; the business rules behind them live in
``rewards.services``.
"""

from __future__ import annotations

from typing import Any

from rest_framework import serializers

from core.constants import (
    CITIZEN_ID_MAX_LENGTH,
    CITIZEN_ID_PATTERN,
    MAX_BATCH_OBSERVATIONS,
    MAX_LEDGER_VALUE,
)


# ═══════════════════════════════════════════════════════════════════
#  Response serializers
# ═══════════════════════════════════════════════════════════════════


class CitizenRewardSerializer(serializers.Serializer):
    """
    Full ledger snapshot.

    Example::

        {
            "citizen_id": "CIT-3f2a...",
            "total_points": 120,
            "valid_observations": 8,
            "complete_observations": 4,
            "badges": ["Bronze"],
            "current_badge": "Bronze",
            "next_badge": "Silver",
            "points_to_next_badge": 80,
            ...
        }
    """

    citizen_id = serializers.CharField()
    total_points = serializers.IntegerField()
    valid_observations = serializers.IntegerField()
    complete_observations = serializers.IntegerField()
    badges = serializers.ListField(child=serializers.CharField())
    current_badge = serializers.CharField()
    next_badge = serializers.CharField(
        help_text="Next badge to earn, or 'Maximum Level' at Gold.",
    )
    points_to_next_badge = serializers.IntegerField(
        help_text="Points still needed for the next badge (0 at Gold).",
    )
    created_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField(allow_null=True)


class RankSerializer(serializers.Serializer):
    citizen_id = serializers.CharField()
    rank = serializers.IntegerField()
    total_citizens = serializers.IntegerField()


class BadgeDistributionSerializer(serializers.Serializer):
    none = serializers.IntegerField()
    bronze = serializers.IntegerField()
    silver = serializers.IntegerField()
    gold = serializers.IntegerField()


class RewardStatisticsSerializer(serializers.Serializer):
    total_citizens = serializers.IntegerField()
    total_points = serializers.IntegerField()
    total_observations = serializers.IntegerField()
    total_complete_observations = serializers.IntegerField()
    average_points = serializers.FloatField()
    badge_distribution = BadgeDistributionSerializer()


# ═══════════════════════════════════════════════════════════════════
#  Request serializers
# ═══════════════════════════════════════════════════════════════════


class CreateRewardProfileSerializer(serializers.Serializer):
    citizen_id = serializers.RegexField(
        regex=rf"^{CITIZEN_ID_PATTERN}$",
        max_length=CITIZEN_ID_MAX_LENGTH,
    )


class RecordObservationSerializer(serializers.Serializer):
    is_complete = serializers.BooleanField(default=False)


class BatchObservationsSerializer(serializers.Serializer):
    valid_count = serializers.IntegerField(min_value=0, max_value=MAX_BATCH_OBSERVATIONS)
    complete_count = serializers.IntegerField(
        min_value=0, max_value=MAX_BATCH_OBSERVATIONS, default=0
    )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if attrs["complete_count"] > attrs["valid_count"]:
            raise serializers.ValidationError(
                {"complete_count": "Cannot exceed valid_count."}
            )
        return attrs


class StrictIntegerField(serializers.IntegerField):
    """Integer field that rejects strings, floats and booleans."""

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail("invalid")
        return super().to_internal_value(data)


class AddPointsSerializer(serializers.Serializer):
    points = StrictIntegerField(min_value=1, max_value=MAX_LEDGER_VALUE)


class ApplyRewardSerializer(serializers.Serializer):
    points = StrictIntegerField(min_value=1, max_value=MAX_LEDGER_VALUE)
    valid_observations = StrictIntegerField(min_value=0, max_value=MAX_LEDGER_VALUE, default=0)
    complete_observations = StrictIntegerField(min_value=0, max_value=MAX_LEDGER_VALUE, default=0)
