"""
Core app services — **Service Layer**.

Contains cross-app aggregation logic.  Views delegate all business logic
to the service classes defined here, keeping views thin and ensuring
testability.

╔══════════════════════════════════════════════════════════════════════╗
║  CROSS-APP IMPORT RULEBOOK                                           ║
║                                                                      ║
║  The core app reads from the observations and rewards apps but is    ║
║  imported by both, so:                                               ║
║                                                                      ║
║  1. NEVER import models or services from other apps at the           ║
║     **module level**.  Import inside the method that needs them.     ║
║                                                                      ║
║  2. Preferred pattern:                                               ║
║       from django.apps import apps                                   ║
║       Observation = apps.get_model("observations", "Observation")   ║
║                                                                      ║
║  3. For counts, prefer a single ORM ``.aggregate()`` over            ║
║     Python-side loops.                                               ║
╚══════════════════════════════════════════════════════════════════════╝
"""

from __future__ import annotations

from typing import Any

from django.apps import apps
from django.db.models import Count, Q

from core import constants


# ════════════════════════════════════════════════════════════════════
#  Dashboard Aggregation Service
# ════════════════════════════════════════════════════════════════════

class DashboardAggregationService:
    """
    Produces the statistics dict consumed by ``DashboardStatsSerializer``.

    The dashboard is public and community-wide; nothing in it depends on
    the requesting user.
    """

    def get_stats(self) -> dict[str, Any]:
        """Return the full dashboard statistics dictionary."""
        Observation = apps.get_model("observations", "Observation")

        # Single aggregate query for scalar counts
        aggregates = Observation.objects.aggregate(
            total_observations=Count("id"),
            valid_observations=Count("id", filter=Q(is_valid=True)),
            complete_observations=Count("id", filter=Q(is_complete=True)),
            total_citizens=Count("citizen_id", distinct=True),
            total_postcodes=Count("postcode", distinct=True),
        )

        return {
            **aggregates,
            "recent_observations": self._get_recent_observations(),
            "top_contributors": self._get_top_contributors(),
        }

    # ── Private helpers ─────────────────────────────────────────────

    @staticmethod
    def _get_recent_observations() -> list[dict[str, Any]]:
        Observation = apps.get_model("observations", "Observation")
        rows = (
            Observation.objects
            .filter(is_valid=True)
            .order_by("-submitted_at")
            .values("id", "citizen_id", "postcode", "submitted_at", "is_complete")
            [:constants.RECENT_OBSERVATIONS_LIMIT]
        )
        return [
            {
                "id": row["id"],
                "citizen_id": row["citizen_id"],
                "postcode": row["postcode"],
                "submitted_at": row["submitted_at"],
                "complete": row["is_complete"],
            }
            for row in rows
        ]

    @staticmethod
    def _get_top_contributors() -> list[dict[str, Any]]:
        from rewards.services import RewardService

        return [
            {
                "citizen_id": entry.citizen_id,
                "total_points": entry.total_points,
                "current_badge": entry.current_badge,
            }
            for entry in RewardService().top_contributors()
        ]


# ════════════════════════════════════════════════════════════════════
#  System Constants Service
# ════════════════════════════════════════════════════════════════════

class SystemConstantsService:
    """
    Exposes the reward rules and choice enumerations so clients can
    render badge progress without hardcoding thresholds.
    """

    @staticmethod
    def get_constants() -> dict[str, Any]:
        from accounts.models import UserRole
        from rewards.models import BadgeLevel

        return {
            "points": {
                "base_observation": constants.BASE_OBSERVATION_POINTS,
                "complete_observation_bonus": constants.COMPLETE_OBSERVATION_BONUS,
            },
            "badge_thresholds": [
                {"badge": BadgeLevel.BRONZE.value, "points": constants.BRONZE_BADGE_THRESHOLD},
                {"badge": BadgeLevel.SILVER.value, "points": constants.SILVER_BADGE_THRESHOLD},
                {"badge": BadgeLevel.GOLD.value, "points": constants.GOLD_BADGE_THRESHOLD},
            ],
            "badge_levels": _choices_to_list(BadgeLevel),
            "roles": _choices_to_list(UserRole),
        }


def _choices_to_list(choices_class) -> list[dict[str, str]]:
    """Convert a Django ``TextChoices`` class to ``[{value, label}, ...]``."""
    return [{"value": value, "label": str(label)} for value, label in choices_class.choices]
