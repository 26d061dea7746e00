"""
Observations Service Layer.

This module is the **single source of truth** for observation business
logic.  Views validate payload shape through serializers and delegate
everything else here.

Architecture
------------
- ``ObservationSubmissionService`` — validate, tag, persist, and credit
  the citizen's reward ledger.
- ``ObservationQueryService``      — read-side selectors and the
  administrative delete.

Submission flow
---------------
::

    payload ─▶ build entity ─▶ validate ──✗──▶ ObservationRejected (400)
                                  │
                                  ✓
                                  ▼
                         check_complete ─▶ stamp submitted_at
                                  │
                    ┌─────────────┴──────────────┐
                    │  transaction.atomic()       │
                    │    save observation         │
                    │    credit reward ledger     │
                    └─────────────────────────────┘

Invalid observations are never stored and never touch the ledger.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from core.constants import RECENT_OBSERVATIONS_LIMIT
from core.domain.access import require_administrator
from core.domain.exceptions import NotFound, ObservationRejected

from .models import Observation
from .validation import check_complete, rejection_reason

logger = logging.getLogger(__name__)


def _award_points_on_submit() -> bool:
    return bool(getattr(settings, "OBSERVATIONS", {}).get("AWARD_POINTS_ON_SUBMIT", True))


# ═══════════════════════════════════════════════════════════════════
#  Submission Service
# ═══════════════════════════════════════════════════════════════════


class ObservationSubmissionService:

    @staticmethod
    def submit(validated_data: dict[str, Any]) -> Observation:
        """
        Validate and store a new observation.

        Parameters
        ----------
        validated_data : dict
            Cleaned data from ``ObservationSubmitSerializer``:
            ``citizen_id``, ``postcode``, the optional measurements,
            ``visual_observations`` and ``image_paths``.

        Returns
        -------
        Observation
            The stored observation with ``is_valid`` / ``is_complete``
            set and ``submitted_at`` stamped by the server.

        Raises
        ------
        core.domain.exceptions.ObservationRejected
            If the observation has no postcode, or neither a
            measurement nor a visual tag.  Nothing is stored.
        """
        observation = Observation(
            citizen_id=validated_data["citizen_id"],
            postcode=(validated_data.get("postcode") or "").strip(),
            temperature=validated_data.get("temperature"),
            ph=validated_data.get("ph"),
            alkalinity=validated_data.get("alkalinity"),
            turbidity=validated_data.get("turbidity"),
            visual_observations=list(validated_data.get("visual_observations") or []),
            image_paths=list(validated_data.get("image_paths") or []),
        )

        reason = rejection_reason(observation)
        if reason is not None:
            logger.warning(
                "Rejected observation from citizen %s: %s",
                observation.citizen_id,
                reason,
            )
            raise ObservationRejected(reason)

        observation.is_valid = True
        observation.is_complete = check_complete(observation)
        observation.submitted_at = timezone.now()

        with transaction.atomic():
            observation.save()
            if _award_points_on_submit():
                from rewards.services import RewardService

                RewardService().credit_observation(
                    observation.citizen_id,
                    is_complete=observation.is_complete,
                )

        logger.info(
            "Stored observation %s for citizen %s (complete=%s)",
            observation.pk,
            observation.citizen_id,
            observation.is_complete,
        )
        return observation


# ═══════════════════════════════════════════════════════════════════
#  Query Service
# ═══════════════════════════════════════════════════════════════════


class ObservationQueryService:

    @staticmethod
    def all() -> QuerySet[Observation]:
        return Observation.objects.all()

    @staticmethod
    def get(observation_id: uuid.UUID | str) -> Observation:
        try:
            return Observation.objects.get(pk=observation_id)
        except Observation.DoesNotExist:
            raise NotFound("Observation not found.")

    @staticmethod
    def by_citizen(citizen_id: str) -> QuerySet[Observation]:
        return Observation.objects.filter(citizen_id=citizen_id)

    @staticmethod
    def valid_by_citizen(citizen_id: str) -> QuerySet[Observation]:
        return Observation.objects.filter(citizen_id=citizen_id, is_valid=True)

    @staticmethod
    def by_postcode(postcode: str) -> QuerySet[Observation]:
        return Observation.objects.filter(postcode__iexact=postcode.strip())

    @staticmethod
    def valid() -> QuerySet[Observation]:
        return Observation.objects.filter(is_valid=True)

    @staticmethod
    def recent(limit: int = RECENT_OBSERVATIONS_LIMIT) -> QuerySet[Observation]:
        """Most recent valid observations, newest first."""
        return Observation.objects.filter(is_valid=True).order_by("-submitted_at")[:limit]

    @staticmethod
    def counts_for_citizen(citizen_id: str) -> dict[str, Any]:
        qs = Observation.objects.filter(citizen_id=citizen_id)
        return {
            "citizen_id": citizen_id,
            "count": qs.count(),
            "valid_count": qs.filter(is_valid=True).count(),
        }

    @staticmethod
    def delete(observation_id: uuid.UUID | str, *, requested_by=None) -> None:
        """
        Permanently remove an observation.

        The citizen's reward ledger is left untouched; an administrator
        can rebuild it from the remaining observations via the rewards
        "calculate" endpoint.
        """
        require_administrator(requested_by, "Only administrators may delete observations.")
        deleted, _ = Observation.objects.filter(pk=observation_id).delete()
        if not deleted:
            raise NotFound("Observation not found.")
        logger.info("Deleted observation %s", observation_id)
