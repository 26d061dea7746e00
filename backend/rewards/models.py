"""
Rewards app models.

``CitizenReward`` is the persisted form of a citizen's ledger entry,
used by ``rewards.stores.DatabaseLedgerStore``.  All arithmetic on it
lives in ``rewards.ledger``; this module only defines storage.
"""

from django.db import models

from core.models import TimeStampedModel


class BadgeLevel(models.TextChoices):
    NONE = "None", "None"
    BRONZE = "Bronze", "Bronze"
    SILVER = "Silver", "Silver"
    GOLD = "Gold", "Gold"


class CitizenReward(TimeStampedModel):
    """
    One row per citizen: accumulated points, observation counters and
    earned badges.

    Rows are created lazily on the first read or point-earning event,
    zeroed by an administrative reset, and removed only by an
    administrative delete.
    """

    citizen_id = models.CharField(
        max_length=100,
        unique=True,
        verbose_name="Citizen ID",
    )
    total_points = models.IntegerField(
        default=0,
        db_index=True,
        verbose_name="Total Points",
    )
    valid_observations = models.PositiveIntegerField(
        default=0,
        verbose_name="Valid Observations",
    )
    complete_observations = models.PositiveIntegerField(
        default=0,
        verbose_name="Complete Observations",
    )
    badges = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Badges",
        help_text="Badges earned, in the order they were awarded.",
    )
    current_badge = models.CharField(
        max_length=10,
        choices=BadgeLevel.choices,
        default=BadgeLevel.NONE,
        db_index=True,
        verbose_name="Current Badge",
    )

    class Meta:
        verbose_name = "Citizen Reward"
        verbose_name_plural = "Citizen Rewards"
        ordering = ["-total_points", "citizen_id"]

    def __str__(self):
        return f"{self.citizen_id}: {self.total_points} pts ({self.current_badge})"
