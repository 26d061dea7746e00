"""
Observations app models.

An ``Observation`` is one water-quality reading submitted by a citizen.
Readings are immutable once stored: there is no update path, and rows
are only removed by an administrative delete.

The citizen is referenced by the opaque ``citizen_id`` string issued by
the accounts app, not by a foreign key.
"""

import uuid

from django.db import models


class Observation(models.Model):
    """
    A single water-quality reading.

    ``is_valid`` and ``is_complete`` are decided once, at submission
    time, by ``observations.validation``.  Only valid observations are
    ever stored, and a complete observation is always valid.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    citizen_id = models.CharField(
        max_length=100,
        db_index=True,
        verbose_name="Citizen ID",
    )
    postcode = models.CharField(
        max_length=20,
        db_index=True,
        verbose_name="Postcode",
    )

    # ── Measurements (all optional) ──────────────────────────────────
    temperature = models.FloatField(
        null=True,
        blank=True,
        verbose_name="Temperature (°C)",
    )
    ph = models.FloatField(
        null=True,
        blank=True,
        verbose_name="pH",
    )
    alkalinity = models.FloatField(
        null=True,
        blank=True,
        verbose_name="Alkalinity (mg/L)",
    )
    turbidity = models.FloatField(
        null=True,
        blank=True,
        verbose_name="Turbidity (NTU)",
    )

    # ── Visual evidence ──────────────────────────────────────────────
    visual_observations = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Visual Observations",
        help_text="Ordered list of free-text tags, e.g. 'Clear', 'Algae'.",
    )
    image_paths = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Image Paths",
        help_text="Ordered list of image references.",
    )

    submitted_at = models.DateTimeField(
        db_index=True,
        verbose_name="Submitted At",
    )
    is_valid = models.BooleanField(default=False, verbose_name="Valid")
    is_complete = models.BooleanField(default=False, verbose_name="Complete")

    class Meta:
        verbose_name = "Observation"
        verbose_name_plural = "Observations"
        ordering = ["-submitted_at"]
        indexes = [
            models.Index(fields=["citizen_id", "is_valid"], name="observation_citizen_valid_idx"),
        ]

    def __str__(self):
        return f"{self.postcode} by {self.citizen_id} at {self.submitted_at:%Y-%m-%d %H:%M}"
