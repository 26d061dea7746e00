import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Observation",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("citizen_id", models.CharField(db_index=True, max_length=100, verbose_name="Citizen ID")),
                ("postcode", models.CharField(db_index=True, max_length=20, verbose_name="Postcode")),
                ("temperature", models.FloatField(blank=True, null=True, verbose_name="Temperature (°C)")),
                ("ph", models.FloatField(blank=True, null=True, verbose_name="pH")),
                ("alkalinity", models.FloatField(blank=True, null=True, verbose_name="Alkalinity (mg/L)")),
                ("turbidity", models.FloatField(blank=True, null=True, verbose_name="Turbidity (NTU)")),
                ("visual_observations", models.JSONField(blank=True, default=list, help_text="Ordered list of free-text tags, e.g. 'Clear', 'Algae'.", verbose_name="Visual Observations")),
                ("image_paths", models.JSONField(blank=True, default=list, help_text="Ordered list of image references.", verbose_name="Image Paths")),
                ("submitted_at", models.DateTimeField(db_index=True, verbose_name="Submitted At")),
                ("is_valid", models.BooleanField(default=False, verbose_name="Valid")),
                ("is_complete", models.BooleanField(default=False, verbose_name="Complete")),
            ],
            options={
                "verbose_name": "Observation",
                "verbose_name_plural": "Observations",
                "ordering": ["-submitted_at"],
                "indexes": [models.Index(fields=["citizen_id", "is_valid"], name="observation_citizen_valid_idx")],
            },
        ),
    ]
