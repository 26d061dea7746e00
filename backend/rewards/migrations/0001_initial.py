from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="CitizenReward",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                ("citizen_id", models.CharField(max_length=100, unique=True, verbose_name="Citizen ID")),
                ("total_points", models.IntegerField(db_index=True, default=0, verbose_name="Total Points")),
                ("valid_observations", models.PositiveIntegerField(default=0, verbose_name="Valid Observations")),
                ("complete_observations", models.PositiveIntegerField(default=0, verbose_name="Complete Observations")),
                ("badges", models.JSONField(blank=True, default=list, help_text="Badges earned, in the order they were awarded.", verbose_name="Badges")),
                ("current_badge", models.CharField(choices=[("None", "None"), ("Bronze", "Bronze"), ("Silver", "Silver"), ("Gold", "Gold")], db_index=True, default="None", max_length=10, verbose_name="Current Badge")),
            ],
            options={
                "verbose_name": "Citizen Reward",
                "verbose_name_plural": "Citizen Rewards",
                "ordering": ["-total_points", "citizen_id"],
            },
        ),
    ]
