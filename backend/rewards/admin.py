from django.contrib import admin

from .models import CitizenReward


@admin.register(CitizenReward)
class CitizenRewardAdmin(admin.ModelAdmin):
    list_display = ("citizen_id", "total_points", "valid_observations",
                    "complete_observations", "current_badge", "updated_at")
    list_filter = ("current_badge",)
    search_fields = ("citizen_id",)
    ordering = ("-total_points", "citizen_id")
