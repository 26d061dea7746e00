from django.contrib import admin

from .models import Observation


@admin.register(Observation)
class ObservationAdmin(admin.ModelAdmin):
    list_display = ("id", "citizen_id", "postcode", "submitted_at", "is_valid", "is_complete")
    list_filter = ("is_valid", "is_complete")
    search_fields = ("citizen_id", "postcode")
    readonly_fields = ("submitted_at", "is_valid", "is_complete")
    ordering = ("-submitted_at",)
