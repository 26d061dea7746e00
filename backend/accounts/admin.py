from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "citizen_id", "full_name", "role", "is_active")
    search_fields = ("username", "email", "citizen_id", "full_name")
    list_filter = ("is_active", "is_staff", "role")
    readonly_fields = ("citizen_id",)
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Citizen", {"fields": ("citizen_id", "full_name", "role")}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ("Citizen", {"fields": ("email", "full_name", "role")}),
    )
