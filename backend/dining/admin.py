from django.contrib import admin

from .models import DiningSession


@admin.register(DiningSession)
class DiningSessionAdmin(admin.ModelAdmin):
    list_display = ("id", "table", "party_identifier", "party_size", "status", "start_time", "end_time")
    list_filter = ("status",)
    search_fields = ("party_identifier", "table__number")
    list_select_related = ("table",)
    date_hierarchy = "start_time"
    readonly_fields = ("table", "reservation", "status", "opened_by", "start_time", "end_time", "created_at", "updated_at")
