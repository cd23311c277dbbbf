from django.contrib import admin

from .models import Table


@admin.register(Table)
class TableAdmin(admin.ModelAdmin):
    list_display = ("number", "capacity", "status", "updated_at")
    list_filter = ("status",)
    search_fields = ("number",)
    ordering = ("number",)
    # Status moves through TableService and the seating flows only.
    readonly_fields = ("status", "created_at", "updated_at")
