from django.contrib import admin

from .models import Reservation


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ("id", "customer", "reservation_time", "party_size", "table", "status")
    list_filter = ("status",)
    search_fields = ("customer__name", "customer__email", "customer__phone_number")
    date_hierarchy = "reservation_time"
    list_select_related = ("customer", "table")
    raw_id_fields = ("customer",)
    readonly_fields = ("status", "table", "confirmed_by", "created_at", "updated_at")
