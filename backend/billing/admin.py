from django.contrib import admin

from .models import Bill


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ("id", "dining_session", "status", "total_amount", "payment_method", "generated_at", "paid_at")
    list_filter = ("status", "payment_method")
    search_fields = ("id", "dining_session__table__number", "dining_session__party_identifier")
    list_select_related = ("dining_session__table",)
    # Bills are computed and settled by BillingService only.
    readonly_fields = (
        "dining_session",
        "subtotal",
        "tax_amount",
        "discount_amount",
        "total_amount",
        "status",
        "generated_by",
        "generated_at",
        "payment_method",
        "payment_notes",
        "paid_at",
        "paid_confirmed_by",
        "created_at",
        "updated_at",
    )
