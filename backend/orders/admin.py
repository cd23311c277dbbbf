from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("menu_item", "quantity", "price_at_order_time", "status", "get_line_item_total")
    fields = ("menu_item", "quantity", "price_at_order_time", "special_requests", "status", "get_line_item_total")
    can_delete = False

    def get_line_item_total(self, obj):
        return f"${obj.line_total:,.2f}"

    get_line_item_total.short_description = "Line Item Total"

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Read-mostly view of orders. Status changes belong to OrderService so the
    item cascade and status-sync run.
    """

    list_display = ("id", "dining_session", "status", "taken_by", "created_at")
    list_filter = ("status",)
    search_fields = ("id", "dining_session__table__number", "dining_session__party_identifier")
    list_select_related = ("dining_session__table", "taken_by")
    readonly_fields = ("dining_session", "status", "taken_by", "created_at", "updated_at")
    inlines = [OrderItemInline]
