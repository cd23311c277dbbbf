from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class Order(models.Model):
    """
    A kitchen-facing request placed within a dining session.

    `status` is derived from the items' statuses by
    `orders.state_machine.derive_order_status`, except when staff force it
    through OrderService.update_order_status.
    """

    class Status(models.TextChoices):
        PENDING = "PENDING", _("Pending")
        PREPARING = "PREPARING", _("Preparing")
        ACTION_REQUIRED = "ACTION_REQUIRED", _("Action Required")
        READY = "READY", _("Ready")
        SERVED = "SERVED", _("Served")
        CANCELLED = "CANCELLED", _("Cancelled")

    dining_session = models.ForeignKey(
        "dining.DiningSession",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    taken_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders_taken",
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING
    )
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="order_status_created_idx"),
            models.Index(fields=["dining_session", "status"], name="order_session_status_idx"),
        ]

    def __str__(self):
        return f"Order {self.id} ({self.status})"


class OrderItem(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", _("Pending")
        PREPARING = "PREPARING", _("Preparing")
        SOLD_OUT = "SOLD_OUT", _("Sold Out")
        READY = "READY", _("Ready")
        SERVED = "SERVED", _("Served")
        CANCELLED = "CANCELLED", _("Cancelled")

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    menu_item = models.ForeignKey(
        "menu.MenuItem",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])

    # Price snapshot, never rewritten after creation
    price_at_order_time = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        editable=False,
        help_text=_("Price of the menu item when the order was placed."),
    )
    special_requests = models.TextField(
        blank=True, help_text=_("Guest notes, e.g. 'no onions'")
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_item_quantity_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["menu_item", "status"], name="order_item_menu_status_idx"),
            models.Index(fields=["order", "status"], name="order_item_order_status_idx"),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.menu_item_id} ({self.status})"

    @property
    def line_total(self):
        return self.price_at_order_time * self.quantity
