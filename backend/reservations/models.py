from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class Reservation(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", _("Pending")
        CONFIRMED = "CONFIRMED", _("Confirmed")
        SEATED = "SEATED", _("Seated")
        COMPLETED = "COMPLETED", _("Completed")
        CANCELLED = "CANCELLED", _("Cancelled")
        NO_SHOW = "NO_SHOW", _("No Show")

    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="reservations",
    )
    reservation_time = models.DateTimeField(
        help_text=_("When the party expects to be seated."),
    )
    party_size = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    table = models.ForeignKey(
        "tables.Table",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="reservations",
        help_text=_("Assigned at confirmation, or pinned when booked for a specific table."),
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    notes = models.TextField(blank=True)
    confirmed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="confirmed_reservations",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Statuses that still hold a claim on the assigned table.
    ACTIVE_STATUSES = [Status.PENDING, Status.CONFIRMED]
    # Statuses that block deleting the table.
    TABLE_BLOCKING_STATUSES = [Status.PENDING, Status.CONFIRMED, Status.SEATED]

    class Meta:
        ordering = ["reservation_time", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(party_size__gte=1),
                name="reservation_party_size_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "reservation_time"], name="reservation_status_time_idx"),
            models.Index(fields=["table", "status"], name="reservation_table_status_idx"),
        ]

    def __str__(self):
        return f"Reservation {self.id} for {self.customer} at {self.reservation_time:%Y-%m-%d %H:%M}"
