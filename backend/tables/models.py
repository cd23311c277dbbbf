from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class Table(models.Model):
    """
    A physical table on the floor.

    `status` is guarded: OCCUPIED is only reached by seating a party and
    RESERVED only by confirming a reservation. Direct writes go through
    TableService.change_status.
    """

    class Status(models.TextChoices):
        AVAILABLE = "AVAILABLE", _("Available")
        OCCUPIED = "OCCUPIED", _("Occupied")
        RESERVED = "RESERVED", _("Reserved")
        NEEDS_CLEANING = "NEEDS_CLEANING", _("Needs Cleaning")
        OUT_OF_SERVICE = "OUT_OF_SERVICE", _("Out of Service")

    number = models.CharField(
        max_length=20,
        unique=True,
        help_text=_("Human readable table number, e.g. 'A1'."),
    )
    capacity = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text=_("Number of guests the table seats."),
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.AVAILABLE,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["number"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity__gte=1),
                name="table_capacity_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "capacity"], name="table_status_capacity_idx"),
        ]

    def __str__(self):
        return f"Table {self.number}"
