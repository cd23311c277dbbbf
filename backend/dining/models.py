from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class DiningSession(models.Model):
    """
    A seated party at a table, from seating until the bill is paid.
    """

    class Status(models.TextChoices):
        ACTIVE = "ACTIVE", _("Active")
        BILLED = "BILLED", _("Billed")
        CLOSED = "CLOSED", _("Closed")

    # A session holds its table until it is closed.
    OPEN_STATUSES = [Status.ACTIVE, Status.BILLED]

    table = models.ForeignKey(
        "tables.Table",
        on_delete=models.PROTECT,
        related_name="dining_sessions",
    )
    reservation = models.OneToOneField(
        "reservations.Reservation",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="dining_session",
    )
    opened_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="opened_sessions",
    )
    party_identifier = models.CharField(
        max_length=255,
        blank=True,
        help_text=_("How staff refer to the party, e.g. the booking name."),
    )
    party_size = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    start_time = models.DateTimeField(default=timezone.now)
    end_time = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-start_time", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["table"],
                condition=models.Q(status__in=["ACTIVE", "BILLED"]),
                name="one_open_session_per_table",
            ),
            models.CheckConstraint(
                condition=models.Q(party_size__gte=1),
                name="session_party_size_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "table"], name="session_status_table_idx"),
        ]

    def __str__(self):
        return f"Session {self.id} at {self.table} ({self.status})"

    @property
    def is_open(self):
        return self.status in self.OPEN_STATUSES
