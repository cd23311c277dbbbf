from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Bill(models.Model):
    """
    The financial summary of one dining session.

    Regenerated in place while UNPAID, frozen once PAID.
    """

    class Status(models.TextChoices):
        UNPAID = "UNPAID", _("Unpaid")
        PAID = "PAID", _("Paid")
        VOID = "VOID", _("Void")

    dining_session = models.OneToOneField(
        "dining.DiningSession",
        on_delete=models.PROTECT,
        related_name="bill",
    )
    generated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="generated_bills",
    )

    subtotal = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.UNPAID,
    )
    generated_at = models.DateTimeField(
        help_text=_("When the amounts were last computed."),
    )

    payment_method = models.CharField(
        max_length=50,
        blank=True,
        help_text=_("How the guest paid, as recorded by staff (e.g. 'Cash')."),
    )
    payment_notes = models.TextField(blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    paid_confirmed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="confirmed_payments",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-generated_at", "-id"]
        indexes = [
            models.Index(fields=["status", "generated_at"], name="bill_status_generated_idx"),
        ]

    def __str__(self):
        return f"Bill {self.id} for session {self.dining_session_id} ({self.status})"
