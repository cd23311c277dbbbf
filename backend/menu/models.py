from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class MenuItem(models.Model):
    name = models.CharField(max_length=200, unique=True, help_text=_("Name of the dish."))
    description = models.TextField(blank=True, help_text=_("Description shown to guests."))
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Current selling price. Orders capture it at order time."),
    )
    is_available = models.BooleanField(
        default=True,
        help_text=_("Whether the kitchen can currently make this item."),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_available", "name"], name="menu_available_name_idx"),
        ]

    def __str__(self):
        return self.name
