"""
Customer directory models.
"""
from django.db import models
from django.utils.translation import gettext_lazy as _


class CustomerManager(models.Manager):
    """Custom manager for Customer model"""

    def normalize_email(self, email):
        """Normalize email address; blank becomes None so uniqueness ignores it."""
        if email:
            email = email.strip().lower()
        return email or None

    def normalize_phone(self, phone):
        if phone:
            phone = phone.strip()
        return phone or None


class Customer(models.Model):
    """
    A guest who books tables.

    Phone and email are each optional but unique when present; they are the
    keys used to recognise a returning guest.
    """

    name = models.CharField(max_length=255, help_text=_("Name the booking is held under"))
    phone_number = models.CharField(
        max_length=30,
        unique=True,
        null=True,
        blank=True,
        help_text=_("Contact phone, unique when provided"),
    )
    email = models.EmailField(
        unique=True,
        null=True,
        blank=True,
        help_text=_("Contact email, stored lower-cased, unique when provided"),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomerManager()

    class Meta:
        verbose_name = _("Customer")
        verbose_name_plural = _("Customers")
        ordering = ["name", "id"]
        indexes = [
            models.Index(fields=["name"], name="customer_name_idx"),
        ]

    def __str__(self):
        return self.name
