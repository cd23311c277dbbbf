"""
Customer directory services.
"""
import logging

from django.db import transaction

from core_backend.exceptions import InvalidInput
from .models import Customer

logger = logging.getLogger(__name__)


class CustomerService:
    """Lookup and de-duplication of guests by contact details."""

    @staticmethod
    @transaction.atomic
    def find_or_create(name: str, phone_number: str = None, email: str = None) -> Customer:
        """
        Return the guest matching `email`, else `phone_number`, creating one
        when neither matches. A matched guest whose stored name differs from
        `name` has the name corrected; contact details are never rewritten.
        """
        name = (name or "").strip()
        if not name:
            raise InvalidInput("Customer name is required.")

        email = Customer.objects.normalize_email(email)
        phone_number = Customer.objects.normalize_phone(phone_number)

        customer = None
        if email:
            customer = Customer.objects.select_for_update().filter(email=email).first()
        if customer is None and phone_number:
            customer = Customer.objects.select_for_update().filter(phone_number=phone_number).first()

        if customer is None:
            customer = Customer.objects.create(
                name=name, phone_number=phone_number, email=email
            )
            logger.info(f"Created customer {customer.id}")
            return customer

        if customer.name != name:
            customer.name = name
            customer.save(update_fields=["name", "updated_at"])
            logger.info(f"Corrected name on customer {customer.id}")

        return customer
