import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core_backend.exceptions import (
    InvalidInput,
    InvalidState,
    NotFound,
    PreconditionFailed,
)
from dining.models import DiningSession
from dining.services import DiningSessionService
from orders.models import Order, OrderItem
from orders.state_machine import BILLABLE_ITEM_STATUSES
from .models import Bill
from .money import ZERO, bill_amounts

logger = logging.getLogger(__name__)


class BillingService:
    """
    Bill generation, payment and voiding.

    Payment locks table, reservation, session and then bill; generation and
    voiding start at the session. Either way work on one session serializes.
    """

    @staticmethod
    def get_bill(bill_id) -> Bill:
        try:
            return Bill.objects.select_related("dining_session__table").get(pk=bill_id)
        except (Bill.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Bill {bill_id} not found.", entity_id=bill_id)

    @staticmethod
    def get_for_session(session_id):
        """The session's bill, or None when none has been generated yet."""
        if not DiningSession.objects.filter(pk=session_id).exists():
            raise NotFound(f"Dining session {session_id} not found.", entity_id=session_id)
        return Bill.objects.filter(dining_session_id=session_id).first()

    @staticmethod
    def billable_lines(session: DiningSession):
        """(price, quantity) for READY/SERVED items of the session's live orders."""
        return (
            OrderItem.objects.filter(
                order__dining_session=session,
                status__in=BILLABLE_ITEM_STATUSES,
            )
            .exclude(order__status=Order.Status.CANCELLED)
            .values_list("price_at_order_time", "quantity")
        )

    @staticmethod
    @transaction.atomic
    def generate_bill(session_id, staff) -> Bill:
        """
        Compute the session's bill and upsert it as UNPAID.

        Regenerating an UNPAID or VOID bill rewrites the same row. An ACTIVE
        session moves to BILLED.
        """
        session = DiningSessionService.get_session(session_id, lock=True)
        existing = Bill.objects.select_for_update().filter(dining_session=session).first()
        if existing is not None and existing.status == Bill.Status.PAID:
            raise PreconditionFailed(
                f"Bill {existing.id} is already paid and cannot be regenerated.",
                entity_id=existing.id,
            )
        if session.status == DiningSession.Status.CLOSED:
            raise InvalidState(
                "Cannot bill a CLOSED session.",
                entity_id=session.id,
            )

        amounts = bill_amounts(
            BillingService.billable_lines(session),
            getattr(settings, "RESTAURANT_TAX_RATE", "0.10"),
            ZERO,
        )

        bill, created = Bill.objects.update_or_create(
            dining_session=session,
            defaults={
                **amounts,
                "status": Bill.Status.UNPAID,
                "generated_by": staff,
                "generated_at": timezone.now(),
                "payment_method": "",
                "payment_notes": "",
                "paid_at": None,
                "paid_confirmed_by": None,
            },
        )

        if session.status == DiningSession.Status.ACTIVE:
            session.status = DiningSession.Status.BILLED
            session.save(update_fields=["status", "updated_at"])

        logger.info(
            f"{'Generated' if created else 'Regenerated'} bill {bill.id} for session {session.id}: "
            f"total {bill.total_amount}"
        )
        return bill

    @staticmethod
    @transaction.atomic
    def confirm_payment(bill_id, payment_method: str, staff, payment_notes: str = "") -> Bill:
        """
        Record payment and close out the session in one transaction: bill
        PAID, session CLOSED, table AVAILABLE, reservation COMPLETED.
        """
        try:
            session_id = Bill.objects.values_list("dining_session_id", flat=True).get(pk=bill_id)
        except (Bill.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Bill {bill_id} not found.", entity_id=bill_id)

        session, table, reservation = DiningSessionService.lock_for_close_out(session_id)
        bill = Bill.objects.select_for_update().get(pk=bill_id)

        if bill.status == Bill.Status.PAID:
            raise PreconditionFailed(f"Bill {bill.id} is already paid.", entity_id=bill.id)
        if bill.status == Bill.Status.VOID:
            raise PreconditionFailed(
                f"Bill {bill.id} is void; regenerate it before taking payment.",
                entity_id=bill.id,
            )

        payment_method = (payment_method or "").strip()
        if not payment_method:
            raise InvalidInput("Payment method is required.", entity_id=bill.id)

        bill.status = Bill.Status.PAID
        bill.payment_method = payment_method
        bill.payment_notes = payment_notes or ""
        bill.paid_at = timezone.now()
        bill.paid_confirmed_by = staff
        bill.save(
            update_fields=[
                "status",
                "payment_method",
                "payment_notes",
                "paid_at",
                "paid_confirmed_by",
                "updated_at",
            ]
        )

        DiningSessionService.finish_session(session, table, reservation)

        logger.info(
            f"Bill {bill.id} paid ({payment_method}) by staff {getattr(staff, 'id', None)}; "
            f"session {session.id} closed"
        )
        return bill

    @staticmethod
    @transaction.atomic
    def void_bill(bill_id, staff=None) -> Bill:
        """Void an UNPAID bill and reopen its session for ordering."""
        try:
            session_id = Bill.objects.values_list("dining_session_id", flat=True).get(pk=bill_id)
        except (Bill.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Bill {bill_id} not found.", entity_id=bill_id)

        session = DiningSessionService.get_session(session_id, lock=True)
        bill = Bill.objects.select_for_update().get(pk=bill_id)

        if bill.status != Bill.Status.UNPAID:
            raise InvalidState(
                f"Only UNPAID bills can be voided. Current status: {bill.status}",
                entity_id=bill.id,
            )

        bill.status = Bill.Status.VOID
        bill.save(update_fields=["status", "updated_at"])

        if session.status == DiningSession.Status.BILLED:
            session.status = DiningSession.Status.ACTIVE
            session.save(update_fields=["status", "updated_at"])

        logger.info(f"Bill {bill.id} voided by staff {getattr(staff, 'id', None)}; session {session.id} reopened")
        return bill
