import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from traffic_billing import schema
from traffic_billing.config import settings
from traffic_billing.exception_handler.errors import (
    CitationNotFound,
    ConstraintViolation,
    InvalidCitationState,
    OverpaymentRejected,
)
from traffic_billing.models import base
from traffic_billing.service.warrant_service import WarrantService
from traffic_billing.utils import enum
from traffic_billing.utils.common import DateTimeUtils, to_money

logger = logging.getLogger(__name__)


class PaymentService:

    @staticmethod
    def process_payment(db: Session, citation_number: str, request: schema.ProcessPaymentSchema,
                        paid_at: Optional[datetime] = None) -> schema.PaymentResultSchema:
        """
        Apply a payment to a citation.

        ``issued`` and ``disputed`` citations take partial payments; a citation
        under warrant only takes a payment settling its whole balance.

        The citation row is locked before the balance is read, so concurrent
        payments on one citation are serialized and cannot jointly overpay.
        The payment, the ``paid`` transition and any warrant recall commit in
        one transaction.
        """
        paid_at = DateTimeUtils.to_naive_utc(paid_at or request.paid_at)
        amount = to_money(request.amount)

        try:
            citation = base.Citation.get_by_number_for_update(db, citation_number)
            if citation is None:
                raise CitationNotFound(f"Citation not found: {citation_number}")

            under_warrant = citation.status == enum.CitationStatus.WARRANT.value
            if citation.status not in enum.PAYABLE_CITATION_STATUSES and not under_warrant:
                raise InvalidCitationState(f"Citation cannot be paid in its current status: {citation.status}")

            fine_amount = to_money(citation.actual_fine_amount)
            paid_so_far = base.Payment.total_paid(db, citation.id)
            amount_due = fine_amount - paid_so_far

            if amount <= 0:
                raise ConstraintViolation("Payment amount must be positive")
            if amount > amount_due:
                raise OverpaymentRejected(f"Payment of {amount} exceeds amount due {amount_due}")
            # a warrant is only cleared by settling the whole balance
            if under_warrant and amount != amount_due:
                raise InvalidCitationState(f"Citation under warrant only accepts the full amount due {amount_due}")

            payment = base.Payment.create(
                db,
                citation_id=citation.id,
                amount=amount,
                payment_date=paid_at,
                payment_method=request.payment_method.value,
                received_by=request.received_by,
                transaction_reference=request.transaction_reference,
            )

            outstanding = amount_due - amount
            if paid_so_far + amount == fine_amount:
                citation.status = enum.CitationStatus.PAID.value
                WarrantService.recall_active_warrants(db, citation)
                logger.info(f"Citation: {citation_number} - fully paid")
            elif settings.ESCALATE_ON_PAYMENT:
                WarrantService.escalate_if_overdue(db, citation, paid_at, outstanding=outstanding)

            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Citation: {citation_number} - Payment {payment.id} of {amount} via "
                    f"{payment.payment_method} recorded, outstanding {outstanding}")

        return schema.PaymentResultSchema(
            payment_id=payment.id,
            citation_number=citation.citation_number,
            citation_status=citation.status,
            outstanding_amount=outstanding,
        )
