from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest

from traffic_billing import schema
from traffic_billing.config import settings
from traffic_billing.exception_handler.errors import (
    CitationNotFound,
    InvalidCitationState,
    OverpaymentRejected,
)
from traffic_billing.models.base import Citation, Payment, Warrant
from traffic_billing.service.payment_service import PaymentService
from traffic_billing.service.warrant_service import WarrantService
from traffic_billing.utils.enum import PaymentMethod
from .conftest import ISSUED_AT


def pay(db, citation_number, amount, paid_at=ISSUED_AT + timedelta(days=5), method=PaymentMethod.CASH):
    request = schema.ProcessPaymentSchema(amount=Decimal(amount), payment_method=method,
                                          received_by="Cashier 3", transaction_reference="TX-1001")
    return PaymentService.process_payment(db, citation_number, request, paid_at=paid_at)


def test_full_payment_marks_citation_paid(db, issue_citation):
    citation = issue_citation("SPD10")

    result = pay(db, citation.citation_number, "1250.00", method=PaymentMethod.CREDIT_CARD)

    assert result.citation_status == "paid"
    assert result.outstanding_amount == Decimal("0.00")
    assert Citation.get_by_number(db, citation.citation_number).status == "paid"

    payments = Payment.get_by_citation(db, citation.id)
    assert len(payments) == 1
    assert payments[0].payment_method == "credit_card"
    assert payments[0].received_by == "Cashier 3"


def test_paid_citation_rejects_further_payment(db, issue_citation):
    citation = issue_citation("SPD10")
    pay(db, citation.citation_number, "1250.00")

    with pytest.raises(InvalidCitationState):
        pay(db, citation.citation_number, "1.00")

    assert len(Payment.get_by_citation(db, citation.id)) == 1


def test_partial_payments_accumulate(db, issue_citation):
    citation = issue_citation("SPD10")

    first = pay(db, citation.citation_number, "416.67")
    second = pay(db, citation.citation_number, "416.67")
    assert first.citation_status == "issued"
    assert first.outstanding_amount == Decimal("833.33")
    assert second.outstanding_amount == Decimal("416.66")

    last = pay(db, citation.citation_number, "416.66")
    assert last.citation_status == "paid"
    assert Payment.total_paid(db, citation.id) == Decimal("1250.00")


def test_overpayment_is_rejected(db, issue_citation):
    citation = issue_citation("SPD10")
    pay(db, citation.citation_number, "1000.00")

    with pytest.raises(OverpaymentRejected):
        pay(db, citation.citation_number, "300.00")

    assert Payment.total_paid(db, citation.id) == Decimal("1000.00")
    assert Citation.get_by_number(db, citation.citation_number).status == "issued"


def test_payment_for_unknown_citation(db):
    with pytest.raises(CitationNotFound):
        pay(db, "000000-00000", "10.00")


def test_disputed_citation_accepts_payment(db, issue_citation):
    citation = issue_citation("STPL")
    citation.status = "disputed"
    db.commit()

    result = pay(db, citation.citation_number, "500.00")

    assert result.citation_status == "disputed"
    assert result.outstanding_amount == Decimal("1000.00")


def test_dismissed_citation_rejects_payment(db, issue_citation):
    citation = issue_citation("STPL")
    citation.status = "dismissed"
    db.commit()

    with pytest.raises(InvalidCitationState):
        pay(db, citation.citation_number, "500.00")


def test_full_payment_recalls_warrant(db, issue_citation):
    citation = issue_citation("SPD20")
    warrant = WarrantService.escalate_citation(db, citation.citation_number, ISSUED_AT + timedelta(days=95))
    assert warrant.amount_due == Decimal("2000.00")

    result = pay(db, citation.citation_number, "2000.00", paid_at=ISSUED_AT + timedelta(days=96))

    assert result.citation_status == "paid"
    warrants = Warrant.get_by_citation(db, citation.id)
    assert [w.status for w in warrants] == ["recalled"]


def test_partial_payment_under_warrant_is_rejected(db, issue_citation):
    citation = issue_citation("SPD20")
    WarrantService.escalate_citation(db, citation.citation_number, ISSUED_AT + timedelta(days=95))

    with pytest.raises(InvalidCitationState):
        pay(db, citation.citation_number, "500.00", paid_at=ISSUED_AT + timedelta(days=96))

    assert Payment.get_by_citation(db, citation.id) == []
    assert Warrant.get_by_citation(db, citation.id)[0].status == "active"


def test_served_warrant_is_not_recalled(db, issue_citation):
    citation = issue_citation("SPD20")
    warrant = WarrantService.escalate_citation(db, citation.citation_number, ISSUED_AT + timedelta(days=95))
    WarrantService.serve_warrant(db, warrant.id)

    result = pay(db, citation.citation_number, "2000.00", paid_at=ISSUED_AT + timedelta(days=97))

    assert result.citation_status == "paid"
    assert Warrant.get_by_citation(db, citation.id)[0].status == "served"


def test_payment_rolls_back_when_recall_fails(db, issue_citation):
    citation = issue_citation("SPD20")
    WarrantService.escalate_citation(db, citation.citation_number, ISSUED_AT + timedelta(days=95))

    with patch.object(WarrantService, "recall_active_warrants", side_effect=RuntimeError("connection lost")):
        with pytest.raises(RuntimeError):
            pay(db, citation.citation_number, "2000.00", paid_at=ISSUED_AT + timedelta(days=96))

    assert Payment.get_by_citation(db, citation.id) == []
    assert Citation.get_by_number(db, citation.citation_number).status == "warrant"
    assert Warrant.get_by_citation(db, citation.id)[0].status == "active"


def test_partial_payment_on_overdue_citation_escalates(db, issue_citation):
    citation = issue_citation("SPD10")

    result = pay(db, citation.citation_number, "250.00", paid_at=ISSUED_AT + timedelta(days=100))

    assert result.citation_status == "warrant"
    warrant = Warrant.get_by_citation(db, citation.id)[0]
    assert warrant.amount_due == Decimal("1000.00")
    assert warrant.status == "active"


def test_partial_payment_escalation_can_be_disabled(db, issue_citation):
    citation = issue_citation("SPD10")

    with patch.object(settings, "ESCALATE_ON_PAYMENT", False):
        result = pay(db, citation.citation_number, "250.00", paid_at=ISSUED_AT + timedelta(days=100))

    assert result.citation_status == "issued"
    assert Warrant.get_by_citation(db, citation.id) == []
