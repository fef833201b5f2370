from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

import pytest

from traffic_billing import schema
from traffic_billing.exception_handler.errors import CitationNotFound, InvalidWarrantState, WarrantNotFound
from traffic_billing.models.base import Citation, Warrant
from traffic_billing.service.payment_service import PaymentService
from traffic_billing.service.warrant_service import WarrantService
from traffic_billing.utils.enum import PaymentMethod
from .conftest import ISSUED_AT


def test_overdue_citation_escalates(db, issue_citation):
    citation = issue_citation("SPD20")

    warrant = WarrantService.escalate_citation(db, citation.citation_number, ISSUED_AT + timedelta(days=95))

    assert warrant.status == "active"
    assert warrant.amount_due == Decimal("2000.00")
    assert warrant.issued_date == (ISSUED_AT + timedelta(days=95)).date()
    assert Citation.get_by_number(db, citation.citation_number).status == "warrant"


def test_escalation_is_idempotent(db, issue_citation):
    citation = issue_citation("SPD20")
    as_of = ISSUED_AT + timedelta(days=95)

    WarrantService.escalate_citation(db, citation.citation_number, as_of)
    second = WarrantService.escalate_citation(db, citation.citation_number, as_of + timedelta(days=1))

    assert second is None
    assert len(Warrant.get_by_citation(db, citation.id)) == 1


@pytest.mark.parametrize("days, escalated", [(89, False), (90, True)])
def test_grace_period_boundary(db, issue_citation, days, escalated):
    citation = issue_citation("SPD10")

    warrant = WarrantService.escalate_citation(db, citation.citation_number, ISSUED_AT + timedelta(days=days))

    assert (warrant is not None) is escalated


def test_warrant_amount_is_outstanding_balance(db, issue_citation):
    citation = issue_citation("SPD10")
    request = schema.ProcessPaymentSchema(amount=Decimal("500.00"), payment_method=PaymentMethod.CASH)
    PaymentService.process_payment(db, citation.citation_number, request, paid_at=ISSUED_AT + timedelta(days=3))

    warrant = WarrantService.escalate_citation(db, citation.citation_number, ISSUED_AT + timedelta(days=120))

    assert warrant.amount_due == Decimal("750.00")


def test_escalate_unknown_citation(db):
    with pytest.raises(CitationNotFound):
        WarrantService.escalate_citation(db, "000000-00000", ISSUED_AT)


def test_sweep_escalates_only_overdue_unpaid(db, issue_citation):
    overdue = issue_citation("SPD10")
    issue_citation("RLR", issued_at=ISSUED_AT + timedelta(days=50))
    settled = issue_citation("NOL")
    settled.status = "paid"
    db.commit()

    result = WarrantService.sweep_overdue_citations(db, ISSUED_AT + timedelta(days=95))

    assert result.candidates == 1
    assert [e.citation_number for e in result.escalated] == [overdue.citation_number]
    assert result.escalated[0].amount_due == Decimal("1250.00")
    assert result.failed == []

    rerun = WarrantService.sweep_overdue_citations(db, ISSUED_AT + timedelta(days=95))
    assert rerun.candidates == 0
    assert rerun.escalated == []
    assert db.query(Warrant).count() == 1


def test_sweep_respects_limit(db, issue_citation):
    issue_citation("SPD10")
    issue_citation("SPD20")
    issue_citation("STPL")

    result = WarrantService.sweep_overdue_citations(db, ISSUED_AT + timedelta(days=100), limit=2)

    assert result.candidates == 2
    assert len(result.escalated) == 2
    assert db.query(Citation).filter(Citation.status == "issued").count() == 1


def test_sweep_continues_past_failures(db, issue_citation):
    first = issue_citation("SPD10")
    second = issue_citation("SPD20", issued_at=ISSUED_AT + timedelta(hours=2))
    original_create = Warrant.create
    calls = []

    def flaky_create(*args, **kwargs):
        calls.append(kwargs["citation_id"])
        if len(calls) == 1:
            raise RuntimeError("deadlock detected")
        return original_create(*args, **kwargs)

    with patch.object(Warrant, "create", side_effect=flaky_create):
        result = WarrantService.sweep_overdue_citations(db, ISSUED_AT + timedelta(days=95))

    assert result.candidates == 2
    assert [f.citation_id for f in result.failed] == [first.id]
    assert "deadlock detected" in result.failed[0].error
    assert [e.citation_number for e in result.escalated] == [second.citation_number]
    assert Citation.get_by_number(db, first.citation_number).status == "issued"


def test_sweep_skips_locked_citations(db, issue_citation):
    issue_citation("SPD10")

    with patch.object(Citation, "lock_by_id", return_value=None):
        result = WarrantService.sweep_overdue_citations(db, ISSUED_AT + timedelta(days=95))

    assert result.candidates == 1
    assert result.skipped == 1
    assert result.escalated == []
    assert db.query(Warrant).count() == 0


def test_serve_warrant(db, issue_citation):
    citation = issue_citation("SPD20")
    warrant = WarrantService.escalate_citation(db, citation.citation_number, ISSUED_AT + timedelta(days=95))

    served = WarrantService.serve_warrant(db, warrant.id)
    assert served.status == "served"

    with pytest.raises(InvalidWarrantState):
        WarrantService.serve_warrant(db, warrant.id)


def test_serve_unknown_warrant(db):
    with pytest.raises(WarrantNotFound):
        WarrantService.serve_warrant(db, 4242)
