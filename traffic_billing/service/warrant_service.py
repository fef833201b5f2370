import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from traffic_billing import schema
from traffic_billing.config import settings
from traffic_billing.exception_handler.errors import CitationNotFound, InvalidWarrantState, WarrantNotFound
from traffic_billing.models import base
from traffic_billing.utils import enum
from traffic_billing.utils.common import DateTimeUtils, to_money

logger = logging.getLogger(__name__)


class WarrantService:

    @staticmethod
    def escalate_if_overdue(db: Session, citation: base.Citation, as_of: datetime,
                            outstanding: Optional[Decimal] = None) -> Optional[base.Warrant]:
        """
        Turn an ``issued`` citation past the grace period with a positive
        balance into a warrant. Returns the new warrant, or ``None`` when the
        citation does not qualify.

        The caller must hold the citation row lock and owns the transaction.
        Once escalated the citation leaves ``issued``, so a repeated call is
        a no-op.
        """
        if citation.status != enum.CitationStatus.ISSUED.value:
            return None

        days_since_issued = DateTimeUtils.days_between(citation.issued_date, as_of)
        if days_since_issued < settings.WARRANT_GRACE_PERIOD_DAYS:
            return None

        if outstanding is None:
            outstanding = to_money(citation.actual_fine_amount) - base.Payment.total_paid(db, citation.id)
        if outstanding <= 0:
            logger.info(f"Citation: {citation.citation_number} - overdue but fully paid, no warrant")
            return None

        warrant = base.Warrant.create(
            db,
            citation_id=citation.id,
            issued_date=as_of.date(),
            amount_due=to_money(outstanding),
            status=enum.WarrantStatus.ACTIVE.value,
        )
        citation.status = enum.CitationStatus.WARRANT.value
        db.flush()

        logger.info(f"Citation: {citation.citation_number} - Warrant {warrant.id} issued for {warrant.amount_due} "
                    f"after {days_since_issued} days")
        return warrant

    @staticmethod
    def escalate_citation(db: Session, citation_number: str,
                          as_of: Optional[datetime] = None) -> Optional[base.Warrant]:
        as_of = DateTimeUtils.to_naive_utc(as_of)
        try:
            citation = base.Citation.get_by_number_for_update(db, citation_number)
            if citation is None:
                raise CitationNotFound(f"Citation not found: {citation_number}")
            warrant = WarrantService.escalate_if_overdue(db, citation, as_of)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return warrant

    @staticmethod
    def sweep_overdue_citations(db: Session, as_of: Optional[datetime] = None,
                                limit: Optional[int] = None) -> schema.WarrantSweepResultSchema:
        """
        Escalate every ``issued`` citation older than the grace period.

        Each candidate is locked with SKIP LOCKED and escalated in its own
        transaction. A failing candidate is rolled back and reported in the
        result; the sweep carries on with the rest.
        """
        as_of = DateTimeUtils.to_naive_utc(as_of)
        issued_before = DateTimeUtils.overdue_cutoff(as_of, settings.WARRANT_GRACE_PERIOD_DAYS)
        candidate_ids = base.Citation.get_escalation_candidate_ids(db, issued_before,
                                                                   limit or settings.WARRANT_SWEEP_LIMIT)
        db.rollback()

        result = schema.WarrantSweepResultSchema(candidates=len(candidate_ids))
        logger.info(f"Warrant sweep as of {as_of:%Y-%m-%d} - {len(candidate_ids)} candidate citations")

        for citation_id in candidate_ids:
            try:
                citation = base.Citation.lock_by_id(db, citation_id, skip_locked=True)
                if citation is None:
                    # locked by a concurrent payment or sweep
                    db.rollback()
                    result.skipped += 1
                    continue
                citation_number = citation.citation_number
                warrant = WarrantService.escalate_if_overdue(db, citation, as_of)
                db.commit()
            except Exception as e:
                db.rollback()
                logger.error(f"Citation id: {citation_id} - escalation failed: {e}")
                result.failed.append(schema.FailedEscalation(citation_id=citation_id, error=str(e)))
                continue

            if warrant is None:
                result.skipped += 1
            else:
                result.escalated.append(schema.EscalatedCitation(citation_number=citation_number,
                                                                 warrant_id=warrant.id,
                                                                 amount_due=warrant.amount_due))

        logger.info(f"Warrant sweep finished - escalated: {len(result.escalated)}, "
                    f"skipped: {result.skipped}, failed: {len(result.failed)}")
        return result

    @staticmethod
    def recall_active_warrants(db: Session, citation: base.Citation) -> List[base.Warrant]:
        """Recall every active warrant of ``citation``. Served warrants are left alone."""
        recalled = base.Warrant.get_active_by_citation(db, citation.id)
        for warrant in recalled:
            warrant.status = enum.WarrantStatus.RECALLED.value
            logger.info(f"Citation: {citation.citation_number} - Warrant {warrant.id} recalled")
        db.flush()
        return recalled

    @staticmethod
    def serve_warrant(db: Session, warrant_id: int) -> base.Warrant:
        try:
            warrant = base.Warrant.get_by_id_for_update(db, warrant_id)
            if warrant is None:
                raise WarrantNotFound(f"Warrant not found: {warrant_id}")
            if warrant.status != enum.WarrantStatus.ACTIVE.value:
                raise InvalidWarrantState(f"Warrant {warrant_id} is {warrant.status}, only active warrants can be served")
            warrant.status = enum.WarrantStatus.SERVED.value
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Warrant: {warrant_id} - served")
        return warrant
