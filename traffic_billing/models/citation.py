from datetime import datetime
from typing import List, Optional

from sqlalchemy import (Column,
                        String,
                        Text,
                        DateTime,
                        Numeric,
                        ForeignKey,
                        Integer,
                        CheckConstraint,
                        func,
                        select)
from sqlalchemy.orm import Session
from traffic_billing.models.base_class import Base
from traffic_billing.models.driver import Driver
from traffic_billing.models.payment import Payment
from traffic_billing.models.violation_type import ViolationType
from traffic_billing.utils import enum


class Citation(Base):
    __table_args__ = (
        CheckConstraint("violation_date <= issued_date", name="chk_violation_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    citation_number = Column(String(20), unique=True, nullable=False, index=True)
    driver_id = Column(Integer, ForeignKey("driver.id", ondelete="RESTRICT"),
                       name="fk_driver_id", nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicle.id", ondelete="SET NULL"),
                        name="fk_vehicle_id", nullable=True)
    officer_id = Column(Integer, ForeignKey("officer.id", ondelete="RESTRICT"),
                        name="fk_officer_id", nullable=False)
    violation_code = Column(String(10), ForeignKey("violation_type.violation_code", ondelete="RESTRICT"),
                            name="fk_violation_code", nullable=False)
    violation_date = Column(DateTime, nullable=False, index=True)
    violation_location = Column(String(200), nullable=False)
    actual_fine_amount = Column(Numeric(10, 2), nullable=False)
    issued_date = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default=enum.CitationStatus.ISSUED.value, index=True)
    notes = Column(Text, nullable=True)

    @classmethod
    def create(cls, db: Session, **fields):
        """Adds and flushes; the caller owns the transaction."""
        citation = Citation(**fields)
        db.add(citation)
        db.flush()
        return citation

    @classmethod
    def get_by_number(cls, db: Session, citation_number: str):
        return db.query(cls).filter(cls.citation_number == citation_number).first()

    @classmethod
    def get_by_number_for_update(cls, db: Session, citation_number: str):
        return (db.query(cls)
                .filter(cls.citation_number == citation_number)
                .with_for_update()
                .first())

    @classmethod
    def lock_by_id(cls, db: Session, citation_id: int, skip_locked: bool = False):
        """Row lock on one citation; ``None`` when absent or, with ``skip_locked``, held elsewhere."""
        return (db.query(cls)
                .filter(cls.id == citation_id)
                .with_for_update(skip_locked=skip_locked)
                .first())

    @classmethod
    def get_escalation_candidate_ids(cls, db: Session, issued_before: datetime, limit: Optional[int] = None) -> List[int]:
        query = (db.query(cls.id)
                 .filter(cls.status == enum.CitationStatus.ISSUED.value,
                         cls.issued_date < issued_before)
                 .order_by(cls.issued_date, cls.id))
        if limit:
            query = query.limit(limit)
        return [row.id for row in query.all()]

    @classmethod
    def fetch_overdue(cls, db: Session, statuses: List[str], issued_before: datetime):
        """
        Citations in ``statuses`` issued before ``issued_before`` joined with
        their driver, catalog entry and total paid, oldest first.
        """
        paid = (select(Payment.citation_id, func.sum(Payment.amount).label("total_paid"))
                .group_by(Payment.citation_id)
                .subquery())

        return (db.query(cls,
                         Driver,
                         ViolationType,
                         func.coalesce(paid.c.total_paid, 0).label("total_paid"))
                .join(Driver, Driver.id == cls.driver_id)
                .join(ViolationType, ViolationType.violation_code == cls.violation_code)
                .outerjoin(paid, paid.c.citation_id == cls.id)
                .filter(cls.status.in_(statuses),
                        cls.issued_date < issued_before)
                .order_by(cls.issued_date, cls.id)
                .all())
