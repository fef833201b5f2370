from decimal import Decimal

from sqlalchemy import (Column,
                        String,
                        Integer,
                        DateTime,
                        Numeric,
                        ForeignKey,
                        CheckConstraint,
                        func)
from sqlalchemy.orm import Session
from traffic_billing.models.base_class import Base
from traffic_billing.utils.common import to_money


class Payment(Base):
    """A payment against one citation. Never edited; corrections are new rows."""

    __table_args__ = (
        CheckConstraint("amount > 0", name="chk_payment_amount"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    citation_id = Column(Integer, ForeignKey("citation.id", ondelete="RESTRICT"),
                         name="fk_citation_id", nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_date = Column(DateTime, nullable=False)
    payment_method = Column(String(20), nullable=False)
    received_by = Column(String(50), nullable=True)
    transaction_reference = Column(String(50), nullable=True)

    @classmethod
    def create(cls, db: Session, **fields):
        payment = Payment(**fields)
        db.add(payment)
        db.flush()
        return payment

    @classmethod
    def total_paid(cls, db: Session, citation_id: int) -> Decimal:
        total = (db.query(func.coalesce(func.sum(cls.amount), 0))
                 .filter(cls.citation_id == citation_id)
                 .scalar())
        return to_money(total)

    @classmethod
    def get_by_citation(cls, db: Session, citation_id: int):
        return (db.query(cls)
                .filter(cls.citation_id == citation_id)
                .order_by(cls.payment_date, cls.id)
                .all())
