from sqlalchemy import (Column,
                        String,
                        Integer,
                        Date,
                        Text,
                        Numeric,
                        ForeignKey)
from sqlalchemy.orm import Session
from traffic_billing.models.base_class import Base
from traffic_billing.utils import enum


class Warrant(Base):
    id = Column(Integer, primary_key=True, autoincrement=True)
    citation_id = Column(Integer, ForeignKey("citation.id", ondelete="CASCADE"),
                         name="fk_citation_id", nullable=False, index=True)
    issued_date = Column(Date, nullable=False)
    # snapshot of the outstanding balance when the warrant was issued
    amount_due = Column(Numeric(10, 2), nullable=False)
    status = Column(String(20), nullable=False, default=enum.WarrantStatus.ACTIVE.value)
    notes = Column(Text, nullable=True)

    @classmethod
    def create(cls, db: Session, **fields):
        warrant = Warrant(**fields)
        db.add(warrant)
        db.flush()
        return warrant

    @classmethod
    def get_by_id_for_update(cls, db: Session, warrant_id: int):
        return db.query(cls).filter(cls.id == warrant_id).with_for_update().first()

    @classmethod
    def get_by_citation(cls, db: Session, citation_id: int):
        return (db.query(cls)
                .filter(cls.citation_id == citation_id)
                .order_by(cls.id)
                .all())

    @classmethod
    def get_active_by_citation(cls, db: Session, citation_id: int):
        return (db.query(cls)
                .filter(cls.citation_id == citation_id,
                        cls.status == enum.WarrantStatus.ACTIVE.value)
                .order_by(cls.id)
                .all())
