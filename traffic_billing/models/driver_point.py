from datetime import date

from sqlalchemy import (Column,
                        Integer,
                        SmallInteger,
                        Date,
                        ForeignKey,
                        CheckConstraint,
                        func)
from sqlalchemy.orm import Session
from traffic_billing.models.base_class import Base


class DriverPoint(Base):
    """
    Licence penalty points granted by one citation.

    Grants are written once at issuance and never changed; they stop counting
    once ``expiration_date`` is no longer in the future.
    """

    __table_args__ = (
        CheckConstraint("expiration_date > effective_date", name="chk_points_date_range"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    driver_id = Column(Integer, ForeignKey("driver.id", ondelete="CASCADE"),
                       name="fk_driver_id", nullable=False, index=True)
    citation_id = Column(Integer, ForeignKey("citation.id", ondelete="RESTRICT"),
                         name="fk_citation_id", nullable=False)
    points_added = Column(SmallInteger, nullable=False)
    effective_date = Column(Date, nullable=False)
    expiration_date = Column(Date, nullable=False)

    @classmethod
    def create(cls, db: Session, **fields):
        grant = DriverPoint(**fields)
        db.add(grant)
        db.flush()
        return grant

    @classmethod
    def get_by_citation(cls, db: Session, citation_id: int):
        return db.query(cls).filter(cls.citation_id == citation_id).all()

    @classmethod
    def active_totals(cls, db: Session, driver_id: int, as_of: date):
        """``(total_points, latest_expiration)`` over grants still in force on ``as_of``."""
        total, latest = (db.query(func.coalesce(func.sum(cls.points_added), 0),
                                  func.max(cls.expiration_date))
                         .filter(cls.driver_id == driver_id,
                                 cls.expiration_date > as_of)
                         .one())
        return int(total), latest
