from sqlalchemy import (Column,
                        String,
                        Numeric,
                        SmallInteger,
                        Boolean,
                        CheckConstraint)
from sqlalchemy.orm import Session
from traffic_billing.models.base_class import Base


class ViolationType(Base):
    """Violation catalog entry. Fines are copied onto a citation at issuance."""

    __table_args__ = (
        CheckConstraint("base_fine_amount > 0", name="chk_fine_amount"),
        CheckConstraint("points_assigned >= 0", name="chk_points"),
    )

    violation_code = Column(String(10), primary_key=True)
    description = Column(String(200), nullable=False)
    base_fine_amount = Column(Numeric(10, 2), nullable=False)
    is_moving_violation = Column(Boolean, nullable=False, default=True)
    points_assigned = Column(SmallInteger, nullable=False, default=0)

    @classmethod
    def get_by_code(cls, db: Session, violation_code: str):
        return db.query(cls).filter(cls.violation_code == violation_code).first()
