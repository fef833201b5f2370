from sqlalchemy import (Column,
                        String,
                        Integer,
                        Date,
                        Boolean,
                        ForeignKey)
from sqlalchemy.orm import Session
from traffic_billing.models.base_class import Base


class Officer(Base):
    id = Column(Integer, primary_key=True, autoincrement=True)
    badge_number = Column(String(15), unique=True, nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    department = Column(String(50), nullable=False)
    officer_rank = Column(String(30), nullable=True)
    hire_date = Column(Date, nullable=False)
    active_status = Column(Boolean, nullable=False, default=True)
    supervisor_id = Column(Integer, ForeignKey("officer.id", ondelete="SET NULL"),
                           name="fk_supervisor_id", nullable=True)

    @classmethod
    def get_by_id(cls, db: Session, officer_id: int):
        return db.query(cls).filter(cls.id == officer_id).first()

    @classmethod
    def get_by_badge_number(cls, db: Session, badge_number: str):
        return db.query(cls).filter(cls.badge_number == badge_number).first()
