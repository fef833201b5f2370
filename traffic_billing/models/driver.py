from sqlalchemy import (Column,
                        String,
                        Integer,
                        Date,
                        CheckConstraint,
                        Index)
from sqlalchemy.orm import Session
from traffic_billing.models.base_class import Base


class Driver(Base):
    __table_args__ = (
        CheckConstraint("license_expiry_date > license_issue_date", name="chk_license_dates"),
        Index("idx_drivers_name", "last_name", "first_name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    license_number = Column(String(20), unique=True, nullable=False, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    address = Column(String(200), nullable=False)
    city = Column(String(50), nullable=False)
    state = Column(String(30), nullable=False)
    zip_code = Column(String(10), nullable=False)
    phone = Column(String(15), nullable=False)
    email = Column(String(100), nullable=True)
    license_issue_date = Column(Date, nullable=False)
    license_expiry_date = Column(Date, nullable=False)
    license_class = Column(String(10), nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def get_by_license_number(cls, db: Session, license_number: str):
        return db.query(cls).filter(cls.license_number == license_number).first()

    @classmethod
    def get_by_id(cls, db: Session, driver_id: int):
        return db.query(cls).filter(cls.id == driver_id).first()
