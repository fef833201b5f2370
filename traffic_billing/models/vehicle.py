from sqlalchemy import (Column,
                        String,
                        Integer,
                        Date,
                        ForeignKey)
from sqlalchemy.orm import Session
from traffic_billing.models.base_class import Base


class Vehicle(Base):
    id = Column(Integer, primary_key=True, autoincrement=True)
    vin = Column(String(17), unique=True, nullable=False)
    license_plate = Column(String(15), unique=True, nullable=False, index=True)
    make = Column(String(30), nullable=False)
    model = Column(String(30), nullable=False)
    year = Column(Integer, nullable=False)
    color = Column(String(20), nullable=False)
    registered_owner_id = Column(Integer, ForeignKey("driver.id", ondelete="RESTRICT"),
                                 name="fk_registered_owner_id", nullable=False)
    registration_expiry = Column(Date, nullable=False)
    insurance_policy_number = Column(String(30), nullable=True)
    insurance_expiry = Column(Date, nullable=True)

    @classmethod
    def get_by_plate(cls, db: Session, license_plate: str):
        return db.query(cls).filter(cls.license_plate == license_plate).first()
