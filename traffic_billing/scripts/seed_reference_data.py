"""
Load the sample violation catalog, officers, drivers and vehicles.

Rows are matched on their natural key (violation code, badge number,
licence number, plate) so running the script twice changes nothing.

    alembic upgrade head
    python -m traffic_billing.scripts.seed_reference_data
"""
import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from traffic_billing.models import base
from traffic_billing.models.context_session import get_db_session

logger = logging.getLogger(__name__)

VIOLATION_TYPES = [
    {"violation_code": "SPD10", "description": "Speeding 1-10 kph over limit",
     "base_fine_amount": Decimal("1250.00"), "is_moving_violation": True, "points_assigned": 2},
    {"violation_code": "SPD20", "description": "Speeding 11-20 kph over limit",
     "base_fine_amount": Decimal("2000.00"), "is_moving_violation": True, "points_assigned": 4},
    {"violation_code": "STPL", "description": "Failure to stop at stop sign",
     "base_fine_amount": Decimal("1500.00"), "is_moving_violation": True, "points_assigned": 3},
    {"violation_code": "RLR", "description": "Running red light",
     "base_fine_amount": Decimal("2500.00"), "is_moving_violation": True, "points_assigned": 4},
    {"violation_code": "NOL", "description": "No valid license",
     "base_fine_amount": Decimal("3000.00"), "is_moving_violation": False, "points_assigned": 0},
    {"violation_code": "NOV", "description": "No valid registration",
     "base_fine_amount": Decimal("1000.00"), "is_moving_violation": False, "points_assigned": 0},
    {"violation_code": "NOP", "description": "No proof of insurance",
     "base_fine_amount": Decimal("2000.00"), "is_moving_violation": False, "points_assigned": 0},
    {"violation_code": "DUI", "description": "Driving under influence",
     "base_fine_amount": Decimal("10000.00"), "is_moving_violation": True, "points_assigned": 8},
]

OFFICERS = [
    {"badge_number": "PD-1234", "first_name": "Michael", "last_name": "Munene",
     "department": "Traffic Division", "officer_rank": "Sergeant", "hire_date": date(2015, 6, 15)},
    {"badge_number": "PD-5678", "first_name": "Sarah", "last_name": "Chelimo",
     "department": "Traffic Division", "officer_rank": "Officer", "hire_date": date(2018, 3, 22)},
    {"badge_number": "PD-9012", "first_name": "Robert", "last_name": "Odhiambo",
     "department": "Patrol Division", "officer_rank": "Officer", "hire_date": date(2019, 11, 5)},
]

DRIVERS = [
    {"license_number": "DL-12345678", "first_name": "John", "last_name": "Muli",
     "date_of_birth": date(1985, 7, 15), "address": "123 Main St", "city": "Springfield", "state": "IL",
     "zip_code": "62704", "phone": "555-123-4567", "license_issue_date": date(2020, 1, 15),
     "license_expiry_date": date(2025, 1, 15), "license_class": "D"},
    {"license_number": "DL-87654321", "first_name": "Emily", "last_name": "Gakii",
     "date_of_birth": date(1990, 11, 22), "address": "456 Oak Ave", "city": "Springfield", "state": "IL",
     "zip_code": "62704", "phone": "555-234-5678", "license_issue_date": date(2019, 5, 20),
     "license_expiry_date": date(2024, 5, 20), "license_class": "D"},
    {"license_number": "DL-13579246", "first_name": "David", "last_name": "Mwite",
     "date_of_birth": date(1978, 3, 8), "address": "789 Pine Rd", "city": "Springfield", "state": "IL",
     "zip_code": "62704", "phone": "555-345-6789", "license_issue_date": date(2021, 2, 10),
     "license_expiry_date": date(2026, 2, 10), "license_class": "D"},
]

# owner given by licence number, resolved to a driver id at load time
VEHICLES = [
    {"vin": "1HGCM82633A123456", "license_plate": "KCC-123K", "make": "Honda", "model": "Accord",
     "year": 2020, "color": "Blue", "owner": "DL-12345678", "registration_expiry": date(2023, 12, 31),
     "insurance_policy_number": "INS-987654", "insurance_expiry": date(2023, 6, 30)},
    {"vin": "5XYZH4AG4DH123456", "license_plate": "KBZ-567N", "make": "Toyota", "model": "Camry",
     "year": 2018, "color": "Red", "owner": "DL-87654321", "registration_expiry": date(2023, 11, 30),
     "insurance_policy_number": "INS-876543", "insurance_expiry": date(2023, 5, 31)},
    {"vin": "2G1WF52E359123456", "license_plate": "KBF-901D", "make": "Chevrolet", "model": "Impala",
     "year": 2019, "color": "Black", "owner": "DL-13579246", "registration_expiry": date(2024, 1, 31),
     "insurance_policy_number": "INS-765432", "insurance_expiry": date(2023, 7, 31)},
]


def seed_reference_data(db: Session) -> dict:
    """Insert the sample rows that are missing and commit. Returns inserted counts per table."""
    inserted = {"violation_type": 0, "officer": 0, "driver": 0, "vehicle": 0}

    for row in VIOLATION_TYPES:
        if base.ViolationType.get_by_code(db, row["violation_code"]) is None:
            db.add(base.ViolationType(**row))
            inserted["violation_type"] += 1

    for row in OFFICERS:
        if base.Officer.get_by_badge_number(db, row["badge_number"]) is None:
            db.add(base.Officer(**row))
            inserted["officer"] += 1

    for row in DRIVERS:
        if base.Driver.get_by_license_number(db, row["license_number"]) is None:
            db.add(base.Driver(**row))
            inserted["driver"] += 1
    db.flush()

    for row in VEHICLES:
        if base.Vehicle.get_by_plate(db, row["license_plate"]) is None:
            fields = {key: value for key, value in row.items() if key != "owner"}
            owner = base.Driver.get_by_license_number(db, row["owner"])
            db.add(base.Vehicle(registered_owner_id=owner.id, **fields))
            inserted["vehicle"] += 1

    db.commit()
    logger.info(f"Reference data seeded: {inserted}")
    return inserted


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    session = get_db_session()
    try:
        print(seed_reference_data(session))
    finally:
        session.close()
