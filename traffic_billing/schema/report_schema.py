from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class OverdueCitationRow(BaseModel):
    citation_number: str
    driver_name: str
    license_number: str
    violation_date: datetime
    violation: str
    outstanding_amount: Decimal
    days_overdue: int
    warrant_issued: bool


class DriverPointTotalSchema(BaseModel):
    driver_id: int
    license_number: str
    driver_name: str
    total_points: int
    latest_expiration: Optional[date] = None
