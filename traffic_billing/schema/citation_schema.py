from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from traffic_billing.schema.payment_schema import PaymentSchema
from traffic_billing.schema.warrant_schema import WarrantSchema


class IssueCitationSchema(BaseModel):
    license_number: str = Field(..., max_length=20)
    license_plate: Optional[str] = Field(default=None, max_length=15)
    officer_id: int
    violation_code: str = Field(..., max_length=10)
    violation_date: datetime
    location: str = Field(..., max_length=200)
    notes: Optional[str] = None
    issued_at: Optional[datetime] = None


class CitationSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    citation_number: str
    driver_id: int
    vehicle_id: Optional[int] = None
    officer_id: int
    violation_code: str
    violation_date: datetime
    violation_location: str
    actual_fine_amount: Decimal
    issued_date: datetime
    status: str
    notes: Optional[str] = None


class PointGrantSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    driver_id: int
    citation_id: int
    points_added: int
    effective_date: date
    expiration_date: date


class CitationDetailSchema(BaseModel):
    citation: CitationSchema
    total_paid: Decimal
    outstanding_amount: Decimal
    days_since_issued: int
    payments: List[PaymentSchema] = []
    warrants: List[WarrantSchema] = []
    point_grants: List[PointGrantSchema] = []
