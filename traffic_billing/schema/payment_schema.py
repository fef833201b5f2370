from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from traffic_billing.utils.enum import PaymentMethod


class ProcessPaymentSchema(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    payment_method: PaymentMethod
    transaction_reference: Optional[str] = Field(default=None, max_length=50)
    received_by: Optional[str] = Field(default=None, max_length=50)
    paid_at: Optional[datetime] = None


class PaymentSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    citation_id: int
    amount: Decimal
    payment_date: datetime
    payment_method: str
    received_by: Optional[str] = None
    transaction_reference: Optional[str] = None


class PaymentResultSchema(BaseModel):
    payment_id: int
    citation_number: str
    citation_status: str
    outstanding_amount: Decimal
