from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel


class WarrantSchema(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    citation_id: int
    issued_date: date
    amount_due: Decimal
    status: str
    notes: Optional[str] = None


class EscalatedCitation(BaseModel):
    citation_number: str
    warrant_id: int
    amount_due: Decimal


class FailedEscalation(BaseModel):
    citation_id: int
    error: str


class WarrantSweepResultSchema(BaseModel):
    candidates: int = 0
    escalated: List[EscalatedCitation] = []
    skipped: int = 0
    failed: List[FailedEscalation] = []
