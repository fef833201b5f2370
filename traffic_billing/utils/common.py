import logging
import random
import time
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Union

import pytz
from dateutil import parser
from fastapi.responses import JSONResponse

from traffic_billing.exception_handler.errors import ConstraintViolation

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class DateTimeUtils:

    @staticmethod
    def to_naive_utc(value: Optional[datetime]) -> datetime:
        """Naive UTC datetime for storage; ``None`` means now."""
        if value is None:
            return datetime.utcnow().replace(microsecond=0)
        if value.tzinfo is not None:
            value = value.astimezone(pytz.utc).replace(tzinfo=None)
        return value

    @staticmethod
    def parse_reference_time(value: Optional[str]) -> datetime:
        if value is None or not value.strip():
            return DateTimeUtils.to_naive_utc(None)
        try:
            parsed = parser.parse(value)
        except (ValueError, OverflowError):
            raise ConstraintViolation(f"Invalid reference time: {value}")
        if parsed.tzinfo is None:
            parsed = pytz.utc.localize(parsed)
        return DateTimeUtils.to_naive_utc(parsed)

    @staticmethod
    def days_between(start: datetime, end: datetime) -> int:
        """Whole calendar days from ``start`` to ``end``, times ignored."""
        return (end.date() - start.date()).days

    @staticmethod
    def overdue_cutoff(as_of: datetime, min_days: int) -> datetime:
        """
        Exclusive upper bound on an issue timestamp for it to be at least
        ``min_days`` calendar days old on ``as_of``.
        """
        try:
            cutoff_date = as_of.date() - timedelta(days=min_days - 1)
        except OverflowError:
            # older than any representable date, nothing qualifies
            return datetime.min
        return datetime.combine(cutoff_date, datetime.min.time())

    @staticmethod
    def add_years(start: date, years: int) -> date:
        try:
            return start.replace(year=start.year + years)
        except ValueError:
            # 29 February in a non-leap target year
            return start.replace(year=start.year + years, day=28)


def to_money(value: Union[Decimal, int, float, str, None]) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def generate_citation_number(issued_at: datetime) -> str:
    """``YYMMDD-NNNNN``: issue date plus a zero padded random suffix."""
    return f"{issued_at:%y%m%d}-{random.randint(0, 99999):05d}"


def calculate_time_differece(start_time):
    end_time = time.time()
    total_time = end_time - start_time
    return total_time


def api_response(*, message: str, status: str,
                 data: Union[List[Any], Dict[str, Any], None] = None,
                 status_code: Optional[int] = 200) -> JSONResponse:
    response_data = {
        "message": message,
        "status": status,
        "data": data if data is not None else []
    }
    return JSONResponse(content=response_data, status_code=status_code)
