import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from traffic_billing import schema
from traffic_billing.exception_handler.errors import ConstraintViolation, DriverNotFound
from traffic_billing.models import base
from traffic_billing.utils import enum
from traffic_billing.utils.common import DateTimeUtils, to_money

logger = logging.getLogger(__name__)


class ReportService:

    @staticmethod
    def overdue_report(db: Session, min_days_overdue: int, include_warrants: bool,
                       as_of: Optional[datetime] = None) -> List[schema.OverdueCitationRow]:
        """Unpaid citations at least ``min_days_overdue`` days old, most overdue first. Read only."""
        if min_days_overdue < 0:
            raise ConstraintViolation("min_days_overdue cannot be negative")
        as_of = DateTimeUtils.to_naive_utc(as_of)

        statuses = [enum.CitationStatus.ISSUED.value]
        if include_warrants:
            statuses.append(enum.CitationStatus.WARRANT.value)

        rows = base.Citation.fetch_overdue(db, statuses, DateTimeUtils.overdue_cutoff(as_of, min_days_overdue))

        report = []
        for citation, driver, violation_type, total_paid in rows:
            report.append(schema.OverdueCitationRow(
                citation_number=citation.citation_number,
                driver_name=driver.full_name,
                license_number=driver.license_number,
                violation_date=citation.violation_date,
                violation=violation_type.description,
                outstanding_amount=to_money(citation.actual_fine_amount) - to_money(total_paid),
                days_overdue=DateTimeUtils.days_between(citation.issued_date, as_of),
                warrant_issued=citation.status == enum.CitationStatus.WARRANT.value,
            ))

        logger.debug(f"Overdue report as of {as_of:%Y-%m-%d} - {len(report)} rows")
        return report


class PointsService:

    @staticmethod
    def active_points(db: Session, license_number: str,
                      as_of: Optional[datetime] = None) -> schema.DriverPointTotalSchema:
        as_of = DateTimeUtils.to_naive_utc(as_of)
        driver = base.Driver.get_by_license_number(db, license_number)
        if driver is None:
            raise DriverNotFound(f"Driver not found: {license_number}")

        total_points, latest_expiration = base.DriverPoint.active_totals(db, driver.id, as_of.date())
        return schema.DriverPointTotalSchema(
            driver_id=driver.id,
            license_number=driver.license_number,
            driver_name=driver.full_name,
            total_points=total_points,
            latest_expiration=latest_expiration,
        )
