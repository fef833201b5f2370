import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from traffic_billing import schema
from traffic_billing.config import settings
from traffic_billing.exception_handler.errors import (
    CitationNotFound,
    ConstraintViolation,
    DriverNotFound,
    DuplicateCitationNumber,
    VehicleNotFound,
    ViolationTypeNotFound,
)
from traffic_billing.models import base
from traffic_billing.service.officer_service import OfficerService
from traffic_billing.utils import enum
from traffic_billing.utils.common import DateTimeUtils, generate_citation_number, to_money

logger = logging.getLogger(__name__)


class CitationService:

    @staticmethod
    def issue_citation(db: Session, request: schema.IssueCitationSchema,
                       issued_at: Optional[datetime] = None) -> base.Citation:
        """
        Create a citation in ``issued`` state and, for point bearing violations,
        its single point grant. Both rows are committed together or not at all.
        """
        issued_at = DateTimeUtils.to_naive_utc(issued_at or request.issued_at)
        violation_date = DateTimeUtils.to_naive_utc(request.violation_date)

        driver = base.Driver.get_by_license_number(db, request.license_number)
        if driver is None:
            raise DriverNotFound(f"Driver not found: {request.license_number}")

        vehicle = None
        if request.license_plate is not None:
            vehicle = base.Vehicle.get_by_plate(db, request.license_plate)
            if vehicle is None:
                raise VehicleNotFound(f"Vehicle not found: {request.license_plate}")

        violation_type = base.ViolationType.get_by_code(db, request.violation_code)
        if violation_type is None:
            raise ViolationTypeNotFound(f"Violation type not found: {request.violation_code}")

        OfficerService.ensure_officer_active(db, request.officer_id)

        if violation_date > issued_at:
            raise ConstraintViolation("Violation date cannot be later than the issue date")

        driver_id = driver.id
        vehicle_id = vehicle.id if vehicle is not None else None

        for attempt in range(1, settings.CITATION_NUMBER_ATTEMPTS + 1):
            citation_number = generate_citation_number(issued_at)
            if base.Citation.get_by_number(db, citation_number) is not None:
                logger.warning(f"Citation: {citation_number} - number already taken, attempt {attempt}")
                continue

            try:
                citation = CitationService.create_citation_with_points(
                    db,
                    citation_number=citation_number,
                    driver_id=driver_id,
                    vehicle_id=vehicle_id,
                    violation_type=violation_type,
                    request=request,
                    violation_date=violation_date,
                    issued_at=issued_at,
                )
                db.commit()
            except IntegrityError as e:
                db.rollback()
                if base.Citation.get_by_number(db, citation_number) is None:
                    raise ConstraintViolation(f"Citation rejected by the store: {e.orig}") from e
                logger.warning(f"Citation: {citation_number} - number claimed concurrently, attempt {attempt}")
                continue
            except Exception:
                db.rollback()
                raise

            logger.info(f"Citation: {citation.citation_number} / Driver: {request.license_number} - "
                        f"Citation issued for {citation.violation_code}, fine {citation.actual_fine_amount}")
            return citation

        logger.error(f"Driver: {request.license_number} - no free citation number after "
                     f"{settings.CITATION_NUMBER_ATTEMPTS} attempts")
        raise DuplicateCitationNumber("Could not allocate a unique citation number")

    @staticmethod
    def create_citation_with_points(db: Session, citation_number: str, driver_id: int, vehicle_id: Optional[int],
                                    violation_type, request: schema.IssueCitationSchema,
                                    violation_date: datetime, issued_at: datetime) -> base.Citation:
        citation = base.Citation.create(
            db,
            citation_number=citation_number,
            driver_id=driver_id,
            vehicle_id=vehicle_id,
            officer_id=request.officer_id,
            violation_code=violation_type.violation_code,
            violation_date=violation_date,
            violation_location=request.location,
            actual_fine_amount=to_money(violation_type.base_fine_amount),
            issued_date=issued_at,
            status=enum.CitationStatus.ISSUED.value,
            notes=request.notes,
        )

        if violation_type.points_assigned > 0:
            effective_date = issued_at.date()
            base.DriverPoint.create(
                db,
                driver_id=driver_id,
                citation_id=citation.id,
                points_added=violation_type.points_assigned,
                effective_date=effective_date,
                expiration_date=DateTimeUtils.add_years(effective_date, settings.POINTS_VALIDITY_YEARS),
            )
            logger.info(f"Citation: {citation_number} - {violation_type.points_assigned} points granted")

        return citation

    @staticmethod
    def get_citation_detail(db: Session, citation_number: str,
                            as_of: Optional[datetime] = None) -> schema.CitationDetailSchema:
        as_of = DateTimeUtils.to_naive_utc(as_of)
        citation = base.Citation.get_by_number(db, citation_number)
        if citation is None:
            raise CitationNotFound(f"Citation not found: {citation_number}")

        payments = base.Payment.get_by_citation(db, citation.id)
        total_paid = to_money(sum((payment.amount for payment in payments), 0))

        return schema.CitationDetailSchema(
            citation=schema.CitationSchema.model_validate(citation),
            total_paid=total_paid,
            outstanding_amount=to_money(citation.actual_fine_amount) - total_paid,
            days_since_issued=DateTimeUtils.days_between(citation.issued_date, as_of),
            payments=[schema.PaymentSchema.model_validate(payment) for payment in payments],
            warrants=[schema.WarrantSchema.model_validate(warrant)
                      for warrant in base.Warrant.get_by_citation(db, citation.id)],
            point_grants=[schema.PointGrantSchema.model_validate(grant)
                          for grant in base.DriverPoint.get_by_citation(db, citation.id)],
        )
