from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from traffic_billing.dependencies.deps import get_db
from traffic_billing.service.report_service import PointsService, ReportService
from traffic_billing.utils.common import DateTimeUtils, api_response

report_router = APIRouter()


@report_router.get("/v1/reports/overdue")
def overdue_report(min_days_overdue: int = Query(0, ge=0),
                   include_warrants: bool = True,
                   as_of: str = None,
                   db: Session = Depends(get_db)):
    rows = ReportService.overdue_report(db, min_days_overdue, include_warrants,
                                        DateTimeUtils.parse_reference_time(as_of))
    return api_response(message=f"{len(rows)} overdue citations",
                        status="success",
                        data=[row.model_dump(mode="json") for row in rows])


@report_router.get("/v1/drivers/{license_number}/points")
def driver_points(license_number: str, as_of: str = None, db: Session = Depends(get_db)):
    totals = PointsService.active_points(db, license_number, DateTimeUtils.parse_reference_time(as_of))
    return api_response(message="Active licence points",
                        status="success",
                        data=totals.model_dump(mode="json"))
