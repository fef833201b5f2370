from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from traffic_billing import schema
from traffic_billing.dependencies.deps import get_db
from traffic_billing.service.warrant_service import WarrantService
from traffic_billing.utils.common import DateTimeUtils, api_response

warrant_router = APIRouter()


@warrant_router.post("/v1/warrants/sweep")
def sweep_overdue_citations(as_of: str = None, limit: int = Query(None, ge=1), db: Session = Depends(get_db)):
    result = WarrantService.sweep_overdue_citations(db, DateTimeUtils.parse_reference_time(as_of), limit)
    return api_response(message="Warrant sweep completed",
                        status="success",
                        data=result.model_dump(mode="json"))


@warrant_router.post("/v1/warrants/{warrant_id}/serve")
def serve_warrant(warrant_id: int, db: Session = Depends(get_db)):
    warrant = WarrantService.serve_warrant(db, warrant_id)
    return api_response(message="Warrant served",
                        status="success",
                        data=schema.WarrantSchema.model_validate(warrant).model_dump(mode="json"))
