import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from traffic_billing import schema
from traffic_billing.dependencies.deps import get_db
from traffic_billing.service.citation_service import CitationService
from traffic_billing.service.payment_service import PaymentService
from traffic_billing.service.warrant_service import WarrantService
from traffic_billing.utils.common import DateTimeUtils, api_response

logger = logging.getLogger(__name__)

citation_router = APIRouter()


@citation_router.post("/v1/citations")
def issue_citation(request_body: schema.IssueCitationSchema, db: Session = Depends(get_db)):
    citation = CitationService.issue_citation(db, request_body)
    return api_response(message="Citation issued",
                        status="success",
                        data=schema.CitationSchema.model_validate(citation).model_dump(mode="json"),
                        status_code=status.HTTP_201_CREATED)


@citation_router.get("/v1/citations/{citation_number}")
def get_citation(citation_number: str, as_of: str = None, db: Session = Depends(get_db)):
    detail = CitationService.get_citation_detail(db, citation_number, DateTimeUtils.parse_reference_time(as_of))
    return api_response(message="Citation found",
                        status="success",
                        data=detail.model_dump(mode="json"))


@citation_router.post("/v1/citations/{citation_number}/payments")
def process_payment(citation_number: str, request_body: schema.ProcessPaymentSchema,
                    db: Session = Depends(get_db)):
    result = PaymentService.process_payment(db, citation_number, request_body)
    return api_response(message="Payment recorded",
                        status="success",
                        data=result.model_dump(mode="json"),
                        status_code=status.HTTP_201_CREATED)


@citation_router.post("/v1/citations/{citation_number}/escalate")
def escalate_citation(citation_number: str, as_of: str = None, db: Session = Depends(get_db)):
    warrant = WarrantService.escalate_citation(db, citation_number, DateTimeUtils.parse_reference_time(as_of))
    if warrant is None:
        return api_response(message="Citation not eligible for a warrant", status="success")
    return api_response(message="Warrant issued",
                        status="success",
                        data=schema.WarrantSchema.model_validate(warrant).model_dump(mode="json"),
                        status_code=status.HTTP_201_CREATED)
