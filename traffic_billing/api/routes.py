from fastapi import APIRouter
from traffic_billing.api import citation_api, warrant_api, report_api
from traffic_billing.health import health_check_routes


api_router = APIRouter()


api_router.include_router(citation_api.citation_router, tags=["Citations"])
api_router.include_router(warrant_api.warrant_router, tags=["Warrants"])
api_router.include_router(report_api.report_router, tags=["Reports"])
api_router.include_router(health_check_routes, tags=['Container health'])
