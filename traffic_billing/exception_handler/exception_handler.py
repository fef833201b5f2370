import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from traffic_billing.exception_handler.errors import TrafficBillingError

logger = logging.getLogger(__name__)


def billing_exception_handler(request: Request, exc: TrafficBillingError):
    logger.warning(f"{request.method} {request.url.path} - {exc.error_code.value}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "status": "error", "error_code": exc.error_code.value},
    )


def custom_exception_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} - unhandled error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": "Internal Server Error"},
    )
