import logging

from traffic_billing.exception_handler.errors import TrafficBillingError
from traffic_billing.models.session import SessionLocal
from typing import Generator

logger = logging.getLogger(__name__)


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    except TrafficBillingError:
        db.rollback()
        raise
    except Exception as e:
        logger.critical(f"Exception {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()
