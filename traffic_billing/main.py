import logging
import time
from datetime import datetime
from dotenv import load_dotenv
from huey import crontab
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from traffic_billing.config import huey, redis_client, settings
from traffic_billing.exception_handler import TrafficBillingError, billing_exception_handler, custom_exception_handler
from traffic_billing.api.routes import api_router
from traffic_billing.health import HEARTBEAT_KEY
from traffic_billing.models.context_session import get_db_session
from traffic_billing.service.warrant_service import WarrantService
from traffic_billing.utils.common import calculate_time_differece
from traffic_billing.utils.logging.logging_config import install_console_logging, setup_logging
from traffic_billing.utils.logging.otel_config import setup_telemetry
from traffic_billing.utils.slack_utils import send_slack_notification, get_error_fingerprint


load_dotenv()

app = FastAPI(title="Traffic Billing")
app.include_router(api_router, prefix="/api")
app.add_exception_handler(TrafficBillingError, billing_exception_handler)
app.add_exception_handler(Exception, custom_exception_handler)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


if settings.ALLOW_OTEL_COLLECTOR.lower() == "true":
    setup_logging()
    setup_telemetry(app)


logger = logging.getLogger(__name__)
install_console_logging()


@app.get("/")
def read_root():
    return {
        "message": "Welcome",
        "description": "Traffic citation billing API.",
        "documentation": "For API documentation, visit /docs.",
    }


def notify_sweep_failure(alert_key: str, message: str):
    """Slack alert, rate limited per ``alert_key`` through a redis counter."""
    alert_count = redis_client.incr(alert_key)
    if alert_count == 1:
        redis_client.expire(alert_key, settings.SLACK_ALERT_EXPIRY)

    logger.critical(f"[Redis] Alert count for '{alert_key}': {alert_count}")

    if alert_count <= settings.SLACK_ALERT_LIMIT:
        send_slack_notification("Warrant Sweep Failure", message)
    else:
        logger.critical(f"Alert for '{alert_key}' already sent {alert_count} times. Suppressing.")


@huey.periodic_task(crontab(hour=settings.WARRANT_SWEEP_CRON_HOUR, minute=settings.WARRANT_SWEEP_CRON_MINUTE))
def escalate_overdue_citations():
    start_time = time.time()
    logger.info("Warrant sweep started.")
    result = None

    db_session = get_db_session()
    try:
        redis_client.set(HEARTBEAT_KEY, datetime.utcnow().isoformat())
        result = WarrantService.sweep_overdue_citations(db_session)
        if result.failed:
            failed_ids = ", ".join(str(failure.citation_id) for failure in result.failed)
            notify_sweep_failure(f"warrant_sweep_alert:partial:{datetime.utcnow():%Y%m%d}",
                                 f"{len(result.failed)} citations could not be escalated: {failed_ids}")
    except Exception as e:
        logger.error(f"Error running warrant sweep: {e}")
        notify_sweep_failure(get_error_fingerprint(e), f"Sweep failed with error:\n```{str(e)}```")
    finally:
        db_session.close()

    total_time = calculate_time_differece(start_time)
    logger.info(f"Warrant sweep completed in {total_time:.2f} seconds.")
    return result
