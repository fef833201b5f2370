import logging
from fastapi import APIRouter, HTTPException
from datetime import datetime, timedelta
from traffic_billing.config import redis_client
from traffic_billing.config import settings
from traffic_billing.utils.slack_utils import send_slack_notification


logger = logging.getLogger(__name__)


HEARTBEAT_KEY = "warrant_sweep_heartbeat"
ALERT_KEY = "warrant_sweep_health_alert"
# the sweep runs daily; allow an hour of slack
HEARTBEAT_MAX_AGE = timedelta(hours=25)


health_check_routes = APIRouter()


@health_check_routes.get("/v1/health")
def health_check():
    try:
        redis_client.ping()
        heartbeat = redis_client.get(HEARTBEAT_KEY)
    except Exception as e:
        response = {
            "status": "error",
            "message": str(e),
            "redis": "unreachable",
            "worker_status": "unhealthy",
        }
        raise HTTPException(status_code=500, detail=response)

    if heartbeat:
        heartbeat_time = datetime.fromisoformat(heartbeat)
        is_worker_healthy = (datetime.utcnow() - heartbeat_time) < HEARTBEAT_MAX_AGE
    else:
        is_worker_healthy = False

    response = {
        "redis": "reachable",
        "worker_status": "healthy" if is_worker_healthy else "unhealthy",
        "last_heartbeat": heartbeat if heartbeat else None,
    }

    if is_worker_healthy:
        if redis_client.get(ALERT_KEY):
            send_slack_notification("Warrant Sweep Worker",
                                    "Health Status: healthy \nWarrant sweep has recovered and is running normally.")
        redis_client.delete(ALERT_KEY)
        return response

    alert_count = int(redis_client.get(ALERT_KEY) or 0)
    if alert_count < settings.SLACK_ALERT_LIMIT:
        send_slack_notification("Warrant Sweep Worker",
                                "Health Status: unhealthy \nNo warrant sweep heartbeat within the last day.")
        redis_client.incr(ALERT_KEY)
        redis_client.expire(ALERT_KEY, settings.SLACK_ALERT_EXPIRY)
    else:
        logger.warning(f"Warrant sweep health alert already sent {alert_count} times. Suppressing.")

    raise HTTPException(status_code=500, detail=response)
