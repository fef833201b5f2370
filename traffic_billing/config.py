import logging
import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from huey import RedisHuey
import redis
load_dotenv()


class Settings(BaseSettings):
    SQLALCHEMY_DATABASE_URI: str = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///./traffic_billing.db")
    SQLALCHEMY_POOL_SIZE: int = int(os.getenv("SQLALCHEMY_POOL_SIZE", 20))
    SQLALCHEMY_POOL_MAX_OVERFLOW: int = int(os.getenv("SQLALCHEMY_POOL_MAX_OVERFLOW", 20))

    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", 6379))

    WARRANT_GRACE_PERIOD_DAYS: int = int(os.getenv("WARRANT_GRACE_PERIOD_DAYS", 90))
    WARRANT_SWEEP_LIMIT: int = int(os.getenv("WARRANT_SWEEP_LIMIT", 500))
    WARRANT_SWEEP_CRON_HOUR: str = os.getenv("WARRANT_SWEEP_CRON_HOUR", "2")
    WARRANT_SWEEP_CRON_MINUTE: str = os.getenv("WARRANT_SWEEP_CRON_MINUTE", "0")
    ESCALATE_ON_PAYMENT: bool = os.getenv("ESCALATE_ON_PAYMENT", "true").lower() in ("true", "1", "t")

    POINTS_VALIDITY_YEARS: int = int(os.getenv("POINTS_VALIDITY_YEARS", 2))
    CITATION_NUMBER_ATTEMPTS: int = int(os.getenv("CITATION_NUMBER_ATTEMPTS", 5))

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "traffic-billing")
    ALLOW_OTEL_COLLECTOR: str = os.getenv("ALLOW_OTEL_COLLECTOR", "false")
    OTEL_EXPORTER_OTLP_ENDPOINT: str = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "")
    OTEL_COLLECTOR_ALLOW_INSECURE: str = os.getenv(
        "OTEL_COLLECTOR_ALLOW_INSECURE", "false"
    )

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    SLACK_BOT_TOKEN: str = os.getenv("SLACK_BOT_TOKEN", "")
    SLACK_CHANNEL_NAME: str = os.getenv("SLACK_CHANNEL_NAME", "#traffic-billing-alerts")
    SLACK_ALERT_LIMIT: int = int(os.getenv("SLACK_ALERT_LIMIT", 3))
    SLACK_ALERT_EXPIRY: int = int(os.getenv("SLACK_ALERT_EXPIRY", 3600))

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "dev")

    class Config:
        arbitrary_types_allowed = True
        env_file = ".env"
        extra = "ignore"


huey_logger = logging.getLogger("huey")
huey_logger.setLevel(logging.ERROR)
huey_logger.propagate = False


settings = Settings()
huey = RedisHuey("traffic_billing", host=settings.REDIS_HOST, port=settings.REDIS_PORT)
redis_client = redis.StrictRedis(host=settings.REDIS_HOST, port=settings.REDIS_PORT, decode_responses=True)
