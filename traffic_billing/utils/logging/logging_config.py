import logging
import sys

import coloredlogs
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.instrumentation.system_metrics import SystemMetricsInstrumentor
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import SERVICE_NAME, Resource

from traffic_billing.config import settings
from traffic_billing.models.session import engine

LOG_FORMAT = "%(asctime)s : %(levelname).4s - %(message)s - [%(name)s]"

logger = logging.getLogger(__name__)


def install_console_logging():
    coloredlogs.install(level=settings.LOG_LEVEL.lower(), isatty=True, fmt=LOG_FORMAT,
                        level_styles={
                            'debug': {'color': 'white', 'bold': True},
                            'info': {'color': 'green', 'bold': True},
                            'error': {'color': 'red', 'bold': True},
                            'warning': {'color': 'yellow', 'bold': True},
                            'critical': {'color': 'red', 'bold': True}})


def setup_logging():
    """Ship logs to the OTLP collector and instrument the database engine."""
    try:
        SystemMetricsInstrumentor().instrument()
        SQLAlchemyInstrumentor().instrument(engine=engine)
        resource = Resource(attributes={SERVICE_NAME: settings.SERVICE_NAME})

        log_exporter = OTLPLogExporter(
            endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT,
            insecure=settings.OTEL_COLLECTOR_ALLOW_INSECURE.lower() == "true",
        )
        log_provider = LoggerProvider(resource=resource)
        set_logger_provider(log_provider)
        log_provider.add_log_record_processor(BatchLogRecordProcessor(log_exporter))

        log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
        handler = LoggingHandler(level=log_level, logger_provider=log_provider)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(levelname)s - %(message)s - %(name)s - %(funcName)s"
        ))
        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        root_logger.addHandler(handler)
        root_logger.addHandler(console_handler)
    except Exception as e:
        logger.error(f"OpenTelemetry logging setup failed: {e}")
