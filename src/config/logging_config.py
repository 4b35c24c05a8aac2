"""
Logging configuration.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Any, Optional

import structlog
from structlog.stdlib import LoggerFactory

from .settings import get_settings


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure logging for the Pivot API.
    log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_file: Path to log file
    log_format: Log format ('json' or 'text')

    This function sets up:
    Structured logging with JSON output
    **Log rotation and retention
    **Console and file handlers
    """
    settings = get_settings()

    log_level = (log_level or settings.log_level).upper()
    log_file = log_file or settings.log_file
    log_format = log_format or settings.log_format

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            (
                structlog.processors.JSONRenderer()
                if log_format == "json"
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler.setLevel(getattr(logging, log_level))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = create_rotating_file_handler(
            log_file, settings.log_rotation, settings.log_retention
        )
        root_logger.addHandler(file_handler)

    configure_third_party_loggers(log_level)

    logger = get_logger(__name__)
    logger.info(
        "Logging configured",
        log_level=log_level,
        log_file=log_file,
        log_format=log_format,
        environment=settings.environment,
    )


def create_rotating_file_handler(
    log_file: str, rotation: str, retention: int
) -> logging.handlers.RotatingFileHandler:
    """
    Create a rotating file handler for log files.
    log_file: Path to the log file
    rotation: Rotation policy ('daily', 'weekly', 'monthly')
    retention: Number of backup files to keep
    """
    if rotation == "daily":
        max_bytes = 10 * 1024 * 1024  # 10MB
    elif rotation == "weekly":
        max_bytes = 50 * 1024 * 1024  # 50MB
    elif rotation == "monthly":
        max_bytes = 100 * 1024 * 1024  # 100MB
    else:
        max_bytes = 10 * 1024 * 1024
        retention = 30

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=retention,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(logging.DEBUG)

    return handler


def configure_third_party_loggers(log_level: str) -> None:
    """Quiet down noisy libraries."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    if get_settings().is_development:
        logging.getLogger("service").setLevel(logging.DEBUG)
        logging.getLogger("api").setLevel(logging.DEBUG)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.
    name: Logger name (usually __name__)
    """
    return structlog.get_logger(name)


def log_pipeline_step(
    logger: structlog.stdlib.BoundLogger,
    step_name: str,
    output_data: Optional[Dict[str, Any]] = None,
    duration: Optional[float] = None,
) -> None:
    """
    Log a pipeline stage execution.
    logger: Structured logger instance
    step_name: Name of the pipeline stage
    output_data: Summary of what the stage produced
    duration: Execution duration in seconds
    """
    log_data: Dict[str, Any] = {"step_name": step_name}

    if output_data:
        log_data["output"] = output_data

    if duration is not None:
        log_data["duration_seconds"] = round(duration, 3)

    logger.info("Pipeline step executed", **log_data)


def get_service_logger(service_name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger for a service module.
    service_name: Name of the service (e.g., 'TopicExtractor')
    """
    return structlog.get_logger(f"service.{service_name}")


def get_api_logger(api_name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger for an api module.
    api_name: Name of the api (e.g., 'api')
    """
    return structlog.get_logger(f"api.{api_name}")
