"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from wealth_core.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_settlement(
    request_id: str,
    participant_count: int,
    expense_count: int,
    transfer_count: int,
    duration_ms: float,
    trip_id: str | None = None,
) -> None:
    """Log structured settlement outcome"""
    logging.info(
        "Settlement computed",
        extra={
            "request_id": request_id,
            "trip_id": trip_id,
            "step": "settlement_complete",
            "participant_count": participant_count,
            "expense_count": expense_count,
            "transfer_count": transfer_count,
            "duration_ms": duration_ms,
        },
    )


def log_projection(request_id: str, deposit_count: int, duration_ms: float) -> None:
    """Log structured deposit projection outcome"""
    logging.info(
        "Deposit projection computed",
        extra={
            "request_id": request_id,
            "step": "projection_complete",
            "deposit_count": deposit_count,
            "duration_ms": duration_ms,
        },
    )
