"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional
from pythonjsonlogger import jsonlogger

from radicados_gateway.config import settings


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

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_holiday_source_degraded(
    source: str,
    error: str,
    year: Optional[int] = None,
    day: Optional[date] = None,
) -> None:
    """Holiday data missing: deadlines are still computed, treating the dates as business days"""
    logging.warning(
        "Holiday source unavailable, treating dates as business days",
        extra={
            "step": "holiday_source_degraded",
            "holiday_source": source,
            "year": year,
            "day": day.isoformat() if day else None,
            "error": error,
        },
    )


def log_alert_refresh(
    total_pending: int,
    in_alert: int,
    flags_set: int,
    flags_cleared: int,
    flags_persisted: bool,
    duration_ms: float,
    request_id: Optional[str] = None,
) -> None:
    """Log structured outcome of an alert refresh pass"""
    logging.info(
        "Alert refresh completed",
        extra={
            "request_id": request_id,
            "step": "alert_refresh_complete",
            "total_pending": total_pending,
            "in_alert": in_alert,
            "flags_set": flags_set,
            "flags_cleared": flags_cleared,
            "flags_persisted": flags_persisted,
            "duration_ms": duration_ms,
        },
    )


def log_flag_sync_failure(ids: List[str], value: bool, error: str, request_id: Optional[str] = None) -> None:
    logging.error(
        "Alert flag sync failed",
        extra={
            "request_id": request_id,
            "step": "alert_flag_sync",
            "document_count": len(ids),
            "target_value": value,
            "error": error,
        },
    )
