"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "visiofex-reports"


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


def log_report(
    request_id: str,
    start: str,
    end: str,
    source: str,
    day_count: int,
    may_have_more: bool,
    duration_ms: float,
    aggregate_error: Optional[str] = None,
) -> None:
    """Log structured report outcome for analysis"""
    logging.info(
        "Report completed",
        extra={
            "request_id": request_id,
            "step": "report_complete",
            "start": start,
            "end": end,
            "source": source,
            "day_count": day_count,
            "may_have_more": may_have_more,
            "aggregate_error": aggregate_error,
            "duration_ms": duration_ms,
        },
    )
