"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from liquidity_gateway.domain.models import FinancialSnapshot


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "liquidity-gateway", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "liquidity-gateway") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_snapshot_built(request_id: str, snapshot: FinancialSnapshot, balance_source: str) -> None:
    """Log snapshot outcome; amounts only, never transaction descriptions"""
    logging.info(
        "Snapshot built",
        extra={
            "request_id": request_id,
            "step": "snapshot_built",
            "balance_source": balance_source,
            "transaction_count": snapshot.transaction_count,
            "risk_flag": snapshot.risk_flag,
            "avg_daily_spend": float(snapshot.avg_daily_spend),
        },
    )


def log_question_answered(
    request_id: str,
    intent: str,
    classifier_calls: int,
    assumption_made: bool,
    duration_ms: float,
) -> None:
    """Log structured chat outcome for analysis"""
    logging.info(
        "Question answered",
        extra={
            "request_id": request_id,
            "step": "chat_complete",
            "intent": intent,
            "classifier_calls": classifier_calls,
            "assumption_made": assumption_made,
            "duration_ms": duration_ms,
        },
    )
