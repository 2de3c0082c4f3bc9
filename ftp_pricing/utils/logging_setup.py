"""Structured JSON logging for pricing decisions."""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter


SERVICE_NAME = "ftp-pricing"

decision_logger = logging.getLogger("ftp_pricing.decisions")


class PricingJsonFormatter(JsonFormatter):
    """JSON formatter adding timestamp, level and service metadata."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def setup_logging(level: str = "INFO", stream=None) -> logging.Logger:
    """Attach a JSON stdout handler to the package logger."""
    logger = logging.getLogger("ftp_pricing")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(PricingJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)
    return logger


def log_pricing_decision(
    deal_id: Optional[str],
    product_type: str,
    total_ftp: float,
    final_client_rate: float,
    raroc: float,
    approval_level: str,
) -> None:
    """Log the pricing outcome of a deal for later analysis."""
    decision_logger.info(
        "Pricing completed",
        extra={
            "event": "pricing_decision",
            "deal_id": deal_id,
            "product_type": product_type,
            "total_ftp": round(total_ftp, 6),
            "final_client_rate": round(final_client_rate, 6),
            "raroc": round(raroc, 6),
            "approval_level": approval_level,
        },
    )
