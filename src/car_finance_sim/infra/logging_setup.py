"""Structured JSON logging for the package logger."""

from __future__ import annotations

import logging
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

PACKAGE_LOGGER = "car_finance_sim"
SERVICE_NAME = "car-finance-sim"
LOG_FORMAT = "%(asctime)s %(name)s %(message)s"


class ServiceJsonFormatter(JsonFormatter):
    """JSON lines with level and service name; `extra=` fields become keys."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def configure_logging(level: str) -> logging.Logger:
    """Attach a single JSON stdout handler to the package logger.

    Safe to call more than once; an existing handler is replaced, not duplicated.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    formatter = ServiceJsonFormatter(LOG_FORMAT, rename_fields={"asctime": "timestamp"})
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
