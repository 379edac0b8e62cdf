"""JSON logging with stable schema."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from mapsort.constants import JSON_LOG_FIELDS, LOGGER_NAME
from mapsort.fs import ensure_dir
from mapsort.time_utils import utc_timestamp_iso

# Output stays off until build_logger attaches real handlers.
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": utc_timestamp_iso(),
            "logger": record.name,
            "event": getattr(record, "event", None),
            "status": getattr(record, "status", None),
            "order": getattr(record, "order", None),
            "mode": getattr(record, "mode", None),
            "entries_in": getattr(record, "entries_in", None),
            "entries_out": getattr(record, "entries_out", None),
            "buckets": getattr(record, "buckets", None),
            "duration_ms": getattr(record, "duration_ms", None),
            "error_code": getattr(record, "error_code", None),
            "message": record.getMessage(),
        }
        for field in JSON_LOG_FIELDS:
            payload.setdefault(field, None)
        return json.dumps(payload, ensure_ascii=False, default=repr)


def build_logger(
    name: str = LOGGER_NAME,
    level: str = "INFO",
    *,
    json_lines: bool = True,
    log_path: Path | None = None,
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())
    logger.handlers.clear()

    formatter = JsonLineFormatter() if json_lines else logging.Formatter(logging.BASIC_FORMAT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if log_path is not None:
        ensure_dir(log_path.parent)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def log_event(logger: logging.Logger, message: str, *, level: int = logging.INFO, **event_fields: Any) -> None:
    logger.log(level, message, extra=event_fields)
