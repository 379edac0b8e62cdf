import json
import logging

from mapsort.constants import JSON_LOG_FIELDS
from mapsort.logging import JsonLineFormatter, build_logger, log_event


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("mapsort.sorter", logging.INFO, __file__, 1, "sort end", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_line_formatter_emits_stable_field_set():
    line = JsonLineFormatter().format(_record(event="SORT_END", entries_in=4, buckets=3))
    payload = json.loads(line)

    assert set(payload) == set(JSON_LOG_FIELDS)
    assert payload["event"] == "SORT_END"
    assert payload["entries_in"] == 4
    assert payload["buckets"] == 3
    assert payload["order"] is None
    assert payload["logger"] == "mapsort.sorter"
    assert payload["message"] == "sort end"


def test_build_logger_replaces_handlers():
    logger = build_logger("mapsort.test_build", level="warning")
    logger = build_logger("mapsort.test_build", level="debug", json_lines=False)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert not isinstance(logger.handlers[0].formatter, JsonLineFormatter)
    logger.handlers.clear()


def test_log_event_passes_structured_fields(caplog):
    logger = logging.getLogger("mapsort.test_log_event")

    with caplog.at_level(logging.DEBUG, logger="mapsort.test_log_event"):
        log_event(logger, "sort start", level=logging.DEBUG, event="SORT_START", mode="value")

    record = caplog.records[0]
    assert record.levelno == logging.DEBUG
    assert record.event == "SORT_START"
    assert record.mode == "value"
