"""Library constants."""

LOGGER_NAME = "mapsort"
SORT_ORDERS = ("ascending", "descending")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_CONFIG_FILENAME = "mapsort.yml"
JSON_LOG_FIELDS = (
    "timestamp",
    "logger",
    "event",
    "status",
    "order",
    "mode",
    "entries_in",
    "entries_out",
    "buckets",
    "duration_ms",
    "error_code",
    "message",
)
