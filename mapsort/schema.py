"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from mapsort.constants import LOG_LEVELS, SORT_ORDERS
from mapsort.errors import ConfigError


def _assert_mapping(obj: object, ctx: str) -> dict:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping, got {type(obj).__name__}")
    return obj


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_choice(value: object, choices: tuple[str, ...], ctx: str) -> None:
    if value not in choices:
        raise ConfigError(f"{ctx} must be one of {', '.join(choices)}, got {value!r}")


def validate_sorter_config(cfg: object, *, allow_unknown: bool = False) -> dict:
    cfg = _assert_mapping(cfg, "mapsort config")
    top_required = {"sorting", "logging"}
    _assert_required_keys(cfg, top_required, "mapsort config")
    _assert_no_unknown_keys(cfg, top_required, "mapsort config", allow_unknown)

    sorting = _assert_mapping(cfg["sorting"], "sorting")
    _assert_required_keys(sorting, {"default_order"}, "sorting")
    _assert_no_unknown_keys(sorting, {"default_order"}, "sorting", allow_unknown)
    _assert_choice(sorting["default_order"], SORT_ORDERS, "sorting.default_order")

    logging_cfg = _assert_mapping(cfg["logging"], "logging")
    _assert_required_keys(logging_cfg, {"level", "json"}, "logging")
    _assert_no_unknown_keys(logging_cfg, {"level", "json", "file"}, "logging", allow_unknown)
    _assert_choice(str(logging_cfg["level"]).upper(), LOG_LEVELS, "logging.level")
    if not isinstance(logging_cfg["json"], bool):
        raise ConfigError("logging.json must be a boolean")

    return cfg
