"""Configuration loading and validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mapsort.constants import DEFAULT_CONFIG_FILENAME, LOGGER_NAME
from mapsort.errors import ConfigError
from mapsort.fs import read_yaml
from mapsort.logging import build_logger
from mapsort.schema import validate_sorter_config


@dataclass(frozen=True)
class SorterConfig:
    default_order: str = "ascending"
    log_level: str = "INFO"
    json_logs: bool = True
    log_file: Path | None = None


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> Any:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay config must be a mapping: {overlay_path}")
    return _deep_merge(base, overlay)


def load_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> SorterConfig:
    path = config_dir / DEFAULT_CONFIG_FILENAME
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / DEFAULT_CONFIG_FILENAME

    cfg = validate_sorter_config(
        _load_yaml_with_overlay(path, overlay_path),
        allow_unknown=allow_unknown,
    )
    log_file = cfg["logging"].get("file")
    return SorterConfig(
        default_order=cfg["sorting"]["default_order"],
        log_level=str(cfg["logging"]["level"]).upper(),
        json_logs=cfg["logging"]["json"],
        log_file=_resolve_log_file(config_dir, log_file),
    )


def _resolve_log_file(config_dir: Path, log_file: str | None) -> Path | None:
    if not log_file:
        return None
    path = Path(log_file)
    # Relative log paths are relative to the base config directory.
    return path if path.is_absolute() else config_dir / path


def configure_logging(config: SorterConfig) -> logging.Logger:
    return build_logger(
        LOGGER_NAME,
        level=config.log_level,
        json_lines=config.json_logs,
        log_path=config.log_file,
    )
