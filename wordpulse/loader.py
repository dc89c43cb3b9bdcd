from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

from .heartbeat import HeartbeatConfig
from .reporter import ReportConfig
from .types import CountMode

_WORDS_KEYS = {"count_mode"}
_HEARTBEAT_KEYS = {"count", "interval_seconds"}


class ConfigValidationError(ValueError):
    pass


def load_text(path: str, encoding: str = "utf-8") -> str:
    return Path(path).read_text(encoding=encoding)


def load_config(
    path: str | None = None,
    overrides: dict[str, dict[str, Any]] | None = None,
) -> tuple[ReportConfig, HeartbeatConfig]:
    """Read an optional JSON config file, overlay per-section overrides, validate.

    Override values that are None are ignored, so unset CLI flags keep the
    file (or default) value.
    """
    data: Any = {}
    if path:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    if overrides and isinstance(data, dict):
        data = _apply_overrides(data, overrides)
    return parse_config(data)


def _apply_overrides(data: dict[str, Any], overrides: dict[str, dict[str, Any]]) -> dict[str, Any]:
    merged = dict(data)
    for section, values in overrides.items():
        given = {k: v for k, v in values.items() if v is not None}
        current = merged.get(section)
        # A malformed section is left for parse_config to report.
        if not given or (current is not None and not isinstance(current, dict)):
            continue
        merged[section] = {**(current or {}), **given}
    return merged


def parse_config(data: Any) -> tuple[ReportConfig, HeartbeatConfig]:
    """Build component configs from a dict like
    {"words": {"count_mode": "word"}, "heartbeat": {"count": 3, "interval_seconds": 0.5}}.
    Missing sections and keys keep their defaults.
    """
    if not isinstance(data, dict):
        raise ConfigValidationError("Config JSON must be an object.")
    unknown = set(data) - {"words", "heartbeat"}
    if unknown:
        raise ConfigValidationError(f"Unknown config section(s): {', '.join(sorted(unknown))}.")

    words = _section(data, "words", _WORDS_KEYS)
    heartbeat = _section(data, "heartbeat", _HEARTBEAT_KEYS)

    report_cfg = ReportConfig(count_mode=parse_count_mode(words.get("count_mode"), section="words"))
    defaults = HeartbeatConfig()
    heartbeat_cfg = HeartbeatConfig(
        count=_parse_int_field("heartbeat", "count", heartbeat.get("count"), default=defaults.count, minimum=1),
        interval_seconds=_parse_float_field(
            "heartbeat",
            "interval_seconds",
            heartbeat.get("interval_seconds"),
            default=defaults.interval_seconds,
            minimum=0.0,
        ),
    )
    return report_cfg, heartbeat_cfg


def parse_count_mode(raw: Any, section: str = "words") -> CountMode:
    if raw is None:
        return CountMode.SUBSTRING
    if isinstance(raw, CountMode):
        return raw
    try:
        return CountMode(str(raw).strip().lower())
    except ValueError as e:
        choices = ", ".join(m.value for m in CountMode)
        raise ConfigValidationError(f"'{section}': 'count_mode' must be one of: {choices}.") from e


def _section(data: dict[str, Any], name: str, allowed: set[str]) -> dict[str, Any]:
    raw = data.get(name)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigValidationError(f"'{name}' must be an object.")
    unknown = set(raw) - allowed
    if unknown:
        raise ConfigValidationError(f"'{name}': unknown key(s): {', '.join(sorted(unknown))}.")
    return raw


def _parse_int_field(
    section: str,
    field_name: str,
    raw: Any,
    *,
    default: int,
    minimum: int,
) -> int:
    if raw is None:
        return default
    if isinstance(raw, bool) or isinstance(raw, float) and not raw.is_integer():
        raise ConfigValidationError(f"'{section}': '{field_name}' must be an integer.")
    try:
        value = int(raw)
    except (TypeError, ValueError, OverflowError) as e:
        raise ConfigValidationError(f"'{section}': '{field_name}' must be an integer.") from e
    if value < minimum:
        raise ConfigValidationError(f"'{section}': '{field_name}' must be >= {minimum}.")
    return value


def _parse_float_field(
    section: str,
    field_name: str,
    raw: Any,
    *,
    default: float,
    minimum: float,
) -> float:
    if raw is None:
        return default
    if isinstance(raw, bool):
        raise ConfigValidationError(f"'{section}': '{field_name}' must be a number.")
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(f"'{section}': '{field_name}' must be a number.") from e
    if not math.isfinite(value):
        raise ConfigValidationError(f"'{section}': '{field_name}' must be a finite number.")
    if value < minimum:
        raise ConfigValidationError(f"'{section}': '{field_name}' must be >= {minimum}.")
    return value
