"""
Configuration Loader (``asset_config.loader``).

Responsibility
--------------
Loads a YAML file and parses its ``depreciation:`` mapping into a
``DepreciationConfig``.  Runtime callers go through
``asset_config.get_active_config()``.

Invariants enforced
-------------------
* Unknown keys are rejected, not ignored.
* Years are integers and ``min_period_year <= max_period_year``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``depreciation`` section, unknown key or bad value
  -> ``ConfigError``.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import fields
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from asset_config.schema import DepreciationConfig
from asset_kernel.exceptions import ConfigError

_KNOWN_KEYS = frozenset(f.name for f in fields(DepreciationConfig))


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_date(value: Any) -> date:
    """Parse a date from YAML (string or date object)."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def _parse_year(data: dict[str, Any], key: str, default: int, source: str | None) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(source, f"{key} must be an integer year, got {value!r}")
    return value


def parse_config(data: dict[str, Any], source: str | None = None) -> DepreciationConfig:
    """
    Parse a ``DepreciationConfig`` from the top-level YAML dict.

    Preconditions:
        - ``data`` has a ``depreciation`` mapping (may be empty).
    Raises:
        ConfigError: on a missing section, unknown key or invalid value.
    """
    section = data.get("depreciation")
    if not isinstance(section, dict):
        raise ConfigError(source, "missing 'depreciation' section")

    unknown = sorted(set(section) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(source, f"unknown keys: {', '.join(unknown)}")

    defaults = DepreciationConfig()
    min_year = _parse_year(section, "min_period_year", defaults.min_period_year, source)
    max_year = _parse_year(section, "max_period_year", defaults.max_period_year, source)
    if min_year > max_year:
        raise ConfigError(
            source, f"min_period_year {min_year} is after max_period_year {max_year}"
        )

    lock_date = None
    if section.get("lock_date") is not None:
        try:
            lock_date = parse_date(section["lock_date"])
        except ValueError as exc:
            raise ConfigError(source, f"lock_date: {exc}") from exc

    minor_unit = section.get("currency_minor_unit", defaults.currency_minor_unit)
    if not isinstance(minor_unit, str) or not minor_unit:
        raise ConfigError(source, "currency_minor_unit must be a non-empty string")

    return DepreciationConfig(
        min_period_year=min_year,
        max_period_year=max_year,
        lock_date=lock_date,
        currency_minor_unit=minor_unit,
    )


def load_config(path: Path) -> DepreciationConfig:
    """Load and parse a configuration file."""
    return parse_config(load_yaml_file(path), source=str(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
