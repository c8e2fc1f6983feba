"""
DepreciationConfig schema.

Run-level settings for the period planner.  Field defaults match the
packaged ``defaults.yaml``; the loader parses YAML into this type.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DepreciationConfig:
    """Settings that bound which periods a depreciation run may target."""

    min_period_year: int = 2000
    max_period_year: int = 2100
    lock_date: date | None = None  # supplied by the period-close process
    currency_minor_unit: str = "tiyin"

    def accepts_year(self, year: int) -> bool:
        return self.min_period_year <= year <= self.max_period_year
