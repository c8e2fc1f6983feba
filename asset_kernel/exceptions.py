"""
Typed Exception Hierarchy for the Depreciation Engine.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the engine must tell a data-entry bug apart from a routine
"skip this asset" decision. Only the former is raised; the latter is
returned as a ``DepreciationCheckResult`` or ``ValidationResult``.

Every raised error:
  1. Has a TYPED exception class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA (not just a message string)

Example - WRONG way to handle errors:
    try:
        monthly = calculate_monthly_depreciation(cost, salvage, life)
    except Exception as e:
        if "useful life" in str(e):  # FRAGILE - message might change
            flag_for_review(asset)

Example - RIGHT way:
    try:
        monthly = calculate_monthly_depreciation(cost, salvage, life)
    except InvalidInputError as e:
        log.error("bad_asset", extra={"field": e.field, "code": e.code})

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    AssetKernelError (base)
    |
    +-- InvalidInputError
    |
    +-- PeriodError
    |   +-- InvalidPeriodError
    |   +-- PeriodLockedError
    |
    +-- ConcurrencyError
    |   +-- StaleSnapshotError
    |
    +-- ConfigError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                 | When Raised
----------------|----------------------|------------------------------------------
Input           | INVALID_INPUT        | Non-positive useful life, float or negative
                |                      | monetary value
----------------|----------------------|------------------------------------------
Period          | INVALID_PERIOD       | Month outside 1-12, year outside the
                |                      | configured range
                | PERIOD_LOCKED        | Period starts on or before the lock date
----------------|----------------------|------------------------------------------
Concurrency     | STALE_SNAPSHOT       | Planned entry applied to a snapshot whose
                |                      | accumulated depreciation has moved
----------------|----------------------|------------------------------------------
Config          | CONFIG_ERROR         | Malformed or unknown configuration values

===============================================================================
"""

from __future__ import annotations

from datetime import date
from typing import Any


class AssetKernelError(Exception):
    """
    Base exception for all depreciation engine errors.

    All subclasses must have a `code` class attribute
    for machine-readable error identification.
    """

    code: str = "ASSET_KERNEL_ERROR"


# Input exceptions


class InvalidInputError(AssetKernelError):
    """
    A hard precondition on calculator input was violated.

    Fatal to the caller for this asset; retrying with the same data
    produces the same error.
    """

    code: str = "INVALID_INPUT"

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid input for {field}: {reason} (got {value!r})")


# Period exceptions


class PeriodError(AssetKernelError):
    """Base exception for period-related errors."""

    code: str = "PERIOD_ERROR"


class InvalidPeriodError(PeriodError):
    """Period year/month is malformed or outside the accepted range."""

    code: str = "INVALID_PERIOD"

    def __init__(self, year: Any, month: Any, reason: str):
        self.year = year
        self.month = month
        self.reason = reason
        super().__init__(f"Invalid period {year}-{month}: {reason}")


class PeriodLockedError(PeriodError):
    """Period falls on or before the caller-supplied lock date."""

    code: str = "PERIOD_LOCKED"

    def __init__(self, year: int, month: int, lock_date: date):
        self.year = year
        self.month = month
        self.lock_date = lock_date
        super().__init__(
            f"Cannot depreciate period {year}-{month:02d}: "
            f"on or before lock date {lock_date.isoformat()}"
        )


# Concurrency exceptions


class ConcurrencyError(AssetKernelError):
    """Base exception for snapshot consistency errors."""

    code: str = "CONCURRENCY_ERROR"


class StaleSnapshotError(ConcurrencyError):
    """
    An entry was planned against a different accumulated depreciation
    than the snapshot it is being applied to.
    """

    code: str = "STALE_SNAPSHOT"

    def __init__(self, asset_id: Any, expected: int, actual: int):
        self.asset_id = asset_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Stale snapshot for asset {asset_id}: entry planned against "
            f"accumulated depreciation {expected}, asset has {actual}"
        )


# Configuration exceptions


class ConfigError(AssetKernelError):
    """Configuration file or values are invalid."""

    code: str = "CONFIG_ERROR"

    def __init__(self, path: str | None, reason: str):
        self.path = path
        self.reason = reason
        where = f" in {path}" if path else ""
        super().__init__(f"Invalid depreciation configuration{where}: {reason}")
