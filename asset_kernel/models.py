"""
Fixed Asset Domain Models.

The nouns of depreciation: the asset snapshot handed in by the caller
and the result objects handed back. All monetary fields are ``int``
minor currency units; ``float`` is rejected at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Self

from asset_kernel.exceptions import InvalidInputError


class AssetStatus(str, Enum):
    """Asset lifecycle states."""
    ACTIVE = "ACTIVE"
    FULLY_DEPRECIATED = "FULLY_DEPRECIATED"
    DISPOSED = "DISPOSED"  # set by the external disposal process only


def require_minor_units(name: str, value: Any) -> int:
    """
    Return ``value`` if it is an integer amount, else raise.

    ``bool`` is an ``int`` subclass in Python and is rejected along with
    ``float`` and ``Decimal``.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(
            name, value, "monetary amounts must be integer minor units"
        )
    return value


@dataclass(frozen=True)
class FixedAsset:
    """
    Read-only snapshot of a capitalized asset.

    ``salvage_value <= cost`` is expected but not enforced; a negative
    depreciable base is clamped to zero by the calculator.
    """
    cost: int
    salvage_value: int
    accumulated_depreciation: int
    useful_life_months: int
    purchase_date: date
    status: AssetStatus = AssetStatus.ACTIVE
    asset_id: Any = None
    name: str | None = None

    def __post_init__(self):
        for field_name in ("cost", "salvage_value", "accumulated_depreciation"):
            value = require_minor_units(field_name, getattr(self, field_name))
            if value < 0:
                raise InvalidInputError(field_name, value, "must not be negative")
        if not isinstance(self.purchase_date, date):
            raise InvalidInputError(
                "purchase_date", self.purchase_date, "must be a date"
            )
        if not isinstance(self.status, AssetStatus):
            try:
                object.__setattr__(self, "status", AssetStatus(self.status))
            except ValueError:
                raise InvalidInputError(
                    "status", self.status, "unknown asset status"
                ) from None

    @property
    def book_value(self) -> int:
        return self.cost - self.accumulated_depreciation

    @property
    def depreciable_base(self) -> int:
        return max(0, self.cost - self.salvage_value)


@dataclass(frozen=True)
class DepreciationCheckResult:
    """Whether a period should produce an entry, and why not."""
    should_depreciate: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.should_depreciate


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of gate-checking a proposed amount.

    Tagged result: ``ok()`` or ``reject(error)``. The error text is
    meant to be preserved verbatim for audit.
    """
    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> Self:
        return cls(valid=True)

    @classmethod
    def reject(cls, error: str) -> Self:
        return cls(valid=False, error=error)

    def __bool__(self) -> bool:
        return self.valid


@dataclass(frozen=True)
class DepreciationScheduleEntry:
    """One month of a preview schedule. Never persisted."""
    month: int
    year: int
    monthly_amount: int
    accumulated_total: int
    book_value: int
    is_fully_depreciated: bool
