"""
asset_engines.straight_line -- Straight-line depreciation calculator.

Responsibility:
    Monthly straight-line amount, book value, remaining depreciable
    balance and full preview schedules, all in integer minor units.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import asset_kernel.

Invariants enforced:
    - Integer-only arithmetic: amounts are ``int``; ``float`` raises
      ``InvalidInputError``.
    - Flooring: the monthly amount is ``(cost - salvage) // life``, so
      early periods never over-depreciate.  ``monthly * life`` falls short
      of the depreciable base by less than ``life``.
    - Residue absorption: the final period of a schedule takes the whole
      remaining balance, so the cumulative total equals
      ``max(0, cost - salvage)`` exactly.
    - Determinism: identical inputs produce identical outputs.

Failure modes:
    - ``InvalidInputError`` if ``useful_life_months`` is not a positive
      integer.  Fatal for the asset; not retryable.
    - ``calculate_book_value`` may return a negative number when the caller
      passes accumulated depreciation above cost.  Not handled here.

Usage:
    from asset_engines.straight_line import calculate_monthly_depreciation

    calculate_monthly_depreciation(120_000_000, 20_000_000, 60)  # 1_666_666
"""

from __future__ import annotations

from datetime import date

from asset_engines.tracer import traced_engine
from asset_kernel.exceptions import InvalidInputError
from asset_kernel.logging_config import get_logger
from asset_kernel.models import DepreciationScheduleEntry, require_minor_units

logger = get_logger("engines.straight_line")


def _require_useful_life(useful_life_months: int) -> int:
    if isinstance(useful_life_months, bool) or not isinstance(useful_life_months, int):
        raise InvalidInputError(
            "useful_life_months",
            useful_life_months,
            "useful life must be greater than zero whole months",
        )
    if useful_life_months <= 0:
        logger.error(
            "useful_life_invalid",
            extra={"useful_life_months": useful_life_months},
        )
        raise InvalidInputError(
            "useful_life_months",
            useful_life_months,
            "useful life must be greater than zero",
        )
    return useful_life_months


def calculate_monthly_depreciation(
    cost: int,
    salvage_value: int,
    useful_life_months: int,
) -> int:
    """
    Calculate the monthly straight-line amount.

    Formula: floor((cost - salvage_value) / useful_life_months)

    Example: cost 120,000,000, salvage 20,000,000, life 60 months
    -> 100,000,000 / 60 = 1,666,666.67 -> 1,666,666.

    Raises:
        InvalidInputError: if ``useful_life_months <= 0``.
    """
    _require_useful_life(useful_life_months)
    require_minor_units("cost", cost)
    require_minor_units("salvage_value", salvage_value)

    if cost <= salvage_value:
        return 0
    return (cost - salvage_value) // useful_life_months


def calculate_book_value(cost: int, accumulated_depreciation: int) -> int:
    """Cost minus accumulated depreciation.  Not clamped."""
    require_minor_units("cost", cost)
    require_minor_units("accumulated_depreciation", accumulated_depreciation)
    return cost - accumulated_depreciation


def calculate_remaining_depreciable(
    cost: int,
    salvage_value: int,
    accumulated_depreciation: int,
) -> int:
    """
    Amount that may still be depreciated, never below zero.

    This is the ceiling the entry validator checks against.
    """
    require_minor_units("cost", cost)
    require_minor_units("salvage_value", salvage_value)
    require_minor_units("accumulated_depreciation", accumulated_depreciation)
    return max(0, (cost - salvage_value) - accumulated_depreciation)


def months_between(start: date, year: int, month: int) -> int:
    """
    Whole-month offset of ``year``/``month`` from the month of ``start``.

    0 for the start month itself, negative for earlier periods.  Days are
    ignored; both sides are normalized to the first of the month.
    """
    return (year * 12 + month - 1) - (start.year * 12 + start.month - 1)


@traced_engine(
    "straight_line",
    "1.0",
    fingerprint_fields=("cost", "salvage_value", "useful_life_months", "start_date"),
)
def generate_depreciation_schedule(
    cost: int,
    salvage_value: int,
    useful_life_months: int,
    start_date: date,
) -> list[DepreciationScheduleEntry]:
    """
    Build the month-by-month schedule starting at ``start_date``'s month.

    Preconditions:
        - ``useful_life_months`` > 0.
    Postconditions:
        - At most ``useful_life_months`` entries.
        - Each period amount is ``min(monthly, remaining)``; the last period
          of the useful life takes all of ``remaining``.
        - Stops after the first entry whose book value is at or below
          salvage; that entry has ``is_fully_depreciated=True``.
        - Sum of ``monthly_amount`` == ``max(0, cost - salvage_value)``.
    """
    monthly_amount = calculate_monthly_depreciation(cost, salvage_value, useful_life_months)
    schedule: list[DepreciationScheduleEntry] = []

    accumulated = 0
    last_index = useful_life_months - 1

    for i in range(useful_life_months):
        year, month_index = divmod(start_date.year * 12 + start_date.month - 1 + i, 12)

        remaining = calculate_remaining_depreciable(cost, salvage_value, accumulated)
        period_amount = remaining if i == last_index else min(monthly_amount, remaining)

        accumulated += period_amount
        book_value = calculate_book_value(cost, accumulated)
        fully_depreciated = book_value <= salvage_value

        schedule.append(
            DepreciationScheduleEntry(
                month=month_index + 1,
                year=year,
                monthly_amount=period_amount,
                accumulated_total=accumulated,
                book_value=book_value,
                is_fully_depreciated=fully_depreciated,
            )
        )

        if fully_depreciated:
            break

    logger.info(
        "depreciation_schedule_generated",
        extra={
            "useful_life_months": useful_life_months,
            "monthly_amount": monthly_amount,
            "periods": len(schedule),
            "total_depreciation": accumulated,
        },
    )
    return schedule
