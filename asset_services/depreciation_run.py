"""
Depreciation Run Planner (``asset_services.depreciation_run``).

Responsibility
--------------
Drives the engines for every asset in one accounting period and returns
the entries the caller should persist, together with what was skipped and
why.  This is the monthly run of the surrounding system expressed without
any I/O.

Architecture position
---------------------
**Services layer** -- orchestrates ``asset_engines`` using settings from
``asset_config``.  Owns no storage: the caller loads asset snapshots,
persists the returned entries and the next snapshot from ``apply_entry``,
and enforces per-asset serialization.

Invariants enforced
-------------------
* One entry per (asset, period) in a run; asset ids listed in
  ``already_posted`` are skipped.
* An entry is produced only after eligibility and validation both pass.
* The final month of the useful life takes the whole remaining balance,
  matching ``generate_depreciation_schedule``.
* ``apply_entry`` refuses an entry planned against a different
  accumulated total (``StaleSnapshotError``).

Failure modes
-------------
* Malformed period or period on/before the lock date -> raised; nothing
  is planned.
* Per-asset ``AssetKernelError`` (e.g. zero useful life) -> recorded as a
  ``RunError`` for that asset; the run continues.
* Validation rejection -> ``RunError`` carrying the verbatim message.
"""

from __future__ import annotations

import time
from collections.abc import Collection, Iterable
from dataclasses import dataclass, replace
from datetime import date
from typing import Any
from uuid import uuid4

from asset_config.schema import DepreciationConfig
from asset_engines import (
    calculate_monthly_depreciation,
    calculate_remaining_depreciable,
    determine_asset_status,
    generate_depreciation_schedule,
    months_between,
    should_depreciate_in_period,
    validate_depreciation_entry,
)
from asset_kernel.exceptions import (
    AssetKernelError,
    InvalidPeriodError,
    PeriodLockedError,
    StaleSnapshotError,
)
from asset_kernel.logging_config import LogContext, get_logger
from asset_kernel.models import (
    AssetStatus,
    DepreciationScheduleEntry,
    FixedAsset,
)

logger = get_logger("services.depreciation_run")

ALREADY_PROCESSED = "Already processed for this period"
NO_DEPRECIABLE_AMOUNT = "No depreciable amount"


@dataclass(frozen=True)
class DepreciationEntry:
    """A validated period amount, ready for the caller to persist."""

    asset_id: Any
    period_year: int
    period_month: int
    amount: int
    accumulated_before: int
    accumulated_after: int
    book_value: int
    new_status: AssetStatus


@dataclass(frozen=True)
class SkippedAsset:
    """An asset that produced no entry for an expected reason."""

    asset_id: Any
    reason: str


@dataclass(frozen=True)
class RunError:
    """An asset that needs operator review.  ``message`` is kept verbatim."""

    asset_id: Any
    message: str
    code: str | None = None


@dataclass(frozen=True)
class DepreciationRunResult:
    """Outcome of planning one period across a set of assets."""

    period_year: int
    period_month: int
    entries: tuple[DepreciationEntry, ...] = ()
    skipped: tuple[SkippedAsset, ...] = ()
    errors: tuple[RunError, ...] = ()
    currency_minor_unit: str = "tiyin"

    @property
    def processed_count(self) -> int:
        return len(self.entries)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped) + len(self.errors)

    @property
    def total_amount(self) -> int:
        return sum(e.amount for e in self.entries)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        return (
            f"Depreciation processed: {self.processed_count} assets, "
            f"{self.total_amount} {self.currency_minor_unit}"
        )


class DepreciationRunService:
    """
    Pure planner for a monthly depreciation run.

    Contract:
        No I/O, no clock access, no mutation of the assets passed in.
    Guarantees:
        - Every input asset appears exactly once across ``entries``,
          ``skipped`` and ``errors``.
        - ``entries`` preserve input order.
    Non-goals:
        - Does not persist entries or post journal lines.
        - Does not detect concurrent runs; see ``apply_entry``.
    """

    def __init__(self, config: DepreciationConfig | None = None):
        self._config = config or DepreciationConfig()

    @property
    def config(self) -> DepreciationConfig:
        return self._config

    def check_period(self, year: int, month: int) -> None:
        """
        Raise if the period cannot be targeted by a run.

        Raises:
            InvalidPeriodError: month outside 1-12 or year outside range.
            PeriodLockedError: first day of the period is on or before
                ``config.lock_date``.
        """
        if isinstance(year, bool) or not isinstance(year, int) or not self._config.accepts_year(year):
            raise InvalidPeriodError(
                year,
                month,
                f"year must be between {self._config.min_period_year}"
                f"-{self._config.max_period_year}",
            )
        if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
            raise InvalidPeriodError(year, month, "month must be between 1-12")

        lock_date = self._config.lock_date
        if lock_date is not None and date(year, month, 1) <= lock_date:
            raise PeriodLockedError(year, month, lock_date)

    def plan_period(
        self,
        assets: Iterable[FixedAsset],
        year: int,
        month: int,
        already_posted: Collection[Any] = frozenset(),
    ) -> DepreciationRunResult:
        """
        Plan depreciation entries for ``year``/``month``.

        Args:
            assets: Fresh snapshots, typically all ``ACTIVE`` assets.
            year: Fiscal year of the period.
            month: Fiscal month of the period (1-12).
            already_posted: Asset ids that already have an entry for this
                period in the caller's store.

        Returns:
            ``DepreciationRunResult`` with entries, skips and errors.
        """
        self.check_period(year, month)

        period = f"{year}-{month:02d}"
        entries: list[DepreciationEntry] = []
        skipped: list[SkippedAsset] = []
        errors: list[RunError] = []

        t0 = time.monotonic()
        with LogContext.bind(run_id=str(uuid4()), period=period):
            logger.info("depreciation_run_started", extra={"period_year": year, "period_month": month})

            for asset in assets:
                with LogContext.bind(asset_id=None if asset.asset_id is None else str(asset.asset_id)):
                    try:
                        outcome = self._plan_asset(asset, year, month, already_posted)
                    except AssetKernelError as exc:
                        logger.error(
                            "depreciation_asset_failed",
                            exc_info=True,
                            extra={"error_code": exc.code},
                        )
                        errors.append(RunError(asset.asset_id, str(exc), exc.code))
                        continue

                if isinstance(outcome, DepreciationEntry):
                    entries.append(outcome)
                elif isinstance(outcome, RunError):
                    errors.append(outcome)
                else:
                    skipped.append(outcome)

            result = DepreciationRunResult(
                period_year=year,
                period_month=month,
                entries=tuple(entries),
                skipped=tuple(skipped),
                errors=tuple(errors),
                currency_minor_unit=self._config.currency_minor_unit,
            )
            logger.info(
                "depreciation_run_completed",
                extra={
                    "processed_count": result.processed_count,
                    "skipped_count": result.skipped_count,
                    "error_count": len(result.errors),
                    "total_amount": result.total_amount,
                    "duration_ms": round((time.monotonic() - t0) * 1000, 2),
                },
            )
        return result

    def _plan_asset(
        self,
        asset: FixedAsset,
        year: int,
        month: int,
        already_posted: Collection[Any],
    ) -> DepreciationEntry | SkippedAsset | RunError:
        if asset.asset_id is not None and asset.asset_id in already_posted:
            logger.info("depreciation_asset_skipped", extra={"reason": ALREADY_PROCESSED})
            return SkippedAsset(asset.asset_id, ALREADY_PROCESSED)

        check = should_depreciate_in_period(asset, year, month)
        if not check.should_depreciate:
            logger.info("depreciation_asset_skipped", extra={"reason": check.reason})
            return SkippedAsset(asset.asset_id, check.reason)

        amount = self.period_amount(asset, year, month)
        if amount == 0:
            logger.info("depreciation_asset_skipped", extra={"reason": NO_DEPRECIABLE_AMOUNT})
            return SkippedAsset(asset.asset_id, NO_DEPRECIABLE_AMOUNT)

        validation = validate_depreciation_entry(asset, amount)
        if not validation.valid:
            return RunError(asset.asset_id, validation.error, "VALIDATION_FAILED")

        accumulated_after = asset.accumulated_depreciation + amount
        entry = DepreciationEntry(
            asset_id=asset.asset_id,
            period_year=year,
            period_month=month,
            amount=amount,
            accumulated_before=asset.accumulated_depreciation,
            accumulated_after=accumulated_after,
            book_value=asset.cost - accumulated_after,
            new_status=determine_asset_status(
                asset.cost, asset.salvage_value, accumulated_after
            ),
        )
        logger.info(
            "depreciation_entry_planned",
            extra={"amount": amount, "new_status": entry.new_status.value},
        )
        return entry

    @staticmethod
    def period_amount(asset: FixedAsset, year: int, month: int) -> int:
        """
        Amount to post for the period.

        The monthly straight-line amount capped at the remaining balance;
        from the final month of the useful life onward, the whole
        remaining balance so flooring residue is absorbed.

        Raises:
            InvalidInputError: if the asset's useful life is not positive.
        """
        monthly = calculate_monthly_depreciation(
            asset.cost, asset.salvage_value, asset.useful_life_months
        )
        remaining = calculate_remaining_depreciable(
            asset.cost, asset.salvage_value, asset.accumulated_depreciation
        )
        if months_between(asset.purchase_date, year, month) >= asset.useful_life_months - 1:
            return remaining
        return min(monthly, remaining)

    def preview_schedule(self, asset: FixedAsset) -> list[DepreciationScheduleEntry]:
        """Full schedule for ``asset`` from its purchase month."""
        return generate_depreciation_schedule(
            asset.cost,
            asset.salvage_value,
            asset.useful_life_months,
            asset.purchase_date,
        )

    @staticmethod
    def apply_entry(asset: FixedAsset, entry: DepreciationEntry) -> FixedAsset:
        """
        Next snapshot after the caller has persisted ``entry``.

        Raises:
            StaleSnapshotError: if ``entry`` belongs to another asset or was
                planned against a different accumulated depreciation.
        """
        if entry.asset_id != asset.asset_id or entry.accumulated_before != asset.accumulated_depreciation:
            raise StaleSnapshotError(
                asset.asset_id, entry.accumulated_before, asset.accumulated_depreciation
            )
        accumulated = asset.accumulated_depreciation + entry.amount
        return replace(
            asset,
            accumulated_depreciation=accumulated,
            status=determine_asset_status(asset.cost, asset.salvage_value, accumulated),
        )
