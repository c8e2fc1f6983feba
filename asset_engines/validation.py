"""
asset_engines.validation -- Gate check for a proposed depreciation amount.

Responsibility:
    Decide whether a proposed period amount is safe to post against the
    asset's current accumulated depreciation.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Advisory only: the
    caller decides what to do with a rejection.

Invariants enforced:
    - Amount must be strictly positive; zero is never a valid entry.
    - Amount must not exceed the remaining depreciable balance.
    - Book value after posting must not fall below salvage value.  Implied
      by the previous check for well-formed snapshots; kept for callers
      that computed the amount against a stale accumulated total.
    - Never clamps or rewrites the amount.

Failure modes:
    - Rejections are returned as ``ValidationResult.reject(error)``.
    - ``InvalidInputError`` if the amount is not an integer.
"""

from __future__ import annotations

from asset_engines.straight_line import calculate_book_value, calculate_remaining_depreciable
from asset_engines.tracer import traced_engine
from asset_kernel.logging_config import get_logger
from asset_kernel.models import FixedAsset, ValidationResult, require_minor_units

logger = get_logger("engines.validation")


@traced_engine("entry_validation", "1.0", fingerprint_fields=("asset", "proposed_amount"))
def validate_depreciation_entry(
    asset: FixedAsset,
    proposed_amount: int,
) -> ValidationResult:
    """
    Run the three safeguards in order and stop at the first failure.

    Returns:
        ``ValidationResult.ok()`` or ``ValidationResult.reject(error)``
        where ``error`` names the offending values.
    """
    require_minor_units("proposed_amount", proposed_amount)

    if proposed_amount <= 0:
        return _reject(asset, "Depreciation amount must be positive")

    remaining = calculate_remaining_depreciable(
        asset.cost,
        asset.salvage_value,
        asset.accumulated_depreciation,
    )
    if proposed_amount > remaining:
        return _reject(
            asset,
            f"Depreciation amount {proposed_amount} exceeds remaining depreciable {remaining}",
        )

    new_accumulated = asset.accumulated_depreciation + proposed_amount
    new_book_value = calculate_book_value(asset.cost, new_accumulated)
    if new_book_value < asset.salvage_value:
        return _reject(
            asset,
            f"Book value {new_book_value} would fall below salvage value {asset.salvage_value}",
        )

    return ValidationResult.ok()


def _reject(asset: FixedAsset, error: str) -> ValidationResult:
    logger.warning(
        "depreciation_entry_rejected",
        extra={"asset_id": asset.asset_id, "error": error},
    )
    return ValidationResult.reject(error)
