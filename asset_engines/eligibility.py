"""
asset_engines.eligibility -- Period eligibility checker.

Responsibility:
    Decide whether a given accounting period should produce a
    depreciation entry for a given asset.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Only ``ACTIVE`` assets are eligible; ``FULLY_DEPRECIATED`` and
      ``DISPOSED`` are terminal here.
    - No depreciation for a period before the purchase month (both sides
      compared at first-of-month).

Failure modes:
    - Ineligibility is reported in the result, never raised.
    - ``InvalidPeriodError`` if ``period_month`` is not 1-12.

Non-goals:
    - Duplicate postings for the same (asset, period) are not detected;
      that idempotency key belongs to the caller's persistence layer.
"""

from __future__ import annotations

from asset_engines.straight_line import months_between
from asset_engines.tracer import traced_engine
from asset_kernel.exceptions import InvalidPeriodError
from asset_kernel.logging_config import get_logger
from asset_kernel.models import AssetStatus, DepreciationCheckResult, FixedAsset

logger = get_logger("engines.eligibility")


@traced_engine("eligibility", "1.0", fingerprint_fields=("asset", "period_year", "period_month"))
def should_depreciate_in_period(
    asset: FixedAsset,
    period_year: int,
    period_month: int,
) -> DepreciationCheckResult:
    """
    Check status, then purchase month, for the target period.

    Returns:
        ``DepreciationCheckResult(True)`` or ``(False, reason)``.
    """
    if not 1 <= period_month <= 12:
        raise InvalidPeriodError(period_year, period_month, "month must be between 1 and 12")

    if asset.status is not AssetStatus.ACTIVE:
        return DepreciationCheckResult(
            should_depreciate=False,
            reason=f"Asset status is {asset.status.value}, not ACTIVE",
        )

    if months_between(asset.purchase_date, period_year, period_month) < 0:
        purchase = asset.purchase_date
        logger.debug(
            "period_precedes_purchase",
            extra={
                "asset_id": asset.asset_id,
                "period": f"{period_year}-{period_month:02d}",
                "purchase_date": purchase.isoformat(),
            },
        )
        return DepreciationCheckResult(
            should_depreciate=False,
            reason=(
                f"Period {period_year}-{period_month:02d} precedes purchase date "
                f"{purchase.year}-{purchase.month:02d}; "
                "no depreciation before purchase date"
            ),
        )

    return DepreciationCheckResult(should_depreciate=True)
