"""
asset_engines.status -- Asset status resolver.

Derives ``ACTIVE`` or ``FULLY_DEPRECIATED`` from current totals.  Pure and
idempotent; callers re-run it after every posted entry.  Never produces
``DISPOSED``, which is set by the external disposal process and is one-way.
"""

from __future__ import annotations

from asset_engines.straight_line import calculate_book_value
from asset_kernel.models import AssetStatus


def determine_asset_status(
    cost: int,
    salvage_value: int,
    accumulated_depreciation: int,
) -> AssetStatus:
    """``FULLY_DEPRECIATED`` iff book value is at or below salvage."""
    if calculate_book_value(cost, accumulated_depreciation) <= salvage_value:
        return AssetStatus.FULLY_DEPRECIATED
    return AssetStatus.ACTIVE
