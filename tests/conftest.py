"""
Pytest fixtures for the depreciation engine test suite.

Provides:
- Asset snapshot factory with the reference 120M / 20M / 60-month asset
- Logging isolation between tests

Every fixture except the logging reset is opt-in.
"""

from datetime import date

import pytest

from asset_kernel.logging_config import LogContext, reset_logging
from asset_kernel.models import AssetStatus, FixedAsset

# Reference asset: cost 1,200,000.00 with 200,000.00 salvage over five years,
# in minor units (tiyin).
REFERENCE_COST = 120_000_000
REFERENCE_SALVAGE = 20_000_000
REFERENCE_LIFE = 60
REFERENCE_MONTHLY = 1_666_666


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def make_asset():
    """Factory for ``FixedAsset`` snapshots defaulting to the reference asset."""

    def _make(
        cost: int = REFERENCE_COST,
        salvage_value: int = REFERENCE_SALVAGE,
        accumulated_depreciation: int = 0,
        useful_life_months: int = REFERENCE_LIFE,
        purchase_date: date = date(2024, 1, 1),
        status: AssetStatus = AssetStatus.ACTIVE,
        asset_id: int | None = 1,
        name: str | None = "Freeze Dryer",
    ) -> FixedAsset:
        return FixedAsset(
            cost=cost,
            salvage_value=salvage_value,
            accumulated_depreciation=accumulated_depreciation,
            useful_life_months=useful_life_months,
            purchase_date=purchase_date,
            status=status,
            asset_id=asset_id,
            name=name,
        )

    return _make


@pytest.fixture
def reference_asset(make_asset) -> FixedAsset:
    return make_asset()
