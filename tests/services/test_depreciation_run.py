"""
Tests for the depreciation run planner.

Covers:
- Period validation and lock date
- Skips: already posted, ineligible, zero amount
- Validation failures and per-asset fatal errors recorded, run continues
- Final-period residue absorption across a simulated asset life
- apply_entry snapshot advance and stale snapshot detection
"""

from datetime import date

import pytest

from asset_config.schema import DepreciationConfig
from asset_kernel.exceptions import InvalidPeriodError, PeriodLockedError, StaleSnapshotError
from asset_kernel.models import AssetStatus
from asset_services.depreciation_run import (
    ALREADY_PROCESSED,
    NO_DEPRECIABLE_AMOUNT,
    DepreciationEntry,
    DepreciationRunService,
)


@pytest.fixture
def service() -> DepreciationRunService:
    return DepreciationRunService()


class TestPeriodChecks:

    @pytest.mark.parametrize("year", [1999, 2101])
    def test_year_out_of_range(self, service, reference_asset, year):
        with pytest.raises(InvalidPeriodError, match="year must be between 2000-2100"):
            service.plan_period([reference_asset], year, 1)

    @pytest.mark.parametrize("month", [0, 13])
    def test_month_out_of_range(self, service, reference_asset, month):
        with pytest.raises(InvalidPeriodError, match="month must be between 1-12"):
            service.plan_period([reference_asset], 2024, month)

    def test_custom_year_range(self, reference_asset):
        service = DepreciationRunService(DepreciationConfig(min_period_year=2024, max_period_year=2024))

        with pytest.raises(InvalidPeriodError):
            service.plan_period([reference_asset], 2025, 1)

    def test_period_on_lock_date_refused(self, reference_asset):
        service = DepreciationRunService(DepreciationConfig(lock_date=date(2024, 3, 1)))

        with pytest.raises(PeriodLockedError) as exc_info:
            service.plan_period([reference_asset], 2024, 3)

        assert exc_info.value.lock_date == date(2024, 3, 1)

    def test_period_after_lock_date_allowed(self, reference_asset):
        service = DepreciationRunService(DepreciationConfig(lock_date=date(2024, 2, 29)))

        result = service.plan_period([reference_asset], 2024, 3)

        assert result.processed_count == 1


class TestPlanPeriod:

    def test_first_month_entry(self, service, reference_asset):
        result = service.plan_period([reference_asset], 2024, 1)

        assert result.success is True
        assert result.entries == (
            DepreciationEntry(
                asset_id=1,
                period_year=2024,
                period_month=1,
                amount=1_666_666,
                accumulated_before=0,
                accumulated_after=1_666_666,
                book_value=118_333_334,
                new_status=AssetStatus.ACTIVE,
            ),
        )
        assert result.total_amount == 1_666_666
        assert result.message == "Depreciation processed: 1 assets, 1666666 tiyin"

    def test_already_posted_skipped(self, service, reference_asset):
        result = service.plan_period([reference_asset], 2024, 1, already_posted={1})

        assert result.entries == ()
        assert result.skipped[0].reason == ALREADY_PROCESSED

    def test_ineligible_reason_preserved(self, service, make_asset):
        asset = make_asset(purchase_date=date(2024, 3, 15))

        result = service.plan_period([asset], 2024, 2)

        assert result.skipped_count == 1
        assert "before purchase date" in result.skipped[0].reason

    def test_fully_depreciated_status_skipped(self, service, make_asset):
        asset = make_asset(status=AssetStatus.FULLY_DEPRECIATED)

        result = service.plan_period([asset], 2024, 6)

        assert result.skipped[0].reason == "Asset status is FULLY_DEPRECIATED, not ACTIVE"

    def test_zero_base_skipped(self, service, make_asset):
        asset = make_asset(cost=1000, salvage_value=1000)

        result = service.plan_period([asset], 2024, 1)

        assert result.skipped[0].reason == NO_DEPRECIABLE_AMOUNT
        assert result.success is True

    def test_amount_capped_at_remaining(self, service, make_asset):
        asset = make_asset(accumulated_depreciation=99_999_996)

        result = service.plan_period([asset], 2024, 6)

        entry = result.entries[0]
        assert entry.amount == 4
        assert entry.book_value == 20_000_000
        assert entry.new_status is AssetStatus.FULLY_DEPRECIATED

    def test_bad_useful_life_recorded_and_run_continues(self, service, make_asset):
        broken = make_asset(asset_id=7, useful_life_months=0)
        healthy = make_asset(asset_id=8)

        result = service.plan_period([broken, healthy], 2024, 1)

        assert result.success is False
        assert result.errors[0].asset_id == 7
        assert result.errors[0].code == "INVALID_INPUT"
        assert "useful life must be greater than zero" in result.errors[0].message
        assert [e.asset_id for e in result.entries] == [8]
        assert result.skipped_count == 1

    def test_validation_failure_recorded_verbatim(self, make_asset, monkeypatch):
        """A stale amount reaching the validator is reported, not clamped."""
        service = DepreciationRunService()
        monkeypatch.setattr(
            DepreciationRunService, "period_amount", staticmethod(lambda asset, y, m: 1_666_666)
        )
        asset = make_asset(accumulated_depreciation=99_999_996)

        result = service.plan_period([asset], 2024, 6)

        assert result.entries == ()
        assert result.errors[0].message == (
            "Depreciation amount 1666666 exceeds remaining depreciable 4"
        )
        assert result.errors[0].code == "VALIDATION_FAILED"

    def test_every_asset_accounted_for(self, service, make_asset):
        assets = [
            make_asset(asset_id=1),
            make_asset(asset_id=2, status=AssetStatus.DISPOSED),
            make_asset(asset_id=3, useful_life_months=-5),
            make_asset(asset_id=4, cost=10, salvage_value=10),
            make_asset(asset_id=5),
        ]

        result = service.plan_period(assets, 2024, 1, already_posted={5})

        seen = (
            [e.asset_id for e in result.entries]
            + [s.asset_id for s in result.skipped]
            + [e.asset_id for e in result.errors]
        )
        assert sorted(seen) == [1, 2, 3, 4, 5]
        assert result.processed_count == 1
        assert result.skipped_count == 4

    def test_input_assets_not_mutated(self, service, reference_asset):
        service.plan_period([reference_asset], 2024, 1)

        assert reference_asset.accumulated_depreciation == 0

    def test_accepts_generator(self, service, make_asset):
        result = service.plan_period((make_asset(asset_id=i) for i in range(3)), 2024, 1)

        assert result.processed_count == 3


class TestFullLifeSimulation:
    """Run month by month, applying each entry, as a caller would."""

    def _run_life(self, service, asset, months):
        year, month = asset.purchase_date.year, asset.purchase_date.month
        totals = []
        for _ in range(months):
            result = service.plan_period([asset], year, month)
            if result.entries:
                asset = service.apply_entry(asset, result.entries[0])
                totals.append(result.entries[0].amount)
            year, month = (year + 1, 1) if month == 12 else (year, month + 1)
        return asset, totals

    def test_reference_asset_lands_on_salvage(self, service, reference_asset):
        asset, amounts = self._run_life(service, reference_asset, 60)

        assert len(amounts) == 60
        assert amounts[-1] == 1_666_706
        assert asset.accumulated_depreciation == 100_000_000
        assert asset.book_value == 20_000_000
        assert asset.status is AssetStatus.FULLY_DEPRECIATED

    def test_matches_preview_schedule(self, service, make_asset):
        asset = make_asset(cost=10_007, salvage_value=500, useful_life_months=13,
                           purchase_date=date(2024, 11, 3))

        _, amounts = self._run_life(service, asset, 13)

        preview = service.preview_schedule(asset)
        assert amounts == [e.monthly_amount for e in preview]

    def test_no_entries_after_fully_depreciated(self, service, reference_asset):
        asset, amounts = self._run_life(service, reference_asset, 72)

        assert len(amounts) == 60
        assert asset.status is AssetStatus.FULLY_DEPRECIATED


class TestApplyEntry:

    def test_advances_snapshot(self, service, reference_asset):
        entry = service.plan_period([reference_asset], 2024, 1).entries[0]

        updated = service.apply_entry(reference_asset, entry)

        assert updated.accumulated_depreciation == 1_666_666
        assert updated.status is AssetStatus.ACTIVE
        assert updated.asset_id == reference_asset.asset_id

    def test_stale_snapshot_detected(self, service, reference_asset):
        entry = service.plan_period([reference_asset], 2024, 1).entries[0]
        advanced = service.apply_entry(reference_asset, entry)

        with pytest.raises(StaleSnapshotError) as exc_info:
            service.apply_entry(advanced, entry)

        assert exc_info.value.expected == 0
        assert exc_info.value.actual == 1_666_666

    def test_entry_for_other_asset_refused(self, service, make_asset):
        entry = service.plan_period([make_asset(asset_id=1)], 2024, 1).entries[0]

        with pytest.raises(StaleSnapshotError):
            service.apply_entry(make_asset(asset_id=2), entry)


class TestPreviewSchedule:

    def test_uses_asset_attributes(self, service, make_asset):
        asset = make_asset(purchase_date=date(2024, 3, 15))

        schedule = service.preview_schedule(asset)

        assert (schedule[0].year, schedule[0].month) == (2024, 3)
        assert len(schedule) == 60
