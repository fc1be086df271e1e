"""Unit tests for the equity vesting schedule."""

import pytest

from totalcomp.sdk import EquityElection, InvalidInput, PackageInput, RefresherRange, ValueRange
from totalcomp.sdk.comp import equity_summary, normalize, vesting_schedule


@pytest.fixture
def salary(fy2025):
    return normalize(PackageInput(gross_salary=50000), fy2025)


class TestVestingSchedule:

    def test_year_zero_vests_nothing(self):
        schedule = vesting_schedule(400000, 4)
        assert schedule[0].year == 0
        assert schedule[0].total_vested == ValueRange(low=0, high=0)

    def test_initial_grant_vests_evenly(self):
        schedule = vesting_schedule(400000, 4)
        assert len(schedule) == 5
        assert [y.initial_vested for y in schedule[1:]] == [100000] * 4

    def test_refreshers_stack_from_following_year(self):
        schedule = vesting_schedule(0, 4, ValueRange(low=40000, high=80000))
        lows = [y.refresher_vested.low for y in schedule]
        highs = [y.refresher_vested.high for y in schedule]
        assert lows == [0, 0, 10000, 20000, 30000]
        assert highs == [0, 0, 20000, 40000, 60000]

    def test_longer_horizon_stops_initial_vesting(self):
        schedule = vesting_schedule(400000, 4, years=6)
        assert schedule[5].initial_vested == 0
        assert schedule[6].initial_vested == 0

    def test_refresher_count_capped_at_vesting_years(self):
        schedule = vesting_schedule(0, 2, ValueRange(low=100, high=100), years=5)
        # Only the two most recent grants are vesting at any time
        assert schedule[5].refresher_vested.low == 100


class TestEquitySummary:

    def test_usd_grant_converted(self, fy2025, salary):
        summary = equity_summary(
            EquityElection(initial_grant=100000, refresher=RefresherRange(min=10000, max=20000)),
            salary,
        )

        assert summary.initial_grant_mxn == 2_000_000
        assert summary.annual_initial_vest_mxn == 500_000
        assert summary.refresher_range_mxn == ValueRange(low=200_000, high=400_000)
        assert summary.total_over_horizon == ValueRange(low=2_300_000, high=2_600_000)

    def test_mxn_grant(self, salary):
        summary = equity_summary(EquityElection(initial_grant=120000, currency="MXN", vesting_years=3), salary)
        assert summary.initial_grant_mxn == 120000
        assert summary.refresher_range_mxn is None
        assert summary.total_over_horizon == ValueRange(low=120000, high=120000)

    def test_refresher_min_above_max(self, salary):
        with pytest.raises(InvalidInput) as exc:
            equity_summary(
                EquityElection(initial_grant=1000, refresher=RefresherRange(min=5000, max=1000)), salary
            )
        assert exc.value.field == "equity.refresher"

    def test_negative_grant(self, salary):
        with pytest.raises(InvalidInput):
            equity_summary(EquityElection(initial_grant=-1), salary)
