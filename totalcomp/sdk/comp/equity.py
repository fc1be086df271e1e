"""Equity vesting schedule.

Equity is supplemental compensation: it is reported alongside a package
but never taxed here and never added to the annual totals.

The initial grant vests evenly over vesting_years starting one year after
joining. A refresher is granted at the end of every year and vests the
same way starting the following year, so refreshers stack. The refresher
value is an estimate and stays a (low, high) range throughout.
"""

from typing import List, Optional

from ..errors import InvalidInput
from ..schemas import EquityElection, EquitySummary, ValueRange, YearlyEquity
from .normalize import NormalizedSalary


def vesting_schedule(
    initial_grant: float,
    vesting_years: int,
    refresher: Optional[ValueRange] = None,
    years: Optional[int] = None,
) -> List[YearlyEquity]:
    """Year-by-year vesting, year 0 (joining) through `years`.

    Args:
        initial_grant: Initial grant value
        vesting_years: Years over which each grant vests
        refresher: Annual refresher range, or None for no refreshers
        years: Horizon; defaults to vesting_years

    Returns:
        List of YearlyEquity, one per year including year 0
    """
    if years is None:
        years = vesting_years
    annual_fraction = 1.0 / vesting_years

    schedule = [
        YearlyEquity(
            year=0,
            initial_vested=0.0,
            refresher_vested=ValueRange.point(0.0),
            total_vested=ValueRange.point(0.0),
        )
    ]
    for year in range(1, years + 1):
        initial = initial_grant * annual_fraction if year <= vesting_years else 0.0

        # Grants made at the end of years 1..year-1 that are still vesting.
        active_grants = min(year - 1, vesting_years) if refresher else 0
        low = refresher.low * annual_fraction * active_grants if refresher else 0.0
        high = refresher.high * annual_fraction * active_grants if refresher else 0.0

        schedule.append(
            YearlyEquity(
                year=year,
                initial_vested=round(initial, 2),
                refresher_vested=ValueRange(low=round(low, 2), high=round(high, 2)),
                total_vested=ValueRange(
                    low=round(initial + low, 2), high=round(initial + high, 2)
                ),
            )
        )
    return schedule


def equity_summary(election: EquityElection, salary: NormalizedSalary) -> EquitySummary:
    """Build the informational equity summary for a package, in MXN.

    Raises:
        InvalidInput: Negative grant or refresher values, or a refresher
            range with min above max
    """
    if election.initial_grant < 0:
        raise InvalidInput(
            f"Initial grant cannot be negative, got {election.initial_grant}",
            field="equity.initial_grant",
        )

    refresher_mxn = None
    if election.refresher is not None:
        low, high = election.refresher.min, election.refresher.max
        if low < 0 or high < 0:
            raise InvalidInput(
                f"Refresher range cannot be negative, got {low}-{high}",
                field="equity.refresher",
            )
        if low > high:
            raise InvalidInput(
                f"Refresher min ({low}) is above max ({high})",
                field="equity.refresher",
            )
        refresher_mxn = ValueRange(
            low=round(salary.to_mxn(low, election.currency), 2),
            high=round(salary.to_mxn(high, election.currency), 2),
        )

    grant_mxn = salary.to_mxn(election.initial_grant, election.currency)
    schedule = vesting_schedule(grant_mxn, election.vesting_years, refresher_mxn)

    return EquitySummary(
        initial_grant_mxn=round(grant_mxn, 2),
        vesting_years=election.vesting_years,
        annual_initial_vest_mxn=round(grant_mxn / election.vesting_years, 2),
        refresher_range_mxn=refresher_mxn,
        schedule=schedule,
        total_over_horizon=ValueRange(
            low=round(sum(y.total_vested.low for y in schedule), 2),
            high=round(sum(y.total_vested.high for y in schedule), 2),
        ),
    )
