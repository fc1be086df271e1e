"""Salary normalization.

Every package is reduced to a monthly gross in MXN before any tax is
computed, so packages quoted per hour, per fortnight or in USD compare on
the same footing.
"""

from dataclasses import dataclass

from ..errors import InvalidInput
from ..schemas import PAYROLL, PackageInput
from ..taxes import FiscalYearConfig, contribution_base_daily

WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12
HOURS_PER_WEEK_MAX = 168


@dataclass(frozen=True)
class NormalizedSalary:
    """Monthly salary in MXN plus the values derived with it."""
    monthly_gross_mxn: float
    contribution_base_daily: float
    exchange_rate: float

    def to_mxn(self, amount: float, currency: str) -> float:
        """Convert a package amount at the package's resolved rate."""
        return amount * self.exchange_rate if currency == "USD" else amount


def resolve_exchange_rate(package: PackageInput, config: FiscalYearConfig) -> float:
    """USD/MXN rate for a package: its override, else the fiscal-year default."""
    if package.exchange_rate is None:
        return config.usd_mxn_rate
    if package.exchange_rate <= 0:
        raise InvalidInput(
            f"Exchange rate must be positive, got {package.exchange_rate}",
            field="exchange_rate",
        )
    return package.exchange_rate


def monthly_amount(package: PackageInput, config: FiscalYearConfig) -> float:
    """Convert the gross salary figure to a monthly amount in its own currency."""
    salary = package.gross_salary
    frequency = package.payment_frequency

    if frequency == "hourly":
        hours = package.hours_per_week
        if hours is None or hours <= 0:
            raise InvalidInput(
                "hours_per_week is required and must be positive for hourly pay",
                field="hours_per_week",
            )
        return salary * hours * WEEKS_PER_YEAR / MONTHS_PER_YEAR
    if frequency == "daily":
        return salary * config.days_per_month
    if frequency == "weekly":
        return salary * WEEKS_PER_YEAR / MONTHS_PER_YEAR
    if frequency == "biweekly":
        return salary * 24 / MONTHS_PER_YEAR
    return salary


def normalize(package: PackageInput, config: FiscalYearConfig) -> NormalizedSalary:
    """Normalize a package's salary to monthly MXN.

    Args:
        package: Package as submitted
        config: Fiscal-year snapshot for the computation

    Returns:
        NormalizedSalary with the monthly gross, the capped daily
        contribution base (0 outside payroll) and the exchange rate used

    Raises:
        InvalidInput: Non-positive salary, missing or impossible weekly
            hours, or a non-positive exchange rate override
    """
    if package.gross_salary <= 0:
        raise InvalidInput(
            f"Gross salary must be positive, got {package.gross_salary}",
            field="gross_salary",
        )
    if package.hours_per_week is not None and package.hours_per_week > HOURS_PER_WEEK_MAX:
        raise InvalidInput(
            f"hours_per_week cannot exceed {HOURS_PER_WEEK_MAX}, got {package.hours_per_week}",
            field="hours_per_week",
        )

    rate = resolve_exchange_rate(package, config)
    monthly = monthly_amount(package, config)
    if package.currency == "USD":
        monthly *= rate

    sbc = contribution_base_daily(monthly, config) if package.regime == PAYROLL else 0.0

    return NormalizedSalary(
        monthly_gross_mxn=monthly,
        contribution_base_daily=sbc,
        exchange_rate=rate,
    )
