"""Package calculator.

Runs one package through a fixed sequence of stages:

    NORMALIZING -> COMPUTING_TAXES -> APPLYING_BENEFITS -> AGGREGATING -> DONE

Each stage consumes only the output of the previous one. Any error moves
the package to FAILED: it is logged with the stage it happened in and
re-raised, so no partial breakdown ever escapes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..schemas import (
    PAYROLL,
    EmployerContributions,
    EquitySummary,
    PackageInput,
    SalaryCalculation,
)
from ..taxes import (
    FiscalYearConfig,
    SocialSecurityContribution,
    applied_subsidy,
    contribution,
    simplified_rate,
    withhold,
)
from .benefits import AppliedBenefits, apply_benefits
from .equity import equity_summary
from .normalize import NormalizedSalary, normalize

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    NORMALIZING = "normalizing"
    COMPUTING_TAXES = "computing_taxes"
    APPLYING_BENEFITS = "applying_benefits"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class MonthlyTaxes:
    """Output of the tax stage for the base salary."""
    isr: float
    subsidy: float
    social_security: SocialSecurityContribution
    flat_rate: Optional[float] = None

    def net(self, monthly_gross: float) -> float:
        return monthly_gross - self.isr + self.subsidy - self.social_security.worker_monthly


def compute_taxes(regime: str, salary: NormalizedSalary, config: FiscalYearConfig) -> MonthlyTaxes:
    """ISR, subsidy and IMSS on the monthly salary.

    Raises:
        UnsupportedCombination: Simplified-regime income above its ceiling
    """
    gross = salary.monthly_gross_mxn

    if regime != PAYROLL:
        rate = simplified_rate(gross, config.simplified_brackets)
        return MonthlyTaxes(
            isr=round(gross * rate, 2),
            subsidy=0.0,
            social_security=SocialSecurityContribution.none(),
            flat_rate=rate,
        )

    isr = withhold(gross, config.isr_brackets)
    return MonthlyTaxes(
        isr=isr,
        subsidy=applied_subsidy(gross, isr, config.subsidy_table, regime),
        social_security=contribution(gross, config, regime),
    )


def aggregate(
    package: PackageInput,
    salary: NormalizedSalary,
    taxes: MonthlyTaxes,
    applied: AppliedBenefits,
    equity: Optional[EquitySummary] = None,
) -> SalaryCalculation:
    """Assemble the SalaryCalculation from the stage outputs.

    Annual totals add every benefit at its cadence, then take out the
    savings-fund contributions withheld during the year (the payout already
    returns them) and the income lost to unpaid rest days. Unpaid days are
    not taxed, so net loses only the net share of that income.
    """
    gross = salary.monthly_gross_mxn
    net = taxes.net(gross)
    withheld_annual = applied.savings_fund_withheld_monthly * 12
    unpaid_net_loss = applied.unpaid_rest_day_loss * net / gross

    annual_base_gross = gross * 12
    annual_total_gross = (
        annual_base_gross
        + sum(b.annual_gross for b in applied.benefits)
        - withheld_annual
        - applied.unpaid_rest_day_loss
    )
    annual_net = (
        net * 12
        + sum(b.annual_net for b in applied.benefits)
        - withheld_annual
        - unpaid_net_loss
    )

    ss = taxes.social_security
    employer = EmployerContributions(
        imss_monthly=ss.employer_monthly,
        imss_annual=round(ss.employer_monthly * 12, 2),
        infonavit_monthly=ss.infonavit_employer_monthly,
        infonavit_annual=round(ss.infonavit_employer_monthly * 12, 2),
        has_infonavit_credit=package.has_infonavit_credit,
    )

    return SalaryCalculation(
        regime=package.regime,
        monthly_gross=gross,
        net_monthly=net,
        isr_monthly=taxes.isr,
        subsidy_monthly=taxes.subsidy,
        imss_worker_monthly=ss.worker_monthly,
        contribution_base_daily=salary.contribution_base_daily,
        flat_tax_rate=taxes.flat_rate,
        annual_base_gross=annual_base_gross,
        annual_total_gross=annual_total_gross,
        annual_net=annual_net,
        monthly_adjusted=annual_net / 12,
        benefits=applied.benefits,
        savings_fund_withheld_monthly=applied.savings_fund_withheld_monthly,
        unpaid_rest_days=package.unpaid_rest_days,
        unpaid_rest_day_loss=applied.unpaid_rest_day_loss,
        employer=employer,
        equity=equity,
    )


def calculate_package(package: PackageInput, config: FiscalYearConfig) -> SalaryCalculation:
    """Compute the full breakdown for one package.

    Args:
        package: Package to compute
        config: Fiscal-year snapshot; read only

    Returns:
        Coherent SalaryCalculation

    Raises:
        InvalidInput, UnsupportedCombination: From the stage that rejected
            the package
    """
    label = package.name or "<unnamed>"
    stage = Stage.NORMALIZING
    try:
        salary = normalize(package, config)

        stage = Stage.COMPUTING_TAXES
        taxes = compute_taxes(package.regime, salary, config)

        stage = Stage.APPLYING_BENEFITS
        applied = apply_benefits(package, salary, config, taxes.flat_rate)
        equity = equity_summary(package.equity, salary) if package.equity else None

        stage = Stage.AGGREGATING
        result = aggregate(package, salary, taxes, applied, equity)
    except Exception as e:
        logger.error(f"Package {label}: {Stage.FAILED.value} while {stage.value}: {e}")
        raise

    logger.debug(
        f"Package {label}: {Stage.DONE.value} gross={result.monthly_gross:.2f} "
        f"net={result.net_monthly:.2f} adjusted={result.monthly_adjusted:.2f}"
    )
    return result
