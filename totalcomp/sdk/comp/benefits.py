"""Benefit calculators.

One function per benefit kind, each returning a BenefitBreakdown whose net
is gross minus ISR. Taxable remainders go through the ISR engine at the
employee's marginal context: monthly benefits with marginal_tax on top of
the monthly salary, annual payments with the art. 174 method.

apply_benefits() runs the calculators for a package after checking the
regime coupling: payroll-only benefits under the simplified regime and
unpaid rest days under payroll are rejected, never dropped.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ..errors import InvalidInput, UnsupportedCombination
from ..schemas import (
    PAYROLL,
    PAYROLL_ONLY_KINDS,
    BenefitBreakdown,
    GroceryVouchers,
    OtherBenefit,
    PackageInput,
    SavingsFund,
    VacationPremium,
    YearEndBonus,
)
from ..taxes import FiscalYearConfig, annual_bonus_tax, marginal_tax
from .normalize import NormalizedSalary

logger = logging.getLogger(__name__)

MAX_UNPAID_REST_DAYS = 365

BENEFIT_NAMES = {
    "year_end_bonus": "Aguinaldo",
    "vacation_premium": "Prima vacacional",
    "grocery_vouchers": "Vales de despensa",
    "savings_fund": "Fondo de ahorro",
}


def _breakdown(
    kind: str,
    name: str,
    cadence: str,
    gross: float,
    exempt: float = 0.0,
    isr: float = 0.0,
    tax_free: bool = False,
) -> BenefitBreakdown:
    gross = round(gross, 2)
    isr = round(isr, 2)
    return BenefitBreakdown(
        kind=kind,
        name=name,
        cadence=cadence,
        gross=gross,
        exempt=round(min(exempt, gross), 2),
        isr=isr,
        net=gross - isr,
        tax_free=tax_free,
    )


def _zero(kind: str, cadence: str) -> BenefitBreakdown:
    return _breakdown(kind, BENEFIT_NAMES[kind], cadence, 0.0)


def _daily_salary(salary: NormalizedSalary, config: FiscalYearConfig) -> float:
    return salary.monthly_gross_mxn / config.days_per_month


def year_end_bonus(
    benefit: YearEndBonus, salary: NormalizedSalary, config: FiscalYearConfig
) -> BenefitBreakdown:
    """Aguinaldo: daily salary x days, exempt up to 30 UMA daily."""
    if not benefit.enabled:
        return _zero(benefit.kind, "annual")

    rules = config.benefits
    days = rules.year_end_bonus_min_days if benefit.days is None else benefit.days
    if days < rules.year_end_bonus_min_days:
        raise InvalidInput(
            f"Year-end bonus must be at least {rules.year_end_bonus_min_days} days, got {days}",
            field="benefits.year_end_bonus.days",
        )

    gross = _daily_salary(salary, config) * days
    exempt = min(gross, rules.year_end_bonus_exempt_uma * config.uma_daily)
    isr = annual_bonus_tax(
        salary.monthly_gross_mxn, gross - exempt, config.isr_brackets, config.days_per_month
    )
    return _breakdown(benefit.kind, BENEFIT_NAMES[benefit.kind], "annual", gross, exempt, isr)


def vacation_premium(
    benefit: VacationPremium, salary: NormalizedSalary, config: FiscalYearConfig
) -> BenefitBreakdown:
    """Prima vacacional: daily salary x days x percent, exempt up to 15 UMA daily."""
    if not benefit.enabled:
        return _zero(benefit.kind, "annual")

    rules = config.benefits
    days = rules.vacation_min_days if benefit.vacation_days is None else benefit.vacation_days
    percent = (
        rules.vacation_premium_min_percent if benefit.percent is None else benefit.percent
    )
    if days < rules.vacation_min_days:
        raise InvalidInput(
            f"Vacation days must be at least {rules.vacation_min_days}, got {days}",
            field="benefits.vacation_premium.vacation_days",
        )
    if percent < rules.vacation_premium_min_percent:
        raise InvalidInput(
            f"Vacation premium must be at least {rules.vacation_premium_min_percent}%, "
            f"got {percent}%",
            field="benefits.vacation_premium.percent",
        )

    gross = _daily_salary(salary, config) * days * percent / 100
    exempt = min(gross, rules.vacation_premium_exempt_uma * config.uma_daily)
    isr = annual_bonus_tax(
        salary.monthly_gross_mxn, gross - exempt, config.isr_brackets, config.days_per_month
    )
    return _breakdown(benefit.kind, BENEFIT_NAMES[benefit.kind], "annual", gross, exempt, isr)


def grocery_vouchers_cap(config: FiscalYearConfig) -> float:
    """Monthly exempt cap for grocery vouchers."""
    rules = config.benefits
    if rules.grocery_vouchers_cap_basis == "minimum_wage_monthly":
        basis = config.minimum_wage_daily * config.days_per_month
    else:
        basis = config.uma_monthly
    return rules.grocery_vouchers_cap_multiple * basis


def grocery_vouchers(
    benefit: GroceryVouchers, salary: NormalizedSalary, config: FiscalYearConfig
) -> BenefitBreakdown:
    """Vales de despensa: exempt up to the cap, excess taxed on top of salary."""
    if not benefit.enabled:
        return _zero(benefit.kind, "monthly")

    gross = benefit.monthly_amount
    exempt = min(gross, grocery_vouchers_cap(config))
    isr = marginal_tax(salary.monthly_gross_mxn, gross - exempt, config.isr_brackets)
    return _breakdown(benefit.kind, BENEFIT_NAMES[benefit.kind], "monthly", gross, exempt, isr)


def savings_fund_contribution(
    benefit: SavingsFund, salary: NormalizedSalary, config: FiscalYearConfig
) -> float:
    """Monthly employee contribution withheld from pay (0 when disabled).

    Capped at the statutory percentage of salary and at the UMA multiple
    (savings_fund_exempt_uma_annual x UMA annual, spread over 12 months).
    """
    if not benefit.enabled:
        return 0.0

    max_percent = config.benefits.savings_fund_max_percent
    percent = max_percent if benefit.percent is None else benefit.percent
    if percent > max_percent:
        logger.debug(f"Savings fund {percent}% clamped to {max_percent}%")
        percent = max_percent

    contribution = round(salary.monthly_gross_mxn * percent / 100, 2)
    cap = savings_fund_monthly_cap(config)
    if contribution > cap:
        logger.debug(f"Savings fund contribution {contribution:.2f} capped at {cap:.2f}")
        contribution = cap
    return contribution


def savings_fund_monthly_cap(config: FiscalYearConfig) -> float:
    """Monthly contribution ceiling, truncated to centavos so 12 months stay within it."""
    annual = config.benefits.savings_fund_exempt_uma_annual * config.uma_annual
    return math.floor(annual / 12 * 100) / 100


def savings_fund(
    benefit: SavingsFund, salary: NormalizedSalary, config: FiscalYearConfig
) -> BenefitBreakdown:
    """Fondo de ahorro: annual payout of both halves of the fund.

    The employee half returns pay already withheld and is never taxed. The
    employer match is exempt up to the configured UMA multiple; the excess
    is taxed as an annual payment.
    """
    if not benefit.enabled:
        return _zero(benefit.kind, "annual")

    monthly = savings_fund_contribution(benefit, salary, config)
    employee_annual = monthly * 12
    employer_annual = monthly * 12
    employer_exempt = min(
        employer_annual, config.benefits.savings_fund_exempt_uma_annual * config.uma_annual
    )
    isr = annual_bonus_tax(
        salary.monthly_gross_mxn,
        employer_annual - employer_exempt,
        config.isr_brackets,
        config.days_per_month,
    )
    return _breakdown(
        benefit.kind,
        BENEFIT_NAMES[benefit.kind],
        "annual",
        employee_annual + employer_annual,
        employee_annual + employer_exempt,
        isr,
    )


def custom_benefit(
    benefit: OtherBenefit,
    salary: NormalizedSalary,
    config: FiscalYearConfig,
    regime: str = PAYROLL,
    flat_rate: Optional[float] = None,
) -> BenefitBreakdown:
    """Otras prestaciones: absolute or percentage amount at its own cadence.

    Raises:
        InvalidInput: Negative amount
    """
    if benefit.amount < 0:
        raise InvalidInput(
            f"Benefit '{benefit.name}' has a negative amount {benefit.amount}",
            field=f"other_benefits.{benefit.name}.amount",
        )

    monthly = salary.monthly_gross_mxn
    if benefit.is_percentage:
        base = monthly if benefit.cadence == "monthly" else monthly * 12
        gross = base * benefit.amount / 100
    else:
        gross = salary.to_mxn(benefit.amount, benefit.currency)

    if benefit.tax_free:
        return _breakdown("custom", benefit.name, benefit.cadence, gross, gross, 0.0, True)

    if regime != PAYROLL:
        isr = gross * (flat_rate or 0.0)
    elif benefit.cadence == "monthly":
        isr = marginal_tax(monthly, round(gross, 2), config.isr_brackets)
    else:
        isr = annual_bonus_tax(monthly, round(gross, 2), config.isr_brackets, config.days_per_month)

    return _breakdown("custom", benefit.name, benefit.cadence, gross, 0.0, isr)


def unpaid_rest_day_loss(
    days: int, salary: NormalizedSalary, config: FiscalYearConfig, regime: str
) -> float:
    """Annual income lost to unpaid rest days (simplified regime only).

    Never more than a year of base salary.

    Raises:
        InvalidInput: Days outside 0..365
        UnsupportedCombination: Unpaid days under the payroll regime
    """
    if not 0 <= days <= MAX_UNPAID_REST_DAYS:
        raise InvalidInput(
            f"unpaid_rest_days must be between 0 and {MAX_UNPAID_REST_DAYS}, got {days}",
            field="unpaid_rest_days",
        )
    if not days:
        return 0.0
    if regime == PAYROLL:
        raise UnsupportedCombination(
            "Unpaid rest days apply only to the simplified regime",
            field="unpaid_rest_days",
        )
    # days_per_month x 12 falls short of 365, so a full year would exceed a year of pay
    return min(round(_daily_salary(salary, config) * days, 2), salary.monthly_gross_mxn * 12)


STATUTORY_CALCULATORS: Dict[str, Callable] = {
    "year_end_bonus": year_end_bonus,
    "vacation_premium": vacation_premium,
    "grocery_vouchers": grocery_vouchers,
    "savings_fund": savings_fund,
}


@dataclass
class AppliedBenefits:
    """Output of the benefits stage."""
    benefits: List[BenefitBreakdown] = field(default_factory=list)
    savings_fund_withheld_monthly: float = 0.0
    unpaid_rest_day_loss: float = 0.0


def check_benefit_kinds(package: PackageInput) -> None:
    """Reject duplicate kinds and payroll-only benefits outside payroll."""
    seen = set()
    for benefit in package.benefits:
        if benefit.kind in seen:
            raise InvalidInput(
                f"Benefit '{benefit.kind}' given more than once",
                field=f"benefits.{benefit.kind}",
            )
        seen.add(benefit.kind)
        if benefit.enabled and package.regime != PAYROLL and benefit.kind in PAYROLL_ONLY_KINDS:
            raise UnsupportedCombination(
                f"Benefit '{benefit.kind}' is only available under the payroll regime",
                field=f"benefits.{benefit.kind}",
            )


def apply_benefits(
    package: PackageInput,
    salary: NormalizedSalary,
    config: FiscalYearConfig,
    flat_rate: Optional[float] = None,
) -> AppliedBenefits:
    """Compute every enabled benefit of a package.

    Statutory benefits come first in a fixed order, then custom benefits in
    input order. Disabled benefits are left out.
    """
    check_benefit_kinds(package)
    by_kind = {b.kind: b for b in package.benefits if b.enabled}

    result = AppliedBenefits()
    for kind, calculator in STATUTORY_CALCULATORS.items():
        benefit = by_kind.get(kind)
        if benefit is None:
            continue
        result.benefits.append(calculator(benefit, salary, config))
        if kind == "savings_fund":
            result.savings_fund_withheld_monthly = savings_fund_contribution(
                benefit, salary, config
            )

    for other in package.other_benefits:
        result.benefits.append(
            custom_benefit(other, salary, config, package.regime, flat_rate)
        )

    result.unpaid_rest_day_loss = unpaid_rest_day_loss(
        package.unpaid_rest_days, salary, config, package.regime
    )

    logger.debug(
        f"Benefits: {len(result.benefits)} computed, "
        f"savings_fund_withheld={result.savings_fund_withheld_monthly:.2f}, "
        f"unpaid_loss={result.unpaid_rest_day_loss:.2f}"
    )
    return result
