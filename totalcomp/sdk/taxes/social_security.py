"""IMSS social-security contributions.

The contribution base (SBC, salario base de cotizacion) is the daily
salary integrated with the statutory benefits, capped at a multiple of the
UMA. Each insurance branch charges a worker and an employer rate on that
base. Only the worker part reduces take-home pay; employer parts (and the
Infonavit housing contribution) are reported as non-liquid compensation.
"""

import logging
from dataclasses import dataclass

from .schemas import FiscalYearConfig, IMSSConcept, SocialSecurityRules

logger = logging.getLogger(__name__)

PAYROLL_REGIME = "payroll"


@dataclass(frozen=True)
class SocialSecurityContribution:
    """Monthly IMSS/Infonavit amounts for one salary."""
    worker_monthly: float
    employer_monthly: float
    infonavit_employer_monthly: float
    contribution_base_daily: float

    @classmethod
    def none(cls) -> "SocialSecurityContribution":
        """No social security (simplified regime)."""
        return cls(0.0, 0.0, 0.0, 0.0)


def contribution_base_daily(monthly_gross: float, config: FiscalYearConfig) -> float:
    """Daily SBC: integrated daily salary capped at cap_in_uma UMAs."""
    rules = config.social_security
    daily = monthly_gross / config.days_per_month
    integrated = daily * rules.integration_factor
    cap = rules.cap_in_uma * config.uma_daily
    return round(min(integrated, cap), 2)


def _concept_base(concept: IMSSConcept, sbc: float, uma_daily: float) -> float:
    if concept.basis == "uma":
        return uma_daily
    if concept.basis == "excess":
        return max(0.0, sbc - concept.threshold_in_uma * uma_daily)
    return sbc


def _employer_rate(concept: IMSSConcept, rules: SocialSecurityRules, sbc_in_uma: float) -> float:
    if not concept.progressive_employer:
        return concept.employer_rate
    for bracket in rules.cesantia_employer_brackets:
        if sbc_in_uma <= bracket.upper_uma:
            return bracket.rate
    return rules.cesantia_employer_brackets[-1].rate


def contribution(
    monthly_gross: float,
    config: FiscalYearConfig,
    regime: str = PAYROLL_REGIME,
) -> SocialSecurityContribution:
    """Calculate monthly IMSS contributions for a gross monthly salary.

    Args:
        monthly_gross: Normalized monthly gross salary (MXN)
        config: Fiscal-year tables
        regime: Tax regime; anything other than payroll pays nothing

    Returns:
        SocialSecurityContribution with worker, employer and Infonavit amounts
    """
    if regime != PAYROLL_REGIME or monthly_gross <= 0:
        return SocialSecurityContribution.none()

    rules = config.social_security
    days = config.days_per_month
    sbc = contribution_base_daily(monthly_gross, config)
    sbc_in_uma = sbc / config.uma_daily

    worker = 0.0
    employer = 0.0
    for concept in rules.concepts:
        base = _concept_base(concept, sbc, config.uma_daily) * days
        worker += base * concept.worker_rate
        employer += base * _employer_rate(concept, rules, sbc_in_uma)

    infonavit = sbc * days * rules.infonavit_employer_rate

    logger.debug(
        f"IMSS: sbc={sbc:.2f} ({sbc_in_uma:.2f} UMA) worker={worker:.2f} "
        f"employer={employer:.2f} infonavit={infonavit:.2f}"
    )

    return SocialSecurityContribution(
        worker_monthly=round(worker, 2),
        employer_monthly=round(employer, 2),
        infonavit_employer_monthly=round(infonavit, 2),
        contribution_base_daily=sbc,
    )
