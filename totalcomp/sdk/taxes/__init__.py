"""taxes - Fiscal-year tables and statutory tax calculations.

Scope:
- Fiscal-year schema (UMA, minimum wage, exchange rate, tables)
- ISR monthly withholding, art. 174 annual-payment method, RESICO flat rates
- Employment subsidy credit
- IMSS worker/employer contributions and Infonavit

Constraints:
- Pure calculation - receives amounts and tables, returns results
- No package-level logic (benefits, aggregation live in comp/)
- Tables are loaded by sdk.config from fiscal_years/{year}.yaml

Usage:
    from totalcomp.sdk.taxes import withhold, contribution

    isr = withhold(20000, config.isr_brackets)
    imss = contribution(20000, config)
"""

from .schemas import (
    FiscalYearConfig,
    FiscalYearMeta,
    ISRBracket,
    SubsidyRow,
    SimplifiedBracket,
    IMSSConcept,
    CesantiaBracket,
    SocialSecurityRules,
    BenefitRules,
)

from .isr import (
    withhold,
    marginal_tax,
    annual_bonus_tax,
    simplified_rate,
    validate_brackets,
    validate_simplified_brackets,
)

from .subsidy import subsidy_credit, applied_subsidy, validate_subsidy_table

from .social_security import (
    contribution,
    contribution_base_daily,
    SocialSecurityContribution,
)

__all__ = [
    # Schemas
    "FiscalYearConfig",
    "FiscalYearMeta",
    "ISRBracket",
    "SubsidyRow",
    "SimplifiedBracket",
    "IMSSConcept",
    "CesantiaBracket",
    "SocialSecurityRules",
    "BenefitRules",
    # ISR
    "withhold",
    "marginal_tax",
    "annual_bonus_tax",
    "simplified_rate",
    "validate_brackets",
    "validate_simplified_brackets",
    # Subsidy
    "subsidy_credit",
    "applied_subsidy",
    "validate_subsidy_table",
    # Social security
    "contribution",
    "contribution_base_daily",
    "SocialSecurityContribution",
]
