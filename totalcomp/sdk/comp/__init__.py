"""comp - Package calculation and comparison.

Scope:
- Normalize salaries to monthly MXN (normalize.py)
- Statutory and custom benefits, unpaid rest days (benefits.py)
- Equity vesting schedule, reported as ranges (equity.py)
- Package calculator stages and aggregation (calculator.py)
- Multi-package comparison and best-package selection (compare.py)

Constraints:
- Pure functions of a package and an immutable FiscalYearConfig snapshot
- Uses taxes/ for ISR, subsidy and IMSS
- Errors abort the package; comparisons are all-or-nothing

Usage:
    from totalcomp.sdk.comp import compare, calculate_package

    calc = calculate_package(package, config)
    result = compare([offer_a, offer_b], config, max_workers=4)
    print(result.best.package_name)
"""

from .normalize import NormalizedSalary, normalize, resolve_exchange_rate

from .benefits import (
    AppliedBenefits,
    apply_benefits,
    year_end_bonus,
    vacation_premium,
    grocery_vouchers,
    grocery_vouchers_cap,
    savings_fund,
    savings_fund_contribution,
    savings_fund_monthly_cap,
    custom_benefit,
    unpaid_rest_day_loss,
)

from .equity import equity_summary, vesting_schedule

from .calculator import Stage, MonthlyTaxes, compute_taxes, aggregate, calculate_package

from .compare import compare, compare_request, parse_request, select_best, package_label

__all__ = [
    # Normalization
    "NormalizedSalary",
    "normalize",
    "resolve_exchange_rate",
    # Benefits
    "AppliedBenefits",
    "apply_benefits",
    "year_end_bonus",
    "vacation_premium",
    "grocery_vouchers",
    "grocery_vouchers_cap",
    "savings_fund",
    "savings_fund_contribution",
    "savings_fund_monthly_cap",
    "custom_benefit",
    "unpaid_rest_day_loss",
    # Equity
    "equity_summary",
    "vesting_schedule",
    # Calculator
    "Stage",
    "MonthlyTaxes",
    "compute_taxes",
    "aggregate",
    "calculate_package",
    # Comparison
    "compare",
    "compare_request",
    "parse_request",
    "select_best",
    "package_label",
]
