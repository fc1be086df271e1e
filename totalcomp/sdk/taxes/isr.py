"""ISR (income tax) calculations.

Implements the monthly progressive withholding table (LISR art. 96), the
art. 174 regulation method for annual payments such as the year-end bonus,
and the flat-rate bands of the simplified regime (RESICO).
"""

from typing import Sequence

from ..errors import ConfigError, UnsupportedCombination
from .schemas import ISRBracket, SimplifiedBracket

# Published SAT tables round fixed quotas to centavos, so the quota of a
# bracket can sit a fraction of a centavo below the tax reached by the
# previous bracket at the same income.
BOUNDARY_TOLERANCE = 0.01

# Days used by art. 174 to spread an annual payment over the year.
DAYS_PER_YEAR = 365


def validate_brackets(brackets: Sequence[ISRBracket]) -> None:
    """Check that an ISR table is ordered, covers zero and never decreases.

    Raises:
        ConfigError: On the first violation found
    """
    if not brackets:
        raise ConfigError("ISR bracket table is empty")

    first = brackets[0]
    if not 0 <= first.lower_bound <= 0.01:
        raise ConfigError(
            f"ISR table must start at zero, first lower bound is {first.lower_bound}"
        )

    for i, bracket in enumerate(brackets):
        if not 0 <= bracket.marginal_rate <= 1:
            raise ConfigError(f"ISR bracket {i}: rate {bracket.marginal_rate} outside [0, 1]")
        if bracket.fixed_quota < 0:
            raise ConfigError(f"ISR bracket {i}: negative fixed quota {bracket.fixed_quota}")

    for i, (prev, curr) in enumerate(zip(brackets, brackets[1:]), start=1):
        if curr.lower_bound <= prev.lower_bound:
            raise ConfigError(
                f"ISR bracket {i}: lower bound {curr.lower_bound} not above "
                f"previous {prev.lower_bound}"
            )
        if curr.marginal_rate < prev.marginal_rate:
            raise ConfigError(
                f"ISR bracket {i}: rate {curr.marginal_rate} below previous "
                f"{prev.marginal_rate} (table is not progressive)"
            )
        reached = prev.fixed_quota + prev.marginal_rate * (curr.lower_bound - prev.lower_bound)
        if curr.fixed_quota < reached - BOUNDARY_TOLERANCE:
            raise ConfigError(
                f"ISR bracket {i}: fixed quota {curr.fixed_quota:.2f} drops below "
                f"{reached:.2f} reached by the previous bracket (non-monotonic table)"
            )


def validate_simplified_brackets(brackets: Sequence[SimplifiedBracket]) -> None:
    """Check the simplified-regime bands are ascending with sane rates."""
    if not brackets:
        raise ConfigError("Simplified regime bracket table is empty")

    for i, bracket in enumerate(brackets):
        if not 0 <= bracket.rate <= 1:
            raise ConfigError(f"Simplified bracket {i}: rate {bracket.rate} outside [0, 1]")
        if i and bracket.upper_bound <= brackets[i - 1].upper_bound:
            raise ConfigError(
                f"Simplified bracket {i}: upper bound {bracket.upper_bound} not ascending"
            )


def withhold(taxable_base: float, brackets: Sequence[ISRBracket]) -> float:
    """Calculate monthly ISR for a taxable base.

    Uses the bracket with the greatest lower bound not above the base:
    fixed quota plus marginal rate on the excess over the lower bound.

    Within BOUNDARY_TOLERANCE of a bracket start the lower brackets' lines
    can sit a fraction of a centavo above the new bracket's quota; the tax
    is the highest line reached so far, which keeps withholding
    non-decreasing in the base.

    Args:
        taxable_base: Monthly taxable income in MXN
        brackets: Ascending ISR table

    Returns:
        Tax rounded to centavos (0 for a zero or negative base)
    """
    if taxable_base <= 0:
        return 0.0

    tax = 0.0
    for bracket in brackets:
        if bracket.lower_bound > taxable_base:
            break
        line = bracket.fixed_quota + bracket.marginal_rate * (taxable_base - bracket.lower_bound)
        tax = max(tax, line)

    return round(tax, 2)


def marginal_tax(base_income: float, extra: float, brackets: Sequence[ISRBracket]) -> float:
    """Tax attributable to extra income stacked on top of base_income."""
    if extra <= 0:
        return 0.0
    return round(withhold(base_income + extra, brackets) - withhold(base_income, brackets), 2)


def annual_bonus_tax(
    monthly_salary: float,
    taxable_amount: float,
    brackets: Sequence[ISRBracket],
    days_per_month: float = 30.4,
) -> float:
    """Calculate ISR on an annual payment using the art. 174 method.

    The payment is converted to a monthly share (amount / 365 * days per
    month), the tax that share adds on top of the regular salary gives an
    effective rate, and that rate is applied to the whole payment. This keeps
    a once-a-year payment from being taxed as if it were a single month of
    income.

    Args:
        monthly_salary: Regular monthly gross salary
        taxable_amount: Taxable (non-exempt) part of the annual payment
        brackets: Monthly ISR table
        days_per_month: Day count used for the monthly share

    Returns:
        Tax on the payment, rounded to centavos
    """
    if taxable_amount <= 0:
        return 0.0

    monthly_share = taxable_amount / DAYS_PER_YEAR * days_per_month
    tax_on_share = withhold(monthly_salary + monthly_share, brackets) - withhold(monthly_salary, brackets)
    effective_rate = tax_on_share / monthly_share

    return round(min(taxable_amount, max(0.0, taxable_amount * effective_rate)), 2)


def simplified_rate(monthly_income: float, brackets: Sequence[SimplifiedBracket]) -> float:
    """Return the flat rate for a monthly income under the simplified regime.

    Raises:
        UnsupportedCombination: If the income is above the regime's ceiling
    """
    for bracket in brackets:
        if monthly_income <= bracket.upper_bound:
            return bracket.rate

    raise UnsupportedCombination(
        f"Monthly income {monthly_income:,.2f} exceeds the simplified regime ceiling "
        f"of {brackets[-1].upper_bound:,.2f}",
        field="regime",
    )
