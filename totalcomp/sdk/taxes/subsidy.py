"""Employment subsidy (subsidio para el empleo).

A credit against ISR for lower-income payroll workers. The credit comes
from a table of [lower_bound, upper_bound) rows and can reduce the tax to
zero but never below it.
"""

from typing import Sequence

from ..errors import ConfigError
from .schemas import SubsidyRow

PAYROLL_REGIME = "payroll"


def validate_subsidy_table(table: Sequence[SubsidyRow]) -> None:
    """Check rows are well-formed, ascending and non-overlapping.

    An empty table is allowed (no subsidy in force).
    """
    for i, row in enumerate(table):
        if row.lower_bound < 0 or row.upper_bound <= row.lower_bound:
            raise ConfigError(
                f"Subsidy row {i}: invalid interval [{row.lower_bound}, {row.upper_bound})"
            )
        if row.credit_amount < 0:
            raise ConfigError(f"Subsidy row {i}: negative credit {row.credit_amount}")
        if i and row.lower_bound < table[i - 1].upper_bound:
            raise ConfigError(
                f"Subsidy row {i}: [{row.lower_bound}, {row.upper_bound}) overlaps "
                f"previous row ending at {table[i - 1].upper_bound}"
            )


def subsidy_credit(monthly_base: float, table: Sequence[SubsidyRow]) -> float:
    """Look up the credit for a monthly taxable base.

    Returns:
        Credit of the containing row, 0 when the base is non-positive or
        outside every row
    """
    if monthly_base <= 0:
        return 0.0

    for row in table:
        if row.lower_bound <= monthly_base < row.upper_bound:
            return row.credit_amount
    return 0.0


def applied_subsidy(
    monthly_base: float,
    isr: float,
    table: Sequence[SubsidyRow],
    regime: str,
) -> float:
    """Credit actually applied against ISR.

    Only the payroll regime qualifies. The credit is capped at the ISR it
    offsets, so net tax is floored at zero.
    """
    if regime != PAYROLL_REGIME:
        return 0.0
    return round(min(subsidy_credit(monthly_base, table), max(0.0, isr)), 2)
