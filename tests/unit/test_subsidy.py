"""Unit tests for the employment subsidy."""

import pytest

from totalcomp.sdk import ConfigError
from totalcomp.sdk.taxes import SubsidyRow, applied_subsidy, subsidy_credit, validate_subsidy_table


def row(lower, upper, credit):
    return SubsidyRow(lower_bound=lower, upper_bound=upper, credit_amount=credit)


class TestSubsidyCredit:

    def test_inside_row(self, fy2025):
        assert subsidy_credit(10000, fy2025.subsidy_table) == 474.65

    def test_upper_bound_exclusive(self, fy2025):
        assert subsidy_credit(10171.01, fy2025.subsidy_table) == 0.0

    def test_above_table(self, fy2025):
        assert subsidy_credit(20000, fy2025.subsidy_table) == 0.0

    def test_non_positive_base(self, fy2025):
        assert subsidy_credit(0, fy2025.subsidy_table) == 0.0

    def test_multi_row_lookup(self):
        table = [row(0.01, 1000, 300), row(1000, 2000, 200)]
        assert subsidy_credit(999.99, table) == 300
        assert subsidy_credit(1000, table) == 200


class TestAppliedSubsidy:

    def test_capped_at_isr(self, fy2025):
        # ISR at 700 is 13.44, well under the 474.65 credit
        assert applied_subsidy(700, 13.44, fy2025.subsidy_table, "payroll") == 13.44

    def test_full_credit(self, fy2025):
        assert applied_subsidy(10000, 770.90, fy2025.subsidy_table, "payroll") == 474.65

    def test_simplified_regime_gets_nothing(self, fy2025):
        assert applied_subsidy(10000, 100, fy2025.subsidy_table, "simplified-flat-tax") == 0.0

    def test_zero_isr(self, fy2025):
        assert applied_subsidy(10000, 0, fy2025.subsidy_table, "payroll") == 0.0


class TestValidateSubsidyTable:

    def test_empty_allowed(self):
        validate_subsidy_table([])

    def test_overlapping_rows(self):
        with pytest.raises(ConfigError, match="overlaps"):
            validate_subsidy_table([row(0, 1000, 300), row(900, 2000, 200)])

    def test_inverted_interval(self):
        with pytest.raises(ConfigError, match="invalid interval"):
            validate_subsidy_table([row(1000, 500, 100)])

    def test_negative_credit(self):
        with pytest.raises(ConfigError, match="negative credit"):
            validate_subsidy_table([row(0, 1000, -1)])
