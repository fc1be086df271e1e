"""Unit tests for the ISR engine.

Covers monthly withholding against the 2025 SAT table, monotonicity across
bracket boundaries, table validation, the art. 174 method for annual
payments and the simplified-regime bands.
"""

import pytest

from totalcomp.sdk import ConfigError, UnsupportedCombination
from totalcomp.sdk.taxes import (
    ISRBracket,
    SimplifiedBracket,
    annual_bonus_tax,
    marginal_tax,
    simplified_rate,
    validate_brackets,
    validate_simplified_brackets,
    withhold,
)


def bracket(lower, quota, rate):
    return ISRBracket(lower_bound=lower, fixed_quota=quota, marginal_rate=rate)


class TestWithhold:
    """Monthly withholding against the 2025 table."""

    def test_zero_and_negative_base(self, fy2025):
        assert withhold(0, fy2025.isr_brackets) == 0.0
        assert withhold(-500, fy2025.isr_brackets) == 0.0

    def test_first_bracket(self, fy2025):
        # 0.0192 * (700 - 0.01)
        assert withhold(700, fy2025.isr_brackets) == 13.44

    def test_third_bracket(self, fy2025):
        # 371.83 + 0.1088 * (10000 - 6332.06)
        assert withhold(10000, fy2025.isr_brackets) == 770.90

    def test_sixth_bracket(self, fy2025):
        # 1640.18 + 0.2136 * (20000 - 15487.72)
        assert withhold(20000, fy2025.isr_brackets) == 2604.00

    def test_exact_lower_bound_uses_fixed_quota(self, fy2025):
        assert withhold(15487.72, fy2025.isr_brackets) == 1640.18

    def test_rounded_to_centavos(self, fy2025):
        tax = withhold(12345.67, fy2025.isr_brackets)
        assert tax == round(tax, 2)


class TestMonotonicity:
    """ISR(g1) <= ISR(g2) for every g1 < g2."""

    def test_sweep(self, fy2025):
        previous = 0.0
        base = 0.0
        while base < 450000:
            tax = withhold(base, fy2025.isr_brackets)
            assert tax >= previous, f"ISR drops at {base:.2f}"
            previous = tax
            base += 37.13

    def test_around_every_boundary(self, fy2025):
        for b in fy2025.isr_brackets:
            below = withhold(b.lower_bound - 0.01, fy2025.isr_brackets)
            at = withhold(b.lower_bound, fy2025.isr_brackets)
            above = withhold(b.lower_bound + 0.01, fy2025.isr_brackets)
            assert below <= at <= above, f"Cliff at {b.lower_bound}"


class TestValidateBrackets:
    """Malformed tables are configuration errors."""

    def test_bundled_table_is_valid(self, fy2025):
        validate_brackets(fy2025.isr_brackets)

    def test_empty_table(self):
        with pytest.raises(ConfigError, match="empty"):
            validate_brackets([])

    def test_must_start_at_zero(self):
        with pytest.raises(ConfigError, match="start at zero"):
            validate_brackets([bracket(100, 0, 0.1)])

    def test_descending_lower_bounds(self):
        with pytest.raises(ConfigError, match="not above"):
            validate_brackets([bracket(0, 0, 0.1), bracket(1000, 100, 0.2), bracket(500, 150, 0.3)])

    def test_rate_out_of_range(self):
        with pytest.raises(ConfigError, match="outside"):
            validate_brackets([bracket(0, 0, 1.5)])

    def test_decreasing_rate(self):
        with pytest.raises(ConfigError, match="not progressive"):
            validate_brackets([bracket(0, 0, 0.2), bracket(1000, 200, 0.1)])

    def test_quota_cliff(self):
        # Previous bracket reaches 100 at 1000; next starts at 50
        with pytest.raises(ConfigError, match="non-monotonic"):
            validate_brackets([bracket(0, 0, 0.1), bracket(1000, 50, 0.2)])

    def test_centavo_rounding_tolerated(self):
        validate_brackets([bracket(0, 0, 0.1), bracket(1000, 99.995, 0.2)])


class TestMarginalTax:

    def test_no_extra(self, fy2025):
        assert marginal_tax(20000, 0, fy2025.isr_brackets) == 0.0

    def test_within_bracket(self, fy2025):
        assert marginal_tax(20000, 1000, fy2025.isr_brackets) == pytest.approx(213.60, abs=0.01)


class TestAnnualBonusTax:
    """Art. 174 method for once-a-year payments."""

    def test_zero_taxable(self, fy2025):
        assert annual_bonus_tax(20000, 0, fy2025.isr_brackets) == 0.0

    def test_effective_rate_within_bracket(self, fy2025):
        # The monthly share stays inside the 21.36% bracket
        tax = annual_bonus_tax(20000, 6000, fy2025.isr_brackets)
        assert tax == pytest.approx(6000 * 0.2136, abs=1.0)

    def test_lower_than_single_month_treatment(self, fy2025):
        spread = annual_bonus_tax(20000, 60000, fy2025.isr_brackets)
        lump = marginal_tax(20000, 60000, fy2025.isr_brackets)
        assert spread < lump

    def test_never_exceeds_taxable(self, fy2025):
        assert annual_bonus_tax(100, 0.01, fy2025.isr_brackets) <= 0.01


class TestSimplifiedRate:

    def test_lowest_band(self, fy2025):
        assert simplified_rate(20000, fy2025.simplified_brackets) == 0.01

    def test_band_upper_bound_inclusive(self, fy2025):
        assert simplified_rate(25000, fy2025.simplified_brackets) == 0.01
        assert simplified_rate(25000.01, fy2025.simplified_brackets) == 0.011

    def test_top_band(self, fy2025):
        assert simplified_rate(1000000, fy2025.simplified_brackets) == 0.025

    def test_above_ceiling(self, fy2025):
        with pytest.raises(UnsupportedCombination) as exc:
            simplified_rate(4000000, fy2025.simplified_brackets)
        assert exc.value.field == "regime"

    def test_validate_rejects_unordered(self):
        with pytest.raises(ConfigError, match="not ascending"):
            validate_simplified_brackets(
                [SimplifiedBracket(upper_bound=50000, rate=0.01),
                 SimplifiedBracket(upper_bound=25000, rate=0.02)]
            )
