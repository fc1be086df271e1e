"""Unit tests for IMSS and Infonavit contributions."""

import pytest

from totalcomp.sdk import ConfigError
from totalcomp.sdk.taxes import (
    SocialSecurityContribution,
    SocialSecurityRules,
    contribution,
    contribution_base_daily,
)


class TestContributionBase:

    def test_integrated_daily_salary(self, fy2025):
        # 20000 / 30.4 * 1.0493
        assert contribution_base_daily(20000, fy2025) == 690.33

    def test_capped_at_25_uma(self, fy2025):
        assert contribution_base_daily(1_000_000, fy2025) == round(25 * 113.14, 2)


class TestContribution:

    def test_worker_contribution_at_20000(self, fy2025):
        result = contribution(20000, fy2025)

        assert result.contribution_base_daily == 690.33
        # sbc branches 2.375% plus 0.4% on the excess over 3 UMA
        assert result.worker_monthly == pytest.approx(541.09, abs=0.01)

    def test_employer_pays_more_than_worker(self, fy2025):
        result = contribution(20000, fy2025)
        assert result.employer_monthly > result.worker_monthly > 0

    def test_infonavit_five_percent_of_base(self, fy2025):
        result = contribution(20000, fy2025)
        assert result.infonavit_employer_monthly == pytest.approx(690.33 * 30.4 * 0.05, abs=0.01)

    def test_no_excess_below_three_uma(self, fy2025):
        # 8000 / 30.4 * 1.0493 = 276.13, under 3 UMA (339.42)
        result = contribution(8000, fy2025)
        sbc = result.contribution_base_daily
        assert result.worker_monthly == pytest.approx(sbc * 30.4 * 0.02375, abs=0.01)

    def test_contributions_stop_growing_at_cap(self, fy2025):
        high = contribution(500_000, fy2025)
        higher = contribution(900_000, fy2025)
        assert high == higher

    def test_simplified_regime_is_zero(self, fy2025):
        assert contribution(20000, fy2025, regime="simplified-flat-tax") == SocialSecurityContribution.none()

    def test_progressive_employer_rate_increases_with_base(self, fy2025):
        low = contribution(8000, fy2025)
        high = contribution(40000, fy2025)
        low_ratio = low.employer_monthly / (low.contribution_base_daily * 30.4)
        high_ratio = high.employer_monthly / (high.contribution_base_daily * 30.4)
        assert high_ratio != low_ratio


class TestSocialSecurityRules:

    def test_progressive_concept_needs_brackets(self):
        with pytest.raises(ConfigError, match="cesantia_employer_brackets is empty"):
            SocialSecurityRules(
                concepts=[{"name": "Cesantia", "worker_rate": 0.01125, "progressive_employer": True}]
            )

    def test_brackets_must_ascend(self):
        with pytest.raises(ConfigError, match="ascending"):
            SocialSecurityRules(
                concepts=[{"name": "Retiro", "employer_rate": 0.02}],
                cesantia_employer_brackets=[
                    {"lower_uma": 0, "upper_uma": 2, "rate": 0.03},
                    {"lower_uma": 0, "upper_uma": 1, "rate": 0.04},
                ],
            )
