"""Unit tests for salary normalization."""

import pytest

from totalcomp.sdk import InvalidInput, PackageInput
from totalcomp.sdk.comp import normalize


def package(**kwargs):
    kwargs.setdefault("gross_salary", 20000)
    return PackageInput(**kwargs)


class TestFrequency:

    def test_monthly_unchanged(self, fy2025):
        assert normalize(package(), fy2025).monthly_gross_mxn == 20000

    def test_hourly(self, fy2025):
        result = normalize(package(gross_salary=200, payment_frequency="hourly", hours_per_week=40), fy2025)
        assert result.monthly_gross_mxn == pytest.approx(200 * 40 * 52 / 12)

    def test_daily_uses_days_per_month(self, fy2025):
        result = normalize(package(gross_salary=1000, payment_frequency="daily"), fy2025)
        assert result.monthly_gross_mxn == pytest.approx(30400)

    def test_weekly(self, fy2025):
        result = normalize(package(gross_salary=5000, payment_frequency="weekly"), fy2025)
        assert result.monthly_gross_mxn == pytest.approx(5000 * 52 / 12)

    def test_biweekly(self, fy2025):
        result = normalize(package(gross_salary=10000, payment_frequency="biweekly"), fy2025)
        assert result.monthly_gross_mxn == pytest.approx(20000)

    def test_hours_ignored_for_non_hourly(self, fy2025):
        result = normalize(package(hours_per_week=40), fy2025)
        assert result.monthly_gross_mxn == 20000


class TestCurrency:

    def test_usd_uses_config_rate(self, fy2025):
        result = normalize(package(gross_salary=1000, currency="USD"), fy2025)
        assert result.monthly_gross_mxn == pytest.approx(1000 * fy2025.usd_mxn_rate)
        assert result.exchange_rate == fy2025.usd_mxn_rate

    def test_usd_override_rate(self, fy2025):
        result = normalize(
            package(gross_salary=5000, currency="USD", exchange_rate=18.5, regime="simplified-flat-tax"),
            fy2025,
        )
        assert result.monthly_gross_mxn == 5000 * 18.5
        assert result.exchange_rate == 18.5

    def test_mxn_ignores_rate_for_salary(self, fy2025):
        result = normalize(package(exchange_rate=18.5), fy2025)
        assert result.monthly_gross_mxn == 20000
        assert result.to_mxn(100, "USD") == 1850

    def test_non_positive_override(self, fy2025):
        with pytest.raises(InvalidInput) as exc:
            normalize(package(currency="USD", exchange_rate=0), fy2025)
        assert exc.value.field == "exchange_rate"


class TestContributionBase:

    def test_payroll_gets_capped_base(self, fy2025):
        assert normalize(package(), fy2025).contribution_base_daily == 690.33

    def test_simplified_has_no_base(self, fy2025):
        result = normalize(package(regime="simplified-flat-tax"), fy2025)
        assert result.contribution_base_daily == 0.0


class TestInvalidInput:

    @pytest.mark.parametrize("salary", [0, -100])
    def test_non_positive_salary(self, fy2025, salary):
        with pytest.raises(InvalidInput) as exc:
            normalize(package(gross_salary=salary), fy2025)
        assert exc.value.field == "gross_salary"

    def test_hourly_without_hours(self, fy2025):
        with pytest.raises(InvalidInput) as exc:
            normalize(package(gross_salary=200, payment_frequency="hourly"), fy2025)
        assert exc.value.field == "hours_per_week"

    def test_hourly_with_zero_hours(self, fy2025):
        with pytest.raises(InvalidInput):
            normalize(package(gross_salary=200, payment_frequency="hourly", hours_per_week=0), fy2025)

    def test_more_hours_than_a_week_has(self, fy2025):
        with pytest.raises(InvalidInput, match="168"):
            normalize(package(gross_salary=200, payment_frequency="hourly", hours_per_week=170), fy2025)

    def test_invalid_input_is_a_value_error(self, fy2025):
        with pytest.raises(ValueError):
            normalize(package(gross_salary=0), fy2025)
