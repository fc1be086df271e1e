"""Pydantic schemas for package inputs and calculation results.

All schemas use extra='forbid' to reject unknown fields, so a typo in a
request file causes a clear error rather than a silently ignored benefit. Input schemas also reject NaN and infinity.

Statutory benefits are a tagged union on `kind`. A benefit that is absent
or has enabled=False contributes nothing; the calculator dispatches on the
tag, so adding a benefit kind means adding a variant and its calculator.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .taxes.schemas import FiscalYearMeta

Regime = Literal["payroll", "simplified-flat-tax"]
Currency = Literal["MXN", "USD"]
PaymentFrequency = Literal["hourly", "daily", "weekly", "biweekly", "monthly"]
Cadence = Literal["monthly", "annual"]

PAYROLL = "payroll"
SIMPLIFIED = "simplified-flat-tax"

# Benefits only the payroll regime is eligible for.
PAYROLL_ONLY_KINDS = ("year_end_bonus", "vacation_premium", "grocery_vouchers", "savings_fund")

TOLERANCE = 0.01


# =============================================================================
# Input Schemas
# =============================================================================


class YearEndBonus(BaseModel):
    """Aguinaldo: days of salary paid once a year."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    kind: Literal["year_end_bonus"] = "year_end_bonus"
    enabled: bool = True
    days: Optional[int] = Field(
        default=None, ge=0, description="Days of salary; defaults to the statutory minimum"
    )


class VacationPremium(BaseModel):
    """Prima vacacional: percentage of the salary for the vacation days."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    kind: Literal["vacation_premium"] = "vacation_premium"
    enabled: bool = True
    vacation_days: Optional[int] = Field(default=None, ge=0)
    percent: Optional[float] = Field(default=None, ge=0, description="Premium, 25 = 25%")


class GroceryVouchers(BaseModel):
    """Vales de despensa paid every month."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    kind: Literal["grocery_vouchers"] = "grocery_vouchers"
    enabled: bool = True
    monthly_amount: float = Field(..., ge=0, description="Voucher amount per month (MXN)")


class SavingsFund(BaseModel):
    """Fondo de ahorro: employee contribution matched by the employer."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    kind: Literal["savings_fund"] = "savings_fund"
    enabled: bool = True
    percent: Optional[float] = Field(
        default=None, ge=0, description="Contribution as percent of salary, 13 = 13%"
    )


StatutoryBenefit = Annotated[
    Union[YearEndBonus, VacationPremium, GroceryVouchers, SavingsFund],
    Field(discriminator="kind"),
]


class OtherBenefit(BaseModel):
    """Custom benefit line item (otras prestaciones)."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    name: str
    amount: float = Field(..., description="Absolute amount, or percent when is_percentage")
    currency: Currency = "MXN"
    cadence: Cadence = "monthly"
    tax_free: bool = False
    is_percentage: bool = Field(
        default=False,
        description="Amount is a percentage of the salary at the benefit's cadence",
    )


class RefresherRange(BaseModel):
    """Expected annual equity refresher, kept as a range."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    min: float
    max: float


class EquityElection(BaseModel):
    """Stock grant offered with the package."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    initial_grant: float = Field(..., description="Total value of the initial grant")
    currency: Currency = "USD"
    vesting_years: int = Field(default=4, ge=1, le=10)
    refresher: Optional[RefresherRange] = None


class PackageInput(BaseModel):
    """One compensation package to evaluate."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    name: Optional[str] = Field(default=None, description="Display label only")
    regime: Regime = PAYROLL
    currency: Currency = "MXN"
    exchange_rate: Optional[float] = Field(
        default=None, description="USD/MXN override; defaults to the fiscal-year rate"
    )
    payment_frequency: PaymentFrequency = "monthly"
    hours_per_week: Optional[float] = Field(
        default=None, description="Required when payment_frequency is hourly"
    )
    gross_salary: float = Field(..., description="Gross pay in the stated frequency and currency")
    benefits: List[StatutoryBenefit] = Field(default_factory=list)
    other_benefits: List[OtherBenefit] = Field(default_factory=list)
    equity: Optional[EquityElection] = None
    unpaid_rest_days: int = Field(
        default=0, description="Simplified regime only: days off without pay per year"
    )
    has_infonavit_credit: bool = Field(
        default=False, description="Employer Infonavit contribution pays a mortgage"
    )


class ComparisonRequest(BaseModel):
    """Wire shape of a comparison request."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    packages: List[PackageInput]


# =============================================================================
# Result Schemas
# =============================================================================


class BenefitBreakdown(BaseModel):
    """Gross/ISR/net triple for one benefit."""

    model_config = ConfigDict(extra="forbid")

    kind: str = Field(..., description="Benefit kind, 'custom' for other benefits")
    name: str
    cadence: Cadence
    gross: float = Field(..., ge=0)
    exempt: float = Field(default=0, ge=0, description="Tax-exempt part of gross")
    isr: float = Field(default=0, ge=0)
    net: float = Field(..., ge=0)
    tax_free: bool = False

    @model_validator(mode="after")
    def check_triple(self) -> "BenefitBreakdown":
        if abs(self.net - (self.gross - self.isr)) > TOLERANCE / 2:
            raise ValueError(
                f"{self.name}: net ({self.net:.2f}) != gross - isr "
                f"({self.gross - self.isr:.2f})"
            )
        if self.exempt > self.gross + TOLERANCE:
            raise ValueError(f"{self.name}: exempt ({self.exempt:.2f}) > gross ({self.gross:.2f})")
        return self

    @property
    def annual_gross(self) -> float:
        return self.gross * 12 if self.cadence == "monthly" else self.gross

    @property
    def annual_net(self) -> float:
        return self.net * 12 if self.cadence == "monthly" else self.net


class ValueRange(BaseModel):
    """Inclusive range for inherently uncertain amounts."""

    model_config = ConfigDict(extra="forbid")

    low: float
    high: float

    @model_validator(mode="after")
    def check_order(self) -> "ValueRange":
        if self.low > self.high:
            raise ValueError(f"low ({self.low}) > high ({self.high})")
        return self

    @classmethod
    def point(cls, value: float) -> "ValueRange":
        return cls(low=value, high=value)


class YearlyEquity(BaseModel):
    """Equity vesting in one year after joining (MXN)."""

    model_config = ConfigDict(extra="forbid")

    year: int
    initial_vested: float
    refresher_vested: ValueRange
    total_vested: ValueRange


class EquitySummary(BaseModel):
    """Informational equity figures; never taxed or added to annual totals."""

    model_config = ConfigDict(extra="forbid")

    initial_grant_mxn: float
    vesting_years: int
    annual_initial_vest_mxn: float
    refresher_range_mxn: Optional[ValueRange] = None
    schedule: List[YearlyEquity]
    total_over_horizon: ValueRange


class EmployerContributions(BaseModel):
    """Employer-paid, non-liquid contributions (informational)."""

    model_config = ConfigDict(extra="forbid")

    imss_monthly: float = Field(default=0, ge=0)
    imss_annual: float = Field(default=0, ge=0)
    infonavit_monthly: float = Field(default=0, ge=0)
    infonavit_annual: float = Field(default=0, ge=0)
    has_infonavit_credit: bool = False


class SalaryCalculation(BaseModel):
    """Full breakdown for one package. Internally coherent.

    Monthly figures cover the base salary only; benefits appear in the
    benefits list and in the annual totals. monthly_adjusted (annual_net / 12)
    is the comparison metric because it spreads annual-only benefits.
    """

    model_config = ConfigDict(extra="forbid")

    regime: Regime
    monthly_gross: float = Field(..., gt=0)
    net_monthly: float
    isr_monthly: float = Field(..., ge=0)
    subsidy_monthly: float = Field(default=0, ge=0)
    imss_worker_monthly: float = Field(default=0, ge=0)
    contribution_base_daily: float = Field(default=0, ge=0)
    flat_tax_rate: Optional[float] = Field(default=None, description="Simplified regime rate")
    annual_base_gross: float
    annual_total_gross: float
    annual_net: float
    monthly_adjusted: float
    benefits: List[BenefitBreakdown] = Field(default_factory=list)
    savings_fund_withheld_monthly: float = Field(default=0, ge=0)
    unpaid_rest_days: int = Field(default=0, ge=0)
    unpaid_rest_day_loss: float = Field(default=0, ge=0)
    employer: EmployerContributions = Field(default_factory=EmployerContributions)
    equity: Optional[EquitySummary] = None

    @model_validator(mode="after")
    def check_coherence(self) -> "SalaryCalculation":
        """Validate internal consistency of amounts."""
        errors = []

        expected_net = (
            self.monthly_gross - self.isr_monthly + self.subsidy_monthly - self.imss_worker_monthly
        )
        if abs(self.net_monthly - expected_net) > TOLERANCE:
            errors.append(
                f"net_monthly ({self.net_monthly:.2f}) != "
                f"gross - isr + subsidy - imss ({expected_net:.2f})"
            )

        if self.net_monthly > self.monthly_gross + TOLERANCE:
            errors.append(f"net_monthly ({self.net_monthly:.2f}) > gross ({self.monthly_gross:.2f})")

        if self.annual_net > self.annual_total_gross + TOLERANCE:
            errors.append(
                f"annual_net ({self.annual_net:.2f}) > annual_total_gross "
                f"({self.annual_total_gross:.2f})"
            )

        if self.annual_total_gross < -TOLERANCE or self.annual_net < -TOLERANCE:
            errors.append(
                f"negative annual totals: gross {self.annual_total_gross:.2f}, "
                f"net {self.annual_net:.2f}"
            )

        if self.monthly_adjusted != self.annual_net / 12:
            errors.append(
                f"monthly_adjusted ({self.monthly_adjusted}) != annual_net / 12 "
                f"({self.annual_net / 12})"
            )

        has_benefits = any(b.gross > 0 for b in self.benefits)
        if has_benefits and not self.unpaid_rest_day_loss:
            if self.annual_total_gross < self.annual_base_gross - TOLERANCE:
                errors.append(
                    f"annual_total_gross ({self.annual_total_gross:.2f}) < "
                    f"annual_base_gross ({self.annual_base_gross:.2f}) with benefits enabled"
                )

        if self.regime == SIMPLIFIED:
            payroll_only = [b.kind for b in self.benefits if b.kind in PAYROLL_ONLY_KINDS]
            if payroll_only:
                errors.append(f"simplified regime carries payroll-only benefits {payroll_only}")
            if self.subsidy_monthly or self.imss_worker_monthly:
                errors.append("simplified regime carries subsidy or IMSS amounts")
        elif self.unpaid_rest_day_loss:
            errors.append("payroll regime carries an unpaid rest day loss")

        if errors:
            raise ValueError("; ".join(errors))

        return self


class PackageResult(BaseModel):
    """A package's position, label and breakdown."""

    model_config = ConfigDict(extra="forbid")

    index: int = Field(..., ge=0, description="Position in the submitted request")
    package_name: str
    calculation: SalaryCalculation


class ComparisonResult(BaseModel):
    """Output of compare: every package in request order plus the best one."""

    model_config = ConfigDict(extra="forbid")

    results: List[PackageResult]
    best: PackageResult
    fiscal_year: FiscalYearMeta
