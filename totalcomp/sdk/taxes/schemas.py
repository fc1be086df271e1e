"""Pydantic schemas for fiscal-year tables.

These schemas validate the fiscal_years/*.yaml files and provide typed,
immutable access to the tax parameters of one fiscal year: the UMA
reference unit, minimum wage, exchange rate, ISR and subsidy tables, the
simplified-regime bands, IMSS rates and the statutory benefit constants.

Table-shape problems (non-monotonic brackets, overlapping subsidy rows)
raise ConfigError directly from the validators.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import ConfigError


class ISRBracket(BaseModel):
    """Single row of the monthly ISR table."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: float = Field(..., description="Lower limit of the bracket")
    fixed_quota: float = Field(..., description="Tax due at the lower limit")
    marginal_rate: float = Field(..., description="Rate on the excess over lower limit")


class SubsidyRow(BaseModel):
    """Employment subsidy row, applies to [lower_bound, upper_bound)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: float
    upper_bound: float
    credit_amount: float


class SimplifiedBracket(BaseModel):
    """Flat-rate band of the simplified regime (RESICO)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    upper_bound: float = Field(..., description="Monthly income ceiling of the band")
    rate: float = Field(..., description="Flat rate applied to the whole income")


class IMSSConcept(BaseModel):
    """One IMSS insurance branch with its worker/employer split."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    worker_rate: float = Field(default=0, ge=0, le=1)
    employer_rate: float = Field(default=0, ge=0, le=1)
    basis: Literal["sbc", "excess", "uma"] = Field(
        default="sbc",
        description=(
            "sbc: capped contribution base. "
            "excess: portion of the base above threshold_in_uma UMAs. "
            "uma: one UMA per day regardless of salary."
        ),
    )
    threshold_in_uma: float = Field(default=0, ge=0)
    progressive_employer: bool = Field(
        default=False,
        description="Employer rate comes from cesantia_employer_brackets",
    )


class CesantiaBracket(BaseModel):
    """Employer cesantia/vejez rate by contribution base measured in UMAs."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_uma: float = Field(..., ge=0)
    upper_uma: float = Field(..., gt=0)
    rate: float = Field(..., ge=0, le=1)


class SocialSecurityRules(BaseModel):
    """IMSS and Infonavit constants."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    integration_factor: float = Field(default=1.0493, ge=1)
    cap_in_uma: float = Field(default=25, gt=0)
    concepts: tuple[IMSSConcept, ...]
    cesantia_employer_brackets: tuple[CesantiaBracket, ...] = ()
    infonavit_employer_rate: float = Field(default=0.05, ge=0, le=1)

    @model_validator(mode="after")
    def check_cesantia_order(self) -> "SocialSecurityRules":
        uppers = [b.upper_uma for b in self.cesantia_employer_brackets]
        if any(b <= a for a, b in zip(uppers, uppers[1:])):
            raise ConfigError("cesantia_employer_brackets must be ascending by upper_uma")
        progressive = [c.name for c in self.concepts if c.progressive_employer]
        if progressive and not self.cesantia_employer_brackets:
            raise ConfigError(
                f"Concepts {progressive} use progressive employer rates "
                "but cesantia_employer_brackets is empty"
            )
        return self


class BenefitRules(BaseModel):
    """Statutory constants for the payroll fringe benefits."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    year_end_bonus_min_days: int = Field(default=15, ge=0)
    year_end_bonus_exempt_uma: float = Field(default=30, ge=0)
    vacation_min_days: int = Field(default=12, ge=0)
    vacation_premium_min_percent: float = Field(default=25, ge=0)
    vacation_premium_exempt_uma: float = Field(default=15, ge=0)
    grocery_vouchers_cap_multiple: float = Field(default=1.0, ge=0)
    grocery_vouchers_cap_basis: Literal["uma_monthly", "minimum_wage_monthly"] = "uma_monthly"
    savings_fund_max_percent: float = Field(default=13, ge=0, le=100)
    savings_fund_exempt_uma_annual: float = Field(default=1.3, ge=0)


class FiscalYearMeta(BaseModel):
    """Identifies the table version that produced a result."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    uma_monthly: float
    usd_mxn_rate: float


class FiscalYearConfig(BaseModel):
    """Complete, immutable tax tables for one fiscal year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., ge=2000)
    uma_daily: float = Field(..., gt=0)
    uma_monthly: float = Field(..., gt=0)
    uma_annual: float = Field(..., gt=0)
    minimum_wage_daily: float = Field(..., gt=0)
    minimum_wage_border_daily: Optional[float] = Field(default=None, gt=0)
    usd_mxn_rate: float = Field(..., gt=0)
    days_per_month: float = Field(default=30.4, gt=0)
    isr_brackets: tuple[ISRBracket, ...]
    subsidy_table: tuple[SubsidyRow, ...] = ()
    simplified_brackets: tuple[SimplifiedBracket, ...]
    social_security: SocialSecurityRules
    benefits: BenefitRules = BenefitRules()

    @model_validator(mode="after")
    def check_tables(self) -> "FiscalYearConfig":
        """Refuse tables that would produce misleading figures."""
        from .isr import validate_brackets, validate_simplified_brackets
        from .subsidy import validate_subsidy_table

        validate_brackets(self.isr_brackets)
        validate_subsidy_table(self.subsidy_table)
        validate_simplified_brackets(self.simplified_brackets)
        return self

    def meta(self) -> FiscalYearMeta:
        return FiscalYearMeta(
            year=self.year,
            uma_monthly=self.uma_monthly,
            usd_mxn_rate=self.usd_mxn_rate,
        )
