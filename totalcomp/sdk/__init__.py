"""Total Comp SDK - Core functionality for Mexican compensation package comparison."""

from .errors import (
    TotalCompError,
    InvalidInput,
    ConfigError,
    UnsupportedCombination,
)

from .config import (
    get_config_dir,
    get_bundled_fiscal_years_dir,
    available_years,
    find_fiscal_year_file,
    parse_fiscal_year,
    load_fiscal_year,
    with_exchange_rate,
    with_uma,
    FiscalYearStore,
    get_fiscal_year_store,
    get_active_fiscal_year,
    activate_fiscal_year,
    refresh_exchange_rate,
    refresh_uma,
)

from .schemas import (
    PackageInput,
    YearEndBonus,
    VacationPremium,
    GroceryVouchers,
    SavingsFund,
    OtherBenefit,
    EquityElection,
    RefresherRange,
    ComparisonRequest,
    BenefitBreakdown,
    ValueRange,
    YearlyEquity,
    EquitySummary,
    EmployerContributions,
    SalaryCalculation,
    PackageResult,
    ComparisonResult,
)

from .taxes import FiscalYearConfig, FiscalYearMeta

from .comp import (
    normalize,
    calculate_package,
    compare,
    compare_request,
)

__all__ = [
    # Errors
    "TotalCompError",
    "InvalidInput",
    "ConfigError",
    "UnsupportedCombination",
    # Fiscal-year config
    "get_config_dir",
    "get_bundled_fiscal_years_dir",
    "available_years",
    "find_fiscal_year_file",
    "parse_fiscal_year",
    "load_fiscal_year",
    "with_exchange_rate",
    "with_uma",
    "FiscalYearStore",
    "get_fiscal_year_store",
    "get_active_fiscal_year",
    "activate_fiscal_year",
    "refresh_exchange_rate",
    "refresh_uma",
    "FiscalYearConfig",
    "FiscalYearMeta",
    # Schemas
    "PackageInput",
    "YearEndBonus",
    "VacationPremium",
    "GroceryVouchers",
    "SavingsFund",
    "OtherBenefit",
    "EquityElection",
    "RefresherRange",
    "ComparisonRequest",
    "BenefitBreakdown",
    "ValueRange",
    "YearlyEquity",
    "EquitySummary",
    "EmployerContributions",
    "SalaryCalculation",
    "PackageResult",
    "ComparisonResult",
    # Calculation
    "normalize",
    "calculate_package",
    "compare",
    "compare_request",
]
