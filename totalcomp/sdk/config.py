"""Fiscal-year configuration loading and the active snapshot.

Fiscal-year tables live in YAML files named {year}.yaml. Two locations are
searched, first match wins:

1. <config_dir>/fiscal-years/{year}.yaml - local overrides or newly
   published years
2. totalcomp/fiscal_years/{year}.yaml - tables bundled with the package

Config directory resolution:
1. TOTALCOMP_CONFIG_PATH environment variable (if set)
2. ~/.config/totalcomp/ (XDG_CONFIG_HOME fallback)

Loaded tables are immutable FiscalYearConfig snapshots. The process-wide
FiscalYearStore holds the active one; refreshing the exchange rate or UMA
builds a new snapshot and swaps it in, so a request that already holds a
snapshot keeps seeing one consistent table version.
"""

import logging
import math
import os
import threading
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .errors import ConfigError
from .taxes.schemas import FiscalYearConfig

logger = logging.getLogger(__name__)

APP_NAME = "totalcomp"
FISCAL_YEARS_DIRNAME = "fiscal-years"

# Banxico FIX sanity bounds; a rate outside them is a bad fetch, not a market move.
MIN_EXCHANGE_RATE = 10.0
MAX_EXCHANGE_RATE = 30.0


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. TOTALCOMP_CONFIG_PATH environment variable
    2. ~/.config/totalcomp/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("TOTALCOMP_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_bundled_fiscal_years_dir() -> Path:
    """Directory of the tables shipped with the package."""
    return Path(__file__).parent.parent / "fiscal_years"


def _fiscal_year_dirs() -> list[Path]:
    return [get_config_dir() / FISCAL_YEARS_DIRNAME, get_bundled_fiscal_years_dir()]


def available_years() -> list[int]:
    """Get sorted list of years with a fiscal-year table (descending)."""
    years = set()
    for directory in _fiscal_year_dirs():
        if directory.is_dir():
            years.update(int(p.stem) for p in directory.glob("*.yaml") if p.stem.isdigit())
    return sorted(years, reverse=True)


def find_fiscal_year_file(year: int) -> Optional[Path]:
    """Return the file that defines a year, overrides first."""
    for directory in _fiscal_year_dirs():
        candidate = directory / f"{year}.yaml"
        if candidate.exists():
            return candidate
    return None


def parse_fiscal_year(data: dict, source: str = "<mapping>") -> FiscalYearConfig:
    """Validate a raw mapping into a FiscalYearConfig.

    Raises:
        ConfigError: If the mapping is not a valid fiscal-year table
    """
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: expected a mapping, got {type(data).__name__}")
    try:
        return FiscalYearConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"{source}: invalid fiscal-year table\n{e}") from e


def load_fiscal_year(year: Optional[int] = None) -> FiscalYearConfig:
    """Load the tables for a fiscal year.

    Args:
        year: Fiscal year; None loads the most recent available year

    Returns:
        Validated, immutable FiscalYearConfig

    Raises:
        ConfigError: If no table exists for the year or it fails validation
    """
    if year is None:
        years = available_years()
        if not years:
            raise ConfigError("No fiscal-year tables found")
        year = years[0]

    config_file = find_fiscal_year_file(int(year))
    if config_file is None:
        raise ConfigError(
            f"No fiscal-year table for {year}. Checked:\n"
            + "\n".join(f"  {d / f'{year}.yaml'}" for d in _fiscal_year_dirs())
        )

    with open(config_file, "r") as f:
        data = yaml.safe_load(f)

    config = parse_fiscal_year(data, source=str(config_file))
    if config.year != int(year):
        raise ConfigError(f"{config_file}: declares year {config.year}, expected {year}")

    logger.info(f"Loaded fiscal year {config.year} from {config_file}")
    return config


def with_exchange_rate(config: FiscalYearConfig, rate: float) -> FiscalYearConfig:
    """Return a new snapshot with a different default USD/MXN rate.

    Raises:
        ConfigError: If the rate is outside the sanity bounds
    """
    if not MIN_EXCHANGE_RATE <= rate <= MAX_EXCHANGE_RATE:
        raise ConfigError(
            f"Exchange rate {rate} is outside reasonable bounds "
            f"({MIN_EXCHANGE_RATE}-{MAX_EXCHANGE_RATE} MXN per USD)"
        )
    return config.model_copy(update={"usd_mxn_rate": rate})


def with_uma(config: FiscalYearConfig, annual: float, monthly: float, daily: float) -> FiscalYearConfig:
    """Return a new snapshot with updated UMA values.

    Raises:
        ConfigError: If any value is not a positive finite number
    """
    if not all(math.isfinite(v) and v > 0 for v in (annual, monthly, daily)):
        raise ConfigError(f"UMA values must be positive and finite, got {annual}/{monthly}/{daily}")
    return config.model_copy(
        update={"uma_annual": annual, "uma_monthly": monthly, "uma_daily": daily}
    )


class FiscalYearStore:
    """Holds the active FiscalYearConfig snapshot.

    Readers get a reference to an immutable snapshot; writers replace the
    reference under a lock. Nothing ever mutates a snapshot in place.
    """

    def __init__(self, config: Optional[FiscalYearConfig] = None):
        self._lock = threading.Lock()
        self._config = config

    def get(self) -> FiscalYearConfig:
        """Return the active snapshot, loading the latest year on first use."""
        config = self._config
        if config is not None:
            return config
        with self._lock:
            if self._config is None:
                self._config = load_fiscal_year()
            return self._config

    def activate(self, config: FiscalYearConfig) -> Optional[FiscalYearConfig]:
        """Swap in a new snapshot and return the previous one (if any)."""
        with self._lock:
            previous, self._config = self._config, config
        logger.info(
            f"Activated fiscal year {config.year} "
            f"(uma_monthly={config.uma_monthly}, usd_mxn_rate={config.usd_mxn_rate})"
        )
        return previous

    def refresh_exchange_rate(self, rate: float) -> FiscalYearConfig:
        """Derive a snapshot with a new exchange rate and activate it."""
        with self._lock:
            current = self._config if self._config is not None else load_fiscal_year()
            self._config = with_exchange_rate(current, rate)
            updated = self._config
        logger.info(f"Exchange rate updated: {current.usd_mxn_rate} -> {rate}")
        return updated

    def refresh_uma(self, annual: float, monthly: float, daily: float) -> FiscalYearConfig:
        """Derive a snapshot with new UMA values and activate it."""
        with self._lock:
            current = self._config if self._config is not None else load_fiscal_year()
            self._config = with_uma(current, annual, monthly, daily)
            updated = self._config
        logger.info(f"UMA updated: annual={annual} monthly={monthly} daily={daily}")
        return updated

    def reset(self) -> None:
        """Forget the active snapshot; the next get() reloads from disk."""
        with self._lock:
            self._config = None


_store = FiscalYearStore()


def get_fiscal_year_store() -> FiscalYearStore:
    return _store


def get_active_fiscal_year() -> FiscalYearConfig:
    return _store.get()


def activate_fiscal_year(config: FiscalYearConfig) -> Optional[FiscalYearConfig]:
    return _store.activate(config)


def refresh_exchange_rate(rate: float) -> FiscalYearConfig:
    return _store.refresh_exchange_rate(rate)


def refresh_uma(annual: float, monthly: float, daily: float) -> FiscalYearConfig:
    return _store.refresh_uma(annual, monthly, daily)
