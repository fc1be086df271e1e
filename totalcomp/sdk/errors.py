"""Error taxonomy for the calculation engine.

Every error aborts the package being computed. Under a multi-package
comparison the first error aborts the whole comparison.
"""

from typing import Optional


class TotalCompError(Exception):
    """Base class for all engine errors."""
    pass


class InvalidInput(TotalCompError, ValueError):
    """A package field is malformed or out of range."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ConfigError(TotalCompError):
    """The fiscal-year tables are missing or internally inconsistent."""
    pass


class UnsupportedCombination(TotalCompError):
    """A structurally disallowed combination of package fields."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
