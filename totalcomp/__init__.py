"""totalcomp - Mexican compensation package calculator."""

__version__ = "0.1.0"
