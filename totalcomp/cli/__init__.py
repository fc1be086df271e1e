"""Total Comp CLI package."""
