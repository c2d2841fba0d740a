"""jswaste — unused JavaScript byte accounting for page audits."""

__version__ = "0.1.0"
