"""Net worth reconstruction engine."""

__version__ = "0.1.0"
