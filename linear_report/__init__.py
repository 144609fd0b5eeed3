"""Monthly Linear ticket reports."""

__version__ = "0.1.0"
