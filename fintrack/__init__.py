"""fintrack - monthly budget and transaction tracking."""

__version__ = "0.1.0"
