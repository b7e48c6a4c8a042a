"""Smart Finance Tracker: transaction extraction from bank SMS alerts."""

__version__ = "0.1.0"
