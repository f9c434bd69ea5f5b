"""commissionctl — commission fee calculator for cash-in and cash-out operations."""

__version__ = "0.1.0"
