"""Chai Adda back office: reporting over a point-of-sale store's orders,
ledger and inventory."""

__version__ = "0.1.0"
