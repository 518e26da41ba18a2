"""Vendor balance reconciliation across extracted report texts."""

__version__ = "0.1.0"
