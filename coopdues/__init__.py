"""Cooperative membership dues ledger and payment engine."""

__version__ = "0.1.0"
