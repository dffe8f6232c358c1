"""Loyverse Bridge: Loyverse receipts merged with supplementary records."""

__version__ = "0.1.0"
