"""Explains XRP Ledger transactions in GitHub issue comments."""
__version__ = "0.1.0"
