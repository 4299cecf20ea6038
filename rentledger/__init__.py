"""Rent billing ledger."""
