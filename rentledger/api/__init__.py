"""HTTP API for the rent ledger."""
