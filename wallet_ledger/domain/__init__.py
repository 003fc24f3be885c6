"""Domain layer: ledger rules independent of transport."""
