"""Plain-text ledger engine and its adapters."""
