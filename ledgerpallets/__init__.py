"""In-memory ledger modules: chain context, balances, banking accounts and validator trust scores."""

__version__ = "0.1.0"
__all__ = ["banking", "chain", "currency", "trust"]