from .base import CacheRow, EquityStore, StoreError, THIRTY_DAYS_MS
from .memory import InMemoryEquityStore
from .sqlite import SQLiteEquityStore
from .lookup import EquityCache, canonical_order, create_equity_key

__all__ = [
    "CacheRow", "EquityStore", "StoreError", "THIRTY_DAYS_MS",
    "InMemoryEquityStore", "SQLiteEquityStore",
    "EquityCache", "canonical_order", "create_equity_key",
]
