"""Texas Hold'em hand evaluation, equity and turn-outs analysis."""
from .helpers import (
    Card,
    HandEvaluator,
    HandRank,
    EquityOptions,
    EquityResult,
    HoldemError,
    calculate_turn_outs,
    parse_cards,
)
from .engine import EquityEngine, compute_equity
from .storage import EquityCache, SQLiteEquityStore, InMemoryEquityStore, create_equity_key
from .config import Settings

__version__ = "0.1.0"

__all__ = [
    "Card", "HandEvaluator", "HandRank", "EquityOptions", "EquityResult", "HoldemError",
    "calculate_turn_outs", "parse_cards",
    "EquityEngine", "compute_equity",
    "EquityCache", "SQLiteEquityStore", "InMemoryEquityStore", "create_equity_key",
    "Settings",
]
