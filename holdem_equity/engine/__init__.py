from .base import EquityBackend, select_backend
from .python_backend import PythonBackend
from .numba_backend import NumbaBackend, score7, score_cards
from .equity import (
    EquityEngine,
    compute_equity,
    coerce_options,
    default_backends,
    prepare_scenario,
    remaining_deck,
)

__all__ = [
    "EquityBackend", "select_backend", "PythonBackend", "NumbaBackend", "score7", "score_cards",
    "EquityEngine", "compute_equity", "coerce_options", "default_backends", "prepare_scenario",
    "remaining_deck",
]
