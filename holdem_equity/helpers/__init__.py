# cards
from .cards import (
    Card,
    FULL_DECK,
    parse_card,
    parse_cards,
    parse_hole,
    parse_board,
    make_deck,
    ensure_distinct,
)

# errors
from .errors import (
    HoldemError,
    TooFewPlayers,
    BoardTooLarge,
    DuplicateCard,
    InsufficientDeck,
    InvalidHandSize,
    InvalidCardFormat,
    InvalidOutsInput,
    InvalidOptions,
)

# evaluation
from .evaluator import (
    HandRank,
    HandEvaluator,
    CATEGORY,
    CATEGORY_NAMES,
    compare_ranks,
    evaluate_5,
    evaluate_best,
    compare_hands,
    best_five,
    describe_rank,
    winners,
)

# caching + enumeration
from .cache import LRUTable
from .combos import iter_combinations, n_choose_k

# results + outs
from .results import EquityOptions, EquityResult, ShowdownTally
from .outs import calculate_turn_outs, OutsResult, OutsSuppression, Out, OUT_CATEGORY_NAMES

# starting hands
from .ranges import starting_hands, top_hands, hand_class

__all__ = [
    # cards
    "Card", "FULL_DECK", "parse_card", "parse_cards", "parse_hole", "parse_board",
    "make_deck", "ensure_distinct",

    # errors
    "HoldemError", "TooFewPlayers", "BoardTooLarge", "DuplicateCard", "InsufficientDeck",
    "InvalidHandSize", "InvalidCardFormat", "InvalidOutsInput", "InvalidOptions",

    # evaluation
    "HandRank", "HandEvaluator", "CATEGORY", "CATEGORY_NAMES", "compare_ranks",
    "evaluate_5", "evaluate_best", "compare_hands", "best_five", "describe_rank", "winners",

    # caching + enumeration
    "LRUTable", "iter_combinations", "n_choose_k",

    # results + outs
    "EquityOptions", "EquityResult", "ShowdownTally",
    "calculate_turn_outs", "OutsResult", "OutsSuppression", "Out", "OUT_CATEGORY_NAMES",

    # starting hands
    "starting_hands", "top_hands", "hand_class",
]
