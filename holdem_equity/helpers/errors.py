from __future__ import annotations
from typing import Optional, Union


class HoldemError(ValueError):
    """Base class for every input-validation failure raised by the engine."""


class TooFewPlayers(HoldemError):
    def __init__(self, count: int):
        super().__init__(f"At least 2 players required, got {count}")
        self.count = count


class BoardTooLarge(HoldemError):
    def __init__(self, size: int):
        super().__init__(f"Board cannot have more than 5 cards, got {size}")
        self.size = size


class DuplicateCard(HoldemError):
    def __init__(self, card):
        super().__init__(f"Duplicate card found: {card.code}")
        self.card = card


class InsufficientDeck(HoldemError):
    def __init__(self, need: int, have: int):
        super().__init__(f"Not enough cards in deck: need {need}, have {have}")
        self.need = need
        self.have = have


class InvalidHandSize(HoldemError):
    def __init__(self, expected: Union[int, str], got: int, what: str = "hand"):
        super().__init__(f"{what} requires {expected} cards, got {got}")
        self.expected = expected
        self.got = got


class InvalidCardFormat(HoldemError):
    def __init__(self, text: object, detail: Optional[str] = None):
        msg = f"Invalid card: {text!r}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)
        self.text = text


class InvalidOutsInput(HoldemError):
    pass


class InvalidOptions(HoldemError):
    pass
