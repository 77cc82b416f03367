from __future__ import annotations

import enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commit_reveal import RandomSource


class InvalidHand(ValueError):
    """Raised when user input does not name a hand."""


class Hand(enum.Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"

    @property
    def name_token(self) -> str:
        # Part of the commitment string; must stay exactly these three tokens.
        return self.value

    @property
    def icon(self) -> str:
        return _ICONS[self]

    @classmethod
    def random(cls, source: RandomSource) -> Hand:
        """Uniform choice over the three hands.

        Draws single bytes and rejects 255 so that ``byte % 3`` is unbiased.
        """
        while True:
            b = source.fill(1)[0]
            if b < 255:
                return _CHOICES[b % 3]


class Outcome(enum.Enum):
    LOSE = "lose"
    DRAW = "draw"
    WIN = "win"

    def inverse(self) -> Outcome:
        if self is Outcome.WIN:
            return Outcome.LOSE
        if self is Outcome.LOSE:
            return Outcome.WIN
        return self

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def letter(self) -> str:
        return _LETTERS[self]


_CHOICES: tuple[Hand, ...] = (Hand.ROCK, Hand.PAPER, Hand.SCISSORS)

_ICONS = {
    Hand.ROCK: "✊🏼",
    Hand.PAPER: "✋🏼",
    Hand.SCISSORS: "✌🏼",
}

_DESCRIPTIONS = {
    Outcome.LOSE: "You lose",
    Outcome.DRAW: "Draw",
    Outcome.WIN: "You win",
}

_LETTERS = {
    Outcome.LOSE: "L",
    Outcome.DRAW: "D",
    Outcome.WIN: "W",
}

# (winner, loser)
_BEATS = {
    (Hand.ROCK, Hand.SCISSORS),
    (Hand.SCISSORS, Hand.PAPER),
    (Hand.PAPER, Hand.ROCK),
}

_ABBREVIATIONS = {
    "r": Hand.ROCK,
    "p": Hand.PAPER,
    "s": Hand.SCISSORS,
}


def outcome(human: Hand, opponent: Hand) -> Outcome:
    if human is opponent:
        return Outcome.DRAW
    return Outcome.WIN if (human, opponent) in _BEATS else Outcome.LOSE


def parse_hand(text: str) -> Hand:
    token = text.strip().lower()
    if token in _ABBREVIATIONS:
        return _ABBREVIATIONS[token]
    try:
        return Hand(token)
    except ValueError:
        raise InvalidHand(f"not a hand: {text!r} (expected rock|paper|scissors)") from None


def is_valid_hand(value: str) -> bool:
    try:
        parse_hand(value)
    except InvalidHand:
        return False
    return True
