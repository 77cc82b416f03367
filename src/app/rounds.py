from __future__ import annotations

from dataclasses import dataclass

from commit_reveal import Commitment, RandomSource, generate_nonce
from protocol import Hand, Outcome, outcome


class RoundAlreadyThrown(RuntimeError):
    """A pending round was thrown twice. Caller bug, not a game outcome."""


class _CommittedRound:
    # Shared read accessors; subclasses provide ``index`` and ``commitment_record``.
    __slots__ = ()

    index: int
    commitment_record: Commitment

    @property
    def number(self) -> int:
        return self.index + 1

    @property
    def commitment(self) -> str:
        return self.commitment_record.digest

    @property
    def nonce(self) -> bytes:
        return self.commitment_record.nonce

    @property
    def nonce_hex(self) -> str:
        return self.commitment_record.nonce_hex

    @property
    def opponent_hand(self) -> Hand:
        return self.commitment_record.hand

    def nonce_prefix(self, n: int = 8) -> str:
        return self.nonce_hex[:n]

    def digest_prefix(self, n: int = 8) -> str:
        return self.commitment[:n]

    def verification_string(self) -> str:
        return self.commitment_record.verification_string()


@dataclass(frozen=True)
class ResolvedRound(_CommittedRound):
    index: int
    commitment_record: Commitment
    human_hand: Hand

    @property
    def outcome(self) -> Outcome:
        return outcome(self.human_hand, self.opponent_hand)

    @property
    def result_description(self) -> str:
        return self.outcome.description


class PendingRound(_CommittedRound):
    """The opponent has committed; waiting for the human's one throw."""

    __slots__ = ("_index", "_commitment_record", "_thrown")

    def __init__(self, index: int, commitment_record: Commitment) -> None:
        self._index = index
        self._commitment_record = commitment_record
        self._thrown = False

    def __repr__(self) -> str:
        return f"PendingRound(index={self._index}, commitment={self.commitment!r})"

    @classmethod
    def begin(cls, index: int, source: RandomSource) -> PendingRound:
        hand = Hand.random(source)
        nonce = generate_nonce(source)
        return cls(index=index, commitment_record=Commitment.create(hand, nonce))

    @property
    def index(self) -> int:
        return self._index

    @property
    def commitment_record(self) -> Commitment:
        return self._commitment_record

    @property
    def human_hand(self) -> Hand | None:
        return None

    @property
    def result_description(self) -> str | None:
        return None

    @property
    def is_thrown(self) -> bool:
        return self._thrown

    def throw(self, hand: Hand) -> ResolvedRound:
        if self._thrown:
            raise RoundAlreadyThrown(f"round #{self.number} was already thrown")
        self._thrown = True
        return ResolvedRound(index=self._index, commitment_record=self._commitment_record, human_hand=hand)
