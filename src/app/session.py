from __future__ import annotations

import logging
from dataclasses import dataclass, field

from commit_reveal import RandomSource, SystemRandom
from protocol import Hand
from rounds import PendingRound, ResolvedRound
from scoreboard import Scoreboard

logger = logging.getLogger(__name__)


class InvalidSelection(ValueError):
    """Raised when selecting a history index that does not exist."""


@dataclass
class Session:
    """One play-through: the pending round, resolved history and score.

    Always holds exactly one pending round. ``submit_throw`` resolves it,
    archives it and commits the next one. Only ``source`` is accepted by the
    constructor; the rest of the state starts empty and changes through
    ``submit_throw``, ``select`` and ``clear_selection``. Restart by building
    a new ``Session``; nothing here refers back to an older one.
    """

    source: RandomSource = field(default_factory=SystemRandom)
    _current_round: PendingRound = field(init=False)
    _history: list[ResolvedRound] = field(init=False, default_factory=list)
    _scoreboard: Scoreboard = field(init=False, default_factory=Scoreboard)
    _selected_index: int | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self._current_round = PendingRound.begin(0, self.source)
        logger.debug("round #%d committed: %s", self._current_round.number, self._current_round.commitment)

    @classmethod
    def new(cls, source: RandomSource | None = None) -> "Session":
        return cls(source=source) if source is not None else cls()

    @property
    def current_round(self) -> PendingRound:
        return self._current_round

    @property
    def scoreboard(self) -> Scoreboard:
        return self._scoreboard

    @property
    def selected_index(self) -> int | None:
        return self._selected_index

    @property
    def history(self) -> tuple[ResolvedRound, ...]:
        return tuple(self._history)

    @property
    def num_rounds(self) -> int:
        return len(self._history)

    @property
    def win_count(self) -> int:
        return self._scoreboard.wins

    @property
    def draw_count(self) -> int:
        return self._scoreboard.draws

    @property
    def loss_count(self) -> int:
        return self._scoreboard.losses

    def submit_throw(self, hand: Hand) -> ResolvedRound:
        resolved = self._current_round.throw(hand)
        self._scoreboard.record(resolved.outcome)
        self._history.append(resolved)
        self._selected_index = None
        logger.debug(
            "round #%d resolved: %s vs %s -> %s",
            resolved.number,
            hand.name_token,
            resolved.opponent_hand.name_token,
            resolved.outcome.value,
        )

        self._current_round = PendingRound.begin(len(self._history), self.source)
        logger.debug("round #%d committed: %s", self._current_round.number, self._current_round.commitment)
        return resolved

    def select(self, index: int) -> None:
        if not 0 <= index < len(self._history):
            raise InvalidSelection(f"no round with index {index} (history has {len(self._history)})")
        self._selected_index = index

    def clear_selection(self) -> None:
        self._selected_index = None

    def inspected_round(self) -> ResolvedRound | None:
        if self._selected_index is None or self._selected_index >= len(self._history):
            return None
        return self._history[self._selected_index]

    def latest_round(self) -> ResolvedRound | None:
        return self._history[-1] if self._history else None

    def displayed_round(self) -> tuple[ResolvedRound | None, bool]:
        """The inspected round if one is selected, else the latest. Second item: is it the latest view."""
        inspected = self.inspected_round()
        if inspected is not None:
            return inspected, False
        return self.latest_round(), True

    def last_human_vs_opponent(self) -> tuple[Hand, Hand] | None:
        latest = self.latest_round()
        if latest is None:
            return None
        return latest.human_hand, latest.opponent_hand
