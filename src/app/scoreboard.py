from __future__ import annotations

from dataclasses import dataclass

from protocol import Outcome


@dataclass
class Scoreboard:
    wins: int = 0
    draws: int = 0
    losses: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome is Outcome.WIN:
            self.wins += 1
        elif outcome is Outcome.DRAW:
            self.draws += 1
        else:
            self.losses += 1

    @property
    def total(self) -> int:
        return self.wins + self.draws + self.losses

    def format_line(self) -> str:
        return f"Win = {self.wins}, Draw = {self.draws}, Loss = {self.losses}"
