from __future__ import annotations

from dataclasses import dataclass

from rps_rules import Outcome


@dataclass
class ScoreState:
    player_wins: int = 0
    computer_wins: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome == Outcome.WIN:
            self.player_wins += 1
        elif outcome == Outcome.LOSE:
            self.computer_wins += 1

    def format_summary(self, title: str = "Result:") -> str:
        lines = [
            title,
            f"Player wins: {self.player_wins}",
            f"Computer wins: {self.computer_wins}",
        ]
        return "\n".join(lines)
