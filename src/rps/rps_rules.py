from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterable

from rps_errors import ConfigurationError, OutOfRange

logger = logging.getLogger(__name__)

MIN_MOVES = 3


class Outcome(str, enum.Enum):
    # Always from the player's point of view.
    WIN = "Win"
    LOSE = "Lose"
    DRAW = "Draw"


@dataclass(frozen=True)
class MoveSet:
    names: tuple[str, ...]

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "MoveSet":
        moves = tuple(names)
        if len(moves) < MIN_MOVES:
            raise ConfigurationError(f"at least {MIN_MOVES} moves are required, got {len(moves)}")
        if len(moves) % 2 == 0:
            raise ConfigurationError(f"the number of moves must be odd, got {len(moves)}")

        seen: set[str] = set()
        duplicates: list[str] = []
        for name in moves:
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)
        if duplicates:
            raise ConfigurationError("move names must be unique, repeated: " + ", ".join(duplicates))

        logger.debug("move set accepted: %s", ", ".join(moves))
        return cls(names=moves)

    def __len__(self) -> int:
        return len(self.names)


class Rules:
    """Outcome table for an odd number of moves laid out on a cycle.

    A move beats the (N-1)/2 moves that precede it on the cycle and loses
    to the (N-1)/2 moves that follow it, so with rock, paper, scissors the
    usual results fall out and any odd N gets a balanced table.
    """

    def __init__(self, moves: MoveSet) -> None:
        self.moves = moves
        self.size = len(moves)
        self._table = _generate_table(self.size)

    def move_name(self, index: int) -> str:
        self._check_index(index)
        return self.moves.names[index - 1]

    def outcome(self, player_index: int, computer_index: int) -> Outcome:
        self._check_index(player_index)
        self._check_index(computer_index)
        return self._table[player_index - 1][computer_index - 1]

    def table(self) -> tuple[tuple[Outcome, ...], ...]:
        return self._table

    def beats(self, index: int) -> list[str]:
        """Names of the moves that lose against the move at ``index``."""
        self._check_index(index)
        return [
            self.moves.names[other]
            for other, result in enumerate(self._table[index - 1])
            if result is Outcome.WIN
        ]

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 1 <= index <= self.size:
            raise OutOfRange(index, self.size)


def _generate_table(size: int) -> tuple[tuple[Outcome, ...], ...]:
    half = (size - 1) // 2
    rows: list[tuple[Outcome, ...]] = []
    for player in range(size):
        row: list[Outcome] = []
        for computer in range(size):
            distance = (player - computer) % size
            if distance == 0:
                row.append(Outcome.DRAW)
            elif distance <= half:
                row.append(Outcome.WIN)
            else:
                row.append(Outcome.LOSE)
        rows.append(tuple(row))
    return tuple(rows)
