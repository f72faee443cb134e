from __future__ import annotations

import logging
import re
from typing import Callable, Literal, Union

from rps_commit_reveal import KEY_BITS, RoundCommitment
from rps_errors import InputValidationError, OutOfRange
from rps_rules import Outcome, Rules
from rps_scoreboard import ScoreState

logger = logging.getLogger(__name__)

EXIT: Literal["exit"] = "exit"
HELP: Literal["help"] = "help"

Choice = Union[Literal["exit", "help"], int]
LineProvider = Callable[[str], str]
Sink = Callable[[str], None]

PROMPT = "Enter your move: "

_OUTCOME_LINES = {
    Outcome.WIN: "You win!",
    Outcome.LOSE: "You lose!",
    Outcome.DRAW: "It's a draw!",
}


def ask(prompt: str) -> str:
    try:
        return input(prompt)
    except (EOFError, KeyboardInterrupt):
        # Closed stdin or Ctrl-C leaves the game like the exit command.
        print()
        return "0"


def parse_choice(token: str, size: int) -> Choice:
    value = token.strip()
    if value == "0":
        return EXIT
    if value == "?":
        return HELP
    if re.fullmatch(r"[0-9]+", value):
        digits = value.lstrip("0")
        # More digits than the largest index cannot be a move; int() caps digit count.
        if digits and len(digits) <= len(str(size)):
            index = int(digits)
            if 1 <= index <= size:
                return index
    raise InputValidationError(token, size)


def format_help_table(rules: Rules) -> str:
    header = ["Moves", *rules.moves.names]
    width = max(len(cell) for cell in header) + 2

    lines = ["Rows are your move, columns are the computer's move. Results are for you."]
    lines.append("".join(cell.ljust(width) for cell in header).rstrip())
    for name, row in zip(rules.moves.names, rules.table()):
        cells = [name, *(outcome.value for outcome in row)]
        lines.append("".join(cell.ljust(width) for cell in cells).rstrip())
    return "\n".join(lines)


class Game:
    """Turn-based loop: commit, wait for the player, reveal, score.

    Every round starts with a fresh key and computer move whose HMAC is shown
    before the menu. The key is printed only after the player has picked a
    move, so the HMAC can be recomputed to check the computer did not change
    its mind.
    """

    def __init__(
        self,
        rules: Rules,
        *,
        read_line: LineProvider = ask,
        write: Sink = print,
        key_bits: int = KEY_BITS,
        score: ScoreState | None = None,
    ) -> None:
        self.rules = rules
        self.read_line = read_line
        self.write = write
        self.key_bits = key_bits
        self.score = score if score is not None else ScoreState()

    def play(self) -> int:
        while True:
            status = self.play_round()
            if status is not None:
                return status

    def play_round(self) -> int | None:
        """Play one round. Returns the exit status once the player quits."""
        commitment = RoundCommitment.create(self.rules, self.key_bits)
        self.write(f"HMAC: {commitment.mac}")

        while True:
            self.show_menu()
            choice = self.read_choice()
            if choice == EXIT:
                self.write("Goodbye!")
                self.write(self.score.format_summary("Final Result:"))
                return 0
            if choice == HELP:
                # Same round, same commitment.
                self.write(format_help_table(self.rules))
                continue
            self.resolve(commitment, choice)
            return None

    def show_menu(self) -> None:
        self.write("Available moves:")
        for index, name in enumerate(self.rules.moves.names, start=1):
            self.write(f"{index} - {name}")
        self.write("0 - exit")
        self.write("? - help")

    def read_choice(self) -> Choice:
        while True:
            line = self.read_line(PROMPT)
            try:
                return parse_choice(line, self.rules.size)
            except InputValidationError as exc:
                self.write(str(exc))

    def resolve(self, commitment: RoundCommitment, player_index: int) -> Outcome:
        try:
            player_name = self.rules.move_name(player_index)
            outcome = self.rules.outcome(player_index, commitment.move_index)
        except OutOfRange:
            logger.exception("move index translation failed")
            raise

        self.score.record(outcome)
        logger.debug("round resolved: %s vs %s -> %s", player_name, commitment.move_name, outcome.value)

        self.write(f"Your move: {player_name}")
        self.write(f"Computer move: {commitment.move_name}")
        self.write(_OUTCOME_LINES[outcome])
        self.write(f"HMAC key: {commitment.key}")
        self.write(self.score.format_summary("Result:"))
        self.write("")
        return outcome
