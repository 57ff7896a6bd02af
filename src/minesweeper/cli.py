"""
Console front end for the Minesweeper engine.

Reads one command per line, applies it to the current board and prints
the board back. Usage:
    minesweeper [--preset {beginner,intermediate,expert}] [--seed N]
"""
import argparse
import logging
import random
import sys
from typing import Callable, List, Optional, TextIO

from .board import Board, BoardConfig, GameState, PRESETS

logger = logging.getLogger(__name__)


HELP_TEXT = (
    "Available commands:\n"
    "h(help) -- print help\n"
    "n(new) [beginner|intermediate|expert]|[width height numMines]"
    " -- start a new game\n"
    "r(reveal) <row> <col> -- reveal a cell\n"
    "f(flag) <row> <col> -- flag a cell\n"
    "e(exit) -- quit"
)
GAME_ENDED_TEXT = "This game has ended -- type 'n' for a new game."
PROMPT = "> "


class CommandError(ValueError):
    """Raised for a command line that cannot be applied."""


def parse_int_args(command: str, expected: int) -> List[int]:
    """
    Parse the integer arguments following a command word.

    Args:
        command: The full command line, e.g. ``"r 3 4"``.
        expected: Number of integers the command takes.

    Returns:
        The parsed integers.

    Raises:
        CommandError: On a wrong argument count or a non-integer.
    """
    fields = command.split()[1:]
    if len(fields) != expected:
        raise CommandError(
            f"Wrong number of arguments for command '{command}': "
            f"expecting {expected}, got {len(fields)} -- type 'h' for help"
        )
    try:
        return [int(field) for field in fields]
    except ValueError:
        raise CommandError(
            f"Expecting integers following command '{command}'"
            " -- type 'h' for help"
        ) from None


# ============================================================================
# Console
# ============================================================================

class Console:
    """
    Line-oriented game session.

    Holds the current board and replaces it wholesale on ``new``.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        out: Optional[TextIO] = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.out = out or sys.stdout
        self.board = self._new_board(config or PRESETS["default"])

    def _new_board(self, config: BoardConfig) -> Board:
        board = Board(config, rng=self.rng)
        logger.debug(
            "New %dx%d game with %d mines, layout:\n%s",
            config.width, config.height, config.num_mines,
            board.render_layout(),
        )
        return board

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def handle(self, command: str) -> bool:
        """
        Apply one command line.

        Returns:
            False when the session should stop, True otherwise.
        """
        fields = command.split()
        if not fields:
            return True
        word = fields[0]

        if word in ("h", "help"):
            self._print(HELP_TEXT)
        elif word in ("e", "exit"):
            return False
        elif word in ("n", "new"):
            self._handle_new(command, fields[1:])
        # Moves need at least one argument to be recognised at all
        elif word in ("r", "reveal") and len(fields) > 1:
            self._handle_move(command, self.board.reveal)
        elif word in ("f", "flag") and len(fields) > 1:
            self._handle_move(command, self.board.flag)
        else:
            self._print("Bad command -- type 'h' for help")
        return True

    def _handle_new(self, command: str, args: List[str]) -> None:
        try:
            if not args:
                config = PRESETS["default"]
            elif len(args) == 1:
                if args[0] not in PRESETS:
                    raise CommandError(
                        "Expecting either 'beginner', 'intermediate' or"
                        " 'expert' -- type 'h' for help"
                    )
                config = PRESETS[args[0]]
            else:
                config = BoardConfig(*parse_int_args(command, 3))
        except ValueError as error:
            self._print(str(error))
            return
        self.board = self._new_board(config)
        self._print(self.board.render())

    def _handle_move(
        self, command: str, action: Callable[[int, int], bool]
    ) -> None:
        was_active = self.board.active
        try:
            row, col = parse_int_args(command, 2)
        except CommandError as error:
            self._print(str(error))
        else:
            action(row, col)

        if was_active and self.board.game_state == GameState.LOST:
            self._print("Game over :(")
        elif was_active and self.board.game_state == GameState.WON:
            self._print("You win!")
        self._print(self.board.render())
        if not self.board.active:
            self._print(GAME_ENDED_TEXT)

    def run(self, stream: TextIO) -> None:
        """Read and apply commands until ``exit`` or end of input."""
        self.out.write(PROMPT)
        self.out.flush()
        for line in stream:
            if not self.handle(line.strip()):
                return
            self.out.write(PROMPT)
            self.out.flush()


# ============================================================================
# Entry Point
# ============================================================================

def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run an interactive session on stdin."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play on the command line"
    )
    parser.add_argument(
        "--preset",
        choices=["beginner", "intermediate", "expert"],
        default="beginner",
        help="Board for the first game",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for mine placement"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity (DEBUG shows the mine layout)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    console = Console(PRESETS[args.preset], rng=random.Random(args.seed))
    console.run(sys.stdin)


if __name__ == "__main__":
    main()
