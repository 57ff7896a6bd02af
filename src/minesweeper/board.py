"""
Board module for the Minesweeper engine.

Implements the minefield with mine placement, flood-fill revealing,
flagging, win/lose detection and elapsed-time tracking.
"""
import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .cell import Cell

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# (row, col) offsets, in the order the flood-fill visits neighbours
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 8
    height: int = 8
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.width * self.height


# Preset difficulty levels
BEGINNER = BoardConfig(8, 8, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(31, 16, 99)

PRESETS: Dict[str, BoardConfig] = {
    "default": BEGINNER,
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Mines are placed as soon as the board is created. A new game is a
    new Board; there is no way to reset one in place.

    Attributes:
        config: Dimensions and mine count.
        rng: Random source used for mine placement. Anything with a
            ``randrange`` method works, which keeps layouts reproducible.
        clock: Zero-argument callable returning seconds.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _game_state: GameState = GameState.PLAYING
    _revealed_count: int = 0
    _flagged_count: int = 0
    _started_at: Optional[float] = None
    _final_duration: float = 0.0

    def __post_init__(self) -> None:
        """Build the grid and lay the mines."""
        self._init_grid()
        self._place_mines()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def _place_mines(self) -> None:
        """
        Place mines by rejection sampling.

        Random positions are drawn until one without a mine turns up.
        Each mine bumps the count of its neighbours as it lands, so the
        counts are never recomputed afterwards.
        """
        placed = 0
        while placed < self.config.num_mines:
            row = self.rng.randrange(self.config.height)
            col = self.rng.randrange(self.config.width)
            cell = self._grid[row][col]
            if cell.is_mine:
                continue
            cell.is_mine = True
            placed += 1
            for neighbor_row, neighbor_col in self._get_neighbors(row, col):
                self._grid[neighbor_row][neighbor_col].adjacent_mines += 1

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(
        self, row: int, col: int
    ) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples in NEIGHBOR_OFFSETS order.
        """
        neighbors = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self._is_valid_position(new_row, new_col):
                neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        Revealing a mine loses the game. Revealing a cell with no
        adjacent mines uncovers its whole empty region and the numbered
        cells around it.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if the board changed, False if the call was ignored.
        """
        if not self._can_reveal(row, col):
            return False

        self._start_clock()

        cell = self._grid[row][col]
        if cell.is_mine:
            cell.reveal()
            self._revealed_count += 1
            self._finish(GameState.LOST)
            return True

        self._flood_reveal(row, col)
        self._check_win_condition()
        return True

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._game_state != GameState.PLAYING:
            return False
        if not self._is_valid_position(row, col):
            return False
        return self._grid[row][col].is_hidden

    def _flood_reveal(self, row: int, col: int) -> None:
        """
        Reveal from (row, col) outwards through zero-count cells.

        Depth-first with an explicit stack. Neighbours are pushed in
        reverse so they are visited in NEIGHBOR_OFFSETS order.
        """
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            cell = self._grid[current_row][current_col]
            if cell.is_mine or not cell.reveal():
                continue
            self._revealed_count += 1
            if cell.adjacent_mines == 0:
                neighbors = self._get_neighbors(current_row, current_col)
                stack.extend(reversed(neighbors))

    def flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Flags are not limited to the mine count.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if self._game_state != GameState.PLAYING:
            return False
        if not self._is_valid_position(row, col):
            return False

        cell = self._grid[row][col]
        if cell.is_revealed:
            return False

        self._start_clock()
        cell.toggle_flag()
        self._flagged_count += 1 if cell.is_flagged else -1

        self._check_win_condition()
        return True

    # ========================================================================
    # Game Lifecycle
    # ========================================================================

    def _start_clock(self) -> None:
        """Start timing on the first action of the game."""
        if self._started_at is None:
            self._started_at = self.clock()

    def _is_win(self) -> bool:
        """All safe cells uncovered and exactly the mine count flagged."""
        safe_cells = self.config.total_cells - self.config.num_mines
        return (
            self._flagged_count == self.config.num_mines
            and self._revealed_count == safe_cells
        )

    def _check_win_condition(self) -> None:
        """End the game as won if the win condition holds."""
        if self._is_win():
            self._finish(GameState.WON)

    def _finish(self, outcome: GameState) -> None:
        """Freeze the clock and leave the playing state."""
        self._final_duration = self.elapsed_seconds()
        self._game_state = outcome
        if outcome == GameState.LOST:
            logger.info("Game over after %.1f seconds", self._final_duration)
        else:
            logger.info("Game won after %.1f seconds", self._final_duration)

    def elapsed_seconds(self) -> float:
        """
        Seconds since the first action.

        Frozen once the game has ended; 0 before the first action.
        """
        if self._game_state != GameState.PLAYING:
            return self._final_duration
        if self._started_at is None:
            return 0.0
        return self.clock() - self._started_at

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mine_count(self) -> int:
        return self.config.num_mines

    @property
    def revealed_count(self) -> int:
        return self._revealed_count

    @property
    def flagged_count(self) -> int:
        return self._flagged_count

    @property
    def mines_remaining(self) -> int:
        """Mines not yet accounted for by flags; negative if over-flagged."""
        return self.config.num_mines - self._flagged_count

    @property
    def started_at(self) -> Optional[float]:
        return self._started_at

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def active(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._game_state == GameState.LOST

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def get_observation(self) -> np.ndarray:
        """
        Get the visible board as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for row in range(self.config.height):
            for col in range(self.config.width):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can be revealed.

        Returns:
            List of (row, col) positions of hidden cells.
        """
        actions = []
        for row in range(self.config.height):
            for col in range(self.config.width):
                if self._grid[row][col].is_hidden:
                    actions.append((row, col))
        return actions

    def get_flaggable_actions(self) -> List[Tuple[int, int]]:
        """Get list of (row, col) positions that can be flagged or unflagged."""
        return [
            (row, col)
            for row in range(self.config.height)
            for col in range(self.config.width)
            if not self._grid[row][col].is_revealed
        ]

    # ========================================================================
    # Rendering
    # ========================================================================

    def render(self) -> str:
        """
        Render the board the way the player sees it.

        Two header lines (mines remaining, whole seconds elapsed), a row
        of zero-padded column indices, a rule, then one line per row
        prefixed by its zero-padded index. Flags show as ``#``, hidden
        cells as ``-``, a revealed mine as ``X``, anything else as its
        adjacent mine count.
        """
        col_digits = len(str(self.config.width - 1))
        row_digits = len(str(self.config.height - 1))
        cell_width = col_digits + 1
        margin = " " * (row_digits + 1)

        lines = [
            f"Mines remaining: {self.mines_remaining}",
            f"Time elapsed: {self.elapsed_seconds():.0f} seconds",
            margin + "".join(
                " " + str(col).zfill(col_digits)
                for col in range(self.config.width)
            ),
            margin + "-" * (self.config.width * cell_width),
        ]
        for row_index, row in enumerate(self._grid):
            glyphs = "".join(cell.glyph.rjust(cell_width) for cell in row)
            lines.append(f"{str(row_index).zfill(row_digits)}|{glyphs}")
        return "\n".join(lines) + "\n"

    def render_layout(self) -> str:
        """Diagnostic view of the mine layout: mines as ``#``, else counts."""
        lines = []
        for row in self._grid:
            lines.append("".join(
                " #" if cell.is_mine else f" {cell.adjacent_mines}"
                for cell in row
            ))
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()
