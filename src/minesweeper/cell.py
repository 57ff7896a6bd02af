"""
Cell module for the Minesweeper engine.

A cell's content (mine or not, and its neighbour count) is fixed when
the board is laid out. Only its visibility changes during play, through
the two player moves: uncovering it and toggling a flag on it.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Dict


class CellState(Enum):
    """What the player currently sees of a cell."""

    HIDDEN = "hidden"
    REVEALED = "revealed"
    FLAGGED = "flagged"


# Legal visibility changes per move; anything missing is refused
_ON_REVEAL: Dict[CellState, CellState] = {
    CellState.HIDDEN: CellState.REVEALED,
}
_ON_FLAG: Dict[CellState, CellState] = {
    CellState.HIDDEN: CellState.FLAGGED,
    CellState.FLAGGED: CellState.HIDDEN,
}

# Board glyphs and agent codes for cells whose content is not shown
_COVERED_GLYPHS: Dict[CellState, str] = {
    CellState.HIDDEN: "-",
    CellState.FLAGGED: "#",
}
_COVERED_CODES: Dict[CellState, int] = {
    CellState.HIDDEN: -1,
    CellState.FLAGGED: -2,
}
EXPLODED_GLYPH = "X"
EXPLODED_CODE = 9


@dataclass
class Cell:
    """
    A single square of the minefield.

    Attributes:
        is_mine: Whether this square holds a mine.
        adjacent_mines: Mines among the eight neighbours. Mine squares
            carry a count too; it is simply never shown.
        state: Current visibility.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def _move(self, transitions: Dict[CellState, CellState]) -> bool:
        new_state = transitions.get(self.state)
        if new_state is None:
            return False
        self.state = new_state
        return True

    def reveal(self) -> bool:
        """Uncover a hidden cell. Flagged and revealed cells refuse."""
        return self._move(_ON_REVEAL)

    def toggle_flag(self) -> bool:
        """Flag or unflag the cell. Revealed cells refuse."""
        return self._move(_ON_FLAG)

    @property
    def is_hidden(self) -> bool:
        return self.state is CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state is CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state is CellState.FLAGGED

    @property
    def glyph(self) -> str:
        """Character shown for this cell on the rendered board."""
        if not self.is_revealed:
            return _COVERED_GLYPHS[self.state]
        return EXPLODED_GLYPH if self.is_mine else str(self.adjacent_mines)

    def to_observation(self) -> int:
        """
        Encode what the player sees as an int for agents.

        -1 hidden, -2 flagged, 9 an uncovered mine, otherwise the
        neighbour count 0-8.
        """
        if not self.is_revealed:
            return _COVERED_CODES[self.state]
        return EXPLODED_CODE if self.is_mine else self.adjacent_mines
