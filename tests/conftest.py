"""
Pytest configuration and shared fixtures.
"""
import random
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell


# Mines of the reference 8x8 board:
#     # 3 # # 1 0 0 0
#     # 4 2 3 2 1 0 0
#     # 3 1 2 # 1 0 0
#     1 3 # 3 1 1 0 0
#     0 2 # 2 0 0 0 0
#     0 1 1 1 1 1 1 0
#     0 0 0 1 2 # 1 0
#     0 0 0 1 # 2 1 0
FIXTURE_MINES: List[Tuple[int, int]] = [
    (0, 0), (0, 2), (0, 3),
    (1, 0),
    (2, 0), (2, 4),
    (3, 2),
    (4, 2),
    (6, 5),
    (7, 4),
]

FIXTURE_LAYOUT = [
    "# 3 # # 1 0 0 0",
    "# 4 2 3 2 1 0 0",
    "# 3 1 2 # 1 0 0",
    "1 3 # 3 1 1 0 0",
    "0 2 # 2 0 0 0 0",
    "0 1 1 1 1 1 1 0",
    "0 0 0 1 2 # 1 0",
    "0 0 0 1 # 2 1 0",
]


# ============================================================================
# Test Doubles
# ============================================================================

class ScriptedRandom(random.Random):
    """Random source that hands out a fixed sequence from randrange."""

    def __init__(self, values: Iterable[int]) -> None:
        super().__init__(0)
        self._values = iter(values)

    def randrange(self, *args, **kwargs) -> int:
        return next(self._values)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def scripted_rng(positions: Sequence[Tuple[int, int]]) -> ScriptedRandom:
    """Random source whose draws land mines on the given (row, col)s."""
    return ScriptedRandom(v for position in positions for v in position)


def make_board(
    width: int,
    height: int,
    mines: Sequence[Tuple[int, int]],
    clock: FakeClock = None,
) -> Board:
    """Build a board with mines at exactly the given positions."""
    return Board(
        BoardConfig(width, height, len(mines)),
        rng=scripted_rng(mines),
        clock=clock or FakeClock(),
    )


def count_cells(board: Board, predicate) -> int:
    """Count cells on the board satisfying predicate."""
    return sum(
        1
        for row in range(board.height)
        for col in range(board.width)
        if predicate(board.get_cell(row, col))
    )


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fixture_board(clock: FakeClock) -> Board:
    """The reference 8x8 board with 10 mines."""
    return make_board(8, 8, FIXTURE_MINES, clock)


@pytest.fixture
def default_board() -> Board:
    """Create a default 8x8 board with 10 mines."""
    return Board(rng=random.Random(5))


@pytest.fixture
def corner_board(clock: FakeClock) -> Board:
    """A 3x3 board with a single mine in the bottom-right corner."""
    return make_board(3, 3, [(2, 2)], clock)


@pytest.fixture
def empty_board(clock: FakeClock) -> Board:
    """Create a board with no mines for cascade testing."""
    return make_board(5, 5, [], clock)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(8, 8, 10)
