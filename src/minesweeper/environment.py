"""
Gymnasium environment wrapper for Minesweeper.

Lets automated agents drive a Board through the standard RL interface.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * width * height. With
        n = width * height, action i < n reveals cell (i // width,
        i % width) and action n + i toggles the flag on that cell.
        Winning requires flagging every mine, so both kinds are needed.

    Rewards:
        - +1 for a successful reveal
        - 0 for a flag toggle
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action the board ignores
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 8x8 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config)
        self.render_mode = render_mode

        self._num_cells = self.config.height * self.config.width

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        # Reveal actions first, then flag actions
        self.action_space = spaces.Discrete(2 * self._num_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game on a fresh board.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        board_seed = int(self.np_random.integers(0, 2**32))
        self.board = Board(self.config, rng=random.Random(board_seed))
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Reveal or flag action index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        is_flag, row, col = self._decode_action(action)
        self._steps += 1

        reward = self._apply_action(is_flag, row, col)

        observation = self.board.get_observation()
        terminated = not self.board.active
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Split an action index into (is_flag, row, col)."""
        action = int(action)
        is_flag = action >= self._num_cells
        index = action - self._num_cells if is_flag else action
        return is_flag, index // self.config.width, index % self.config.width

    def _apply_action(self, is_flag: bool, row: int, col: int) -> float:
        """
        Apply an action to the board and score it.

        Args:
            is_flag: Toggle a flag instead of revealing.
            row: Row index.
            col: Column index.

        Returns:
            Reward value.
        """
        if is_flag:
            changed = self.board.flag(row, col)
        else:
            changed = self.board.reveal(row, col)

        if not changed:
            return -0.1
        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        return 0.0 if is_flag else 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.revealed_count,
            "flagged": self.board.flagged_count,
            "mines_remaining": self.board.mines_remaining,
            "game_state": self.board.game_state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions the board would accept.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if not self.board.active:
            return mask
        for row, col in self.board.get_valid_actions():
            mask[row * self.config.width + col] = True
        for row, col in self.board.get_flaggable_actions():
            mask[self._num_cells + row * self.config.width + col] = True
        return mask
