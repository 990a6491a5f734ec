"""
Gymnasium environment wrapper for fixed-board games.

Drives a GameEngine through the standard RL interface so agents and
evaluation scripts exercise the same contract as a user interface.
"""
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import GameState
from .cell import OBS_MINE, OBS_QUESTIONED
from .difficulty import BEGINNER, DifficultyConfig
from .engine import GameEngine


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for fixed-size Minesweeper.

    Observation:
        2D int8 array of Cell.to_observation() values.

    Actions:
        Discrete action space of size rows * cols.
        Action i reveals the cell at (i // cols, i % cols).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": []}

    def __init__(self, config: Optional[DifficultyConfig] = None) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: beginner).
        """
        super().__init__()

        self.config = config or BEGINNER
        if self.config.is_infinite:
            raise ValueError("MinesweeperEnv only supports fixed boards")
        self.engine = GameEngine(self.config)

        self.observation_space = spaces.Box(
            low=OBS_QUESTIONED,
            high=OBS_MINE,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0
        self._total_safe_cells = self.config.total_cells - self.config.mines

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.engine.rng.seed(seed)
        self.engine.restart()
        self._steps = 0
        return self.engine.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)
        observation = self.engine.get_observation()
        state = self.engine.get_game_state()
        terminated = state in (GameState.WON, GameState.LOST)

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.config.cols, int(action) % self.config.cols

    def _calculate_reward(self, row: int, col: int) -> float:
        """Reveal a cell and score the consequence."""
        if not self.engine.reveal_cell(row, col):
            return -0.1

        state = self.engine.get_game_state()
        if state == GameState.WON:
            return 10.0
        if state == GameState.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        stats = self.engine.get_stats()
        return {
            "steps": self._steps,
            "revealed": stats.cells_revealed,
            "total_safe": self._total_safe_cells,
            "game_state": self.engine.get_game_state().name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = cell can be revealed.
        """
        if self.engine.get_game_state() in (GameState.WON, GameState.LOST):
            return np.zeros(self.action_space.n, dtype=bool)
        return (self.engine.get_observation() == -1).flatten()
