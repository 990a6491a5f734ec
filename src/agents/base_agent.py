"""
Base agent interface for automated play.

Agents pick which cell of an observation to reveal; they drive the
engine through the same calls a player would make.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from minegrid.cell import OBS_UNREVEALED


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for agents.

    Actions are flat indices into the observation: row * cols + col.
    """

    def __init__(self, rows: int, cols: int) -> None:
        """
        Initialize the agent.

        Args:
            rows: Number of rows in the observed window.
            cols: Number of columns in the observed window.
        """
        self.rows = rows
        self.cols = cols

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell observation values.
            valid_actions: Optional boolean mask of valid actions.

        Returns:
            Action index (row * cols + col).
        """

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.cols, int(action) % self.cols

    def position_to_action(self, row: int, col: int) -> int:
        """Convert (row, col) position to flat action index."""
        return row * self.cols + col

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """Boolean mask of unrevealed cells in an observation."""
        return observation.flatten() == OBS_UNREVEALED

    def reset(self) -> None:
        """Reset agent state for a new game."""
