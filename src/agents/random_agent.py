"""
Random agent: reveals uniformly chosen unrevealed cells.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent


class RandomAgent(BaseAgent):
    """
    Agent that selects valid actions uniformly at random.

    Serves as a baseline and as a driver for exploring the infinite board.
    """

    def __init__(
        self,
        rows: int = 9,
        cols: int = 9,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(rows, cols)
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a random valid action.

        Returns:
            Random action index, or -1 when no action is valid.
        """
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.flatnonzero(valid_actions)
        if len(valid_indices) == 0:
            return -1
        return int(self.rng.choice(valid_indices))
