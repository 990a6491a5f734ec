"""
Evaluation of agents on fixed and infinite boards.

Plays games headlessly through the engine contract and collects
summary statistics.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

import numpy as np

from agents.base_agent import BaseAgent
from minegrid.block_store import PanDirection
from minegrid.difficulty import BEGINNER, INFINITE, DifficultyConfig
from minegrid.engine import GameEngine
from minegrid.environment import MinesweeperEnv


logger = logging.getLogger(__name__)


# ============================================================================
# Fixed Board Evaluation
# ============================================================================

class Evaluator:
    """
    Evaluate and compare agents on a fixed board.

    Provides standardized evaluation across different agent types.
    """

    def __init__(
        self,
        config: Optional[DifficultyConfig] = None,
        num_episodes: int = 100,
        max_steps: int = 500,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            config: Board configuration for evaluation.
            num_episodes: Number of games to play.
            max_steps: Maximum moves per game.
        """
        self.config = config or BEGINNER
        self.num_episodes = num_episodes
        self.max_steps = max_steps

    def evaluate(self, agent: BaseAgent, seed: Optional[int] = None) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.
            seed: Seed for the first game; later games follow from it.

        Returns:
            Dictionary with evaluation metrics.
        """
        env = MinesweeperEnv(config=self.config)

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_revealed = 0

        for episode in range(self.num_episodes):
            observation, _ = env.reset(seed=None if seed is None else seed + episode)
            agent.reset()

            for _ in range(self.max_steps):
                action = agent.select_action(observation, env.get_action_mask())
                if action < 0:
                    break
                observation, reward, terminated, truncated, info = env.step(action)
                total_reward += float(reward)
                total_steps += 1

                if terminated or truncated:
                    if info["game_state"] == "WON":
                        wins += 1
                    total_revealed += info["revealed"]
                    break

        logger.debug("Evaluated %d games: %d wins", self.num_episodes, wins)
        return {
            "win_rate": wins / self.num_episodes,
            "avg_reward": total_reward / self.num_episodes,
            "avg_steps": total_steps / self.num_episodes,
            "avg_revealed": total_revealed / self.num_episodes,
        }

    def compare(self, agents: Dict[str, BaseAgent]) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        return {name: self.evaluate(agent) for name, agent in agents.items()}


# ============================================================================
# Infinite Board Exploration
# ============================================================================

@dataclass
class ExplorationStats:
    """Summary of an exploration run on the infinite board."""

    steps: int = 0
    cells_revealed: int = 0
    mines_hit: int = 0
    resident_blocks: int = 0
    completed_blocks: int = 0
    locked_blocks: int = 0
    coins: int = 0
    score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for reporting."""
        return dict(self.__dict__)


class ExplorationRunner:
    """
    Drive an infinite game with an agent that reveals viewport cells
    and periodically pans in a random direction.
    """

    def __init__(
        self,
        config: DifficultyConfig = INFINITE,
        seed: Optional[int] = None,
        pan_every: int = 10,
    ) -> None:
        self.engine = GameEngine(config, seed=seed)
        self.pan_every = pan_every
        self.rng = np.random.default_rng(seed)

    def run(self, agent: BaseAgent, steps: int = 200) -> ExplorationStats:
        """Play ``steps`` moves and report the state of the board."""
        store = self.engine.block_store
        directions = list(PanDirection)
        stats = ExplorationStats()

        for step in range(steps):
            if step and step % self.pan_every == 0:
                self.engine.pan_viewport(directions[self.rng.integers(len(directions))])

            observation = self.engine.get_observation()
            action = agent.select_action(observation)
            if action < 0:
                self.engine.pan_viewport(PanDirection.RIGHT)
                continue
            row, col = agent.action_to_position(action)
            self.engine.reveal_cell(store.viewport.row + row, store.viewport.col + col)
            stats.steps += 1

        board = store.stats()
        stats.cells_revealed = self.engine.get_stats().cells_revealed
        stats.mines_hit = board.mines_hit
        stats.resident_blocks = board.resident_blocks
        stats.completed_blocks = board.completed_blocks
        stats.locked_blocks = board.locked_blocks
        stats.coins = board.coins
        stats.score = self.engine.calculate_score()
        return stats
