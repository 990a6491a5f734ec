"""
Agents for automated play.

- RandomAgent: baseline random selection of unrevealed cells
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent

__all__ = [
    "BaseAgent",
    "RandomAgent",
]
