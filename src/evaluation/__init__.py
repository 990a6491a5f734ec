"""
Evaluation module.

Headless evaluation of agents on fixed boards and exploration runs on
the infinite board.
"""
from .evaluator import Evaluator, ExplorationRunner, ExplorationStats

__all__ = [
    "Evaluator",
    "ExplorationRunner",
    "ExplorationStats",
]
