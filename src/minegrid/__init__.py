"""
Minesweeper grid engine.

Provides the rules for fixed boards and for the unbounded, procedurally
generated infinite board, behind a single GameEngine contract.
"""
from .cell import Cell, CellState
from .difficulty import (
    BEGINNER,
    EXPERT,
    INFINITE,
    INTERMEDIATE,
    PRESETS,
    Difficulty,
    DifficultyConfig,
    custom_config,
)
from .timer import TimerManager
from .board import FixedGrid, GameState
from .blocks import Block, BlockCoordinate, DensityPolicy, generate_mine_layout
from .block_store import (
    BlockStoreConfig,
    BlockStoreStats,
    PanDirection,
    ProceduralBlockStore,
    RevealOutcome,
    Viewport,
)
from .engine import GameEngine, GameResult, GameStats
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Difficulty",
    "DifficultyConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "INFINITE",
    "PRESETS",
    "custom_config",
    "TimerManager",
    "FixedGrid",
    "GameState",
    "Block",
    "BlockCoordinate",
    "DensityPolicy",
    "generate_mine_layout",
    "BlockStoreConfig",
    "BlockStoreStats",
    "PanDirection",
    "ProceduralBlockStore",
    "RevealOutcome",
    "Viewport",
    "GameEngine",
    "GameResult",
    "GameStats",
    "MinesweeperEnv",
]
