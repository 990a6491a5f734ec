"""
Game engine: the single entry point for a presentation layer.

Wraps either a FixedGrid or a ProceduralBlockStore behind one contract,
keeps aggregate statistics, owns the timer, and produces the result
record when a fixed game ends.
"""
import logging
import math
import random
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Union

import numpy as np

from .block_store import BlockStoreConfig, BlockStoreStats, ProceduralBlockStore
from .blocks import BlockCoordinate, DensityPolicy
from .board import TERMINAL_STATES, FixedGrid, GameState
from .cell import Cell
from .difficulty import BEGINNER, Difficulty, DifficultyConfig
from .timer import TimerManager


logger = logging.getLogger(__name__)


# Infinite-mode points per completed block, on top of one per revealed cell
COMPLETED_BLOCK_POINTS = 100


# ============================================================================
# Statistics
# ============================================================================

@dataclass
class GameStats:
    """Live counters for the current game."""

    elapsed_time: int = 0
    flags_placed: int = 0
    cells_revealed: int = 0
    total_mines: int = 0
    flags_remaining: int = 0


@dataclass(frozen=True)
class GameResult:
    """Outcome of a finished game, handed to leaderboard code."""

    score: int
    victory: bool
    elapsed_time: int
    difficulty: Difficulty
    date: datetime = field(default_factory=datetime.now)


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Orchestrates one game on a fixed or an infinite board.

    All gameplay methods are no-ops returning False when the move is not
    allowed. Infinite games have no win state; a mine only locks its
    block and the session continues.
    """

    def __init__(
        self,
        config: DifficultyConfig = BEGINNER,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        on_tick: Optional[Callable[[int], None]] = None,
        on_cell_revealed: Optional[Callable[[], None]] = None,
        on_flag_toggled: Optional[Callable[[bool], None]] = None,
        on_game_over: Optional[Callable[[GameResult], None]] = None,
        store_config: Optional[BlockStoreConfig] = None,
    ) -> None:
        """
        Initialize the engine and its first board.

        Args:
            config: Difficulty to start with.
            seed: Seed for mine placement and infinite-world generation.
            rng: Random source for fixed boards; overrides ``seed``.
            clock: Time source for the timer.
            on_tick: Display callback receiving elapsed seconds each tick.
            on_cell_revealed: Called once per revealed safe cell.
            on_flag_toggled: Called with True/False as flags come and go.
            on_game_over: Called once with the result of a finished game.
            store_config: Full infinite-board configuration; derived from
                ``config`` when omitted.
        """
        self.seed = seed
        self.rng = rng or random.Random(seed)
        self.timer = TimerManager(clock=clock, on_tick=on_tick)
        self.on_cell_revealed = on_cell_revealed
        self.on_flag_toggled = on_flag_toggled
        self.on_game_over = on_game_over
        self._store_config = store_config
        self.config = config
        self._grid: Union[FixedGrid, ProceduralBlockStore, None] = None
        self.restart()

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def set_config(self, config: DifficultyConfig) -> None:
        """Switch difficulty and start a new game on a matching board."""
        switching = config.is_infinite != self.config.is_infinite
        self.config = config
        if switching:
            logger.info(
                "Switching to %s board", "infinite" if config.is_infinite else "fixed"
            )
        self.restart()

    def restart(self) -> None:
        """Discard the current board and start a fresh game."""
        self.timer.reset()
        self._flags_placed = 0
        self._cells_revealed = 0
        self._result: Optional[GameResult] = None
        self._infinite_state = GameState.NOT_STARTED
        if self.config.is_infinite:
            self._grid = ProceduralBlockStore(
                self._build_store_config(),
                on_cell_revealed=self._handle_cell_revealed,
                on_flag_toggled=self._handle_flag_toggled,
            )
        else:
            self._grid = FixedGrid(
                self.config,
                timer=self.timer,
                rng=self.rng,
                on_cell_revealed=self._handle_cell_revealed,
                on_flag_toggled=self._handle_flag_toggled,
            )

    def _build_store_config(self) -> BlockStoreConfig:
        if self._store_config is not None:
            return self._store_config
        return BlockStoreConfig(
            viewport_rows=self.config.rows,
            viewport_cols=self.config.cols,
            seed=self.seed,
            density=DensityPolicy(base=self.config.mine_density),
        )

    def cleanup(self) -> None:
        """Stop the timer and its display thread."""
        self.timer.stop()

    # ========================================================================
    # Callback Wiring
    # ========================================================================

    def _handle_cell_revealed(self) -> None:
        self._cells_revealed += 1
        if self.on_cell_revealed is not None:
            self.on_cell_revealed()

    def _handle_flag_toggled(self, increment: bool) -> None:
        self._flags_placed += 1 if increment else -1
        if self.on_flag_toggled is not None:
            self.on_flag_toggled(increment)

    # ========================================================================
    # Gameplay
    # ========================================================================

    @property
    def is_infinite(self) -> bool:
        return isinstance(self._grid, ProceduralBlockStore)

    def is_valid_coord(self, row: int, col: int) -> bool:
        return self._grid.is_valid_coord(row, col)

    def reveal_cell(self, row: int, col: int) -> bool:
        """Reveal a cell. Returns False when nothing changed."""
        if self.is_infinite:
            outcome = self._grid.reveal_cell(row, col)
            if outcome:
                self._begin_infinite()
            return bool(outcome)
        changed = self._grid.reveal_cell(row, col)
        self._check_game_over()
        return changed

    def toggle_flag(self, row: int, col: int) -> bool:
        """Cycle a cell through flagged, questioned and unrevealed."""
        changed = self._grid.toggle_flag(row, col)
        if changed and self.is_infinite:
            self._begin_infinite()
        return changed

    def chord_cell(self, row: int, col: int) -> bool:
        """Reveal the neighbors of a satisfied numbered cell."""
        if self.is_infinite:
            outcome = self._grid.chord_cell(row, col)
            if outcome:
                self._begin_infinite()
            return bool(outcome)
        fired = self._grid.chord_cell(row, col)
        self._check_game_over()
        return fired

    def _begin_infinite(self) -> None:
        if self._infinite_state == GameState.NOT_STARTED:
            self._infinite_state = GameState.IN_PROGRESS
            self.timer.start()

    def _check_game_over(self) -> None:
        if self._result is not None:
            return
        if self._grid.game_state not in TERMINAL_STATES:
            return
        self._result = GameResult(
            score=self.calculate_score(),
            victory=self._grid.game_state == GameState.WON,
            elapsed_time=self.timer.elapsed(),
            difficulty=self.config.difficulty,
        )
        if self.on_game_over is not None:
            self.on_game_over(self._result)

    # ========================================================================
    # Infinite Board Controls
    # ========================================================================

    @property
    def block_store(self) -> Optional[ProceduralBlockStore]:
        """The infinite board, or None in fixed mode."""
        return self._grid if self.is_infinite else None

    def pan_viewport(self, direction, amount: Optional[int] = None) -> bool:
        """Move the infinite viewport; False in fixed mode."""
        if not self.is_infinite:
            return False
        return self._grid.pan(direction, amount)

    def resume_flood_fill(self) -> bool:
        """Continue an infinite-board cascade cut short by its size limit."""
        if not self.is_infinite:
            return False
        return bool(self._grid.resume_flood_fill())

    def zoom_viewport(self, zoom: float) -> bool:
        """Change the infinite viewport's zoom; False in fixed mode."""
        if not self.is_infinite:
            return False
        self._grid.set_zoom(zoom)
        return True

    def unlock_block_with_currency(self, block_row: int, block_col: int) -> bool:
        if not self.is_infinite:
            return False
        return self._grid.unlock_with_currency(BlockCoordinate(block_row, block_col))

    def grant_block_unlock(self, block_row: int, block_col: int) -> bool:
        """Unlock a block after an external reward such as a watched ad."""
        if not self.is_infinite:
            return False
        return self._grid.grant_unlock(BlockCoordinate(block_row, block_col))

    def grant_currency(self, amount: int) -> bool:
        if not self.is_infinite:
            return False
        self._grid.grant_currency(amount)
        return True

    def block_stats(self) -> Optional[BlockStoreStats]:
        if not self.is_infinite:
            return None
        return self._grid.stats()

    # ========================================================================
    # State Accessors
    # ========================================================================

    def get_game_state(self) -> GameState:
        if self.is_infinite:
            return self._infinite_state
        return self._grid.game_state

    def get_grid(self) -> List[List[Cell]]:
        """Snapshot of the whole fixed board, or of the infinite viewport."""
        if self.is_infinite:
            return self._grid.get_viewport_grid()
        return self._grid.get_grid()

    def get_viewport_grid(self) -> List[List[Cell]]:
        """Snapshot of the visible window (the whole board when fixed)."""
        return self.get_grid()

    def get_observation(self) -> np.ndarray:
        if self.is_infinite:
            return self._grid.get_viewport_observation()
        return self._grid.get_observation()

    def get_stats(self) -> GameStats:
        total_mines = (
            self._grid.total_mines if self.is_infinite else self._grid.mine_count
        )
        return GameStats(
            elapsed_time=self.timer.elapsed(),
            flags_placed=self._flags_placed,
            cells_revealed=self._cells_revealed,
            total_mines=total_mines,
            flags_remaining=total_mines - self._flags_placed,
        )

    def calculate_score(self) -> int:
        """
        Score of the current game.

        Fixed boards score only when won, decaying with time. Infinite
        boards score exploration: revealed cells plus a bonus per
        completed block, weighted by the difficulty multiplier.
        """
        if not self.is_infinite:
            return self._grid.calculate_score()
        points = self._cells_revealed + COMPLETED_BLOCK_POINTS * self._grid.completed_blocks
        return int(math.floor(points * self.config.score_multiplier))

    @property
    def result(self) -> Optional[GameResult]:
        """Result of the finished fixed game, if it has ended."""
        return self._result
