"""
Board module for fixed-size games.

Implements the bounded grid with mine placement, cell revealing,
flag cycling, chording, and game state management.
"""
import logging
import math
import random
from collections import deque
from dataclasses import replace
from enum import Enum, auto
from typing import Callable, Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState
from .difficulty import BEGINNER, DifficultyConfig
from .timer import TimerManager


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of a game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


TERMINAL_STATES = (GameState.WON, GameState.LOST)

# Points available for an instant win before time decay and weighting
BASE_SCORE = 1000

NEIGHBOR_OFFSETS = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_row, delta_col) != (0, 0)
)


def time_decayed_score(elapsed: int, multiplier: float) -> int:
    """Winning score: a fixed bonus minus elapsed seconds, both weighted."""
    return max(0, int(math.floor(BASE_SCORE * multiplier - elapsed * multiplier)))


# ============================================================================
# Fixed Grid
# ============================================================================

class FixedGrid:
    """
    Bounded Minesweeper board.

    Mines are placed on the first reveal so the clicked cell and its
    neighbors are always safe. Owns the game state machine for the
    fixed mode: NOT_STARTED -> IN_PROGRESS -> WON | LOST.
    """

    def __init__(
        self,
        config: DifficultyConfig = BEGINNER,
        timer: Optional[TimerManager] = None,
        rng: Optional[random.Random] = None,
        on_cell_revealed: Optional[Callable[[], None]] = None,
        on_flag_toggled: Optional[Callable[[bool], None]] = None,
    ) -> None:
        """
        Initialize an empty board.

        Args:
            config: Board shape and mine count.
            timer: Timer started on the first interaction.
            rng: Random source for mine placement.
            on_cell_revealed: Called once per newly revealed safe cell.
            on_flag_toggled: Called with True when a flag is placed and
                False when one is removed.
        """
        self.config = config
        self.timer = timer or TimerManager()
        self.rng = rng or random.Random()
        self.on_cell_revealed = on_cell_revealed
        self.on_flag_toggled = on_flag_toggled
        self.reset()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def reset(self) -> None:
        """Reset board to initial state for a new game."""
        self._grid = self._create_empty_grid()
        self._game_state = GameState.NOT_STARTED
        self._mines_placed = False
        self._mine_locations: List[Tuple[int, int]] = []
        self._cells_revealed = 0
        self._flags_placed = 0
        self.timer.reset()

    def _create_empty_grid(self) -> List[List[Cell]]:
        return [
            [Cell(row=row, col=col) for col in range(self.config.cols)]
            for row in range(self.config.rows)
        ]

    def place_mines(self, first_row: int, first_col: int) -> None:
        """
        Place mines randomly, keeping the first click's 3x3 area clear.

        If the board cannot fit the requested mines outside that area,
        as many as possible are placed.

        Args:
            first_row: Row of the first revealed cell.
            first_col: Column of the first revealed cell.
        """
        candidates = [
            (row, col)
            for row in range(self.config.rows)
            for col in range(self.config.cols)
            if abs(row - first_row) > 1 or abs(col - first_col) > 1
        ]
        self.rng.shuffle(candidates)
        mines_to_place = min(self.config.mines, len(candidates))
        if mines_to_place < self.config.mines:
            logger.debug(
                "Only %d of %d mines fit outside the first-click area",
                mines_to_place, self.config.mines,
            )
        self.place_mines_at(candidates[:mines_to_place])

    def place_mines_at(self, positions: Iterable[Tuple[int, int]]) -> None:
        """
        Use an explicit mine layout instead of a random one.

        Intended for prepared boards such as tutorials. Positions outside
        the board are ignored.
        """
        self._mine_locations = []
        for row, col in positions:
            if self.is_valid_coord(row, col):
                self._grid[row][col].is_mine = True
                self._mine_locations.append((row, col))
        self._mines_placed = True
        self._calculate_adjacent_mines()

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if not self._grid[row][col].is_mine:
                    count = self._count_adjacent_mines(row, col)
                    self._grid[row][col].adjacent_mines = count

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for neighbor_row, neighbor_col in self._get_neighbors(row, col)
            if self._grid[neighbor_row][neighbor_col].is_mine
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Get the in-bounds Chebyshev neighbors of a cell."""
        neighbors = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self.is_valid_coord(new_row, new_col):
                neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_coord(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal_cell(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        On first reveal, places mines avoiding this cell's neighborhood and
        starts the timer. Empty cells cascade to their neighbors; a mine
        loses the game.

        Returns:
            True if the cell was revealed, False if the call was a no-op.
        """
        if not self._can_reveal(row, col):
            return False

        if self._game_state == GameState.NOT_STARTED:
            self._start_game()
        if not self._mines_placed:
            self.place_mines(row, col)

        cell = self._grid[row][col]
        if cell.is_mine:
            cell.reveal()
            self._lose()
            return True

        self._mark_revealed(cell)
        if cell.adjacent_mines == 0:
            self._flood_fill(row, col)

        self._check_win_condition()
        return True

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._game_state in TERMINAL_STATES:
            return False
        if not self.is_valid_coord(row, col):
            return False
        return self._grid[row][col].is_unrevealed

    def _start_game(self) -> None:
        self._game_state = GameState.IN_PROGRESS
        self.timer.start()

    def _mark_revealed(self, cell: Cell) -> None:
        cell.reveal()
        self._cells_revealed += 1
        if self.on_cell_revealed is not None:
            self.on_cell_revealed()

    def _flood_fill(self, row: int, col: int) -> None:
        """Reveal the connected zero region around a cell and its border."""
        frontier = deque([(row, col)])
        revealed = 0
        while frontier:
            current_row, current_col = frontier.popleft()
            for neighbor_row, neighbor_col in self._get_neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if not neighbor.is_unrevealed or neighbor.is_mine:
                    continue
                self._mark_revealed(neighbor)
                revealed += 1
                if neighbor.adjacent_mines == 0:
                    frontier.append((neighbor_row, neighbor_col))
        logger.debug("Flood fill from (%d, %d) revealed %d cells", row, col, revealed)

    def _lose(self) -> None:
        self._game_state = GameState.LOST
        self.timer.stop()
        for row, col in self._mine_locations:
            cell = self._grid[row][col]
            if not cell.is_flagged:
                cell.state = CellState.REVEALED
        logger.info("Game lost after %d revealed cells", self._cells_revealed)

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        safe_cells = self.config.total_cells - self.mine_count
        if self._cells_revealed != safe_cells:
            return
        self._game_state = GameState.WON
        self.timer.stop()
        for row, col in self._mine_locations:
            cell = self._grid[row][col]
            if not cell.is_flagged:
                cell.state = CellState.FLAGGED
                self._change_flags(True)
        logger.info("Game won in %d seconds", self.timer.elapsed())

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Cycle a cell through flagged, questioned and unrevealed.

        Returns:
            True if the cell changed, False if the call was a no-op.
        """
        if self._game_state in TERMINAL_STATES:
            return False
        if not self.is_valid_coord(row, col):
            return False
        cell = self._grid[row][col]
        if cell.is_revealed:
            return False

        if self._game_state == GameState.NOT_STARTED:
            self._start_game()

        previous = cell.cycle_mark()
        if previous == CellState.UNREVEALED:
            self._change_flags(True)
        elif previous == CellState.FLAGGED:
            self._change_flags(False)
        return True

    def _change_flags(self, increment: bool) -> None:
        self._flags_placed += 1 if increment else -1
        if self.on_flag_toggled is not None:
            self.on_flag_toggled(increment)

    def chord_cell(self, row: int, col: int) -> bool:
        """
        Reveal all unrevealed neighbors if the flag count matches the number.

        Returns:
            True if the chord fired, False otherwise.
        """
        if not self._can_chord(row, col):
            return False

        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._game_state in TERMINAL_STATES:
                break
            if self._grid[neighbor_row][neighbor_col].is_unrevealed:
                self.reveal_cell(neighbor_row, neighbor_col)
        return True

    def _can_chord(self, row: int, col: int) -> bool:
        """Check if chord action is valid."""
        if self._game_state != GameState.IN_PROGRESS:
            return False
        if not self.is_valid_coord(row, col):
            return False
        cell = self._grid[row][col]
        if not cell.is_revealed or cell.adjacent_mines == 0:
            return False
        return self._count_adjacent_flags(row, col) == cell.adjacent_mines

    def _count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        return sum(
            1 for neighbor_row, neighbor_col in self._get_neighbors(row, col)
            if self._grid[neighbor_row][neighbor_col].is_flagged
        )

    def calculate_score(self) -> int:
        """Score of a won game, 0 otherwise."""
        if self._game_state != GameState.WON:
            return 0
        return time_decayed_score(
            self.timer.elapsed(), self.config.score_multiplier
        )

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if the game still accepts moves."""
        return self._game_state not in TERMINAL_STATES

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    @property
    def mine_count(self) -> int:
        """Mines on the board; fewer than requested on crowded boards."""
        if self._mines_placed:
            return len(self._mine_locations)
        return self.config.mines

    @property
    def cells_revealed(self) -> int:
        """Safe cells revealed so far."""
        return self._cells_revealed

    @property
    def flags_placed(self) -> int:
        return self._flags_placed

    @property
    def flags_remaining(self) -> int:
        return self.mine_count - self._flags_placed

    def mine_locations(self) -> List[Tuple[int, int]]:
        """Positions of all placed mines."""
        return list(self._mine_locations)

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_coord(row, col):
            return None
        return self._grid[row][col]

    def get_grid(self) -> List[List[Cell]]:
        """Snapshot of every cell; changes to it do not affect the board."""
        return [[replace(cell) for cell in row] for row in self._grid]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array of Cell.to_observation() values.
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can be revealed.

        Returns:
            List of (row, col) positions that are unrevealed.
        """
        return [
            (row, col)
            for row in range(self.config.rows)
            for col in range(self.config.cols)
            if self._grid[row][col].is_unrevealed
        ]
