"""
Cell module for the grid engine.

Represents individual cells on a fixed board or inside an infinite-mode
block, with their visible state and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visible states of a cell."""

    UNREVEALED = auto()
    REVEALED = auto()
    FLAGGED = auto()
    QUESTIONED = auto()


# Observation values for non-numeric states
OBS_UNREVEALED = -1
OBS_FLAGGED = -2
OBS_QUESTIONED = -3
OBS_MINE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single cell of the grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        state: Current visible state.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        row: Absolute row of the cell.
        col: Absolute column of the cell.
    """

    is_mine: bool = False
    state: CellState = CellState.UNREVEALED
    adjacent_mines: int = 0
    row: int = 0
    col: int = 0

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell was revealed, False if it was not unrevealed.
        """
        if self.state != CellState.UNREVEALED:
            return False
        self.state = CellState.REVEALED
        return True

    def cycle_mark(self) -> CellState:
        """
        Advance the flag cycle: unrevealed -> flagged -> questioned -> unrevealed.

        Returns:
            The state before the change. Revealed cells are left untouched.
        """
        previous = self.state
        if previous == CellState.UNREVEALED:
            self.state = CellState.FLAGGED
        elif previous == CellState.FLAGGED:
            self.state = CellState.QUESTIONED
        elif previous == CellState.QUESTIONED:
            self.state = CellState.UNREVEALED
        return previous

    @property
    def is_unrevealed(self) -> bool:
        """Check if cell is unrevealed."""
        return self.state == CellState.UNREVEALED

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_questioned(self) -> bool:
        """Check if cell carries a question mark."""
        return self.state == CellState.QUESTIONED

    def to_observation(self) -> int:
        """
        Convert cell to an integer observation value.

        Returns:
            -1: Unrevealed cell
            -2: Flagged cell
            -3: Questioned cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
        """
        if self.state == CellState.UNREVEALED:
            return OBS_UNREVEALED
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.state == CellState.QUESTIONED:
            return OBS_QUESTIONED
        if self.is_mine:
            return OBS_MINE
        return self.adjacent_mines
