"""
Difficulty presets and board configuration.
"""
from dataclasses import dataclass
from enum import Enum


class Difficulty(Enum):
    """Difficulty tags carried into game results."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    EXPERT = "EXPERT"
    CUSTOM = "CUSTOM"
    INFINITE = "INFINITE"


@dataclass(frozen=True)
class DifficultyConfig:
    """
    Shape of a board and its scoring weight.

    For the infinite difficulty, rows and cols describe the viewport and
    mines / (rows * cols) is the base mine density of the origin block.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mines: Total mines to place.
        score_multiplier: Weight applied when scoring.
        difficulty: Preset this configuration belongs to.
    """

    rows: int = 9
    cols: int = 9
    mines: int = 10
    score_multiplier: float = 1.0
    difficulty: Difficulty = Difficulty.CUSTOM

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mines < 0:
            raise ValueError("Number of mines cannot be negative")
        if self.mines >= self.rows * self.cols:
            raise ValueError(
                f"Too many mines (max {self.rows * self.cols - 1})"
            )
        if self.score_multiplier < 0:
            raise ValueError("Score multiplier cannot be negative")

    @property
    def is_infinite(self) -> bool:
        """Check if this configuration selects the unbounded board."""
        return self.difficulty == Difficulty.INFINITE

    @property
    def total_cells(self) -> int:
        """Number of cells on a fixed board of this shape."""
        return self.rows * self.cols

    @property
    def mine_density(self) -> float:
        """Fraction of cells holding a mine."""
        return self.mines / self.total_cells


# Preset difficulty levels
BEGINNER = DifficultyConfig(9, 9, 10, 0.5, Difficulty.BEGINNER)
INTERMEDIATE = DifficultyConfig(16, 16, 40, 1.0, Difficulty.INTERMEDIATE)
EXPERT = DifficultyConfig(16, 30, 99, 2.0, Difficulty.EXPERT)
INFINITE = DifficultyConfig(20, 20, 60, 3.0, Difficulty.INFINITE)

PRESETS = {
    Difficulty.BEGINNER: BEGINNER,
    Difficulty.INTERMEDIATE: INTERMEDIATE,
    Difficulty.EXPERT: EXPERT,
    Difficulty.INFINITE: INFINITE,
}


def custom_config(rows: int, cols: int, mines: int) -> DifficultyConfig:
    """Build a user-specified fixed board configuration."""
    return DifficultyConfig(rows, cols, mines, 1.0, Difficulty.CUSTOM)
