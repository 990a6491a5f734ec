"""
Blocks of the infinite board.

The unbounded board is tiled by square blocks. A block's mine layout is
a pure function of the global seed, the block coordinate and (after a
first click) the cells kept clear around that click, so a block that is
dropped from memory regenerates identically.
"""
import random
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from .cell import Cell


# ============================================================================
# Constants
# ============================================================================

DEFAULT_BLOCK_SIZE = 8

# Mine density at the origin block, growth per block of distance, and cap
BASE_DENSITY = 0.15
DENSITY_STEP = 0.02
MAX_DENSITY = 0.35

# Fraction of revealed cells after which a block counts as explored
EXPLORED_FRACTION = 0.7

# Spatial hash primes for per-block seeds
_ROW_PRIME = 73856093
_COL_PRIME = 19349663
_SEED_MASK = 0xFFFFFFFF


# ============================================================================
# Coordinates
# ============================================================================

class BlockCoordinate(NamedTuple):
    """Position of a block in block units."""

    block_row: int
    block_col: int

    @classmethod
    def containing(cls, row: int, col: int, size: int) -> "BlockCoordinate":
        """Block that holds the absolute cell (row, col)."""
        return cls(row // size, col // size)

    def chebyshev_distance(self, other: Optional["BlockCoordinate"] = None) -> int:
        """Distance in blocks to another block (default: the origin block)."""
        other_row, other_col = other if other is not None else (0, 0)
        return max(abs(self.block_row - other_row), abs(self.block_col - other_col))

    def orthogonal_neighbors(self) -> List["BlockCoordinate"]:
        """The four blocks sharing an edge with this one."""
        row, col = self
        return [
            BlockCoordinate(row - 1, col),
            BlockCoordinate(row + 1, col),
            BlockCoordinate(row, col - 1),
            BlockCoordinate(row, col + 1),
        ]

    def surrounding(self) -> List["BlockCoordinate"]:
        """The eight blocks sharing an edge or a corner with this one."""
        row, col = self
        return [
            BlockCoordinate(row + delta_row, col + delta_col)
            for delta_row in (-1, 0, 1)
            for delta_col in (-1, 0, 1)
            if (delta_row, delta_col) != (0, 0)
        ]

    def origin_cell(self, size: int) -> Tuple[int, int]:
        """Absolute coordinates of the block's top-left cell."""
        return self.block_row * size, self.block_col * size


# ============================================================================
# Density Policy
# ============================================================================

@dataclass(frozen=True)
class DensityPolicy:
    """
    Mine density as a function of distance from the origin block.

    density = min(maximum, base + step * chebyshev_distance)
    """

    base: float = BASE_DENSITY
    step: float = DENSITY_STEP
    maximum: float = MAX_DENSITY

    def __post_init__(self) -> None:
        if not 0.0 <= self.base <= 1.0 or not 0.0 <= self.maximum <= 1.0:
            raise ValueError("Mine densities must lie in [0, 1]")
        if self.step < 0:
            raise ValueError("Density step cannot be negative")

    def density_for(self, coord: BlockCoordinate) -> float:
        """Mine density used when generating the given block."""
        return min(self.maximum, self.base + self.step * coord.chebyshev_distance())

    def mines_for(self, coord: BlockCoordinate, size: int) -> int:
        """Number of mines a block of the given size should hold."""
        return int(size * size * self.density_for(coord))


# ============================================================================
# Generation
# ============================================================================

def block_seed(seed: int, coord: BlockCoordinate) -> int:
    """Per-block seed mixed from the global seed and the coordinate."""
    spatial = (coord.block_row * _ROW_PRIME) ^ (coord.block_col * _COL_PRIME)
    return (seed ^ spatial) & _SEED_MASK


def generate_mine_layout(
    seed: int,
    coord: BlockCoordinate,
    size: int,
    mine_count: int,
    safe_cells: Iterable[Tuple[int, int]] = (),
) -> FrozenSet[Tuple[int, int]]:
    """
    Choose the mine cells of a block.

    Args:
        seed: Global seed of the session.
        coord: Block coordinate.
        size: Block edge length in cells.
        mine_count: Mines requested; fewer are placed if the pool is short.
        safe_cells: Local (row, col) cells that must stay mine-free.

    Returns:
        Local (row, col) positions of the mines.
    """
    excluded = set(safe_cells)
    candidates = [
        (row, col)
        for row in range(size)
        for col in range(size)
        if (row, col) not in excluded
    ]
    rng = random.Random(block_seed(seed, coord))
    rng.shuffle(candidates)
    return frozenset(candidates[:min(mine_count, len(candidates))])


# ============================================================================
# Block
# ============================================================================

@dataclass
class Block:
    """
    A square tile of the infinite board.

    Cells carry absolute coordinates; ``cells[r][c]`` is the cell at
    local offset (r, c) from the block's top-left corner.
    """

    coordinate: BlockCoordinate
    cells: List[List[Cell]] = field(repr=False)
    difficulty: float = 0.0
    is_locked: bool = False
    is_explored: bool = False
    # Layout differs from the seed-only layout; such blocks are never evicted
    relaid: bool = False

    @classmethod
    def build(
        cls,
        coordinate: BlockCoordinate,
        size: int,
        mines: Iterable[Tuple[int, int]],
        difficulty: float,
    ) -> "Block":
        """Create a block with unrevealed cells and the given local mines."""
        start_row, start_col = coordinate.origin_cell(size)
        mine_set = set(mines)
        cells = [
            [
                Cell(
                    is_mine=(row, col) in mine_set,
                    row=start_row + row,
                    col=start_col + col,
                )
                for col in range(size)
            ]
            for row in range(size)
        ]
        return cls(coordinate=coordinate, cells=cells, difficulty=difficulty)

    @property
    def size(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def local_cell(self, row: int, col: int) -> Cell:
        """Cell at an absolute position that lies inside this block."""
        start_row, start_col = self.coordinate.origin_cell(self.size)
        return self.cells[row - start_row][col - start_col]

    def mine_positions(self) -> FrozenSet[Tuple[int, int]]:
        """Local positions of the block's mines."""
        return frozenset(
            (row, col)
            for row in range(self.size)
            for col in range(self.size)
            if self.cells[row][col].is_mine
        )

    def relayout(self, mines: Iterable[Tuple[int, int]]) -> None:
        """Replace the mine layout. Counts must be recomputed afterwards."""
        mine_set = set(mines)
        for row in range(self.size):
            for col in range(self.size):
                self.cells[row][col].is_mine = (row, col) in mine_set
        self.relaid = True

    @property
    def mine_count(self) -> int:
        return sum(1 for cell in self if cell.is_mine)

    @property
    def revealed_count(self) -> int:
        """Revealed cells, a revealed mine included."""
        return sum(1 for cell in self if cell.is_revealed)

    @property
    def safe_revealed_count(self) -> int:
        return sum(1 for cell in self if cell.is_revealed and not cell.is_mine)

    @property
    def flag_count(self) -> int:
        return sum(1 for cell in self if cell.is_flagged)

    @property
    def is_completed(self) -> bool:
        """All non-mine cells revealed."""
        return self.safe_revealed_count == self.size * self.size - self.mine_count

    @property
    def is_pristine(self) -> bool:
        """No player interaction has touched this block."""
        if self.is_locked or self.relaid:
            return False
        return all(cell.is_unrevealed for cell in self)

    def update_explored(self) -> bool:
        """Mark the block explored once enough cells are revealed."""
        if not self.is_explored:
            threshold = EXPLORED_FRACTION * self.size * self.size
            self.is_explored = self.revealed_count >= threshold
        return self.is_explored
