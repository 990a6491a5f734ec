"""
Block store for the infinite board.

Holds the sparse map of materialized blocks keyed by coordinate and
implements the rules of the unbounded game on top of it: lazy
generation, adjacency across block edges, cascading reveals that cross
into neighboring blocks, per-block locking with its unlock economy, and
the viewport that decides which blocks stay in memory.

Adjacency is computed in two phases. A block's mine layout never depends
on its neighbors, so counting a cell's neighbors reads the resident
block when there is one and otherwise regenerates the neighbor's layout
on the fly without storing it. Building one block therefore never
requires building another, and counts along block edges are exact.
"""
import logging
import math
import random
from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Deque, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

import numpy as np

from .blocks import (
    DEFAULT_BLOCK_SIZE,
    Block,
    BlockCoordinate,
    DensityPolicy,
    generate_mine_layout,
)
from .board import NEIGHBOR_OFFSETS
from .cell import Cell, CellState


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class PanDirection(Enum):
    """Directions the viewport can move in."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


_PAN_DELTAS = {
    PanDirection.UP: (-1, 0),
    PanDirection.DOWN: (1, 0),
    PanDirection.LEFT: (0, -1),
    PanDirection.RIGHT: (0, 1),
}

MIN_ZOOM = 0.5
MAX_ZOOM = 2.0

# Coins charged per unlock, scaled by (1 + distance from origin)
UNLOCK_BASE_COST = 50
# Coins awarded per completed block, scaled by (1 + distance from origin)
COMPLETION_REWARD = 10

# Minimap status codes
MINIMAP_ABSENT = 0
MINIMAP_RESIDENT = 1
MINIMAP_EXPLORED = 2
MINIMAP_COMPLETED = 3
MINIMAP_LOCKED = 4


# ============================================================================
# Configuration and Results
# ============================================================================

@dataclass
class BlockStoreConfig:
    """
    Configuration of an infinite board.

    Attributes:
        viewport_rows: Rows shown at zoom 1.
        viewport_cols: Columns shown at zoom 1.
        block_size: Edge length of a block in cells.
        seed: Global generation seed; random when None.
        density: Mine density policy.
        buffer_blocks: Extra ring of blocks materialized around the view.
        keep_radius: Blocks farther than this from the view's centre
            block may be evicted when untouched.
        unlock_base_cost: Coin cost of an unlock at the origin block.
        completion_reward: Coins earned for completing the origin block.
        initial_coins: Starting coin balance.
        flood_fill_limit: Maximum cells one cascade may reveal.
    """

    viewport_rows: int = 20
    viewport_cols: int = 20
    block_size: int = DEFAULT_BLOCK_SIZE
    seed: Optional[int] = None
    density: DensityPolicy = field(default_factory=DensityPolicy)
    buffer_blocks: int = 1
    keep_radius: int = 5
    unlock_base_cost: int = UNLOCK_BASE_COST
    completion_reward: int = COMPLETION_REWARD
    initial_coins: int = 0
    flood_fill_limit: int = 4096

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.block_size < 3:
            raise ValueError("Block size must be at least 3")
        if self.viewport_rows < 1 or self.viewport_cols < 1:
            raise ValueError("Viewport dimensions must be positive")
        if self.buffer_blocks < 0 or self.keep_radius < 0:
            raise ValueError("Block radii cannot be negative")
        if self.unlock_base_cost < 0 or self.completion_reward < 0:
            raise ValueError("Costs and rewards cannot be negative")
        if self.flood_fill_limit < 1:
            raise ValueError("Flood fill limit must be positive")


@dataclass
class RevealOutcome:
    """What a reveal or chord did on the infinite board."""

    cells_revealed: int = 0
    hit_mine: bool = False
    locked_blocks: List[BlockCoordinate] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.cells_revealed > 0 or self.hit_mine

    def merge(self, other: "RevealOutcome") -> None:
        self.cells_revealed += other.cells_revealed
        self.hit_mine = self.hit_mine or other.hit_mine
        self.locked_blocks.extend(other.locked_blocks)


@dataclass
class Viewport:
    """Rectangular window over the unbounded board."""

    row: int = 0
    col: int = 0
    rows: int = 20
    cols: int = 20
    zoom: float = 1.0

    @property
    def visible_rows(self) -> int:
        return max(1, math.ceil(self.rows / self.zoom))

    @property
    def visible_cols(self) -> int:
        return max(1, math.ceil(self.cols / self.zoom))

    @property
    def center(self) -> Tuple[int, int]:
        return (
            self.row + self.visible_rows // 2,
            self.col + self.visible_cols // 2,
        )


@dataclass
class BlockStoreStats:
    """Aggregate counters for the infinite board."""

    resident_blocks: int
    explored_blocks: int
    locked_blocks: int
    completed_blocks: int
    mines_hit: int
    coins: int


# ============================================================================
# Block Store
# ============================================================================

class ProceduralBlockStore:
    """
    Rules engine for the unbounded board.

    Every block is generated on first reference. Cell coordinates are
    absolute and may be negative.
    """

    def __init__(
        self,
        config: Optional[BlockStoreConfig] = None,
        on_cell_revealed: Optional[Callable[[], None]] = None,
        on_flag_toggled: Optional[Callable[[bool], None]] = None,
    ) -> None:
        """
        Initialize the store and materialize the initial viewport.

        Args:
            config: Board configuration.
            on_cell_revealed: Called once per newly revealed safe cell.
            on_flag_toggled: Called with True when a flag is placed and
                False when one is removed.
        """
        self.config = config or BlockStoreConfig()
        self.size = self.config.block_size
        self.seed = (
            self.config.seed
            if self.config.seed is not None
            else random.randrange(2 ** 32)
        )
        self.on_cell_revealed = on_cell_revealed
        self.on_flag_toggled = on_flag_toggled

        self._blocks: Dict[BlockCoordinate, Block] = {}
        self._completed: Set[BlockCoordinate] = set()
        self.coins = self.config.initial_coins
        self.cells_revealed = 0
        self.flags_placed = 0
        self.mines_hit = 0
        # Revealed empty cells whose neighbors a cut-off cascade never reached
        self._pending_fill: Deque[Tuple[int, int]] = deque()
        self.viewport = Viewport(
            rows=self.config.viewport_rows, cols=self.config.viewport_cols
        )
        self._refresh_viewport()

    # ========================================================================
    # Block Access (Low-level)
    # ========================================================================

    def is_valid_coord(self, row: int, col: int) -> bool:
        """Every integer position exists on the unbounded board."""
        return all(
            isinstance(value, (int, np.integer)) and not isinstance(value, bool)
            for value in (row, col)
        )

    def block_coord(self, row: int, col: int) -> BlockCoordinate:
        return BlockCoordinate.containing(row, col, self.size)

    def get_block(self, coord: BlockCoordinate) -> Block:
        """Return the block at a coordinate, generating it if absent."""
        block = self._blocks.get(coord)
        if block is None:
            block = self._materialize(coord)
        return block

    def peek_block(self, coord: BlockCoordinate) -> Optional[Block]:
        """Return the block only if it is already in memory."""
        return self._blocks.get(coord)

    def block_at_cell(self, row: int, col: int) -> Block:
        return self.get_block(self.block_coord(row, col))

    def get_cell(self, row: int, col: int) -> Cell:
        """Live cell at an absolute position (generating its block)."""
        return self.block_at_cell(row, col).local_cell(row, col)

    def resident_blocks(self) -> Dict[BlockCoordinate, Block]:
        return dict(self._blocks)

    def pure_layout(self, coord: BlockCoordinate) -> FrozenSet[Tuple[int, int]]:
        """Mine layout a block gets when generated without a safe area."""
        mine_count = self.config.density.mines_for(coord, self.size)
        return generate_mine_layout(self.seed, coord, self.size, mine_count)

    def _materialize(self, coord: BlockCoordinate) -> Block:
        density = self.config.density.density_for(coord)
        block = Block.build(coord, self.size, self.pure_layout(coord), density)
        self._blocks[coord] = block
        self._recount(block)
        logger.debug(
            "Materialized block %s with %d mines (density %.2f)",
            tuple(coord), block.mine_count, density,
        )
        return block

    # ========================================================================
    # Adjacency (Low-level)
    # ========================================================================

    def _mine_lookup(self) -> Callable[[int, int], bool]:
        """Mine test for absolute cells that never materializes blocks."""
        layouts: Dict[BlockCoordinate, FrozenSet[Tuple[int, int]]] = {}

        def is_mine(row: int, col: int) -> bool:
            coord = self.block_coord(row, col)
            block = self._blocks.get(coord)
            if block is not None:
                return block.local_cell(row, col).is_mine
            if coord not in layouts:
                layouts[coord] = self.pure_layout(coord)
            start_row, start_col = coord.origin_cell(self.size)
            return (row - start_row, col - start_col) in layouts[coord]

        return is_mine

    def _recount(self, block: Block) -> None:
        """Recompute adjacency counts for every cell of a block."""
        self._recount_cells(list(block))

    def _recount_cells(self, cells: Iterable[Cell]) -> None:
        is_mine = self._mine_lookup()
        for cell in cells:
            if cell.is_mine:
                cell.adjacent_mines = 0
                continue
            cell.adjacent_mines = sum(
                1 for delta_row, delta_col in NEIGHBOR_OFFSETS
                if is_mine(cell.row + delta_row, cell.col + delta_col)
            )

    def _border_cells(self, coord: BlockCoordinate) -> List[Tuple[int, int]]:
        """Absolute cells just outside a block's edge."""
        start_row, start_col = coord.origin_cell(self.size)
        end_row = start_row + self.size
        end_col = start_col + self.size
        return [
            (row, col)
            for row in range(start_row - 1, end_row + 1)
            for col in range(start_col - 1, end_col + 1)
            if not (start_row <= row < end_row and start_col <= col < end_col)
        ]

    def _resident_cell(self, row: int, col: int) -> Optional[Cell]:
        block = self._blocks.get(self.block_coord(row, col))
        if block is None:
            return None
        return block.local_cell(row, col)

    # ========================================================================
    # First Reveal Safety
    # ========================================================================

    def _secure_first_reveal(self, row: int, col: int) -> None:
        """
        Clear the 3x3 area around the first reveal in a block.

        Mines in the area move elsewhere in their own block. Cells that
        are revealed or touch a revealed cell keep their content, so shown
        numbers never change; a mine on such a cell stays where it is.
        """
        safe_by_block: Dict[BlockCoordinate, List[Tuple[int, int]]] = {}
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                cell_row, cell_col = row + delta_row, col + delta_col
                coord = self.block_coord(cell_row, cell_col)
                start_row, start_col = coord.origin_cell(self.size)
                safe_by_block.setdefault(coord, []).append(
                    (cell_row - start_row, cell_col - start_col)
                )

        changed = []
        for coord, safe_cells in safe_by_block.items():
            block = self.get_block(coord)
            if block.is_locked:
                continue
            if not any(block.cells[r][c].is_mine for r, c in safe_cells):
                continue
            fixed = self._fixed_cells(block)
            movable = [
                (r, c) for r, c in safe_cells
                if block.cells[r][c].is_mine and (r, c) not in fixed
            ]
            if not movable:
                logger.debug(
                    "Mines near first reveal in block %s touch revealed cells",
                    tuple(coord),
                )
                continue

            mines = block.mine_positions()
            kept = mines & fixed
            moved = generate_mine_layout(
                self.seed,
                coord,
                self.size,
                len(mines) - len(kept),
                fixed | set(safe_cells),
            )
            block.relayout(kept | moved)
            changed.append(coord)

        for coord in changed:
            self._recount(self._blocks[coord])
            border = (self._resident_cell(r, c) for r, c in self._border_cells(coord))
            self._recount_cells(cell for cell in border if cell is not None)
            logger.debug("Relocated mines of block %s away from first reveal", tuple(coord))

    def _fixed_cells(self, block: Block) -> Set[Tuple[int, int]]:
        """Local cells whose content is visible through a revealed cell."""
        fixed = set()
        for local_row, row_cells in enumerate(block.cells):
            for local_col, cell in enumerate(row_cells):
                if cell.is_revealed or any(
                    self._is_revealed(cell.row + delta_row, cell.col + delta_col)
                    for delta_row, delta_col in NEIGHBOR_OFFSETS
                ):
                    fixed.add((local_row, local_col))
        return fixed

    def _is_revealed(self, row: int, col: int) -> bool:
        cell = self._resident_cell(row, col)
        return cell is not None and cell.is_revealed

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal_cell(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a cell, cascading across block edges from empty cells.

        A mine locks its block instead of ending the session.
        """
        outcome = RevealOutcome()
        if not self.is_valid_coord(row, col):
            return outcome
        block = self.block_at_cell(row, col)
        cell = block.local_cell(row, col)
        if block.is_locked or not cell.is_unrevealed:
            return outcome

        if block.revealed_count == 0:
            self._secure_first_reveal(row, col)

        if cell.is_mine:
            cell.reveal()
            block.is_locked = True
            self.mines_hit += 1
            outcome.hit_mine = True
            outcome.locked_blocks.append(block.coordinate)
            logger.info("Mine hit at (%d, %d); block %s locked", row, col, tuple(block.coordinate))
            return outcome

        touched = self._flood_fill(row, col, outcome)
        for coord in touched:
            self._after_reveal(self._blocks[coord])
        return outcome

    def _reveal_safe(self, cell: Cell, outcome: RevealOutcome) -> None:
        cell.reveal()
        outcome.cells_revealed += 1
        self.cells_revealed += 1
        if self.on_cell_revealed is not None:
            self.on_cell_revealed()

    def _flood_fill(
        self, row: int, col: int, outcome: RevealOutcome
    ) -> Set[BlockCoordinate]:
        """Reveal a cell and, if empty, its connected region across blocks."""
        start = self.get_cell(row, col)
        self._reveal_safe(start, outcome)
        touched = {self.block_coord(row, col)}
        if start.adjacent_mines > 0:
            return touched

        self._expand(deque([(row, col)]), outcome, touched)
        logger.debug(
            "Flood fill from (%d, %d) revealed %d cells in %d blocks",
            row, col, outcome.cells_revealed, len(touched),
        )
        return touched

    def _expand(
        self,
        frontier: Deque[Tuple[int, int]],
        outcome: RevealOutcome,
        touched: Set[BlockCoordinate],
    ) -> None:
        """
        Reveal outward from empty cells until the frontier or the limit runs out.

        Cells left in the frontier at the limit are kept for
        :meth:`resume_flood_fill`.
        """
        while frontier and outcome.cells_revealed < self.config.flood_fill_limit:
            current_row, current_col = frontier.popleft()
            for delta_row, delta_col in NEIGHBOR_OFFSETS:
                neighbor_row = current_row + delta_row
                neighbor_col = current_col + delta_col
                block = self.block_at_cell(neighbor_row, neighbor_col)
                if block.is_locked:
                    continue
                neighbor = block.local_cell(neighbor_row, neighbor_col)
                if not neighbor.is_unrevealed or neighbor.is_mine:
                    continue
                self._reveal_safe(neighbor, outcome)
                touched.add(block.coordinate)
                if neighbor.adjacent_mines == 0:
                    frontier.append((neighbor_row, neighbor_col))

        if frontier:
            self._pending_fill.extend(frontier)
            logger.warning(
                "Flood fill stopped at %d cells; %d cells left to expand",
                outcome.cells_revealed, len(self._pending_fill),
            )

    @property
    def has_pending_fill(self) -> bool:
        """A cascade was cut short and can be continued."""
        return bool(self._pending_fill)

    def resume_flood_fill(self) -> RevealOutcome:
        """Continue cascades cut short by the flood fill limit."""
        outcome = RevealOutcome()
        if not self._pending_fill:
            return outcome
        frontier, self._pending_fill = self._pending_fill, deque()
        touched: Set[BlockCoordinate] = set()
        self._expand(frontier, outcome, touched)
        for coord in touched:
            self._after_reveal(self._blocks[coord])
        return outcome

    def _after_reveal(self, block: Block) -> None:
        block.update_explored()
        if block.coordinate not in self._completed and block.is_completed:
            self._on_block_completed(block)

    def _on_block_completed(self, block: Block) -> None:
        coord = block.coordinate
        self._completed.add(coord)
        reward = self.config.completion_reward * (1 + coord.chebyshev_distance())
        self.coins += reward
        logger.info("Block %s completed; awarded %d coins", tuple(coord), reward)
        for neighbor in coord.orthogonal_neighbors():
            locked = self._blocks.get(neighbor)
            if locked is not None and locked.is_locked and self.can_auto_unlock(neighbor):
                self._unlock(locked, "all neighbors completed")

    def toggle_flag(self, row: int, col: int) -> bool:
        """Cycle a cell's mark. Locked blocks and revealed cells refuse."""
        if not self.is_valid_coord(row, col):
            return False
        block = self.block_at_cell(row, col)
        cell = block.local_cell(row, col)
        if block.is_locked or cell.is_revealed:
            return False

        previous = cell.cycle_mark()
        if previous == CellState.UNREVEALED:
            self._change_flags(True)
        elif previous == CellState.FLAGGED:
            self._change_flags(False)
        return True

    def _change_flags(self, increment: bool) -> None:
        self.flags_placed += 1 if increment else -1
        if self.on_flag_toggled is not None:
            self.on_flag_toggled(increment)

    def chord_cell(self, row: int, col: int) -> RevealOutcome:
        """Reveal the unrevealed neighbors of a satisfied numbered cell."""
        outcome = RevealOutcome()
        if not self.is_valid_coord(row, col):
            return outcome
        block = self.block_at_cell(row, col)
        cell = block.local_cell(row, col)
        if block.is_locked or not cell.is_revealed or cell.adjacent_mines == 0:
            return outcome

        neighbors = [
            (row + delta_row, col + delta_col)
            for delta_row, delta_col in NEIGHBOR_OFFSETS
        ]
        flags = sum(1 for r, c in neighbors if self.get_cell(r, c).is_flagged)
        if flags != cell.adjacent_mines:
            return outcome

        for neighbor_row, neighbor_col in neighbors:
            if self.get_cell(neighbor_row, neighbor_col).is_unrevealed:
                outcome.merge(self.reveal_cell(neighbor_row, neighbor_col))
        return outcome

    # ========================================================================
    # Lock Economy
    # ========================================================================

    def unlock_cost(self, coord: BlockCoordinate) -> int:
        """Coins needed to unlock a block, growing with distance."""
        return self.config.unlock_base_cost * (1 + coord.chebyshev_distance())

    def can_auto_unlock(self, coord: BlockCoordinate) -> bool:
        """All four edge-sharing neighbors are completed."""
        return all(
            neighbor in self._completed for neighbor in coord.orthogonal_neighbors()
        )

    def unlock_with_currency(self, coord: BlockCoordinate) -> bool:
        """Spend coins to unlock a block. False if not locked or too poor."""
        block = self._blocks.get(coord)
        if block is None or not block.is_locked:
            return False
        cost = self.unlock_cost(coord)
        if self.coins < cost:
            return False
        self.coins -= cost
        self._unlock(block, f"spent {cost} coins")
        return True

    def grant_unlock(self, coord: BlockCoordinate) -> bool:
        """Unlock a block as an external reward (such as a watched ad)."""
        block = self._blocks.get(coord)
        if block is None or not block.is_locked:
            return False
        self._unlock(block, "reward granted")
        return True

    def grant_currency(self, amount: int) -> None:
        """Add coins earned outside the board."""
        if amount < 0:
            raise ValueError("Granted amount cannot be negative")
        self.coins += amount

    def _unlock(self, block: Block, reason: str) -> None:
        block.is_locked = False
        logger.info("Block %s unlocked (%s)", tuple(block.coordinate), reason)

    def is_completed(self, coord: BlockCoordinate) -> bool:
        return coord in self._completed

    # ========================================================================
    # Viewport
    # ========================================================================

    def pan(self, direction, amount: Optional[int] = None) -> bool:
        """
        Move the viewport. The default step is half a block.

        Returns:
            False for an unknown direction, True otherwise.
        """
        try:
            direction = PanDirection(direction)
        except ValueError:
            return False
        step = self.size // 2 if amount is None else amount
        delta_row, delta_col = _PAN_DELTAS[direction]
        self.viewport.row += delta_row * step
        self.viewport.col += delta_col * step
        self._refresh_viewport()
        return True

    def move_to(self, row: int, col: int) -> None:
        """Place the viewport's top-left corner at an absolute cell."""
        self.viewport.row = row
        self.viewport.col = col
        self._refresh_viewport()

    def set_zoom(self, zoom: float) -> float:
        """Set the zoom factor, clamped to the supported range."""
        self.viewport.zoom = min(MAX_ZOOM, max(MIN_ZOOM, zoom))
        self._refresh_viewport()
        return self.viewport.zoom

    def covering_blocks(self) -> List[BlockCoordinate]:
        """Blocks intersecting the visible window plus the buffer ring."""
        view = self.viewport
        top = self.block_coord(view.row, view.col)
        bottom = self.block_coord(
            view.row + view.visible_rows - 1, view.col + view.visible_cols - 1
        )
        margin = self.config.buffer_blocks
        return [
            BlockCoordinate(block_row, block_col)
            for block_row in range(top.block_row - margin, bottom.block_row + margin + 1)
            for block_col in range(top.block_col - margin, bottom.block_col + margin + 1)
        ]

    def center_block(self) -> BlockCoordinate:
        return self.block_coord(*self.viewport.center)

    def _refresh_viewport(self) -> None:
        covering = self.covering_blocks()
        for coord in covering:
            self.get_block(coord)
        self._evict(set(covering))

    def _evict(self, keep: Set[BlockCoordinate]) -> None:
        """Drop untouched blocks far from the view; they regenerate identically."""
        center = self.center_block()
        evicted = [
            coord for coord, block in self._blocks.items()
            if coord not in keep
            and coord.chebyshev_distance(center) > self.config.keep_radius
            and block.is_pristine
        ]
        for coord in evicted:
            del self._blocks[coord]
        if evicted:
            logger.debug("Evicted %d blocks around %s", len(evicted), tuple(center))

    def get_viewport_grid(self) -> List[List[Cell]]:
        """Snapshot of the cells inside the visible window."""
        view = self.viewport
        return [
            [
                replace(self.get_cell(view.row + r, view.col + c))
                for c in range(view.visible_cols)
            ]
            for r in range(view.visible_rows)
        ]

    def get_viewport_observation(self) -> np.ndarray:
        """Visible window as an int8 array of Cell.to_observation() values."""
        view = self.viewport
        obs = np.zeros((view.visible_rows, view.visible_cols), dtype=np.int8)
        for r in range(view.visible_rows):
            for c in range(view.visible_cols):
                obs[r, c] = self.get_cell(view.row + r, view.col + c).to_observation()
        return obs

    def minimap(self, radius: int = 5) -> np.ndarray:
        """
        Block statuses around the viewport's centre block.

        Returns:
            (2r+1, 2r+1) int8 array of MINIMAP_* codes; the centre entry
            is the centre block. Nothing is generated.
        """
        center = self.center_block()
        status = np.full((2 * radius + 1, 2 * radius + 1), MINIMAP_ABSENT, dtype=np.int8)
        for r in range(2 * radius + 1):
            for c in range(2 * radius + 1):
                coord = BlockCoordinate(
                    center.block_row + r - radius, center.block_col + c - radius
                )
                block = self._blocks.get(coord)
                if block is None:
                    continue
                if block.is_locked:
                    status[r, c] = MINIMAP_LOCKED
                elif coord in self._completed:
                    status[r, c] = MINIMAP_COMPLETED
                elif block.is_explored:
                    status[r, c] = MINIMAP_EXPLORED
                else:
                    status[r, c] = MINIMAP_RESIDENT
        return status

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def total_mines(self) -> int:
        """Mines inside the blocks currently in memory."""
        return sum(block.mine_count for block in self._blocks.values())

    @property
    def completed_blocks(self) -> int:
        return len(self._completed)

    def stats(self) -> BlockStoreStats:
        blocks = self._blocks.values()
        return BlockStoreStats(
            resident_blocks=len(self._blocks),
            explored_blocks=sum(1 for block in blocks if block.is_explored),
            locked_blocks=sum(1 for block in blocks if block.is_locked),
            completed_blocks=len(self._completed),
            mines_hit=self.mines_hit,
            coins=self.coins,
        )
