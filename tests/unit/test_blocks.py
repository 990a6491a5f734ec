"""
Unit tests for infinite-board blocks.

Tests block coordinates, the density policy, deterministic layout
generation and per-block bookkeeping.
"""
import pytest

from minegrid import Block, BlockCoordinate, CellState, DensityPolicy, generate_mine_layout
from minegrid.blocks import block_seed


# ============================================================================
# Coordinate Tests
# ============================================================================

class TestBlockCoordinate:
    """Test block coordinate arithmetic."""

    @pytest.mark.parametrize(
        "cell,expected",
        [
            ((0, 0), (0, 0)),
            ((7, 8), (0, 1)),
            ((-1, -1), (-1, -1)),
            ((-8, -9), (-1, -2)),
        ],
    )
    def test_containing(self, cell, expected) -> None:
        assert BlockCoordinate.containing(*cell, size=8) == expected

    def test_chebyshev_distance(self) -> None:
        assert BlockCoordinate(3, -5).chebyshev_distance() == 5
        assert BlockCoordinate(3, -5).chebyshev_distance(BlockCoordinate(2, -5)) == 1

    def test_orthogonal_neighbors(self) -> None:
        assert set(BlockCoordinate(2, 3).orthogonal_neighbors()) == {
            (1, 3), (3, 3), (2, 2), (2, 4),
        }

    def test_surrounding_has_eight_blocks(self) -> None:
        around = BlockCoordinate(0, 0).surrounding()
        assert len(set(around)) == 8
        assert (0, 0) not in around

    def test_origin_cell(self) -> None:
        assert BlockCoordinate(-1, 2).origin_cell(8) == (-8, 16)


# ============================================================================
# Density Policy Tests
# ============================================================================

class TestDensityPolicy:
    """Test distance-based mine density."""

    def test_origin_density(self) -> None:
        assert DensityPolicy().density_for(BlockCoordinate(0, 0)) == pytest.approx(0.15)

    def test_density_grows_with_distance(self) -> None:
        policy = DensityPolicy()
        assert policy.density_for(BlockCoordinate(3, -2)) == pytest.approx(0.21)

    def test_density_is_capped(self) -> None:
        assert DensityPolicy().density_for(BlockCoordinate(500, 0)) == pytest.approx(0.35)

    def test_mines_for_block(self) -> None:
        assert DensityPolicy().mines_for(BlockCoordinate(0, 0), 8) == 9

    def test_invalid_density_raises_error(self) -> None:
        with pytest.raises(ValueError, match="densities"):
            DensityPolicy(base=1.5)

    def test_negative_step_raises_error(self) -> None:
        with pytest.raises(ValueError, match="step"):
            DensityPolicy(step=-0.1)


# ============================================================================
# Layout Generation Tests
# ============================================================================

class TestLayoutGeneration:
    """Test deterministic per-block mine layouts."""

    def test_block_seed_of_origin_is_global_seed(self) -> None:
        assert block_seed(42, BlockCoordinate(0, 0)) == 42

    def test_block_seed_is_unsigned_32_bit(self) -> None:
        seed = block_seed(7, BlockCoordinate(-3, -11))
        assert 0 <= seed < 2 ** 32

    def test_layout_is_deterministic(self) -> None:
        coord = BlockCoordinate(4, -2)
        first = generate_mine_layout(42, coord, 8, 12)
        second = generate_mine_layout(42, coord, 8, 12)
        assert first == second

    def test_layout_has_requested_mines_in_bounds(self) -> None:
        layout = generate_mine_layout(42, BlockCoordinate(1, 1), 8, 12)
        assert len(layout) == 12
        assert all(0 <= row < 8 and 0 <= col < 8 for row, col in layout)

    def test_safe_cells_are_excluded(self) -> None:
        safe = [(row, col) for row in range(3) for col in range(3)]
        for seed in range(20):
            layout = generate_mine_layout(seed, BlockCoordinate(0, 0), 8, 20, safe)
            assert len(layout) == 20
            assert not layout & set(safe)

    def test_short_pool_places_fewer_mines(self) -> None:
        safe = [(row, col) for row in range(3) for col in range(3)]
        assert generate_mine_layout(1, BlockCoordinate(0, 0), 3, 5, safe) == frozenset()


# ============================================================================
# Block Tests
# ============================================================================

@pytest.fixture
def block() -> Block:
    """A 4x4 block at (1, -1) with mines on its diagonal."""
    return Block.build(BlockCoordinate(1, -1), 4, [(0, 0), (1, 1), (2, 2)], 0.2)


class TestBlock:
    """Test block construction and bookkeeping."""

    def test_cells_carry_absolute_coordinates(self, block: Block) -> None:
        assert (block.cells[0][0].row, block.cells[0][0].col) == (4, -4)
        assert (block.cells[3][3].row, block.cells[3][3].col) == (7, -1)

    def test_local_cell_lookup(self, block: Block) -> None:
        assert block.local_cell(5, -3).is_mine is True
        assert block.local_cell(5, -2).is_mine is False

    def test_mine_positions(self, block: Block) -> None:
        assert block.mine_positions() == {(0, 0), (1, 1), (2, 2)}
        assert block.mine_count == 3

    def test_new_block_is_pristine(self, block: Block) -> None:
        assert block.is_pristine is True
        assert block.is_completed is False

    def test_touched_block_is_not_pristine(self, block: Block) -> None:
        block.cells[3][0].state = CellState.FLAGGED
        assert block.is_pristine is False
        assert block.flag_count == 1

    def test_relayout_marks_block(self, block: Block) -> None:
        block.relayout([(3, 3)])
        assert block.mine_positions() == {(3, 3)}
        assert block.relaid is True
        assert block.is_pristine is False

    def test_completed_when_all_safe_cells_revealed(self, block: Block) -> None:
        for cell in block:
            if not cell.is_mine:
                cell.reveal()
        assert block.safe_revealed_count == 13
        assert block.is_completed is True

    def test_explored_threshold(self, block: Block) -> None:
        safe = [cell for cell in block if not cell.is_mine]
        for cell in safe[:11]:
            cell.reveal()
        assert block.update_explored() is False
        safe[11].reveal()
        assert block.update_explored() is True
