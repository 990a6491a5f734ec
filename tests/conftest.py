"""
Pytest configuration and shared fixtures.
"""
import pytest
import random
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minegrid import (
    BEGINNER,
    BlockStoreConfig,
    Cell,
    FixedGrid,
    ProceduralBlockStore,
    TimerManager,
    custom_config,
)


# ============================================================================
# Clock
# ============================================================================

class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """A clock that only moves when told to."""
    return FakeClock()


@pytest.fixture
def timer(clock: FakeClock) -> TimerManager:
    """Timer driven by the fake clock."""
    return TimerManager(clock=clock)


# ============================================================================
# Fixed Board Fixtures
# ============================================================================

@pytest.fixture
def beginner_grid(timer: TimerManager) -> FixedGrid:
    """A seeded 9x9 board with 10 mines."""
    return FixedGrid(BEGINNER, timer=timer, rng=random.Random(1234))


@pytest.fixture
def layout_grid(timer: TimerManager) -> FixedGrid:
    """
    A 5x5 board with a fixed layout: mines at (0, 4), (4, 0), (4, 4).

        . . . 1 *
        . . . 1 1
        . . . . .
        1 1 . 1 1
        * 1 . 1 *
    """
    grid = FixedGrid(custom_config(5, 5, 3), timer=timer)
    grid.place_mines_at([(0, 4), (4, 0), (4, 4)])
    return grid


@pytest.fixture
def empty_grid(timer: TimerManager) -> FixedGrid:
    """A board with no mines for cascade testing."""
    return FixedGrid(custom_config(5, 5, 0), timer=timer)


# ============================================================================
# Infinite Board Fixtures
# ============================================================================

@pytest.fixture
def store_config() -> BlockStoreConfig:
    """Small seeded infinite board."""
    return BlockStoreConfig(viewport_rows=16, viewport_cols=16, seed=42)


@pytest.fixture
def store(store_config: BlockStoreConfig) -> ProceduralBlockStore:
    """A block store built from the seeded configuration."""
    return ProceduralBlockStore(store_config)


@pytest.fixture
def hidden_cell() -> Cell:
    """Create an unrevealed cell."""
    return Cell()
