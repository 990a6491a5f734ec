"""
Unit tests for GameEngine.

Tests the shared contract over fixed and infinite boards: lifecycle,
statistics, results, scoring and mode switching.
"""
import math

import pytest

from minegrid import (
    BEGINNER,
    INFINITE,
    BlockCoordinate,
    Difficulty,
    GameEngine,
    GameResult,
    GameState,
)


def reveal_all_safe(engine: GameEngine) -> None:
    for row in engine.get_grid():
        for cell in row:
            if not cell.is_mine and cell.is_unrevealed:
                engine.reveal_cell(cell.row, cell.col)


def first_mine(engine: GameEngine):
    for row in engine.get_grid():
        for cell in row:
            if cell.is_mine:
                return cell.row, cell.col
    raise AssertionError("no mine on the board")


@pytest.fixture
def engine(clock) -> GameEngine:
    """Seeded beginner engine on the fake clock."""
    return GameEngine(BEGINNER, seed=2024, clock=clock)


@pytest.fixture
def infinite_engine(clock) -> GameEngine:
    """Seeded infinite engine on the fake clock."""
    return GameEngine(INFINITE, seed=2024, clock=clock)


# ============================================================================
# Fixed Mode Tests
# ============================================================================

class TestFixedGame:
    """Test the engine over a fixed board."""

    def test_new_game_not_started(self, engine: GameEngine) -> None:
        assert engine.get_game_state() == GameState.NOT_STARTED
        assert engine.is_infinite is False
        assert engine.block_store is None

    def test_first_click_in_center(self, engine: GameEngine) -> None:
        assert engine.reveal_cell(4, 4) is True
        assert engine.get_game_state() in (GameState.IN_PROGRESS, GameState.WON)
        assert engine.get_stats().total_mines == 10
        assert engine.get_grid()[4][4].is_mine is False

    def test_stats_follow_callbacks(self, engine: GameEngine) -> None:
        engine.reveal_cell(4, 4)
        hidden = next(
            cell for row in engine.get_grid() for cell in row if cell.is_unrevealed
        )
        engine.toggle_flag(hidden.row, hidden.col)
        stats = engine.get_stats()
        revealed = sum(cell.is_revealed for row in engine.get_grid() for cell in row)
        assert stats.cells_revealed == revealed
        assert stats.flags_placed == 1
        assert stats.flags_remaining == 9

    def test_owner_callbacks_receive_events(self, clock) -> None:
        revealed, flags = [], []
        engine = GameEngine(
            BEGINNER,
            seed=1,
            clock=clock,
            on_cell_revealed=lambda: revealed.append(1),
            on_flag_toggled=flags.append,
        )
        engine.toggle_flag(0, 0)
        engine.toggle_flag(0, 0)
        assert flags == [True, False]
        engine.reveal_cell(4, 4)
        assert len(revealed) == engine.get_stats().cells_revealed

    def test_elapsed_time_from_clock(self, clock, engine: GameEngine) -> None:
        engine.reveal_cell(4, 4)
        clock.advance(42)
        assert engine.get_stats().elapsed_time == 42

    def test_same_seed_same_board(self, clock) -> None:
        first = GameEngine(BEGINNER, seed=9, clock=clock)
        second = GameEngine(BEGINNER, seed=9, clock=clock)
        first.reveal_cell(0, 0)
        second.reveal_cell(0, 0)
        assert first.get_observation().tolist() == second.get_observation().tolist()

    def test_infinite_controls_refused(self, engine: GameEngine) -> None:
        assert engine.pan_viewport("up") is False
        assert engine.zoom_viewport(2.0) is False
        assert engine.grant_currency(10) is False
        assert engine.unlock_block_with_currency(0, 0) is False
        assert engine.grant_block_unlock(0, 0) is False
        assert engine.block_stats() is None
        assert engine.resume_flood_fill() is False


# ============================================================================
# Game Over Tests
# ============================================================================

class TestGameOver:
    """Test result records at the end of fixed games."""

    def test_loss_produces_result_once(self, clock) -> None:
        results = []
        engine = GameEngine(BEGINNER, seed=5, clock=clock, on_game_over=results.append)
        engine.reveal_cell(4, 4)
        row, col = first_mine(engine)
        engine.reveal_cell(row, col)

        assert engine.get_game_state() == GameState.LOST
        assert len(results) == 1
        result = results[0]
        assert isinstance(result, GameResult)
        assert result.victory is False
        assert result.score == 0
        assert result.difficulty == Difficulty.BEGINNER

        engine.reveal_cell(0, 0)
        engine.chord_cell(4, 4)
        assert len(results) == 1
        assert engine.result is result

    def test_win_scores_by_time(self, clock) -> None:
        results = []
        engine = GameEngine(BEGINNER, seed=5, clock=clock, on_game_over=results.append)
        engine.reveal_cell(4, 4)
        clock.advance(60)
        reveal_all_safe(engine)

        assert engine.get_game_state() == GameState.WON
        assert results[0].victory is True
        assert results[0].elapsed_time == 60
        assert results[0].score == 470
        assert engine.calculate_score() == 470
        assert engine.get_stats().flags_remaining == 0

    def test_restart_clears_result(self, engine: GameEngine) -> None:
        engine.reveal_cell(4, 4)
        engine.reveal_cell(*first_mine(engine))
        engine.restart()
        assert engine.result is None
        assert engine.get_game_state() == GameState.NOT_STARTED
        assert engine.get_stats().cells_revealed == 0
        assert engine.get_stats().elapsed_time == 0


# ============================================================================
# Infinite Mode Tests
# ============================================================================

class TestInfiniteGame:
    """Test the engine over the infinite board."""

    def test_infinite_board_built_from_config(self, infinite_engine: GameEngine) -> None:
        store = infinite_engine.block_store
        assert infinite_engine.is_infinite is True
        assert store.seed == 2024
        assert store.config.density.base == pytest.approx(0.15)
        assert len(infinite_engine.get_grid()) == 20

    def test_first_move_starts_session(self, clock, infinite_engine: GameEngine) -> None:
        assert infinite_engine.get_game_state() == GameState.NOT_STARTED
        assert infinite_engine.reveal_cell(3, 3) is True
        assert infinite_engine.get_game_state() == GameState.IN_PROGRESS
        clock.advance(5)
        assert infinite_engine.get_stats().elapsed_time == 5

    def test_noop_does_not_start_session(self, infinite_engine: GameEngine) -> None:
        assert infinite_engine.reveal_cell(0.5, 1) is False
        assert infinite_engine.get_game_state() == GameState.NOT_STARTED

    def test_mine_never_ends_session(self, infinite_engine: GameEngine) -> None:
        store = infinite_engine.block_store
        infinite_engine.reveal_cell(3, 3)
        mine = next(
            (cell.row, cell.col)
            for cell in store.get_block(BlockCoordinate(0, 0))
            if cell.is_mine
        )
        assert infinite_engine.reveal_cell(*mine) is True
        assert infinite_engine.get_game_state() == GameState.IN_PROGRESS
        assert infinite_engine.result is None
        assert infinite_engine.block_stats().locked_blocks == 1

    def test_infinite_score(self, infinite_engine: GameEngine) -> None:
        infinite_engine.reveal_cell(3, 3)
        stats = infinite_engine.get_stats()
        completed = infinite_engine.block_store.completed_blocks
        expected = math.floor(3.0 * (stats.cells_revealed + 100 * completed))
        assert infinite_engine.calculate_score() == expected
        assert expected > 0

    def test_viewport_controls(self, infinite_engine: GameEngine) -> None:
        assert infinite_engine.pan_viewport("down", 8) is True
        assert infinite_engine.block_store.viewport.row == 8
        assert infinite_engine.zoom_viewport(0.5) is True
        assert infinite_engine.get_observation().shape == (40, 40)

    def test_currency_unlock(self, infinite_engine: GameEngine) -> None:
        store = infinite_engine.block_store
        infinite_engine.reveal_cell(3, 3)
        mine = next(
            (cell.row, cell.col)
            for cell in store.get_block(BlockCoordinate(0, 0))
            if cell.is_mine
        )
        infinite_engine.reveal_cell(*mine)
        store.coins = 0
        assert infinite_engine.unlock_block_with_currency(0, 0) is False
        assert infinite_engine.grant_currency(50) is True
        assert infinite_engine.unlock_block_with_currency(0, 0) is True
        assert infinite_engine.block_stats().coins == 0


# ============================================================================
# Mode Switching Tests
# ============================================================================

class TestModeSwitching:
    """Test moving between fixed and infinite boards."""

    def test_switch_keeps_callbacks(self, clock) -> None:
        revealed = []
        engine = GameEngine(
            BEGINNER, seed=3, clock=clock, on_cell_revealed=lambda: revealed.append(1)
        )
        engine.set_config(INFINITE)
        assert engine.is_infinite is True
        engine.reveal_cell(3, 3)
        assert len(revealed) == engine.get_stats().cells_revealed > 0

    def test_switch_back_to_fixed(self, infinite_engine: GameEngine) -> None:
        infinite_engine.reveal_cell(3, 3)
        infinite_engine.set_config(BEGINNER)
        assert infinite_engine.is_infinite is False
        assert infinite_engine.get_game_state() == GameState.NOT_STARTED
        assert infinite_engine.get_stats().cells_revealed == 0
        assert len(infinite_engine.get_grid()) == 9

    def test_cleanup_stops_timer(self, engine: GameEngine) -> None:
        engine.reveal_cell(4, 4)
        engine.cleanup()
        assert engine.timer.is_running is False
