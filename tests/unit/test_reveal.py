"""
Unit tests for the flood-fill reveal.
"""
from minefield import Board, CellState, GameConfig, reveal_from


def revealed_positions(board: Board):
    return {
        (row, col)
        for row in range(board.height)
        for col in range(board.width)
        if board.cell_state(row, col) == CellState.REVEALED
    }


# ============================================================================
# Flood Fill Tests
# ============================================================================

class TestFloodFill:
    """Test expansion through empty cells."""

    def test_empty_area_reveals_all_safe_cells(
        self, corner_mine_board: Board
    ) -> None:
        """A single corner mine leaves every other cell reachable."""
        revealed = reveal_from(corner_mine_board, 0, 0)
        assert len(revealed) == 24
        assert (4, 4) not in revealed
        assert revealed == revealed_positions(corner_mine_board)

    def test_numbered_cell_does_not_expand(self, corner_mine_board: Board) -> None:
        assert reveal_from(corner_mine_board, 3, 3) == {(3, 3)}

    def test_stops_at_numbered_ring(self) -> None:
        """A wall of mines confines the flood to its side."""
        board = Board(GameConfig(5, 5, 5))
        board.lay_mines({(0, 2), (1, 2), (2, 2), (3, 2), (4, 2)})
        revealed = reveal_from(board, 2, 0)
        assert revealed == {(row, col) for row in range(5) for col in range(2)}

    def test_second_call_is_noop(self, corner_mine_board: Board) -> None:
        """Revealing an already revealed empty cell returns nothing new."""
        reveal_from(corner_mine_board, 0, 0)
        assert reveal_from(corner_mine_board, 0, 0) == set()

    def test_flagged_start_is_noop(self, corner_mine_board: Board) -> None:
        corner_mine_board.toggle_flag(0, 0)
        assert reveal_from(corner_mine_board, 0, 0) == set()
        assert corner_mine_board.cell_state(0, 0) == CellState.FLAGGED

    def test_flagged_cells_never_revealed(self, corner_mine_board: Board) -> None:
        """Flood fill goes around flags without revealing them."""
        corner_mine_board.toggle_flag(2, 2)
        corner_mine_board.toggle_flag(0, 4)
        revealed = reveal_from(corner_mine_board, 0, 0)
        assert (2, 2) not in revealed
        assert (0, 4) not in revealed
        assert corner_mine_board.cell_state(2, 2) == CellState.FLAGGED
        assert len(revealed) == 22

    def test_flag_wall_blocks_flood(self) -> None:
        """A column of flags stops the flood from crossing."""
        board = Board(GameConfig(5, 3, 1))
        board.lay_mines({(2, 4)})
        for row in range(3):
            board.toggle_flag(row, 1)
        revealed = reveal_from(board, 0, 0)
        assert revealed == {(0, 0), (1, 0), (2, 0)}

    def test_large_open_board(self) -> None:
        """Wide open boards flood without recursion limits."""
        board = Board(GameConfig(200, 200, 1))
        board.lay_mines({(199, 199)})
        revealed = reveal_from(board, 0, 0)
        assert len(revealed) == 200 * 200 - 1
