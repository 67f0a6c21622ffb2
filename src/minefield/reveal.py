"""
Flood-fill reveal for the minefield engine.

Expands a single reveal across connected zero-adjacency cells using an
explicit worklist, so large open areas never hit the recursion limit.
"""
import logging
from collections import deque
from typing import Deque, Set

from .board import Board
from .cell import CellState
from .placer import Coordinate

logger = logging.getLogger(__name__)


def reveal_from(board: Board, start_row: int, start_col: int) -> Set[Coordinate]:
    """
    Reveal a cell and flood outward through empty cells.

    Numbered cells are revealed but never expand. Flagged cells are
    neither revealed nor crossed. A start cell that is not hidden is a
    no-op. The start cell must not be a mine; the engine handles that
    case before flooding.

    Args:
        board: Board to mutate.
        start_row: Row of the revealed cell.
        start_col: Column of the revealed cell.

    Returns:
        Set of (row, col) positions newly revealed by this call.
    """
    revealed: Set[Coordinate] = set()
    if board.cell_state(start_row, start_col) != CellState.HIDDEN:
        return revealed

    start = (start_row, start_col)
    queue: Deque[Coordinate] = deque([start])
    visited: Set[Coordinate] = {start}

    while queue:
        row, col = queue.popleft()
        if not board.reveal(row, col):
            continue
        revealed.add((row, col))

        if board.adjacent_mines(row, col) > 0:
            continue

        for neighbor in board.neighbors(row, col):
            if neighbor in visited:
                continue
            if board.cell_state(*neighbor) != CellState.HIDDEN:
                continue
            visited.add(neighbor)
            queue.append(neighbor)

    logger.debug(
        "Flood from (%d, %d) revealed %d cells", start_row, start_col, len(revealed)
    )
    return revealed
