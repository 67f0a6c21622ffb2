"""
Board module for the minefield engine.

Implements the grid of cells, mine placement and adjacency counts.
Turn logic lives in the engine; the board only offers primitives.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, CellState
from .errors import AlreadyPlacedError, ConfigurationError, OutOfBoundsError
from .placer import Coordinate, MinePlacer

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class GameConfig:
    """
    Configuration for a minefield game.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
        seed: Seed for mine placement, None for a non-deterministic game.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ConfigurationError("Board dimensions must be positive")
        if self.num_mines < 1:
            raise ConfigurationError("Number of mines must be positive")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ConfigurationError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        return self.total_cells - self.num_mines


# Preset difficulty levels
BEGINNER = GameConfig(9, 9, 10)
INTERMEDIATE = GameConfig(16, 16, 40)
EXPERT = GameConfig(30, 16, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minefield grid.

    Owns every cell; callers only ever receive copies.
    """

    config: GameConfig = field(default_factory=lambda: GameConfig())
    placer: Optional[MinePlacer] = None
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _mines_placed: bool = False

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        if self.placer is None:
            self.placer = MinePlacer(seed=self.config.seed)
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def place_mines(self, excluded_region: Iterable[Coordinate]) -> Set[Coordinate]:
        """
        Place mines randomly, keeping a region mine-free.

        Args:
            excluded_region: (row, col) positions to keep mine-free.

        Returns:
            The chosen mine positions.

        Raises:
            AlreadyPlacedError: If mines were already placed.
            ConfigurationError: If the region leaves too few cells.
        """
        if self._mines_placed:
            raise AlreadyPlacedError("Mines have already been placed")
        mines = self.placer.place(
            self.config.width,
            self.config.height,
            self.config.num_mines,
            excluded_region,
        )
        self.lay_mines(mines)
        return mines

    def lay_mines(self, positions: Iterable[Coordinate]) -> None:
        """
        Apply an explicit mine layout and derive adjacency counts.

        Args:
            positions: Exactly num_mines distinct in-bounds positions.
        """
        if self._mines_placed:
            raise AlreadyPlacedError("Mines have already been placed")
        mines = set(positions)
        if len(mines) != self.config.num_mines:
            raise ConfigurationError(
                f"Expected {self.config.num_mines} mines, got {len(mines)}"
            )
        for row, col in mines:
            self._require_in_bounds(row, col)
        for row, col in mines:
            self._grid[row][col].is_mine = True
        self._calculate_adjacent_mines()
        self._mines_placed = True

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row in range(self.config.height):
            for col in range(self.config.width):
                if not self._grid[row][col].is_mine:
                    count = self._count_adjacent_mines(row, col)
                    self._grid[row][col].adjacent_mines = count

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Coordinate]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_bounds(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def safe_zone(self, row: int, col: int) -> Set[Coordinate]:
        """The cell itself plus its in-bounds neighbors."""
        return {(row, col), *self.neighbors(row, col)}

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def _require_in_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col)

    # ========================================================================
    # Primitive Mutators (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal one cell, without any flood fill.

        Returns:
            True if the cell changed from hidden to revealed.
        """
        self._require_in_bounds(row, col)
        return self._grid[row][col].reveal()

    def explode(self, row: int, col: int) -> None:
        """Mark the mine at position as the one that ended the game."""
        self._require_in_bounds(row, col)
        self._grid[row][col].explode()

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Returns:
            True if flag was toggled, False if the cell is revealed.
        """
        self._require_in_bounds(row, col)
        return self._grid[row][col].toggle_flag()

    def count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_flagged:
                count += 1
        return count

    def is_won(self, revealed_count: int) -> bool:
        """Check if all non-mine cells are revealed."""
        return revealed_count >= self.config.safe_cells

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mine_count(self) -> int:
        return self.config.num_mines

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    def get_cell(self, row: int, col: int) -> Cell:
        """
        Get a copy of the cell at position.

        Raises:
            OutOfBoundsError: If position is outside the board.
        """
        self._require_in_bounds(row, col)
        return replace(self._grid[row][col])

    def cell_state(self, row: int, col: int) -> CellState:
        self._require_in_bounds(row, col)
        return self._grid[row][col].state

    def adjacent_mines(self, row: int, col: int) -> int:
        self._require_in_bounds(row, col)
        return self._grid[row][col].adjacent_mines

    def is_mine(self, row: int, col: int) -> bool:
        self._require_in_bounds(row, col)
        return self._grid[row][col].is_mine

    def mine_positions(self) -> Set[Coordinate]:
        """Positions of every mine on the board."""
        return {
            (row, col)
            for row in range(self.config.height)
            for col in range(self.config.width)
            if self._grid[row][col].is_mine
        }

    def get_observation(self, show_mines: bool = False) -> np.ndarray:
        """
        Get the visible board as a numpy array.

        Args:
            show_mines: Expose every mine, for a lost game.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for row in range(self.config.height):
            for col in range(self.config.width):
                obs[row, col] = self._grid[row][col].to_observation(show_mines)
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (row, col) positions that are hidden.
        """
        actions = []
        for row in range(self.config.height):
            for col in range(self.config.width):
                if self._grid[row][col].state == CellState.HIDDEN:
                    actions.append((row, col))
        return actions
