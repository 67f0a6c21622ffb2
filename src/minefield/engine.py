"""
Game engine for minefield.

Orchestrates player actions against the board and tracks the game
state machine: READY -> PLAYING -> WON or LOST.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet, Iterable, NamedTuple, Optional, Set

import numpy as np

from .board import Board, GameConfig
from .cell import CellState
from .errors import InvalidStateError, OutOfBoundsError
from .placer import Coordinate, MinePlacer
from .reveal import reveal_from

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    READY = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()


TERMINAL_STATES = frozenset({GameState.WON, GameState.LOST})


class Outcome(Enum):
    """Result of a single player action."""

    CONTINUE = auto()
    WON = auto()
    LOST = auto()
    REJECTED = auto()


@dataclass(frozen=True)
class ActionResult:
    """
    What an action did.

    Attributes:
        outcome: Overall result of the action.
        changed: Positions whose visible state changed.
        reason: Why the action was rejected, if it was.
    """

    outcome: Outcome
    changed: FrozenSet[Coordinate] = frozenset()
    reason: Optional[str] = None

    @classmethod
    def rejected(cls, reason: str) -> "ActionResult":
        return cls(Outcome.REJECTED, frozenset(), reason)


class CellView(NamedTuple):
    """
    Visible state of one cell.

    number is None unless a safe cell is revealed; is_mine is only set
    for revealed mines, or for every mine once the game is lost.
    """

    state: CellState
    number: Optional[int]
    is_mine: bool = False


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Single-player minefield game.

    Mines are placed on the first reveal, keeping the clicked cell and
    its neighbors clear. The engine is synchronous and not thread-safe.
    """

    def __init__(
        self,
        config: GameConfig,
        placer: Optional[MinePlacer] = None,
    ) -> None:
        """
        Initialize the game.

        Args:
            config: Board configuration.
            placer: Mine placer; defaults to one seeded from config.seed.
        """
        self.config = config
        self.board = Board(config, placer)
        self._state = GameState.READY
        self._revealed_count = 0
        self._flagged_count = 0

    # ========================================================================
    # Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> ActionResult:
        """
        Reveal a cell.

        Revealing an already revealed cell is treated as a chord.

        Raises:
            InvalidStateError: If the game is over.
            OutOfBoundsError: If the position is outside the board.
        """
        self._require_active()
        self._require_in_bounds(row, col)

        state = self.board.cell_state(row, col)
        if state == CellState.FLAGGED:
            return ActionResult.rejected("cell is flagged")
        if state == CellState.REVEALED:
            return self.chord(row, col)

        if self._state == GameState.READY:
            self._handle_first_click(row, col)

        changed = self._reveal_cell(row, col)
        return self._result(changed)

    def chord(self, row: int, col: int) -> ActionResult:
        """
        Reveal every hidden neighbor of a satisfied numbered cell.

        The cell must be revealed, numbered, and have exactly as many
        flagged neighbors as its number.

        Raises:
            InvalidStateError: If the game is over.
            OutOfBoundsError: If the position is outside the board.
        """
        self._require_active()
        self._require_in_bounds(row, col)

        if self.board.cell_state(row, col) != CellState.REVEALED:
            return ActionResult.rejected("cell is not revealed")
        number = self.board.adjacent_mines(row, col)
        if number == 0:
            return ActionResult.rejected("cell has no adjacent mines")
        if self.board.count_adjacent_flags(row, col) != number:
            return ActionResult.rejected("flag count does not match")

        changed: Set[Coordinate] = set()
        for neighbor_row, neighbor_col in self.board.neighbors(row, col):
            if self.board.cell_state(neighbor_row, neighbor_col) == CellState.HIDDEN:
                changed |= self._reveal_cell(neighbor_row, neighbor_col)
            if self._state == GameState.LOST:
                break
        return self._result(changed)

    def toggle_flag(self, row: int, col: int) -> ActionResult:
        """
        Flag or unflag a hidden cell. Does not change the game state.

        Raises:
            InvalidStateError: If the game is over.
            OutOfBoundsError: If the position is outside the board.
        """
        self._require_active()
        self._require_in_bounds(row, col)

        if not self.board.toggle_flag(row, col):
            return ActionResult.rejected("cell is revealed")

        if self.board.cell_state(row, col) == CellState.FLAGGED:
            self._flagged_count += 1
        else:
            self._flagged_count -= 1
        return ActionResult(Outcome.CONTINUE, frozenset({(row, col)}))

    # ========================================================================
    # Internals
    # ========================================================================

    def _require_active(self) -> None:
        if self._state in TERMINAL_STATES:
            raise InvalidStateError(f"Game is over ({self._state.name})")

    def _require_in_bounds(self, row: int, col: int) -> None:
        if not self.board.in_bounds(row, col):
            raise OutOfBoundsError(row, col)

    def _handle_first_click(self, row: int, col: int) -> None:
        """Place mines around the first click and start playing."""
        zone = self.board.safe_zone(row, col)
        if self.config.total_cells - len(zone) < self.config.num_mines:
            # Dense boards cannot spare the whole neighborhood.
            logger.debug("Safe zone too large, protecting (%d, %d) only", row, col)
            zone = {(row, col)}
        self.board.place_mines(zone)
        self._state = GameState.PLAYING
        logger.debug("Game started at (%d, %d)", row, col)

    def _reveal_cell(self, row: int, col: int) -> Set[Coordinate]:
        """Reveal a hidden cell, ending the game on a mine."""
        if self.board.is_mine(row, col):
            self.board.reveal(row, col)
            self.board.explode(row, col)
            self._state = GameState.LOST
            logger.info("Mine hit at (%d, %d), game lost", row, col)
            return {(row, col)}

        revealed = reveal_from(self.board, row, col)
        self._revealed_count += len(revealed)
        if self._state == GameState.PLAYING and self.board.is_won(
            self._revealed_count
        ):
            self._state = GameState.WON
            logger.info("All safe cells revealed, game won")
        return revealed

    def _result(self, changed: Iterable[Coordinate]) -> ActionResult:
        changed = frozenset(changed)
        if self._state == GameState.LOST:
            return ActionResult(Outcome.LOST, changed)
        if self._state == GameState.WON:
            return ActionResult(Outcome.WON, changed)
        return ActionResult(Outcome.CONTINUE, changed)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def first_action_taken(self) -> bool:
        return self._state != GameState.READY

    @property
    def is_playing(self) -> bool:
        """Check if the game still accepts actions."""
        return self._state not in TERMINAL_STATES

    @property
    def is_won(self) -> bool:
        return self._state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._state == GameState.LOST

    @property
    def revealed_count(self) -> int:
        """Safe cells revealed so far."""
        return self._revealed_count

    @property
    def flagged_count(self) -> int:
        return self._flagged_count

    @property
    def mines_remaining(self) -> int:
        """Mines not yet accounted for by a flag; negative if over-flagged."""
        return self.config.num_mines - self._flagged_count

    def cell_view(self, row: int, col: int) -> CellView:
        """
        Get the visible state of a cell.

        Raises:
            OutOfBoundsError: If the position is outside the board.
        """
        self._require_in_bounds(row, col)
        state = self.board.cell_state(row, col)
        if self.board.is_mine(row, col):
            exposed = state == CellState.REVEALED or self.is_lost
            return CellView(state, None, exposed)
        if state != CellState.REVEALED:
            return CellView(state, None)
        return CellView(state, self.board.adjacent_mines(row, col))

    def observation(self) -> np.ndarray:
        """Visible board; every mine is shown once the game is lost."""
        return self.board.get_observation(show_mines=self.is_lost)


def new_game(
    width: int,
    height: int,
    mine_count: int,
    seed: Optional[int] = None,
) -> GameEngine:
    """
    Create a game in the READY state.

    Raises:
        ConfigurationError: If the dimensions or mine count are invalid.
    """
    return GameEngine(GameConfig(width, height, mine_count, seed))
