"""
Gymnasium environment wrapper for the minefield engine.

Drives a GameEngine through the standard RL interface, one reveal per step.
"""
import logging
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import error, spaces

from .board import GameConfig
from .cell import FLAGGED_CODE, MINE_CODE
from .engine import GameEngine, Outcome

logger = logging.getLogger(__name__)

SEED_RANGE = 2**31


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for minefield games.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = mine (only once revealed or the game is lost)

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at (i // width, i % width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for a rejected action (already revealed/flagged)
    """

    metadata = {"render_modes": []}

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        """
        Initialize the environment.

        Args:
            config: Game configuration (default: 9x9 with 10 mines).
        """
        super().__init__()

        self.config = config or GameConfig()
        self.engine = GameEngine(self.config)

        self.observation_space = spaces.Box(
            low=FLAGGED_CODE,
            high=MINE_CODE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0
        self._seeded = False

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Seed for the environment's generator; mine layouts are
                drawn from it, so equal seeds give equal games. The first
                reset falls back to config.seed when no seed is given.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        if seed is None and not self._seeded:
            seed = self.config.seed
        if seed is not None:
            self._seeded = True
        super().reset(seed=seed)
        game_seed = int(self.np_random.integers(SEED_RANGE))
        config = GameConfig(
            self.config.width, self.config.height, self.config.num_mines, game_seed
        )
        self.engine = GameEngine(config)
        self._steps = 0

        return self.engine.observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal one cell.

        Args:
            action: Cell index to reveal (row * width + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if not self.engine.is_playing:
            raise error.ResetNeeded("Call reset() after the game has ended")

        row, col = self._action_to_position(action)
        self._steps += 1

        result = self.engine.reveal(row, col)
        reward = self._calculate_reward(result.outcome)

        terminated = not self.engine.is_playing
        if terminated:
            logger.debug(
                "Episode finished after %d steps: %s",
                self._steps,
                self.engine.state.name,
            )

        return self.engine.observation(), reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        row = int(action) // self.config.width
        col = int(action) % self.config.width
        return row, col

    @staticmethod
    def _calculate_reward(outcome: Outcome) -> float:
        if outcome == Outcome.WON:
            return 10.0
        if outcome == Outcome.LOST:
            return -10.0
        if outcome == Outcome.REJECTED:
            return -0.1
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.engine.revealed_count,
            "total_safe": self.config.safe_cells,
            "game_state": self.engine.state.name,
            "valid_actions": len(self.engine.board.get_valid_actions()),
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of cells that can still be revealed.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.engine.board.get_valid_actions():
            mask[row * self.config.width + col] = True
        return mask
