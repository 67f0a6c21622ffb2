"""
Mine placement for the minefield engine.

Chooses mine positions uniformly at random from the cells outside a
protected region. The random generator belongs to the placer, so a fixed
seed reproduces the same layout.
"""
import logging
import random
from typing import Iterable, List, Optional, Set, Tuple

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


class MinePlacer:
    """
    Uniform mine sampler.

    Args:
        seed: Seed for a private generator. Ignored when rng is given.
        rng: Generator to draw from instead of a freshly seeded one.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random(seed)

    def place(
        self,
        width: int,
        height: int,
        mine_count: int,
        excluded_region: Iterable[Coordinate] = (),
    ) -> Set[Coordinate]:
        """
        Choose mine positions.

        Args:
            width: Number of columns.
            height: Number of rows.
            mine_count: Exact number of mines to choose.
            excluded_region: Positions that must stay mine-free.

        Returns:
            Set of (row, col) mine positions.

        Raises:
            ConfigurationError: If fewer than mine_count cells are eligible.
        """
        eligible = self._eligible_positions(width, height, set(excluded_region))
        if mine_count > len(eligible):
            raise ConfigurationError(
                f"Cannot place {mine_count} mines: only {len(eligible)} "
                f"cells available outside the safe zone"
            )
        mines = set(self.rng.sample(eligible, mine_count))
        logger.debug(
            "Placed %d mines among %d eligible cells", mine_count, len(eligible)
        )
        return mines

    @staticmethod
    def _eligible_positions(
        width: int, height: int, excluded: Set[Coordinate]
    ) -> List[Coordinate]:
        """Row-major list of positions outside the excluded set."""
        return [
            (row, col)
            for row in range(height)
            for col in range(width)
            if (row, col) not in excluded
        ]
