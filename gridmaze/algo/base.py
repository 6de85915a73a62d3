import logging
import random
from abc import ABC, abstractmethod
from typing import Iterator, Optional

from gridmaze.core.errors import InvalidStart
from gridmaze.core.events import Step
from gridmaze.core.grid import Grid, clamp_dimensions
from gridmaze.core.pacing import Pacer, StepObserver, drive

logger = logging.getLogger(__name__)


class Generator(ABC):
    """
    Carves a maze into a fresh WALL-filled grid.
    `rng` may be any object with randrange(n) and shuffle(seq); without one,
    every call builds random.Random(seed), so seeded calls are reproducible.
    """

    def __init__(self, rows: int, cols: int, seed: Optional[int] = None, rng=None):
        self.rows, self.cols = clamp_dimensions(rows, cols)
        self.seed = seed
        self.rng = rng
        self.step_count = 0

    def random_source(self):
        if self.rng is not None:
            return self.rng
        return random.Random(self.seed)

    def validate_start(self, start_row: int, start_col: int):
        if not (0 <= start_row < self.rows and 0 <= start_col < self.cols):
            raise InvalidStart(
                f"Start ({start_row}, {start_col}) outside {self.rows}x{self.cols} grid")
        if start_row % 2 or start_col % 2:
            raise InvalidStart(
                f"Start ({start_row}, {start_col}) must be on an even row and column")

    def run(self, start_row: int, start_col: int, grid: Optional[Grid] = None) -> Iterator[Step]:
        """
        Step-emitting generation. The start cell is checked before anything is
        carved; the returned iterator does the work as it is consumed.
        """
        self.validate_start(start_row, start_col)
        if grid is None:
            grid = Grid(self.rows, self.cols)
        self.step_count = 0
        return self.carve_steps(grid, start_row, start_col)

    @abstractmethod
    def carve_steps(self, grid: Grid, start_row: int, start_col: int) -> Iterator[Step]:
        pass

    @abstractmethod
    def generate(self, start_row: int, start_col: int) -> Grid:
        """Synchronous generation, returns the final grid only."""
        pass

    def generate_animated(self, start_row: int, start_col: int, step_delay: float = 0.0,
                          on_step: Optional[StepObserver] = None,
                          pacer: Optional[Pacer] = None) -> Grid:
        grid = Grid(self.rows, self.cols)
        emitted = drive(self.run(start_row, start_col, grid), on_step, step_delay, pacer)
        logger.debug("Animated generation finished: %d steps, %d carves", emitted, self.step_count)
        return grid
