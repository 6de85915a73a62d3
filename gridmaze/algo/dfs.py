import logging
from typing import Iterator, List, Tuple

from gridmaze.algo.base import Generator
from gridmaze.core.events import EVT_BACKTRACK, EVT_CARVE, EVT_INIT, Step
from gridmaze.core.grid import CARVE_ORDER, Cell, Coord, Grid

logger = logging.getLogger(__name__)


class RecursiveBacktracker(Generator):
    def carve_steps(self, grid: Grid, start_row: int, start_col: int) -> Iterator[Step]:
        rng = self.random_source()

        grid.set(start_row, start_col, Cell.PASSAGE)
        stack: List[Coord] = [(start_row, start_col)]
        yield Step(EVT_INIT, grid.snapshot())

        while stack:
            r, c = stack[-1]

            # Rooms two cells away that are still solid
            candidates = [
                (nr, nc, dr, dc)
                for nr, nc, dr, dc in grid.get_neighbors(r, c, CARVE_ORDER, step=2)
                if grid.get(nr, nc) == Cell.WALL
            ]

            if candidates:
                nr, nc, dr, dc = candidates[rng.randrange(len(candidates))]

                # Open the connector, then the room behind it
                grid.set(r + dr, c + dc, Cell.PASSAGE)
                grid.set(nr, nc, Cell.PASSAGE)

                stack.append((nr, nc))
                self.step_count += 1
                yield Step(EVT_CARVE, grid.snapshot(cursor=(nr, nc)))
            else:
                stack.pop()
                yield Step(EVT_BACKTRACK, grid.snapshot())

    def generate(self, start_row: int, start_col: int) -> Grid:
        self.validate_start(start_row, start_col)
        rng = self.random_source()
        grid = Grid(self.rows, self.cols)
        self.step_count = 0

        grid.set(start_row, start_col, Cell.PASSAGE)
        # Frames stand in for recursive calls: a room plus its unexplored directions
        stack: List[Tuple[int, int, Iterator[Coord]]] = [
            (start_row, start_col, self.shuffled_directions(rng))
        ]

        while stack:
            r, c, directions = stack[-1]
            for dr, dc in directions:
                nr, nc = r + 2 * dr, c + 2 * dc
                if grid.in_bounds(nr, nc) and grid.get(nr, nc) == Cell.WALL:
                    grid.set(r + dr, c + dc, Cell.PASSAGE)
                    grid.set(nr, nc, Cell.PASSAGE)
                    self.step_count += 1
                    stack.append((nr, nc, self.shuffled_directions(rng)))
                    break
            else:
                stack.pop()

        logger.debug("Generated %dx%d maze from (%d, %d): %d carves",
                     self.rows, self.cols, start_row, start_col, self.step_count)
        return grid

    @staticmethod
    def shuffled_directions(rng) -> Iterator[Coord]:
        directions = list(CARVE_ORDER)
        rng.shuffle(directions)
        return iter(directions)
