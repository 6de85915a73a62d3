import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Iterator, List, Optional, Tuple

from gridmaze.core.errors import InvalidEndpoint
from gridmaze.core.events import EVT_BACKTRACK, EVT_PATH, EVT_VISIT, Step
from gridmaze.core.grid import SEARCH_ORDER, Cell, Coord, Grid
from gridmaze.core.pacing import Pacer, StepObserver, drive

logger = logging.getLogger(__name__)


class Node:
    """A reached cell plus the node it was reached from."""

    __slots__ = ('row', 'col', 'prev')

    def __init__(self, row: int, col: int, prev: Optional['Node'] = None):
        self.row = row
        self.col = col
        self.prev = prev

    def trace(self) -> Iterator['Node']:
        """Walks back-references from this node to the root."""
        node = self
        while node is not None:
            yield node
            node = node.prev

    def __repr__(self):
        return f"Node({self.row}, {self.col})"


class Solver(ABC):
    """
    Finds a route between two open cells and marks it on the grid in place.

    Only PASSAGE cells are entered. Cells already VISITED or PATH from an
    earlier solve count as explored, so re-solving a solved grid finds no
    work and returns False; call Grid.reset_solution() first to search again.
    Neighbours are always tried down, right, up, left.
    """
    name = "solver"

    def __init__(self, grid: Grid):
        self.grid = grid
        self.path: List[Coord] = []
        self.visited_count = 0
        self.found = False

    def validate_endpoints(self, start: Coord, end: Coord):
        for label, (r, c) in (("start", start), ("end", end)):
            if not self.grid.in_bounds(r, c):
                raise InvalidEndpoint(
                    f"{label.capitalize()} ({r}, {c}) outside {self.grid.rows}x{self.grid.cols} grid")
            if self.grid.get(r, c) == Cell.WALL:
                raise InvalidEndpoint(f"{label.capitalize()} ({r}, {c}) is a wall")

    def reset(self):
        self.path = []
        self.visited_count = 0
        self.found = False

    def run(self, start: Coord, end: Coord) -> Iterator[Step]:
        """
        Step-emitting solve. Endpoints are checked before the grid is touched;
        the returned iterator does the work as it is consumed.
        """
        self.validate_endpoints(start, end)
        self.reset()
        return self.search(tuple(start), tuple(end), emit=True)

    def solve(self, start: Coord, end: Coord, step_delay: float = 0.0,
              on_step: Optional[StepObserver] = None, pacer: Optional[Pacer] = None) -> bool:
        self.validate_endpoints(start, end)
        self.reset()
        emit = on_step is not None or step_delay > 0
        drive(self.search(tuple(start), tuple(end), emit), on_step, step_delay, pacer)

        if self.found:
            logger.debug("%s: path of %d cells, %d visited", self.name, len(self.path), self.visited_count)
        else:
            logger.debug("%s: no path, %d visited", self.name, self.visited_count)
        return self.found

    @abstractmethod
    def search(self, start: Coord, end: Coord, emit: bool) -> Iterator[Step]:
        pass

    def enterable(self, r: int, c: int) -> bool:
        return self.grid.in_bounds(r, c) and self.grid.get(r, c) == Cell.PASSAGE

    def snapshot_step(self, kind: int) -> Step:
        return Step(kind, self.grid.snapshot())


class RecursiveDFS(Solver):
    """
    Depth-first search with recursive semantics: a cell on the way back from
    a successful branch becomes PATH, a dead end stays VISITED.
    Call frames live on an explicit stack.
    """
    name = "recursive"

    def search(self, start: Coord, end: Coord, emit: bool) -> Iterator[Step]:
        if not self.enterable(*start):
            return

        # Frame: cell plus the directions not yet tried from it
        frames: List[Tuple[int, int, Iterator[Coord]]] = []
        target: Optional[Coord] = start

        while target is not None:
            r, c = target
            self.visited_count += 1

            if target == end:
                self.path = [(fr, fc) for fr, fc, _ in frames] + [target]
                for pr, pc in self.path:
                    self.grid.set(pr, pc, Cell.PATH)
                self.found = True
                if emit:
                    yield self.snapshot_step(EVT_PATH)
                return

            self.grid.set(r, c, Cell.VISITED)
            if emit:
                yield self.snapshot_step(EVT_VISIT)
            frames.append((r, c, iter(SEARCH_ORDER)))

            target = None
            while frames and target is None:
                fr, fc, directions = frames[-1]
                for dr, dc in directions:
                    if self.enterable(fr + dr, fc + dc):
                        target = (fr + dr, fc + dc)
                        break
                else:
                    # Dead end
                    frames.pop()
                    if emit:
                        yield self.snapshot_step(EVT_BACKTRACK)


class FrontierSolver(Solver):
    """
    Pops a node, skips it unless it is still PASSAGE, marks it VISITED,
    and pushes its PASSAGE neighbours with itself as predecessor.
    Subclasses choose the frontier discipline.
    """
    expansion_order = SEARCH_ORDER

    @abstractmethod
    def new_frontier(self):
        pass

    @abstractmethod
    def take(self, frontier) -> Node:
        pass

    def search(self, start: Coord, end: Coord, emit: bool) -> Iterator[Step]:
        frontier = self.new_frontier()
        frontier.append(Node(*start))

        while frontier:
            node = self.take(frontier)
            r, c = node.row, node.col
            if not self.enterable(r, c):
                continue

            self.grid.set(r, c, Cell.VISITED)
            self.visited_count += 1
            if emit:
                yield self.snapshot_step(EVT_VISIT)

            if (r, c) == end:
                self.reconstruct_path(node)
                if emit:
                    yield self.snapshot_step(EVT_PATH)
                return

            for nr, nc, _, _ in self.grid.get_neighbors(r, c, self.expansion_order):
                if self.enterable(nr, nc):
                    frontier.append(Node(nr, nc, node))

    def reconstruct_path(self, node: Node):
        for step in node.trace():
            self.grid.set(step.row, step.col, Cell.PATH)
            self.path.append((step.row, step.col))
        self.path.reverse()
        self.found = True


class DFS(FrontierSolver):
    """Iterative depth-first search. No shortest-path guarantee."""
    name = "dfs"
    # Pushed in reverse so "down" is on top of the stack
    expansion_order = tuple(reversed(SEARCH_ORDER))

    def new_frontier(self):
        return []

    def take(self, frontier) -> Node:
        return frontier.pop()


class BFS(FrontierSolver):
    """Breadth-first search. The route found is a shortest one."""
    name = "bfs"

    def new_frontier(self):
        return deque()

    def take(self, frontier) -> Node:
        return frontier.popleft()


SOLVERS = {
    RecursiveDFS.name: RecursiveDFS,
    DFS.name: DFS,
    BFS.name: BFS,
}


class MazeSolver:
    """Grid-in, found-out entry points. Each call uses a fresh solver on the given grid."""

    def solve(self, grid: Grid, start_row: int, start_col: int, end_row: int, end_col: int) -> bool:
        return RecursiveDFS(grid).solve((start_row, start_col), (end_row, end_col))

    def solve_animated_dfs(self, grid: Grid, start_row: int, start_col: int, end_row: int, end_col: int,
                           step_delay: float = 0.0, on_step: Optional[StepObserver] = None,
                           pacer: Optional[Pacer] = None) -> bool:
        return DFS(grid).solve((start_row, start_col), (end_row, end_col), step_delay, on_step, pacer)

    def solve_animated_bfs(self, grid: Grid, start_row: int, start_col: int, end_row: int, end_col: int,
                           step_delay: float = 0.0, on_step: Optional[StepObserver] = None,
                           pacer: Optional[Pacer] = None) -> bool:
        return BFS(grid).solve((start_row, start_col), (end_row, end_col), step_delay, on_step, pacer)
