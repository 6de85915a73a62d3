from dataclasses import dataclass
from typing import Optional

from gridmaze.core.grid import Coord, clamp_dimensions

# ==========================================
# DEFAULTS
# ==========================================
DEFAULT_ROWS = 21
DEFAULT_COLS = 21
DEFAULT_START = (0, 0)
DEFAULT_STEP_DELAY = 0.0
DEFAULT_SOLVER = "bfs"

# Solvers raced by the benchmark command, in print order
ENABLED_SOLVERS = [
    "recursive",
    "dfs",
    "bfs",
]


def default_end(rows: int, cols: int) -> Coord:
    """Bottom-right room cell (largest even row and column)."""
    rows, cols = clamp_dimensions(rows, cols)
    return ((rows - 1) // 2 * 2, (cols - 1) // 2 * 2)


@dataclass
class RunConfig:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    start: Coord = DEFAULT_START
    end: Optional[Coord] = None
    seed: Optional[int] = None
    algo: str = DEFAULT_SOLVER
    steps: bool = False
    step_delay: float = DEFAULT_STEP_DELAY

    def __post_init__(self):
        self.rows, self.cols = clamp_dimensions(self.rows, self.cols)
        self.start = tuple(self.start)
        self.end = default_end(self.rows, self.cols) if self.end is None else tuple(self.end)

    @classmethod
    def from_args(cls, args) -> 'RunConfig':
        return cls(
            rows=args.rows,
            cols=args.cols,
            start=args.start,
            end=getattr(args, "end", None),
            seed=args.seed,
            algo=getattr(args, "algo", DEFAULT_SOLVER),
            steps=getattr(args, "steps", False),
            step_delay=getattr(args, "delay", DEFAULT_STEP_DELAY),
        )
