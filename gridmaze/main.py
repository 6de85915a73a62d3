import argparse
import logging
import sys
import time
from typing import List, Optional

from gridmaze.algo.dfs import RecursiveBacktracker
from gridmaze.algo.solvers import SOLVERS
from gridmaze.config import (
    DEFAULT_COLS, DEFAULT_ROWS, DEFAULT_SOLVER, DEFAULT_START, DEFAULT_STEP_DELAY,
    ENABLED_SOLVERS, RunConfig,
)
from gridmaze.core.complexity import MazeAnalyzer
from gridmaze.core.errors import MazeError
from gridmaze.core.grid import Cell, Snapshot

logger = logging.getLogger("gridmaze")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


class StepLogger:
    """Observer that logs a one-line summary of every emitted snapshot."""

    def __init__(self, label: str):
        self.label = label
        self.count = 0

    def __call__(self, snapshot: Snapshot):
        self.count += 1
        logger.debug(
            "%s step %d: open=%d visited=%d path=%d",
            self.label, self.count,
            snapshot.rows * snapshot.cols - snapshot.count(Cell.WALL),
            snapshot.count(Cell.VISITED),
            snapshot.count(Cell.PATH),
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="gridmaze: perfect maze generator and solver")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_maze_args(sub):
        sub.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Grid rows (min 3)")
        sub.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Grid columns (min 3)")
        sub.add_argument("--start", type=int, nargs=2, default=list(DEFAULT_START),
                         metavar=("ROW", "COL"), help="Start cell (even row and column)")
        sub.add_argument("--seed", type=int, default=None, help="Random Seed")

    def add_step_args(sub):
        sub.add_argument("--steps", action="store_true", help="Run step by step, logging each step")
        sub.add_argument("--delay", type=float, default=DEFAULT_STEP_DELAY, help="Seconds between steps")

    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    add_maze_args(gen_parser)
    add_step_args(gen_parser)
    gen_parser.add_argument("--stats", action="store_true", help="Log maze statistics")

    solve_parser = subparsers.add_parser("solve", help="Generate a maze and solve it")
    add_maze_args(solve_parser)
    add_step_args(solve_parser)
    solve_parser.add_argument("--end", type=int, nargs=2, default=None, metavar=("ROW", "COL"),
                              help="End cell (default: bottom-right room)")
    solve_parser.add_argument("--algo", type=str, default=DEFAULT_SOLVER, choices=sorted(SOLVERS),
                              help="Solver algorithm")

    bench_parser = subparsers.add_parser("benchmark", help="Race the solvers on one maze")
    add_maze_args(bench_parser)
    bench_parser.add_argument("--runs", type=int, default=3, help="Timed runs per solver")

    return parser


def generate_maze(cfg: RunConfig):
    generator = RecursiveBacktracker(cfg.rows, cfg.cols, seed=cfg.seed)
    if cfg.steps or cfg.step_delay > 0:
        observer = StepLogger("generate")
        grid = generator.generate_animated(*cfg.start, step_delay=cfg.step_delay, on_step=observer)
        logger.info(f"Generated in {observer.count} steps")
    else:
        grid = generator.generate(*cfg.start)
    return grid


def cmd_generate(cfg: RunConfig, show_stats: bool) -> int:
    logger.info(f"Generating {cfg.rows}x{cfg.cols} maze from {cfg.start}...")
    grid = generate_maze(cfg)

    if show_stats:
        logger.info(f"Stats: {MazeAnalyzer.calculate_stats(grid)}")

    print(grid.to_text(start=cfg.start))
    return 0


def cmd_solve(cfg: RunConfig) -> int:
    grid = generate_maze(cfg)

    solver = SOLVERS[cfg.algo](grid)
    logger.info(f"Solving with {cfg.algo.upper()} from {cfg.start} to {cfg.end}...")

    observer = StepLogger(cfg.algo) if cfg.steps else None
    found = solver.solve(cfg.start, cfg.end, step_delay=cfg.step_delay, on_step=observer)

    print(grid.to_text(start=cfg.start, end=cfg.end))
    if not found:
        print(f"No path. Visited: {solver.visited_count}")
        return 1
    print(f"Done. Path Length: {len(solver.path)} Visited: {solver.visited_count}")
    return 0


def cmd_benchmark(cfg: RunConfig, runs: int) -> int:
    logger.info(f"Generating base {cfg.rows}x{cfg.cols} maze...")
    t0 = time.time()
    base = generate_maze(cfg)
    logger.info(f"Generation complete in {time.time() - t0:.4f}s")

    print(f"\n{'ALGORITHM':<12} | {'TIME (s)':<10} | {'PATH LEN':<10} | {'VISITED':<10}")
    print("-" * 52)

    for name in ENABLED_SOLVERS:
        best = None
        solver = None
        for _ in range(max(runs, 1)):
            # Solvers mark the grid, so every run gets a clean copy
            solver = SOLVERS[name](base.copy())
            t_start = time.perf_counter()
            solver.solve(cfg.start, cfg.end)
            duration = time.perf_counter() - t_start
            best = duration if best is None else min(best, duration)

        print(f"{name:<12} | {best:<10.4f} | {len(solver.path):<10} | {solver.visited_count:<10}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")
    try:
        cfg = RunConfig.from_args(args)
        if args.command == "generate":
            return cmd_generate(cfg, args.stats)
        if args.command == "solve":
            return cmd_solve(cfg)
        if args.command == "benchmark":
            return cmd_benchmark(cfg, args.runs)
    except MazeError as e:
        logger.error(str(e))
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
