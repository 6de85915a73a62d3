import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.algo.dfs import RecursiveBacktracker
from gridmaze.core.grid import Grid
from gridmaze.core.complexity import MazeAnalyzer


class TestComplexity(unittest.TestCase):
    def test_generated_maze_stats(self):
        grid = RecursiveBacktracker(21, 21, seed=42).generate(0, 0)
        stats = MazeAnalyzer.calculate_stats(grid)

        self.assertTrue(stats["is_perfect"])
        self.assertGreater(stats["dead_ends"], 0)
        self.assertEqual(stats["dead_ends"] + stats["corridors"] + stats["junctions"], stats["open_cells"])

    def test_serpentine_stats(self):
        grid = Grid.from_text([
            ".#...",
            ".#.#.",
            ".#.#.",
            ".#.#.",
            "...#.",
        ])
        stats = MazeAnalyzer.calculate_stats(grid)
        self.assertEqual(stats["open_cells"], 17)
        self.assertEqual(stats["open_edges"], 16)
        self.assertEqual(stats["dead_ends"], 2)
        self.assertEqual(stats["corridors"], 15)
        self.assertEqual(stats["junctions"], 0)
        self.assertTrue(stats["is_perfect"])

    def test_loop_is_not_perfect(self):
        grid = Grid.from_text(["...", "...", "..."])
        self.assertEqual(MazeAnalyzer.count_open_edges(grid), 12)
        self.assertEqual(MazeAnalyzer.components(grid), 1)
        self.assertFalse(MazeAnalyzer.is_perfect(grid))

    def test_islands_are_not_perfect(self):
        grid = Grid.from_text(["..#..", "#####", "....."])
        self.assertEqual(MazeAnalyzer.components(grid), 3)
        self.assertFalse(MazeAnalyzer.is_perfect(grid))

    def test_solid_grid(self):
        grid = Grid(3, 3)
        stats = MazeAnalyzer.calculate_stats(grid)
        self.assertEqual(stats["open_cells"], 0)
        self.assertEqual(stats["components"], 0)
        self.assertFalse(stats["is_perfect"])

    def test_snapshots_can_be_analyzed(self):
        grid = RecursiveBacktracker(9, 9, seed=1).generate(0, 0)
        self.assertTrue(MazeAnalyzer.is_perfect(grid.snapshot()))


if __name__ == '__main__':
    unittest.main()
