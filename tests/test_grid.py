import unittest
import sys
import os

# Add project root to path so we can import gridmaze
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.core.errors import InvalidDimensions, MazeError
from gridmaze.core.grid import CARVE_ORDER, SEARCH_ORDER, Cell, Grid

ROOM = [
    "..#..",
    ".#...",
    "...#.",
]


class TestGrid(unittest.TestCase):
    def test_initialization(self):
        grid = Grid(5, 7)
        self.assertEqual((grid.rows, grid.cols), (5, 7))
        self.assertEqual(len(grid.cells), 35)
        for val in grid.cells:
            self.assertEqual(val, Cell.WALL)

    def test_small_dimensions_are_clamped(self):
        grid = Grid(1, -4)
        self.assertEqual((grid.rows, grid.cols), (3, 3))
        self.assertEqual(len(grid.cells), 9)

    def test_non_integer_dimensions_rejected(self):
        with self.assertRaises(InvalidDimensions):
            Grid(2.5, 3)
        with self.assertRaises(InvalidDimensions):
            Grid(True, 5)

    def test_coordinates(self):
        grid = Grid(5, 5)
        self.assertEqual(grid.get_index(2, 2), 12)  # 2 * 5 + 2

        with self.assertRaises(IndexError):
            grid.get_index(-1, 0)
        with self.assertRaises(IndexError):
            grid.get_index(0, 5)

    def test_set_and_get(self):
        grid = Grid(3, 3)
        grid.set(1, 2, Cell.PASSAGE)
        self.assertEqual(grid.get(1, 2), Cell.PASSAGE)
        self.assertIsInstance(grid.get(1, 2), Cell)
        self.assertTrue(grid.is_open(1, 2))
        self.assertFalse(grid.is_open(0, 0))
        self.assertFalse(grid.is_open(3, 0))

    def test_neighbors(self):
        grid = Grid(3, 3)
        self.assertEqual(len(list(grid.get_neighbors(1, 1))), 4)

        # Corner keeps the search order: down, right
        corner = list(grid.get_neighbors(0, 0, SEARCH_ORDER))
        self.assertEqual(corner, [(1, 0, 1, 0), (0, 1, 0, 1)])

    def test_neighbors_two_apart(self):
        grid = Grid(5, 5)
        rooms = list(grid.get_neighbors(0, 0, CARVE_ORDER, step=2))
        self.assertEqual(rooms, [(2, 0, 1, 0), (0, 2, 0, 1)])

    def test_text_round_trip(self):
        grid = Grid.from_text(ROOM)
        self.assertEqual((grid.rows, grid.cols), (3, 5))
        self.assertEqual(grid.get(0, 2), Cell.WALL)
        self.assertEqual(grid.get(2, 4), Cell.PASSAGE)
        self.assertEqual(grid.to_text(), "\n".join(ROOM))
        self.assertEqual(Grid.from_text("\n".join(ROOM)).to_text(), grid.to_text())

    def test_text_overlays(self):
        grid = Grid.from_text(ROOM)
        lines = grid.to_text(start=(0, 0), end=(2, 4)).split("\n")
        self.assertEqual(lines[0], "S.#..")
        self.assertEqual(lines[2], "...#E")

    def test_from_text_rejects_bad_input(self):
        with self.assertRaises(InvalidDimensions):
            Grid.from_text(["...", "....", "..."])
        with self.assertRaises(InvalidDimensions):
            Grid.from_text(["...", "..."])
        with self.assertRaises(MazeError):
            Grid.from_text(["...", ".x.", "..."])

    def test_open_neighbors(self):
        grid = Grid.from_text(ROOM)
        self.assertEqual(sorted(grid.get_open_neighbors(0, 1)), [(0, 0)])
        self.assertEqual(sorted(grid.get_open_neighbors(1, 2)), [(1, 3), (2, 2)])

    def test_count_and_positions(self):
        grid = Grid.from_text(ROOM)
        self.assertEqual(grid.count(Cell.WALL), 3)
        self.assertEqual(list(grid.positions(Cell.WALL)), [(0, 2), (1, 1), (2, 3)])

    def test_snapshot_is_a_value_copy(self):
        grid = Grid.from_text(ROOM)
        snap = grid.snapshot()
        grid.set(0, 0, Cell.PATH)
        self.assertEqual(snap.get(0, 0), Cell.PASSAGE)
        self.assertEqual(grid.get(0, 0), Cell.PATH)

    def test_snapshot_cursor_stays_out_of_grid(self):
        grid = Grid.from_text(ROOM)
        snap = grid.snapshot(cursor=(1, 0))
        self.assertEqual(snap.get(1, 0), Cell.CURSOR)
        self.assertEqual(snap.to_text().split("\n")[1][0], "@")
        self.assertEqual(grid.get(1, 0), Cell.PASSAGE)
        self.assertEqual(grid.count(Cell.CURSOR), 0)

    def test_snapshot_array_is_read_only(self):
        grid = Grid.from_text(ROOM)
        arr = grid.snapshot().to_numpy()
        self.assertEqual(arr.shape, (3, 5))
        self.assertEqual(arr[0, 2], Cell.WALL)
        self.assertFalse(arr.flags.writeable)

    def test_grid_array_is_a_copy(self):
        grid = Grid.from_text(ROOM)
        arr = grid.to_numpy()
        arr[0, 0] = Cell.PATH
        self.assertEqual(grid.get(0, 0), Cell.PASSAGE)

    def test_copy_is_independent(self):
        grid = Grid.from_text(ROOM)
        clone = grid.copy()
        clone.set(0, 0, Cell.VISITED)
        self.assertEqual(grid.get(0, 0), Cell.PASSAGE)
        self.assertEqual(clone.get(0, 0), Cell.VISITED)

    def test_reset_solution(self):
        grid = Grid.from_text(["o*#..", ".#*o.", "...#."])
        self.assertEqual(grid.reset_solution(), 4)
        self.assertEqual(grid.count(Cell.VISITED) + grid.count(Cell.PATH), 0)
        self.assertEqual(grid.to_text(), "\n".join(ROOM))


if __name__ == '__main__':
    unittest.main()
