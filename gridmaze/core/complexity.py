from typing import Any, Dict, List

from gridmaze.core.grid import Cell, GridView


class MazeAnalyzer:
    @staticmethod
    def open_degree(grid: GridView, r: int, c: int) -> int:
        return sum(1 for _ in grid.get_open_neighbors(r, c))

    @staticmethod
    def count_open_edges(grid: GridView) -> int:
        # Each open pair counted once, from its upper or left cell
        edges = 0
        for r in range(grid.rows):
            for c in range(grid.cols):
                if not grid.is_open(r, c):
                    continue
                if grid.is_open(r + 1, c):
                    edges += 1
                if grid.is_open(r, c + 1):
                    edges += 1
        return edges

    @staticmethod
    def components(grid: GridView) -> int:
        """Number of connected open regions (flood fill)."""
        seen = bytearray(grid.rows * grid.cols)
        regions = 0
        for idx, val in enumerate(grid.cells):
            if val == Cell.WALL or seen[idx]:
                continue
            regions += 1
            seen[idx] = 1
            stack: List[int] = [idx]
            while stack:
                r, c = divmod(stack.pop(), grid.cols)
                for nr, nc in grid.get_open_neighbors(r, c):
                    n_idx = nr * grid.cols + nc
                    if not seen[n_idx]:
                        seen[n_idx] = 1
                        stack.append(n_idx)
        return regions

    @staticmethod
    def is_perfect(grid: GridView) -> bool:
        """Open cells form a tree: connected, and one edge fewer than cells."""
        open_cells = grid.rows * grid.cols - grid.count(Cell.WALL)
        if open_cells == 0:
            return False
        return (MazeAnalyzer.components(grid) == 1
                and MazeAnalyzer.count_open_edges(grid) == open_cells - 1)

    @staticmethod
    def calculate_stats(grid: GridView) -> Dict[str, Any]:
        dead_ends = 0
        corridors = 0
        junctions = 0  # 3+ exits

        for r in range(grid.rows):
            for c in range(grid.cols):
                if not grid.is_open(r, c):
                    continue
                exits = MazeAnalyzer.open_degree(grid, r, c)
                if exits == 1: dead_ends += 1
                elif exits == 2: corridors += 1
                elif exits >= 3: junctions += 1

        open_cells = grid.rows * grid.cols - grid.count(Cell.WALL)
        open_edges = MazeAnalyzer.count_open_edges(grid)
        components = MazeAnalyzer.components(grid)
        return {
            "open_cells": open_cells,
            "open_edges": open_edges,
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "components": components,
            "is_perfect": open_cells > 0 and components == 1 and open_edges == open_cells - 1,
            "dead_end_percent": (dead_ends / open_cells) * 100 if open_cells > 0 else 0
        }
