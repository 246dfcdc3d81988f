"""
The 10x10 board of squares and its two number axes.

(placed in its own module as both the game and the persistence checks need it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

GRID_SIZE = 10
TOTAL_CELLS = GRID_SIZE * GRID_SIZE

Grid = list[list[Optional[str]]]
Axis = list[Optional[int]]


@dataclass(frozen=True)
class Cell:
    row: int
    col: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < GRID_SIZE) and (0 <= self.col < GRID_SIZE)


def empty_grid() -> Grid:
    return [[None] * GRID_SIZE for _ in range(GRID_SIZE)]


def empty_axis() -> Axis:
    return [None] * GRID_SIZE


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def all_cells() -> Iterator[Cell]:
    """Row by row, left to right."""
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            yield Cell(row, col)


def is_valid_grid(grid: object) -> bool:
    """GRID_SIZE rows of GRID_SIZE cells, each cell a participant id or None."""
    if not isinstance(grid, list) or len(grid) != GRID_SIZE:
        return False
    return all(
        isinstance(row, list)
        and len(row) == GRID_SIZE
        and all(cell is None or isinstance(cell, str) for cell in row)
        for row in grid
    )


def is_permutation(axis: Axis) -> bool:
    """All ten digits present exactly once."""
    if len(axis) != GRID_SIZE or any(not isinstance(n, int) for n in axis):
        return False
    return sorted(axis) == list(range(GRID_SIZE))


def is_blank(axis: Axis) -> bool:
    return len(axis) == GRID_SIZE and all(n is None for n in axis)
