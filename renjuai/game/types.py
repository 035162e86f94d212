"""Value types shared by the board, the evaluator and the search.

An empty cell has no `Player`: the board stores only occupied cells, so
"empty" is the absence of a stone (`Board.get` returns None).
"""

from __future__ import annotations

import enum
from typing import NamedTuple


class Player(enum.Enum):
    """Stone colour. Black moves first."""

    BLACK = 1
    WHITE = 2

    @property
    def other(self) -> Player:
        """The opponent; negamax flips to it at every ply."""
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    def __str__(self) -> str:
        return self.name.capitalize()


class Point(NamedTuple):
    """Board cell, 1-indexed. Row 1 is the bottom edge, column 1 the left."""

    row: int
    col: int

    def step(self, dr: int, dc: int, n: int = 1) -> Point:
        """The cell `n` steps away along direction (dr, dc)."""
        return Point(self.row + dr * n, self.col + dc * n)

    def chebyshev(self, other: Point) -> int:
        return max(abs(self.row - other.row), abs(self.col - other.col))
