from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Iterator, Optional

from renjuai import config

from .types import Player, Point

WIN_LENGTH = 5

# Cells within this Chebyshev distance of a stone are never remote
REMOTE_RADIUS = 2

# Column labels: A, B, C, ... (one letter per column, no skipped letters)
COL_LABELS = string.ascii_uppercase


def parse_coordinate(text: str, size: int = config.BOARD_SIZE) -> Optional[Point]:
    """Parse a coordinate string like 'E5' or 'H12' into a Point.

    Column is a letter, row is a number 1..size.
    Returns None if the string is invalid.
    """
    text = text.strip().upper()
    if len(text) < 2 or len(text) > 3:
        return None
    col_char = text[0]
    row_str = text[1:]
    if col_char not in COL_LABELS[:size]:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= size):
        return None
    col = COL_LABELS.index(col_char) + 1
    return Point(row, col)


def format_point(point: Point) -> str:
    """Format a Point as a coordinate string like 'E5'."""
    return f"{COL_LABELS[point.col - 1]}{point.row}"


@dataclass
class PlayedMove:
    point: Point
    player: Player
    elapsed: Optional[float] = None

    def __str__(self) -> str:
        return f"{self.player}: {format_point(self.point)}"


class Board:
    """Square five-in-a-row board. Tracks stone placement.

    Cells are addressed by 1-indexed Points; an empty cell reads as None.
    """

    def __init__(self, size: int = config.BOARD_SIZE) -> None:
        assert 0 < size <= len(COL_LABELS), f"Unsupported board size {size}"
        self.size = size
        self._grid: dict[Point, Player] = {}

    def place(self, point: Point, player: Player) -> None:
        assert self.is_on_grid(point), f"Point {point} is off the grid"
        assert self.is_empty(point), f"{format_point(point)} is occupied"
        self._grid[point] = player

    def remove(self, point: Point) -> None:
        del self._grid[point]

    def get(self, point: Point) -> Optional[Player]:
        return self._grid.get(point)

    def is_empty(self, point: Point) -> bool:
        return point not in self._grid

    def is_on_grid(self, point: Point) -> bool:
        return 1 <= point.row <= self.size and 1 <= point.col <= self.size

    def is_remote(self, point: Point) -> bool:
        """True if no other stone lies within REMOTE_RADIUS (Chebyshev) of `point`.

        A stone on `point` itself does not count as a neighbour.
        """
        grid = self._grid
        if len(grid) <= (2 * REMOTE_RADIUS + 1) ** 2:
            return all(p == point or point.chebyshev(p) > REMOTE_RADIUS for p in grid)
        for r in range(point.row - REMOTE_RADIUS, point.row + REMOTE_RADIUS + 1):
            for c in range(point.col - REMOTE_RADIUS, point.col + REMOTE_RADIUS + 1):
                if (r != point.row or c != point.col) and Point(r, c) in grid:
                    return False
        return True

    def stones(self) -> Iterator[tuple[Point, Player]]:
        return iter(self._grid.items())

    def copy(self) -> Board:
        other = Board(self.size)
        other._grid = dict(self._grid)
        return other

    @property
    def occupied_count(self) -> int:
        return len(self._grid)

    @property
    def is_full(self) -> bool:
        return len(self._grid) == self.size * self.size

    @property
    def center(self) -> Point:
        c = (self.size + 1) // 2
        return Point(c, c)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self._grid == other._grid

    def __repr__(self) -> str:
        return f"Board(size={self.size}, stones={len(self._grid)})"


def five_in_a_row(board: Board, point: Point, player: Player) -> bool:
    """Check if `player`'s stone at `point` is part of WIN_LENGTH or more in a row."""
    directions = [(0, 1), (1, 0), (1, 1), (1, -1)]
    for dr, dc in directions:
        count = 1
        # Count forward
        for n in range(1, WIN_LENGTH):
            p = point.step(dr, dc, n)
            if board.get(p) is not player:
                break
            count += 1
        # Count backward
        for n in range(1, WIN_LENGTH):
            p = point.step(-dr, -dc, n)
            if board.get(p) is not player:
                break
            count += 1
        if count >= WIN_LENGTH:
            return True
    return False


class GomokuGameState:
    """Full game state: board, side to move, move history and result."""

    def __init__(self, size: int = config.BOARD_SIZE) -> None:
        self.board = Board(size)
        self.current_player = Player.BLACK
        self.moves: list[PlayedMove] = []
        self._winner: Optional[Player] = None
        self._is_over = False

    @property
    def is_over(self) -> bool:
        return self._is_over

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def is_draw(self) -> bool:
        return self._is_over and self._winner is None

    def legal_moves(self) -> list[Point]:
        if self._is_over:
            return []
        size = self.board.size
        return [
            Point(r, c)
            for r in range(1, size + 1)
            for c in range(1, size + 1)
            if self.board.is_empty(Point(r, c))
        ]

    def apply_move(self, point: Point, elapsed: Optional[float] = None) -> None:
        """Place a stone for the current player and advance the turn."""
        assert not self._is_over, "Game is already over"

        player = self.current_player
        self.board.place(point, player)
        self.moves.append(PlayedMove(point=point, player=player, elapsed=elapsed))

        if five_in_a_row(self.board, point, player):
            self._winner = player
            self._is_over = True
        elif self.board.is_full:
            self._is_over = True

        self.current_player = self.current_player.other

    def undo_move(self) -> Optional[PlayedMove]:
        """Undo the last move. Returns the undone move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self.board.remove(move.point)
        self.current_player = move.player
        self._winner = None
        self._is_over = False
        return move

    def resign(self, player: Player) -> None:
        """End the game with `player` conceding."""
        self._is_over = True
        self._winner = player.other
