"""Pattern-based static evaluator used by the search engines.

Scores are integers. `eval_move` is the immediate value of dropping a stone
on an empty cell for one player; `eval_state` scores a whole position from
one player's point of view.
"""

from __future__ import annotations

from renjuai.game.board import WIN_LENGTH, Board
from renjuai.game.types import Player, Point

# ---------------------------------------------------------------------------
# Pattern scoring table: (consecutive_count, open_ends) -> score
# ---------------------------------------------------------------------------

PATTERN_SCORES: dict[tuple[int, int], int] = {
    (4, 2): 50_000,   # open four, cannot be stopped
    (4, 1): 12_000,   # half-open four, must be answered
    (3, 2): 6_000,    # open three
    (3, 1): 1_500,    # half-open three
    (2, 2): 1_000,    # open two
    (2, 1): 100,      # half-open two
    (1, 2): 10,
    (1, 1): 1,
}

FIVE_SCORE = 100_000

# A move scoring at least this completes five in a row
WINNING_SCORE = FIVE_SCORE

# An opponent move scoring at least this needs an answer now: a four,
# an open four in the making, or two open threes at once
THREATENING_SCORE = 12_000

# Four direction axes for scanning patterns
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (1, -1)]


def pattern_score(count: int, open_ends: int) -> int:
    """Look up score for a consecutive group with given open ends."""
    if count >= WIN_LENGTH:
        return FIVE_SCORE
    return PATTERN_SCORES.get((count, open_ends), 0)


def _is_open(board: Board, point: Point) -> bool:
    return board.is_on_grid(point) and board.is_empty(point)


def eval_move(board: Board, point: Point, player: Player) -> int:
    """Heuristic value of placing `player`'s stone at the empty `point`.

    Sums, over the four axes, the pattern the new stone would join. The
    board is only read.
    """
    score = 0
    for dr, dc in DIRECTIONS:
        count = 1  # the move itself

        # Forward
        r, c = point.row + dr, point.col + dc
        while board.get(Point(r, c)) is player:
            count += 1
            r += dr
            c += dc
        open_ends = 1 if _is_open(board, Point(r, c)) else 0

        # Backward
        r, c = point.row - dr, point.col - dc
        while board.get(Point(r, c)) is player:
            count += 1
            r -= dr
            c -= dc
        if _is_open(board, Point(r, c)):
            open_ends += 1

        score += pattern_score(count, open_ends)
    return score


def _group_scores(board: Board) -> dict[Player, int]:
    """Sum the pattern score of every maximal group, per player."""
    totals = {Player.BLACK: 0, Player.WHITE: 0}
    for dr, dc in DIRECTIONS:
        for pt, player in board.stones():
            # Only score a group from its first stone in this direction
            if board.get(Point(pt.row - dr, pt.col - dc)) is player:
                continue

            count = 0
            r, c = pt.row, pt.col
            while board.get(Point(r, c)) is player:
                count += 1
                r += dr
                c += dc

            open_ends = 0
            if _is_open(board, Point(pt.row - dr, pt.col - dc)):
                open_ends += 1
            if _is_open(board, Point(r, c)):
                open_ends += 1

            totals[player] += pattern_score(count, open_ends)
    return totals


def eval_state(board: Board, player: Player) -> int:
    """Static score of the position from `player`'s perspective.

    Positive when `player` is ahead. Symmetric:
    eval_state(b, p) == -eval_state(b, p.other).
    """
    totals = _group_scores(board)
    return totals[player] - totals[player.other]
