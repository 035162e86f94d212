"""Plain fixed-depth negamax: no ordering, no pruning, static leaves.

Reference baseline for the heuristic search on positions small enough to
search exhaustively. Uses the same remoteness filter as
search_moves_ordered so both engines see the same moves.
"""

from __future__ import annotations

from typing import Optional

from renjuai.agent.evaluator import eval_state
from renjuai.agent.search import Move, SearchResult, SearchStats
from renjuai.game.board import Board
from renjuai.game.types import Player, Point


def exhaustive_negamax(
    board: Board,
    player: Player,
    depth: int,
    stats: Optional[SearchStats] = None,
) -> SearchResult:
    """Negamax score of the position for `player`, searched `depth` plies.

    Leaves are scored with eval_state. Candidates are visited in row-major
    order and only a strictly better score replaces the best move, so ties
    go to the first cell. A position with no eligible cell is scored as a
    leaf. The board is restored before returning.
    """
    if depth == 0:
        return SearchResult(eval_state(board, player))

    if stats is not None:
        stats.nodes += 1

    best_score: Optional[int] = None
    best_point: Optional[Point] = None

    for r in range(1, board.size + 1):
        for c in range(1, board.size + 1):
            pt = Point(r, c)
            if not board.is_empty(pt) or board.is_remote(pt):
                continue

            board.place(pt, player)
            try:
                score = -exhaustive_negamax(board, player.other, depth - 1, stats).score
            finally:
                board.remove(pt)

            if best_score is None or score > best_score:
                best_score = score
                best_point = pt

    if best_score is None:
        return SearchResult(eval_state(board, player))

    return SearchResult(best_score, Move(best_point, 0, best_score))
