"""Heuristic negamax: ranked candidates, alpha-beta, threat seeding,
score decay and time-budgeted iterative deepening.

Scores are differentials rather than static evaluations: a candidate is worth
its own heuristic value minus (a decayed copy of) the best reply the opponent
can find below it. Leaves therefore score 0.

Public entry points:
  - search_moves_ordered  ranked candidate moves for one player
  - negamax_search        the recursive core (explicit depth and window)
  - heuristic_negamax     depth selection: fixed depth or iterative deepening
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from renjuai.agent.evaluator import THREATENING_SCORE, WINNING_SCORE, eval_move
from renjuai.game.board import REMOTE_RADIUS, Board
from renjuai.game.types import Player, Point

logger = logging.getLogger(__name__)

# Alpha-beta window bound, far outside any reachable score
INF = 1 << 30


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchConfig:
    """Tuning constants of the heuristic search."""

    # Branching factor control: the mover's own top-K moves per node
    search_breadth: int = 6
    # Wider K on the first ply of each player below the root
    top_layer_search_breadth: int = 12
    # Used only to forecast the cost of the next iterative-deepening pass
    avg_branching_factor: int = 5
    max_depth: int = 16
    # Returned scores >= decay_threshold are scaled, so closer advantages win
    score_decay_factor: float = 0.95
    decay_threshold: int = 10
    # Early positions are cheap: search them at a fixed depth
    opening_stone_count: int = 2
    opening_depth: int = 6
    iterative_start_depth: int = 4
    iterative_depth_step: int = 2
    # Opponent moves pulled to the front when the opponent threatens
    threat_seed_count: int = 2
    # At the root, block if the best alternative is less than this much better
    block_preference_ratio: float = 0.2


DEFAULT_CONFIG = SearchConfig()


@dataclass
class SearchStats:
    """Node counter for one search session. Instrumentation only."""

    nodes: int = 0

    def reset(self) -> None:
        self.nodes = 0


@dataclass
class Move:
    point: Point
    heuristic_val: int
    actual_score: int = 0


@dataclass(frozen=True)
class SearchResult:
    score: int
    move: Optional[Move] = None


@dataclass(frozen=True)
class SearchOutcome:
    point: Optional[Point]  # None when the board offers no candidate
    score: int
    depth: int
    nodes: int


# ---------------------------------------------------------------------------
# Candidate generation
# ---------------------------------------------------------------------------

def search_moves_ordered(board: Board, player: Player) -> list[Move]:
    """Every empty, non-remote cell with its heuristic value for `player`.

    Sorted best first. Equal values keep row-major order (rows ascending,
    then columns), so the ranking is reproducible.
    """
    stones = [pt for pt, _ in board.stones()]
    if not stones:
        return []

    # Cells outside the stones' bounding box grown by REMOTE_RADIUS are remote
    min_r = max(min(p.row for p in stones) - REMOTE_RADIUS, 1)
    max_r = min(max(p.row for p in stones) + REMOTE_RADIUS, board.size)
    min_c = max(min(p.col for p in stones) - REMOTE_RADIUS, 1)
    max_c = min(max(p.col for p in stones) + REMOTE_RADIUS, board.size)

    moves: list[Move] = []
    for r in range(min_r, max_r + 1):
        for c in range(min_c, max_c + 1):
            pt = Point(r, c)
            if not board.is_empty(pt) or board.is_remote(pt):
                continue
            moves.append(Move(pt, eval_move(board, pt, player)))

    moves.sort(key=lambda m: m.heuristic_val, reverse=True)
    return moves


# ---------------------------------------------------------------------------
# Recursive core
# ---------------------------------------------------------------------------

def _decay(score: int, config: SearchConfig) -> int:
    if score >= config.decay_threshold:
        return int(score * config.score_decay_factor)
    return score


def negamax_search(
    board: Board,
    player: Player,
    initial_depth: int,
    depth: int,
    enable_ab_pruning: bool = True,
    alpha: int = -INF,
    beta: int = INF,
    config: SearchConfig = DEFAULT_CONFIG,
    stats: Optional[SearchStats] = None,
) -> SearchResult:
    """Negamax over ranked candidates, from `player`'s perspective.

    `initial_depth` is the depth the root was called with; it selects the
    wider breadth near the root and enables the root-only blocking override.
    The board is modified while searching and restored before returning.
    """
    if depth == 0:
        return SearchResult(0)

    if stats is not None:
        stats.nodes += 1

    opponent = player.other
    moves_player = search_moves_ordered(board, player)
    moves_opponent = search_moves_ordered(board, opponent)

    if not moves_player:
        return SearchResult(0)

    top = moves_player[0]
    if len(moves_player) == 1 or top.heuristic_val >= WINNING_SCORE:
        return SearchResult(top.heuristic_val, top)

    candidates: list[Move] = []

    # Opponent threatens: examine its best squares first, valued for us
    block_opponent = bool(moves_opponent) and moves_opponent[0].heuristic_val >= THREATENING_SCORE
    if block_opponent:
        for threat in moves_opponent[:config.threat_seed_count]:
            candidates.append(Move(threat.point, eval_move(board, threat.point, player)))

    breadth = config.search_breadth
    if (depth + 1) // 2 == initial_depth // 2:
        breadth = config.top_layer_search_breadth
    candidates.extend(moves_player[:breadth])

    best: Optional[Move] = None
    for move in candidates:
        board.place(move.point, player)
        try:
            reply = negamax_search(
                board,
                opponent,
                initial_depth,
                depth - 1,
                enable_ab_pruning,
                -beta,
                -alpha + move.heuristic_val,
                config,
                stats,
            )
        finally:
            board.remove(move.point)

        move.actual_score = move.heuristic_val - _decay(reply.score, config)

        if best is None or move.actual_score > best.actual_score:
            best = move

        alpha = max(alpha, best.actual_score)
        if enable_ab_pruning and _decay(best.actual_score, config) >= beta:
            break

    assert best is not None
    best_move, best_score = best, best.actual_score

    # Nothing neutralises the threat: prefer the block unless attacking is
    # clearly better
    if depth == initial_depth and block_opponent and best_score < 0:
        blocking = candidates[0]
        b_score = blocking.actual_score or 1
        if (best_score - b_score) / abs(b_score) < config.block_preference_ratio:
            best_move, best_score = blocking, blocking.actual_score

    return SearchResult(best_score, best_move)


# ---------------------------------------------------------------------------
# Depth selection
# ---------------------------------------------------------------------------

def _outcome(result: SearchResult, depth: int, stats: SearchStats) -> SearchOutcome:
    point = result.move.point if result.move is not None else None
    return SearchOutcome(point=point, score=result.score, depth=depth, nodes=stats.nodes)


def heuristic_negamax(
    board: Board,
    player: Player,
    depth: int,
    time_limit: int,
    enable_ab_pruning: bool = True,
    config: SearchConfig = DEFAULT_CONFIG,
    stats: Optional[SearchStats] = None,
) -> Optional[SearchOutcome]:
    """Choose a move for `player`.

    depth > 0 searches at that fixed depth. depth == -1 deepens iteratively
    until the next pass is forecast to overrun `time_limit` (milliseconds)
    or max_depth is reached. Any other depth is a no-op and returns None.

    The caller's board is never modified; every pass runs on a fresh copy.
    """
    if depth == 0 or depth < -1:
        return None

    if stats is None:
        stats = SearchStats()

    if board.occupied_count <= config.opening_stone_count:
        depth = config.opening_depth

    if depth > 0:
        result = negamax_search(
            board.copy(), player, depth, depth, enable_ab_pruning, -INF, INF, config, stats
        )
        return _outcome(result, depth, stats)

    start = time.perf_counter()
    d = config.iterative_start_depth
    while True:
        iteration_start = time.perf_counter()
        result = negamax_search(
            board.copy(), player, d, d, enable_ab_pruning, -INF, INF, config, stats
        )
        now = time.perf_counter()
        iteration_ms = (now - iteration_start) * 1000
        elapsed_ms = (now - start) * 1000

        logger.debug(
            "depth %d: %.1f ms (elapsed %.1f ms, %d nodes)",
            d, iteration_ms, elapsed_ms, stats.nodes,
        )

        forecast = elapsed_ms + iteration_ms * config.avg_branching_factor * 2
        if d >= config.max_depth or forecast > time_limit:
            return _outcome(result, d, stats)
        d += config.iterative_depth_step
