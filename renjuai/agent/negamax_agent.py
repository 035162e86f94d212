"""Agents backed by the heuristic search and by the exhaustive baseline."""

from __future__ import annotations

import logging
from typing import Optional

from renjuai import config
from renjuai.agent.base import Agent
from renjuai.agent.exhaustive import exhaustive_negamax
from renjuai.agent.search import (
    DEFAULT_CONFIG,
    SearchConfig,
    SearchOutcome,
    SearchStats,
    heuristic_negamax,
)
from renjuai.game.board import GomokuGameState, format_point
from renjuai.game.types import Point

logger = logging.getLogger(__name__)


class NegamaxAgent(Agent):
    """Heuristic negamax agent.

    depth > 0 searches at a fixed depth; depth == -1 deepens iteratively
    within `time_limit` milliseconds.
    """

    def __init__(
        self,
        depth: int = config.DEFAULT_DEPTH,
        time_limit: int = config.DEFAULT_TIME_LIMIT_MS,
        enable_ab_pruning: bool = True,
        search_config: SearchConfig = DEFAULT_CONFIG,
    ) -> None:
        assert depth == -1 or depth > 0, f"Invalid search depth {depth}"
        self.depth = depth
        self.time_limit = time_limit
        self.enable_ab_pruning = enable_ab_pruning
        self.search_config = search_config
        self.last_outcome: Optional[SearchOutcome] = None

    @property
    def name(self) -> str:
        if self.depth == -1:
            return f"NegamaxAgent(t={self.time_limit}ms)"
        return f"NegamaxAgent(d={self.depth})"

    def select_move(self, game_state: GomokuGameState) -> Point:
        board = game_state.board
        if board.occupied_count == 0:
            self.last_outcome = None
            return board.center

        outcome = heuristic_negamax(
            board,
            game_state.current_player,
            self.depth,
            self.time_limit,
            self.enable_ab_pruning,
            self.search_config,
        )
        self.last_outcome = outcome
        assert outcome is not None and outcome.point is not None, "No candidates found"

        logger.debug(
            "%s plays %s (score %d, depth %d, %d nodes)",
            self.name, format_point(outcome.point), outcome.score, outcome.depth, outcome.nodes,
        )
        return outcome.point

    def last_search_summary(self) -> str:
        o = self.last_outcome
        if o is None:
            return ""
        return f"depth {o.depth}, {o.nodes} nodes, score {o.score}"


class ExhaustiveAgent(Agent):
    """Exhaustive fixed-depth negamax with static leaves. Slow; small depths only."""

    def __init__(self, depth: int = 2) -> None:
        assert depth > 0, f"Invalid search depth {depth}"
        self.depth = depth
        self._last_nodes = 0

    @property
    def name(self) -> str:
        return f"ExhaustiveAgent(d={self.depth})"

    def select_move(self, game_state: GomokuGameState) -> Point:
        board = game_state.board
        if board.occupied_count == 0:
            return board.center

        stats = SearchStats()
        result = exhaustive_negamax(board, game_state.current_player, self.depth, stats)
        self._last_nodes = stats.nodes
        assert result.move is not None, "No candidates found"
        return result.move.point

    def last_search_summary(self) -> str:
        if not self._last_nodes:
            return ""
        return f"depth {self.depth}, {self._last_nodes} nodes"
