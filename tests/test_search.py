"""Tests for the candidate generator and the heuristic negamax search."""

from __future__ import annotations

import pytest

from renjuai.agent.evaluator import WINNING_SCORE, eval_move
from renjuai.agent.search import (
    DEFAULT_CONFIG,
    INF,
    SearchConfig,
    SearchStats,
    _decay,
    heuristic_negamax,
    negamax_search,
    search_moves_ordered,
)
from renjuai.game.board import Board
from renjuai.game.types import Player, Point


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_board(black=(), white=(), size: int = 15) -> Board:
    board = Board(size)
    for pt in black:
        board.place(Point(*pt), Player.BLACK)
    for pt in white:
        board.place(Point(*pt), Player.WHITE)
    return board


def black_has_four() -> Board:
    """Black four on row 8 (cols 4-7), both ends open. White far away."""
    return make_board(
        black=[(8, 4), (8, 5), (8, 6), (8, 7)],
        white=[(2, 2), (2, 6), (2, 10), (14, 14)],
    )


def white_threatens_five() -> Board:
    """White four on row 8 (cols 5-8) capped by black at col 4; (8, 9) wins."""
    return make_board(
        black=[(8, 4), (4, 12), (12, 3)],
        white=[(8, 5), (8, 6), (8, 7), (8, 8)],
    )


def middlegame() -> Board:
    return make_board(
        black=[(7, 7), (8, 8), (9, 7)],
        white=[(8, 7), (7, 8), (10, 6)],
        size=11,
    )


def white_threatens_twice() -> Board:
    """9x9: white makes a capped four at (1, 4) or at (9, 6); black can stop one.

    Black's lone stone at (5, 5) gives every neighbour an open two (1030).
    """
    return make_board(
        black=[(5, 5)],
        white=[(1, 1), (1, 2), (1, 3), (9, 7), (9, 8), (9, 9)],
        size=9,
    )


def checkerboard_with_hole(size: int = 5, hole: Point = Point(3, 3)) -> Board:
    """Every cell filled except `hole`."""
    board = Board(size)
    for r in range(1, size + 1):
        for c in range(1, size + 1):
            if Point(r, c) == hole:
                continue
            board.place(Point(r, c), Player.BLACK if (r + c) % 2 else Player.WHITE)
    return board


# ---------------------------------------------------------------------------
# Candidate generation
# ---------------------------------------------------------------------------

class TestSearchMovesOrdered:
    def test_empty_board_has_no_candidates(self):
        assert search_moves_ordered(Board(), Player.BLACK) == []

    def test_single_center_stone_covers_radius_two(self):
        board = make_board(black=[(8, 8)])
        points = {m.point for m in search_moves_ordered(board, Player.BLACK)}
        expected = {
            Point(r, c)
            for r in range(6, 11)
            for c in range(6, 11)
            if (r, c) != (8, 8)
        }
        assert points == expected

    def test_corner_stone_is_clamped_to_grid(self):
        board = make_board(black=[(1, 1)])
        points = {m.point for m in search_moves_ordered(board, Player.WHITE)}
        expected = {Point(r, c) for r in range(1, 4) for c in range(1, 4)} - {Point(1, 1)}
        assert points == expected

    def test_sorted_descending(self):
        board = middlegame()
        vals = [m.heuristic_val for m in search_moves_ordered(board, Player.BLACK)]
        assert vals == sorted(vals, reverse=True)

    def test_heuristic_matches_evaluator(self):
        board = middlegame()
        for m in search_moves_ordered(board, Player.WHITE):
            assert m.heuristic_val == eval_move(board, m.point, Player.WHITE)
            assert m.actual_score == 0

    def test_ties_keep_row_major_order(self):
        board = make_board(black=[(8, 8)])
        moves = search_moves_ordered(board, Player.BLACK)
        # The eight neighbours score alike and come first, scanned row by row
        assert [m.point for m in moves[:8]] == [
            Point(7, 7), Point(7, 8), Point(7, 9),
            Point(8, 7), Point(8, 9),
            Point(9, 7), Point(9, 8), Point(9, 9),
        ]
        assert len({m.heuristic_val for m in moves[:8]}) == 1
        assert moves[8].heuristic_val < moves[7].heuristic_val

    def test_no_occupied_or_remote_candidates(self):
        board = middlegame()
        for m in search_moves_ordered(board, Player.BLACK):
            assert board.is_empty(m.point)
            assert not board.is_remote(m.point)

    def test_board_unchanged(self):
        board = middlegame()
        before = board.copy()
        search_moves_ordered(board, Player.BLACK)
        assert board == before


# ---------------------------------------------------------------------------
# Recursive core
# ---------------------------------------------------------------------------

class TestNegamaxSearch:
    def test_leaf_is_neutral(self):
        stats = SearchStats()
        result = negamax_search(middlegame(), Player.BLACK, 3, 0, stats=stats)
        assert result.score == 0
        assert result.move is None
        assert stats.nodes == 0

    def test_no_candidates_scores_zero(self):
        stats = SearchStats()
        result = negamax_search(Board(), Player.BLACK, 2, 2, stats=stats)
        assert result.score == 0
        assert result.move is None
        assert stats.nodes == 1

    def test_winning_move_returns_immediately(self):
        stats = SearchStats()
        result = negamax_search(black_has_four(), Player.BLACK, 4, 4, stats=stats)
        assert result.move is not None
        assert result.move.point in (Point(8, 3), Point(8, 8))
        assert result.score >= WINNING_SCORE
        assert result.score == result.move.heuristic_val
        assert stats.nodes == 1

    @pytest.mark.parametrize("depth", [1, 2, 3, 4])
    def test_single_candidate_shortcut(self, depth):
        board = checkerboard_with_hole()
        expected = eval_move(board, Point(3, 3), Player.BLACK)
        result = negamax_search(board, Player.BLACK, depth, depth)
        assert result.move is not None
        assert result.move.point == Point(3, 3)
        assert result.score == expected

    @pytest.mark.parametrize("depth", [2, 3])
    def test_blocks_five(self, depth):
        result = negamax_search(white_threatens_five(), Player.BLACK, depth, depth)
        assert result.move is not None
        assert result.move.point == Point(8, 9)

    @pytest.mark.parametrize("depth", [1, 2, 3, 4])
    def test_board_restored(self, depth):
        board = middlegame()
        before = board.copy()
        negamax_search(board, Player.WHITE, depth, depth)
        assert board == before

    def test_board_restored_after_threat_search(self):
        board = white_threatens_five()
        before = board.copy()
        negamax_search(board, Player.BLACK, 3, 3, enable_ab_pruning=False)
        assert board == before

    @pytest.mark.parametrize("depth", [2, 3])
    def test_pruning_equivalence(self, depth):
        board = middlegame()
        pruned_stats, full_stats = SearchStats(), SearchStats()
        pruned = negamax_search(board.copy(), Player.BLACK, depth, depth, True, -INF, INF,
                                stats=pruned_stats)
        full = negamax_search(board.copy(), Player.BLACK, depth, depth, False, -INF, INF,
                              stats=full_stats)
        assert pruned.score == full.score
        assert pruned.move.point == full.move.point
        assert pruned_stats.nodes <= full_stats.nodes

    def test_counts_every_inner_node(self):
        # depth 1: only the root is an inner node
        stats = SearchStats()
        negamax_search(middlegame(), Player.BLACK, 1, 1, stats=stats)
        assert stats.nodes == 1

    def test_depth_one_picks_best_heuristic(self):
        # No threat on the board: a one-ply search is the ranked list's head
        board = make_board(black=[(8, 8)], white=[(8, 9)])
        top = search_moves_ordered(board, Player.BLACK)[0]
        result = negamax_search(board, Player.BLACK, 1, 1)
        assert result.move.point == top.point
        assert result.score == top.heuristic_val


# ---------------------------------------------------------------------------
# Depth selection driver
# ---------------------------------------------------------------------------

class TestHeuristicNegamax:
    @pytest.mark.parametrize("depth", [0, -2, -5])
    def test_noop_depths(self, depth):
        board = middlegame()
        stats = SearchStats()
        assert heuristic_negamax(board, Player.BLACK, depth, 1000, stats=stats) is None
        assert stats.nodes == 0

    def test_does_not_modify_callers_board(self):
        board = middlegame()
        before = board.copy()
        heuristic_negamax(board, Player.BLACK, 3, 1000)
        assert board == before

    def test_fixed_depth_matches_core(self):
        board = middlegame()
        outcome = heuristic_negamax(board, Player.BLACK, 3, 1000)
        core = negamax_search(board.copy(), Player.BLACK, 3, 3)
        assert outcome.depth == 3
        assert outcome.point == core.move.point
        assert outcome.score == core.score
        assert outcome.nodes > 0

    @pytest.mark.parametrize("depth", [1, 2, 5])
    def test_single_candidate(self, depth):
        board = checkerboard_with_hole()
        outcome = heuristic_negamax(board, Player.WHITE, depth, 1000)
        assert outcome.point == Point(3, 3)
        assert outcome.score == eval_move(board, Point(3, 3), Player.WHITE)
        assert outcome.depth == depth

    @pytest.mark.parametrize("depth", [-1, 1, 2, 9])
    def test_opening_shortcut_on_empty_board(self, depth):
        outcome = heuristic_negamax(Board(), Player.BLACK, depth, 0)
        assert outcome is not None
        assert outcome.depth == 6
        assert outcome.point is None

    def test_opening_shortcut_with_one_stone(self):
        board = make_board(black=[(3, 3)], size=5)
        outcome = heuristic_negamax(board, Player.WHITE, 1, 0)
        assert outcome.depth == 6
        assert board.is_empty(outcome.point)

    def test_iterative_stops_after_first_pass_when_out_of_time(self):
        outcome = heuristic_negamax(middlegame(), Player.BLACK, -1, 0)
        assert outcome.depth == 4
        assert outcome.point is not None

    def test_iterative_reaches_max_depth(self):
        # A winning move resolves every pass at the root, so passes are instant
        stats = SearchStats()
        outcome = heuristic_negamax(black_has_four(), Player.BLACK, -1, 60_000, stats=stats)
        assert outcome.depth == 16
        assert outcome.point in (Point(8, 3), Point(8, 8))
        # One root node per pass: depths 4, 6, ..., 16
        assert stats.nodes == 7

    def test_iterative_respects_configured_max_depth(self):
        config = SearchConfig(max_depth=8)
        outcome = heuristic_negamax(black_has_four(), Player.BLACK, -1, 60_000, config=config)
        assert outcome.depth == 8

    def test_more_time_never_searches_shallower(self):
        board = black_has_four()
        depths = [
            heuristic_negamax(board, Player.BLACK, -1, limit).depth
            for limit in (0, 1, 100, 60_000)
        ]
        assert depths == sorted(depths)
        assert all(4 <= d <= 16 for d in depths)

    def test_blocks_five(self):
        outcome = heuristic_negamax(white_threatens_five(), Player.BLACK, 2, 1000)
        assert outcome.point == Point(8, 9)


# ---------------------------------------------------------------------------
# Score decay, breadth and the root blocking preference
# ---------------------------------------------------------------------------

class TestDecay:
    def test_below_threshold_unchanged(self):
        assert _decay(9, DEFAULT_CONFIG) == 9
        assert _decay(0, DEFAULT_CONFIG) == 0
        assert _decay(-500, DEFAULT_CONFIG) == -500
        assert _decay(-100_000, DEFAULT_CONFIG) == -100_000

    def test_scaled_from_threshold_up(self):
        assert _decay(10, DEFAULT_CONFIG) == 9
        assert _decay(12_003, DEFAULT_CONFIG) == 11_402
        assert _decay(100_000, DEFAULT_CONFIG) == 95_000

    def test_uses_configured_factor(self):
        config = SearchConfig(score_decay_factor=0.5, decay_threshold=100)
        assert _decay(99, config) == 99
        assert _decay(100, config) == 50


class TestSearchBreadth:
    # No threats anywhere, so every inner node expands exactly `breadth` moves
    # and, with pruning off, the node count reveals the breadth per ply.

    def _nodes(self, initial_depth, depth, config=DEFAULT_CONFIG):
        board = make_board(black=[(8, 8)], white=[(8, 9)])
        stats = SearchStats()
        negamax_search(board, Player.BLACK, initial_depth, depth, False, -INF, INF,
                       config, stats)
        return stats.nodes

    def test_root_of_depth_two_uses_top_layer_breadth(self):
        assert self._nodes(2, 2) == 1 + 12

    def test_same_ply_deeper_in_tree_uses_normal_breadth(self):
        assert self._nodes(4, 2) == 1 + 6

    def test_depth_three_widens_second_ply(self):
        # Root keeps 6 moves, each reply node keeps 12
        assert self._nodes(3, 3) == 1 + 6 * (1 + 12)

    def test_top_layer_breadth_is_configurable(self):
        assert self._nodes(2, 2, SearchConfig(top_layer_search_breadth=6)) == 1 + 6


class TestRootBlockOverride:
    def test_threat_ranks_first_for_white(self):
        ranked = search_moves_ordered(white_threatens_twice(), Player.WHITE)
        assert ranked[0].point == Point(1, 4)
        assert ranked[0].heuristic_val == 12_003
        assert ranked[1].point == Point(9, 6)

    def test_root_blocks_when_attack_is_marginal(self):
        # Every reply leaves white a four (decayed 11_402); attacking from
        # (4, 4) is only ~9% better than blocking at (1, 4)
        result = negamax_search(white_threatens_twice(), Player.BLACK, 2, 2,
                                enable_ab_pruning=False)
        assert result.move.point == Point(1, 4)
        assert result.score == result.move.actual_score == 4 - 11_402

    def test_below_root_keeps_best_scoring_move(self):
        result = negamax_search(white_threatens_twice(), Player.BLACK, 3, 2,
                                enable_ab_pruning=False)
        assert result.move.point == Point(4, 4)
        assert result.score == 1030 - 11_402

    def test_ratio_bounds_the_override(self):
        config = SearchConfig(block_preference_ratio=0.05)
        result = negamax_search(white_threatens_twice(), Player.BLACK, 2, 2,
                                False, -INF, INF, config)
        assert result.move.point == Point(4, 4)

    def test_board_restored(self):
        board = white_threatens_twice()
        before = board.copy()
        negamax_search(board, Player.BLACK, 2, 2)
        assert board == before
