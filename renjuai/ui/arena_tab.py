"""Arena tab: engine vs engine with live board updates."""

from __future__ import annotations

import time
from typing import Generator

import gradio as gr

from renjuai.game.board import GomokuGameState, format_point
from renjuai.game.types import Player
from renjuai.ui.board_component import render_board_svg
from renjuai.ui.play_tab import AGENT_FACTORIES, DEFAULT_AGENT

MOVE_DELAY = 0.4  # seconds between moves

# Hard stop for a single arena game, in plies
MAX_PLIES = 400


def _result_message(game: GomokuGameState) -> str:
    if not game.is_over:
        return ""
    if game.winner is Player.BLACK:
        return "Black wins!"
    elif game.winner is Player.WHITE:
        return "White wins!"
    return "Draw!"


def _move_table(game: GomokuGameState) -> list[list[str]]:
    return [
        [str(i + 1), str(move.player), format_point(move.point)]
        for i, move in enumerate(game.moves)
    ]


def run_arena(black_name: str, white_name: str, delay: float = MOVE_DELAY) -> Generator:
    """Yield (board_html, status, move_table) after each move of one game."""
    agents = {
        Player.BLACK: AGENT_FACTORIES.get(black_name, AGENT_FACTORIES[DEFAULT_AGENT])(),
        Player.WHITE: AGENT_FACTORIES.get(white_name, AGENT_FACTORIES[DEFAULT_AGENT])(),
    }
    names = {Player.BLACK: black_name, Player.WHITE: white_name}
    game = GomokuGameState()

    yield (
        render_board_svg(game, clickable=False),
        f"Game started: {black_name} (Black) vs {white_name} (White)",
        _move_table(game),
    )

    while not game.is_over and len(game.moves) < MAX_PLIES:
        mover = game.current_player
        agent = agents[mover]
        move = agent.select_move(game)
        game.apply_move(move)

        result = _result_message(game)
        if result:
            status = f"Game over: {result} ({len(game.moves)} moves)"
        else:
            summary = agent.last_search_summary()
            status = f"Move {len(game.moves)}: {names[mover]} played {format_point(move)}"
            if summary:
                status += f" ({summary})"

        yield (
            render_board_svg(game, clickable=False, game_over_message=result),
            status,
            _move_table(game),
        )

        if not game.is_over and delay > 0:
            time.sleep(delay)


def build_arena_tab() -> None:
    """Construct the Arena tab UI inside a gr.Blocks context."""
    names = list(AGENT_FACTORIES.keys())

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(GomokuGameState(), clickable=False),
                label="Board",
            )
        with gr.Column(scale=1):
            black_choice = gr.Dropdown(choices=names, value=names[0], label="Black")
            white_choice = gr.Dropdown(choices=names, value=names[-1], label="White")
            delay = gr.Slider(0.0, 2.0, value=MOVE_DELAY, step=0.1, label="Delay (s)")
            start_btn = gr.Button("Start Match", variant="primary")
            status = gr.Textbox(label="Status", interactive=False, lines=2)
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move"],
                datatype=["number", "str", "str"],
                interactive=False,
                column_count=3,
            )

    start_btn.click(
        fn=run_arena,
        inputs=[black_choice, white_choice, delay],
        outputs=[board_html, status, move_table],
    )
