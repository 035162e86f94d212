"""Play tab: Human vs engine with interactive SVG board."""

from __future__ import annotations

import random as _random
import time as _time
from dataclasses import dataclass, field
from typing import Callable, Optional

import gradio as gr

from renjuai import config
from renjuai.agent.base import Agent
from renjuai.agent.negamax_agent import ExhaustiveAgent, NegamaxAgent
from renjuai.game.board import GomokuGameState, format_point, parse_coordinate
from renjuai.game.types import Player
from renjuai.ui.board_component import render_board_svg

# Agents are built per session: NegamaxAgent remembers its last search
AGENT_FACTORIES: dict[str, Callable[[], Agent]] = {
    "Negamax (iterative, 1s)": lambda: NegamaxAgent(depth=-1, time_limit=1000),
    "Negamax (iterative, 3s)": lambda: NegamaxAgent(depth=-1, time_limit=3000),
    "Negamax (d=4)": lambda: NegamaxAgent(depth=4),
    "Negamax (d=6)": lambda: NegamaxAgent(depth=6),
    "Negamax (d=6, no pruning)": lambda: NegamaxAgent(depth=6, enable_ab_pruning=False),
    "Exhaustive (d=2)": lambda: ExhaustiveAgent(depth=2),
}
DEFAULT_AGENT = "Negamax (iterative, 1s)"


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: GomokuGameState = field(default_factory=GomokuGameState)
    agent: Agent = field(default_factory=AGENT_FACTORIES[DEFAULT_AGENT])
    human_player: Player = field(default=Player.BLACK)
    _turn_start: float = field(default_factory=_time.time)

    def reset(self, human_player: Optional[Player] = None) -> None:
        self.game = GomokuGameState()
        self._turn_start = _time.time()
        if human_player is not None:
            self.human_player = human_player

    def mark_turn_start(self) -> None:
        """Record the moment the current player's clock starts."""
        self._turn_start = _time.time()

    def elapsed_since_turn_start(self) -> float:
        return _time.time() - self._turn_start

    @property
    def game_over_banner(self) -> str:
        """Short text for the SVG overlay banner. Empty if game is not over."""
        g = self.game
        if not g.is_over:
            return ""
        if g.winner is not None:
            if g.winner == self.human_player:
                return "You win!"
            return "AI wins!"
        return "Draw!"

    @property
    def status_text(self) -> str:
        g = self.game
        if g.is_over:
            if g.winner is not None:
                who = "You win!" if g.winner == self.human_player else "AI wins!"
                return f"Game over: {who} ({g.winner} by 5-in-a-row)"
            return "Game over: Draw!"
        summary = self.agent.last_search_summary()
        suffix = f"\nLast search: {summary}" if summary else ""
        if g.current_player == self.human_player:
            return f"Your turn ({g.current_player}){suffix}"
        return f"AI is thinking... ({g.current_player}){suffix}"

    @property
    def move_history_table(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for i, move in enumerate(self.game.moves):
            t = f"{move.elapsed:.2f}" if move.elapsed is not None else "-"
            rows.append([str(i + 1), str(move.player), format_point(move.point), t])
        return rows


def _make_board_html(session: GameSession) -> str:
    clickable = (
        not session.game.is_over
        and session.game.current_player == session.human_player
    )
    return render_board_svg(
        session.game,
        clickable=clickable,
        game_over_message=session.game_over_banner,
    )


def _outputs(session: GameSession, status: Optional[str] = None):
    return (
        _make_board_html(session),
        status if status is not None else session.status_text,
        session.move_history_table,
        session,
    )


def _ai_move(session: GameSession) -> None:
    t0 = _time.time()
    ai_move = session.agent.select_move(session.game)
    session.game.apply_move(ai_move, elapsed=_time.time() - t0)
    session.mark_turn_start()  # human's clock starts now


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the AI respond."""
    if session.game.is_over:
        return _outputs(session) + ("",)

    if session.game.current_player != session.human_player:
        return _outputs(session, "Wait, it's the AI's turn.") + ("",)

    point = parse_coordinate(coord_text, session.game.board.size)
    if point is None:
        return _outputs(session, f"Invalid coordinate: '{coord_text}'. Use format like E5.") + ("",)

    if not session.game.board.is_empty(point):
        return _outputs(session, f"{format_point(point)} is already occupied.") + ("",)

    session.game.apply_move(point, elapsed=session.elapsed_since_turn_start())

    if not session.game.is_over:
        _ai_move(session)

    return _outputs(session) + ("",)


def _new_game_with_color(color_choice: str, agent_choice: str, session: GameSession):
    """Start a new game. color_choice is 'Black', 'White', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Player.BLACK, Player.WHITE])
    elif color_choice == "White":
        human = Player.WHITE
    else:
        human = Player.BLACK

    factory = AGENT_FACTORIES.get(agent_choice, AGENT_FACTORIES[DEFAULT_AGENT])
    session.agent = factory()
    session.reset(human_player=human)

    # Black moves first
    if human is Player.WHITE:
        _ai_move(session)

    return _outputs(session) + (f"You are {human}.",)


def _undo_move(session: GameSession):
    """Undo the last move pair (AI + human)."""
    if not session.game.moves:
        return _outputs(session, "Nothing to undo.")

    last = session.game.moves[-1]
    if last.player != session.human_player:
        session.game.undo_move()  # undo AI
    if session.game.moves and session.game.moves[-1].player == session.human_player:
        session.game.undo_move()  # undo human
    session.mark_turn_start()
    return _outputs(session)


def _suggest_move(session: GameSession):
    """Ask a fresh engine for the human's best move and ring it on the board."""
    g = session.game
    if g.is_over or g.current_player != session.human_player:
        return _make_board_html(session), session.status_text
    advisor = NegamaxAgent(depth=-1, time_limit=config.DEFAULT_TIME_LIMIT_MS)
    hint = advisor.select_move(g)
    html = render_board_svg(g, clickable=True, hint=hint)
    return html, f"Suggested: {format_point(hint)} ({advisor.last_search_summary() or 'opening'})"


def _resign(session: GameSession):
    if not session.game.is_over:
        session.game.resign(session.human_player)
    return _outputs(session)


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(GomokuGameState()),
                label="Board",
            )
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (Black)",
                label="Status",
                interactive=False,
                lines=2,
            )
            color_info = gr.Textbox(
                value="You are Black.",
                label="Color",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            color_choice = gr.Radio(
                choices=["Random", "Black", "White"],
                value="Random",
                label="Play as",
            )
            agent_choice = gr.Dropdown(
                choices=list(AGENT_FACTORIES.keys()),
                value=DEFAULT_AGENT,
                label="Opponent",
            )
            new_game_btn = gr.Button("New Game", variant="primary")

            with gr.Row():
                undo_btn = gr.Button("Undo")
                resign_btn = gr.Button("Resign", variant="stop")
            suggest_btn = gr.Button("Suggest Move")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label=f"Coordinate (e.g. E5, board {config.BOARD_SIZE}x{config.BOARD_SIZE})",
                placeholder="E5",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button("Submit Move", elem_id="coord-submit")

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move", "Time (s)"],
                datatype=["number", "str", "str", "str"],
                interactive=False,
                column_count=4,
            )

    board_outputs = [board_html, status_text, move_table, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )
    new_game_btn.click(
        fn=_new_game_with_color,
        inputs=[color_choice, agent_choice, session_state],
        outputs=board_outputs + [color_info],
    )
    undo_btn.click(fn=_undo_move, inputs=[session_state], outputs=board_outputs)
    resign_btn.click(fn=_resign, inputs=[session_state], outputs=board_outputs)
    suggest_btn.click(
        fn=_suggest_move,
        inputs=[session_state],
        outputs=[board_html, status_text],
    )
