"""renju-ai: Gradio web app entry point."""

import logging

import gradio as gr

from renjuai import config
from renjuai.ui.arena_tab import build_arena_tab
from renjuai.ui.board_component import BOARD_CLICK_JS
from renjuai.ui.play_tab import build_play_tab

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

with gr.Blocks(title="renju-ai") as demo:
    gr.Markdown("# renju-ai")
    gr.Markdown(
        f"Heuristic negamax engine: {config.BOARD_SIZE}x{config.BOARD_SIZE} board, 5 in a row to win."
    )

    with gr.Tab("Play"):
        build_play_tab()

    with gr.Tab("Arena"):
        build_arena_tab()

    # Bind board click handler JS on page load
    demo.load(fn=None, js=BOARD_CLICK_JS)

if __name__ == "__main__":
    demo.launch(theme=gr.themes.Soft())
