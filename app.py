"""Tic-Tac-Toe — Gradio web app entry point."""

import logging

import gradio as gr

from tictactoe.config import AppConfig
from tictactoe.ui.board_component import BOARD_CLICK_JS
from tictactoe.ui.play_tab import build_play_tab

config = AppConfig.from_env()
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="[%(levelname)s] %(name)s: %(message)s",
)

with gr.Blocks(title="Tic-Tac-Toe") as demo:
    gr.Markdown("# Tic-Tac-Toe")
    gr.Markdown("3x3, three in a row to win. Hard mode plays perfectly.")

    with gr.Tab("Play"):
        build_play_tab(config)

    # Bind board click handler JS on page load
    demo.load(fn=None, js=BOARD_CLICK_JS)

if __name__ == "__main__":
    demo.launch(
        server_name=config.server_name,
        server_port=config.server_port,
        theme=gr.themes.Soft(),
    )
