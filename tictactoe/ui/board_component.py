"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from tictactoe.game.board import BOARD_SIZE, CELL_COUNT, TicTacToeGameState, format_cell
from tictactoe.game.types import Player

# Layout constants
CELL_SIZE = 120
MARGIN = 20
BOARD_PX = MARGIN * 2 + CELL_SIZE * BOARD_SIZE
MARK_INSET = 28  # Padding between cell edge and the X/O glyph

# Colors
BG_COLOR = "#F8FAFC"
LINE_COLOR = "#334155"
X_COLOR = "#2563EB"
O_COLOR = "#DC2626"
WIN_LINE_COLOR = "#16A34A"
WIN_BANNER = "#4ADE80"
LOSS_BANNER = "#F87171"
DRAW_BANNER = "#FFFFFF"


def _cell_origin(index: int) -> tuple[int, int]:
    """Top-left pixel of a cell."""
    row, col = divmod(index, BOARD_SIZE)
    return MARGIN + col * CELL_SIZE, MARGIN + row * CELL_SIZE


def _cell_center(index: int) -> tuple[int, int]:
    x, y = _cell_origin(index)
    return x + CELL_SIZE // 2, y + CELL_SIZE // 2


def _render_mark(index: int, player: Player) -> str:
    x, y = _cell_origin(index)
    if player is Player.X:
        x1, y1 = x + MARK_INSET, y + MARK_INSET
        x2, y2 = x + CELL_SIZE - MARK_INSET, y + CELL_SIZE - MARK_INSET
        return (
            f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
            f'stroke="{X_COLOR}" stroke-width="10" stroke-linecap="round"/>'
            f'<line x1="{x2}" y1="{y1}" x2="{x1}" y2="{y2}" '
            f'stroke="{X_COLOR}" stroke-width="10" stroke-linecap="round"/>'
        )
    cx, cy = _cell_center(index)
    r = CELL_SIZE // 2 - MARK_INSET
    return (
        f'<circle cx="{cx}" cy="{cy}" r="{r}" fill="none" '
        f'stroke="{O_COLOR}" stroke-width="10"/>'
    )


def _banner_color(message: str) -> str:
    if message in ("You win!", "X wins!", "O wins!"):
        return WIN_BANNER
    if message == "AI wins!":
        return LOSS_BANNER
    return DRAW_BANNER


def render_board_svg(
    game_state: TicTacToeGameState,
    clickable: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    parts: list[str] = []

    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{BOARD_PX}" height="{BOARD_PX}" '
        f'viewBox="0 0 {BOARD_PX} {BOARD_PX}" '
        f'id="tictactoe-board">'
    )
    parts.append(
        f'<rect width="{BOARD_PX}" height="{BOARD_PX}" fill="{BG_COLOR}" rx="8"/>'
    )

    # Inner grid lines only
    for i in range(1, BOARD_SIZE):
        offset = MARGIN + i * CELL_SIZE
        parts.append(
            f'<line x1="{offset}" y1="{MARGIN}" x2="{offset}" y2="{BOARD_PX - MARGIN}" '
            f'stroke="{LINE_COLOR}" stroke-width="4" stroke-linecap="round"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{offset}" x2="{BOARD_PX - MARGIN}" y2="{offset}" '
            f'stroke="{LINE_COLOR}" stroke-width="4" stroke-linecap="round"/>'
        )

    for index in range(CELL_COUNT):
        player = game_state.get(index)
        if player is not None:
            parts.append(_render_mark(index, player))

    line = game_state.winning_line
    if line is not None:
        x1, y1 = _cell_center(line[0])
        x2, y2 = _cell_center(line[2])
        parts.append(
            f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
            f'stroke="{WIN_LINE_COLOR}" stroke-width="8" opacity="0.8" '
            f'stroke-linecap="round" class="win-line"/>'
        )

    # Clickable cell targets (invisible rects)
    if clickable and not game_state.is_over:
        for index in game_state.legal_moves():
            x, y = _cell_origin(index)
            coord = format_cell(index)
            parts.append(
                f'<rect x="{x}" y="{y}" width="{CELL_SIZE}" height="{CELL_SIZE}" '
                f'fill="transparent" class="board-click" '
                f'data-coord="{coord}" style="cursor:pointer">'
                f'<title>{coord}</title></rect>'
            )

    if game_over_message:
        mid = BOARD_PX // 2
        parts.append(
            f'<rect x="0" y="{mid - 36}" width="{BOARD_PX}" height="72" '
            f'fill="rgba(15, 23, 42, 0.75)"/>'
        )
        parts.append(
            f'<text x="{mid}" y="{mid + 12}" text-anchor="middle" '
            f'font-size="36" font-weight="bold" font-family="sans-serif" '
            f'fill="{_banner_color(game_over_message)}">{game_over_message}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)


# JavaScript that handles clicks on the SVG and writes the coordinate to
# a hidden Gradio Textbox, then triggers the submit button.
BOARD_CLICK_JS = """
() => {
    if (window._tictactoeClickBound) return;
    window._tictactoeClickBound = true;

    document.addEventListener('click', function(e) {
        const cell = e.target.closest('.board-click');
        if (!cell) return;
        const coord = cell.getAttribute('data-coord');
        if (!coord) return;

        const input = document.querySelector('#cell-input textarea, #cell-input input');
        if (!input) return;
        // Use the native setter so Gradio notices the change
        const nativeSetter = Object.getOwnPropertyDescriptor(
            Object.getPrototypeOf(input), 'value'
        )?.set;
        if (nativeSetter) {
            nativeSetter.call(input, coord);
        } else {
            input.value = coord;
        }
        input.dispatchEvent(new Event('input', { bubbles: true }));
        const btn = document.querySelector('#cell-submit');
        if (btn) btn.click();
    });
}
"""
