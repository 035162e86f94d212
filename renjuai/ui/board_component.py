"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from renjuai.game.board import COL_LABELS, GomokuGameState
from renjuai.game.types import Player, Point

# Layout constants
CELL_SIZE = 36
MARGIN = 36
STONE_RADIUS = 15
CLICK_RADIUS = 17  # Invisible click target radius

# Colors
BG_COLOR = "#DCB35C"
LINE_COLOR = "#4A3728"
BLACK_STONE = "#1A1A1A"
WHITE_STONE = "#F5F5F5"
WHITE_STROKE = "#888"
HINT_COLOR = "#3B82F6"

# Banner colors keyed by the leading word of the message
BANNER_COLORS = {
    "You": "#4ADE80",
    "AI": "#F87171",
}
BANNER_DEFAULT = "#FFFFFF"


def board_px(size: int) -> int:
    return MARGIN * 2 + CELL_SIZE * (size - 1)


def _coord(row: int, col: int, size: int) -> tuple[int, int]:
    """Convert 1-indexed board coordinates to SVG pixel coordinates."""
    x = MARGIN + (col - 1) * CELL_SIZE
    y = MARGIN + (size - row) * CELL_SIZE  # row 1 at bottom
    return x, y


def _label(x: int, y: int, text: str) -> str:
    return (
        f'<text x="{x}" y="{y}" text-anchor="middle" '
        f'font-size="12" font-family="monospace" fill="{LINE_COLOR}">{text}</text>'
    )


def render_board_svg(
    game_state: GomokuGameState,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
    hint: Optional[Point] = None,
) -> str:
    """Render the board as an SVG string.

    `hint` draws a ring on a suggested empty point (e.g. the engine's choice).
    """
    size = game_state.board.size
    px = board_px(size)
    parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{px}" height="{px}" '
        f'viewBox="0 0 {px} {px}" id="renju-board">',
        f'<rect width="{px}" height="{px}" fill="{BG_COLOR}" rx="4"/>',
    ]

    # Grid lines
    lo, hi = MARGIN, MARGIN + (size - 1) * CELL_SIZE
    for i in range(size):
        p = MARGIN + i * CELL_SIZE
        parts.append(f'<line x1="{p}" y1="{lo}" x2="{p}" y2="{hi}" stroke="{LINE_COLOR}" stroke-width="1"/>')
        parts.append(f'<line x1="{lo}" y1="{p}" x2="{hi}" y2="{p}" stroke="{LINE_COLOR}" stroke-width="1"/>')

    center = game_state.board.center
    cx, cy = _coord(center.row, center.col, size)
    parts.append(f'<circle cx="{cx}" cy="{cy}" r="3" fill="{LINE_COLOR}"/>')

    for i in range(1, size + 1):
        x, _ = _coord(1, i, size)
        parts.append(_label(x, MARGIN - 14, COL_LABELS[i - 1]))
        parts.append(_label(x, px - 8, COL_LABELS[i - 1]))
        _, y = _coord(i, 1, size)
        parts.append(_label(MARGIN - 20, y + 4, str(i)))
        parts.append(_label(px - MARGIN + 20, y + 4, str(i)))

    # Stones
    last_point = game_state.moves[-1].point if game_state.moves else None
    for pt, player in game_state.board.stones():
        x, y = _coord(pt.row, pt.col, size)
        fill = BLACK_STONE if player is Player.BLACK else WHITE_STONE
        stroke = "none" if player is Player.BLACK else WHITE_STROKE
        parts.append(
            f'<circle cx="{x}" cy="{y}" r="{STONE_RADIUS}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="1.5"/>'
        )
        if highlight_last and pt == last_point:
            marker_color = WHITE_STONE if player is Player.BLACK else BLACK_STONE
            parts.append(f'<circle cx="{x}" cy="{y}" r="5" fill="{marker_color}" opacity="0.7"/>')

    if hint is not None and game_state.board.is_empty(hint):
        x, y = _coord(hint.row, hint.col, size)
        parts.append(
            f'<circle cx="{x}" cy="{y}" r="{STONE_RADIUS - 3}" fill="none" '
            f'stroke="{HINT_COLOR}" stroke-width="3" class="board-hint"/>'
        )

    # Clickable intersection targets (invisible circles)
    if clickable and not game_state.is_over:
        for r in range(1, size + 1):
            for c in range(1, size + 1):
                if not game_state.board.is_empty(Point(r, c)):
                    continue
                x, y = _coord(r, c, size)
                coord_str = f"{COL_LABELS[c - 1]}{r}"
                parts.append(
                    f'<circle cx="{x}" cy="{y}" r="{CLICK_RADIUS}" '
                    f'fill="transparent" class="board-click" '
                    f'data-coord="{coord_str}" style="cursor:pointer">'
                    f'<title>{coord_str}</title></circle>'
                )

    if game_over_message:
        color = BANNER_COLORS.get(game_over_message.split()[0], BANNER_DEFAULT)
        parts.append(
            f'<rect x="0" y="{px // 2 - 30}" width="{px}" height="60" '
            f'fill="rgba(0, 0, 0, 0.6)"/>'
        )
        parts.append(
            f'<text x="{px // 2}" y="{px // 2 + 10}" text-anchor="middle" '
            f'font-size="28" font-weight="bold" fill="{color}">{game_over_message}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)


# JavaScript that handles clicks on the SVG and writes the coordinate to
# a hidden Gradio Textbox, then presses the submit button.
BOARD_CLICK_JS = """
() => {
    if (window._renjuClickBound) return;
    window._renjuClickBound = true;

    document.addEventListener('click', function(e) {
        const circle = e.target.closest('.board-click');
        if (!circle) return;
        const coord = circle.getAttribute('data-coord');
        if (!coord) return;

        const container = document.querySelector('#coord-input textarea, #coord-input input');
        if (!container) return;
        const proto = container.tagName === 'TEXTAREA'
            ? window.HTMLTextAreaElement.prototype
            : window.HTMLInputElement.prototype;
        const setter = Object.getOwnPropertyDescriptor(proto, 'value')?.set;
        if (setter) {
            setter.call(container, coord);
        } else {
            container.value = coord;
        }
        container.dispatchEvent(new Event('input', { bubbles: true }));
        const btn = document.querySelector('#coord-submit');
        if (btn) btn.click();
    });
}
"""
