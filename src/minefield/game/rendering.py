"""
ASCII rendering of a board, for terminal demos and debugging.
"""
from typing import Dict

from .board import Board
from .cell import OBS_EXPLODED, OBS_FLAGGED, OBS_HIDDEN, OBS_MINE, OBS_PRESSED

SYMBOLS: Dict[int, str] = {
    OBS_HIDDEN: ".",
    OBS_FLAGGED: "F",
    OBS_PRESSED: "_",
    OBS_MINE: "*",
    OBS_EXPLODED: "X",
    0: " ",
}


def render_text(board: Board) -> str:
    """Render board as ASCII string, one line per row."""
    lines = []
    obs = board.get_observation()
    for row in range(board.config.height):
        row_str = ""
        for col in range(board.config.width):
            val = int(obs[row, col])
            row_str += SYMBOLS.get(val, str(val)) + " "
        lines.append(row_str)
    return "\n".join(lines)
