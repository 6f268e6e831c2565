"""
State-change notifications emitted by the board.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable


class EventKind(Enum):
    """What happened to a cell (or to the game)."""

    REVEALED = auto()
    MINE_EXPLODED = auto()
    MINE_REVEALED = auto()
    FLAGGED = auto()
    UNFLAGGED = auto()
    PRESSED = auto()
    UNPRESSED = auto()
    GAME_WON = auto()
    GAME_LOST = auto()


@dataclass(frozen=True)
class BoardEvent:
    """A single transition, at the coordinates it applies to."""

    kind: EventKind
    row: int
    col: int


BoardListener = Callable[[BoardEvent], None]
