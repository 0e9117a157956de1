"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    """The order of the members is the order of the color segments on the road."""

    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"


class Event(StrEnum):
    """Inbound event names. The three move kinds double as the pending action stored on a pawn."""

    CREATE_GAME = "game:create"
    JOIN_GAME = "game:join"
    CHOOSE_COLOR = "game:color"
    ROLL_DICE = "game:roll"
    ROLL_RESULT = "game:roll-result"
    MOVED_PAWN = "game:moved"
    MOVE_INITIAL = "game:move-initial"
    MOVE_ROAD = "game:move-road"
    MOVE_FINAL = "game:move-final"


class PublishEvent(StrEnum):
    GAME_UPDATED = "game:updated"


# --- NOTE: Display-only values for the stacking markers. They never influence the rules.
class AnimationType(StrEnum):
    ADDED = "added"
    REMOVED = "removed"
    SETTLED = "settled"


class SquarePosition(StrEnum):
    """Quadrants of a square, in the order they get handed out."""

    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
