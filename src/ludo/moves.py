"""
Geometry of the three move kinds and the capturing rule

Which move a pawn may make only depends on the zone it stands in:
* initial zone -> entry move onto its color's entrance (only with a 1 or a 6)
* road         -> road move, turning into the private lane once it crosses its own exit
* final lane   -> home-lane move, as long as it does not overshoot the home square

Legality of the request (whose turn, which pawn) is checked by the validator
"""

from typing import Optional, Protocol

from src.core.shared_types import Color, Event
from src.ludo.dice import ENTRY_ROLLS
from src.ludo.pawn import Pawn
from src.ludo.square import HOME_INDEX, ROAD_LENGTH, RoadSquare, SquareId

# Lane counter while the pawn is still travelling the ring
LANE_DISABLED = -2


class Board(Protocol):
    """Just the parts the movement rules need"""

    road: list[RoadSquare]

    def entrance(self, color: Color) -> RoadSquare: ...
    def is_exit_of(self, square: SquareId, color: Color) -> bool: ...
    def road_square(self, square: SquareId) -> RoadSquare: ...
    def pawns_on(self, square: SquareId) -> list[Pawn]: ...


def eligible_action(pawn: Pawn, dice_result: int) -> Optional[Event]:
    """The move kind the pawn could perform with the given dice result (None if it cannot move)."""
    if pawn.square.is_initial:
        return Event.MOVE_INITIAL if dice_result in ENTRY_ROLLS else None

    if pawn.square.is_final:
        if pawn.square.is_home:
            return None
        return Event.MOVE_FINAL if dice_result <= squares_to_home(pawn.square) else None

    return Event.MOVE_ROAD


def squares_to_home(square: SquareId) -> int:
    return HOME_INDEX - square.index


# --- MOVEMENT RULES ---
def entry_path(board: Board, pawn: Pawn) -> list[SquareId]:
    """Straight from the initial zone onto the entrance of the pawn's color."""
    return [board.entrance(pawn.color).id]


def road_path(board: Board, pawn: Pawn, dice_result: int) -> list[SquareId]:
    """
    Walk the ring
    ----

    Every step moves one square forward, wrapping around after the last road square.
    The lane counter is disabled until the path crosses the exit of the pawn's own color:
    the exit square itself is still on the ring (counter -1), every step after it lands
    in the private lane at the index given by the counter (0, 1, ...).

    A pawn that already stands on its exit starts with the counter enabled, so its first step
    is onto lane index 0.
    """
    lane_index = -1 if board.is_exit_of(pawn.square, pawn.color) else LANE_DISABLED
    path: list[SquareId] = []
    for step in range(1, dice_result + 1):
        road = board.road[(pawn.square.index + step) % ROAD_LENGTH]
        if lane_index > LANE_DISABLED or (road.color == pawn.color and road.exit):
            lane_index += 1

        path.append(
            SquareId.final(pawn.color, lane_index) if lane_index >= 0 else road.id
        )
    return path


def final_path(pawn: Pawn, dice_result: int) -> list[SquareId]:
    """Advance inside the private lane. Overshooting home was already ruled out."""
    start = pawn.square.index
    return [
        SquareId.final(pawn.color, index)
        for index in range(start + 1, start + dice_result + 1)
    ]


# --- CAPTURING ---
def find_capture(board: Board, pawn: Pawn) -> Optional[Pawn]:
    """
    The pawn that gets captured by the pawn that just arrived on its square, if any.

    A capture only happens on a road square that is not a safe zone, where exactly one other pawn
    stands (so two in total, counting the one that just arrived) and that pawn has another color.
    Two pawns of one color on a square form a block that cannot be captured.
    """
    if not pawn.square.is_road:
        return None
    if board.road_square(pawn.square).safe_zone:
        return None

    pawns_on_square = board.pawns_on(pawn.square)
    if len(pawns_on_square) != 2:
        return None

    other = next(p for p in pawns_on_square if p is not pawn)
    return other if other.color != pawn.color else None
