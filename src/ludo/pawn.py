"""A pawn and the last-move record that gets broadcast so clients can animate it."""

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import Color, Event
from src.ludo.square import SquareId


@dataclass(frozen=True)
class PawnRef:
    """Identity of a pawn: its color plus its index (0-3) within that color."""

    color: Color
    index: int


@dataclass
class Pawn:
    color: Color
    index: int
    square: SquareId
    end_reached: bool = False
    # the move kind this pawn is eligible to perform with the current dice result
    action: Optional[Event] = None

    @property
    def ref(self) -> PawnRef:
        return PawnRef(self.color, self.index)

    def send_home(self) -> None:
        """Back to its own cell in the initial zone (after being captured)."""
        self.square = SquareId.initial(self.color, self.index)
        self.end_reached = False
        self.action = None


@dataclass
class MovePawn:
    """
    Descriptor of the last move made
    ----

    * color/index: the pawn that moved
    * starting_square: where it came from
    * squares: every square it passed, the last one being where it now stands
    * smash: the pawn it captured, if any
    """

    color: Color
    index: int
    starting_square: SquareId
    squares: list[SquareId]
    smash: Optional[PawnRef] = None
