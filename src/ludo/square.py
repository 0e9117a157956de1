"""
Square identifiers and the cells of the road.

(placed in its own module as multiple other modules need to import it)

Every cell on the board is addressed by an identifier that encodes its zone and index:
* initial-<color>-<0..3> : holding area of a color
* road-<0..51>           : the shared ring
* final-<color>-<0..5>   : private lane of a color, index 5 is home
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from src.core.exceptions import InvalidSquareError
from src.core.shared_types import Color

SEGMENT_LENGTH = 13
ROAD_LENGTH = SEGMENT_LENGTH * len(Color)
INITIAL_ZONE_SIZE = 4
FINAL_ZONE_SIZE = 6
HOME_INDEX = FINAL_ZONE_SIZE - 1

# Offsets within the 13-cell segment owned by a color
SAFE_ZONE_OFFSET = 3
EXIT_OFFSET = 6
ENTRANCE_OFFSET = 8


class Zone(StrEnum):
    INITIAL = "initial"
    ROAD = "road"
    FINAL = "final"


ZONE_SIZES: dict[Zone, int] = {
    Zone.INITIAL: INITIAL_ZONE_SIZE,
    Zone.ROAD: ROAD_LENGTH,
    Zone.FINAL: FINAL_ZONE_SIZE,
}


@dataclass(frozen=True)
class SquareId:
    zone: Zone
    index: int
    color: Optional[Color] = None

    @classmethod
    def initial(cls, color: Color, index: int) -> SquareId:
        return cls(Zone.INITIAL, index, color)

    @classmethod
    def road(cls, index: int) -> SquareId:
        return cls(Zone.ROAD, index)

    @classmethod
    def final(cls, color: Color, index: int) -> SquareId:
        return cls(Zone.FINAL, index, color)

    @classmethod
    def parse(cls, text: str) -> SquareId:
        """'road-12' -> SquareId(ROAD, 12), 'final-red-3' -> SquareId(FINAL, 3, RED)"""
        parts = text.split("-")
        if not parts[-1].isdigit():
            raise InvalidSquareError(f"Cannot interpret {text!r} as a square identifier.")

        try:
            zone = Zone(parts[0])
            if zone == Zone.ROAD and len(parts) == 2:
                square = cls(zone, int(parts[1]))
            elif zone != Zone.ROAD and len(parts) == 3:
                square = cls(zone, int(parts[2]), Color(parts[1]))
            else:
                raise ValueError(text)
        except ValueError as e:
            raise InvalidSquareError(
                f"Cannot interpret {text!r} as a square identifier."
            ) from e

        # reject non-canonical spellings such as 'road-07'
        if not square.is_within_bounds() or str(square) != text:
            raise InvalidSquareError(f"Square {text!r} does not exist on the board.")
        return square

    def __str__(self) -> str:
        if self.color is None:
            return f"{self.zone}-{self.index}"
        return f"{self.zone}-{self.color}-{self.index}"

    def is_within_bounds(self) -> bool:
        return 0 <= self.index < ZONE_SIZES[self.zone]

    @property
    def is_initial(self) -> bool:
        return self.zone == Zone.INITIAL

    @property
    def is_road(self) -> bool:
        return self.zone == Zone.ROAD

    @property
    def is_final(self) -> bool:
        return self.zone == Zone.FINAL

    @property
    def is_home(self) -> bool:
        return self.is_final and self.index == HOME_INDEX


@dataclass(frozen=True)
class RoadSquare:
    """A cell of the shared ring and its (static) properties."""

    id: SquareId
    color: Color
    safe_zone: bool = False
    exit: bool = False
    entrance: bool = False
