"""The Game board: topology of the squares, where every pawn stands, and the stacking markers"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import GameStateError
from src.core.models import (
    BoardModel,
    KaryogamyMarkerModel,
    MitosisMarkerModel,
    MovePawnModel,
    PawnModel,
    RoadSquareModel,
    SmashModel,
    ZoneSquareModel,
)
from src.core.shared_types import AnimationType, Color, SquarePosition
from src.ludo.pawn import MovePawn, Pawn, PawnRef
from src.ludo.square import (
    ENTRANCE_OFFSET,
    EXIT_OFFSET,
    FINAL_ZONE_SIZE,
    INITIAL_ZONE_SIZE,
    ROAD_LENGTH,
    SAFE_ZONE_OFFSET,
    SEGMENT_LENGTH,
    RoadSquare,
    SquareId,
)

PAWNS_PER_COLOR = 4


@dataclass
class MitosisMarker:
    """Pawn sharing a square with pawns of another color. Gets drawn in its color's quadrant."""

    color: Color
    index: int
    position: SquarePosition
    type: AnimationType = AnimationType.ADDED


@dataclass
class KaryogamyMarker:
    """Pawn stacked with pawns of its own color. Only the 'main' one gets drawn in full."""

    color: Color
    index: int
    type: AnimationType = AnimationType.ADDED
    is_main: bool = False


@dataclass
class Board:
    road: list[RoadSquare]
    initial_zone: dict[Color, list[SquareId]]
    final_zone: dict[Color, list[SquareId]]
    pawns: dict[Color, list[Pawn]]
    move_pawn: Optional[MovePawn] = None
    mitosis: dict[SquareId, list[MitosisMarker]] = field(default_factory=dict)
    karyogamy: dict[SquareId, list[KaryogamyMarker]] = field(default_factory=dict)

    @classmethod
    def create(cls) -> Self:
        """Fresh board: every pawn waiting in its color's initial zone."""
        return cls(
            road=generate_road(),
            initial_zone=generate_initial_zone(),
            final_zone=generate_final_zone(),
            pawns=generate_pawns(),
        )

    # --- LOOKUPS ---
    def road_square(self, square: SquareId) -> RoadSquare:
        return self.road[square.index]

    def entrance(self, color: Color) -> RoadSquare:
        return next(road for road in self.road if road.color == color and road.entrance)

    def exit(self, color: Color) -> RoadSquare:
        return next(road for road in self.road if road.color == color and road.exit)

    def is_exit_of(self, square: SquareId, color: Color) -> bool:
        if not square.is_road:
            return False
        road = self.road_square(square)
        return road.exit and road.color == color

    def pawn(self, color: Color, index: int) -> Optional[Pawn]:
        return next((p for p in self.pawns[color] if p.index == index), None)

    def pawns_on(self, square: SquareId) -> list[Pawn]:
        """All pawns standing on the square, ordered by color"""
        return [
            pawn for color in Color for pawn in self.pawns[color] if pawn.square == square
        ]

    # --- CONVERSION FROM/TO THE PERSISTED SCHEMA ---
    @classmethod
    def from_model(cls, model: BoardModel) -> Self:
        """Rebuild the board. Raises GameStateError if the record is not structurally sound."""
        _assert_all_colors(model.initial_zone, "initialZone")
        _assert_all_colors(model.final_zone, "finalZone")
        _assert_all_colors(model.pawns, "pawns")

        road = [
            RoadSquare(
                id=SquareId.parse(square.id),
                color=square.color,
                safe_zone=square.safe_zone,
                exit=square.exit,
                entrance=square.entrance,
            )
            for square in model.road
        ]
        if [square.id for square in road] != [SquareId.road(i) for i in range(ROAD_LENGTH)]:
            raise GameStateError(f"The road must consist of {ROAD_LENGTH} ordered squares.")

        initial_zone = {
            color: [SquareId.parse(square.id) for square in squares]
            for color, squares in model.initial_zone.items()
        }
        final_zone = {
            color: [SquareId.parse(square.id) for square in squares]
            for color, squares in model.final_zone.items()
        }
        pawns = {
            color: [_pawn_from_model(color, pawn) for pawn in color_pawns]
            for color, color_pawns in model.pawns.items()
        }
        for color, color_pawns in pawns.items():
            if [pawn.index for pawn in color_pawns] != list(range(PAWNS_PER_COLOR)):
                raise GameStateError(
                    f"Expected pawns with index 0-{PAWNS_PER_COLOR - 1} for {color}."
                )

        move_pawn = (
            _move_pawn_from_model(model.move_pawn) if model.move_pawn else None
        )
        mitosis = {
            SquareId.parse(square_id): [
                MitosisMarker(m.color, m.index, m.position, m.type) for m in markers
            ]
            for square_id, markers in model.mitosis.items()
        }
        karyogamy = {
            SquareId.parse(square_id): [
                KaryogamyMarker(k.color, k.id, k.type, k.is_main) for k in markers
            ]
            for square_id, markers in model.karyogamy.items()
        }
        return cls(
            road=road,
            initial_zone={color: initial_zone[color] for color in Color},
            final_zone={color: final_zone[color] for color in Color},
            pawns={color: pawns[color] for color in Color},
            move_pawn=move_pawn,
            mitosis=mitosis,
            karyogamy=karyogamy,
        )

    def to_model(self) -> BoardModel:
        return BoardModel(
            road=[
                RoadSquareModel(
                    id=str(square.id),
                    color=square.color,
                    safe_zone=square.safe_zone,
                    exit=square.exit,
                    entrance=square.entrance,
                )
                for square in self.road
            ],
            initial_zone={
                color: [ZoneSquareModel(id=str(square)) for square in squares]
                for color, squares in self.initial_zone.items()
            },
            final_zone={
                color: [ZoneSquareModel(id=str(square)) for square in squares]
                for color, squares in self.final_zone.items()
            },
            pawns={
                color: [_pawn_to_model(pawn) for pawn in color_pawns]
                for color, color_pawns in self.pawns.items()
            },
            move_pawn=_move_pawn_to_model(self.move_pawn) if self.move_pawn else None,
            mitosis={
                str(square): [
                    MitosisMarkerModel(
                        color=m.color, index=m.index, position=m.position, type=m.type
                    )
                    for m in markers
                ]
                for square, markers in self.mitosis.items()
            },
            karyogamy={
                str(square): [
                    KaryogamyMarkerModel(
                        color=k.color, id=k.index, type=k.type, is_main=k.is_main
                    )
                    for k in markers
                ]
                for square, markers in self.karyogamy.items()
            },
        )


# --- BOARD TOPOLOGY ---
def generate_road() -> list[RoadSquare]:
    """52 squares: one segment of 13 per color, in the order of the Color enum."""
    return [
        square
        for color_index, color in enumerate(Color)
        for square in _generate_color_road(color, color_index)
    ]


def _generate_color_road(color: Color, color_index: int) -> list[RoadSquare]:
    first_index = color_index * SEGMENT_LENGTH
    return [
        RoadSquare(
            id=SquareId.road(first_index + offset),
            color=color,
            safe_zone=offset in (SAFE_ZONE_OFFSET, ENTRANCE_OFFSET),
            exit=offset == EXIT_OFFSET,
            entrance=offset == ENTRANCE_OFFSET,
        )
        for offset in range(SEGMENT_LENGTH)
    ]


def generate_initial_zone() -> dict[Color, list[SquareId]]:
    return {
        color: [SquareId.initial(color, i) for i in range(INITIAL_ZONE_SIZE)]
        for color in Color
    }


def generate_final_zone() -> dict[Color, list[SquareId]]:
    return {
        color: [SquareId.final(color, i) for i in range(FINAL_ZONE_SIZE)]
        for color in Color
    }


def generate_pawns() -> dict[Color, list[Pawn]]:
    """Every pawn starts on the initial square with the same index as the pawn."""
    return {
        color: [
            Pawn(color=color, index=i, square=SquareId.initial(color, i))
            for i in range(PAWNS_PER_COLOR)
        ]
        for color in Color
    }


# --- CONVERSION HELPERS ---
def _assert_all_colors(by_color: dict, name: str) -> None:
    if set(by_color.keys()) != set(Color):
        raise GameStateError(f"{name} must contain exactly the colors {list(Color)}.")


def _pawn_from_model(color: Color, model: PawnModel) -> Pawn:
    square = SquareId.parse(model.square_id)
    if model.color != color or (square.color is not None and square.color != color):
        raise GameStateError(
            f"Pawn {model.index} of {color} cannot stand on {model.square_id!r}."
        )
    return Pawn(
        color=model.color,
        index=model.index,
        square=square,
        end_reached=model.end_reached,
        action=model.action[0] if model.action else None,
    )


def _pawn_to_model(pawn: Pawn) -> PawnModel:
    return PawnModel(
        color=pawn.color,
        index=pawn.index,
        square_id=str(pawn.square),
        end_reached=pawn.end_reached,
        action=(pawn.action, pawn.index) if pawn.action else None,
    )


def _move_pawn_from_model(model: MovePawnModel) -> MovePawn:
    return MovePawn(
        color=model.color,
        index=model.index,
        starting_square=SquareId.parse(model.starting_square_id),
        squares=[SquareId.parse(square) for square in model.squares_ids],
        smash=PawnRef(model.smash.color, model.smash.index) if model.smash else None,
    )


def _move_pawn_to_model(move: MovePawn) -> MovePawnModel:
    return MovePawnModel(
        color=move.color,
        index=move.index,
        starting_square_id=str(move.starting_square),
        squares_ids=[str(square) for square in move.squares],
        smash=SmashModel(color=move.smash.color, index=move.smash.index)
        if move.smash
        else None,
    )
