"""
Boundary layer data model(s).

One explicit schema for a Game, used both for what gets persisted and for what gets broadcast to clients.
JSON field names are camelCase, enums are encoded by their string value.
(Decouples the data model of the DB layer and the transport from the domain objects in src/ludo)
"""

from typing import Optional, Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.core.shared_types import AnimationType, Color, Event, SquarePosition

# Type aliases to make the models easier to read
SessionId = str
SquareIdStr = str


class SchemaModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlayerModel(SchemaModel):
    socket_id: SessionId
    color: Optional[Color] = None


class DiceModel(SchemaModel):
    count: int
    result: int
    able_to_roll: bool
    roll_animation: bool


class RoadSquareModel(SchemaModel):
    id: SquareIdStr
    color: Color
    safe_zone: bool = False
    exit: bool = False
    entrance: bool = False


class ZoneSquareModel(SchemaModel):
    id: SquareIdStr


class PawnModel(SchemaModel):
    color: Color
    index: int
    square_id: SquareIdStr
    end_reached: bool = False
    action: Optional[tuple[Event, int]] = None


class SmashModel(SchemaModel):
    color: Color
    index: int


class MovePawnModel(SchemaModel):
    color: Color
    index: int
    starting_square_id: SquareIdStr
    squares_ids: list[SquareIdStr]
    smash: Optional[SmashModel] = None


class MitosisMarkerModel(SchemaModel):
    color: Color
    index: int
    position: SquarePosition
    type: AnimationType


class KaryogamyMarkerModel(SchemaModel):
    color: Color
    id: int
    type: AnimationType
    is_main: bool


class BoardModel(SchemaModel):
    road: list[RoadSquareModel]
    initial_zone: dict[Color, list[ZoneSquareModel]]
    final_zone: dict[Color, list[ZoneSquareModel]]
    pawns: dict[Color, list[PawnModel]]
    move_pawn: Optional[MovePawnModel] = None
    mitosis: dict[SquareIdStr, list[MitosisMarkerModel]] = {}
    karyogamy: dict[SquareIdStr, list[KaryogamyMarkerModel]] = {}


class GameModel(SchemaModel):
    """Transport-safe representation of a Ludo game used between API, Service, DB, and Game layers."""

    id: str
    players: list[PlayerModel]
    board: BoardModel
    current: Optional[SessionId]
    dice: DiceModel
    # keys "1", "2", "3": places on the podium
    winners: dict[str, Optional[Color]]

    def to_payload(self) -> dict:
        """JSON-compatible dict with the wire field names."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_payload(cls, payload: dict) -> Self:
        return cls.model_validate(payload)
