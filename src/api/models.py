"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidGameError


# --- REQUEST MODELS ---
class JoinGameRequest(BaseModel):
    game_id: str

    @field_validator("game_id")
    @classmethod
    def validate_game_id(cls, value: str) -> str:
        """Game ids are UUIDs. Anything else can never match a stored game."""
        try:
            UUID(value)
        except ValueError:
            raise InvalidGameError() from None
        return value


class ChooseColorRequest(BaseModel):
    # NOTE: any string is accepted here. Whether it is a color is up to the game to decide.
    color: Optional[str] = None


class PawnMoveRequest(BaseModel):
    pawn_index: int


# --- RESPONSE MODELS ---
class ErrorResponse(BaseModel):
    error: str
