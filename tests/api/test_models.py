from uuid import uuid4

import pytest
from pydantic import ValidationError

from src.api.models import ChooseColorRequest, ErrorResponse, JoinGameRequest, PawnMoveRequest
from src.core.exceptions import InvalidGameError


# -- Validation - JoinGameRequest --
def test_valid_game_id() -> None:
    game_id = str(uuid4())
    request = JoinGameRequest(game_id=game_id)
    assert request.game_id == game_id


@pytest.mark.parametrize(
    "invalid_id",
    [
        "",
        "not-a-uuid",
        "9c5b94b1-35ad-49bb-b118",  # truncated
    ],
)
def test_invalid_game_id(invalid_id: str) -> None:
    """Never matches a stored game: rejected before looking anything up."""
    with pytest.raises(InvalidGameError):
        _ = JoinGameRequest(game_id=invalid_id)


def test_game_id_must_be_a_string() -> None:
    with pytest.raises(ValidationError):
        _ = JoinGameRequest(game_id={"id": 42})


# -- Validation - ChooseColorRequest --
def test_any_color_string_is_passed_on() -> None:
    """Whether the color exists is for the game to decide"""
    assert ChooseColorRequest(color="purple").color == "purple"
    assert ChooseColorRequest().color is None


# -- Validation - PawnMoveRequest --
@pytest.mark.parametrize("pawn_index", [0, 3, "2"])
def test_pawn_index(pawn_index: int | str) -> None:
    assert PawnMoveRequest(pawn_index=pawn_index).pawn_index == int(pawn_index)


@pytest.mark.parametrize("pawn_index", [None, "first", 1.5])
def test_invalid_pawn_index(pawn_index) -> None:
    with pytest.raises(ValidationError):
        _ = PawnMoveRequest(pawn_index=pawn_index)


def test_error_response() -> None:
    assert ErrorResponse(error="Not your turn").model_dump() == {"error": "Not your turn"}
