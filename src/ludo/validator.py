"""
Checks whether a player may perform an action on the current state of the game.

None of these functions mutate the game: a request either passes every check, or a RejectionError
is raised before anything changes.
"""

from typing import TYPE_CHECKING

from src.core.exceptions import (
    AlreadyFinishedColorError,
    ColorTakenError,
    DiceNotRollableError,
    GameFinishedError,
    IneligibleRollError,
    InvalidColorError,
    InvalidPawnIndexError,
    NoRollToConfirmError,
    NotEnoughPlayersError,
    NotInGameError,
    NotYourTurnError,
    OvershootError,
    PawnNotMovableError,
)
from src.core.shared_types import Color, Event
from src.ludo.dice import ENTRY_ROLLS
from src.ludo.moves import squares_to_home
from src.ludo.pawn import Pawn

if TYPE_CHECKING:
    from src.ludo.game import Game, Player

REQUIRED_PLAYERS = 4


def assert_in_game(game: "Game", session_id: str) -> "Player":
    """Base checks for any action on a game: you take part in it and are still playing."""
    player = game.player(session_id)
    if player is None:
        raise NotInGameError()

    if game.is_finished:
        raise GameFinishedError()

    place = game.winner_place(player.color)
    if place is not None:
        raise AlreadyFinishedColorError(f"You are already the top {place}")
    return player


def assert_can_choose_color(game: "Game", session_id: str, color: str | None) -> Color:
    assert_in_game(game, session_id)

    if color not in set(Color):
        raise InvalidColorError()

    chosen = Color(color)
    # holding the color yourself counts as taken too
    if any(p.color == chosen for p in game.players):
        raise ColorTakenError()
    return chosen


def assert_can_roll(game: "Game", session_id: str) -> "Player":
    player = assert_in_game(game, session_id)
    _assert_your_turn(game, session_id)

    if not game.dice.able_to_roll:
        raise DiceNotRollableError()

    _assert_enough_players(game)
    return player


def assert_can_confirm_roll(game: "Game", session_id: str) -> "Player":
    player = assert_in_game(game, session_id)
    _assert_your_turn(game, session_id)
    _assert_enough_players(game)

    if not game.dice.roll_animation:
        raise NoRollToConfirmError()
    return player


def assert_can_move(
    game: "Game", session_id: str, move: Event, pawn_index: int
) -> Pawn:
    """
    A move request has to be for a pawn of yours that got the same move kind assigned
    when the dice result was confirmed.
    """
    player = assert_in_game(game, session_id)
    _assert_your_turn(game, session_id)
    _assert_enough_players(game)

    # for the type checker: a player whose turn it is has a color
    assert player.color is not None
    pawn = game.board.pawn(player.color, pawn_index)
    if pawn is None:
        raise InvalidPawnIndexError()

    if pawn.action != move:
        raise PawnNotMovableError()

    if move == Event.MOVE_INITIAL and game.dice.result not in ENTRY_ROLLS:
        raise IneligibleRollError()

    if move == Event.MOVE_FINAL and game.dice.result > squares_to_home(pawn.square):
        raise OvershootError()

    return pawn


def _assert_your_turn(game: "Game", session_id: str) -> None:
    if game.current != session_id:
        raise NotYourTurnError()


def _assert_enough_players(game: "Game") -> None:
    if len(game.players) != REQUIRED_PLAYERS:
        raise NotEnoughPlayersError()
    if not game.colors_chosen:
        raise NotEnoughPlayersError("Not every player has chosen a color")
