"""
Entry point for the real-time transport.

The transport hands every inbound message over as (session id, event name, payload).
A successful action returns None (the new state reaches the players through the broadcaster),
a rejected one returns an error payload meant for the requesting session only.
"""

from typing import Any, Callable

from loguru import logger
from pydantic import ValidationError

from src.api.models import (
    ChooseColorRequest,
    ErrorResponse,
    JoinGameRequest,
    PawnMoveRequest,
)
from src.core.exceptions import GameError, InvalidRequestError
from src.core.shared_types import Event
from src.services.ludo_service import LudoService

Handler = Callable[[str, Any], object]


class LudoGateway:
    def __init__(self, service: LudoService) -> None:
        self.service = service
        self._handlers: dict[Event, Handler] = {
            Event.CREATE_GAME: lambda sid, _: service.create_game(sid),
            Event.JOIN_GAME: lambda sid, payload: service.join_game(
                sid, JoinGameRequest(game_id=payload)
            ),
            Event.CHOOSE_COLOR: lambda sid, payload: service.choose_color(
                sid, ChooseColorRequest(color=payload)
            ),
            Event.ROLL_DICE: lambda sid, _: service.roll_dice(sid),
            Event.ROLL_RESULT: lambda sid, _: service.confirm_roll_result(sid),
            Event.MOVE_INITIAL: lambda sid, payload: service.move_from_initial(
                sid, PawnMoveRequest(pawn_index=payload)
            ),
            Event.MOVE_ROAD: lambda sid, payload: service.move_on_road(
                sid, PawnMoveRequest(pawn_index=payload)
            ),
            Event.MOVE_FINAL: lambda sid, payload: service.move_to_final(
                sid, PawnMoveRequest(pawn_index=payload)
            ),
            Event.MOVED_PAWN: lambda sid, _: service.acknowledge_move(sid),
        }

    def handle(self, session_id: str, event: str, payload: Any = None) -> dict | None:
        """Dispatch an inbound event. Returns {'error': message} if the action was rejected."""
        if event not in set(Event):
            return self._reject(session_id, event, InvalidRequestError(f"Unknown event {event!r}"))

        handler = self._handlers[Event(event)]
        try:
            handler(session_id, payload)
        except ValidationError:
            return self._reject(session_id, event, InvalidRequestError())
        except GameError as e:
            return self._reject(session_id, event, e)
        return None

    def disconnect(self, session_id: str) -> None:
        self.service.disconnect(session_id)

    def _reject(self, session_id: str, event: str, error: GameError) -> dict:
        logger.debug(f"Rejected {event} from {session_id}: [{error.code}] {error}")
        return ErrorResponse(error=str(error)).model_dump()
