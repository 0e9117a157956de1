"""Orchestration of communication from the transport to business logic and persistence layers (and the reverse direction)."""

from contextlib import contextmanager
from threading import Lock
from typing import Callable, Iterator

from loguru import logger

from src.api.models import ChooseColorRequest, JoinGameRequest, PawnMoveRequest
from src.core.exceptions import GameStateError, InvalidGameError, NotInGameError
from src.core.models import GameModel
from src.core.shared_types import PublishEvent
from src.db.repository import GameRepository
from src.ludo.dice import DiceRoller, roll_die
from src.ludo.game import Game
from src.services.broadcaster import Broadcaster


class LudoService:
    """
    Orchestration of layers for a Ludo game.
    ----

    Every action follows the same pipeline: find the game of the session -> load it -> let the Game
    validate and apply the action -> persist -> broadcast the new state to all its players.

    Actions on one game are serialized with a lock per game id. Different games never wait on each other.
    """

    def __init__(
        self,
        repository: GameRepository,
        broadcaster: Broadcaster,
        roller: DiceRoller = roll_die,
    ) -> None:
        self.repo = repository
        self.broadcaster = broadcaster
        self.roller = roller
        self._locks: dict[str, Lock] = {}
        self._locks_guard = Lock()

    # -- ROSTER ---
    def create_game(self, session_id: str) -> GameModel:
        """First player requested to create a new game."""

        # A session plays in a single game at a time
        old_game_id = self.repo.get_session_game(session_id)
        if old_game_id is not None:
            self._leave_game(session_id, old_game_id)

        new_game = Game.new_game(session_id)
        created = self._commit(new_game)
        self.repo.set_session_game(session_id, new_game.id)

        logger.info(f"Session {session_id} created game {new_game.id}")
        return created

    def join_game(self, session_id: str, request: JoinGameRequest) -> GameModel:
        """Another player requested to join an existing game."""
        old_game_id = self.repo.get_session_game(session_id)

        with self._released_if_gone(request.game_id), self._game_lock(request.game_id):
            # Retrieve persisted game, register the player, store and broadcast
            game = self._load_game(request.game_id)
            game.add_player(session_id)
            joined = self._commit(game)
            self.repo.set_session_game(session_id, game.id)

        # NOTE: leave the previous game only after releasing the lock of the new one (never hold two locks)
        if old_game_id is not None and old_game_id != request.game_id:
            self._leave_game(session_id, old_game_id)

        logger.info(f"Session {session_id} joined game {request.game_id}")
        return joined

    def disconnect(self, session_id: str) -> None:
        """The transport lost the connection. Remove the player from the roster."""
        game_id = self.repo.get_session_game(session_id)
        if game_id is None:
            return

        self.repo.delete_session(session_id)
        self._leave_game(session_id, game_id)

    def choose_color(self, session_id: str, request: ChooseColorRequest) -> GameModel:
        return self._play(session_id, lambda game: game.choose_color(session_id, request.color))

    # -- TURN ---
    def roll_dice(self, session_id: str) -> GameModel:
        return self._play(session_id, lambda game: game.roll_dice(session_id, self.roller))

    def confirm_roll_result(self, session_id: str) -> GameModel:
        return self._play(session_id, lambda game: game.confirm_roll_result(session_id))

    def move_from_initial(self, session_id: str, request: PawnMoveRequest) -> GameModel:
        return self._play(
            session_id, lambda game: game.move_from_initial(session_id, request.pawn_index)
        )

    def move_on_road(self, session_id: str, request: PawnMoveRequest) -> GameModel:
        return self._play(
            session_id, lambda game: game.move_on_road(session_id, request.pawn_index)
        )

    def move_to_final(self, session_id: str, request: PawnMoveRequest) -> GameModel:
        return self._play(
            session_id, lambda game: game.move_to_final(session_id, request.pawn_index)
        )

    def acknowledge_move(self, session_id: str) -> GameModel | None:
        """
        Client finished animating the last move.

        Returns None when the acknowledgement was ignored (not the player whose turn it is).
        A finished game gets broadcast one last time and is then purged along with its players' sessions.
        """
        game_id = self._resolve_game_id(session_id)
        with self._released_if_gone(game_id), self._game_lock(game_id):
            game = self._load_game(game_id)
            if not game.acknowledge_move(session_id):
                return None

            if not game.is_finished:
                return self._commit(game)

            final_state = game.to_model()
            self._broadcast(game.session_ids, final_state)
            self._purge(game)

        self._forget_lock(game_id)
        logger.info(f"Game {game_id} finished. Winners: {game.winners}")
        return final_state

    # -- Internal helpers --
    def _play(self, session_id: str, action: Callable[[Game], object]) -> GameModel:
        """Load the session's game, apply the action and commit. Rejections leave the store untouched."""
        game_id = self._resolve_game_id(session_id)
        with self._released_if_gone(game_id), self._game_lock(game_id):
            game = self._load_game(game_id)
            action(game)
            return self._commit(game)

    def _leave_game(self, session_id: str, game_id: str) -> None:
        """Remove the session from the game. The last player to leave deletes the game."""
        with self._game_lock(game_id):
            try:
                model = self.repo.get_game(game_id)
                game = Game.from_model(model) if model else None
            except GameStateError as e:
                logger.warning(f"Dropping corrupted game {game_id}: {e}")
                self.repo.delete_game(game_id)
                game = None

            if game is None:
                gone = True
            elif game.player(session_id) is None:
                gone = False
            elif len(game.players) == 1:
                self.repo.delete_game(game_id)
                logger.info(f"Last player left, deleted game {game_id}")
                gone = True
            else:
                game.remove_player(session_id)
                self._commit(game)
                gone = False

        if gone:
            self._forget_lock(game_id)

    def _resolve_game_id(self, session_id: str) -> str:
        game_id = self.repo.get_session_game(session_id)
        if game_id is None:
            raise NotInGameError()
        return game_id

    def _load_game(self, game_id: str) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        try:
            model = self.repo.get_game(game_id)
            if model is None:
                raise InvalidGameError()
            return Game.from_model(model)
        except GameStateError as e:
            logger.warning(f"Refusing to act on corrupted game {game_id}: {e}")
            raise InvalidGameError() from e

    def _commit(self, game: Game) -> GameModel:
        """Persist the game (refreshing its expiry) and send it to every player."""
        model = game.to_model()
        stored = self.repo.save_game(model)
        self._broadcast(game.session_ids, stored)
        return stored

    def _broadcast(self, session_ids: list[str], model: GameModel) -> None:
        self.broadcaster.emit(session_ids, PublishEvent.GAME_UPDATED, model.to_payload())

    def _purge(self, game: Game) -> None:
        self.repo.delete_game(game.id)
        for session_id in game.session_ids:
            self.repo.delete_session(session_id)

    @contextmanager
    def _game_lock(self, game_id: str) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.setdefault(game_id, Lock())
        with lock:
            yield

    def _forget_lock(self, game_id: str) -> None:
        with self._locks_guard:
            self._locks.pop(game_id, None)

    @contextmanager
    def _released_if_gone(self, game_id: str) -> Iterator[None]:
        """Drop the lock of a game that expired or vanished from the store (entered before the lock itself)."""
        try:
            yield
        except InvalidGameError:
            self._forget_lock(game_id)
            raise
