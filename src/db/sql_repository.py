"""Implementation of (Game)Repository using SQLAlchemy"""

from typing import Callable

from loguru import logger
from pydantic import ValidationError
from sqlalchemy import delete
from sqlalchemy.orm import Session

from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.db.schema import DBGame, DBSession, epoch_now

DEFAULT_EXPIRATION_SECONDS = 3600


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(
        self,
        db_session: Session,
        expiration_seconds: int = DEFAULT_EXPIRATION_SECONDS,
        clock: Callable[[], float] = epoch_now,
    ) -> None:
        self.db = db_session
        self.expiration_seconds = expiration_seconds
        self.clock = clock

    # --- GAMES ---
    def get_game(self, game_id: str) -> GameModel | None:
        """Get game by ID, if record exists (and did not expire)."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def save_game(self, game: GameModel) -> GameModel:
        """Create or overwrite the record of the game and refresh its expiry."""
        game_db = self.db.get(DBGame, game.id)
        state = game.to_payload()
        expires_at = self.clock() + self.expiration_seconds
        if game_db is None:
            game_db = DBGame(id=game.id, state=state, expires_at=expires_at)
            self.db.add(game_db)
        else:
            game_db.state = state
            game_db.expires_at = expires_at
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: str) -> None:
        """Remove a game's record. Expired or unreadable records go as well, without being parsed."""
        self.db.execute(delete(DBGame).where(DBGame.id == game_id))
        self.db.commit()

    # --- SESSION INDEX ---
    def get_session_game(self, session_id: str) -> str | None:
        """ID of the game the session belongs to, if any."""
        session_db = self.db.get(DBSession, session_id)
        return session_db.game_id if session_db else None

    def set_session_game(self, session_id: str, game_id: str) -> None:
        """Point the session to a game (replaces any earlier game)."""
        session_db = self.db.get(DBSession, session_id)
        if session_db is None:
            self.db.add(DBSession(session_id=session_id, game_id=game_id))
        else:
            session_db.game_id = game_id
        self.db.commit()

    def delete_session(self, session_id: str) -> None:
        """Forget which game the session belongs to."""
        session_db = self.db.get(DBSession, session_id)
        if session_db is not None:
            self.db.delete(session_db)
            self.db.commit()

    # --- HELPERS ---
    def _fetch_game(self, game_id: str) -> DBGame | None:
        """Expired records are removed on first access and treated as missing."""
        game_db = self.db.get(DBGame, game_id)
        if game_db is not None and game_db.expires_at <= self.clock():
            logger.debug(f"Game {game_id} idle since {game_db.updated_at}, expired.")
            self.delete_game(game_id)
            return None
        return game_db

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        try:
            return GameModel.from_payload(game_db.state)
        except ValidationError as e:
            raise GameStateError(f"Stored game {game_db.id} is corrupted.") from e
