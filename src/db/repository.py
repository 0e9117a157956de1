"""Protocol repository (can implement later for Redis / SQL Alchemy etc.)"""

from typing import Protocol

from src.core.models import GameModel


class GameRepository(Protocol):
    """
    Persistence layer orchestration
    ----

    Two kinds of records:
    * game id -> the full serialized game. Expires when idle, every save refreshes the expiry.
    * session id -> id of the game that session plays in.
    """

    def get_game(self, game_id: str) -> GameModel | None:
        """Get game by ID, if record exists (and did not expire)."""
        ...

    def save_game(self, game: GameModel) -> GameModel:
        """Create or overwrite the record of the game and refresh its expiry."""
        ...

    def delete_game(self, game_id: str) -> None:
        """Remove a game's record, whatever state it is in."""
        ...

    def get_session_game(self, session_id: str) -> str | None:
        """ID of the game the session belongs to, if any."""
        ...

    def set_session_game(self, session_id: str, game_id: str) -> None:
        """Point the session to a game (replaces any earlier game)."""
        ...

    def delete_session(self, session_id: str) -> None:
        """Forget which game the session belongs to."""
        ...
