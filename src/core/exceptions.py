"""
Custom exceptions.

Every rejection of a player action derives from RejectionError and carries a stable `code`.
Rejections are always raised before the game gets mutated.
"""


class GameError(Exception):
    """Top-level exception for anything the game layers raise on purpose."""

    code: str = "game-error"


# --- STRUCTURE OF PERSISTED STATE ---
class GameStateError(GameError):
    """A persisted game could not be turned back into a valid Game."""

    code = "invalid-game"


class InvalidSquareError(GameStateError):
    """Square identifier does not follow one of the known patterns."""


# --- REJECTIONS ---
class RejectionError(GameError):
    """An action that is not allowed given the current state of the game."""

    code = "rejected"
    default_message = "Action rejected"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidRequestError(RejectionError):
    code = "invalid-request"
    default_message = "Invalid request"


class NotInGameError(RejectionError):
    code = "not-in-game"
    default_message = "Not in game"


class InvalidGameError(RejectionError):
    code = "invalid-game"
    default_message = "Invalid game id"


class GameFullError(RejectionError):
    code = "game-full"
    default_message = "Game is full"


class AlreadyInGameError(RejectionError):
    code = "already-in-game"
    default_message = "Already in game"


class GameFinishedError(RejectionError):
    code = "game-finished"
    default_message = "Game is already finished"


class AlreadyFinishedColorError(RejectionError):
    code = "already-finished-color"
    default_message = "You already finished the game"


class InvalidColorError(RejectionError):
    code = "invalid-color"
    default_message = "Invalid color"


class ColorTakenError(RejectionError):
    code = "color-taken"
    default_message = "Color already taken"


class NotYourTurnError(RejectionError):
    code = "not-your-turn"
    default_message = "Not your turn"


class NotEnoughPlayersError(RejectionError):
    code = "not-enough-players"
    default_message = "Not enough players"


class DiceNotRollableError(RejectionError):
    code = "dice-not-rollable"
    default_message = "Dice cannot be rolled right now"


class NoRollToConfirmError(RejectionError):
    code = "no-roll-to-confirm"
    default_message = "There is no dice roll to confirm"


class InvalidPawnIndexError(RejectionError):
    code = "invalid-pawn-index"
    default_message = "Invalid pawn index"


class PawnNotMovableError(RejectionError):
    code = "pawn-not-movable"
    default_message = "Pawn cannot be moved"


class IneligibleRollError(RejectionError):
    code = "ineligible-roll"
    default_message = "Dice roll is neither 1 nor 6"


class OvershootError(RejectionError):
    code = "overshoot"
    default_message = "Dice result is too high"


class NoMoveToAcknowledgeError(RejectionError):
    code = "no-move-to-acknowledge"
    default_message = "There is no move to acknowledge"
