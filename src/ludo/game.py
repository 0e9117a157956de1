"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of Ludo -->
the service layer loads it, calls one action on it, and persists/broadcasts the result.

Life of a turn:
1. roll the dice
2. confirm the result (the pawns that can move get a pending action. No pending action? the turn passes)
3. move one of the pawns with a pending action
4. acknowledge the move once animated (win detection, and the turn passes unless a 6 grants another roll)
"""

from dataclasses import dataclass, field
from typing import Optional, Self
from uuid import uuid4

from src.core.exceptions import (
    AlreadyInGameError,
    GameFullError,
    GameStateError,
    NoMoveToAcknowledgeError,
)
from src.core.models import DiceModel, GameModel, PlayerModel
from src.core.shared_types import Color, Event
from src.ludo import moves, stacking, validator
from src.ludo.board import Board
from src.ludo.dice import MAX_ROLLS_PER_TURN, Dice, DiceRoller, roll_die
from src.ludo.pawn import MovePawn, Pawn
from src.ludo.square import SquareId
from src.ludo.validator import REQUIRED_PLAYERS

WINNER_PLACES = 3


@dataclass
class Player:
    session_id: str
    color: Optional[Color] = None


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    id: str
    players: list[Player]
    board: Board
    current: Optional[str]
    dice: Dice
    # first, second and third place. The fourth color is never recorded.
    winners: list[Optional[Color]] = field(
        default_factory=lambda: [None] * WINNER_PLACES
    )

    @classmethod
    def new_game(cls, session_id: str, game_id: Optional[str] = None) -> Self:
        """The player requesting a new game is the only player and holds the first turn."""
        return cls(
            id=game_id or str(uuid4()),
            players=[Player(session_id)],
            board=Board.create(),
            current=session_id,
            dice=Dice(),
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if len(model.players) > REQUIRED_PLAYERS:
            raise GameStateError(f"A game holds at most {REQUIRED_PLAYERS} players.")
        chosen = [p.color for p in model.players if p.color is not None]
        if len(chosen) != len(set(chosen)):
            raise GameStateError("Two players cannot play with the same color.")
        sessions = [p.socket_id for p in model.players]
        if model.current is not None and model.current not in sessions:
            raise GameStateError(f"Current player {model.current!r} is not in the game.")
        if sorted(model.winners.keys()) != [str(i) for i in range(1, WINNER_PLACES + 1)]:
            raise GameStateError(f"Expected {WINNER_PLACES} winner places.")
        winners = [model.winners[str(i)] for i in range(1, WINNER_PLACES + 1)]
        recorded = [w for w in winners if w is not None]
        if len(recorded) != len(set(recorded)):
            raise GameStateError("A color cannot occupy two winner places.")
        if not 1 <= model.dice.result <= 6 or not 0 <= model.dice.count <= MAX_ROLLS_PER_TURN:
            raise GameStateError(f"Invalid dice state: {model.dice!r}")

        # create the Game
        return cls(
            id=model.id,
            players=[Player(p.socket_id, p.color) for p in model.players],
            board=Board.from_model(model.board),
            current=model.current,
            dice=Dice(
                count=model.dice.count,
                result=model.dice.result,
                able_to_roll=model.dice.able_to_roll,
                roll_animation=model.dice.roll_animation,
            ),
            winners=winners,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            id=self.id,
            players=[
                PlayerModel(socket_id=p.session_id, color=p.color) for p in self.players
            ],
            board=self.board.to_model(),
            current=self.current,
            dice=DiceModel(
                count=self.dice.count,
                result=self.dice.result,
                able_to_roll=self.dice.able_to_roll,
                roll_animation=self.dice.roll_animation,
            ),
            winners={
                str(place): color for place, color in enumerate(self.winners, start=1)
            },
        )

    # --- QUERIES ---
    @property
    def is_finished(self) -> bool:
        return all(color is not None for color in self.winners)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= REQUIRED_PLAYERS

    @property
    def colors_chosen(self) -> bool:
        return all(p.color is not None for p in self.players)

    @property
    def is_ready(self) -> bool:
        """Four players, each with their own color"""
        return len(self.players) == REQUIRED_PLAYERS and self.colors_chosen

    @property
    def session_ids(self) -> list[str]:
        return [p.session_id for p in self.players]

    def player(self, session_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.session_id == session_id), None)

    def winner_place(self, color: Optional[Color]) -> Optional[int]:
        """1, 2 or 3 if the color already finished, otherwise None"""
        if color is None or color not in self.winners:
            return None
        return self.winners.index(color) + 1

    # --- ROSTER ---
    def add_player(self, session_id: str) -> None:
        if self.is_full:
            raise GameFullError()
        if self.player(session_id) is not None:
            raise AlreadyInGameError()
        self.players.append(Player(session_id))

    def remove_player(self, session_id: str) -> None:
        """
        A player left. If it was their turn, whatever they were doing is abandoned and
        the turn goes to the next player before they get removed from the roster.
        """
        if self.player(session_id) is None:
            return

        if self.current == session_id:
            self._abandon_turn()
        self.players = [p for p in self.players if p.session_id != session_id]
        if self.current == session_id:
            self.current = self.players[0].session_id if self.players else None

    def choose_color(self, session_id: str, color: Optional[str]) -> None:
        chosen = validator.assert_can_choose_color(self, session_id, color)
        player = self.player(session_id)
        # for the type checker: the validator made sure the player is in the game
        assert player is not None
        player.color = chosen
        self.dice.able_to_roll = self.is_ready and self._is_turn_idle()

    # --- TURN ACTIONS ---
    def roll_dice(self, session_id: str, roller: DiceRoller = roll_die) -> int:
        validator.assert_can_roll(self, session_id)
        return self.dice.roll(roller)

    def confirm_roll_result(self, session_id: str) -> None:
        """
        The roll animation finished: find out which pawns can move with the result.
        If none of them can, the turn passes without a move.
        """
        player = validator.assert_can_confirm_roll(self, session_id)
        assert player.color is not None

        pawns = self.board.pawns[player.color]
        for pawn in pawns:
            pawn.action = moves.eligible_action(pawn, self.dice.result)

        self.dice.roll_animation = False
        if all(pawn.action is None for pawn in pawns):
            self.dice.able_to_roll = True
            self._pass_turn()

    def move_from_initial(self, session_id: str, pawn_index: int) -> None:
        """Bring a pawn onto the road, at the entrance of its color."""
        pawn = validator.assert_can_move(self, session_id, Event.MOVE_INITIAL, pawn_index)
        starting_square = pawn.square
        self._clear_pending_actions(pawn.color)

        path = moves.entry_path(self.board, pawn)
        self._relocate(pawn, path, starting_square)

        stacking.add_mitosis_if_needed(self.board, pawn)
        stacking.add_karyogamy_if_needed(self.board, pawn)

    def move_on_road(self, session_id: str, pawn_index: int) -> None:
        """Move a pawn forward along the road (possibly turning into its private lane)."""
        pawn = validator.assert_can_move(self, session_id, Event.MOVE_ROAD, pawn_index)
        starting_square = pawn.square
        stacking.remove_mitosis_if_needed(self.board, pawn)
        stacking.remove_karyogamy_if_needed(self.board, pawn)
        self._clear_pending_actions(pawn.color)

        path = moves.road_path(self.board, pawn, self.dice.result)
        move = self._relocate(pawn, path, starting_square)

        captured = moves.find_capture(self.board, pawn)
        if captured is not None:
            captured.send_home()
            move.smash = captured.ref

        stacking.add_mitosis_if_needed(self.board, pawn)
        stacking.add_karyogamy_if_needed(self.board, pawn)

    def move_to_final(self, session_id: str, pawn_index: int) -> None:
        """Move a pawn further up its private lane."""
        pawn = validator.assert_can_move(self, session_id, Event.MOVE_FINAL, pawn_index)
        starting_square = pawn.square
        stacking.remove_karyogamy_if_needed(self.board, pawn)
        self._clear_pending_actions(pawn.color)

        path = moves.final_path(pawn, self.dice.result)
        self._relocate(pawn, path, starting_square)

        stacking.add_karyogamy_if_needed(self.board, pawn)

    def acknowledge_move(self, session_id: str) -> bool:
        """
        Clients report their move animation finished. Only the acknowledgement of the player whose
        turn it is counts: returns False (and changes nothing) for everybody else.
        """
        if session_id != self.current:
            return False

        player = validator.assert_in_game(self, session_id)
        if self.board.move_pawn is None:
            raise NoMoveToAcknowledgeError()
        # a move only exists once every player holds a color
        assert player.color is not None

        stacking.clear_markers(self.board)
        self.board.move_pawn = None
        self.dice.able_to_roll = True

        if all(pawn.end_reached for pawn in self.board.pawns[player.color]):
            self._record_winner(player.color)

        if self.is_finished:
            return True

        # a player that just finished never keeps the turn, even after a 6
        if self.winner_place(player.color) is not None or not self.dice.grants_another_roll():
            self._pass_turn()
        return True

    # --- TURN SCHEDULING ---
    def next_player(self) -> Optional[str]:
        """
        Next player in seating order whose color did not finish yet.

        Looks at every seat at most once. If nobody else qualifies, the current player stays.
        """
        if not self.players:
            return None

        seats = len(self.players)
        start = next(
            (i for i, p in enumerate(self.players) if p.session_id == self.current), -1
        )
        for step in range(1, seats + 1):
            candidate = self.players[(start + step) % seats]
            if candidate.color is None or candidate.color not in self.winners:
                return candidate.session_id
        return self.current

    # -- PRIVATE HELPERS ---
    def _pass_turn(self) -> None:
        self.dice.reset_count()
        self.current = self.next_player()

    def _abandon_turn(self) -> None:
        """Tidy up an unfinished turn of the current player and hand the turn on."""
        stacking.clear_markers(self.board)
        self.board.move_pawn = None
        player = self.player(self.current) if self.current else None
        if player is not None and player.color is not None:
            self._clear_pending_actions(player.color)
        self.dice.roll_animation = False
        self.dice.able_to_roll = True
        self._pass_turn()

    def _is_turn_idle(self) -> bool:
        """Nothing rolled, confirmed, or moved that still waits for a follow-up."""
        pending = any(
            pawn.action is not None for pawns in self.board.pawns.values() for pawn in pawns
        )
        return not (self.dice.roll_animation or self.board.move_pawn or pending)

    def _clear_pending_actions(self, color: Color) -> None:
        """Only one pawn can act on a roll."""
        for pawn in self.board.pawns[color]:
            pawn.action = None

    def _relocate(
        self, pawn: Pawn, path: list[SquareId], starting_square: SquareId
    ) -> MovePawn:
        pawn.square = path[-1]
        pawn.end_reached = pawn.square.is_home
        move = MovePawn(
            color=pawn.color,
            index=pawn.index,
            starting_square=starting_square,
            squares=path,
        )
        self.board.move_pawn = move
        return move

    def _record_winner(self, color: Color) -> None:
        """Next free place on the podium. A color is never recorded twice."""
        if color in self.winners or self.is_finished:
            return
        self.winners[self.winners.index(None)] = color
