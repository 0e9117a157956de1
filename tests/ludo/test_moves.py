"""Unit tests for src/ludo/moves.py"""

import pytest

from src.core.shared_types import Color, Event
from src.ludo.board import Board
from src.ludo.moves import (
    eligible_action,
    entry_path,
    final_path,
    find_capture,
    road_path,
)
from src.ludo.pawn import Pawn
from src.ludo.square import ROAD_LENGTH, SquareId


@pytest.fixture
def board() -> Board:
    return Board.create()


def place(board: Board, color: Color, index: int, square: str) -> Pawn:
    pawn = board.pawn(color, index)
    assert pawn is not None
    pawn.square = SquareId.parse(square)
    return pawn


def ids(squares: list[SquareId]) -> list[str]:
    return [str(square) for square in squares]


# --- ELIGIBILITY ---
@pytest.mark.parametrize("dice_result", [1, 6])
def test_initial_pawn_can_enter_with_1_or_6(board: Board, dice_result: int) -> None:
    pawn = board.pawn(Color.RED, 0)
    assert eligible_action(pawn, dice_result) == Event.MOVE_INITIAL


@pytest.mark.parametrize("dice_result", [2, 3, 4, 5])
def test_initial_pawn_stuck_otherwise(board: Board, dice_result: int) -> None:
    pawn = board.pawn(Color.RED, 0)
    assert eligible_action(pawn, dice_result) is None


@pytest.mark.parametrize("dice_result", [1, 2, 3, 4, 5, 6])
def test_road_pawn_can_always_move(board: Board, dice_result: int) -> None:
    pawn = place(board, Color.GREEN, 1, "road-30")
    assert eligible_action(pawn, dice_result) == Event.MOVE_ROAD


@pytest.mark.parametrize(
    "lane_index, dice_result, expected",
    [
        (0, 5, Event.MOVE_FINAL),
        (0, 6, None),
        (3, 2, Event.MOVE_FINAL),
        (3, 3, None),
        (4, 1, Event.MOVE_FINAL),
        (5, 1, None),  # already home
    ],
)
def test_lane_pawn_cannot_overshoot(
    board: Board, lane_index: int, dice_result: int, expected: Event | None
) -> None:
    pawn = place(board, Color.BLUE, 2, f"final-blue-{lane_index}")
    assert eligible_action(pawn, dice_result) == expected


# --- ENTRY ---
@pytest.mark.parametrize(
    "color, entrance", [(Color.RED, "road-8"), (Color.GREEN, "road-21"), (Color.BLUE, "road-47")]
)
def test_entry_path_is_own_entrance(board: Board, color: Color, entrance: str) -> None:
    pawn = board.pawn(color, 3)
    assert ids(entry_path(board, pawn)) == [entrance]


# --- ROAD ---
@pytest.mark.parametrize(
    "color, start, dice_result, expected",
    [
        # plain walk
        (Color.RED, "road-8", 4, ["road-9", "road-10", "road-11", "road-12"]),
        # the exit of another color does not matter
        (Color.RED, "road-17", 3, ["road-18", "road-19", "road-20"]),
        # wrap around the end of the ring
        (Color.GREEN, "road-50", 4, ["road-51", "road-0", "road-1", "road-2"]),
        (Color.RED, "road-50", 6, ["road-51", "road-0", "road-1", "road-2", "road-3", "road-4"]),
        # landing exactly on the own exit keeps the pawn on the ring
        (Color.RED, "road-3", 3, ["road-4", "road-5", "road-6"]),
        # crossing the own exit turns into the lane, starting at index 0
        (
            Color.RED,
            "road-4",
            5,
            ["road-5", "road-6", "final-red-0", "final-red-1", "final-red-2"],
        ),
        (Color.YELLOW, "road-31", 2, ["road-32", "final-yellow-0"]),
        # standing on the exit: first step is already in the lane
        (
            Color.RED,
            "road-6",
            6,
            [f"final-red-{i}" for i in range(6)],
        ),
        # the wrap is irrelevant for blue: its exit comes before the end of the ring
        (Color.BLUE, "road-44", 4, ["road-45", "final-blue-0", "final-blue-1", "final-blue-2"]),
    ],
)
def test_road_path(
    board: Board, color: Color, start: str, dice_result: int, expected: list[str]
) -> None:
    pawn = place(board, color, 0, start)
    assert ids(road_path(board, pawn, dice_result)) == expected


@pytest.mark.parametrize("color", list(Color))
def test_road_path_length_equals_dice(board: Board, color: Color) -> None:
    """Any start on the ring, any dice result: one square per pip, lane squares only after the own exit."""
    exit_index = board.exit(color).id.index
    for start in range(ROAD_LENGTH):
        for dice_result in range(1, 7):
            pawn = place(board, color, 0, f"road-{start}")
            path = road_path(board, pawn, dice_result)
            assert len(path) == dice_result

            steps_to_exit = (exit_index - start) % ROAD_LENGTH
            if steps_to_exit == 0:
                # pawn stands on its exit
                assert all(square.is_final for square in path)
                continue

            for step, square in enumerate(path, start=1):
                assert square.is_road == (step <= steps_to_exit)


def test_road_path_reaches_home_only_from_the_exit(board: Board) -> None:
    pawn = place(board, Color.GREEN, 0, "road-19")
    assert road_path(board, pawn, 6)[-1].is_home

    pawn = place(board, Color.GREEN, 0, "road-18")
    assert not road_path(board, pawn, 6)[-1].is_home


# --- FINAL LANE ---
def test_final_path(board: Board) -> None:
    pawn = place(board, Color.YELLOW, 1, "final-yellow-1")
    assert ids(final_path(pawn, 3)) == ["final-yellow-2", "final-yellow-3", "final-yellow-4"]

    pawn = place(board, Color.YELLOW, 1, "final-yellow-4")
    assert ids(final_path(pawn, 1)) == ["final-yellow-5"]


# --- CAPTURING ---
def test_capture_single_opponent_on_plain_square(board: Board) -> None:
    victim = place(board, Color.YELLOW, 0, "road-13")
    mover = place(board, Color.RED, 0, "road-13")
    assert find_capture(board, mover) is victim


@pytest.mark.parametrize("square", ["road-3", "road-8", "road-16", "road-47"])
def test_no_capture_on_safe_zone(board: Board, square: str) -> None:
    place(board, Color.YELLOW, 0, square)
    mover = place(board, Color.RED, 0, square)
    assert find_capture(board, mover) is None


def test_no_capture_of_a_block(board: Board) -> None:
    """Two pawns already on the square (three in total): nobody gets captured."""
    place(board, Color.YELLOW, 0, "road-13")
    place(board, Color.YELLOW, 1, "road-13")
    mover = place(board, Color.RED, 0, "road-13")
    assert find_capture(board, mover) is None


def test_no_capture_of_own_color(board: Board) -> None:
    place(board, Color.RED, 1, "road-13")
    mover = place(board, Color.RED, 0, "road-13")
    assert find_capture(board, mover) is None


def test_no_capture_when_alone(board: Board) -> None:
    mover = place(board, Color.RED, 0, "road-13")
    assert find_capture(board, mover) is None


def test_no_capture_in_lane(board: Board) -> None:
    mover = place(board, Color.RED, 0, "final-red-2")
    place(board, Color.RED, 1, "final-red-2")
    assert find_capture(board, mover) is None
