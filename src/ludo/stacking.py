"""
Bookkeeping of pawns sharing a square

Purely a display aid: none of this influences which moves are legal. But the markers are part of the
persisted state, so they have to stay consistent.

* mitosis: pawns of different colors on one square. Every color gets its own quadrant of the square.
* karyogamy: several pawns of the same color on one square. One of them is the 'main' marker.

Leaving a square only flags the marker as removed, so clients can animate the pawn leaving.
Once the client acknowledged the move, `clear_markers` drops the removed markers.
"""

from dataclasses import replace
from typing import Optional

from src.core.shared_types import AnimationType, Color, SquarePosition
from src.ludo.board import Board, KaryogamyMarker, MitosisMarker
from src.ludo.pawn import Pawn
from src.ludo.square import SquareId

QUADRANT_ORDER: tuple[SquarePosition, ...] = (
    SquarePosition.TOP_LEFT,
    SquarePosition.TOP_RIGHT,
    SquarePosition.BOTTOM_LEFT,
    SquarePosition.BOTTOM_RIGHT,
)


# --- MITOSIS ---
def add_mitosis_if_needed(board: Board, moving_pawn: Pawn) -> None:
    """Record every unrecorded pawn on the square, once pawns of at least two colors share it."""
    square = moving_pawn.square
    pawns_on_square = board.pawns_on(square)
    if not _has_multiple_colors(pawns_on_square):
        return

    markers = board.mitosis.setdefault(square, [])
    for color in Color:
        color_pawns = [p for p in pawns_on_square if p.color == color]
        if not color_pawns:
            continue

        recorded = {m.index for m in markers if m.color == color}
        position = next_position(markers, color)
        markers.extend(
            MitosisMarker(color=p.color, index=p.index, position=position)
            for p in color_pawns
            if p.index not in recorded
        )


def remove_mitosis_if_needed(board: Board, pawn: Pawn) -> None:
    """Flag the pawn's marker on the square it is about to leave."""
    marker = _find_marker(board.mitosis.get(pawn.square), pawn)
    if marker is not None:
        marker.type = AnimationType.REMOVED


def next_position(markers: list[MitosisMarker], color: Color) -> Optional[SquarePosition]:
    """A color keeps its quadrant while it has a marker on the square. Otherwise: first free one."""
    claimed = next((m.position for m in markers if m.color == color), None)
    if claimed is not None:
        return claimed

    taken = {m.position for m in markers}
    return next((p for p in QUADRANT_ORDER if p not in taken), None)


# --- KARYOGAMY ---
def add_karyogamy_if_needed(board: Board, moving_pawn: Pawn) -> None:
    """Record newly stacked pawns for every color with two or more pawns on the square."""
    square = moving_pawn.square
    pawns_on_square = board.pawns_on(square)
    stacked_colors = _stacked_colors(pawns_on_square)
    if not stacked_colors:
        return

    markers = board.karyogamy.setdefault(square, [])
    for color in stacked_colors:
        recorded = {k.index for k in markers if k.color == color}
        new_pawns = [
            p for p in pawns_on_square if p.color == color and p.index not in recorded
        ]
        if not new_pawns:
            continue

        markers.extend(KaryogamyMarker(color=p.color, index=p.index) for p in new_pawns)
        _ensure_main(markers, color)


def remove_karyogamy_if_needed(board: Board, pawn: Pawn) -> None:
    """Flag the pawn's marker as removed and hand 'main' to another pawn of its color if needed."""
    markers = board.karyogamy.get(pawn.square)
    marker = _find_marker(markers, pawn)
    if marker is None:
        return

    marker.type = AnimationType.REMOVED
    marker.is_main = False
    _ensure_main(markers, pawn.color)


def _ensure_main(markers: list[KaryogamyMarker], color: Color) -> None:
    remaining = [
        k for k in markers if k.color == color and k.type != AnimationType.REMOVED
    ]
    if remaining and not any(k.is_main for k in remaining):
        remaining[0].is_main = True


# --- PRUNING ---
def clear_markers(board: Board) -> None:
    """
    Once the last move has been animated:
    1. drop the markers that were flagged as removed
    2. the others go to the settled state
    3. markers that no longer describe two or more pawns on the square disappear altogether

    Only the square the pawn left and the square it arrived on can have changed.
    """
    move = board.move_pawn
    if move is None:
        return

    moved_pawn = board.pawn(move.color, move.index)
    squares = {move.starting_square}
    if moved_pawn is not None:
        squares.add(moved_pawn.square)

    for square in squares:
        pawns_on_square = board.pawns_on(square)
        _prune_mitosis(board, square, pawns_on_square)
        _prune_karyogamy(board, square, pawns_on_square)


def _prune_mitosis(board: Board, square: SquareId, pawns_on_square: list[Pawn]) -> None:
    markers = board.mitosis.get(square)
    if markers is None:
        return

    kept = _settle(markers)
    if kept and _has_multiple_colors(pawns_on_square):
        board.mitosis[square] = kept
    else:
        del board.mitosis[square]


def _prune_karyogamy(board: Board, square: SquareId, pawns_on_square: list[Pawn]) -> None:
    markers = board.karyogamy.get(square)
    if markers is None:
        return

    stacked_colors = _stacked_colors(pawns_on_square)
    kept = [k for k in _settle(markers) if k.color in stacked_colors]
    if kept:
        board.karyogamy[square] = kept
    else:
        del board.karyogamy[square]


def _settle(markers: list) -> list:
    return [
        replace(m, type=AnimationType.SETTLED)
        for m in markers
        if m.type != AnimationType.REMOVED
    ]


# --- HELPERS ---
def _find_marker(
    markers: Optional[list], pawn: Pawn
) -> Optional[MitosisMarker | KaryogamyMarker]:
    if not markers:
        return None
    return next(
        (m for m in markers if m.color == pawn.color and m.index == pawn.index), None
    )


def _has_multiple_colors(pawns: list[Pawn]) -> bool:
    return len({p.color for p in pawns}) > 1


def _stacked_colors(pawns: list[Pawn]) -> list[Color]:
    """Colors with at least two pawns in the list, in Color order."""
    return [color for color in Color if sum(p.color == color for p in pawns) > 1]
