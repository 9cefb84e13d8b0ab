from __future__ import annotations

from typing import List

from .board import Board, Coord, EMPTY, in_bounds
from .errors import CellOccupied, GameInactive, OutOfBounds
from .state import GameState


def legal_moves(board: Board) -> List[Coord]:
    """Every empty cell, row-major. Suicide is allowed, so emptiness is the only board rule."""
    return board.empty_coords()


def is_legal(state: GameState, coord: Coord) -> bool:
    """True iff the coordinate is on the board, the game is running and the cell is empty."""
    if not in_bounds(coord) or not state.active:
        return False
    return state.board.get(coord) == EMPTY


def check_move(state: GameState, coord: Coord) -> None:
    """Raising form of is_legal; whose turn it is gets checked by the session."""
    if not state.active:
        raise GameInactive()
    if not in_bounds(coord):
        raise OutOfBounds(coord)
    if state.board.get(coord) != EMPTY:
        raise CellOccupied(coord)
