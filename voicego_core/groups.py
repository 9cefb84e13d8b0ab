from __future__ import annotations

from typing import List, Set

from .board import Board, Cell, Coord, EMPTY, opponent_of
from .errors import InvalidArgument


def _stone_color(board: Board, coord: Coord) -> Cell:
    color = board.get(coord)
    if color == EMPTY:
        raise InvalidArgument(f"no stone at {coord}")
    return color


def has_liberty(board: Board, coord: Coord) -> bool:
    """
    Reports whether the group containing the stone at coord touches at least one empty cell.
    Flood fill over same-colored neighbours with an explicit stack; stops at the first liberty.
    """
    color = _stone_color(board, coord)
    visited: Set[Coord] = {coord}
    stack: List[Coord] = [coord]
    while stack:
        current = stack.pop()
        for nxt in board.adjacent(current):
            cell = board.get(nxt)
            if cell == EMPTY:
                return True
            if cell == color and nxt not in visited:
                visited.add(nxt)
                stack.append(nxt)
    return False


def find_group(board: Board, coord: Coord) -> List[Coord]:
    """Collects the full connected group containing coord, in discovery order."""
    color = _stone_color(board, coord)
    group: List[Coord] = []
    visited: Set[Coord] = {coord}
    stack: List[Coord] = [coord]
    while stack:
        current = stack.pop()
        group.append(current)
        for nxt in board.adjacent(current):
            if nxt not in visited and board.get(nxt) == color:
                visited.add(nxt)
                stack.append(nxt)
    return group


def liberties(board: Board, coord: Coord) -> Set[Coord]:
    """All empty cells adjacent to the group containing coord."""
    out: Set[Coord] = set()
    for stone in find_group(board, coord):
        for nxt in board.adjacent(stone):
            if board.get(nxt) == EMPTY:
                out.add(nxt)
    return out


def capture_group(board: Board, coord: Coord) -> List[Coord]:
    """Empties every cell of the group containing coord and returns the removed stones."""
    group = find_group(board, coord)
    for stone in group:
        board.set(stone, EMPTY)
    return group


def apply_captures(board: Board, placed_color: Cell) -> List[Coord]:
    """
    Removes every opposing group left without a liberty after a stone of placed_color was played.
    Cells are scanned row-major so that several dead groups all go in a single pass.
    The mover's own groups are not examined: self-capture is allowed.
    """
    target = opponent_of(placed_color)
    captured: List[Coord] = []
    for coord in board.coords():
        if board.get(coord) == target and not has_liberty(board, coord):
            captured.extend(capture_group(board, coord))
    return captured
