from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence

from .board import BOARD_SIZE, Board, Coord, EMPTY
from .errors import NoLegalMoves

logger = logging.getLogger(__name__)

CENTER: Coord = (BOARD_SIZE // 2, BOARD_SIZE // 2)
CORNERS = ((0, 0), (0, BOARD_SIZE - 1), (BOARD_SIZE - 1, 0), (BOARD_SIZE - 1, BOARD_SIZE - 1))

Strategy = Callable[[Board, Sequence[Coord], random.Random], Coord]


def score_move(board: Board, coord: Coord, rng: random.Random) -> float:
    """Random jitter plus a pull towards the centre and towards existing stones."""
    r, c = coord
    center_distance = abs(r - CENTER[0]) + abs(c - CENTER[1])
    nearby = sum(1 for n in board.adjacent(coord) if board.get(n) != EMPTY)
    return rng.random() * 10 + (4 - center_distance) * 2 + nearby * 3


def _scored(board: Board, moves: Sequence[Coord], rng: random.Random) -> Coord:
    scored = [(score_move(board, m, rng), m) for m in moves]
    # max() keeps the first maximal element on an exact tie
    best_score, best = max(scored, key=lambda it: it[0])
    logger.debug("scored opponent picked %s (%.2f) from %d moves", best, best_score, len(moves))
    return best


def _classic(board: Board, moves: Sequence[Coord], rng: random.Random) -> Coord:
    """Centre first, then the first free corner, otherwise anything."""
    if CENTER in moves:
        return CENTER
    corners = [m for m in moves if m in CORNERS]
    if corners:
        return corners[0]
    return moves[rng.randrange(len(moves))]


STRATEGIES: Dict[str, Strategy] = {
    "scored": _scored,
    "classic": _classic,
}
DEFAULT_STRATEGY = "scored"


def get_strategy(name: Optional[str]) -> Strategy:
    if name is not None and not isinstance(name, str):
        raise ValueError(f"strategy must be a name, got {name!r}")
    key = (name or DEFAULT_STRATEGY).lower()
    try:
        return STRATEGIES[key]
    except KeyError:
        raise ValueError(f"unknown strategy {name!r}; expected one of {sorted(STRATEGIES)}") from None


def choose_move(
    board: Board,
    legal_moves: Sequence[Coord],
    rng: Optional[random.Random] = None,
    strategy: Optional[str] = None,
) -> Coord:
    """Picks the opponent's reply from legal_moves. The caller must end the game instead of asking on a full board."""
    if not legal_moves:
        raise NoLegalMoves()
    moves: List[Coord] = list(legal_moves)
    pick = get_strategy(strategy)(board, moves, rng or random.Random())
    if pick not in moves:
        raise RuntimeError(f"strategy returned {pick} outside the legal set")
    return pick
