from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from .board import Board, BLACK, WHITE, Cell, Coord, color_name


@dataclass(frozen=True)
class Move:
    coord: Coord
    color: Cell


@dataclass(frozen=True)
class Scores:
    black: int = 0
    white: int = 0

    @classmethod
    def of(cls, board: Board) -> 'Scores':
        """Counts stones per color; scores are always derived, never stored independently."""
        return cls(black=board.count(BLACK), white=board.count(WHITE))

    def winner(self) -> str:
        """'black', 'white' or 'draw' by stone count."""
        if self.black > self.white:
            return color_name(BLACK)
        if self.white > self.black:
            return color_name(WHITE)
        return "draw"

    def as_dict(self) -> Dict[str, int]:
        return {"black": self.black, "white": self.white}


@dataclass
class GameState:
    """Represents the dynamic state of one game: the board, whose turn it is and whether play continues."""
    board: Board = field(default_factory=Board)
    turn: Cell = BLACK
    last_move: Optional[Move] = None
    active: bool = True
    scores: Scores = field(default_factory=Scores)

    def recompute_scores(self) -> None:
        self.scores = Scores.of(self.board)

    def snapshot(self) -> 'GameState':
        """Independent copy handed out to callers; mutating it never touches the session."""
        return GameState(
            board=self.board.copy(),
            turn=self.turn,
            last_move=self.last_move,
            active=self.active,
            scores=self.scores,
        )
