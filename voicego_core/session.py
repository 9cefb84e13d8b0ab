"""
Turn state machine for one game against the scripted opponent.

The human always plays black and moves first. A player move and the opponent's reply are two
separate transitions so the caller can pause between them (the "thinking" delay); nothing happens
inside the session during that pause. A session is not thread-safe: callers sharing one across
threads must serialize access themselves.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from . import config
from .ai import choose_move, get_strategy
from .board import BLACK, WHITE, Cell, Coord, coord_label, color_name, opponent_of
from .errors import GameInactive, MoveError, NotYourTurn, UnparsableCommand
from .groups import apply_captures
from .parser import HELP, Command, interpret
from .rules import check_move, legal_moves
from .state import GameState, Move, Scores

logger = logging.getLogger(__name__)

AWAITING_PLAYER = "awaiting_player"
AWAITING_OPPONENT = "awaiting_opponent"
TERMINAL = "terminal"

PLAYER_COLOR = BLACK
OPPONENT_COLOR = WHITE


@dataclass(frozen=True)
class MoveOutcome:
    """Result of one transition. applied is None when the opponent found the board full and ended the game."""
    applied: Optional[Move]
    captured: List[Coord] = field(default_factory=list)
    scores: Scores = field(default_factory=Scores)
    terminal: bool = False
    winner: Optional[str] = None  # 'black', 'white' or 'draw' once terminal


@dataclass(frozen=True)
class TranscriptOutcome:
    command: Command
    outcome: Optional[MoveOutcome] = None  # None for help requests


class GameSession:
    def __init__(
        self,
        strategy: Optional[str] = None,
        rng: Optional[random.Random] = None,
        state: Optional[GameState] = None,
    ) -> None:
        self.strategy = strategy or config.strategy()
        get_strategy(self.strategy)
        self.rng = rng if rng is not None else random.Random(config.seed())
        self._state = state if state is not None else GameState()

    @classmethod
    def from_state(
        cls,
        state: GameState,
        strategy: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ) -> 'GameSession':
        """Resumes play from a previously captured state (used by the stateless HTTP adapter)."""
        own = state.snapshot()
        own.recompute_scores()
        return cls(strategy=strategy, rng=rng, state=own)

    @property
    def phase(self) -> str:
        if not self._state.active:
            return TERMINAL
        return AWAITING_PLAYER if self._state.turn == PLAYER_COLOR else AWAITING_OPPONENT

    def current_state(self) -> GameState:
        return self._state.snapshot()

    def legal_moves(self) -> List[Coord]:
        if not self._state.active:
            return []
        return legal_moves(self._state.board)

    def winner(self) -> Optional[str]:
        return None if self._state.active else self._state.scores.winner()

    def reset(self) -> None:
        self._state = GameState()
        logger.debug("session reset")

    def _place(self, coord: Coord, color: Cell) -> List[Coord]:
        board = self._state.board
        board.set(coord, color)
        captured = apply_captures(board, color)
        self._state.last_move = Move(coord=coord, color=color)
        self._state.turn = opponent_of(color)
        self._state.recompute_scores()
        if captured:
            logger.debug("%s at %s captured %d stone(s)", color_name(color), coord_label(coord), len(captured))
        return captured

    def _finish(self) -> str:
        self._state.active = False
        winner = self._state.scores.winner()
        logger.info("game over: black %d, white %d, winner %s",
                    self._state.scores.black, self._state.scores.white, winner)
        return winner

    def submit_coordinate(self, row: int, col: int) -> MoveOutcome:
        """Plays a black stone for the human. Any rejection leaves the session untouched."""
        coord = (row, col)
        phase = self.phase
        if phase == TERMINAL:
            raise GameInactive()
        if phase == AWAITING_OPPONENT:
            raise NotYourTurn()
        try:
            check_move(self._state, coord)
        except MoveError as e:
            logger.info("rejected player move %s: %s", coord, e)
            raise
        captured = self._place(coord, PLAYER_COLOR)
        return MoveOutcome(
            applied=self._state.last_move,
            captured=captured,
            scores=self._state.scores,
        )

    def submit_transcript(self, text: str) -> TranscriptOutcome:
        """Resolves a spoken or typed command and plays it. Help requests change nothing."""
        command = interpret(text)
        if command.kind == HELP:
            return TranscriptOutcome(command=command)
        if command.coord is None:
            logger.info("could not resolve %r (%s)", text, command.kind)
            raise UnparsableCommand(text, command)
        outcome = self.submit_coordinate(*command.coord)
        return TranscriptOutcome(command=command, outcome=outcome)

    def opponent_move(self) -> MoveOutcome:
        """Lets the scripted opponent reply, or ends the game when the board has no empty cell."""
        phase = self.phase
        if phase == TERMINAL:
            raise GameInactive()
        if phase == AWAITING_PLAYER:
            raise NotYourTurn("it is the player's turn, not the opponent's")

        moves = legal_moves(self._state.board)
        if not moves:
            winner = self._finish()
            return MoveOutcome(applied=None, scores=self._state.scores, terminal=True, winner=winner)

        coord = choose_move(self._state.board, moves, rng=self.rng, strategy=self.strategy)
        captured = self._place(coord, OPPONENT_COLOR)
        winner = None
        if not legal_moves(self._state.board):
            winner = self._finish()
        return MoveOutcome(
            applied=self._state.last_move,
            captured=captured,
            scores=self._state.scores,
            terminal=winner is not None,
            winner=winner,
        )


def new_session(strategy: Optional[str] = None, rng: Optional[random.Random] = None) -> GameSession:
    return GameSession(strategy=strategy, rng=rng)


def submit_coordinate(session: GameSession, row: int, col: int) -> MoveOutcome:
    return session.submit_coordinate(row, col)


def submit_transcript(session: GameSession, text: str) -> TranscriptOutcome:
    return session.submit_transcript(text)


def current_state(session: GameSession) -> GameState:
    return session.current_state()


def reset(session: GameSession) -> None:
    session.reset()
