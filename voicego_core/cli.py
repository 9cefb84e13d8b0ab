from __future__ import annotations

import argparse
import random
from typing import Optional, Sequence

from . import config
from .ai import STRATEGIES
from .board import coord_label
from .errors import MoveError
from .parser import HELP_TEXT
from .session import AWAITING_OPPONENT, TERMINAL, GameSession, MoveOutcome


def _describe(who: str, outcome: MoveOutcome) -> str:
    parts = []
    if outcome.applied is not None:
        parts.append(f"{who} {coord_label(outcome.applied.coord)}")
    if outcome.captured:
        parts.append("captures " + ", ".join(coord_label(c) for c in outcome.captured))
    parts.append(f"score black {outcome.scores.black} / white {outcome.scores.white}")
    if outcome.terminal:
        parts.append("game over: " + ("draw" if outcome.winner == "draw" else f"{outcome.winner} wins"))
    return "; ".join(parts)


def _show(session: GameSession) -> None:
    state = session.current_state()
    last = state.last_move.coord if state.last_move else None
    print(state.board.pretty(last))


def _play_auto(session: GameSession, max_plies: int) -> None:
    """Demo mode: random moves for black against the opponent, stopped after max_plies."""
    plies = 0
    while session.phase != TERMINAL and plies < max_plies:
        plies += 1
        if session.phase == AWAITING_OPPONENT:
            print(_describe("White plays", session.opponent_move()))
        else:
            moves = session.legal_moves()
            r, c = moves[session.rng.randrange(len(moves))]
            print(_describe("Black plays", session.submit_coordinate(r, c)))
    _show(session)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='5x5 capture Go against a scripted opponent, driven by typed commands')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the opponent (default: VOICEGO_SEED)')
    parser.add_argument('--strategy', choices=sorted(STRATEGIES), default=None,
                        help='Opponent strategy (default: VOICEGO_STRATEGY or scored)')
    parser.add_argument('--auto', action='store_true', help='Let random moves play black for a quick demo')
    parser.add_argument('--max-plies', type=int, default=200, help='Stop an --auto game after this many moves')
    args = parser.parse_args(argv)

    config.configure_logging()
    seed = args.seed if args.seed is not None else config.seed()
    session = GameSession(strategy=args.strategy, rng=random.Random(seed))

    if args.auto:
        _play_auto(session, args.max_plies)
        return

    print('You play black (X). ' + HELP_TEXT)
    print("Type 'new' for a fresh game or 'quit' to leave.")
    _show(session)
    while True:
        try:
            text = input('Your move: ').strip()
        except EOFError:
            print()
            return
        if text.lower() in ('quit', 'exit'):
            return
        if text.lower() == 'new':
            session.reset()
            _show(session)
            continue
        if session.phase == TERMINAL:
            print("The game is over. Type 'new' to play again.")
            continue
        try:
            result = session.submit_transcript(text)
        except MoveError as e:
            print(f'{e}. Try again.')
            continue
        if result.outcome is None:
            print(HELP_TEXT)
            continue
        print(_describe("You play", result.outcome))
        print(_describe("White plays", session.opponent_move()))
        _show(session)


if __name__ == '__main__':
    main()
