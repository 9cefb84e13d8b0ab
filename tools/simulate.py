import argparse
import random
import sys
import time
from collections import Counter
from typing import Tuple
sys.path.append('.')
import game  # type: ignore


def play_one(seed: int, strategy: str) -> Tuple[str, int, int]:
    """Random black player against the scripted opponent. Returns (winner, plies, stones captured)."""
    rng = random.Random(seed)
    session = game.GameSession(strategy=strategy, rng=rng)
    plies = captured = 0
    while session.phase != game.TERMINAL:
        if session.phase == game.AWAITING_OPPONENT:
            outcome = session.opponent_move()
        else:
            moves = session.legal_moves()
            outcome = session.submit_coordinate(*moves[rng.randrange(len(moves))])
        if outcome.applied is not None:
            plies += 1
        captured += len(outcome.captured)
        # Captures can keep a game going; cap runaway games
        if plies > 500:
            break
    return session.winner() or 'unfinished', plies, captured


def main():
    parser = argparse.ArgumentParser(description='Play random black games against the opponent and tally results')
    parser.add_argument('--games', type=int, default=200)
    parser.add_argument('--seed', type=int, default=0)
    parser.add_argument('--strategy', choices=sorted(game.STRATEGIES), default='scored')
    args = parser.parse_args()

    random.seed(args.seed)
    results = Counter()
    total_plies = total_captured = 0
    t0 = time.time()
    for _ in range(args.games):
        winner, plies, captured = play_one(random.randrange(1_000_000), args.strategy)
        results[winner] += 1
        total_plies += plies
        total_captured += captured
    took = int((time.time() - t0) * 1000)
    print(f"{args.games} games with strategy={args.strategy} in {took}ms")
    for k in ('black', 'white', 'draw', 'unfinished'):
        print(f"  {k:>10}: {results[k]}")
    print(f"  avg plies={total_plies / max(1, args.games):.1f} avg captured={total_captured / max(1, args.games):.1f}")


if __name__ == '__main__':
    main()
