import random
import unittest
from unittest.mock import patch

from game import (
    AWAITING_OPPONENT,
    AWAITING_PLAYER,
    TERMINAL,
    BLACK,
    EMPTY,
    WHITE,
    Board,
    CellOccupied,
    GameInactive,
    GameSession,
    GameState,
    Move,
    NotYourTurn,
    OutOfBounds,
    Scores,
    UnparsableCommand,
    current_state,
    new_session,
    reset,
    submit_coordinate,
    submit_transcript,
)

_SYM = {'.': EMPTY, 'X': BLACK, 'O': WHITE}


def _state(rows, turn=BLACK, active=True):
    board = Board.from_rows([[_SYM[ch] for ch in row] for row in rows])
    return GameState(board=board, turn=turn, active=active)


class TestGameSession(unittest.TestCase):
    def setUp(self):
        self.session = GameSession(strategy="scored", rng=random.Random(7))

    def test_given_new_session_when_black_plays_centre_then_one_stone_and_white_to_move(self):
        outcome = self.session.submit_coordinate(2, 2)
        self.assertEqual(outcome.applied, Move(coord=(2, 2), color=BLACK))
        self.assertEqual(outcome.captured, [])
        self.assertFalse(outcome.terminal)
        self.assertIsNone(outcome.winner)

        state = self.session.current_state()
        self.assertEqual(state.board.get((2, 2)), BLACK)
        self.assertEqual(state.board.count(BLACK), 1)
        self.assertEqual(state.board.count(WHITE), 0)
        self.assertEqual(state.scores, Scores(black=1, white=0))
        self.assertEqual(state.turn, WHITE)
        self.assertTrue(state.active)
        self.assertEqual(state.last_move, Move(coord=(2, 2), color=BLACK))
        self.assertEqual(self.session.phase, AWAITING_OPPONENT)

    def test_given_player_moved_when_opponent_replies_then_white_stone_and_black_to_move(self):
        self.session.submit_coordinate(2, 2)
        outcome = self.session.opponent_move()
        self.assertIsNotNone(outcome.applied)
        self.assertEqual(outcome.applied.color, WHITE)
        self.assertNotEqual(outcome.applied.coord, (2, 2))
        state = self.session.current_state()
        self.assertEqual(state.board.get(outcome.applied.coord), WHITE)
        self.assertEqual(state.scores, Scores(black=1, white=1))
        self.assertEqual(state.turn, BLACK)
        self.assertEqual(self.session.phase, AWAITING_PLAYER)

    def test_given_wrong_phase_when_moving_then_not_your_turn_and_state_unchanged(self):
        with self.assertRaises(NotYourTurn):
            self.session.opponent_move()
        self.session.submit_coordinate(0, 0)
        before = self.session.current_state()
        with self.assertRaises(NotYourTurn):
            self.session.submit_coordinate(1, 1)
        self.assertEqual(self.session.current_state(), before)

    def test_given_occupied_cell_when_submitted_then_rejected_and_board_unchanged(self):
        self.session.submit_coordinate(2, 2)
        reply = self.session.opponent_move()
        before = self.session.current_state()
        for coord in [(2, 2), reply.applied.coord]:
            with self.assertRaises(CellOccupied):
                self.session.submit_coordinate(*coord)
            after = self.session.current_state()
            self.assertEqual(after.board.grid, before.board.grid)
            self.assertEqual(after, before)
        self.assertEqual(self.session.phase, AWAITING_PLAYER)

    def test_given_off_board_coordinate_when_submitted_then_out_of_bounds(self):
        before = self.session.current_state()
        with self.assertRaises(OutOfBounds):
            self.session.submit_coordinate(5, 5)
        with self.assertRaises(OutOfBounds):
            self.session.submit_coordinate(-1, 0)
        self.assertEqual(self.session.current_state(), before)

    def test_given_black_surrounded_on_three_sides_when_white_closes_then_black_captured(self):
        state = _state([
            '.....',
            '..O..',
            '.OXO.',
            '.....',
            '.....',
        ], turn=WHITE)
        session = GameSession.from_state(state, strategy="scored", rng=random.Random(1))
        with patch("voicego_core.session.choose_move", return_value=(3, 2)):
            outcome = session.opponent_move()
        self.assertEqual(outcome.applied, Move(coord=(3, 2), color=WHITE))
        self.assertEqual(outcome.captured, [(2, 2)])
        after = session.current_state()
        self.assertEqual(after.board.get((2, 2)), EMPTY)
        self.assertEqual(after.scores, Scores(black=0, white=4))
        self.assertEqual(outcome.scores, Scores(black=0, white=4))

    def test_given_lone_white_in_corner_when_black_takes_last_liberty_then_captured_same_move(self):
        state = _state([
            'OX...',
            '.....',
            '.....',
            '.....',
            '.....',
        ])
        session = GameSession.from_state(state, rng=random.Random(1))
        outcome = session.submit_coordinate(1, 0)
        self.assertEqual(outcome.captured, [(0, 0)])
        self.assertEqual(outcome.scores, Scores(black=2, white=0))
        self.assertEqual(session.current_state().board.get((0, 0)), EMPTY)

    def test_given_surrounded_point_when_black_plays_into_it_then_suicide_allowed(self):
        state = _state([
            '.O...',
            'O....',
            '.....',
            '.....',
            '.....',
        ])
        session = GameSession.from_state(state, rng=random.Random(1))
        outcome = session.submit_coordinate(0, 0)
        self.assertEqual(outcome.captured, [])
        self.assertEqual(session.current_state().board.get((0, 0)), BLACK)

    def test_given_last_cell_filled_with_opposing_stones_dead_when_black_plays_then_all_captured(self):
        state = _state([
            '.OOOO',
            'OOOOO',
            'OOOOO',
            'OOOOO',
            'OOOOO',
        ])
        session = GameSession.from_state(state, rng=random.Random(1))
        outcome = session.submit_coordinate(0, 0)
        self.assertEqual(len(outcome.captured), 24)
        self.assertEqual(outcome.scores, Scores(black=1, white=0))
        self.assertFalse(outcome.terminal)
        self.assertEqual(len(session.legal_moves()), 24)

    def test_given_full_board_after_player_move_when_opponent_called_then_terminal_with_winner(self):
        state = _state([
            'XXXXX',
            'XXXXX',
            'XXXXX',
            'XXXXX',
            'XXXX.',
        ])
        session = GameSession.from_state(state, rng=random.Random(1))
        session.submit_coordinate(4, 4)
        self.assertEqual(session.phase, AWAITING_OPPONENT)
        outcome = session.opponent_move()
        self.assertIsNone(outcome.applied)
        self.assertTrue(outcome.terminal)
        self.assertEqual(outcome.winner, "black")
        self.assertEqual(session.phase, TERMINAL)
        self.assertFalse(session.current_state().active)
        self.assertEqual(session.winner(), "black")
        self.assertEqual(session.legal_moves(), [])

    def test_given_opponent_fills_last_cell_when_replying_then_terminal_white_wins(self):
        state = _state([
            '.OOOO',
            'OOOOO',
            'OOOOO',
            'OOOOO',
            'OOOOO',
        ], turn=WHITE)
        session = GameSession.from_state(state, rng=random.Random(1))
        outcome = session.opponent_move()
        self.assertEqual(outcome.applied, Move(coord=(0, 0), color=WHITE))
        self.assertTrue(outcome.terminal)
        self.assertEqual(outcome.winner, "white")
        self.assertEqual(outcome.scores, Scores(black=0, white=25))

    def test_given_terminal_game_when_moving_then_game_inactive_until_reset(self):
        state = _state([
            'XXXXX',
            'XXXXX',
            'XXXXX',
            'XXXXX',
            'XXXXX',
        ], turn=WHITE)
        session = GameSession.from_state(state, rng=random.Random(1))
        session.opponent_move()
        with self.assertRaises(GameInactive):
            session.submit_coordinate(0, 0)
        with self.assertRaises(GameInactive):
            session.opponent_move()
        with self.assertRaises(GameInactive):
            session.submit_transcript("b3")
        session.reset()
        self.assertEqual(session.phase, AWAITING_PLAYER)
        session.submit_coordinate(0, 0)

    def test_given_equal_counts_when_scoring_then_draw(self):
        self.assertEqual(Scores(black=3, white=3).winner(), "draw")
        self.assertEqual(Scores(black=4, white=3).winner(), "black")
        self.assertEqual(Scores(black=0, white=1).winner(), "white")

    def test_given_no_mutation_when_state_read_twice_then_identical_snapshots(self):
        self.session.submit_coordinate(1, 3)
        a = self.session.current_state()
        b = self.session.current_state()
        self.assertEqual(a, b)
        self.assertIsNot(a.board, b.board)
        a.board.set((0, 0), WHITE)
        self.assertEqual(self.session.current_state(), b)

    def test_given_played_game_when_reset_then_fresh_state(self):
        self.session.submit_coordinate(2, 2)
        self.session.opponent_move()
        self.session.submit_coordinate(0, 0)
        self.session.reset()
        state = self.session.current_state()
        self.assertEqual(state.board.count(EMPTY), 25)
        self.assertEqual(state.turn, BLACK)
        self.assertEqual(state.scores, Scores(black=0, white=0))
        self.assertTrue(state.active)
        self.assertIsNone(state.last_move)
        self.assertEqual(state, GameState())

    def test_given_transcript_when_submitted_then_parsed_and_played(self):
        result = self.session.submit_transcript("place at b3")
        self.assertEqual(result.command.coord, (2, 1))
        self.assertEqual(result.outcome.applied, Move(coord=(2, 1), color=BLACK))
        self.assertEqual(self.session.current_state().board.get((2, 1)), BLACK)

    def test_given_help_transcript_when_submitted_then_no_move(self):
        before = self.session.current_state()
        result = self.session.submit_transcript("help me please")
        self.assertEqual(result.command.kind, "help")
        self.assertIsNone(result.outcome)
        self.assertEqual(self.session.current_state(), before)

    def test_given_garbage_or_off_board_transcript_when_submitted_then_unparsable(self):
        with self.assertRaises(UnparsableCommand) as ctx:
            self.session.submit_transcript("xyz")
        self.assertEqual(ctx.exception.command.kind, "unknown")
        with self.assertRaises(UnparsableCommand) as ctx:
            self.session.submit_transcript("b9")
        self.assertEqual(ctx.exception.command.kind, "out_of_range")
        self.assertEqual(self.session.current_state(), GameState())

    def test_given_transcript_on_opponents_turn_when_submitted_then_not_your_turn(self):
        self.session.submit_transcript("c3")
        with self.assertRaises(NotYourTurn):
            self.session.submit_transcript("d4")

    def test_given_same_seed_when_two_sessions_play_then_same_replies(self):
        a = GameSession(rng=random.Random(42), strategy="scored")
        b = GameSession(rng=random.Random(42), strategy="scored")
        for coord in [(2, 2), (0, 0), (4, 4)]:
            if a.current_state().board.get(coord) != EMPTY:
                continue
            a.submit_coordinate(*coord)
            b.submit_coordinate(*coord)
            self.assertEqual(a.opponent_move(), b.opponent_move())

    def test_given_module_functions_when_used_then_mirror_methods(self):
        session = new_session(strategy="classic", rng=random.Random(0))
        outcome = submit_coordinate(session, 0, 0)
        self.assertEqual(outcome.applied.coord, (0, 0))
        self.assertEqual(session.opponent_move().applied.coord, (2, 2))
        result = submit_transcript(session, "e5")
        self.assertEqual(result.outcome.applied.coord, (4, 4))
        self.assertEqual(current_state(session).board.count(BLACK), 2)
        reset(session)
        self.assertEqual(current_state(session), GameState())

    def test_given_unknown_strategy_when_creating_session_then_value_error(self):
        with self.assertRaises(ValueError):
            GameSession(strategy="minimax")


if __name__ == "__main__":
    unittest.main(verbosity=2)
