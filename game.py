from __future__ import annotations

# Facade module that re-exports VoiceGo core functionality.
# Used by the Flask app and tests; single-responsibility modules live under voicego_core/*.

from voicego_core.board import (  # noqa: F401
    BOARD_SIZE,
    EMPTY,
    BLACK,
    WHITE,
    Board,
    Cell,
    Coord,
    coord_label,
    label_to_coord,
    color_name,
    in_bounds,
    opponent_of,
)
from voicego_core.state import GameState, Move, Scores  # noqa: F401
from voicego_core.groups import (  # noqa: F401
    has_liberty,
    find_group,
    liberties,
    capture_group,
    apply_captures,
)
from voicego_core.rules import legal_moves, is_legal, check_move  # noqa: F401
from voicego_core.parser import (  # noqa: F401
    HELP_TEXT,
    Command,
    interpret,
    normalize,
    parse,
)
from voicego_core.ai import STRATEGIES, choose_move, score_move  # noqa: F401
from voicego_core.errors import (  # noqa: F401
    VoiceGoError,
    MoveError,
    OutOfBounds,
    CellOccupied,
    NotYourTurn,
    GameInactive,
    UnparsableCommand,
    NoLegalMoves,
    InvalidArgument,
)
from voicego_core.session import (  # noqa: F401
    AWAITING_PLAYER,
    AWAITING_OPPONENT,
    TERMINAL,
    GameSession,
    MoveOutcome,
    TranscriptOutcome,
    new_session,
    submit_coordinate,
    submit_transcript,
    current_state,
    reset,
)


def main() -> None:
    # CLI driver delegated to voicego_core.cli
    from voicego_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
