from __future__ import annotations

from typing import Any, Optional, Tuple


class VoiceGoError(Exception):
    """Base class for every error raised by the game core."""
    kind = "error"


class MoveError(VoiceGoError):
    """A move or command the player can recover from by retrying."""


class OutOfBounds(MoveError, IndexError):
    kind = "out_of_bounds"

    def __init__(self, coord: Tuple[int, int]) -> None:
        self.coord = coord
        super().__init__(f"coordinate {coord} is outside the 5x5 board")


class CellOccupied(MoveError):
    kind = "cell_occupied"

    def __init__(self, coord: Tuple[int, int]) -> None:
        self.coord = coord
        super().__init__(f"cell {coord} is already occupied")


class NotYourTurn(MoveError):
    kind = "not_your_turn"

    def __init__(self, message: str = "it is not the player's turn") -> None:
        super().__init__(message)


class GameInactive(MoveError):
    kind = "game_inactive"

    def __init__(self, message: str = "the game is over; start a new game") -> None:
        super().__init__(message)


class UnparsableCommand(MoveError):
    kind = "unparsable_command"

    def __init__(self, text: str, command: Optional[Any] = None) -> None:
        self.text = text
        # The parsed Command, so callers can tell "out of range" from "not understood".
        self.command = command
        super().__init__(f"could not resolve a coordinate from {text!r}")


class NoLegalMoves(VoiceGoError, RuntimeError):
    """The opponent was asked to move on a full board. Indicates a session bug."""
    kind = "no_legal_moves"

    def __init__(self, message: str = "no legal moves available") -> None:
        super().__init__(message)


class InvalidArgument(VoiceGoError, ValueError):
    kind = "invalid_argument"
