from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import OutOfBounds

Cell = int  # EMPTY, BLACK or WHITE
Coord = Tuple[int, int]

EMPTY: Cell = 0
BLACK: Cell = 1
WHITE: Cell = 2

BOARD_SIZE = 5
COLUMN_LETTERS = "ABCDE"

_SYMBOLS = {EMPTY: ".", BLACK: "X", WHITE: "O"}


def opponent_of(color: Cell) -> Cell:
    """Returns the opposing stone color."""
    if color == BLACK:
        return WHITE
    if color == WHITE:
        return BLACK
    raise ValueError(f"not a stone color: {color!r}")


def color_name(color: Cell) -> str:
    return {BLACK: "black", WHITE: "white"}[color]


def in_bounds(coord: Coord) -> bool:
    r, c = coord
    return 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE


def coord_label(coord: Coord) -> str:
    """Formats a coordinate the way players say it, e.g. (2, 1) -> 'B3'."""
    r, c = coord
    return f"{COLUMN_LETTERS[c]}{r + 1}"


def label_to_coord(label: str) -> Coord:
    """Inverse of coord_label; accepts either letter case."""
    text = label.strip().upper()
    if len(text) != 2 or text[0] not in COLUMN_LETTERS or not text[1].isdigit():
        raise ValueError(f"bad coordinate label: {label!r}")
    coord = (int(text[1]) - 1, COLUMN_LETTERS.index(text[0]))
    if not in_bounds(coord):
        raise OutOfBounds(coord)
    return coord


@dataclass
class Board:
    """The 5x5 grid of cell states, stored row-major. Holds no other state."""
    grid: List[Cell] = field(default_factory=lambda: [EMPTY] * (BOARD_SIZE * BOARD_SIZE))

    def __post_init__(self) -> None:
        if len(self.grid) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"board grid must hold {BOARD_SIZE * BOARD_SIZE} cells, got {len(self.grid)}")
        for cell in self.grid:
            if cell not in (EMPTY, BLACK, WHITE):
                raise ValueError(f"invalid cell value: {cell!r}")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> 'Board':
        """Builds a board from a list of rows, top row first."""
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError(f"expected {BOARD_SIZE} rows of {BOARD_SIZE} cells")
        return cls(grid=[cell for row in rows for cell in row])

    def index(self, r: int, c: int) -> int:
        """Calculates the 1D index for a given row and column."""
        return r * BOARD_SIZE + c

    def get(self, coord: Coord) -> Cell:
        if not in_bounds(coord):
            raise OutOfBounds(coord)
        return self.grid[self.index(*coord)]

    def set(self, coord: Coord, cell: Cell) -> None:
        """Writes a cell. Legality is the caller's job; only bounds are checked."""
        if not in_bounds(coord):
            raise OutOfBounds(coord)
        if cell not in (EMPTY, BLACK, WHITE):
            raise ValueError(f"invalid cell value: {cell!r}")
        self.grid[self.index(*coord)] = cell

    def adjacent(self, coord: Coord) -> List[Coord]:
        """In-bounds orthogonal neighbours, always in up, down, left, right order."""
        r, c = coord
        candidates = [(r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)]
        return [n for n in candidates if in_bounds(n)]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board, row-major."""
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                yield (r, c)

    def empty_coords(self) -> List[Coord]:
        return [coord for coord in self.coords() if self.get(coord) == EMPTY]

    def count(self, cell: Cell) -> int:
        return sum(1 for v in self.grid if v == cell)

    def copy(self) -> 'Board':
        return Board(grid=list(self.grid))

    def rows(self) -> List[List[Cell]]:
        return [self.grid[r * BOARD_SIZE:(r + 1) * BOARD_SIZE] for r in range(BOARD_SIZE)]

    def pretty(self, last: Optional[Coord] = None) -> str:
        """Generates a human-readable string of the board, marking the last move with brackets."""
        lines: List[str] = ["   " + "  ".join(COLUMN_LETTERS)]
        for r in range(BOARD_SIZE):
            row: List[str] = []
            for c in range(BOARD_SIZE):
                sym = _SYMBOLS[self.get((r, c))]
                row.append(f"[{sym}]" if last == (r, c) else f" {sym} ")
            lines.append(f"{r + 1} " + "".join(row).rstrip())
        return "\n".join(lines)
