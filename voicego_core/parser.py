"""
Turns free-form move commands ("b3", "row 2 column 4", "um, put at c 1 please") into board coordinates.

Rules are tried in order and the first one that both matches and lands on the board wins.
Rules overlap on purpose; their order sets precedence.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .board import Coord, in_bounds

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Say a position like A1, B2, or C3 to place your stone. "
    "You can also say 'row 1 column 2' or 'put at d4'."
)

FILLER_WORDS = ("um", "uh", "the", "a", "an", "please", "go", "to", "at", "on", "in")

_FILLER_RE = re.compile(r"\b(?:" + "|".join(FILLER_WORDS) + r")\b")
_PUNCT_RE = re.compile(r"[^\w\s]")
_SPACE_RE = re.compile(r"\s+")

MOVE = "move"
HELP = "help"
OUT_OF_RANGE = "out_of_range"
UNKNOWN = "unknown"


@dataclass(frozen=True)
class Command:
    """What a transcript resolved to. coord is set only for kind == 'move'."""
    kind: str
    text: str
    normalized: str = ""
    coord: Optional[Coord] = None
    rule: Optional[str] = None


def _letter_digit(m: re.Match) -> Coord:
    # letter names the column, digit the 1-based row
    return int(m.group(2)) - 1, ord(m.group(1)) - ord("a")


def _digit_digit(m: re.Match) -> Coord:
    return int(m.group(1)) - 1, int(m.group(2)) - 1


def _glued(m: re.Match) -> Coord:
    token = m.group(1)
    return int(token[1]) - 1, ord(token[0]) - ord("a")


Rule = Tuple[str, re.Pattern, Callable[[re.Match], Coord]]

RULES: Tuple[Rule, ...] = (
    ("letter_digit", re.compile(r"^([a-e])\s*([1-5])$"), _letter_digit),
    ("letter_any_digit", re.compile(r"^([a-e])\s*(\d)$"), _letter_digit),
    ("digit_digit", re.compile(r"^([1-5])\s*([1-5])$"), _digit_digit),
    ("any_digit_digit", re.compile(r"^(\d)\s*(\d)$"), _digit_digit),
    ("row_column", re.compile(r"^row\s*([1-5])\s*col(?:umn)?\s*([1-5])$"), _digit_digit),
    ("r_c", re.compile(r"^r\s*([1-5])\s*c\s*([1-5])$"), _digit_digit),
    ("verb_digits", re.compile(r"^(?:place|move|put)\s*(?:at|to)?\s*([1-5])\s*([1-5])$"), _digit_digit),
    ("verb_letter", re.compile(r"^(?:place|move|put)\s*(?:at|to)?\s*([a-e])\s*([1-5])$"), _letter_digit),
    ("glued", re.compile(r"^([a-e][1-5])$"), _glued),
)


def normalize(text: str) -> str:
    """Lower-cases, drops punctuation and filler words, collapses whitespace."""
    cleaned = _FILLER_RE.sub("", _PUNCT_RE.sub(" ", text.lower()))
    return _SPACE_RE.sub(" ", cleaned).strip()


def interpret(text: Optional[str]) -> Command:
    """Classifies a transcript as a move, a help request, an out-of-range coordinate or noise."""
    if not isinstance(text, str) or not text.strip():
        return Command(kind=UNKNOWN, text=text if isinstance(text, str) else "")
    if "help" in text.lower():
        return Command(kind=HELP, text=text)

    normalized = normalize(text)
    lexical_hit: Optional[str] = None
    for name, pattern, extract in RULES:
        m = pattern.match(normalized)
        if m is None:
            continue
        coord = extract(m)
        if in_bounds(coord):
            logger.debug("transcript %r -> %s via %s", text, coord, name)
            return Command(kind=MOVE, text=text, normalized=normalized, coord=coord, rule=name)
        if lexical_hit is None:
            lexical_hit = name

    if lexical_hit is not None:
        logger.debug("transcript %r matched %s but is off the board", text, lexical_hit)
        return Command(kind=OUT_OF_RANGE, text=text, normalized=normalized, rule=lexical_hit)
    return Command(kind=UNKNOWN, text=text, normalized=normalized)


def parse(text: Optional[str]) -> Optional[Coord]:
    """The coordinate named by a transcript, or None when it cannot be resolved."""
    return interpret(text).coord


def is_help(text: Optional[str]) -> bool:
    return interpret(text).kind == HELP
