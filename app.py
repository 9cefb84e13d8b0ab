from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from voicego_core import config
from voicego_core.board import BLACK, WHITE, Board, Cell, Coord, color_name, in_bounds
from voicego_core.errors import MoveError
from voicego_core.parser import HELP, HELP_TEXT, Command, interpret
from voicego_core.session import GameSession, MoveOutcome
from voicego_core.state import GameState, Move

logger = logging.getLogger(__name__)

app = Flask(__name__)

_COLORS = {"black": BLACK, "white": WHITE, BLACK: BLACK, WHITE: WHITE}


class BadRequest(ValueError):
    pass


# ---------- JSON conversion ----------

def board_to_json(b: Board) -> Dict[str, Any]:
    return {"size": len(b.rows()), "grid": b.rows()}


def board_from_json(obj: Any) -> Board:
    rows = obj.get("grid") if isinstance(obj, dict) else obj
    if not isinstance(rows, list):
        raise BadRequest("board grid must be a list of rows")
    try:
        return Board.from_rows([[int(v) for v in row] for row in rows])
    except (TypeError, ValueError) as e:
        raise BadRequest(f"bad board: {e}") from None


def _color_from_json(v: Any) -> Cell:
    key = v.lower() if isinstance(v, str) else v
    try:
        return _COLORS[key]
    except (KeyError, TypeError):
        raise BadRequest(f"bad color: {v!r}") from None


def _coord_from_json(v: Any) -> Coord:
    if not isinstance(v, (list, tuple)) or len(v) != 2:
        raise BadRequest("coordinate must be [row, col]")
    try:
        return int(v[0]), int(v[1])
    except (TypeError, ValueError):
        raise BadRequest(f"bad coordinate: {v!r}") from None


def _move_to_json(m: Optional[Move]) -> Optional[Dict[str, Any]]:
    if m is None:
        return None
    return {"row": m.coord[0], "col": m.coord[1], "color": color_name(m.color)}


def state_to_json(s: GameState, phase: Optional[str] = None) -> Dict[str, Any]:
    out = {
        "board": board_to_json(s.board),
        "turn": color_name(s.turn),
        "lastMove": _move_to_json(s.last_move),
        "active": bool(s.active),
        "scores": s.scores.as_dict(),
    }
    if phase is not None:
        out["phase"] = phase
    return out


def json_to_state(obj: Any) -> GameState:
    if not isinstance(obj, dict):
        raise BadRequest("state required")
    board = board_from_json(obj.get("board"))
    last_in = obj.get("lastMove")
    last = None
    if last_in:
        if not isinstance(last_in, dict):
            raise BadRequest("lastMove must be an object")
        coord = _coord_from_json([last_in.get("row"), last_in.get("col")])
        if not in_bounds(coord):
            raise BadRequest(f"lastMove {coord} is off the board")
        last = Move(
            coord=coord,
            color=_color_from_json(last_in.get("color")),
        )
    active = obj.get("active", True)
    if not isinstance(active, bool):
        raise BadRequest("active must be true or false")
    state = GameState(
        board=board,
        turn=_color_from_json(obj.get("turn", "black")),
        last_move=last,
        active=active,
    )
    state.recompute_scores()
    return state


def command_to_json(c: Command) -> Dict[str, Any]:
    return {
        "kind": c.kind,
        "text": c.text,
        "normalized": c.normalized,
        "coord": list(c.coord) if c.coord is not None else None,
        "rule": c.rule,
    }


def outcome_to_json(o: MoveOutcome) -> Dict[str, Any]:
    return {
        "applied": _move_to_json(o.applied),
        "captured": [[r, c] for (r, c) in o.captured],
        "scores": o.scores.as_dict(),
        "terminal": o.terminal,
        "winner": o.winner,
    }


# ---------- helpers ----------

def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise BadRequest("JSON object body required")
    return body


def _options(body: Dict[str, Any]) -> Dict[str, Any]:
    seed = body.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise BadRequest(f"seed must be an integer, got {seed!r}")
    strategy = body.get("strategy")
    if strategy is not None and not isinstance(strategy, str):
        raise BadRequest(f"strategy must be a name, got {strategy!r}")
    return {"strategy": strategy, "rng": random.Random(seed) if seed is not None else None}


def _session_from(body: Dict[str, Any]) -> GameSession:
    return GameSession.from_state(json_to_state(body.get("state")), **_options(body))


def _legal_list(session: GameSession) -> List[List[int]]:
    return [list(m) for m in session.legal_moves()]


def _reply(session: GameSession, **extra: Any) -> Any:
    return jsonify({
        "ok": True,
        "state": state_to_json(session.current_state(), phase=session.phase),
        "legalMoves": _legal_list(session),
        **extra,
    })


def _error(kind: str, message: str, status: int = 400, **extra: Any) -> Tuple[Any, int]:
    logger.info("request rejected: %s (%s)", kind, message)
    return jsonify({"ok": False, "error": kind, "message": message, **extra}), status


# ---------- routes ----------

@app.get("/")
def index() -> Any:
    return jsonify({"ok": True, "name": "voicego", "help": HELP_TEXT})


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True)
    try:
        if body is None:
            body = {}
        elif not isinstance(body, dict):
            raise BadRequest("JSON object body required")
        session = GameSession(**_options(body))
    except ValueError as e:
        return _error("bad_request", str(e))
    return _reply(session)


@app.post("/api/legal")
def api_legal() -> Any:
    try:
        session = _session_from(_body())
    except ValueError as e:
        return _error("bad_request", str(e))
    return jsonify({"ok": True, "legalMoves": _legal_list(session)})


@app.post("/api/move")
def api_move() -> Any:
    try:
        body = _body()
        session = _session_from(body)
        r, c = _coord_from_json(body.get("move"))
    except ValueError as e:
        return _error("bad_request", str(e))
    try:
        outcome = session.submit_coordinate(r, c)
    except MoveError as e:
        return _error(e.kind, str(e), legalMoves=_legal_list(session))
    return _reply(session, outcome=outcome_to_json(outcome))


@app.post("/api/command")
def api_command() -> Any:
    try:
        body = _body()
        session = _session_from(body)
    except ValueError as e:
        return _error("bad_request", str(e))
    transcript = body.get("transcript")
    if not isinstance(transcript, str):
        return _error("bad_request", "transcript required")
    try:
        result = session.submit_transcript(transcript)
    except MoveError as e:
        command = getattr(e, "command", None)
        extra = {"command": command_to_json(command)} if command is not None else {}
        return _error(e.kind, str(e), **extra)
    if result.command.kind == HELP:
        return _reply(session, command=command_to_json(result.command), help=HELP_TEXT)
    return _reply(session, command=command_to_json(result.command), outcome=outcome_to_json(result.outcome))


@app.post("/api/ai")
def api_ai() -> Any:
    try:
        session = _session_from(_body())
    except ValueError as e:
        return _error("bad_request", str(e))
    try:
        outcome = session.opponent_move()
    except MoveError as e:
        return _error(e.kind, str(e))
    return _reply(session, outcome=outcome_to_json(outcome))


@app.post("/api/parse")
def api_parse() -> Any:
    try:
        body = _body()
    except BadRequest as e:
        return _error("bad_request", str(e))
    transcript = body.get("transcript")
    if not isinstance(transcript, str):
        return _error("bad_request", "transcript required")
    return jsonify({"ok": True, "command": command_to_json(interpret(transcript))})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    config.configure_logging()
    app.run(host="0.0.0.0", port=config.port(), debug=config.flask_debug())
