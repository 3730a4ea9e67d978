# engine_api.py

import random
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from loguru import logger

from board import Board, Color, Move, Position, count_pieces
from game import CheckersGame, GameSnapshot
from minimax import Minimax
from rules import match_move


@dataclass
class EngineSession:
    """
    Everything the HTTP layer needs: one game, the lock that keeps a single
    writer on it, and the AI settings. Passed explicitly to every call.
    """
    depth: int = 4
    seed: Optional[int] = None
    game: Optional[CheckersGame] = None
    lock: threading.Lock = field(default_factory=threading.Lock)


def position_to_dict(pos: Position) -> Dict[str, int]:
    return {"row": pos.row, "col": pos.col}


def position_from_dict(data: Any) -> Position:
    try:
        row = int(data["row"])
        col = int(data["col"])
    except (KeyError, ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Invalid position: {data!r}") from e
    return Position(row, col)


def move_to_dict(move: Move) -> Dict[str, Any]:
    return {
        "from": position_to_dict(move.origin),
        "path": [position_to_dict(p) for p in move.path],
        "captures": [position_to_dict(p) for p in move.captures],
    }


def move_from_dict(data: Any) -> Move:
    """Parse {"from": {...}, "path": [...], "captures": [...]} into a Move."""
    if not isinstance(data, dict):
        raise ValueError("Move must be an object")
    if "from" not in data or not data.get("path"):
        raise ValueError("Move needs 'from' and a non-empty 'path'")
    path = data["path"]
    captures = data.get("captures", [])
    if not isinstance(path, list) or not isinstance(captures, list):
        raise ValueError("'path' and 'captures' must be lists")
    return Move(
        position_from_dict(data["from"]),
        tuple(position_from_dict(p) for p in path),
        tuple(position_from_dict(p) for p in captures),
    )


def board_to_rows(board: Board) -> List[List[Optional[Dict[str, str]]]]:
    return [
        [None if piece is None else {"color": piece.color.value, "type": piece.type.value} for piece in row]
        for row in board
    ]


def snapshot_to_dict(snapshot: GameSnapshot) -> Dict[str, Any]:
    winner = snapshot.winner
    return {
        "board": board_to_rows(snapshot.board),
        "turn": snapshot.turn.value,
        "allowed_moves": [move_to_dict(m) for m in snapshot.allowed_moves],
        "game_state": snapshot.status.value,
        "board_status": snapshot.status_text,
        "is_game_over": snapshot.is_game_over,
        "winner": winner.value if winner else None,
        "pieces": {color.value: count_pieces(snapshot.board, color) for color in Color},
    }


def init_game(session: EngineSession) -> Dict[str, Any]:
    rng = random.Random(session.seed) if session.seed is not None else None
    with session.lock:
        session.game = CheckersGame(searcher=Minimax(rng))
        logger.info(f"New game started (ai depth={session.depth})")
        return snapshot_to_dict(session.game.get_current_state())


def get_board_state(session: EngineSession) -> Optional[Dict[str, Any]]:
    if session.game is None:
        return None
    with session.lock:
        return snapshot_to_dict(session.game.get_current_state())


def get_legal_moves(session: EngineSession) -> Optional[List[Dict[str, Any]]]:
    if session.game is None:
        return None
    with session.lock:
        return [move_to_dict(m) for m in session.game.get_legal_moves()]


def make_user_move(session: EngineSession, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Play a move given either as a full move object ("from"/"path"/"captures")
    or as start/end coordinates (start_row, start_col, end_row, end_col).
    Raises ValueError for malformed input.
    """
    if session.game is None:
        return {"success": False, "error": "No game in progress"}

    with session.lock:
        game = session.game
        legal_moves = game.get_legal_moves()

        if "from" in data:
            requested = move_from_dict(data)
            move = match_move(legal_moves, requested.origin, requested.path)
            if move is not None and requested.captures and move.captures != requested.captures:
                move = None
        else:
            try:
                origin = Position(int(data["start_row"]), int(data["start_col"]))
                end = Position(int(data["end_row"]), int(data["end_col"]))
            except (KeyError, ValueError, TypeError, OverflowError) as e:
                raise ValueError("Invalid input") from e
            move = match_move(legal_moves, origin, [end])

        if move is None or not game.move(move):
            return {"success": False, "error": "Illegal move!"}
        return {"success": True, "move": move_to_dict(move), "state": snapshot_to_dict(game.get_current_state())}


def make_ai_move(session: EngineSession) -> Dict[str, Any]:
    if session.game is None:
        return {"success": False, "error": "No game in progress"}

    with session.lock:
        game = session.game
        if game.is_game_over():
            return {"success": False, "error": "Game is already over"}

        move = game.best_move(session.depth)
        # Route the suggestion through the same validation as a user move
        if move is None or not game.move(move):
            return {"success": False, "error": "AI proposed illegal move!"}
        logger.info(f"AI played {move}")
        return {"success": True, "ai_move": move_to_dict(move), "state": snapshot_to_dict(game.get_current_state())}


def get_game_status(session: EngineSession) -> Dict[str, Any]:
    if session.game is None:
        return {"status": "no_game"}

    with session.lock:
        snapshot = session.game.get_current_state()
    if snapshot.is_game_over:
        return {"status": "over", "winner": snapshot.winner.value}
    return {"status": "ongoing", "current_player": snapshot.turn.value}
