from typing import List, Optional, Sequence

from board import (
    BOARD_SIZE,
    Board,
    Color,
    Move,
    Piece,
    Position,
    clone_board,
    directions_for,
    get_piece,
    in_bounds,
)


def allowed_moves(board: Board, turn: Color) -> List[Move]:
    """
    Returns every legal move for the side `turn`.

    Capturing is mandatory: if any piece of `turn` can jump, only capture
    moves are returned, otherwise only simple one-step moves.
    """
    capture_moves: List[Move] = []
    simple_moves: List[Move] = []

    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            piece = board[r][c]
            if piece is None or piece.color is not turn:
                continue
            pos = Position(r, c)
            captures = captures_for_piece(board, pos, piece)
            if captures:
                capture_moves.extend(captures)
            else:
                simple_moves.extend(simple_moves_for_piece(board, pos, piece))

    # If any capture moves are available, they must be taken
    if capture_moves:
        return capture_moves
    return simple_moves


def captures_for_piece(board: Board, pos: Position, piece: Piece) -> List[Move]:
    """
    Generate all maximal capture chains for the piece standing on `pos`.
    A chain that could still be extended is never returned on its own; where
    the chain branches, every branch yields its own move.
    """
    sequences: List[Move] = []
    _find_captures(board, pos, piece, pos, [], [], sequences)
    return sequences


def _find_captures(
    board: Board,
    pos: Position,
    piece: Piece,
    origin: Position,
    path: List[Position],
    captured_so_far: List[Position],
    sequences: List[Move],
):
    """
    Depth-first search over jumps. Each hop is simulated on a cloned board
    so the captured piece and the vacated square are seen by the next hop.

    The directions come from the original piece at every hop: a man that
    reaches the back rank mid-chain is only crowned once the move is applied.
    """
    found_capture = False

    for dr, dc in directions_for(piece):
        middle = Position(pos.row + dr, pos.col + dc)
        landing = Position(pos.row + 2 * dr, pos.col + 2 * dc)

        if not in_bounds(*landing):
            continue

        enemy = get_piece(board, middle)
        if enemy is None or enemy.color is piece.color:
            continue
        if board[landing.row][landing.col] is not None:
            continue

        found_capture = True

        cloned = clone_board(board)
        cloned[middle.row][middle.col] = None
        cloned[landing.row][landing.col] = piece
        cloned[pos.row][pos.col] = None

        _find_captures(
            cloned,
            landing,
            piece,
            origin,
            path + [landing],
            captured_so_far + [middle],
            sequences,
        )

    # Nothing left to jump from here: the chain so far is complete
    if not found_capture and captured_so_far:
        sequences.append(Move(origin, tuple(path), tuple(captured_so_far)))


def simple_moves_for_piece(board: Board, pos: Position, piece: Piece) -> List[Move]:
    """Non-capturing diagonal steps onto empty squares."""
    moves = []
    for dr, dc in directions_for(piece):
        target = Position(pos.row + dr, pos.col + dc)
        if in_bounds(*target) and board[target.row][target.col] is None:
            moves.append(Move(pos, (target,), ()))
    return moves


def moves_equal(a: Move, b: Move) -> bool:
    """Same origin, same path and same captures, both compared in order."""
    return (
        tuple(a.origin) == tuple(b.origin)
        and [tuple(p) for p in a.path] == [tuple(p) for p in b.path]
        and [tuple(p) for p in a.captures] == [tuple(p) for p in b.captures]
    )


def match_move(
    moves: Sequence[Move], origin: Position, path: Sequence[Position]
) -> Optional[Move]:
    """
    Find the move starting on `origin` that follows `path`.

    An exact path match wins. When only a destination is given, the move is
    returned only if exactly one candidate from `origin` ends there.
    """
    origin = Position(*origin)
    path = [Position(*p) for p in path]
    if not path:
        return None

    for move in moves:
        if move.origin == origin and list(move.path) == path:
            return move

    if len(path) == 1:
        candidates = [m for m in moves if m.origin == origin and m.destination == path[0]]
        if len(candidates) == 1:
            return candidates[0]
    return None
