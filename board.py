from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

BOARD_SIZE = 8

MAN_VALUE = 10
KING_VALUE = 50


class Color(Enum):
    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.RED else Color.RED


class PieceType(Enum):
    MAN = "man"
    KING = "king"


@dataclass(frozen=True)
class Piece:
    color: Color
    type: PieceType

    @property
    def is_king(self) -> bool:
        return self.type is PieceType.KING


class Position(NamedTuple):
    row: int
    col: int


@dataclass(frozen=True)
class Move:
    """
    A single turn for one piece.

    - origin: square the piece starts on.
    - path: landing squares, one per step (one entry for a simple move,
            one per jump for a capture chain).
    - captures: squares of the captured enemy pieces, in capture order.
    """
    origin: Position
    path: Tuple[Position, ...]
    captures: Tuple[Position, ...] = ()

    @property
    def destination(self) -> Position:
        return self.path[-1]

    @property
    def is_capture(self) -> bool:
        return len(self.captures) > 0

    def __str__(self):
        squares = [self.origin] + list(self.path)
        sep = "x" if self.is_capture else "-"
        return sep.join(f"({r},{c})" for r, c in squares)


Board = List[List[Optional[Piece]]]

KING_DIRECTIONS = ((-1, -1), (-1, 1), (1, -1), (1, 1))
RED_MAN_DIRECTIONS = ((-1, -1), (-1, 1))
BLACK_MAN_DIRECTIONS = ((1, -1), (1, 1))


def initial_board() -> Board:
    """
    Standard starting layout: men on the dark squares ((row + col) odd),
    black on rows 0..2 and red on rows 5..7.
    """
    board: Board = [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            if (r + c) % 2 == 0:
                continue
            if r < 3:
                board[r][c] = Piece(Color.BLACK, PieceType.MAN)
            elif r > 4:
                board[r][c] = Piece(Color.RED, PieceType.MAN)
    return board


def empty_board() -> Board:
    return [[None for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)]


def in_bounds(r: int, c: int) -> bool:
    """Check if (r, c) is on the 8x8 board."""
    return 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE


def get_piece(board: Board, pos: Tuple[int, int]) -> Optional[Piece]:
    """Return the piece at pos, or None if the square is empty or off the board."""
    r, c = pos
    if not in_bounds(r, c):
        return None
    return board[r][c]


def clone_board(board: Board) -> Board:
    """
    Return a copy of the board that shares no mutable storage with the input.
    Pieces are immutable, so copying the rows is enough.
    """
    return [row[:] for row in board]


def directions_for(piece: Piece) -> Tuple[Tuple[int, int], ...]:
    """
    Return the (d_row, d_col) steps a piece may take.
    Kings use all four diagonals; a red man only moves up (row decreasing)
    and a black man only moves down (row increasing).
    """
    if piece.is_king:
        return KING_DIRECTIONS
    if piece.color is Color.RED:
        return RED_MAN_DIRECTIONS
    return BLACK_MAN_DIRECTIONS


def promote_if_needed(piece: Piece, row: int) -> Piece:
    """A man reaching the opponent's back rank becomes a king."""
    if piece.is_king:
        return piece
    if piece.color is Color.RED and row == 0:
        return Piece(piece.color, PieceType.KING)
    if piece.color is Color.BLACK and row == BOARD_SIZE - 1:
        return Piece(piece.color, PieceType.KING)
    return piece


def apply_move(board: Board, move: Move) -> Board:
    """
    Return a new board with the move played: the piece leaves its origin,
    every captured square is cleared, and the (possibly promoted) piece lands
    on the last square of the path.

    The move is not validated. It must come from rules.allowed_moves (or have
    been checked against it). With no piece on the origin the board is returned
    unchanged.
    """
    new_board = clone_board(board)
    piece = get_piece(new_board, move.origin)
    if piece is None:
        return new_board

    new_board[move.origin.row][move.origin.col] = None
    for cr, cc in move.captures:
        new_board[cr][cc] = None

    final = move.destination
    new_board[final.row][final.col] = promote_if_needed(piece, final.row)
    return new_board


def piece_value(piece: Piece) -> int:
    return KING_VALUE if piece.is_king else MAN_VALUE


def evaluate(board: Board, perspective: Color) -> int:
    """
    Material score from the perspective of the given side: own pieces add
    their value, enemy pieces subtract it. Zero-sum by construction.
    """
    value = 0
    for row in board:
        for piece in row:
            if piece is None:
                continue
            if piece.color is perspective:
                value += piece_value(piece)
            else:
                value -= piece_value(piece)
    return value


def count_pieces(board: Board, color: Color) -> int:
    return sum(1 for row in board for piece in row if piece is not None and piece.color is color)


def board_to_str(board: Board) -> str:
    """
    Render the board in a simple ASCII format:
    b/B black man/king, r/R red man/king, '.' empty.
    """
    symbols = {
        (Color.BLACK, PieceType.MAN): "b",
        (Color.BLACK, PieceType.KING): "B",
        (Color.RED, PieceType.MAN): "r",
        (Color.RED, PieceType.KING): "R",
    }
    lines = ["  " + " ".join(str(c) for c in range(BOARD_SIZE))]
    for r, row in enumerate(board):
        cells = []
        for piece in row:
            cells.append("." if piece is None else symbols[(piece.color, piece.type)])
        lines.append(f"{r} " + " ".join(cells))
    return "\n".join(lines)
