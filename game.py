from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from loguru import logger

from board import (
    Board,
    Color,
    Move,
    Piece,
    apply_move,
    board_to_str,
    clone_board,
    get_piece,
    initial_board,
)
from minimax import Minimax
from rules import allowed_moves, moves_equal


class GameStatus(Enum):
    RED_TURN = "redTurn"
    BLACK_TURN = "blackTurn"
    GAME_OVER = "gameOver"


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the game produced after every change."""
    board: Board
    turn: Color
    allowed_moves: List[Move]
    status: GameStatus
    status_text: str
    is_game_over: bool

    @property
    def winner(self) -> Optional[Color]:
        # The side to move has no legal move, so the other side wins
        return self.turn.opponent if self.is_game_over else None


Listener = Callable[[GameSnapshot], None]


class CheckersGame:
    """
    A Checkers session for two players: Red and Black. Red moves first.

    The session owns the current board and turn. Moves are checked against
    rules.allowed_moves before being applied, and every change is broadcast
    to the registered listeners, synchronously and in registration order.

    Coordinates:
        (row, col) with row=0 at the top and col=0 at the left.
        Black starts on rows 0..2 and moves down, Red starts on rows 5..7
        and moves up. A king can move in any diagonal direction.
    """

    def __init__(self, searcher: Optional[Minimax] = None):
        self.board: Board = initial_board()
        self.turn = Color.RED
        self.searcher = searcher or Minimax()
        self._listeners: List[Listener] = []

    def reset(self):
        """Back to the starting layout with Red to move."""
        self.board = initial_board()
        self.turn = Color.RED
        self._emit_state_change()

    def subscribe(self, listener: Listener):
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def get_piece(self, pos: Tuple[int, int]) -> Optional[Piece]:
        return get_piece(self.board, pos)

    def get_legal_moves(self) -> List[Move]:
        return allowed_moves(self.board, self.turn)

    def get_current_state(self) -> GameSnapshot:
        moves = self.get_legal_moves()
        is_game_over = len(moves) == 0
        if is_game_over:
            winner = self.turn.opponent.value.capitalize()
            status = GameStatus.GAME_OVER
            status_text = f"Game Over! {winner} wins!"
        else:
            status = GameStatus.RED_TURN if self.turn is Color.RED else GameStatus.BLACK_TURN
            status_text = f"{self.turn.value}'s turn"

        return GameSnapshot(
            board=clone_board(self.board),
            turn=self.turn,
            allowed_moves=moves,
            status=status,
            status_text=status_text,
            is_game_over=is_game_over,
        )

    def is_game_over(self) -> bool:
        return not self.get_legal_moves()

    def move(self, move: Move) -> bool:
        """
        Play `move` for the side to move. Returns False, leaving the game
        untouched, if the move is not one of the allowed moves.
        """
        legal = next((m for m in self.get_legal_moves() if moves_equal(m, move)), None)
        if legal is None:
            logger.warning(f"Rejected illegal move {move} for {self.turn.value}")
            return False

        self.board = apply_move(self.board, legal)
        logger.debug(f"{self.turn.value} played {legal}")
        self.turn = self.turn.opponent
        self._emit_state_change()
        return True

    def best_move(self, depth: int) -> Optional[Move]:
        """Ask the minimax searcher for a move for the side to move."""
        return self.searcher.search(self.board, depth, self.turn)

    def _emit_state_change(self):
        if not self._listeners:
            return
        snapshot = self.get_current_state()
        for listener in list(self._listeners):
            listener(snapshot)

    def print_board(self):
        """Display the board in a simple ASCII format."""
        print(board_to_str(self.board))
        print()
