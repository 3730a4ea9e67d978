import math
import random
from typing import List, NamedTuple, Optional

from loguru import logger

from board import Board, Color, Move, apply_move, evaluate
from rules import allowed_moves


class SearchResult(NamedTuple):
    score: float
    move: Optional[Move]


class Minimax:
    """
    Plain fixed-depth minimax over the legal move generator, without pruning.

    Scores are always taken from the side the search was started for (the
    perspective). Levels where that side moves maximize, the others minimize.
    Among moves tied for the best score one is drawn uniformly at random.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        :param rng: Random source for tie-breaking. Pass a seeded
                    random.Random for reproducible choices.
        """
        self.rng = rng or random.Random()
        self.nodes = 0

    def search(self, board: Board, depth: int, turn: Color) -> Optional[Move]:
        """
        Return the best move for `turn` searching `depth` plies, or None when
        `turn` has no legal move (or depth is below 1).
        """
        self.nodes = 0
        if depth < 1:
            return None

        result = self.minimax(board, depth, True, turn, turn)
        logger.debug(
            f"minimax depth={depth} turn={turn.value} score={result.score} "
            f"nodes={self.nodes} move={result.move}"
        )
        return result.move

    def minimax(
        self,
        board: Board,
        depth: int,
        maximizing: bool,
        turn: Color,
        perspective: Color,
    ) -> SearchResult:
        """
        :param board: position to search, never modified.
        :param depth: plies left to search.
        :param maximizing: True when `turn` is the perspective side.
        :param turn: side to move on `board`.
        :param perspective: side the scores are computed for.
        :return: (score, best move). The move is None at terminal nodes.
        """
        self.nodes += 1
        moves = allowed_moves(board, turn)
        if depth == 0 or not moves:
            return SearchResult(evaluate(board, perspective), None)

        best_score = -math.inf if maximizing else math.inf
        best_moves: List[Move] = []

        for move in moves:
            child = apply_move(board, move)
            score = self.minimax(child, depth - 1, not maximizing, turn.opponent, perspective).score

            improved = score > best_score if maximizing else score < best_score
            if improved:
                best_score = score
                best_moves = [move]
            elif score == best_score:
                best_moves.append(move)

        return SearchResult(best_score, self.rng.choice(best_moves))


def best_move(
    board: Board, depth: int, turn: Color, rng: Optional[random.Random] = None
) -> Optional[Move]:
    """Convenience wrapper: search `board` for `turn` with a fresh Minimax."""
    return Minimax(rng).search(board, depth, turn)
