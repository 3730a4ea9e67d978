"""
Move generation tests: simple moves, mandatory capture, capture chains and
move matching.
"""

import pytest

from board import (
    Color,
    Move,
    Piece,
    PieceType,
    Position,
    apply_move,
    clone_board,
    empty_board,
    initial_board,
)
from rules import (
    allowed_moves,
    captures_for_piece,
    match_move,
    moves_equal,
    simple_moves_for_piece,
)

RED_MAN = Piece(Color.RED, PieceType.MAN)
RED_KING = Piece(Color.RED, PieceType.KING)
BLACK_MAN = Piece(Color.BLACK, PieceType.MAN)
BLACK_KING = Piece(Color.BLACK, PieceType.KING)

P = Position


def targets(moves):
    return {m.destination for m in moves}


class TestSimpleMoves:
    def test_red_opening_moves(self):
        moves = allowed_moves(initial_board(), Color.RED)
        assert len(moves) == 7
        assert all(not m.is_capture for m in moves)
        assert all(m.origin.row == 5 and m.destination.row == 4 for m in moves)

    def test_black_opening_moves(self):
        moves = allowed_moves(initial_board(), Color.BLACK)
        assert len(moves) == 7
        assert all(m.origin.row == 2 and m.destination.row == 3 for m in moves)

    def test_red_man_goes_up_one_row(self):
        board = empty_board()
        board[4][3] = RED_MAN
        moves = simple_moves_for_piece(board, P(4, 3), RED_MAN)
        assert targets(moves) == {P(3, 2), P(3, 4)}

    def test_black_man_goes_down_one_row(self):
        board = empty_board()
        board[4][3] = BLACK_MAN
        assert targets(allowed_moves(board, Color.BLACK)) == {P(5, 2), P(5, 4)}

    def test_king_goes_both_ways(self):
        board = empty_board()
        board[4][3] = RED_KING
        assert targets(allowed_moves(board, Color.RED)) == {P(3, 2), P(3, 4), P(5, 2), P(5, 4)}

    def test_edge_of_board(self):
        board = empty_board()
        board[3][0] = RED_MAN
        assert targets(allowed_moves(board, Color.RED)) == {P(2, 1)}

    def test_blocked_by_own_pieces(self):
        board = empty_board()
        board[4][3] = RED_MAN
        board[3][2] = RED_MAN
        board[3][4] = RED_MAN
        moves = simple_moves_for_piece(board, P(4, 3), RED_MAN)
        assert moves == []

    def test_no_pieces_no_moves(self):
        board = empty_board()
        board[0][1] = BLACK_MAN
        assert allowed_moves(board, Color.RED) == []


class TestCaptures:
    def test_single_capture(self):
        board = empty_board()
        board[3][2] = RED_MAN
        board[2][3] = BLACK_MAN
        moves = allowed_moves(board, Color.RED)
        assert moves == [Move(P(3, 2), (P(1, 4),), (P(2, 3),))]

    def test_capture_is_mandatory(self):
        board = empty_board()
        board[3][2] = RED_MAN
        board[2][3] = BLACK_MAN
        board[6][5] = RED_MAN  # could step freely
        moves = allowed_moves(board, Color.RED)
        assert len(moves) == 1
        assert all(m.is_capture for m in moves)
        assert all(m.origin == P(3, 2) for m in moves)

    def test_never_mixes_captures_and_simple_moves(self):
        board = initial_board()
        board[4][1] = BLACK_MAN
        board[3][2] = None
        moves = allowed_moves(board, Color.RED)
        assert moves
        kinds = {m.is_capture for m in moves}
        assert kinds == {True}

    def test_landing_must_be_empty(self):
        board = empty_board()
        board[3][2] = RED_MAN
        board[2][3] = BLACK_MAN
        board[1][4] = BLACK_MAN
        assert captures_for_piece(board, P(3, 2), RED_MAN) == []

    def test_cannot_jump_own_piece(self):
        board = empty_board()
        board[3][2] = RED_MAN
        board[2][3] = RED_MAN
        assert captures_for_piece(board, P(3, 2), RED_MAN) == []

    def test_man_cannot_capture_backwards(self):
        board = empty_board()
        board[3][2] = RED_MAN
        board[4][3] = BLACK_MAN
        assert captures_for_piece(board, P(3, 2), RED_MAN) == []

    def test_king_captures_backwards(self):
        board = empty_board()
        board[3][2] = RED_KING
        board[4][3] = BLACK_MAN
        assert allowed_moves(board, Color.RED) == [Move(P(3, 2), (P(5, 4),), (P(4, 3),))]

    def test_double_jump_returns_only_full_chain(self):
        board = empty_board()
        board[5][0] = RED_MAN
        board[4][1] = BLACK_MAN
        board[2][3] = BLACK_MAN
        moves = allowed_moves(board, Color.RED)
        assert moves == [Move(P(5, 0), (P(3, 2), P(1, 4)), (P(4, 1), P(2, 3)))]
        assert Move(P(5, 0), (P(3, 2),), (P(4, 1),)) not in moves

    def test_branching_chains(self):
        board = empty_board()
        board[6][3] = RED_MAN
        board[5][2] = BLACK_MAN
        board[5][4] = BLACK_MAN
        board[3][2] = BLACK_MAN
        moves = allowed_moves(board, Color.RED)
        assert moves == [
            Move(P(6, 3), (P(4, 1), P(2, 3)), (P(5, 2), P(3, 2))),
            Move(P(6, 3), (P(4, 5),), (P(5, 4),)),
        ]

    def test_crowning_mid_chain_does_not_add_directions(self):
        board = empty_board()
        board[2][1] = RED_MAN
        board[1][2] = BLACK_MAN
        board[1][4] = BLACK_MAN  # only a king could continue (0,3) -> (2,5)
        moves = allowed_moves(board, Color.RED)
        assert moves == [Move(P(2, 1), (P(0, 3),), (P(1, 2),))]
        after = apply_move(board, moves[0])
        assert after[0][3] == RED_KING
        assert after[1][4] == BLACK_MAN

    def test_king_chain_may_return_to_origin(self):
        board = empty_board()
        board[5][2] = RED_KING
        for r, c in [(4, 1), (2, 1), (2, 3), (4, 3)]:
            board[r][c] = BLACK_MAN
        moves = allowed_moves(board, Color.RED)
        assert moves == [
            Move(P(5, 2), (P(3, 0), P(1, 2), P(3, 4), P(5, 2)), (P(4, 1), P(2, 1), P(2, 3), P(4, 3))),
            Move(P(5, 2), (P(3, 4), P(1, 2), P(3, 0), P(5, 2)), (P(4, 3), P(2, 3), P(2, 1), P(4, 1))),
        ]
        after = apply_move(board, moves[0])
        assert after[5][2] == RED_KING
        assert sum(1 for row in after for p in row if p is not None) == 1

    def test_chain_geometry(self):
        board = empty_board()
        board[5][0] = RED_MAN
        board[4][1] = BLACK_MAN
        board[2][3] = BLACK_MAN
        for move in allowed_moves(board, Color.RED):
            assert len(move.path) == len(move.captures)
            prev = move.origin
            for landing, captured in zip(move.path, move.captures):
                assert abs(landing.row - prev.row) == 2
                assert abs(landing.col - prev.col) == 2
                assert captured == P((landing.row + prev.row) // 2, (landing.col + prev.col) // 2)
                prev = landing

    def test_generation_does_not_mutate_board(self):
        board = empty_board()
        board[5][0] = RED_MAN
        board[4][1] = BLACK_MAN
        board[2][3] = BLACK_MAN
        before = clone_board(board)
        allowed_moves(board, Color.RED)
        assert board == before


class TestMoveEquality:
    def test_equal_moves(self):
        a = Move(P(5, 0), (P(3, 2), P(1, 4)), (P(4, 1), P(2, 3)))
        b = Move(P(5, 0), (P(3, 2), P(1, 4)), (P(4, 1), P(2, 3)))
        assert moves_equal(a, b)
        assert a == b

    def test_plain_tuples_compare_equal(self):
        a = Move(P(5, 0), (P(4, 1),))
        b = Move((5, 0), ((4, 1),), ())
        assert moves_equal(a, b)

    def test_order_matters(self):
        a = Move(P(5, 2), (P(3, 0), P(1, 2)), (P(4, 1), P(2, 1)))
        b = Move(P(5, 2), (P(3, 0), P(1, 2)), (P(2, 1), P(4, 1)))
        assert not moves_equal(a, b)

    def test_different_origin(self):
        assert not moves_equal(Move(P(5, 0), (P(4, 1),)), Move(P(5, 2), (P(4, 1),)))


class TestMatchMove:
    def test_exact_path(self):
        moves = allowed_moves(initial_board(), Color.RED)
        assert match_move(moves, (5, 0), [(4, 1)]) == Move(P(5, 0), (P(4, 1),))

    def test_destination_only_for_chain(self):
        board = empty_board()
        board[5][0] = RED_MAN
        board[4][1] = BLACK_MAN
        board[2][3] = BLACK_MAN
        moves = allowed_moves(board, Color.RED)
        assert match_move(moves, (5, 0), [(1, 4)]) == moves[0]

    def test_ambiguous_destination(self):
        board = empty_board()
        board[5][2] = RED_KING
        for r, c in [(4, 1), (2, 1), (2, 3), (4, 3)]:
            board[r][c] = BLACK_MAN
        moves = allowed_moves(board, Color.RED)
        assert match_move(moves, (5, 2), [(5, 2)]) is None
        assert match_move(moves, (5, 2), [(3, 4), (1, 2), (3, 0), (5, 2)]) == moves[1]

    @pytest.mark.parametrize("origin,path", [((5, 0), [(4, 0)]), ((4, 1), [(3, 2)]), ((5, 0), [])])
    def test_no_match(self, origin, path):
        moves = allowed_moves(initial_board(), Color.RED)
        assert match_move(moves, origin, path) is None
