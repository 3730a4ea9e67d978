from typing import List, Tuple

from board import Color, Position
from config import configure_logging, load_config
from game import CheckersGame
from rules import match_move


def parse_move_input(text: str) -> Tuple[Position, List[Position]]:
    """
    Parse "r1 c1 r2 c2 [r3 c3 ...]" into (origin, path).
    A single destination is enough unless several jump chains end there.
    """
    parts = text.split()
    if len(parts) < 4 or len(parts) % 2 != 0:
        raise ValueError("Expected an even number of coordinates, at least 4")
    coords = [int(p) for p in parts]
    squares = [Position(coords[i], coords[i + 1]) for i in range(0, len(coords), 2)]
    return squares[0], squares[1:]


def play_user_vs_ai(depth: int):
    game = CheckersGame()

    while not game.is_game_over():
        game.print_board()
        if game.turn is Color.BLACK:
            print("AI is thinking...")
            move = game.best_move(depth)
        else:
            print("Your turn! Enter your move as: start_row start_col end_row end_col")
            user_input = input("Move: ")
            try:
                origin, path = parse_move_input(user_input)
            except ValueError:
                print("Invalid input. Please try again.")
                continue
            move = match_move(game.get_legal_moves(), origin, path)
            if move is None:
                print("Illegal move! Please try again.")
                continue

        game.move(move)

    game.print_board()
    print(game.get_current_state().status_text)


if __name__ == "__main__":
    cfg = load_config()
    configure_logging(cfg.log_level)
    play_user_vs_ai(cfg.search.depth)
