from loguru import logger

from config import configure_logging, load_config
from game import CheckersGame


def main():
    cfg = load_config()
    configure_logging(cfg.log_level)

    game = CheckersGame()
    best_move = game.best_move(cfg.search.depth)
    logger.info(f"Minimax suggests move: {best_move}")

    if best_move is not None:
        game.move(best_move)
    game.print_board()
    print(game.get_current_state().status_text)


if __name__ == "__main__":
    main()
