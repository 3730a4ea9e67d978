import random
from typing import Callable, Dict, Optional

from loguru import logger

from board import Board, Color, Move
from config import configure_logging, load_config
from game import CheckersGame
from minimax import Minimax
from rules import allowed_moves

Agent = Callable[[Board, Color], Optional[Move]]


def minimax_agent(depth: int, rng: Optional[random.Random] = None) -> Agent:
    searcher = Minimax(rng)

    def agent(board: Board, turn: Color) -> Optional[Move]:
        return searcher.search(board, depth, turn)

    return agent


def random_agent(rng: Optional[random.Random] = None) -> Agent:
    rng = rng or random.Random()

    def agent(board: Board, turn: Color) -> Optional[Move]:
        moves = allowed_moves(board, turn)
        return rng.choice(moves) if moves else None

    return agent


def make_agent(kind: str, depth: int, rng: Optional[random.Random] = None) -> Agent:
    """Build an agent by name: "minimax" (searching `depth` plies) or "random"."""
    if kind == "minimax":
        return minimax_agent(depth, rng)
    if kind == "random":
        return random_agent(rng)
    raise ValueError(f"Unknown agent kind: {kind!r}")


def play_game(red: Agent, black: Agent, max_plies: int = 200, verbose: bool = False) -> Optional[Color]:
    """
    Play one game, every move going through CheckersGame.move.
    Returns the winner, or None for a draw (ply limit reached).
    An agent that returns no move or an illegal move loses.
    """
    game = CheckersGame()
    agents = {Color.RED: red, Color.BLACK: black}

    for ply in range(max_plies):
        if game.is_game_over():
            return game.turn.opponent

        turn = game.turn
        move = agents[turn](game.board, turn)
        if move is None or not game.move(move):
            logger.warning(f"{turn.value} failed to move at ply {ply}: {move}")
            return turn.opponent

        if verbose:
            game.print_board()

    if game.is_game_over():
        return game.turn.opponent
    return None


def run_match(games: int, red: Agent, black: Agent, max_plies: int = 200) -> Dict[str, int]:
    results = {"red": 0, "black": 0, "draw": 0}
    for i in range(games):
        winner = play_game(red, black, max_plies=max_plies)
        key = winner.value if winner else "draw"
        results[key] += 1
        logger.info(f"Game {i + 1}: {key}")
    return results


def main():
    cfg = load_config()
    configure_logging(cfg.log_level)

    rng = random.Random(cfg.search.seed) if cfg.search.seed is not None else None
    red = make_agent(cfg.arena.red_agent, cfg.arena.red_depth, rng)
    black = make_agent(cfg.arena.black_agent, cfg.arena.black_depth, rng)

    results = run_match(cfg.arena.games, red, black, max_plies=cfg.arena.max_plies)

    print("\nFinal Results:")
    print(f"Red ({cfg.arena.red_agent}, depth {cfg.arena.red_depth}) wins: {results['red']}")
    print(f"Black ({cfg.arena.black_agent}, depth {cfg.arena.black_depth}) wins: {results['black']}")
    print(f"Draws: {results['draw']}")


if __name__ == "__main__":
    main()
