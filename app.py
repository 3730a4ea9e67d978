from typing import Optional

from flask import Flask, jsonify, request

from config import Config, configure_logging, load_config
from engine_api import (
    EngineSession,
    get_board_state,
    get_game_status,
    get_legal_moves,
    init_game,
    make_ai_move,
    make_user_move,
)


def create_app(config: Optional[Config] = None) -> Flask:
    cfg = config or load_config()
    session = EngineSession(depth=cfg.search.depth, seed=cfg.search.seed)

    app = Flask(__name__)
    app.config["CHECKERS"] = cfg
    app.extensions["checkers_session"] = session

    @app.route("/start", methods=["POST"])
    def start_game():
        state = init_game(session)
        return jsonify({"message": "New game started", "state": state})

    @app.route("/state", methods=["GET"])
    def state():
        state = get_board_state(session)
        if state is None:
            return jsonify({"error": "No active game"}), 400
        return jsonify(state)

    @app.route("/legal", methods=["GET"])
    def legal_moves():
        moves = get_legal_moves(session)
        if moves is None:
            return jsonify({"error": "No game in progress"}), 400
        return jsonify({"legal_moves": moves})

    @app.route("/move", methods=["POST"])
    def move():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"success": False, "error": "Invalid input"}), 400
        try:
            result = make_user_move(session, data)
        except ValueError:
            return jsonify({"success": False, "error": "Invalid input"}), 400

        if not result["success"]:
            return jsonify(result), 400
        return jsonify(result)

    @app.route("/ai-move", methods=["POST"])
    def ai_move():
        result = make_ai_move(session)
        if not result["success"]:
            return jsonify(result), 400
        return jsonify(result)

    @app.route("/status", methods=["GET"])
    def status():
        return jsonify(get_game_status(session))

    return app


if __name__ == "__main__":
    cfg = load_config()
    configure_logging(cfg.log_level)
    create_app(cfg).run(host=cfg.server.host, port=cfg.server.port, debug=cfg.server.debug)
