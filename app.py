from collections import OrderedDict
from typing import Any, Dict, Optional
import threading
import uuid

from flask import Flask, jsonify, request, session

from game2048 import ConfigurationError, Direction
from game_config import AppConfig, GameConfig
from game_engine import Game2048, UpdateInfo
from game_stats import GameStats

app = Flask(__name__)
app.config.from_object(AppConfig)
app.config.from_prefixed_env()


class GameSession:
    """一个玩家的引擎、统计和步数，把引擎回调接到统计上。"""

    def __init__(self):
        self.stats = GameStats()
        self.moves = 0
        self.engine = Game2048(
            size=GameConfig.SIZE,
            target_value=GameConfig.TARGET_VALUE,
            undo_depth=GameConfig.UNDO_DEPTH,
            four_probability=GameConfig.FOUR_PROBABILITY,
        )
        self.engine.on_update = self.on_update
        self.engine.on_win = self.on_win
        self.engine.on_game_over = self.on_game_over
        self.stats.increment_games_played()

    def on_update(self, grid, score: int, info: UpdateInfo) -> None:
        if not info.is_undo:
            self.moves += 1
        self.stats.update_best_score(score)

    def on_win(self) -> None:
        app.logger.info("Game won with score %d", self.engine.score)
        self.stats.increment_games_won()

    def on_game_over(self, score: int) -> None:
        app.logger.info("Game over with score %d", score)
        self.stats.update_best_score(score)

    def new_game(self, size: Optional[int] = None, target: Optional[int] = None) -> None:
        self.engine.initialize(size, target)
        self.moves = 0
        self.stats.increment_games_played()

    def state(self) -> Dict[str, Any]:
        engine = self.engine
        return {
            "grid": engine.get_grid(),
            "score": engine.score,
            "status": engine.status.value,
            "won": engine.won,
            "over": engine.over,
            "max_tile": engine.max_tile(),
            "moves": self.moves,
            "can_undo": engine.can_undo,
            "best_score": self.stats.best_score,
        }


# 进行中的游戏，key 为 session 中的 game_id
GAMES: "OrderedDict[str, GameSession]" = OrderedDict()
GAMES_LOCK = threading.Lock()


def get_game() -> GameSession:
    """取得当前玩家的游戏，没有就新建一局。"""
    game_id = session.get("game_id")
    with GAMES_LOCK:
        game = GAMES.get(game_id) if game_id else None
        if game is None:
            game_id = uuid.uuid4().hex
            game = GameSession()
            GAMES[game_id] = game
            session["game_id"] = game_id
        GAMES.move_to_end(game_id)
        # 至少保留当前这一局
        limit = max(1, app.config["MAX_GAMES"])
        while len(GAMES) > limit:
            GAMES.popitem(last=False)
    return game


def get_param(name: str, cast=None):
    """从表单或 JSON 请求体中读取参数。"""
    value = request.form.get(name)
    if value is None:
        data = request.get_json(silent=True)
        if isinstance(data, dict):
            value = data.get(name)
    if value is None or cast is None:
        return value
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"invalid {name}: {value!r}") from None


@app.errorhandler(ConfigurationError)
def handle_configuration_error(error: ConfigurationError):
    app.logger.warning("Rejected configuration: %s", error)
    return jsonify(error=str(error)), 400


@app.route("/")
def index():
    """当前局面。"""
    return jsonify(get_game().state())


@app.route("/move", methods=["POST"])
def move():
    """处理移动操作。"""
    game = get_game()
    try:
        direction = Direction.parse(get_param("direction"))
    except ValueError as e:
        return jsonify(error=str(e)), 400

    moved = game.engine.move(direction)
    return jsonify(moved=moved, **game.state())


@app.route("/undo", methods=["POST"])
def undo():
    """撤回一步。"""
    game = get_game()
    undone = game.engine.undo()
    if undone:
        game.moves = max(0, game.moves - 1)
    return jsonify(undone=undone, **game.state())


@app.route("/reset", methods=["POST"])
def reset():
    """重新开始一局游戏（保留最高分和统计信息）。"""
    game = get_game()
    game.new_game(get_param("size", int), get_param("target", int))
    return jsonify(game.state())


@app.route("/stats")
def stats():
    return jsonify(get_game().stats.get_statistics())


@app.route("/stats/clear", methods=["POST"])
def clear_stats():
    game = get_game()
    game.stats.clear()
    return jsonify(game.stats.get_statistics())


if __name__ == "__main__":
    app.run(debug=True)
