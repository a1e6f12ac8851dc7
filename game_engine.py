"""
2048 游戏引擎
持有棋盘和分数，处理移动、撤回、生成新数字和胜负判断，
通过回调把状态变化通知给外部（界面、统计等）。
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from game2048 import (
    Board,
    ConfigurationError,
    add_random_tile,
    copy_board,
    get_max_tile,
    has_value,
    is_lost,
    is_power_of_two,
    new_board,
    resolve_move,
)
from game_config import GameConfig
from game_history import History, Snapshot

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    ONGOING = "ongoing"
    WON = "won"
    LOST = "lost"


@dataclass
class UpdateInfo:
    """on_update 回调附带的信息。"""

    merged: List[int] = field(default_factory=list)
    is_undo: bool = False


UpdateCallback = Callable[[Board, int, UpdateInfo], None]


class Game2048:
    def __init__(
        self,
        size: int = GameConfig.SIZE,
        target_value: int = GameConfig.TARGET_VALUE,
        undo_depth: int = GameConfig.UNDO_DEPTH,
        rng: Optional[Any] = None,
        four_probability: float = GameConfig.FOUR_PROBABILITY,
    ):
        if not 0.0 <= four_probability <= 1.0:
            raise ConfigurationError(f"four_probability must be within [0, 1], got {four_probability}")
        self.rng = rng
        self.four_probability = four_probability
        self.history = History(undo_depth)

        # 回调
        self.on_update: Optional[UpdateCallback] = None
        self.on_win: Optional[Callable[[], None]] = None
        self.on_game_over: Optional[Callable[[int], None]] = None

        self.size = 0
        self.target_value = 0
        self.grid: Board = []
        self.score = 0
        self.won = False
        self.over = False

        self.initialize(size, target_value)

    def initialize(self, size: Optional[int] = None, target_value: Optional[int] = None) -> None:
        """开始新的一局。参数不合法时抛出 ConfigurationError，当前局面保持不变。"""
        size = self.size if size is None else size
        target_value = self.target_value if target_value is None else target_value
        if not 2 <= size <= GameConfig.MAX_SIZE:
            raise ConfigurationError(f"grid size must be within [2, {GameConfig.MAX_SIZE}], got {size}")
        if target_value < 4 or not is_power_of_two(target_value):
            raise ConfigurationError(f"target value must be a power of two >= 4, got {target_value}")

        self.size = size
        self.target_value = target_value
        self.grid = new_board(size)
        self.score = 0
        self.won = False
        self.over = False
        self.history.clear()
        self._spawn()
        self._spawn()
        logger.info("New %dx%d game, target %d", size, size, target_value)

    def _spawn(self) -> None:
        add_random_tile(self.grid, self.rng, self.four_probability)

    @property
    def status(self) -> GameStatus:
        if self.over:
            return GameStatus.LOST
        if self.won:
            return GameStatus.WON
        return GameStatus.ONGOING

    @property
    def can_undo(self) -> bool:
        return len(self.history) > 0

    def get_grid(self) -> Board:
        return copy_board(self.grid)

    def snapshot(self) -> Snapshot:
        return Snapshot.take(self.grid, self.score)

    def max_tile(self) -> int:
        return get_max_tile(self.grid)

    def move(self, direction: Any) -> bool:
        """
        朝 direction 移动。
        棋盘没有变化或游戏已结束时返回 False，此时棋盘、分数和历史都不变。
        方向不合法时抛出 ValueError。
        """
        if self.over:
            return False

        result = resolve_move(self.grid, direction)
        if not result.moved:
            logger.debug("Move %s rejected, nothing changed", direction)
            return False

        self.history.push(self.snapshot())
        self.grid = result.board
        self.score += result.gain
        self._spawn()
        logger.debug("Move %s: +%d, score %d", direction, result.gain, self.score)

        if self.on_update:
            self.on_update(self.grid, self.score, UpdateInfo(merged=result.merged))

        if not self.won and has_value(self.grid, self.target_value):
            self.won = True
            logger.info("Reached %d, score %d", self.target_value, self.score)
            if self.on_win:
                self.on_win()

        if is_lost(self.grid):
            self.over = True
            logger.info("Game over, final score %d", self.score)
            if self.on_game_over:
                self.on_game_over(self.score)

        return True

    def undo(self) -> bool:
        """撤回一步，没有历史记录时返回 False。"""
        snapshot = self.history.pop()
        if snapshot is None:
            return False

        self.grid = snapshot.to_board()
        self.score = snapshot.score
        self.over = False
        logger.debug("Undo, score back to %d", self.score)

        if self.on_update:
            self.on_update(self.grid, self.score, UpdateInfo(is_undo=True))
        return True
