import random
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from game_config import GameConfig

Board = List[List[int]]
Row = List[int]


class ConfigurationError(ValueError):
    """棋盘大小、目标值等配置不合法。"""


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @classmethod
    def parse(cls, value: Any) -> "Direction":
        """把字符串（不区分大小写）或 Direction 转成 Direction。"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Invalid direction: {value!r}. Must be 'left', 'right', 'up', or 'down'") from None


class MoveResult(NamedTuple):
    board: Board
    gain: int
    moved: bool
    merged: List[int]


def new_board(size: int = GameConfig.SIZE) -> Board:
    """创建一个空棋盘。"""
    return [[0] * size for _ in range(size)]


def copy_board(board: Board) -> Board:
    """深拷贝棋盘。"""
    return [row[:] for row in board]


def is_power_of_two(value: int) -> bool:
    return value >= 2 and value & (value - 1) == 0


def empty_cells(board: Board) -> List[Tuple[int, int]]:
    return [
        (r, c)
        for r, row in enumerate(board)
        for c, val in enumerate(row)
        if val == 0
    ]


def add_random_tile(
    board: Board,
    rng: Optional[Any] = None,
    four_probability: float = GameConfig.FOUR_PROBABILITY,
) -> Optional[Tuple[int, int]]:
    """
    在空格随机生成一个 2 或 4
    返回生成的位置 (r, c)，如果棋盘已满返回 None
    """
    cells = empty_cells(board)
    if not cells:
        return None

    rng = rng if rng is not None else random
    r, c = rng.choice(cells)
    board[r][c] = 4 if rng.random() < four_probability else 2
    return r, c


def compress_and_merge_row(row: Row) -> Tuple[Row, int, List[int]]:
    """
    向左挤压并合并一行，返回新行、本行增加的分数和合并出的数字。
    例如: [2, 0, 2, 4] -> [4, 4, 0, 0], score_gain = 4, merged = [4]
    合并出的新数字在同一次移动中不会再次合并: [2, 2, 2, 0] -> [4, 2, 0, 0]
    """
    arr = [x for x in row if x != 0]
    new_row: Row = []
    merged: List[int] = []
    score_gain = 0
    i = 0

    while i < len(arr):
        if i + 1 < len(arr) and arr[i] == arr[i + 1]:
            value = arr[i] * 2
            new_row.append(value)
            merged.append(value)
            score_gain += value
            i += 2
        else:
            new_row.append(arr[i])
            i += 1

    new_row += [0] * (len(row) - len(new_row))
    return new_row, score_gain, merged


def move_left(board: Board) -> Tuple[Board, int, List[int]]:
    """整盘向左移动。"""
    new_board_state: Board = []
    merged: List[int] = []
    total_gain = 0
    for row in board:
        new_row, gain, row_merged = compress_and_merge_row(row)
        new_board_state.append(new_row)
        merged.extend(row_merged)
        total_gain += gain
    return new_board_state, total_gain, merged


def reverse_rows(board: Board) -> Board:
    """每一行做反转。"""
    return [list(reversed(row)) for row in board]


def transpose(board: Board) -> Board:
    """矩阵转置。"""
    return [list(row) for row in zip(*board)]


def _identity(board: Board) -> Board:
    return copy_board(board)


def _transpose_reverse(board: Board) -> Board:
    return reverse_rows(transpose(board))


def _reverse_transpose(board: Board) -> Board:
    return transpose(reverse_rows(board))


# 方向 -> (变换, 逆变换)：先变换成"向左挤压"，移动后再用逆变换还原
TRANSFORMS: Dict[Direction, Tuple[Callable[[Board], Board], Callable[[Board], Board]]] = {
    Direction.LEFT: (_identity, _identity),
    Direction.RIGHT: (reverse_rows, reverse_rows),
    Direction.UP: (transpose, transpose),
    Direction.DOWN: (_transpose_reverse, _reverse_transpose),
}


def resolve_move(board: Board, direction: Any) -> MoveResult:
    """计算整盘朝某个方向移动后的结果，不修改传入的棋盘。"""
    forward, inverse = TRANSFORMS[Direction.parse(direction)]
    moved_board, gain, merged = move_left(forward(board))
    result = inverse(moved_board)
    return MoveResult(result, gain, result != board, merged)


def has_value(board: Board, value: int) -> bool:
    return any(value in row for row in board)


def has_adjacent_pair(board: Board) -> bool:
    """是否存在横向或纵向相邻且相等的非空格子。"""
    size = len(board)
    for r in range(size):
        for c in range(size):
            val = board[r][c]
            if val == 0:
                continue
            if c + 1 < size and val == board[r][c + 1]:
                return True
            if r + 1 < size and val == board[r + 1][c]:
                return True
    return False


def can_move(board: Board) -> bool:
    """判断是否还能继续游戏。"""
    return bool(empty_cells(board)) or has_adjacent_pair(board)


def is_lost(board: Board) -> bool:
    """棋盘已满且没有可以合并的相邻格子。"""
    return not can_move(board)


def get_max_tile(board: Board) -> int:
    """取得当前最大的数字。"""
    return max(max(row) for row in board)
