"""
撤回历史
固定容量的环形缓冲区，保存移动前的 (棋盘, 分数) 快照
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from game2048 import Board, ConfigurationError


@dataclass(frozen=True)
class Snapshot:
    """不可变的 (棋盘, 分数) 快照。"""

    grid: Tuple[Tuple[int, ...], ...]
    score: int

    @classmethod
    def take(cls, board: Board, score: int) -> "Snapshot":
        return cls(tuple(tuple(row) for row in board), score)

    def to_board(self) -> Board:
        """返回一份可修改的棋盘副本。"""
        return [list(row) for row in self.grid]


class History:
    """
    撤回栈
    容量满时丢弃最旧的快照，容量为 0 表示不允许撤回
    """

    def __init__(self, capacity: int = 1):
        if capacity < 0:
            raise ConfigurationError(f"undo depth must be >= 0, got {capacity}")
        self.capacity = capacity
        self._slots: List[Optional[Snapshot]] = [None] * capacity
        self._top = 0  # 下一个写入位置
        self._count = 0

    def __len__(self):
        return self._count

    def push(self, snapshot: Snapshot) -> None:
        if self.capacity == 0:
            return
        self._slots[self._top] = snapshot
        self._top = (self._top + 1) % self.capacity
        self._count = min(self._count + 1, self.capacity)

    def pop(self) -> Optional[Snapshot]:
        """取出最近的快照，栈为空时返回 None。"""
        if self._count == 0:
            return None
        self._top = (self._top - 1) % self.capacity
        snapshot = self._slots[self._top]
        self._slots[self._top] = None
        self._count -= 1
        return snapshot

    def peek(self) -> Optional[Snapshot]:
        if self._count == 0:
            return None
        return self._slots[(self._top - 1) % self.capacity]

    def clear(self) -> None:
        self._slots = [None] * self.capacity
        self._top = 0
        self._count = 0
