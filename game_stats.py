"""
游戏统计
最高分、游戏局数、胜利局数和已解锁成就，只保存在内存中
"""

from typing import Any, Dict, List


class GameStats:
    def __init__(self):
        self.clear()

    def clear(self) -> None:
        """清空所有统计数据。"""
        self.best_score = 0
        self.games_played = 0
        self.games_won = 0
        self.achievements: List[str] = []

    def update_best_score(self, score: int) -> bool:
        """分数超过最高分时更新，返回是否更新。"""
        if score > self.best_score:
            self.best_score = score
            return True
        return False

    def increment_games_played(self) -> None:
        self.games_played += 1

    def increment_games_won(self) -> None:
        self.games_won += 1

    def unlock_achievement(self, achievement_id: str) -> bool:
        """记录一个成就，已解锁过的返回 False。"""
        if achievement_id in self.achievements:
            return False
        self.achievements.append(achievement_id)
        return True

    def get_statistics(self) -> Dict[str, Any]:
        return {
            "best_score": self.best_score,
            "games_played": self.games_played,
            "games_won": self.games_won,
            "achievements": list(self.achievements),
        }
