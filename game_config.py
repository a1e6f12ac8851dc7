"""
2048 配置文件
包含引擎和 Web 应用的默认参数
"""


class GameConfig:
    """引擎配置"""

    # 棋盘
    SIZE = 4
    MAX_SIZE = 16
    TARGET_VALUE = 2048

    # 撤回最多保存多少步
    UNDO_DEPTH = 1

    # 新生成数字为 4 的概率
    FOUR_PROBABILITY = 0.1


class AppConfig:
    """Flask 应用配置，可以用 FLASK_ 前缀的环境变量覆盖"""

    SECRET_KEY = "change_this_to_a_random_secret_key"

    # 每个进程最多保留多少局进行中的游戏
    MAX_GAMES = 1000
