"""
游戏阶段枚举
Game Phase Enumeration
"""
from enum import Enum


class GamePhase(Enum):
    """游戏阶段枚举"""
    IDLE = "idle"              # 空闲，等待开始
    COUNTDOWN = "countdown"    # 倒计时
    PLAYING = "playing"        # 出拳窗口（等待采样手势）
    RESULT = "result"          # 显示回合结果
    GAME_OVER = "game_over"    # 整局结束，等待重置

    def __str__(self):
        return self.name
