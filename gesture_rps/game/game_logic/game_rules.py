"""
游戏规则实现
Game Rules Implementation
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from .gesture import Gesture, PLAYABLE_GESTURES
from ...utils.logger import setup_logger

logger = setup_logger("RPS.GameRules")


class GameResult(Enum):
    """回合结果类型枚举"""
    PLAYER_WIN = "player_win"      # 玩家获胜
    BOT_WIN = "bot_win"            # 机器人获胜
    DRAW = "draw"                  # 平局
    INVALID = "invalid"            # 无效（未检测到手）

    @property
    def is_decisive(self) -> bool:
        """是否为决定性结果（会改变比分）"""
        return self in (GameResult.PLAYER_WIN, GameResult.BOT_WIN)


# 每种结果对应的提示文字
RESULT_MESSAGES = {
    GameResult.PLAYER_WIN: "You Win!",
    GameResult.BOT_WIN: "Bot Wins!",
    GameResult.DRAW: "Draw!",
    GameResult.INVALID: "No Hand Detected",
}


@dataclass(frozen=True)
class RoundOutcome:
    """回合结果：结果类型 + 提示文字，计算后不可变"""
    result: GameResult
    message: str

    @property
    def is_decisive(self) -> bool:
        return self.result.is_decisive

    def to_dict(self) -> dict:
        """转换为字典"""
        return {'result': self.result.value, 'message': self.message}


class GameRules:
    """游戏规则类"""

    # 胜负规则：key胜value
    WIN_RULES = {
        Gesture.ROCK: Gesture.SCISSORS,      # 石头胜剪刀
        Gesture.PAPER: Gesture.ROCK,         # 布胜石头
        Gesture.SCISSORS: Gesture.PAPER      # 剪刀胜布
    }

    @staticmethod
    def judge(player_gesture: Gesture, bot_gesture: Gesture) -> GameResult:
        """
        判断回合结果类型

        按优先级：玩家无手势 -> 无效；相同 -> 平局；查胜负表 -> 玩家胜；否则机器人胜。
        机器人手势为 NONE 而玩家有手势时按机器人胜处理（胜负表中查不到）。

        Args:
            player_gesture: 玩家手势
            bot_gesture: 机器人手势

        Returns:
            GameResult: 回合结果类型
        """
        if player_gesture == Gesture.NONE:
            return GameResult.INVALID

        if player_gesture == bot_gesture:
            return GameResult.DRAW

        if GameRules.WIN_RULES.get(player_gesture) == bot_gesture:
            return GameResult.PLAYER_WIN

        return GameResult.BOT_WIN

    @staticmethod
    def resolve(player_gesture: Gesture, bot_gesture: Gesture) -> RoundOutcome:
        """
        计算回合结果（纯函数，不修改比分）

        Args:
            player_gesture: 玩家手势
            bot_gesture: 机器人手势

        Returns:
            RoundOutcome: 回合结果
        """
        result = GameRules.judge(player_gesture, bot_gesture)
        logger.debug(f"判定: 玩家={player_gesture}, 机器人={bot_gesture}, 结果={result.value}")
        return RoundOutcome(result=result, message=RESULT_MESSAGES[result])

    @staticmethod
    def get_winning_gesture(gesture: Gesture) -> Optional[Gesture]:
        """
        获取能战胜指定手势的手势

        Args:
            gesture: 目标手势

        Returns:
            Optional[Gesture]: 能战胜目标的手势，输入为 NONE 时返回 None
        """
        for winner, loser in GameRules.WIN_RULES.items():
            if loser == gesture:
                return winner
        return None

    @staticmethod
    def get_losing_gesture(gesture: Gesture) -> Optional[Gesture]:
        """获取会被指定手势战胜的手势"""
        return GameRules.WIN_RULES.get(gesture)

    @staticmethod
    def is_valid_gesture(gesture: Gesture) -> bool:
        """检查手势是否为可出的手势"""
        return gesture in PLAYABLE_GESTURES
