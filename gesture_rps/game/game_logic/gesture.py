"""
手势枚举类型
Gesture Enumeration
"""
from enum import Enum


class Gesture(Enum):
    """手势类型枚举"""
    NONE = "none"          # 未检测到可识别的手势（合法的采样值）
    ROCK = "rock"          # 石头
    PAPER = "paper"        # 布
    SCISSORS = "scissors"  # 剪刀

    def __str__(self):
        return self.value

    @property
    def display_name(self) -> str:
        """界面显示用的名称（ROCK / PAPER / SCISSORS / NONE）"""
        return self.name

    @classmethod
    def from_string(cls, value: str) -> "Gesture":
        """
        从字符串创建手势枚举

        Args:
            value: 手势字符串（rock, paper, scissors，大小写不敏感）

        Returns:
            Gesture: 手势枚举值，无法识别时返回 NONE
        """
        value_lower = str(value).strip().lower()
        for gesture in cls:
            if gesture.value == value_lower:
                return gesture
        return cls.NONE


# 机器人可出的手势（NONE 不参与）
PLAYABLE_GESTURES = (Gesture.ROCK, Gesture.PAPER, Gesture.SCISSORS)
