"""
键盘控制
Keyboard Controls - 按键 -> 用户意图
"""
from enum import Enum, auto
from typing import Optional
from ..game.state_machine import GamePhase

KEY_ENTER = 13
KEY_ESC = 27
KEY_SPACE = 32


class Intent(Enum):
    """用户意图"""
    START_ROUND = auto()
    RESET = auto()
    RETRY_CAMERA = auto()
    QUIT = auto()


def resolve_key(key: int, phase: GamePhase, has_error: bool = False) -> Optional[Intent]:
    """
    将按键映射为用户意图

    空格/回车相当于界面上的主按钮：空闲/结果阶段开始回合，
    整局结束时重新开始，错误面板上重试摄像头。

    Args:
        key: cv2.waitKey 返回值（-1 表示无按键）
        phase: 当前游戏阶段
        has_error: 是否正在显示错误面板

    Returns:
        Optional[Intent]: 对应意图，无效按键返回 None
    """
    if key < 0:
        return None
    key &= 0xFF

    if key in (ord('q'), ord('Q'), KEY_ESC):
        return Intent.QUIT
    if key in (ord('c'), ord('C')):
        return Intent.RETRY_CAMERA
    if key in (ord('r'), ord('R')):
        return Intent.RESET

    if key in (KEY_SPACE, KEY_ENTER):
        if has_error:
            return Intent.RETRY_CAMERA
        if phase in (GamePhase.IDLE, GamePhase.RESULT):
            return Intent.START_ROUND
        if phase == GamePhase.GAME_OVER:
            return Intent.RESET

    return None
