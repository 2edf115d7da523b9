"""
游戏状态机
Game State Machine
"""
from typing import Callable, Dict, List
from .game_state import GamePhase
from ...utils.logger import setup_logger

logger = setup_logger("RPS.GameStateMachine")


class GameStateMachine:
    """游戏状态机类"""

    # 状态转换规则
    VALID_TRANSITIONS: Dict[GamePhase, List[GamePhase]] = {
        GamePhase.IDLE: [GamePhase.COUNTDOWN],
        GamePhase.COUNTDOWN: [GamePhase.PLAYING, GamePhase.IDLE],
        GamePhase.PLAYING: [GamePhase.RESULT, GamePhase.IDLE],
        GamePhase.RESULT: [GamePhase.COUNTDOWN, GamePhase.GAME_OVER, GamePhase.IDLE],
        GamePhase.GAME_OVER: [GamePhase.IDLE],
    }

    def __init__(self, initial_state: GamePhase = GamePhase.IDLE):
        """
        初始化状态机

        Args:
            initial_state: 初始状态
        """
        self.current_state = initial_state
        self.exit_handlers: Dict[GamePhase, Callable] = {}
        self.state_handlers: Dict[GamePhase, Callable] = {}

        logger.info(f"游戏状态机初始化，初始状态: {self.current_state}")

    def register_exit_handler(self, state: GamePhase, handler: Callable):
        """
        注册离开状态时的处理函数

        Args:
            state: 状态
            handler: 处理函数
        """
        self.exit_handlers[state] = handler
        logger.debug(f"注册离开处理函数: {state}")

    def register_state_handler(self, state: GamePhase, handler: Callable):
        """
        注册进入状态时的处理函数

        Args:
            state: 状态
            handler: 处理函数
        """
        self.state_handlers[state] = handler
        logger.debug(f"注册状态处理函数: {state}")

    def transition_to(self, new_state: GamePhase, force: bool = False) -> bool:
        """
        转换到新状态

        先执行离开旧状态的处理函数，再执行进入新状态的处理函数，
        其中抛出的异常会向上传播给调用方。

        Args:
            new_state: 新状态
            force: 是否强制转换（忽略转换规则）

        Returns:
            bool: 转换是否成功
        """
        if not force and not self.can_transition_to(new_state):
            logger.warning(f"无效的状态转换: {self.current_state} -> {new_state}")
            return False

        old_state = self.current_state

        exit_handler = self.exit_handlers.get(old_state)
        if exit_handler:
            exit_handler()

        self.current_state = new_state

        logger.info(f"状态转换: {old_state} -> {new_state}")

        state_handler = self.state_handlers.get(new_state)
        if state_handler:
            state_handler()

        return True

    def get_current_state(self) -> GamePhase:
        """获取当前状态"""
        return self.current_state

    def can_transition_to(self, state: GamePhase) -> bool:
        """
        检查是否可以转换到指定状态

        Args:
            state: 目标状态

        Returns:
            bool: 是否可以转换
        """
        return state in self.VALID_TRANSITIONS.get(self.current_state, [])

    def is_in_state(self, *states: GamePhase) -> bool:
        """检查是否处于给定状态之一"""
        return self.current_state in states
