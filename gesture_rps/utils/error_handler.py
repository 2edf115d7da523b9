"""
错误处理工具模块
Error Handler Utility Module

按异常类型分派到处理函数；未登记的类型按 MRO 向上查找最近的基类。
"""
import logging
import traceback
from typing import Callable, Dict, Optional
from .exceptions import (
    CameraException, ConfigurationException, GameException, GestureRPSError,
    HardwareException, RecognitionException
)
from .logger import setup_logger

logger = setup_logger("RPS.ErrorHandler")

ErrorCallback = Callable[[Exception, Optional[str]], None]


class ErrorHandler:
    """错误处理器类"""

    def __init__(self):
        self.error_callbacks: Dict[type, ErrorCallback] = {
            CameraException: self._log_camera_error,
            HardwareException: self._log_with_attribute("硬件错误", "hardware_type"),
            RecognitionException: self._log_with_attribute("手势识别错误", "recognizer_type",
                                                           level=logging.WARNING),
            GameException: self._log_with_attribute("游戏流程错误", "game_state"),
            ConfigurationException: self._log_with_attribute("配置错误", "config_key"),
        }

    def register_handler(self, exception_type: type, handler: ErrorCallback):
        """
        注册（或覆盖）某类异常的处理函数

        Args:
            exception_type: 异常类型
            handler: 处理函数，签名为 handler(exception, context)
        """
        self.error_callbacks[exception_type] = handler
        logger.debug(f"注册错误处理函数: {exception_type.__name__}")

    def find_handler(self, exception: Exception) -> Optional[ErrorCallback]:
        for exc_type in type(exception).__mro__:
            if exc_type in self.error_callbacks:
                return self.error_callbacks[exc_type]
        return None

    def handle(self, exception: Exception, context: Optional[str] = None) -> bool:
        """
        记录并分派异常

        Args:
            exception: 异常对象
            context: 发生位置的说明（如 "连接摄像头"）

        Returns:
            bool: 是否有专门的处理函数处理了该异常
        """
        where = f" (上下文: {context})" if context else ""
        logger.error(f"异常发生{where}: {exception}")

        handler = self.find_handler(exception)
        if handler is None:
            logger.error(f"未处理的异常: {type(exception).__name__}: {exception}")
            logger.debug("".join(traceback.format_exception(
                type(exception), exception, exception.__traceback__)))
            return False

        try:
            handler(exception, context)
        except Exception as e:
            logger.error(f"错误处理函数执行异常: {e}", exc_info=True)
            return False
        return True

    @staticmethod
    def user_message(exception: Exception) -> str:
        """界面上显示的错误文字"""
        if isinstance(exception, GestureRPSError):
            return exception.user_message
        return f"System error: {exception}"

    @staticmethod
    def _log_camera_error(exception: CameraException, context: Optional[str]):
        device = exception.device_id if exception.device_id is not None else "-"
        logger.error(f"摄像头错误 [设备: {device}]: {exception.message}")

    @staticmethod
    def _log_with_attribute(label: str, attribute: str, level: int = logging.ERROR) -> ErrorCallback:
        def _log(exception: Exception, context: Optional[str]):
            logger.log(level, f"{label} [{attribute}={getattr(exception, attribute, None)}]: "
                              f"{exception}")
        return _log


# 全局错误处理器实例
global_error_handler = ErrorHandler()
