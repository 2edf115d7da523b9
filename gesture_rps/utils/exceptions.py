"""
自定义异常类
Custom Exception Classes

所有异常都带 message 属性；user_message 是界面错误面板上显示的英文提示。
"""
from typing import Optional


class GestureRPSError(Exception):
    """本项目异常基类"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def user_message(self) -> str:
        return self.message


class HardwareException(GestureRPSError):
    """硬件相关异常"""

    def __init__(self, message: str, hardware_type: Optional[str] = None):
        super().__init__(message)
        self.hardware_type = hardware_type


class CameraException(HardwareException):
    """摄像头异常（无设备、无法读帧、运行中断开）"""

    def __init__(self, message: str, device_id: Optional[int] = None):
        super().__init__(message, hardware_type="camera")
        self.device_id = device_id

    @property
    def user_message(self) -> str:
        if self.message.startswith(("Camera error", "No camera")):
            return self.message
        return f"Camera error: {self.message}"


class RecognitionException(GestureRPSError):
    """手势识别异常（模型缺失、下载失败、推理出错）"""

    def __init__(self, message: str, recognizer_type: Optional[str] = None):
        super().__init__(message)
        self.recognizer_type = recognizer_type

    @property
    def user_message(self) -> str:
        return f"System error: {self.message}"


class GameException(GestureRPSError):
    """游戏流程异常"""

    def __init__(self, message: str, game_state: Optional[str] = None):
        super().__init__(message)
        self.game_state = game_state


class ConfigurationException(GestureRPSError):
    """配置异常"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message)
        self.config_key = config_key
