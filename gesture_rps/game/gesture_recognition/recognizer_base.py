"""
手势识别器抽象基类
Gesture Recognizer Base Class
"""
from abc import ABC, abstractmethod
import numpy as np
from .recognition_result import RecognitionResult


class RecognizerBase(ABC):
    """手势识别器抽象基类，定义所有识别器必须实现的接口"""

    @abstractmethod
    def recognize(self, image: np.ndarray) -> RecognitionResult:
        """
        识别一帧图像中的手势

        Args:
            image: 输入图像（BGR格式，numpy数组）

        Returns:
            RecognitionResult: 识别结果，无手时为 Gesture.NONE
        """
        pass

    def close(self):
        """释放模型资源（可选实现）"""
        pass

    def get_model_info(self) -> dict:
        """获取模型信息（可选实现）"""
        return {'type': self.__class__.__name__}
