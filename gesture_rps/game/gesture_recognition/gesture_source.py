"""
玩家手势来源
Gesture Source - 回合引擎只通过 current_gesture() 拉取当前手势
"""
from abc import ABC, abstractmethod
from typing import Optional
import numpy as np
from .recognition_result import RecognitionResult
from .recognizer_base import RecognizerBase
from ..game_logic.gesture import Gesture
from ...utils.logger import setup_logger

logger = setup_logger("RPS.GestureSource")


class GestureSource(ABC):
    """手势来源抽象基类"""

    @abstractmethod
    def current_gesture(self) -> Gesture:
        """
        非阻塞地读取最近一次识别出的手势

        Returns:
            Gesture: 当前手势，没有可识别的手时为 Gesture.NONE
        """
        pass


class FrameGestureSource(GestureSource):
    """
    逐帧识别的手势来源

    主循环每帧调用 poll(frame)，本类只保存最新结果；
    回合引擎在采样时刻读取 current_gesture()。
    """

    def __init__(self, recognizer: RecognizerBase, min_confidence: float = 0.0):
        """
        Args:
            recognizer: 手势识别器
            min_confidence: 低于此置信度的结果按 NONE 记录
        """
        self.recognizer = recognizer
        self.min_confidence = min_confidence
        self._latest = RecognitionResult.empty()
        self.frame_count = 0

    @property
    def latest_result(self) -> RecognitionResult:
        """最近一次识别结果（含置信度，供界面显示）"""
        return self._latest

    def current_gesture(self) -> Gesture:
        return self._latest.gesture

    def poll(self, frame: Optional[np.ndarray]) -> RecognitionResult:
        """
        识别一帧并更新最新结果

        Args:
            frame: BGR 图像；为 None（取帧失败）时结果记为 NONE

        Returns:
            RecognitionResult: 更新后的最新结果
        """
        self.frame_count += 1

        if frame is None:
            self._latest = RecognitionResult.empty()
            return self._latest

        try:
            result = self.recognizer.recognize(frame)
        except Exception as e:
            logger.warning(f"手势识别失败: {e}")
            result = RecognitionResult.empty()

        if result.gesture != Gesture.NONE and result.confidence < self.min_confidence:
            logger.debug(f"置信度 {result.confidence:.3f} 低于阈值 {self.min_confidence}")
            result = RecognitionResult(gesture=Gesture.NONE, confidence=result.confidence,
                                       label=result.label, timestamp=result.timestamp)

        self._latest = result
        return result

    def clear(self):
        """清空最新结果（例如摄像头断开时）"""
        self._latest = RecognitionResult.empty()
