"""
手势识别器工厂
Gesture Recognizer Factory

支持创建不同类型的识别器（MediaPipe、YOLO）
"""
from typing import Any, Dict
from .recognizer_base import RecognizerBase
from .mediapipe_recognizer import MediaPipeRecognizer, DEFAULT_MODEL_URL
from .yolo_recognizer import YOLORecognizer, DEFAULT_MODEL_ID, DEFAULT_MODEL_FILE
from ...utils.logger import setup_logger

logger = setup_logger("RPS.RecognizerFactory")

SUPPORTED_TYPES = ('mediapipe', 'yolo')


class RecognizerFactory:
    """手势识别器工厂类"""

    @staticmethod
    def create_recognizer(recognizer_type: str = "mediapipe", **kwargs) -> RecognizerBase:
        """
        创建手势识别器

        Args:
            recognizer_type: 识别器类型 ("mediapipe" 或 "yolo")
            **kwargs: 传给识别器构造函数的参数

        Returns:
            RecognizerBase: 识别器实例

        Raises:
            ValueError: 不支持的识别器类型
            ImportError: 必要的依赖未安装
        """
        recognizer_type = recognizer_type.lower()

        if recognizer_type == "mediapipe":
            logger.info("创建 MediaPipe 手势识别器")
            return MediaPipeRecognizer(**kwargs)

        if recognizer_type == "yolo":
            logger.info("创建 YOLO 手势识别器")
            return YOLORecognizer(**kwargs)

        raise ValueError(
            f"不支持的识别器类型: {recognizer_type}\n"
            f"支持的类型: {', '.join(SUPPORTED_TYPES)}"
        )

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> RecognizerBase:
        """
        从配置字典创建识别器

        Args:
            config: game.gesture_recognition 配置节

        Returns:
            RecognizerBase: 识别器实例
        """
        recognizer_type = str(config.get('type', 'mediapipe')).lower()
        min_detection_confidence = config.get('min_detection_confidence', 0.5)

        if recognizer_type == "mediapipe":
            return RecognizerFactory.create_recognizer(
                "mediapipe",
                model_path=config.get('model_path'),
                model_url=config.get('model_url', DEFAULT_MODEL_URL),
                min_detection_confidence=min_detection_confidence,
                min_tracking_confidence=config.get('min_tracking_confidence', 0.5),
                delegate=config.get('delegate', 'CPU'),
                auto_download=config.get('auto_download', True)
            )

        if recognizer_type == "yolo":
            return RecognizerFactory.create_recognizer(
                "yolo",
                model_path=config.get('model_path'),
                model_id=config.get('model_id', DEFAULT_MODEL_ID),
                model_file=config.get('model_file', DEFAULT_MODEL_FILE),
                min_detection_confidence=min_detection_confidence,
                device=config.get('device')
            )

        raise ValueError(f"不支持的识别器类型: {recognizer_type}")
