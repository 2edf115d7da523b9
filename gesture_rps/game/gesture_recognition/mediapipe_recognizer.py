"""
MediaPipe 手势识别器
Gesture Recognizer using MediaPipe Tasks Vision
"""
import time
import urllib.request
from pathlib import Path
from typing import Optional
import cv2
import numpy as np
from .recognition_result import RecognitionResult
from .recognizer_base import RecognizerBase
from ..game_logic.gesture import Gesture
from ...utils.exceptions import RecognitionException
from ...utils.logger import setup_logger

logger = setup_logger("RPS.MediaPipeRecognizer")

# 导入 MediaPipe Tasks
try:
    import mediapipe as mp
    from mediapipe.tasks import python as mp_python
    from mediapipe.tasks.python import vision
    MEDIAPIPE_AVAILABLE = True
except ImportError as e:
    logger.warning(f"MediaPipe 未安装: {e}")
    MEDIAPIPE_AVAILABLE = False
    mp = None
    mp_python = None
    vision = None

DEFAULT_MODEL_URL = (
    "https://storage.googleapis.com/mediapipe-models/gesture_recognizer/"
    "gesture_recognizer/float16/1/gesture_recognizer.task"
)
DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent.parent / "models" / "gesture_recognizer.task"

# MediaPipe 内置手势类别 -> 游戏手势
CATEGORY_MAP = {
    'Closed_Fist': Gesture.ROCK,
    'Open_Palm': Gesture.PAPER,
    'Victory': Gesture.SCISSORS,
}


def map_category(category_name: Optional[str]) -> Gesture:
    """
    将 MediaPipe 类别名映射到游戏手势

    Args:
        category_name: 类别名（如 Closed_Fist、Thumb_Up、None）

    Returns:
        Gesture: 对应手势，其他类别均为 Gesture.NONE
    """
    return CATEGORY_MAP.get(category_name or "", Gesture.NONE)


def download_model(url: str, output_path: Path) -> Path:
    """
    下载 MediaPipe 模型文件

    Args:
        url: 模型下载地址
        output_path: 保存路径

    Returns:
        Path: 保存路径

    Raises:
        RecognitionException: 下载失败
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"正在下载 MediaPipe 手势模型: {url} -> {output_path}")
    try:
        urllib.request.urlretrieve(url, str(output_path))
    except OSError as e:
        raise RecognitionException(f"模型下载失败: {e}", recognizer_type="mediapipe") from e
    logger.info(f"模型下载完成: {output_path.stat().st_size / 1024 / 1024:.2f} MB")
    return output_path


class MediaPipeRecognizer(RecognizerBase):
    """手势识别器类（基于 MediaPipe GestureRecognizer，VIDEO 模式）"""

    def __init__(self,
                 model_path: Optional[str] = None,
                 model_url: str = DEFAULT_MODEL_URL,
                 min_detection_confidence: float = 0.5,
                 min_tracking_confidence: float = 0.5,
                 delegate: str = "CPU",
                 auto_download: bool = True):
        """
        初始化手势识别器

        Args:
            model_path: .task 模型文件路径，None 使用 models/gesture_recognizer.task
            model_url: 本地不存在时的下载地址
            min_detection_confidence: 手部检测最小置信度
            min_tracking_confidence: 手部跟踪最小置信度
            delegate: 推理后端（CPU 或 GPU）
            auto_download: 模型文件不存在时是否自动下载
        """
        if not MEDIAPIPE_AVAILABLE:
            raise ImportError("MediaPipe 未安装，请运行: pip install mediapipe")

        self.model_path = Path(model_path) if model_path else DEFAULT_MODEL_PATH
        if not self.model_path.is_absolute() and not self.model_path.exists():
            project_root = Path(__file__).parent.parent.parent.parent
            self.model_path = project_root / self.model_path

        if not self.model_path.exists():
            if not auto_download:
                raise RecognitionException(f"模型文件不存在: {self.model_path}",
                                           recognizer_type="mediapipe")
            download_model(model_url, self.model_path)

        delegate_enum = (mp_python.BaseOptions.Delegate.GPU if delegate.upper() == "GPU"
                         else mp_python.BaseOptions.Delegate.CPU)
        options = vision.GestureRecognizerOptions(
            base_options=mp_python.BaseOptions(model_asset_path=str(self.model_path),
                                               delegate=delegate_enum),
            running_mode=vision.RunningMode.VIDEO,
            num_hands=1,
            min_hand_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence
        )
        self.delegate = delegate.upper()
        self._recognizer = vision.GestureRecognizer.create_from_options(options)
        self._last_timestamp_ms = 0

        logger.info(f"MediaPipe 手势识别器初始化成功: {self.model_path} ({self.delegate})")

    def _next_timestamp_ms(self) -> int:
        # VIDEO 模式要求时间戳严格递增
        timestamp_ms = int(time.monotonic() * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms
        return timestamp_ms

    def recognize(self, image: np.ndarray) -> RecognitionResult:
        """
        识别手势

        Args:
            image: 输入图像（BGR格式，numpy数组）

        Returns:
            RecognitionResult: 识别结果
        """
        rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb)
        result = self._recognizer.recognize_for_video(mp_image, self._next_timestamp_ms())

        if not result.gestures or not result.gestures[0]:
            return RecognitionResult.empty()

        top = result.gestures[0][0]
        gesture = map_category(top.category_name)
        logger.debug(f"检测到类别: {top.category_name}, 置信度: {top.score:.3f}")
        return RecognitionResult(gesture=gesture, confidence=float(top.score),
                                 label=top.category_name)

    def close(self):
        """释放识别器"""
        if self._recognizer is not None:
            self._recognizer.close()
            self._recognizer = None
            logger.info("MediaPipe 手势识别器已关闭")

    def get_model_info(self) -> dict:
        return {
            'type': 'mediapipe',
            'model_path': str(self.model_path),
            'delegate': self.delegate
        }
