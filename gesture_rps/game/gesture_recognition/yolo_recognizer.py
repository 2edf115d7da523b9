"""
YOLO 手势识别器
Gesture Recognizer using an ultralytics YOLO hand-gesture detector
"""
from pathlib import Path
from typing import Optional
import numpy as np
from .recognition_result import RecognitionResult
from .recognizer_base import RecognizerBase
from ..game_logic.gesture import Gesture
from ...utils.exceptions import RecognitionException
from ...utils.logger import setup_logger

logger = setup_logger("RPS.YOLORecognizer")

# 导入 YOLOv8
try:
    from ultralytics import YOLO
    YOLO_AVAILABLE = True
except ImportError as e:
    logger.warning(f"YOLOv8 未安装: {e}")
    YOLO_AVAILABLE = False
    YOLO = None

# 导入 huggingface_hub（用于下载 HuggingFace 模型）
try:
    from huggingface_hub import hf_hub_download
    HF_HUB_AVAILABLE = True
except ImportError:
    HF_HUB_AVAILABLE = False
    hf_hub_download = None

DEFAULT_MODEL_ID = "lewiswatson/yolov8x-tuned-hand-gestures"
DEFAULT_MODEL_FILE = "weights/best.pt"

# 类别名关键字 -> 手势
CLASS_KEYWORDS = (
    (Gesture.ROCK, ('rock', 'fist', 'closed')),
    (Gesture.PAPER, ('paper', 'open', 'palm', 'five')),
    (Gesture.SCISSORS, ('scissors', 'scissor', 'peace', 'victory', 'two')),
)


def map_class_name(class_name: str) -> Gesture:
    """
    将模型输出的类别名称映射到手势

    Args:
        class_name: 模型输出的类别名称

    Returns:
        Gesture: 对应的手势，无法映射时为 Gesture.NONE
    """
    gesture = Gesture.from_string(class_name)
    if gesture != Gesture.NONE:
        return gesture

    class_name_lower = class_name.lower()
    for gesture, keywords in CLASS_KEYWORDS:
        if any(keyword in class_name_lower for keyword in keywords):
            return gesture
    return Gesture.NONE


class YOLORecognizer(RecognizerBase):
    """手势识别器类（基于 YOLOv8 手势检测模型）"""

    def __init__(self,
                 model_path: Optional[str] = None,
                 model_id: str = DEFAULT_MODEL_ID,
                 model_file: str = DEFAULT_MODEL_FILE,
                 min_detection_confidence: float = 0.5,
                 device: Optional[str] = None):
        """
        初始化手势识别器

        Args:
            model_path: 本地 .pt 模型路径，None 时查找 models/ 目录或从 HuggingFace 下载
            model_id: HuggingFace 模型仓库ID
            model_file: 仓库中的权重文件名
            min_detection_confidence: 检测最小置信度
            device: 计算设备（cuda/mps/cpu），None 自动检测
        """
        if not YOLO_AVAILABLE:
            raise ImportError("YOLOv8 未安装，请运行: pip install ultralytics")

        self.min_detection_confidence = min_detection_confidence
        self.device = device or self._detect_device()
        logger.info(f"使用设备: {self.device}")

        self.model_path = self._resolve_model_path(model_path, model_id, model_file)
        self.model = YOLO(self.model_path)
        logger.info(f"成功加载模型: {self.model_path}")

    def _resolve_model_path(self, model_path: Optional[str], model_id: str, model_file: str) -> str:
        project_root = Path(__file__).parent.parent.parent.parent

        if model_path:
            path = Path(model_path)
            if not path.is_absolute() and not path.exists():
                path = project_root / path
            if not path.exists():
                raise RecognitionException(f"模型文件不存在: {model_path}", recognizer_type="yolo")
            return str(path)

        local_model_paths = [
            project_root / "models" / "yolov8x-tuned-hand-gestures.pt",
            project_root / "models" / "best.pt",
        ]
        for local_path in local_model_paths:
            if local_path.exists():
                logger.info(f"找到本地模型文件: {local_path}")
                return str(local_path)

        return self._download_huggingface_model(model_id, model_file)

    def _download_huggingface_model(self, model_id: str, filename: str) -> str:
        """
        从 HuggingFace 下载模型文件

        Args:
            model_id: HuggingFace 模型ID
            filename: 仓库内文件名

        Returns:
            str: 下载的模型文件路径（HuggingFace 缓存目录）

        Raises:
            RecognitionException: huggingface_hub 不可用或下载失败
        """
        if not HF_HUB_AVAILABLE:
            raise RecognitionException(
                "huggingface_hub 未安装，无法下载模型，请运行: pip install huggingface_hub",
                recognizer_type="yolo")

        logger.info(f"正在从 HuggingFace 下载模型: {model_id}/{filename}")
        try:
            return hf_hub_download(repo_id=model_id, filename=filename)
        except Exception as e:
            raise RecognitionException(f"无法从 HuggingFace 下载模型 {model_id}: {e}",
                                       recognizer_type="yolo") from e

    def _detect_device(self) -> str:
        """
        自动检测可用的计算设备（GPU/CPU）

        Returns:
            str: 设备名称 ('cuda', 'mps', 'cpu')
        """
        try:
            import torch
        except ImportError:
            logger.warning("PyTorch 未安装，使用 CPU")
            return 'cpu'

        if torch.cuda.is_available():
            logger.info(f"检测到 GPU: {torch.cuda.get_device_name(0)}")
            return 'cuda'
        if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
            logger.info("检测到 Apple Silicon GPU (MPS)")
            return 'mps'
        return 'cpu'

    def recognize(self, image: np.ndarray) -> RecognitionResult:
        """
        识别手势（取置信度最高的检测框）

        Args:
            image: 输入图像（BGR格式，numpy数组）

        Returns:
            RecognitionResult: 识别结果
        """
        results = self.model.predict(image, conf=self.min_detection_confidence,
                                     verbose=False, device=self.device)
        if len(results) == 0 or results[0].boxes is None or len(results[0].boxes) == 0:
            return RecognitionResult.empty()

        boxes = results[0].boxes
        confidences = boxes.conf.cpu().numpy()
        class_ids = boxes.cls.cpu().numpy().astype(int)
        class_names = results[0].names or {}

        max_idx = int(np.argmax(confidences))
        best_confidence = float(confidences[max_idx])
        best_class_id = int(class_ids[max_idx])
        best_class_name = class_names.get(best_class_id, f"class_{best_class_id}")

        logger.debug(f"检测到类别: {best_class_name}, 置信度: {best_confidence:.3f}")
        return RecognitionResult(gesture=map_class_name(best_class_name),
                                 confidence=best_confidence, label=best_class_name)

    def get_model_info(self) -> dict:
        return {
            'type': 'yolo',
            'model_path': self.model_path,
            'device': self.device
        }
