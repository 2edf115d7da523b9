"""
手势识别结果
Gesture Recognition Result
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from ..game_logic.gesture import Gesture


@dataclass(frozen=True)
class RecognitionResult:
    """手势识别结果数据类"""
    gesture: Gesture
    confidence: float = 0.0
    label: Optional[str] = None          # 模型输出的原始类别名
    timestamp: datetime = field(default_factory=datetime.now)

    @classmethod
    def empty(cls, label: Optional[str] = None) -> "RecognitionResult":
        """未检测到手时的结果"""
        return cls(gesture=Gesture.NONE, confidence=0.0, label=label)

    def is_valid(self, min_confidence: float = 0.0) -> bool:
        """
        检查识别结果是否有效

        Args:
            min_confidence: 最小置信度阈值

        Returns:
            bool: 手势可用且置信度不低于阈值
        """
        return self.gesture != Gesture.NONE and self.confidence >= min_confidence

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'gesture': self.gesture.value,
            'confidence': self.confidence,
            'label': self.label,
            'timestamp': self.timestamp.isoformat()
        }
