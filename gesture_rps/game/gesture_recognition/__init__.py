"""
手势识别模块
Gesture Recognition Module
"""
from .recognition_result import RecognitionResult
from .recognizer_base import RecognizerBase
from .gesture_source import GestureSource, FrameGestureSource
from .mediapipe_recognizer import MediaPipeRecognizer
from .yolo_recognizer import YOLORecognizer
from .recognizer_factory import RecognizerFactory

__all__ = [
    'RecognitionResult',
    'RecognizerBase',
    'GestureSource',
    'FrameGestureSource',
    'MediaPipeRecognizer',
    'YOLORecognizer',
    'RecognizerFactory'
]
