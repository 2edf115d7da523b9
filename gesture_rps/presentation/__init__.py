"""
界面层模块
Presentation Module
"""
from .view_model import ViewModel, VisionStatus, build_view_model
from .controls import Intent, resolve_key
from .overlay import OverlayRenderer

__all__ = [
    'ViewModel',
    'VisionStatus',
    'build_view_model',
    'Intent',
    'resolve_key',
    'OverlayRenderer'
]
