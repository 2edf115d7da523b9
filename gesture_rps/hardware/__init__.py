"""
硬件抽象层模块
Hardware Abstraction Layer
"""
from .camera_base import CameraBase
from .usb_camera import USBCamera

__all__ = ['CameraBase', 'USBCamera']
