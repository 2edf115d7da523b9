"""
摄像头手势剪刀石头布
Gesture Rock Paper Scissors
"""
__version__ = "0.1.0"
