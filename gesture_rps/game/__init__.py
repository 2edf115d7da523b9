"""
游戏模块
Game Module
"""
from .game_logic import (
    Gesture, GameRules, GameResult, RoundOutcome, GameSession, Score, GameSettings
)
from .state_machine import GamePhase, GameStateMachine
from .scheduler import Scheduler, TimerHandle
from .gesture_recognition import GestureSource, FrameGestureSource, RecognitionResult
from .round_engine import RoundEngine

__all__ = [
    'Gesture',
    'GameRules',
    'GameResult',
    'RoundOutcome',
    'GameSession',
    'Score',
    'GameSettings',
    'GamePhase',
    'GameStateMachine',
    'Scheduler',
    'TimerHandle',
    'GestureSource',
    'FrameGestureSource',
    'RecognitionResult',
    'RoundEngine'
]
