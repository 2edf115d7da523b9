"""
游戏逻辑模块
Game Logic Module
"""
from .gesture import Gesture, PLAYABLE_GESTURES
from .game_rules import GameRules, GameResult, RoundOutcome, RESULT_MESSAGES
from .session import GameSession, Score
from .settings import GameSettings

__all__ = [
    'Gesture',
    'PLAYABLE_GESTURES',
    'GameRules',
    'GameResult',
    'RoundOutcome',
    'RESULT_MESSAGES',
    'GameSession',
    'Score',
    'GameSettings'
]
