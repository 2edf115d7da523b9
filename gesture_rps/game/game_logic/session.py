"""
游戏会话数据
Game Session Data
"""
from dataclasses import dataclass, field, replace
from typing import Optional
from .gesture import Gesture
from .game_rules import GameResult, RoundOutcome
from ..state_machine.game_state import GamePhase


@dataclass(frozen=True)
class Score:
    """比分（只增不减，仅在新游戏时清零）"""
    player: int = 0
    bot: int = 0

    def record(self, result: GameResult) -> "Score":
        """
        根据回合结果返回新的比分

        Args:
            result: 回合结果类型

        Returns:
            Score: 决定性结果加一分后的比分；平局/无效原样返回
        """
        if result == GameResult.PLAYER_WIN:
            return replace(self, player=self.player + 1)
        if result == GameResult.BOT_WIN:
            return replace(self, bot=self.bot + 1)
        return self

    def has_winner(self, winning_score: int) -> bool:
        return self.player >= winning_score or self.bot >= winning_score

    def to_dict(self) -> dict:
        return {'player': self.player, 'bot': self.bot}


@dataclass(frozen=True)
class GameSession:
    """
    游戏会话快照

    由 RoundEngine 独占持有；每次变化都会替换成新的实例，
    因此交给界面层的对象始终是只读的。
    """
    phase: GamePhase = GamePhase.IDLE
    score: Score = field(default_factory=Score)
    player_gesture: Gesture = Gesture.NONE
    bot_gesture: Gesture = Gesture.NONE
    countdown: int = 3
    outcome: Optional[RoundOutcome] = None

    @classmethod
    def initial(cls, countdown_seconds: int = 3) -> "GameSession":
        """创建初始会话（空闲、零比分）"""
        return cls(countdown=countdown_seconds)

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'phase': self.phase.value,
            'score': self.score.to_dict(),
            'player_gesture': self.player_gesture.value,
            'bot_gesture': self.bot_gesture.value,
            'countdown': self.countdown,
            'outcome': self.outcome.to_dict() if self.outcome else None
        }
