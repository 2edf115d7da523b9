"""
回合引擎
Round Engine - 持有游戏会话，驱动 倒计时 -> 出拳 -> 结果 -> 整局结束 的状态流转
"""
import random
from dataclasses import replace
from typing import Callable, List, Optional
from .game_logic import GameRules, GameSession, GameSettings, Gesture, PLAYABLE_GESTURES
from .gesture_recognition.gesture_source import GestureSource
from .scheduler import Scheduler, TimerHandle
from .state_machine import GamePhase, GameStateMachine
from ..utils.logger import setup_logger

logger = setup_logger("RPS.RoundEngine")

SessionListener = Callable[[GameSession], None]


class RoundEngine:
    """回合引擎类"""

    def __init__(self,
                 gesture_source: GestureSource,
                 scheduler: Scheduler,
                 settings: Optional[GameSettings] = None,
                 rng: Optional[random.Random] = None):
        """
        初始化回合引擎

        Args:
            gesture_source: 玩家手势来源（只在采样时读取一次）
            scheduler: 定时调度器（倒计时与采样定时都挂在上面）
            settings: 游戏参数，默认 3 分胜、3 秒倒计时、0.5 秒采样延迟
            rng: 随机数源，需提供 choice()；测试中可注入固定序列
        """
        self.gesture_source = gesture_source
        self.scheduler = scheduler
        self.settings = settings or GameSettings()
        self.rng = rng or random.Random()

        self._session = GameSession.initial(self.settings.countdown_seconds)
        self._listeners: List[SessionListener] = []
        # 待发布的快照；回调中再次调用引擎时只排队，由外层按顺序发布
        self._pending: List[GameSession] = []
        self._publishing = False

        # 同一时刻最多只有一个活动定时器（倒计时或采样）
        self._timer: Optional[TimerHandle] = None
        # 每次开局/重置递增，过期回调据此识别自己已失效
        self._round_id = 0

        self.state_machine = GameStateMachine(initial_state=GamePhase.IDLE)
        self._setup_state_handlers()

        logger.info(f"回合引擎初始化完成: 胜利分数={self.settings.winning_score}, "
                    f"倒计时={self.settings.countdown_seconds}s, "
                    f"采样延迟={self.settings.capture_delay}s")

    def _setup_state_handlers(self):
        """设置状态处理函数"""
        # 离开任何状态都作废当前定时器
        for phase in GamePhase:
            self.state_machine.register_exit_handler(phase, self._cancel_timer)

        self.state_machine.register_state_handler(GamePhase.COUNTDOWN, self._handle_countdown)
        self.state_machine.register_state_handler(GamePhase.PLAYING, self._handle_playing)

    # ------------------------------------------------------------------
    # 对外接口
    # ------------------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self.state_machine.get_current_state()

    def snapshot(self) -> GameSession:
        """获取当前会话快照（不可变）"""
        return self._session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        订阅会话变化

        Args:
            listener: 回调，每次状态或倒计时变化后收到新的会话快照

        Returns:
            Callable: 取消订阅函数
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def can_start_round(self) -> bool:
        return self.state_machine.is_in_state(GamePhase.IDLE, GamePhase.RESULT)

    def start_round(self) -> bool:
        """
        开始新回合（仅在 空闲 / 结果 阶段有效）

        Returns:
            bool: 是否已开始；回合进行中或整局已结束时返回 False
        """
        if not self.can_start_round():
            logger.warning(f"当前阶段 {self.phase} 不能开始新回合")
            return False

        self._round_id += 1
        logger.info(f"开始第 {self._round_id} 回合")
        self._session = replace(self._session,
                                bot_gesture=Gesture.NONE,
                                outcome=None,
                                countdown=self.settings.countdown_seconds)
        return self._transition(GamePhase.COUNTDOWN)

    def reset(self):
        """
        重置整局（任何阶段都可调用）

        取消挂起的定时器，比分清零，回到空闲阶段。
        """
        if not self.state_machine.is_in_state(GamePhase.GAME_OVER):
            logger.warning(f"在 {self.phase} 阶段重置游戏")

        self._round_id += 1
        self._cancel_timer()
        self._session = GameSession.initial(self.settings.countdown_seconds)
        self.state_machine.transition_to(GamePhase.IDLE, force=True)
        logger.info("游戏已重置")
        self._notify()

    def shutdown(self):
        """停止引擎：取消定时器并清空订阅"""
        self._cancel_timer()
        self._listeners.clear()
        self._pending.clear()
        logger.info("回合引擎已停止")

    # ------------------------------------------------------------------
    # 状态处理
    # ------------------------------------------------------------------

    def _handle_countdown(self):
        """进入倒计时：启动 1 秒重复定时器"""
        round_id = self._round_id
        self._timer = self.scheduler.call_every(
            self.settings.tick_interval,
            lambda: self._on_countdown_tick(round_id),
            name=f"countdown-{round_id}"
        )

    def _handle_playing(self):
        """进入出拳窗口：给识别结果留出稳定时间后采样"""
        round_id = self._round_id
        self._timer = self.scheduler.call_later(
            self.settings.capture_delay,
            lambda: self._on_capture(round_id),
            name=f"capture-{round_id}"
        )

    def _on_countdown_tick(self, round_id: int):
        if round_id != self._round_id or self.phase != GamePhase.COUNTDOWN:
            logger.debug(f"忽略过期的倒计时回调 (回合 {round_id})")
            return

        if self._session.countdown > 1:
            self._session = replace(self._session, countdown=self._session.countdown - 1)
            logger.debug(f"倒计时: {self._session.countdown}")
            self._notify()
            return

        self._session = replace(self._session, countdown=self.settings.countdown_seconds)
        self._transition(GamePhase.PLAYING)

    def _on_capture(self, round_id: int):
        if round_id != self._round_id or self.phase != GamePhase.PLAYING:
            logger.debug(f"忽略过期的采样回调 (回合 {round_id})")
            return

        # 到期瞬间读取一次，不做平滑
        player_gesture = self.gesture_source.current_gesture()
        bot_gesture = self.rng.choice(PLAYABLE_GESTURES)
        outcome = GameRules.resolve(player_gesture, bot_gesture)
        score = self._session.score.record(outcome.result)

        logger.info(f"回合 {round_id}: 玩家={player_gesture}, 机器人={bot_gesture}, "
                    f"结果={outcome.result.value}, 比分={score.player}:{score.bot}")

        self._session = replace(self._session,
                                player_gesture=player_gesture,
                                bot_gesture=bot_gesture,
                                outcome=outcome,
                                score=score)

        # 两次转换都提交后再通知订阅者
        self._transition(GamePhase.RESULT, notify=False)
        result_session = self._session

        if score.has_winner(self.settings.winning_score):
            winner = "玩家" if score.player >= self.settings.winning_score else "机器人"
            logger.info(f"整局结束，{winner}获胜 ({score.player}:{score.bot})")
            self._transition(GamePhase.GAME_OVER, notify=False)
            self._publish(result_session, self._session)
        else:
            self._publish(result_session)

    # ------------------------------------------------------------------
    # 内部工具
    # ------------------------------------------------------------------

    def _transition(self, phase: GamePhase, notify: bool = True) -> bool:
        if not self.state_machine.transition_to(phase):
            return False
        self._session = replace(self._session, phase=phase)
        if notify:
            self._notify()
        return True

    def _cancel_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _notify(self):
        """通知订阅者会话已变化"""
        self._publish(self._session)

    def _publish(self, *sessions: GameSession):
        """按顺序把快照交给订阅者；订阅者回调里触发的新快照排在队尾"""
        self._pending.extend(sessions)
        if self._publishing:
            return

        self._publishing = True
        try:
            while self._pending:
                session = self._pending.pop(0)
                for listener in list(self._listeners):
                    try:
                        listener(session)
                    except Exception as e:
                        logger.error(f"会话变化回调异常: {e}", exc_info=True)
        finally:
            self._publishing = False
