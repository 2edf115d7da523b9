"""
测试公共夹具
Shared Test Fixtures
"""
import sys
from pathlib import Path
from typing import Iterable, List, Optional

import numpy as np
import pytest

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gesture_rps.game import GameSettings, Gesture, GestureSource, RoundEngine, Scheduler
from gesture_rps.game.gesture_recognition import RecognitionResult, RecognizerBase
from gesture_rps.hardware import CameraBase


class FakeClock:
    """可手动拨动的单调时钟"""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class ScriptedRandom:
    """按给定顺序返回机器人手势的随机源"""

    def __init__(self, gestures: Iterable[Gesture]):
        self.gestures: List[Gesture] = list(gestures)
        self.calls = 0

    def choice(self, options):
        gesture = self.gestures[self.calls % len(self.gestures)]
        assert gesture in options
        self.calls += 1
        return gesture


class FakeGestureSource(GestureSource):
    """可设置当前手势并统计读取次数的手势来源"""

    def __init__(self, gesture: Gesture = Gesture.NONE):
        self.gesture = gesture
        self.reads = 0

    def current_gesture(self) -> Gesture:
        self.reads += 1
        return self.gesture


class FakeRecognizer(RecognizerBase):
    """按脚本返回结果的识别器"""

    def __init__(self, results: Optional[List[RecognitionResult]] = None, error: Exception = None):
        self.results = list(results or [])
        self.error = error
        self.frames = 0
        self.closed = False

    def recognize(self, image: np.ndarray) -> RecognitionResult:
        self.frames += 1
        if self.error is not None:
            raise self.error
        if self.results:
            return self.results.pop(0)
        return RecognitionResult.empty()

    def close(self):
        self.closed = True


class FakeCamera(CameraBase):
    """不依赖硬件的摄像头"""

    def __init__(self, available: bool = True, error: str = "No camera found. Please connect a camera device."):
        self.available = available
        self.error_text = error
        self.last_error = None
        self.connected = False
        self.connect_calls = 0

    def connect(self) -> bool:
        self.connect_calls += 1
        if not self.available:
            self.last_error = self.error_text
            return False
        self.connected = True
        self.last_error = None
        return True

    def disconnect(self) -> bool:
        self.connected = False
        return True

    def is_connected(self) -> bool:
        return self.connected

    def capture_frame(self):
        if not self.connected:
            return None
        return np.zeros((48, 64, 3), dtype=np.uint8)

    def get_resolution(self):
        return (64, 48)


class EngineHarness:
    """把引擎、假时钟和调度器组合在一起，便于按秒推进"""

    def __init__(self, settings: GameSettings = None, bot_gestures=(Gesture.ROCK,),
                 player_gesture: Gesture = Gesture.NONE):
        self.clock = FakeClock()
        self.scheduler = Scheduler(clock=self.clock)
        self.source = FakeGestureSource(player_gesture)
        self.rng = ScriptedRandom(bot_gestures)
        self.engine = RoundEngine(self.source, self.scheduler, settings or GameSettings(), rng=self.rng)
        self.published = []
        self.engine.subscribe(self.published.append)

    def advance(self, seconds: float, step: float = 0.25) -> int:
        """以 step 为步长推进时间并执行到期任务，返回执行的回调数"""
        executed = 0
        remaining = seconds
        while remaining > 1e-9:
            delta = min(step, remaining)
            self.clock.advance(delta)
            remaining -= delta
            executed += self.scheduler.run_pending()
        return executed

    def play_round(self, player_gesture: Gesture):
        """完整进行一回合：倒计时 3 秒 + 采样延迟"""
        self.source.gesture = player_gesture
        assert self.engine.start_round()
        settings = self.engine.settings
        self.advance(settings.countdown_seconds * settings.tick_interval + settings.capture_delay)
        return self.engine.snapshot()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def harness():
    return EngineHarness()
