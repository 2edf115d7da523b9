"""
协作式定时调度器
Cooperative Timer Scheduler

单线程、非阻塞：回调不会在后台线程里执行，而是由主循环（每帧）
调用 run_pending() 时按到期顺序逐个运行完成。
"""
import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple
from ..utils.logger import setup_logger

logger = setup_logger("RPS.Scheduler")


class TimerHandle:
    """已调度任务的句柄，可随时取消"""

    def __init__(self, callback: Callable[[], None], due: float,
                 interval: Optional[float] = None, name: str = ""):
        self.callback = callback
        self.due = due
        self.interval = interval
        self.name = name or getattr(callback, '__name__', 'timer')
        self._cancelled = False
        self._finished = False

    def cancel(self):
        """取消任务；对已结束或已取消的任务无影响"""
        if not self._cancelled and not self._finished:
            logger.debug(f"取消定时任务: {self.name}")
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        """任务仍在等待执行（未取消、一次性任务未执行）"""
        return not self._cancelled and not self._finished

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    def __repr__(self):
        state = "cancelled" if self._cancelled else ("finished" if self._finished else "pending")
        return f"<TimerHandle {self.name} due={self.due:.3f} {state}>"


class Scheduler:
    """定时调度器类"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        初始化调度器

        Args:
            clock: 单调时钟函数（秒），测试中可注入假时钟
        """
        self.clock = clock
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None], name: str = "") -> TimerHandle:
        """
        在 delay 秒后执行一次回调

        Args:
            delay: 延迟秒数（负数按0处理）
            callback: 无参回调
            name: 任务名（日志用）

        Returns:
            TimerHandle: 任务句柄
        """
        handle = TimerHandle(callback, self.clock() + max(0.0, delay), name=name)
        self._push(handle)
        logger.debug(f"调度一次性任务: {handle.name}, 延迟 {delay}s")
        return handle

    def call_every(self, interval: float, callback: Callable[[], None], name: str = "") -> TimerHandle:
        """
        每隔 interval 秒重复执行回调，首次在 interval 秒后

        Args:
            interval: 间隔秒数，必须大于0
            callback: 无参回调
            name: 任务名（日志用）

        Returns:
            TimerHandle: 任务句柄，调用 cancel() 停止
        """
        if interval <= 0:
            raise ValueError(f"间隔必须大于0: {interval}")
        handle = TimerHandle(callback, self.clock() + interval, interval=interval, name=name)
        self._push(handle)
        logger.debug(f"调度重复任务: {handle.name}, 间隔 {interval}s")
        return handle

    def run_pending(self) -> int:
        """
        执行所有已到期的回调

        按到期时间顺序执行（到期时间相同则按调度顺序）；重复任务若错过
        多个周期会逐个补齐。回调中抛出的异常会被记录，不影响其他任务。

        Returns:
            int: 本次执行的回调数量
        """
        now = self.clock()
        executed = 0

        while self._queue and self._queue[0][0] <= now:
            _, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue

            if handle.repeating:
                handle.due += handle.interval
                self._push(handle)
            else:
                handle._finished = True

            executed += 1
            try:
                handle.callback()
            except Exception as e:
                logger.error(f"定时任务执行异常 [{handle.name}]: {e}", exc_info=True)

        return executed

    def pending_count(self) -> int:
        """等待中（未取消）的任务数"""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def clear(self):
        """取消并清空所有任务"""
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()

    def _push(self, handle: TimerHandle):
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle))
