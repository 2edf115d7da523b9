"""
游戏参数
Game Settings
"""
from dataclasses import dataclass, fields
from typing import Any, Dict
from ...utils.exceptions import ConfigurationException


@dataclass(frozen=True)
class GameSettings:
    """回合引擎的可配置常量"""
    winning_score: int = 3          # 先到此分数者赢得整局
    countdown_seconds: int = 3      # 倒计时秒数
    capture_delay: float = 0.5      # 倒计时结束后采样手势前的等待（秒）
    tick_interval: float = 1.0      # 倒计时步长（秒）

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        校验参数

        Raises:
            ConfigurationException: 参数不合法
        """
        for key in ('winning_score', 'countdown_seconds'):
            value = getattr(self, key)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationException(f"{key} 必须是正整数: {value!r}", config_key=key)

        if not isinstance(self.capture_delay, (int, float)) or self.capture_delay < 0:
            raise ConfigurationException(
                f"capture_delay 不能为负数: {self.capture_delay!r}", config_key='capture_delay')

        if not isinstance(self.tick_interval, (int, float)) or self.tick_interval <= 0:
            raise ConfigurationException(
                f"tick_interval 必须大于0: {self.tick_interval!r}", config_key='tick_interval')

    @classmethod
    def from_config(cls, game_config: Dict[str, Any]) -> "GameSettings":
        """
        从配置字典（game 节）创建参数

        Args:
            game_config: 游戏配置字典，缺省键使用默认值

        Returns:
            GameSettings: 参数对象
        """
        values = {}
        for f in fields(cls):
            if game_config.get(f.name) is not None:
                values[f.name] = game_config[f.name]
        return cls(**values)
