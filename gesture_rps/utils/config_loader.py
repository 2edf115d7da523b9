"""
配置加载工具模块
Configuration Loader Utility

config/config.yaml 的结构：
    game:                    回合参数（GameSettings）
      gesture_recognition:   识别器类型与模型参数
    camera:                  USBCamera 参数
    display:                 窗口参数
    logging:                 level / file
"""
from pathlib import Path
from typing import Any, Dict, Union
import yaml
from .exceptions import ConfigurationException
from .logger import setup_logger

logger = setup_logger("RPS.ConfigLoader")

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "config.yaml"

PathLike = Union[str, Path]


class ConfigLoader:
    """配置加载器类"""

    @staticmethod
    def load_config(config_path: PathLike) -> Dict[str, Any]:
        """
        读取 YAML 配置文件

        Args:
            config_path: 配置文件路径

        Returns:
            Dict[str, Any]: 配置字典，空文件返回 {}

        Raises:
            FileNotFoundError: 文件不存在
            yaml.YAMLError: YAML 格式错误
            ConfigurationException: 顶层不是映射
        """
        path = Path(config_path)
        if not path.is_file():
            raise FileNotFoundError(f"配置文件不存在: {path}")

        with path.open('r', encoding='utf-8') as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error(f"YAML解析错误 ({path}): {e}")
                raise

        if not config:
            logger.warning(f"配置文件为空，全部使用默认值: {path}")
            return {}
        if not isinstance(config, dict):
            raise ConfigurationException(f"配置文件顶层必须是映射: {path}")

        logger.info(f"已加载配置: {path} (节: {', '.join(map(str, config))})")
        return config

    @staticmethod
    def save_config(config: Dict[str, Any], config_path: PathLike) -> bool:
        """
        写出 YAML 配置文件（保留键顺序）

        Returns:
            bool: 是否写入成功
        """
        path = Path(config_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open('w', encoding='utf-8') as f:
                yaml.safe_dump(config, f, default_flow_style=False,
                               allow_unicode=True, sort_keys=False)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"保存配置文件失败 ({path}): {e}")
            return False

        logger.info(f"已保存配置: {path}")
        return True

    @staticmethod
    def get_section(config: Dict[str, Any], *keys: str) -> Dict[str, Any]:
        """
        按路径取配置节，缺失或为 null 时返回 {}

        例: get_section(config, 'game', 'gesture_recognition')
        """
        section: Any = config
        for key in keys:
            if not isinstance(section, dict):
                return {}
            section = section.get(key)
        return section if isinstance(section, dict) else {}

    @staticmethod
    def get_game_config(config: Dict[str, Any]) -> Dict[str, Any]:
        return ConfigLoader.get_section(config, 'game')

    @staticmethod
    def get_recognition_config(config: Dict[str, Any]) -> Dict[str, Any]:
        return ConfigLoader.get_section(config, 'game', 'gesture_recognition')

    @staticmethod
    def get_camera_config(config: Dict[str, Any]) -> Dict[str, Any]:
        return ConfigLoader.get_section(config, 'camera')

    @staticmethod
    def get_display_config(config: Dict[str, Any]) -> Dict[str, Any]:
        return ConfigLoader.get_section(config, 'display')

    @staticmethod
    def get_logging_config(config: Dict[str, Any]) -> Dict[str, Any]:
        return ConfigLoader.get_section(config, 'logging')
