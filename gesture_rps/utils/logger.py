"""
日志工具模块
Logger Utility Module

每个模块用 setup_logger("RPS.<组件名>") 取得自己的记录器；
配置文件的 logging 节与命令行 --log-level 都通过 set_global_level
作用于整个 RPS 命名空间，命令行级别优先。
"""
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

ROOT_LOGGER_NAME = "RPS"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LOG_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}


def get_log_level(level_str: str) -> int:
    """级别名转 logging 常量，无法识别时为 INFO"""
    return LOG_LEVELS.get(str(level_str).upper(), logging.INFO)


def _configure(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _file_handler(log_file: str) -> logging.FileHandler:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(log_file, encoding='utf-8')


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    取得（必要时创建）日志记录器

    第一次调用时挂上控制台处理器（以及可选的文件处理器）；
    之后的调用只调整级别，文件处理器在已有记录器上会补挂一次。

    Args:
        name: 记录器名称，如 "RPS.RoundEngine"
        log_file: 日志文件路径（可选）
        level: 日志级别
        format_string: 日志格式（可选，默认 LOG_FORMAT）

    Returns:
        logging.Logger: 记录器
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(format_string or LOG_FORMAT)
        logger.addHandler(_configure(logging.StreamHandler(sys.stdout), level, formatter))
        if log_file:
            logger.addHandler(_configure(_file_handler(log_file), level, formatter))
        return logger

    for handler in logger.handlers:
        handler.setLevel(level)

    has_file = any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    if log_file and not has_file:
        formatter = logger.handlers[0].formatter or logging.Formatter(LOG_FORMAT)
        logger.addHandler(_configure(_file_handler(log_file), level, formatter))

    return logger


def setup_logger_from_config(config: Dict[str, Any], level_override: Optional[int] = None):
    """
    按 logging 配置节（level / file）设置整个 RPS 命名空间

    Args:
        config: 配置字典
        level_override: 命令行给出的级别，优先于配置文件中的 level
    """
    if level_override is None:
        level = get_log_level(config.get('level', 'INFO'))
    else:
        level = level_override
    set_global_level(level, log_file=config.get('file'))


def _rps_loggers() -> List[str]:
    prefix = ROOT_LOGGER_NAME + "."
    return [name for name, obj in list(logging.Logger.manager.loggerDict.items())
            if isinstance(obj, logging.Logger)
            and (name == ROOT_LOGGER_NAME or name.startswith(prefix))]


def set_global_level(level: int, log_file: Optional[str] = None):
    """
    把所有已创建的 RPS.* 记录器调到同一级别

    给出 log_file 时，尚无文件处理器的记录器共用同一个文件处理器。
    """
    shared: Optional[logging.Handler] = None
    for name in _rps_loggers():
        logger = setup_logger(name, level=level)
        if not log_file or any(isinstance(h, logging.FileHandler) for h in logger.handlers):
            continue
        if shared is None:
            formatter = logger.handlers[0].formatter or logging.Formatter(LOG_FORMAT)
            shared = _configure(_file_handler(log_file), level, formatter)
        logger.addHandler(shared)
