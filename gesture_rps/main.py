"""
剪刀石头布游戏主程序入口
Gesture Rock Paper Scissors Main Entry
"""
import argparse
import sys
from .app import Application
from .utils.logger import get_log_level, set_global_level, setup_logger

logger = setup_logger("RPS.Main")


def parse_args(argv=None) -> argparse.Namespace:
    """解析命令行参数"""
    parser = argparse.ArgumentParser(description='摄像头手势剪刀石头布')
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='配置文件路径（默认: config/config.yaml）'
    )
    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='日志级别（覆盖配置文件）'
    )
    return parser.parse_args(argv)


def main(argv=None):
    """主函数"""
    args = parse_args(argv)
    if args.log_level:
        set_global_level(get_log_level(args.log_level))

    logger.info("=" * 50)
    logger.info("Gesture RPS Starting")
    logger.info("=" * 50)

    app = Application(config_path=args.config,
                      log_level=get_log_level(args.log_level) if args.log_level else None)

    try:
        if not app.start():
            logger.error("应用程序启动失败")
            sys.exit(1)
    except KeyboardInterrupt:
        logger.info("用户中断程序")
    except Exception as e:
        logger.error(f"程序异常退出: {e}", exc_info=True)
        sys.exit(1)
    finally:
        logger.info("程序退出")


if __name__ == "__main__":
    main()
