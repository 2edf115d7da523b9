"""
应用程序主类
Application Main Class
"""
import signal
from typing import Optional
from .game import FrameGestureSource, GameSession, GameSettings, RoundEngine, Scheduler
from .game.gesture_recognition import RecognizerBase, RecognizerFactory
from .game.state_machine import GamePhase
from .hardware import CameraBase, USBCamera
from .presentation import Intent, OverlayRenderer, VisionStatus, build_view_model, resolve_key
from .utils.config_loader import ConfigLoader, DEFAULT_CONFIG_PATH
from .utils.error_handler import ErrorHandler, global_error_handler
from .utils.exceptions import (
    CameraException, ConfigurationException, GameException, RecognitionException
)
from .utils.logger import setup_logger, setup_logger_from_config

logger = setup_logger("RPS.App")


class Application:
    """应用程序主类"""

    def __init__(self, config_path: Optional[str] = None,
                 camera: Optional[CameraBase] = None,
                 recognizer: Optional[RecognizerBase] = None,
                 renderer: Optional[OverlayRenderer] = None,
                 log_level: Optional[int] = None):
        """
        初始化应用程序

        Args:
            config_path: 配置文件路径，默认 config/config.yaml
            camera: 外部提供的摄像头（默认按配置创建 USBCamera）
            recognizer: 外部提供的识别器（默认按配置由工厂创建）
            renderer: 外部提供的渲染器（默认按配置创建 OverlayRenderer）
            log_level: 命令行指定的日志级别，优先于配置文件
        """
        self.config_path = str(config_path or DEFAULT_CONFIG_PATH)
        self.config = {}
        self.log_level = log_level

        self.camera = camera
        self.recognizer = recognizer
        self.renderer = renderer
        self.settings: Optional[GameSettings] = None
        self.scheduler: Optional[Scheduler] = None
        self.gesture_source: Optional[FrameGestureSource] = None
        self.engine: Optional[RoundEngine] = None

        # 摄像头/系统错误（界面上显示错误面板）
        self.error: Optional[str] = None
        self.vision_status = VisionStatus.LOADING

        self.is_running = False
        self.should_exit = False
        self.frame_count = 0

    def _signal_handler(self, signum, frame):
        """信号处理函数"""
        logger.info(f"收到信号 {signum}，准备退出")
        self.should_exit = True

    def initialize(self) -> bool:
        """
        初始化所有组件

        Returns:
            bool: 初始化是否成功（摄像头失败不算失败，界面上可重试）
        """
        logger.info("=" * 50)
        logger.info("开始初始化应用程序")
        logger.info("=" * 50)

        if not self._load_config():
            return False

        display_config = ConfigLoader.get_display_config(self.config)
        if self.renderer is None:
            self.renderer = OverlayRenderer(
                window_name=display_config.get('window_name', "Gesture RPS"),
                show_window=display_config.get('show_window', True)
            )
        self._render_frame(None)

        if not self._initialize_gesture_recognizer():
            return False

        self._initialize_camera()
        self._initialize_engine()

        logger.info("=" * 50)
        logger.info("应用程序初始化成功")
        logger.info("=" * 50)
        return True

    def _load_config(self) -> bool:
        """加载配置文件与游戏参数"""
        try:
            self.config = ConfigLoader.load_config(self.config_path)
            logging_config = ConfigLoader.get_logging_config(self.config)
            if logging_config:
                setup_logger_from_config(logging_config, level_override=self.log_level)
            self.settings = GameSettings.from_config(ConfigLoader.get_game_config(self.config))
        except FileNotFoundError:
            logger.error(f"配置文件不存在: {self.config_path}")
            return False
        except ConfigurationException as e:
            global_error_handler.handle(e, "加载配置")
            return False
        except Exception as e:
            global_error_handler.handle(ConfigurationException(str(e)), "加载配置")
            return False
        return True

    def _initialize_gesture_recognizer(self) -> bool:
        """初始化手势识别器"""
        recognition_config = ConfigLoader.get_recognition_config(self.config)

        if self.recognizer is None:
            logger.info("初始化手势识别器...")
            try:
                self.recognizer = RecognizerFactory.create_from_config(recognition_config)
            except Exception as e:
                if not isinstance(e, RecognitionException):
                    e = RecognitionException(str(e), recognition_config.get('type'))
                global_error_handler.handle(e, "初始化识别器")
                self._show_fatal_error(ErrorHandler.user_message(e))
                return False

        self.gesture_source = FrameGestureSource(
            self.recognizer,
            min_confidence=recognition_config.get('min_confidence', 0.0)
        )
        logger.info("✓ 手势识别器初始化成功")
        return True

    def _show_fatal_error(self, message: str):
        """在错误面板上显示无法恢复的错误，按键（或超时）后返回"""
        self.error = message
        self._render_frame(None)
        wait_ms = ConfigLoader.get_display_config(self.config).get('error_wait_ms', 0)
        self.renderer.poll_key(wait_ms)

    def _initialize_camera(self):
        """初始化摄像头；失败时记录错误，等待用户重试"""
        if self.camera is None:
            camera_config = ConfigLoader.get_camera_config(self.config)
            self.camera = USBCamera(
                device_id=camera_config.get('device_id', 0),
                width=camera_config.get('width', 640),
                height=camera_config.get('height', 480),
                fps=camera_config.get('fps', 30),
                mirror=camera_config.get('mirror', True)
            )
        self.retry_camera()

    def _initialize_engine(self):
        """初始化回合引擎"""
        self.scheduler = Scheduler()
        self.engine = RoundEngine(self.gesture_source, self.scheduler, self.settings)
        self.engine.subscribe(self._on_session_changed)
        logger.info("✓ 回合引擎初始化成功")

    def retry_camera(self) -> bool:
        """
        连接（或重新连接）摄像头

        Returns:
            bool: 是否连接成功
        """
        self.error = None
        if self.camera.connect():
            self.vision_status = VisionStatus.ACTIVE
            logger.info("✓ 摄像头连接成功")
            return True

        self.vision_status = VisionStatus.CAMERA_OFF
        self.error = self.camera.last_error or "Camera error: Unknown error"
        global_error_handler.handle(CameraException(self.error), "连接摄像头")
        return False

    def _on_session_changed(self, session: GameSession):
        """会话变化回调"""
        logger.debug(f"会话变化: {session.to_dict()}")
        if session.phase == GamePhase.RESULT and session.outcome:
            logger.info(f"回合结果: {session.outcome.message} "
                        f"({session.player_gesture} vs {session.bot_gesture}), "
                        f"比分 {session.score.player}:{session.score.bot}")
        elif session.phase == GamePhase.GAME_OVER:
            logger.info(f"游戏结束，最终比分 {session.score.player}:{session.score.bot}")

    def handle_intent(self, intent: Optional[Intent]):
        """
        执行用户意图

        Args:
            intent: 用户意图，None 时忽略

        Raises:
            GameException: 引擎尚未初始化时请求开局或重置
            CameraException: 摄像头尚未创建时请求重试
        """
        if intent is None:
            return
        if intent == Intent.QUIT:
            logger.info("用户退出")
            self.should_exit = True
            return
        if intent == Intent.RETRY_CAMERA:
            if self.camera is None:
                raise CameraException("摄像头未初始化，无法重试")
            if self.camera.is_connected():
                self.camera.disconnect()
            self.retry_camera()
            return

        if self.engine is None:
            raise GameException(f"游戏引擎未初始化，无法执行: {intent.name}")
        if intent == Intent.RESET:
            self.engine.reset()
        elif intent == Intent.START_ROUND:
            self.engine.start_round()

    def step(self):
        """执行一帧：采集 -> 识别 -> 定时任务 -> 渲染 -> 按键"""
        frame = None
        if self.camera.is_connected():
            frame = self.camera.capture_frame()
            self.gesture_source.poll(frame)
        elif self.vision_status == VisionStatus.ACTIVE:
            # 运行中设备丢失
            self.vision_status = VisionStatus.CAMERA_OFF
            self.error = "Camera error: device disconnected"
            self.gesture_source.clear()
            logger.error("摄像头连接丢失")

        self.scheduler.run_pending()
        self._render_frame(frame)

        key = self.renderer.poll_key(1)
        self.handle_intent(resolve_key(key, self.engine.phase, has_error=bool(self.error)))
        self.frame_count += 1

    def _render_frame(self, frame):
        session = self.engine.snapshot() if self.engine else GameSession()
        winning_score = self.settings.winning_score if self.settings else 3
        live_result = self.gesture_source.latest_result if self.gesture_source else None
        view = build_view_model(session, winning_score, self.vision_status,
                                live_result=live_result, error=self.error)
        player_gesture = live_result.gesture if live_result else session.player_gesture
        image = self.renderer.render(view, frame, player_gesture, session.bot_gesture)
        self.renderer.show(image)

    def run(self, max_frames: Optional[int] = None):
        """
        运行应用程序主循环

        Args:
            max_frames: 最多运行的帧数（None 表示直到退出）
        """
        if not self.is_running:
            logger.error("应用程序未初始化，无法运行")
            return

        logger.info("应用程序主循环启动")
        try:
            while not self.should_exit:
                if max_frames is not None and self.frame_count >= max_frames:
                    break
                self.step()
        except KeyboardInterrupt:
            logger.info("收到中断信号")
        finally:
            self.cleanup()

    def cleanup(self):
        """清理资源"""
        logger.info("开始清理资源...")

        if self.engine:
            self.engine.shutdown()
        if self.scheduler:
            self.scheduler.clear()
        if self.camera and self.camera.is_connected():
            self.camera.disconnect()
            logger.info("✓ 摄像头已断开")
        if self.recognizer:
            self.recognizer.close()
        if self.renderer:
            self.renderer.close()

        self.is_running = False
        logger.info("资源清理完成")

    def start(self, max_frames: Optional[int] = None) -> bool:
        """
        启动应用程序

        Returns:
            bool: 启动是否成功
        """
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        if not self.initialize():
            logger.error("应用程序启动失败")
            self.cleanup()
            return False

        self.is_running = True
        self.run(max_frames=max_frames)
        return True
