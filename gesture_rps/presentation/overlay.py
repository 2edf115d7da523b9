"""
OpenCV 叠加层渲染
Overlay Renderer - 在摄像头画面上绘制比分、阶段提示与双方手势卡片
"""
from typing import Optional, Tuple
import cv2
import numpy as np
from .view_model import ViewModel, VisionStatus
from ..game.game_logic import Gesture
from ..utils.logger import setup_logger

logger = setup_logger("RPS.Overlay")

Color = Tuple[int, int, int]

# 手势卡片颜色（BGR）
GESTURE_COLORS = {
    Gesture.ROCK: (105, 85, 71),
    Gesture.PAPER: (246, 130, 59),
    Gesture.SCISSORS: (68, 68, 239),
    Gesture.NONE: (8, 179, 234),
}

STATUS_COLORS = {
    VisionStatus.LOADING: (0, 200, 255),
    VisionStatus.ACTIVE: (0, 220, 0),
    VisionStatus.CAMERA_OFF: (0, 0, 255),
}

WHITE = (255, 255, 255)
GRAY = (170, 170, 170)
RED = (80, 80, 255)
FONT = cv2.FONT_HERSHEY_SIMPLEX


class OverlayRenderer:
    """叠加层渲染器类"""

    def __init__(self, window_name: str = "Gesture RPS", width: int = 640, height: int = 480,
                 show_window: bool = True):
        """
        初始化渲染器

        Args:
            window_name: 窗口标题
            width: 无摄像头画面时的画布宽度
            height: 无摄像头画面时的画布高度
            show_window: 是否创建窗口（False 时只生成图像）
        """
        self.window_name = window_name
        self.width = width
        self.height = height
        self.show_window = show_window
        self._window_created = False

    def render(self, view: ViewModel, frame: Optional[np.ndarray],
               player_gesture: Gesture, bot_gesture: Gesture) -> np.ndarray:
        """
        绘制一帧

        Args:
            view: 视图模型
            frame: 摄像头画面（BGR），None 时使用黑色画布
            player_gesture: 玩家卡片显示的手势（实时识别值）
            bot_gesture: 机器人卡片显示的手势

        Returns:
            np.ndarray: 绘制后的图像
        """
        if frame is None:
            canvas = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        else:
            canvas = frame.copy()

        h, w = canvas.shape[:2]

        self._draw_panel(canvas, (0, 0), (w, 60), alpha=0.6)
        cv2.putText(canvas, "Gesture RPS", (12, 25), FONT, 0.7, WHITE, 2)
        cv2.circle(canvas, (18, 45), 5, STATUS_COLORS[view.status], -1)
        cv2.putText(canvas, view.status.value, (30, 50), FONT, 0.45, GRAY, 1)
        score_text = f"YOU {view.player_score} : {view.bot_score} BOT"
        (tw, _), _ = cv2.getTextSize(score_text, FONT, 0.8, 2)
        cv2.putText(canvas, score_text, (w - tw - 12, 38), FONT, 0.8, WHITE, 2)

        if not view.is_error and view.status != VisionStatus.LOADING:
            self._draw_card(canvas, (int(w * 0.2), int(h * 0.72)), "YOU", player_gesture)
            self._draw_card(canvas, (int(w * 0.8), int(h * 0.72)), "BOT", bot_gesture)

        self._draw_center(canvas, view)

        if view.toast:
            self._draw_centered_text(canvas, view.toast, h - 20, 0.55, WHITE, 1, backdrop=True)

        return canvas

    def show(self, image: np.ndarray):
        """在窗口中显示图像"""
        if not self.show_window:
            return
        if not self._window_created:
            cv2.namedWindow(self.window_name, cv2.WINDOW_NORMAL)
            self._window_created = True
        cv2.imshow(self.window_name, image)

    def poll_key(self, delay_ms: int = 1) -> int:
        """读取按键（同时驱动 OpenCV 窗口事件），无按键返回 -1"""
        if not self.show_window:
            return -1
        return cv2.waitKey(delay_ms)

    def close(self):
        """关闭窗口"""
        if self._window_created:
            cv2.destroyWindow(self.window_name)
            self._window_created = False
            logger.info("显示窗口已关闭")

    def _draw_center(self, canvas: np.ndarray, view: ViewModel):
        h = canvas.shape[0]
        y = int(h * 0.38)

        if view.emphasis:
            self._draw_centered_text(canvas, view.headline, y + 40, 4.0, WHITE, 8)
            return

        color = RED if view.is_error else WHITE
        self._draw_centered_text(canvas, view.headline, y, 1.2, color, 3, backdrop=True)
        for text, scale, color in ((view.subtitle, 0.5, GRAY), (view.detail, 0.7, GRAY),
                                   (view.hint, 0.5, RED)):
            if text:
                y += 36
                self._draw_centered_text(canvas, text, y, scale, color, 1)
        if view.action:
            y += 40
            self._draw_centered_text(canvas, f"[SPACE] {view.action}", y, 0.6, WHITE, 2,
                                     backdrop=True)

    def _draw_card(self, canvas: np.ndarray, center: Tuple[int, int], title: str, gesture: Gesture):
        color = GESTURE_COLORS[gesture]
        cv2.circle(canvas, center, 42, color, -1)
        cv2.circle(canvas, center, 42, WHITE, 2)
        label = "?" if gesture == Gesture.NONE else gesture.display_name
        (tw, th), _ = cv2.getTextSize(label, FONT, 0.5, 2)
        cv2.putText(canvas, label, (center[0] - tw // 2, center[1] + th // 2), FONT, 0.5, WHITE, 2)
        (tw, _), _ = cv2.getTextSize(title, FONT, 0.5, 1)
        cv2.putText(canvas, title, (center[0] - tw // 2, center[1] - 52), FONT, 0.5, WHITE, 1)

    def _draw_centered_text(self, canvas: np.ndarray, text: str, y: int, scale: float,
                            color: Color, thickness: int, backdrop: bool = False):
        w = canvas.shape[1]
        (tw, th), baseline = cv2.getTextSize(text, FONT, scale, thickness)
        x = max(0, (w - tw) // 2)
        if backdrop:
            self._draw_panel(canvas, (x - 10, y - th - 10), (x + tw + 10, y + baseline + 6), alpha=0.5)
        cv2.putText(canvas, text, (x, y), FONT, scale, color, thickness)

    @staticmethod
    def _draw_panel(canvas: np.ndarray, top_left: Tuple[int, int], bottom_right: Tuple[int, int],
                    alpha: float = 0.6):
        # 半透明背景
        overlay = canvas.copy()
        cv2.rectangle(overlay, top_left, bottom_right, (0, 0, 0), -1)
        cv2.addWeighted(overlay, alpha, canvas, 1 - alpha, 0, canvas)
