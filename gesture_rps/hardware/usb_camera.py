"""
USB摄像头实现
USB Camera Implementation
"""
from typing import Optional, Tuple
import cv2
import numpy as np
from .camera_base import CameraBase
from ..utils.exceptions import CameraException
from ..utils.logger import setup_logger

logger = setup_logger("RPS.USBCamera")

NOT_FOUND_MESSAGE = "No camera found. Please connect a camera device."


class USBCamera(CameraBase):
    """基于 cv2.VideoCapture 的 USB 摄像头"""

    def __init__(self, device_id: int = 0, width: int = 640, height: int = 480,
                 fps: int = 30, mirror: bool = True, backend: Optional[int] = None):
        """
        Args:
            device_id: 设备号（/dev/videoN 的 N）
            width: 请求的图像宽度
            height: 请求的图像高度
            fps: 请求的帧率
            mirror: 是否水平翻转（自拍视角，左右手与屏幕一致）
            backend: OpenCV 后端，如 cv2.CAP_V4L2；None 由 OpenCV 自选
        """
        self.device_id = device_id
        self.requested_size = (width, height)
        self.fps = fps
        self.mirror = mirror
        self.backend = backend
        self.last_error: Optional[str] = None
        self._cap: Optional[cv2.VideoCapture] = None
        self._resolution = (width, height)

        logger.info(f"USB摄像头: device_id={device_id}, 请求 {width}x{height}@{fps}fps, "
                    f"镜像={'开' if mirror else '关'}")

    def connect(self) -> bool:
        """
        打开设备并试读一帧

        Returns:
            bool: 是否成功；失败时 last_error 为可直接显示的提示
        """
        if self._cap is not None:
            return True

        try:
            self._cap = self._open_capture()
            self._resolution = self._apply_settings(self._cap)
            self._check_readable(self._cap)
        except CameraException as e:
            logger.error(f"摄像头 {self.device_id} 连接失败: {e.message}")
            self._release()
            self.last_error = e.user_message
            return False
        except cv2.error as e:
            logger.error(f"摄像头 {self.device_id} OpenCV 异常: {e}")
            self._release()
            self.last_error = f"Camera error: {e}"
            return False

        self.last_error = None
        logger.info(f"摄像头已连接: device_id={self.device_id}, "
                    f"实际分辨率={self._resolution[0]}x{self._resolution[1]}")
        return True

    def _open_capture(self) -> cv2.VideoCapture:
        if self.backend is None:
            cap = cv2.VideoCapture(self.device_id)
        else:
            cap = cv2.VideoCapture(self.device_id, self.backend)
        if not cap.isOpened():
            cap.release()
            raise CameraException(NOT_FOUND_MESSAGE, device_id=self.device_id)
        return cap

    def _apply_settings(self, cap: cv2.VideoCapture) -> Tuple[int, int]:
        width, height = self.requested_size
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
        cap.set(cv2.CAP_PROP_FPS, self.fps)
        # 驱动可能不支持请求的分辨率，以实际值为准
        return int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)), int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

    def _check_readable(self, cap: cv2.VideoCapture):
        ok, _ = cap.read()
        if not ok:
            raise CameraException("unable to read frames from the device", device_id=self.device_id)

    def disconnect(self) -> bool:
        if self._cap is not None:
            self._release()
            logger.info(f"摄像头已断开: device_id={self.device_id}")
        return True

    def is_connected(self) -> bool:
        """设备被拔出后 isOpened() 变为 False，此时释放句柄"""
        if self._cap is None:
            return False
        if not self._cap.isOpened():
            logger.warning(f"摄像头 {self.device_id} 已不可用")
            self._release()
            return False
        return True

    def capture_frame(self) -> Optional[np.ndarray]:
        """
        读取一帧

        Returns:
            Optional[np.ndarray]: BGR 图像（按设置镜像），读取失败返回 None
        """
        if not self.is_connected():
            return None

        ok, frame = self._cap.read()
        if not ok or frame is None:
            logger.debug("读取帧失败")
            return None
        return cv2.flip(frame, 1) if self.mirror else frame

    def get_resolution(self) -> Tuple[int, int]:
        return self._resolution

    def _release(self):
        if self._cap is not None:
            self._cap.release()
            self._cap = None
