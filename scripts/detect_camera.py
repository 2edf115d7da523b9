#!/usr/bin/env python3
"""
摄像头设备检测脚本
Camera Device Detection Script

用于检测系统中可用的摄像头设备及其 device_id，结果可直接填入 config/config.yaml
"""
import argparse
import sys
from pathlib import Path

# 添加项目根目录到 Python 路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gesture_rps.hardware import USBCamera
from gesture_rps.utils.logger import setup_logger

logger = setup_logger("RPS.DetectCamera")


def detect_cameras(max_devices: int = 10) -> list:
    """
    检测可用的摄像头设备

    Args:
        max_devices: 检测的 device_id 上限（不含）

    Returns:
        list: 可用设备信息列表
    """
    available_cameras = []

    print("=" * 60)
    print(f"正在检测 device_id 0 到 {max_devices - 1}...")
    print("=" * 60)

    for device_id in range(max_devices):
        camera = USBCamera(device_id=device_id, mirror=False)
        if camera.connect():
            width, height = camera.get_resolution()
            available_cameras.append({'device_id': device_id, 'width': width, 'height': height})
            print(f"✓ device_id={device_id} 可用 ({width}x{height})")
            camera.disconnect()
        else:
            print(f"✗ device_id={device_id}: {camera.last_error}")

    print("=" * 60)

    if not available_cameras:
        print("✗ 未找到可用的摄像头设备")
        print("提示: 检查摄像头是否已连接，以及是否有权限访问 /dev/video*")
        return available_cameras

    print(f"✓ 共找到 {len(available_cameras)} 个可用摄像头")
    print()
    print("推荐配置 (config/config.yaml):")
    print("camera:")
    print(f"  device_id: {available_cameras[0]['device_id']}")
    return available_cameras


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='检测可用摄像头')
    parser.add_argument('--max-devices', type=int, default=10)
    args = parser.parse_args()

    try:
        cameras = detect_cameras(args.max_devices)
        sys.exit(0 if cameras else 1)
    except KeyboardInterrupt:
        print("\n用户中断")
        sys.exit(1)
