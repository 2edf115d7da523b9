#!/usr/bin/env python3
"""
下载手势识别模型到本地 models/ 目录
Download gesture recognition models to local models/ directory
"""
import argparse
from pathlib import Path

from gesture_rps.game.gesture_recognition.mediapipe_recognizer import (
    DEFAULT_MODEL_URL, download_model as download_mediapipe_model
)
from gesture_rps.game.gesture_recognition.yolo_recognizer import DEFAULT_MODEL_ID, DEFAULT_MODEL_FILE


def download_model(model_type: str, force: bool = False):
    """下载模型文件"""
    models_dir = Path("models")
    models_dir.mkdir(exist_ok=True)

    if model_type == "mediapipe":
        output_path = models_dir / "gesture_recognizer.task"
        if output_path.exists() and not force:
            print(f"模型文件已存在: {output_path}（使用 --force 重新下载）")
            return
        print(f"正在下载模型...")
        print(f"  来源: {DEFAULT_MODEL_URL}")
        print(f"  目标: {output_path}")
        download_mediapipe_model(DEFAULT_MODEL_URL, output_path)
        print(f"\n[OK] 模型下载成功: {output_path}")
        return

    # YOLO 权重（约 200-300 MB）
    from huggingface_hub import hf_hub_download
    output_path = models_dir / "yolov8x-tuned-hand-gestures.pt"
    if output_path.exists() and not force:
        print(f"模型文件已存在: {output_path}（使用 --force 重新下载）")
        return
    print(f"正在从 HuggingFace 下载: {DEFAULT_MODEL_ID}/{DEFAULT_MODEL_FILE}")
    cached = Path(hf_hub_download(repo_id=DEFAULT_MODEL_ID, filename=DEFAULT_MODEL_FILE))
    output_path.write_bytes(cached.read_bytes())
    print(f"\n[OK] 模型下载成功: {output_path}")
    print(f"  文件大小: {output_path.stat().st_size / 1024 / 1024:.2f} MB")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='下载手势识别模型')
    parser.add_argument('--type', choices=['mediapipe', 'yolo'], default='mediapipe')
    parser.add_argument('--force', action='store_true', help='已存在时重新下载')
    args = parser.parse_args()
    download_model(args.type, force=args.force)
