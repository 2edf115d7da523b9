"""
界面视图模型
View Model - 把会话快照翻译成界面文字，不依赖任何绘图库
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from ..game.game_logic import GameResult, GameSession, Gesture
from ..game.gesture_recognition import RecognitionResult
from ..game.state_machine import GamePhase


class VisionStatus(Enum):
    """视觉模块状态"""
    LOADING = "Loading Model..."
    ACTIVE = "Vision Active"
    CAMERA_OFF = "Camera Off"


@dataclass(frozen=True)
class ViewModel:
    """一帧界面需要显示的全部内容"""
    status: VisionStatus
    player_score: int
    bot_score: int
    headline: str = ""
    subtitle: Optional[str] = None
    detail: Optional[str] = None
    hint: Optional[str] = None
    action: Optional[str] = None
    toast: Optional[str] = None
    is_error: bool = False
    emphasis: bool = False          # 倒计时数字等需要大号字体的标题


def _gesture_text(gesture: Gesture) -> str:
    return "No Detection" if gesture == Gesture.NONE else gesture.display_name


def build_view_model(session: GameSession,
                     winning_score: int,
                     vision_status: VisionStatus,
                     live_result: Optional[RecognitionResult] = None,
                     error: Optional[str] = None) -> ViewModel:
    """
    根据会话快照生成视图模型

    Args:
        session: 回合引擎发布的会话快照
        winning_score: 胜利所需分数
        vision_status: 视觉模块状态
        live_result: 最新的实时识别结果（用于底部提示）
        error: 摄像头/系统错误信息，非空时显示错误面板

    Returns:
        ViewModel: 视图模型
    """
    base = dict(status=vision_status,
                player_score=session.score.player,
                bot_score=session.score.bot)

    if error:
        return ViewModel(headline="Camera Error", subtitle=error,
                         action="Retry Camera", is_error=True, **base)

    if vision_status == VisionStatus.LOADING:
        return ViewModel(headline="Loading Vision Model...", **base)

    toast = None
    if session.phase != GamePhase.GAME_OVER:
        live_gesture = live_result.gesture if live_result else Gesture.NONE
        toast = ("Waiting for gesture..." if live_gesture == Gesture.NONE
                 else f"Detected: {live_gesture.display_name}")

    phase = session.phase

    if phase == GamePhase.IDLE:
        return ViewModel(
            headline="Ready to Play?",
            subtitle=f"Show your hand to the camera. Win {winning_score} rounds "
                     f"to become the champion.",
            action="Start Game", toast=toast, **base)

    if phase == GamePhase.COUNTDOWN:
        return ViewModel(headline=str(session.countdown), emphasis=True, toast=toast, **base)

    if phase == GamePhase.PLAYING:
        return ViewModel(headline="SHOW YOUR HAND!", toast=toast, **base)

    if phase == GamePhase.RESULT:
        outcome = session.outcome
        invalid = outcome is not None and outcome.result == GameResult.INVALID
        return ViewModel(
            headline=outcome.message if outcome else "",
            detail=f"{_gesture_text(session.player_gesture)} vs {session.bot_gesture.display_name}",
            hint="Please hold your hand clearly in front of the camera" if invalid else None,
            action="Try Again" if invalid else "Next Round",
            toast=toast, **base)

    # GAME_OVER
    player_won = session.score.player >= winning_score
    return ViewModel(
        headline="VICTORY!" if player_won else "DEFEAT",
        subtitle="You crushed the machine." if player_won
        else "The machine detected your weakness.",
        action="Play Again", **base)
