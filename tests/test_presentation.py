"""
界面视图模型与按键映射测试
View Model and Key Mapping Tests
"""
import numpy as np
import pytest

from gesture_rps.game import GameRules, GameSession, Gesture, RecognitionResult, Score
from gesture_rps.game.state_machine import GamePhase
from gesture_rps.presentation import (
    Intent, OverlayRenderer, VisionStatus, build_view_model, resolve_key
)
from gesture_rps.presentation.controls import KEY_ENTER, KEY_ESC, KEY_SPACE

ACTIVE = VisionStatus.ACTIVE


def result_session(player, bot, score=Score(0, 0), phase=GamePhase.RESULT):
    return GameSession(phase=phase, score=score, player_gesture=player, bot_gesture=bot,
                       outcome=GameRules.resolve(player, bot))


def test_idle_view():
    view = build_view_model(GameSession.initial(), 3, ACTIVE)
    assert view.headline == "Ready to Play?"
    assert view.subtitle == "Show your hand to the camera. Win 3 rounds to become the champion."
    assert view.action == "Start Game"
    assert view.toast == "Waiting for gesture..."
    assert view.status.value == "Vision Active"
    assert not view.is_error


def test_countdown_view_shows_number():
    view = build_view_model(GameSession(phase=GamePhase.COUNTDOWN, countdown=2), 3, ACTIVE)
    assert view.headline == "2"
    assert view.emphasis
    assert view.action is None


def test_playing_view_with_live_gesture():
    live = RecognitionResult(Gesture.SCISSORS, confidence=0.9)
    view = build_view_model(GameSession(phase=GamePhase.PLAYING), 3, ACTIVE, live_result=live)
    assert view.headline == "SHOW YOUR HAND!"
    assert view.toast == "Detected: SCISSORS"


def test_result_view():
    session = result_session(Gesture.ROCK, Gesture.SCISSORS, Score(1, 0))
    view = build_view_model(session, 3, ACTIVE)
    assert view.headline == "You Win!"
    assert view.detail == "ROCK vs SCISSORS"
    assert view.action == "Next Round"
    assert view.hint is None
    assert (view.player_score, view.bot_score) == (1, 0)


def test_invalid_result_view():
    view = build_view_model(result_session(Gesture.NONE, Gesture.PAPER), 3, ACTIVE)
    assert view.headline == "No Hand Detected"
    assert view.detail == "No Detection vs PAPER"
    assert view.hint == "Please hold your hand clearly in front of the camera"
    assert view.action == "Try Again"


@pytest.mark.parametrize("score,headline,subtitle", [
    (Score(3, 1), "VICTORY!", "You crushed the machine."),
    (Score(2, 3), "DEFEAT", "The machine detected your weakness."),
])
def test_game_over_view(score, headline, subtitle):
    session = result_session(Gesture.ROCK, Gesture.SCISSORS, score, phase=GamePhase.GAME_OVER)
    view = build_view_model(session, 3, ACTIVE)
    assert view.headline == headline
    assert view.subtitle == subtitle
    assert view.action == "Play Again"
    assert view.toast is None


def test_error_view_takes_priority():
    view = build_view_model(GameSession(phase=GamePhase.COUNTDOWN), 3, VisionStatus.CAMERA_OFF,
                            error="No camera found. Please connect a camera device.")
    assert view.is_error
    assert view.headline == "Camera Error"
    assert view.subtitle == "No camera found. Please connect a camera device."
    assert view.action == "Retry Camera"


def test_loading_view():
    view = build_view_model(GameSession.initial(), 3, VisionStatus.LOADING)
    assert view.headline == "Loading Vision Model..."
    assert view.status.value == "Loading Model..."


@pytest.mark.parametrize("key,phase,has_error,expected", [
    (-1, GamePhase.IDLE, False, None),
    (ord('q'), GamePhase.PLAYING, False, Intent.QUIT),
    (KEY_ESC, GamePhase.IDLE, False, Intent.QUIT),
    (ord('r'), GamePhase.COUNTDOWN, False, Intent.RESET),
    (ord('C'), GamePhase.IDLE, False, Intent.RETRY_CAMERA),
    (KEY_SPACE, GamePhase.IDLE, False, Intent.START_ROUND),
    (KEY_ENTER, GamePhase.RESULT, False, Intent.START_ROUND),
    (KEY_SPACE, GamePhase.COUNTDOWN, False, None),
    (KEY_SPACE, GamePhase.PLAYING, False, None),
    (KEY_SPACE, GamePhase.GAME_OVER, False, Intent.RESET),
    (KEY_SPACE, GamePhase.IDLE, True, Intent.RETRY_CAMERA),
    (ord('x'), GamePhase.IDLE, False, None),
    (0x100 | KEY_SPACE, GamePhase.IDLE, False, Intent.START_ROUND),
])
def test_resolve_key(key, phase, has_error, expected):
    assert resolve_key(key, phase, has_error) == expected


def test_overlay_renders_without_window():
    renderer = OverlayRenderer(width=320, height=240, show_window=False)
    view = build_view_model(result_session(Gesture.PAPER, Gesture.ROCK, Score(1, 0)), 3, ACTIVE)
    frame = np.zeros((120, 160, 3), dtype=np.uint8)

    canvas = renderer.render(view, frame, Gesture.PAPER, Gesture.ROCK)
    assert canvas.shape == frame.shape
    assert not frame.any()
    assert canvas.any()
    assert renderer.poll_key() == -1
    renderer.close()


def test_overlay_renders_without_frame():
    renderer = OverlayRenderer(width=320, height=240, show_window=False)
    view = build_view_model(GameSession.initial(), 3, VisionStatus.CAMERA_OFF, error="Camera error")
    canvas = renderer.render(view, None, Gesture.NONE, Gesture.NONE)
    assert canvas.shape == (240, 320, 3)
