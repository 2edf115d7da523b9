"""
回合引擎测试
Round Engine Tests
"""
import dataclasses

import pytest

from gesture_rps.game import GameResult, GameSession, GameSettings, Gesture, Score
from gesture_rps.game.state_machine import GamePhase

from conftest import EngineHarness

R, P, S, N = Gesture.ROCK, Gesture.PAPER, Gesture.SCISSORS, Gesture.NONE


def phases(published):
    return [session.phase for session in published]


def test_initial_snapshot(harness):
    session = harness.engine.snapshot()
    assert session == GameSession.initial(3)
    assert session.phase == GamePhase.IDLE
    assert session.score == Score(0, 0)
    assert session.outcome is None
    assert harness.engine.phase == GamePhase.IDLE
    assert harness.published == []


def test_round_phase_sequence_and_countdown_values(harness):
    harness.source.gesture = R
    assert harness.engine.start_round()
    assert harness.engine.phase == GamePhase.COUNTDOWN
    assert harness.engine.snapshot().countdown == 3

    harness.advance(1.0)
    assert harness.engine.snapshot().countdown == 2
    harness.advance(1.0)
    assert harness.engine.snapshot().countdown == 1
    harness.advance(1.0)
    assert harness.engine.phase == GamePhase.PLAYING

    harness.advance(0.25)
    assert harness.engine.phase == GamePhase.PLAYING
    assert harness.source.reads == 0
    harness.advance(0.25)
    assert harness.engine.phase == GamePhase.RESULT

    assert phases(harness.published) == [
        GamePhase.COUNTDOWN, GamePhase.COUNTDOWN, GamePhase.COUNTDOWN,
        GamePhase.PLAYING, GamePhase.RESULT,
    ]
    assert [s.countdown for s in harness.published[:3]] == [3, 2, 1]


def test_gesture_read_exactly_once_per_round(harness):
    harness.play_round(R)
    assert harness.source.reads == 1
    assert harness.rng.calls == 1

    harness.advance(5.0)
    assert harness.source.reads == 1
    assert harness.scheduler.pending_count() == 0


def test_three_round_scenario():
    harness = EngineHarness(bot_gestures=[S, P, R])

    first = harness.play_round(R)
    assert first.outcome.result == GameResult.PLAYER_WIN
    assert first.outcome.message == "You Win!"
    assert first.score == Score(1, 0)

    second = harness.play_round(P)
    assert second.outcome.result == GameResult.DRAW
    assert second.score == Score(1, 0)

    third = harness.play_round(S)
    assert third.outcome.result == GameResult.PLAYER_WIN
    assert third.score == Score(2, 0)
    assert third.phase == GamePhase.RESULT
    assert third.player_gesture == S
    assert third.bot_gesture == R


def test_first_to_winning_score_ends_game():
    harness = EngineHarness(bot_gestures=[S])
    for _ in range(2):
        assert harness.play_round(R).phase == GamePhase.RESULT

    final = harness.play_round(R)
    assert final.phase == GamePhase.GAME_OVER
    assert final.score == Score(3, 0)
    assert final.outcome.result == GameResult.PLAYER_WIN
    assert final.player_gesture == R
    assert final.bot_gesture == S
    assert phases(harness.published[-2:]) == [GamePhase.RESULT, GamePhase.GAME_OVER]

    assert not harness.engine.start_round()
    assert harness.engine.phase == GamePhase.GAME_OVER


def test_bot_can_win_the_game():
    harness = EngineHarness(settings=GameSettings(winning_score=1), bot_gestures=[P])
    final = harness.play_round(R)
    assert final.phase == GamePhase.GAME_OVER
    assert final.score == Score(0, 1)
    assert final.outcome.message == "Bot Wins!"


def test_no_hand_is_invalid_and_score_unchanged(harness):
    session = harness.play_round(N)
    assert session.phase == GamePhase.RESULT
    assert session.outcome.result == GameResult.INVALID
    assert session.outcome.message == "No Hand Detected"
    assert session.player_gesture == N
    assert session.bot_gesture in (R, P, S)
    assert session.score == Score(0, 0)


def test_start_round_rejected_while_round_running(harness):
    assert harness.engine.start_round()
    assert not harness.engine.start_round()
    harness.advance(3.0)
    assert harness.engine.phase == GamePhase.PLAYING
    assert not harness.engine.start_round()


def test_new_round_clears_previous_bot_gesture_and_outcome():
    harness = EngineHarness(bot_gestures=[S])
    harness.play_round(R)
    assert harness.engine.snapshot().bot_gesture == S

    assert harness.engine.start_round()
    session = harness.engine.snapshot()
    assert session.phase == GamePhase.COUNTDOWN
    assert session.bot_gesture == N
    assert session.outcome is None
    assert session.countdown == 3
    assert session.score == Score(1, 0)


def test_reset_restores_initial_session():
    harness = EngineHarness(settings=GameSettings(winning_score=1), bot_gestures=[S])
    harness.play_round(R)
    assert harness.engine.phase == GamePhase.GAME_OVER

    harness.engine.reset()
    assert harness.engine.snapshot() == GameSession.initial(3)
    assert harness.engine.phase == GamePhase.IDLE
    assert harness.published[-1].phase == GamePhase.IDLE
    assert harness.engine.start_round()


def test_reset_during_countdown_cancels_pending_ticks(harness):
    harness.engine.start_round()
    harness.advance(1.5)
    assert harness.engine.snapshot().countdown == 2

    harness.engine.reset()
    published_after_reset = len(harness.published)

    harness.advance(10.0)
    assert harness.engine.phase == GamePhase.IDLE
    assert len(harness.published) == published_after_reset
    assert harness.source.reads == 0
    assert harness.scheduler.pending_count() == 0


def test_reset_during_playing_cancels_capture(harness):
    harness.engine.start_round()
    harness.advance(3.0)
    assert harness.engine.phase == GamePhase.PLAYING

    harness.engine.reset()
    harness.advance(1.0)
    assert harness.engine.phase == GamePhase.IDLE
    assert harness.source.reads == 0
    assert harness.engine.snapshot().outcome is None


def test_old_round_timer_does_not_leak_into_new_round(harness):
    harness.engine.start_round()
    harness.advance(0.5)
    harness.engine.reset()
    harness.engine.start_round()

    # 旧回合的第一跳本应在 101.0 触发，新回合的在 101.5
    harness.advance(0.5)
    assert harness.engine.snapshot().countdown == 3
    harness.advance(0.5)
    assert harness.engine.snapshot().countdown == 2


def test_reset_mid_countdown_then_restart_counts_from_three(harness):
    harness.engine.start_round()
    harness.advance(1.0)
    assert harness.engine.snapshot().countdown == 2

    harness.engine.reset()
    assert harness.engine.start_round()
    assert harness.engine.snapshot().countdown == 3

    harness.advance(0.5)
    assert harness.engine.snapshot().countdown == 3
    harness.advance(0.5)
    assert harness.engine.snapshot().countdown == 2
    harness.advance(1.0)
    assert harness.engine.snapshot().countdown == 1
    harness.advance(1.0)
    assert harness.engine.phase == GamePhase.PLAYING

    new_round = harness.published[-4:]
    assert phases(new_round) == [
        GamePhase.COUNTDOWN, GamePhase.COUNTDOWN, GamePhase.COUNTDOWN, GamePhase.PLAYING,
    ]
    assert [s.countdown for s in new_round[:3]] == [3, 2, 1]
    assert harness.published[-5].phase == GamePhase.IDLE
    assert harness.scheduler.pending_count() == 1


def test_listener_starting_next_round_cannot_skip_game_over():
    harness = EngineHarness(settings=GameSettings(winning_score=1), bot_gestures=[S])
    accepted = []

    def auto_advance(session):
        if session.phase == GamePhase.RESULT:
            accepted.append(harness.engine.start_round())

    harness.engine.subscribe(auto_advance)
    final = harness.play_round(R)

    assert accepted == [False]
    assert final.phase == GamePhase.GAME_OVER
    assert final.score == Score(1, 0)
    assert phases(harness.published[-2:]) == [GamePhase.RESULT, GamePhase.GAME_OVER]
    assert harness.published[-2].score == Score(1, 0)

    harness.advance(5.0)
    assert harness.engine.phase == GamePhase.GAME_OVER
    assert harness.scheduler.pending_count() == 0


def test_listener_starting_next_round_mid_game():
    harness = EngineHarness(bot_gestures=[S])
    started = []

    def auto_advance(session):
        if session.phase == GamePhase.RESULT and not started:
            started.append(harness.engine.start_round())

    harness.engine.subscribe(auto_advance)
    harness.play_round(R)

    assert started == [True]
    assert harness.engine.phase == GamePhase.COUNTDOWN
    assert phases(harness.published[-2:]) == [GamePhase.RESULT, GamePhase.COUNTDOWN]
    assert harness.published[-1].countdown == 3


def test_custom_countdown_and_capture_delay():
    settings = GameSettings(countdown_seconds=2, capture_delay=0.25)
    harness = EngineHarness(settings=settings, bot_gestures=[R])
    harness.engine.start_round()
    assert harness.engine.snapshot().countdown == 2

    harness.advance(1.0)
    assert harness.engine.snapshot().countdown == 1
    harness.advance(1.0)
    assert harness.engine.phase == GamePhase.PLAYING
    harness.advance(0.25)
    assert harness.engine.phase == GamePhase.RESULT
    assert harness.engine.snapshot().outcome.result == GameResult.INVALID


def test_unsubscribe_stops_notifications(harness):
    received = []
    unsubscribe = harness.engine.subscribe(received.append)
    harness.engine.start_round()
    assert len(received) == 1

    unsubscribe()
    unsubscribe()
    harness.advance(1.0)
    assert len(received) == 1
    assert len(harness.published) == 2


def test_listener_exception_does_not_break_engine(harness):
    def broken(session):
        raise RuntimeError("listener failed")

    harness.engine.subscribe(broken)
    session = harness.play_round(R)
    assert session.phase == GamePhase.RESULT
    assert harness.published[-1] is session


def test_snapshots_are_immutable(harness):
    session = harness.engine.snapshot()
    with pytest.raises(dataclasses.FrozenInstanceError):
        session.phase = GamePhase.RESULT

    harness.engine.start_round()
    assert session.phase == GamePhase.IDLE
    assert harness.engine.snapshot() is not session


def test_bot_gesture_only_set_after_capture(harness):
    harness.source.gesture = R
    harness.engine.start_round()
    while harness.engine.phase != GamePhase.RESULT:
        assert harness.engine.snapshot().bot_gesture == N
        harness.advance(0.25)
    assert harness.engine.snapshot().bot_gesture == R


def test_shutdown_cancels_timer_and_listeners(harness):
    harness.engine.start_round()
    count = len(harness.published)
    harness.engine.shutdown()
    harness.advance(5.0)
    assert len(harness.published) == count
    assert harness.scheduler.pending_count() == 0
