"""
游戏规则测试
Game Rules Tests
"""
import pytest

from gesture_rps.game.game_logic import (
    GameRules, GameResult, Gesture, PLAYABLE_GESTURES, RESULT_MESSAGES, RoundOutcome
)

R, P, S, N = Gesture.ROCK, Gesture.PAPER, Gesture.SCISSORS, Gesture.NONE

# 完整的 4x4 判定表 (玩家, 机器人) -> 结果
EXPECTED = {
    (R, R): GameResult.DRAW,
    (R, P): GameResult.BOT_WIN,
    (R, S): GameResult.PLAYER_WIN,
    (R, N): GameResult.BOT_WIN,
    (P, R): GameResult.PLAYER_WIN,
    (P, P): GameResult.DRAW,
    (P, S): GameResult.BOT_WIN,
    (P, N): GameResult.BOT_WIN,
    (S, R): GameResult.BOT_WIN,
    (S, P): GameResult.PLAYER_WIN,
    (S, S): GameResult.DRAW,
    (S, N): GameResult.BOT_WIN,
    (N, R): GameResult.INVALID,
    (N, P): GameResult.INVALID,
    (N, S): GameResult.INVALID,
    (N, N): GameResult.INVALID,
}


@pytest.mark.parametrize("player,bot", list(EXPECTED.keys()))
def test_judge_table(player, bot):
    assert GameRules.judge(player, bot) == EXPECTED[(player, bot)]


@pytest.mark.parametrize("player,bot", list(EXPECTED.keys()))
def test_resolve_message_matches_result(player, bot):
    outcome = GameRules.resolve(player, bot)
    assert isinstance(outcome, RoundOutcome)
    assert outcome.result == EXPECTED[(player, bot)]
    assert outcome.message == RESULT_MESSAGES[outcome.result]


def test_result_messages():
    assert RESULT_MESSAGES[GameResult.PLAYER_WIN] == "You Win!"
    assert RESULT_MESSAGES[GameResult.BOT_WIN] == "Bot Wins!"
    assert RESULT_MESSAGES[GameResult.DRAW] == "Draw!"
    assert RESULT_MESSAGES[GameResult.INVALID] == "No Hand Detected"


def test_symmetry_between_playable_gestures():
    """交换双方后，胜负互换，平局不变"""
    swap = {
        GameResult.PLAYER_WIN: GameResult.BOT_WIN,
        GameResult.BOT_WIN: GameResult.PLAYER_WIN,
        GameResult.DRAW: GameResult.DRAW,
    }
    for a in PLAYABLE_GESTURES:
        for b in PLAYABLE_GESTURES:
            assert GameRules.judge(b, a) == swap[GameRules.judge(a, b)]


def test_each_gesture_beats_exactly_one():
    for gesture in PLAYABLE_GESTURES:
        wins = [b for b in PLAYABLE_GESTURES if GameRules.judge(gesture, b) == GameResult.PLAYER_WIN]
        assert len(wins) == 1


def test_is_decisive():
    assert GameResult.PLAYER_WIN.is_decisive
    assert GameResult.BOT_WIN.is_decisive
    assert not GameResult.DRAW.is_decisive
    assert not GameResult.INVALID.is_decisive
    assert not GameRules.resolve(N, R).is_decisive


def test_outcome_to_dict():
    outcome = GameRules.resolve(R, S)
    assert outcome.to_dict() == {'result': 'player_win', 'message': 'You Win!'}


def test_winning_and_losing_gesture_helpers():
    assert GameRules.get_winning_gesture(R) == P
    assert GameRules.get_winning_gesture(P) == S
    assert GameRules.get_winning_gesture(S) == R
    assert GameRules.get_winning_gesture(N) is None

    assert GameRules.get_losing_gesture(R) == S
    assert GameRules.get_losing_gesture(N) is None

    assert GameRules.is_valid_gesture(S)
    assert not GameRules.is_valid_gesture(N)
