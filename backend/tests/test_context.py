# backend/tests/test_context.py
from echosoul.domain.memory.context_builder import (
    extract_topic,
    last_topic,
    record_turn,
    tracked_topics,
)
from echosoul.schemas.profile import MAX_HISTORY, MAX_TOPICS


def _run(messages, reset_at=None):
    history = []
    for i, msg in enumerate(messages):
        history = record_turn(history, msg, "neutral", "casual", reset=(i == reset_at))
    return history


def test_first_turn_starts_a_context():
    history = record_turn([], "I love hiking", "happy", "casual")
    assert len(history) == 1
    ctx = history[0]
    assert ctx.recent_topics == ["love"]
    assert ctx.current_emotion == "happy"
    assert ctx.style_preference == "casual"


def test_topics_are_most_recent_first_and_bounded():
    history = _run(["music rocks", "weather today", "travel plans", "cooking dinner"])
    assert history[0].recent_topics == ["cook", "travel", "weather"]
    assert len(history[0].recent_topics) == MAX_TOPICS
    assert last_topic(history) == "cook"


def test_history_is_bounded():
    history = _run([f"topic{n}x stuff" for n in range(8)])
    assert len(history) == MAX_HISTORY


def test_reset_starts_fresh_context_but_keeps_history():
    history = _run(["music rocks", "weather today", "travel plans"], reset_at=2)
    assert history[0].recent_topics == ["travel"]
    assert history[1].recent_topics == ["weather", "music"]
    assert tracked_topics(history, reset=True) == []
    assert tracked_topics(history) == ["travel"]


def test_none_emotion_is_not_stored():
    history = record_turn([], "music rocks", "none", "formal")
    assert history[0].current_emotion is None
    assert history[0].style_preference == "formal"


def test_prior_context_is_not_mutated():
    first = record_turn([], "music rocks", "happy", "casual")
    record_turn(first, "weather today", "sad", "casual")
    assert first[0].recent_topics == ["music"]
    assert first[0].current_emotion == "happy"


def test_message_without_tokens_keeps_topics():
    history = record_turn([], "music rocks", None, "casual")
    history = record_turn(history, "ok", None, "casual")
    assert extract_topic("ok") is None
    assert history[0].recent_topics == ["music"]
    assert tracked_topics([]) == []
    assert last_topic([]) is None
