# backend/tests/test_memory.py
from datetime import timedelta

import pytest

from echosoul.domain.memory.service import (
    decay_memories,
    is_significant,
    reinforce,
    remember,
    top_memory,
    touch,
)
from echosoul.schemas.profile import Memory

LONG_ANSWER = "I grew up near the sea and spent every summer sailing with my grandfather."


@pytest.mark.parametrize("answer,importance,expected", [
    ("short", 3, False),
    ("short", 4, True),
    ("x" * 50, 3, False),
    ("x" * 51, 1, True),
    (LONG_ANSWER, None, True),
    ("short", None, False),
])
def test_significance(answer, importance, expected):
    assert is_significant(answer, importance) is expected


def test_remember_uses_importance_as_weight(now):
    memories = []
    mem = remember(memories, LONG_ANSWER, 2, "happy", now)
    assert memories == [mem]
    assert mem.emotional_weight == 2.0
    assert mem.decay_rate == 0.95
    assert mem.emotions == ["happy"]
    assert mem.last_accessed == now


def test_unknown_question_weight_defaults_to_three(now):
    mem = remember([], LONG_ANSWER, None, None, now)
    assert mem.emotional_weight == 3.0
    assert mem.emotions == []


def test_insignificant_answer_is_not_remembered(now):
    memories = []
    assert remember(memories, "ok", 3, None, now) is None
    assert memories == []


def test_memory_ids_are_monotonic(now):
    a = remember([], LONG_ANSWER, 3, None, now)
    b = remember([], LONG_ANSWER, 3, None, now)
    assert b.id > a.id


def test_decay_pass(now):
    mem = Memory(id=1, content="c", emotional_weight=4.0, last_accessed=now - timedelta(days=10))
    kept = decay_memories([mem], now)
    assert kept == [mem]
    assert mem.emotional_weight == pytest.approx(4.0 * 0.95 ** 10)
    # repeated pass at the same instant does not decay again
    decay_memories(kept, now)
    assert mem.emotional_weight == pytest.approx(4.0 * 0.95 ** 10)


def test_faded_memories_are_pruned(now):
    faded = Memory(id=1, content="old", emotional_weight=0.2, last_accessed=now - timedelta(days=30))
    fresh = Memory(id=2, content="new", emotional_weight=5.0, last_accessed=now)
    kept = decay_memories([faded, fresh], now)
    assert [m.id for m in kept] == [2]
    assert all(m.emotional_weight >= 0.1 for m in kept)


def test_frequent_recall_slows_decay(now):
    mem = Memory(id=1, content="c", emotional_weight=5.0, access_count=6, last_accessed=now)
    decay_memories([mem], now)
    assert mem.decay_rate == pytest.approx(0.96)
    capped = Memory(id=2, content="c", access_count=9, decay_rate=0.99, last_accessed=now)
    decay_memories([capped], now)
    assert capped.decay_rate == pytest.approx(0.99)


def test_top_memory_prefers_weight_then_order(now):
    a = Memory(id=1, content="a", emotional_weight=3.0)
    b = Memory(id=2, content="b", emotional_weight=5.0)
    c = Memory(id=3, content="c", emotional_weight=5.0)
    assert top_memory([a, b, c]) is b
    assert top_memory([]) is None


def test_touch_and_reinforce(now):
    mem = Memory(id=1, content="c", emotional_weight=9.8, last_accessed=now - timedelta(days=1))
    touch(mem, now)
    assert mem.access_count == 1
    assert mem.last_accessed == now
    reinforce(mem, 5, now)
    assert mem.emotional_weight == 10.0
    assert mem.access_count == 2
    reinforce(mem, 1, now)
    assert mem.emotional_weight == pytest.approx(9.0)


def test_memory_at_floor_is_pruned_without_elapsed_time(now):
    floor = Memory(id=1, content="c", emotional_weight=0.1, last_accessed=now)
    above = Memory(id=2, content="c", emotional_weight=0.11, last_accessed=now)
    kept = decay_memories([floor, above], now)
    assert [m.id for m in kept] == [2]
