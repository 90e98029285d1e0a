# backend/tests/test_matcher.py
import math
from datetime import timedelta

import pytest

from echosoul.domain.knowledge.matcher import (
    MATCH_THRESHOLD,
    KnowledgeMatcher,
    context_relevance,
    is_accepted,
    overlap,
)
from echosoul.domain.nlp.normalizers import tokenize
from echosoul.schemas.profile import KnowledgeEntry

CONFLICT_QID = 3  # "How do you handle conflict?" (importance 4)


@pytest.fixture
def matcher(catalog):
    return KnowledgeMatcher(catalog)


def _entry(qid, answer, last_used):
    return KnowledgeEntry(question_id=qid, answer=answer, last_used=last_used)


def test_overlap_weights_longer_tokens_more():
    assert overlap(["calm", "listen"], ["calm"]) == pytest.approx(0.4)
    assert overlap(["calm"], ["calm", "calm"]) == pytest.approx(0.4)
    assert overlap([], ["calm"]) == 0.0


def test_context_relevance():
    assert context_relevance(["calm"], []) == 1.0
    assert context_relevance(["calm"], ["calm"]) == pytest.approx(0.4)
    assert context_relevance(["calm"], ["calm", "weather"]) == pytest.approx(0.2)


def test_question_wording_match_scores_above_threshold(matcher, now):
    entry = _entry(CONFLICT_QID, "I stay calm and listen.", now)
    best, score = matcher.pick_best("How do you handle conflict?", [entry], [], now)
    assert best is entry
    # handle(6) + conflict(8) + "handle conflict"(15) = 2.9, times importance 4
    assert score == pytest.approx(11.6)
    assert is_accepted(score)


def test_recency_discounts_stale_entries(matcher, now):
    entry = _entry(CONFLICT_QID, "I stay calm and listen.", now - timedelta(days=10))
    _, score = matcher.pick_best("How do you handle conflict?", [entry], [], now)
    assert score == pytest.approx(11.6 * math.exp(-1.0))


def test_tracked_topics_scale_the_score(matcher, now):
    entry = _entry(CONFLICT_QID, "I stay calm and listen.", now)
    _, on_topic = matcher.pick_best("How do you handle conflict?", [entry], ["calm"], now)
    _, mixed = matcher.pick_best("How do you handle conflict?", [entry], ["calm", "weather"], now)
    _, off_topic = matcher.pick_best("How do you handle conflict?", [entry], ["weather"], now)
    assert on_topic == pytest.approx(11.6 * 0.4)
    assert mixed == pytest.approx(11.6 * 0.2)
    assert off_topic == 0.0
    assert not is_accepted(mixed)


def test_unknown_question_uses_default_importance(matcher, now):
    entry = _entry(999, "I love pizza", now)
    _, score = matcher.pick_best("pizza", [entry], [], now)
    assert score == pytest.approx(0.5 * 3)
    assert not is_accepted(score)


def test_threshold_is_strict():
    assert not is_accepted(MATCH_THRESHOLD)
    assert is_accepted(MATCH_THRESHOLD + 1e-9)


def test_empty_and_ties(matcher, now):
    assert matcher.pick_best("anything", [], [], now) == (None, 0.0)
    a = _entry(998, "pizza night", now)
    b = _entry(999, "pizza night", now)
    best, _ = matcher.pick_best("pizza", [a, b], [], now)
    assert best is a


def test_rank_orders_and_explains(matcher, now):
    weak = _entry(999, "pizza night", now)
    strong = _entry(CONFLICT_QID, "I stay calm and listen.", now)
    ranked = matcher.rank("handle conflict over pizza", [weak, strong], None, now)
    assert [r["entry"] for r in ranked] == [strong, weak]
    assert set(ranked[0]["breakdown"]) == {"lexical", "importance", "recency", "context"}
    assert ranked[0]["breakdown"]["importance"] == 4


def test_missing_clock_skips_recency(matcher, now):
    entry = _entry(CONFLICT_QID, "I stay calm and listen.", now - timedelta(days=30))
    _, score = matcher.pick_best("How do you handle conflict?", [entry])
    assert score == pytest.approx(11.6)


def test_tracked_topic_is_compared_as_stored(matcher, now):
    # "feed" is already a stemmed topic; stemming again would drop it
    answer = "I keep feeding the conversation calmly"
    assert context_relevance(tokenize(answer), ["feed"]) == pytest.approx(0.4)
    entry = _entry(CONFLICT_QID, answer, now)
    _, score = matcher.pick_best("How do you handle conflict feeding?", [entry], ["feed"], now)
    assert score == pytest.approx((2.9 + 0.4) * 4 * 0.4)
    assert is_accepted(score)
