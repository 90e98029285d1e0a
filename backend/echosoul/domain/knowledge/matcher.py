"""
Knowledge Matcher for chat turns.

Scores every stored knowledge entry against an incoming message:

    score = (overlap(msg, question) + overlap(msg, answer))
            * importance(question)
            * exp(-0.1 * days_since_last_used)
            * context_relevance

overlap() is a length-weighted count of shared tokens (longer shared tokens
count more). context_relevance is the mean overlap between the entry's answer
and each tracked topic, 1.0 when nothing is tracked yet. Tracked topics are
already tokenizer output and are compared as-is.

MATCH_THRESHOLD is a fixed constant: the tokenizer is crude and the value is
tuned against it, so it is not exposed as a setting.

Usage:
    matcher = KnowledgeMatcher(catalog)
    entry, score = matcher.pick_best(message, profile.knowledge_base, topics, now)
    if entry is not None and score > MATCH_THRESHOLD: ...
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from echosoul.schemas.profile import KnowledgeEntry, MAX_TOPICS
from echosoul.domain.nlp.normalizers import tokenize
from echosoul.domain.training.catalog import QuestionCatalog
from echosoul.utils.time import days_between

MATCH_THRESHOLD = 2.5
RECENCY_DECAY_PER_DAY = 0.1
TOKEN_LENGTH_WEIGHT = 0.1
DEFAULT_IMPORTANCE = 3


def overlap(a: Iterable[str], b: Iterable[str]) -> float:
    """Sum of 0.1 * len(token) over tokens present on both sides."""
    shared = set(a) & set(b)
    return sum(TOKEN_LENGTH_WEIGHT * len(tok) for tok in shared)


def recency_factor(last_used: datetime, now: datetime) -> float:
    return math.exp(-RECENCY_DECAY_PER_DAY * days_between(last_used, now))


def context_relevance(answer_tokens: Sequence[str], topics: Sequence[str]) -> float:
    recent = list(topics)[:MAX_TOPICS]
    if not recent:
        return 1.0
    return float(np.mean([overlap(answer_tokens, [topic]) for topic in recent]))


def is_accepted(score: float) -> bool:
    return score > MATCH_THRESHOLD


class KnowledgeMatcher:
    """Ranks a profile's knowledge entries against a chat message."""

    def __init__(self, catalog: QuestionCatalog):
        self.catalog = catalog

    def rank(
        self,
        message: str,
        entries: Sequence[KnowledgeEntry],
        topics: Optional[Sequence[str]] = None,
        now: Optional[datetime] = None,
    ) -> List[Dict]:
        """
        Score every entry. Returns dicts sorted by score (best first, stable):
        [{"entry": KnowledgeEntry, "score": float, "breakdown": {...}}, ...]
        """
        msg_tokens = tokenize(message)
        results = []
        for entry in entries:
            score, breakdown = self._score_entry(msg_tokens, entry, topics or [], now)
            results.append({"entry": entry, "score": score, "breakdown": breakdown})
        results.sort(key=lambda x: x["score"], reverse=True)
        return results

    def pick_best(
        self,
        message: str,
        entries: Sequence[KnowledgeEntry],
        topics: Optional[Sequence[str]] = None,
        now: Optional[datetime] = None,
    ) -> Tuple[Optional[KnowledgeEntry], float]:
        """Return (best_entry, score); first entry wins ties. (None, 0.0) when empty."""
        msg_tokens = tokenize(message)
        best: Optional[KnowledgeEntry] = None
        best_score = 0.0
        for entry in entries:
            score, _ = self._score_entry(msg_tokens, entry, topics or [], now)
            if best is None or score > best_score:
                best, best_score = entry, score
        return best, best_score

    def _score_entry(
        self,
        msg_tokens: List[str],
        entry: KnowledgeEntry,
        topics: Sequence[str],
        now: Optional[datetime],
    ) -> Tuple[float, Dict]:
        question = self.catalog.get(entry.question_id)
        question_tokens = tokenize(question.question) if question else []
        answer_tokens = tokenize(entry.answer)
        importance = question.importance if question else DEFAULT_IMPORTANCE

        lexical = overlap(msg_tokens, question_tokens) + overlap(msg_tokens, answer_tokens)
        recency = recency_factor(entry.last_used, now) if now is not None else 1.0
        relevance = context_relevance(answer_tokens, topics)

        score = lexical * importance * recency * relevance
        breakdown = {
            "lexical": round(lexical, 3),
            "importance": importance,
            "recency": round(recency, 3),
            "context": round(relevance, 3),
        }
        return score, breakdown


__all__ = [
    "MATCH_THRESHOLD",
    "KnowledgeMatcher",
    "overlap",
    "recency_factor",
    "context_relevance",
    "is_accepted",
]
