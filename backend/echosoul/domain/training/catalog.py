# -*- coding: utf-8 -*-
"""
catalog.py: process-wide, append-only training question catalog

Ids are assigned monotonically and never reused. Custom questions are
appended with fresh ids; nothing is ever removed.

Public API
----------
QuestionCatalog.list_questions(category=None, search=None)
QuestionCatalog.append_question(text, category, importance, triggers, options)
QuestionCatalog.get(question_id)
get_catalog()
"""

from __future__ import annotations

import itertools
import logging
import threading
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from echosoul.schemas.profile import TrainingQuestion, clamp_importance
from echosoul.core.errors import InvalidInputError
from echosoul.utils.text import squash_ws, unique_preserve

log = logging.getLogger("echosoul.training")

# (question, category, importance, triggers)
DEFAULT_QUESTIONS: Tuple[Tuple[str, str, int, Tuple[str, ...]], ...] = (
    ("How would your closest friends describe you?", "personality", 5, ("friends", "describe", "personality")),
    ("What do you value most in life?", "values", 5, ("value", "life", "important")),
    ("How do you handle conflict?", "relationships", 4, ("conflict", "argument", "fight", "disagree")),
    ("What makes you feel energized after a long day?", "personality", 4, ("energy", "tired", "relax", "recharge")),
    ("Describe a moment you felt truly proud of yourself.", "memories", 4, ("proud", "achievement", "success")),
    ("What does a perfect weekend look like for you?", "lifestyle", 3, ("weekend", "free", "fun", "hobby")),
    ("How do you usually make big decisions?", "personality", 4, ("decision", "choose", "choice", "decide")),
    ("What kind of work or projects excite you the most?", "work", 3, ("work", "job", "career", "project")),
    ("Who has influenced you the most, and how?", "relationships", 4, ("family", "mentor", "influence", "parent")),
    ("What is something you are trying to get better at?", "growth", 3, ("learn", "improve", "goal", "skill")),
    ("How do you comfort someone who is upset?", "relationships", 3, ("comfort", "upset", "sad", "support")),
    ("What are you most curious about right now?", "interests", 2, ("curious", "interest", "read", "learn")),
    ("What small things reliably make you happy?", "personality", 3, ("happy", "joy", "smile")),
    ("How do you react when plans change at the last minute?", "personality", 3, ("plans", "change", "stress", "surprise")),
    ("What is a belief you hold that most people disagree with?", "values", 2, ("belief", "opinion", "disagree")),
)


class QuestionCatalog:
    """Append-only, thread-safe list of TrainingQuestion records."""

    def __init__(self, seed: Optional[Iterable[Tuple[str, str, int, Sequence[str]]]] = None):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._questions: List[TrainingQuestion] = []
        self._by_id: Dict[int, TrainingQuestion] = {}
        for text, category, importance, triggers in (DEFAULT_QUESTIONS if seed is None else seed):
            self.append_question(text, category, importance, triggers)

    def __len__(self) -> int:
        return len(self._questions)

    def get(self, question_id: int) -> Optional[TrainingQuestion]:
        return self._by_id.get(question_id)

    def list_questions(self, category: Optional[str] = None, search: Optional[str] = None) -> List[TrainingQuestion]:
        """
        Snapshot of the catalog. ``category`` filters exactly ("all" or None
        keeps everything); ``search`` matches question text or category.
        """
        with self._lock:
            out = list(self._questions)
        if category and category != "all":
            out = [q for q in out if q.category == category]
        if search:
            needle = search.lower()
            out = [q for q in out if needle in q.question.lower() or needle in q.category.lower()]
        return out

    def append_question(
        self,
        text: str,
        category: str = "general",
        importance: int = 3,
        triggers: Optional[Sequence[str]] = None,
        options: Optional[Sequence[str]] = None,
    ) -> TrainingQuestion:
        text = squash_ws(text)
        if not text:
            raise InvalidInputError("Question text is required.")
        with self._lock:
            q = TrainingQuestion(
                id=next(self._ids),
                question=text,
                category=squash_ws(category).lower() or "general",
                importance=clamp_importance(importance),
                triggers=unique_preserve(t.strip().lower() for t in (triggers or []) if t and t.strip()),
                options=list(options) if options else ["Open-ended"],
            )
            self._questions.append(q)
            self._by_id[q.id] = q
        log.debug("question %s appended (%s)", q.id, q.category)
        return q


@lru_cache(maxsize=1)
def get_catalog() -> QuestionCatalog:
    """
    Process-wide catalog seeded with DEFAULT_QUESTIONS.
    """
    return QuestionCatalog()


__all__ = ["QuestionCatalog", "DEFAULT_QUESTIONS", "get_catalog"]
