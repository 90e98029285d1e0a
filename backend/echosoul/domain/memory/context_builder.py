# backend/echosoul/domain/memory/context_builder.py
from __future__ import annotations

from typing import List, Optional

from echosoul.schemas.profile import (
    MAX_HISTORY,
    MAX_TOPICS,
    ConversationContext,
    Emotion,
    Style,
)
from echosoul.domain.nlp.normalizers import tokenize


def current_context(history: List[ConversationContext]) -> Optional[ConversationContext]:
    return history[0] if history else None


def last_topic(history: List[ConversationContext]) -> Optional[str]:
    ctx = current_context(history)
    if ctx and ctx.recent_topics:
        return ctx.recent_topics[0]
    return None


def tracked_topics(history: List[ConversationContext], reset: bool = False) -> List[str]:
    """Topics the matcher should weigh; empty after a requested reset."""
    ctx = current_context(history)
    if reset or ctx is None:
        return []
    return list(ctx.recent_topics[:MAX_TOPICS])


def extract_topic(message: str) -> Optional[str]:
    tokens = tokenize(message, bigrams=False)
    return tokens[0] if tokens else None


def record_turn(
    history: List[ConversationContext],
    message: str,
    emotion: Optional[Emotion],
    style: Style,
    reset: bool = False,
) -> List[ConversationContext]:
    """
    history: most-recent-first list of contexts.
    Extends the latest context with this turn's topic and emotion (or starts
    a fresh one on reset / empty history) and prepends it, keeping MAX_HISTORY.
    """
    prior = current_context(history)
    if reset or prior is None:
        ctx = ConversationContext(recent_topics=[], current_emotion=None, style_preference=style)
    else:
        ctx = prior.model_copy(deep=True)
        ctx.style_preference = style

    topic = extract_topic(message)
    if topic:
        ctx.recent_topics = [topic] + ctx.recent_topics
    ctx.recent_topics = ctx.recent_topics[:MAX_TOPICS]
    ctx.current_emotion = None if emotion in (None, "none") else emotion

    return ([ctx] + list(history))[:MAX_HISTORY]
