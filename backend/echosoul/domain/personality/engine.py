# -*- coding: utf-8 -*-
"""
engine.py: personality modeling + contextual response engine

Every operation takes a UserProfile value and returns a new one (deep copy)
or raises an EngineError. The input profile is never mutated, so a failed
call has applied nothing. Persisting the returned profile is the caller's
job (see domain/profile/service.py for the store-backed wrapper).

Public API
----------
PersonaEngine.next_question(profile, context=None, category=None) -> TrainingQuestion
PersonaEngine.submit_answer(profile, question_id, answer, emotion=None, now=None) -> UserProfile
PersonaEngine.chat(profile, message, reset_context=False, now=None) -> (str, UserProfile)
PersonaEngine.provide_feedback(profile, score, question_id=None, memory_id=None, comments=None, now=None) -> UserProfile
PersonaEngine.analyze(profile, text) -> AnalysisReport
PersonaEngine.deploy_system(profile) -> UserProfile
PersonaEngine.refresh_profile(profile, now=None) -> UserProfile
"""

from __future__ import annotations

import logging
import random
import time
from datetime import datetime
from typing import List, Optional, Tuple

from echosoul.core.config import get_settings
from echosoul.core.errors import (
    ExhaustedError,
    InvalidInputError,
    NotEnoughTrainingError,
    NotFoundError,
)
from echosoul.core.logging import profile_extra
from echosoul.schemas.profile import (
    AnalysisReport,
    FeedbackRecord,
    KnowledgeEntry,
    Style,
    TrainingQuestion,
    UserProfile,
)
from echosoul.domain.knowledge.matcher import KnowledgeMatcher, is_accepted
from echosoul.domain.memory.context_builder import last_topic, record_turn, tracked_topics
from echosoul.domain.memory.service import decay_memories, reinforce, remember, top_memory, touch
from echosoul.domain.nlp.normalizers import tokenize
from echosoul.domain.nlp.service import classify_emotion, classify_style
from echosoul.domain.personality.traits import trait_names, update_traits
from echosoul.domain.responses.synthesizer import ResponseSynthesizer
from echosoul.domain.training.catalog import QuestionCatalog, get_catalog
from echosoul.utils.text import clip, squash_ws
from echosoul.utils.time import utc_now

log = logging.getLogger("echosoul.engine")

MIN_ANSWERS_TO_DEPLOY = 10
PROGRESS_PER_ANSWER = 10
CONFIDENCE_STEP = 0.1


def clamp_score(score: int) -> int:
    return int(clip(round(score), 1, 5))


def _time_seeded_rng() -> random.Random:
    # not reproducible across ticks; inject a seeded Random in tests
    return random.Random(time.time_ns())


class PersonaEngine:
    """
    Stateless over profiles: the only state it holds is the shared catalog,
    the random source used for style drift, and the drift blend factor.
    """

    def __init__(
        self,
        catalog: Optional[QuestionCatalog] = None,
        rng: Optional[random.Random] = None,
        blend_factor: Optional[float] = None,
    ):
        self.catalog = catalog or get_catalog()
        self.rng = rng or _time_seeded_rng()
        self.blend_factor = clip(
            blend_factor if blend_factor is not None else get_settings().STYLE_BLEND_FACTOR, 0.0, 1.0
        )
        self.matcher = KnowledgeMatcher(self.catalog)
        self.synthesizer = ResponseSynthesizer()

    # ---- training ------------------------------------------------------------
    def next_question(
        self,
        profile: UserProfile,
        context: Optional[str] = None,
        category: Optional[str] = None,
    ) -> TrainingQuestion:
        """
        Highest-importance unanswered question (lowest id on ties). A matching
        category and then trigger hits from ``context`` narrow the pool when
        they match anything; otherwise they are ignored.
        """
        answered = profile.answered_ids()
        pool = [q for q in self.catalog.list_questions() if q.id not in answered]
        if not pool:
            log.info("no questions left", extra=profile_extra(profile.user_id))
            raise ExhaustedError("No unanswered questions left.", user_id=profile.user_id)

        if category and category != "all":
            in_category = [q for q in pool if q.category == category.lower()]
            if in_category:
                pool = in_category

        if context:
            ctx_tokens = set(tokenize(context, bigrams=False))
            triggered = [q for q in pool if ctx_tokens & set(self._trigger_tokens(q))]
            if triggered:
                pool = triggered

        return min(pool, key=lambda q: (-q.importance, q.id))

    @staticmethod
    def _trigger_tokens(question: TrainingQuestion) -> List[str]:
        out: List[str] = []
        for trigger in question.triggers:
            out.extend(tokenize(trigger, bigrams=False))
        return out

    def submit_answer(
        self,
        profile: UserProfile,
        question_id: int,
        answer: str,
        emotion: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> UserProfile:
        answer = squash_ws(answer)
        if not answer:
            raise InvalidInputError("Answer text is required.", question_id=question_id)
        now = now or utc_now()
        question = self.catalog.get(question_id)
        p = profile.model_copy(deep=True)

        p.traits = update_traits(p.traits, answer, question.category if question else "", now)
        remember(p.memories, answer, question.importance if question else None, emotion, now)
        self._drift_style(p, answer)

        entry = p.find_entry(question_id)
        if entry is None:
            p.knowledge_base.append(KnowledgeEntry(question_id=question_id, answer=answer, last_used=now))
        else:
            entry.answer = answer
            entry.last_used = now

        if not p.deployed:
            p.training_progress = min(100, PROGRESS_PER_ANSWER * len(p.knowledge_base))
        log.debug(
            "answer stored (q=%s, entries=%d)", question_id, len(p.knowledge_base), extra=profile_extra(p.user_id)
        )
        return p

    def _drift_style(self, profile: UserProfile, answer: str) -> None:
        detected: Optional[Style] = classify_style(answer)
        current = profile.preferences.preferred_style
        if detected is None or detected == current:
            return
        # weighted coin flip on one random byte
        if self.rng.randrange(256) < int(self.blend_factor * 256):
            profile.preferences.preferred_style = detected
            log.info("style drifted %s -> %s", current, detected, extra=profile_extra(profile.user_id))

    def deploy_system(self, profile: UserProfile) -> UserProfile:
        count = len(profile.knowledge_base)
        if count < MIN_ANSWERS_TO_DEPLOY:
            raise NotEnoughTrainingError(
                f"Answer at least {MIN_ANSWERS_TO_DEPLOY} questions before deploying.",
                answered=count,
                required=MIN_ANSWERS_TO_DEPLOY,
            )
        p = profile.model_copy(deep=True)
        p.deployed = True
        p.training_progress = 100
        log.info("system deployed (%d entries)", count, extra=profile_extra(p.user_id))
        return p

    # ---- chat ----------------------------------------------------------------
    def chat(
        self,
        profile: UserProfile,
        message: str,
        reset_context: bool = False,
        now: Optional[datetime] = None,
    ) -> Tuple[str, UserProfile]:
        """
        One chat turn. Uses the best knowledge entry when it clears the match
        threshold, otherwise synthesizes from traits, top memory and the last
        tracked topic. Records the turn in the conversation history.
        """
        now = now or utc_now()
        p = profile.model_copy(deep=True)
        emotion = classify_emotion(message)
        topics = tracked_topics(p.conversation_history, reset=reset_context)

        entry, score = self.matcher.pick_best(message, p.knowledge_base, topics, now)
        if entry is not None and is_accepted(score):
            text = self.synthesizer.from_entry(entry, now)
            log.debug("matched q=%s score=%.2f", entry.question_id, score)
        else:
            memory = top_memory(p.memories)
            topic = None if reset_context else last_topic(p.conversation_history)
            text = self.synthesizer.compose(p.traits, memory, topic, emotion)
            if memory is not None:
                touch(memory, now)
            log.debug("synthesized reply (best score=%.2f)", score)

        reply = self.synthesizer.format(text, p.preferences, emotion)
        p.conversation_history = record_turn(
            p.conversation_history,
            message,
            emotion,
            p.preferences.preferred_style,
            reset=reset_context,
        )
        return reply, p

    # ---- feedback / diagnostics ---------------------------------------------
    def provide_feedback(
        self,
        profile: UserProfile,
        score: int,
        question_id: Optional[int] = None,
        memory_id: Optional[int] = None,
        comments: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> UserProfile:
        """
        Score is clamped to 1-5. Entries move confidence by 0.1 per point away
        from 3; memories move weight by 0.5 per point.
        """
        if question_id is None and memory_id is None:
            raise InvalidInputError("Feedback needs a question_id or a memory_id.")
        now = now or utc_now()
        score = clamp_score(score)
        p = profile.model_copy(deep=True)

        if question_id is not None:
            entry = p.find_entry(question_id)
            if entry is None:
                raise NotFoundError("No answer stored for that question.", question_id=question_id)
            entry.confidence = clip(entry.confidence + CONFIDENCE_STEP * (score - 3), 0.2, 1.0)

        if memory_id is not None:
            memory = p.find_memory(memory_id)
            if memory is None:
                raise NotFoundError("Memory not found.", memory_id=memory_id)
            reinforce(memory, score, now)

        p.feedback.append(FeedbackRecord(
            question_id=question_id,
            memory_id=memory_id,
            score=score,
            comments=squash_ws(comments) if comments else None,
            created_at=now,
        ))
        return p

    def analyze(self, profile: UserProfile, text: str) -> AnalysisReport:
        return AnalysisReport(
            traits=trait_names(profile.traits),
            emotion=classify_emotion(text),
            style=classify_style(text),
            keywords=tokenize(text, bigrams=False),
        )

    # ---- maintenance ---------------------------------------------------------
    def refresh_profile(self, profile: UserProfile, now: Optional[datetime] = None) -> UserProfile:
        """Login/refresh pass: decay and prune memories."""
        p = profile.model_copy(deep=True)
        p.memories = decay_memories(p.memories, now or utc_now())
        return p


__all__ = ["PersonaEngine", "MIN_ANSWERS_TO_DEPLOY", "clamp_score"]
