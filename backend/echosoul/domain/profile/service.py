# -*- coding: utf-8 -*-
"""
Persona Service: store-backed orchestration over PersonaEngine

Each operation runs inside the owning profile's lock: read the profile,
let the engine compute the new snapshot, write it back in one step. Engine
errors propagate untouched and leave the stored profile as it was.

Public API (module-level helper at bottom):
- PersonaService.dashboard(user_id, username="") -> UserProfile
- PersonaService.update_profile(user_id, bio=None, avatar=None, preferences=None) -> UserProfile
- PersonaService.refresh(user_id) -> UserProfile
- PersonaService.list_questions(category=None, search=None) -> List[TrainingQuestion]
- PersonaService.next_question(user_id, context=None, category=None) -> TrainingQuestion
- PersonaService.submit_answer(user_id, question_id, answer, emotion=None) -> UserProfile
- PersonaService.add_custom_question(text, category, importance, triggers=None) -> TrainingQuestion
- PersonaService.deploy(user_id) -> UserProfile
- PersonaService.list_deployed() -> List[Tuple[str, str]]
- PersonaService.chat_with(owner_id, requester_id, message, reset_context=False) -> str
- PersonaService.feedback(user_id, score, question_id=None, memory_id=None, comments=None) -> UserProfile
- PersonaService.analyze(user_id, text) -> AnalysisReport
- get_service() -> PersonaService
"""

from __future__ import annotations

import logging
from datetime import datetime
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from echosoul.core.errors import InvalidInputError, NotDeployedError
from echosoul.core.logging import profile_extra
from echosoul.schemas.profile import (
    AnalysisReport,
    Preferences,
    TrainingQuestion,
    UserProfile,
)
from echosoul.domain.personality.engine import PersonaEngine
from echosoul.domain.profile.repo import ProfileRepo
from echosoul.utils.time import utc_now

log = logging.getLogger("echosoul.profile")


class PersonaService:
    def __init__(
        self,
        repo: Optional[ProfileRepo] = None,
        engine: Optional[PersonaEngine] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repo = repo or ProfileRepo()
        self.engine = engine or PersonaEngine()
        self.clock = clock

    def _apply(self, user_id: str, op: Callable[[UserProfile], UserProfile]) -> UserProfile:
        with self.repo.locked(user_id):
            updated = op(self.repo.get(user_id))
            self.repo.put(updated)
        return updated

    # ---- profile -------------------------------------------------------------
    def dashboard(self, user_id: str, username: str = "") -> UserProfile:
        if not self.repo.exists(user_id):
            log.info("creating profile", extra=profile_extra(user_id))
        return self.repo.get_or_create(user_id, username)

    def update_profile(
        self,
        user_id: str,
        bio: Optional[str] = None,
        avatar: Optional[str] = None,
        preferences: Optional[Dict[str, Any]] = None,
    ) -> UserProfile:
        def op(profile: UserProfile) -> UserProfile:
            p = profile.model_copy(deep=True)
            if bio is not None:
                p.bio = bio
            if avatar is not None:
                p.avatar = avatar
            if preferences:
                merged = {**p.preferences.model_dump(), **preferences}
                try:
                    p.preferences = Preferences(**merged)
                except ValidationError as e:
                    raise InvalidInputError("Invalid preferences.", errors=e.errors(include_url=False)) from e
            return p

        return self._apply(user_id, op)

    def refresh(self, user_id: str) -> UserProfile:
        return self._apply(user_id, lambda p: self.engine.refresh_profile(p, now=self.clock()))

    # ---- training ------------------------------------------------------------
    def list_questions(self, category: Optional[str] = None, search: Optional[str] = None) -> List[TrainingQuestion]:
        return self.engine.catalog.list_questions(category=category, search=search)

    def next_question(self, user_id: str, context: Optional[str] = None, category: Optional[str] = None) -> TrainingQuestion:
        with self.repo.locked(user_id):
            profile = self.repo.get(user_id)
        return self.engine.next_question(profile, context=context, category=category)

    def submit_answer(self, user_id: str, question_id: int, answer: str, emotion: Optional[str] = None) -> UserProfile:
        return self._apply(
            user_id,
            lambda p: self.engine.submit_answer(p, question_id, answer, emotion=emotion, now=self.clock()),
        )

    def add_custom_question(
        self,
        text: str,
        category: str = "general",
        importance: int = 3,
        triggers: Optional[Sequence[str]] = None,
    ) -> TrainingQuestion:
        return self.engine.catalog.append_question(text, category, importance, triggers)

    def deploy(self, user_id: str) -> UserProfile:
        return self._apply(user_id, self.engine.deploy_system)

    def list_deployed(self) -> List[Tuple[str, str]]:
        return self.repo.list_deployed()

    # ---- chat ----------------------------------------------------------------
    def chat_with(self, owner_id: str, requester_id: str, message: str, reset_context: bool = False) -> str:
        """
        Chat with ``owner_id``'s system. Owners may always talk to their own
        profile; everyone else needs it deployed.
        """
        with self.repo.locked(owner_id):
            profile = self.repo.get(owner_id)
            if not profile.deployed and owner_id != requester_id:
                raise NotDeployedError("That system has not been deployed.", owner_id=owner_id)
            reply, updated = self.engine.chat(profile, message, reset_context=reset_context, now=self.clock())
            self.repo.put(updated)
        return reply

    # ---- feedback / diagnostics ---------------------------------------------
    def feedback(
        self,
        user_id: str,
        score: int,
        question_id: Optional[int] = None,
        memory_id: Optional[int] = None,
        comments: Optional[str] = None,
    ) -> UserProfile:
        return self._apply(
            user_id,
            lambda p: self.engine.provide_feedback(
                p, score, question_id=question_id, memory_id=memory_id, comments=comments, now=self.clock()
            ),
        )

    def analyze(self, user_id: str, text: str) -> AnalysisReport:
        with self.repo.locked(user_id):
            profile = self.repo.get(user_id)
        return self.engine.analyze(profile, text)


@lru_cache(maxsize=1)
def get_service() -> PersonaService:
    """
    Cached process-wide service. Call anywhere.
    """
    return PersonaService()


__all__ = ["PersonaService", "get_service"]
