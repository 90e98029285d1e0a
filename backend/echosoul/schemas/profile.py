from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from echosoul.utils.text import clip
from echosoul.utils.time import utc_now

Style = Literal["casual", "formal", "technical", "humorous", "empathetic"]
Emotion = Literal["happy", "excited", "sad", "angry", "neutral", "none"]

# collection bounds
MAX_TRAITS = 15
MAX_TOPICS = 3
MAX_HISTORY = 5

# numeric ranges
TRAIT_MIN, TRAIT_MAX = 0.0, 10.0
MEMORY_MIN_WEIGHT, MEMORY_MAX_WEIGHT = 0.1, 10.0
CONFIDENCE_MIN, CONFIDENCE_MAX = 0.2, 1.0
DECAY_RATE_START, DECAY_RATE_CAP = 0.95, 0.99


def clamp_importance(value: int) -> int:
    return int(clip(round(value), 1, 5))


class TrainingQuestion(BaseModel):
    id: int
    question: str
    category: str = "general"
    importance: int = 3
    triggers: List[str] = Field(default_factory=list)
    options: List[str] = Field(default_factory=lambda: ["Open-ended"])

    model_config = {"frozen": True}

    @field_validator("importance", mode="before")
    @classmethod
    def _clamp_importance(cls, v: int) -> int:
        return clamp_importance(v)


class KnowledgeEntry(BaseModel):
    model_config = {"validate_assignment": True}

    question_id: int
    answer: str
    confidence: float = 1.0
    last_used: datetime = Field(default_factory=utc_now)
    usage_count: int = 0

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, v: float) -> float:
        return clip(v, CONFIDENCE_MIN, CONFIDENCE_MAX)


class Trait(BaseModel):
    model_config = {"validate_assignment": True}

    name: str
    strength: float = 5.0
    last_updated: datetime = Field(default_factory=utc_now)

    @field_validator("strength", mode="before")
    @classmethod
    def _clamp_strength(cls, v: float) -> float:
        return clip(v, TRAIT_MIN, TRAIT_MAX)


class Memory(BaseModel):
    model_config = {"validate_assignment": True}

    id: int
    content: str
    emotional_weight: float = 3.0
    last_accessed: datetime = Field(default_factory=utc_now)
    access_count: int = 0
    emotions: List[str] = Field(default_factory=list)
    decay_rate: float = DECAY_RATE_START
    decayed_at: Optional[datetime] = None

    @field_validator("emotional_weight", mode="before")
    @classmethod
    def _clamp_weight(cls, v: float) -> float:
        return clip(v, MEMORY_MIN_WEIGHT, MEMORY_MAX_WEIGHT)

    @field_validator("decay_rate", mode="before")
    @classmethod
    def _clamp_rate(cls, v: float) -> float:
        return clip(v, 0.0, DECAY_RATE_CAP)


class Preferences(BaseModel):
    model_config = {"validate_assignment": True}

    preferred_style: Style = "casual"
    depth_level: int = 2
    formality: int = 3

    @field_validator("depth_level", mode="before")
    @classmethod
    def _clamp_depth(cls, v: int) -> int:
        return int(clip(round(v), 1, 3))

    @field_validator("formality", mode="before")
    @classmethod
    def _clamp_formality(cls, v: int) -> int:
        return int(clip(round(v), 1, 5))


class ConversationContext(BaseModel):
    recent_topics: List[str] = Field(default_factory=list)  # most recent first
    current_emotion: Optional[Emotion] = None
    style_preference: Style = "casual"


class FeedbackRecord(BaseModel):
    question_id: Optional[int] = None
    memory_id: Optional[int] = None
    score: int
    comments: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class AnalysisReport(BaseModel):
    traits: List[str] = Field(default_factory=list)
    emotion: Emotion = "none"
    style: Optional[Style] = None
    keywords: List[str] = Field(default_factory=list)


class UserProfile(BaseModel):
    user_id: str
    username: str = ""
    bio: Optional[str] = None
    avatar: Optional[str] = None  # opaque to the engine
    traits: List[Trait] = Field(default_factory=list)
    knowledge_base: List[KnowledgeEntry] = Field(default_factory=list)
    memories: List[Memory] = Field(default_factory=list)
    preferences: Preferences = Field(default_factory=Preferences)
    conversation_history: List[ConversationContext] = Field(default_factory=list)  # most recent first
    training_progress: int = 0
    deployed: bool = False
    feedback: List[FeedbackRecord] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)

    def answered_ids(self) -> set:
        return {k.question_id for k in self.knowledge_base}

    def find_entry(self, question_id: int) -> Optional[KnowledgeEntry]:
        for entry in self.knowledge_base:
            if entry.question_id == question_id:
                return entry
        return None

    def find_memory(self, memory_id: int) -> Optional[Memory]:
        for mem in self.memories:
            if mem.id == memory_id:
                return mem
        return None


__all__ = [
    "Style", "Emotion",
    "TrainingQuestion", "KnowledgeEntry", "Trait", "Memory",
    "Preferences", "ConversationContext", "FeedbackRecord", "AnalysisReport", "UserProfile",
    "clamp_importance",
]
