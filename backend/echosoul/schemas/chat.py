from __future__ import annotations
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field

class ChatIn(BaseModel):
    message: str
    reset_context: bool = False

class ChatOut(BaseModel):
    reply: str = ""

class FeedbackIn(BaseModel):
    score: int = Field(..., description="Clamped to 1-5")
    question_id: Optional[int] = None
    memory_id: Optional[int] = None
    comments: Optional[str] = None

class AnalyzeIn(BaseModel):
    text: str

class ProfileUpdateIn(BaseModel):
    bio: Optional[str] = None
    avatar: Optional[str] = None
    preferences: Optional[Dict[str, Any]] = None
