from __future__ import annotations
from typing import Optional, List
from pydantic import BaseModel, Field

class AnswerIn(BaseModel):
    question_id: int
    answer: str = Field(..., description="Free-text answer")
    emotion: Optional[str] = Field(None, description="Optional emotion tag for the memory")

class CustomQuestionIn(BaseModel):
    question: str
    category: str = "general"
    importance: int = Field(3, description="Clamped to 1-5")
    triggers: List[str] = []

class DeployedSystem(BaseModel):
    username: str
    owner_id: str

class DeployedOut(BaseModel):
    systems: List[DeployedSystem] = []
