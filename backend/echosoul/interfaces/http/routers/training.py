from __future__ import annotations
from typing import List, Optional
from fastapi import APIRouter, Depends

from echosoul.interfaces.http.deps.auth import get_current_user
from echosoul.domain.profile.service import get_service
from echosoul.schemas.profile import TrainingQuestion, UserProfile
from echosoul.schemas.training import AnswerIn, CustomQuestionIn

router = APIRouter()

@router.get("/questions", response_model=List[TrainingQuestion])
def questions(category: Optional[str] = None, search: Optional[str] = None):
    return get_service().list_questions(category=category, search=search)

@router.post("/questions", response_model=TrainingQuestion)
def add_question(body: CustomQuestionIn, user=Depends(get_current_user)):
    return get_service().add_custom_question(body.question, body.category, body.importance, body.triggers)

@router.get("/next", response_model=TrainingQuestion)
def next_question(context: Optional[str] = None, category: Optional[str] = None, user=Depends(get_current_user)):
    svc = get_service()
    svc.dashboard(user["id"], user["username"])
    return svc.next_question(user["id"], context=context, category=category)

@router.post("/answer", response_model=UserProfile)
def answer(body: AnswerIn, user=Depends(get_current_user)):
    svc = get_service()
    svc.dashboard(user["id"], user["username"])
    return svc.submit_answer(user["id"], body.question_id, body.answer, emotion=body.emotion)

@router.post("/deploy", response_model=UserProfile)
def deploy(user=Depends(get_current_user)):
    return get_service().deploy(user["id"])
