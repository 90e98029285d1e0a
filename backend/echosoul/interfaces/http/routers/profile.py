from __future__ import annotations
from fastapi import APIRouter, Depends

from echosoul.interfaces.http.deps.auth import get_current_user
from echosoul.domain.profile.service import get_service
from echosoul.schemas.chat import AnalyzeIn, FeedbackIn, ProfileUpdateIn
from echosoul.schemas.profile import AnalysisReport, UserProfile

router = APIRouter()

@router.get("/dashboard", response_model=UserProfile)
def dashboard(user=Depends(get_current_user)):
    return get_service().dashboard(user["id"], user["username"])

@router.post("/update", response_model=UserProfile)
def update_profile(body: ProfileUpdateIn, user=Depends(get_current_user)):
    svc = get_service()
    svc.dashboard(user["id"], user["username"])
    return svc.update_profile(user["id"], bio=body.bio, avatar=body.avatar, preferences=body.preferences)

@router.post("/refresh", response_model=UserProfile)
def refresh(user=Depends(get_current_user)):
    return get_service().refresh(user["id"])

@router.post("/feedback", response_model=UserProfile)
def feedback(body: FeedbackIn, user=Depends(get_current_user)):
    return get_service().feedback(
        user["id"],
        body.score,
        question_id=body.question_id,
        memory_id=body.memory_id,
        comments=body.comments,
    )

@router.post("/analyze", response_model=AnalysisReport)
def analyze(body: AnalyzeIn, user=Depends(get_current_user)):
    return get_service().analyze(user["id"], body.text)
