from __future__ import annotations
from fastapi import APIRouter

from echosoul.domain.profile.service import get_service
from echosoul.schemas.common import HealthResponse

router = APIRouter()

@router.get("/healthz", response_model=HealthResponse)
def healthz():
    svc = get_service()
    return HealthResponse(
        ok=True,
        version="0.1.0",
        questions=len(svc.list_questions()),
        profiles=len(svc.repo.user_ids()),
    )
