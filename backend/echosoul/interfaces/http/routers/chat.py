from __future__ import annotations
from fastapi import APIRouter, Depends

from echosoul.interfaces.http.deps.auth import get_current_user
from echosoul.domain.profile.service import get_service
from echosoul.schemas.chat import ChatIn, ChatOut
from echosoul.schemas.common import ErrorResponse
from echosoul.schemas.training import DeployedOut, DeployedSystem

router = APIRouter()

@router.get("/deployed", response_model=DeployedOut)
def deployed():
    systems = [DeployedSystem(username=name, owner_id=owner) for name, owner in get_service().list_deployed()]
    return DeployedOut(systems=systems)

@router.post(
    "/{owner_id}",
    response_model=ChatOut,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def chat(owner_id: str, body: ChatIn, user=Depends(get_current_user)):
    reply = get_service().chat_with(owner_id, user["id"], body.message, reset_context=body.reset_context)
    return ChatOut(reply=reply)
