from __future__ import annotations
from fastapi import APIRouter

from . import chat, health, profile, training

api = APIRouter()
api.include_router(health.router,   prefix="/health", tags=["health"])
api.include_router(profile.router,  prefix="/profile", tags=["profile"])
api.include_router(training.router, prefix="/training", tags=["training"])
api.include_router(chat.router,     prefix="/chat", tags=["chat"])
