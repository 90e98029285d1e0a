# backend/tests/conftest.py
from __future__ import annotations

import os
import random
import sys
from datetime import datetime, timezone

import pytest

# Ensure backend package root is importable
THIS_DIR = os.path.dirname(__file__)
PKG_ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
if PKG_ROOT not in sys.path:
    sys.path.insert(0, PKG_ROOT)

from echosoul.domain.personality.engine import PersonaEngine
from echosoul.domain.training.catalog import QuestionCatalog
from echosoul.schemas.profile import UserProfile

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def catalog() -> QuestionCatalog:
    return QuestionCatalog()


@pytest.fixture
def engine(catalog: QuestionCatalog) -> PersonaEngine:
    return PersonaEngine(catalog=catalog, rng=random.Random(7), blend_factor=0.25)


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(user_id="u1", username="alice", created_at=NOW)
