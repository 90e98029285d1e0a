# -*- coding: utf-8 -*-
"""
Memory Manager: emotionally weighted snapshots of significant answers

Responsibilities
- Decide whether an answer is significant enough to remember
- Create memories with a process-wide monotonic id
- Decay weights on login/refresh (weight *= decay_rate ** days), prune at the floor
- Reinforce frequently recalled memories (slower future decay)

Public API:
- is_significant(answer, importance) -> bool
- remember(memories, answer, importance, emotion, now) -> Optional[Memory]
- decay_memories(memories, now) -> List[Memory]
- top_memory(memories) -> Optional[Memory]
- touch(memory, now) -> None
- reinforce(memory, score, now) -> None
"""

from __future__ import annotations

import itertools
import logging
import threading
from datetime import datetime
from typing import List, Optional

from echosoul.schemas.profile import (
    DECAY_RATE_CAP,
    DECAY_RATE_START,
    MEMORY_MAX_WEIGHT,
    MEMORY_MIN_WEIGHT,
    Memory,
)
from echosoul.utils.text import clip
from echosoul.utils.time import as_utc, days_between

log = logging.getLogger("echosoul.memory")

SIGNIFICANT_LENGTH = 50
SIGNIFICANT_IMPORTANCE = 4
DEFAULT_IMPORTANCE = 3
REINFORCE_AFTER_ACCESSES = 5
DECAY_RATE_STEP = 0.01
FEEDBACK_WEIGHT_STEP = 0.5

_ids = itertools.count(1)
_ids_lock = threading.Lock()


def next_memory_id() -> int:
    with _ids_lock:
        return next(_ids)


def is_significant(answer: str, importance: Optional[int]) -> bool:
    return len(answer or "") > SIGNIFICANT_LENGTH or (importance or 0) >= SIGNIFICANT_IMPORTANCE


def remember(
    memories: List[Memory],
    answer: str,
    importance: Optional[int],
    emotion: Optional[str],
    now: datetime,
) -> Optional[Memory]:
    """
    Append a memory for a significant answer. ``importance`` is None when the
    question is unknown to the catalog; the weight then starts at 3.
    """
    if not is_significant(answer, importance):
        return None
    mem = Memory(
        id=next_memory_id(),
        content=answer,
        emotional_weight=float(importance if importance is not None else DEFAULT_IMPORTANCE),
        last_accessed=now,
        access_count=0,
        emotions=[emotion] if emotion else [],
        decay_rate=DECAY_RATE_START,
    )
    memories.append(mem)
    log.debug("memory %s created (weight=%.1f)", mem.id, mem.emotional_weight)
    return mem


def decay_memories(memories: List[Memory], now: datetime) -> List[Memory]:
    """
    One decay pass. Elapsed time is counted from the later of the last access
    and the previous pass. Memories at or below the floor are dropped.
    """
    kept: List[Memory] = []
    for mem in memories:
        if mem.access_count > REINFORCE_AFTER_ACCESSES:
            mem.decay_rate = min(DECAY_RATE_CAP, mem.decay_rate + DECAY_RATE_STEP)
        anchor = as_utc(mem.last_accessed)
        if mem.decayed_at is not None and as_utc(mem.decayed_at) > anchor:
            anchor = as_utc(mem.decayed_at)
        days = days_between(anchor, now)
        weight = mem.emotional_weight * (mem.decay_rate ** days)
        if weight <= MEMORY_MIN_WEIGHT:
            continue
        mem.emotional_weight = weight
        mem.decayed_at = now
        kept.append(mem)
    pruned = len(memories) - len(kept)
    if pruned:
        log.info("pruned %d faded memories", pruned)
    return kept


def top_memory(memories: List[Memory]) -> Optional[Memory]:
    """Heaviest memory; first one wins on ties."""
    best: Optional[Memory] = None
    for mem in memories:
        if best is None or mem.emotional_weight > best.emotional_weight:
            best = mem
    return best


def touch(memory: Memory, now: datetime) -> None:
    memory.access_count += 1
    memory.last_accessed = now


def reinforce(memory: Memory, score: int, now: datetime) -> None:
    """Feedback: each point above/below 3 moves the weight by half a point."""
    memory.emotional_weight = clip(
        memory.emotional_weight + FEEDBACK_WEIGHT_STEP * (score - 3),
        MEMORY_MIN_WEIGHT,
        MEMORY_MAX_WEIGHT,
    )
    touch(memory, now)


__all__ = [
    "is_significant",
    "remember",
    "decay_memories",
    "top_memory",
    "touch",
    "reinforce",
    "next_memory_id",
]
