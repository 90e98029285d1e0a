# -*- coding: utf-8 -*-
"""
traits.py: bag-of-words personality traits with slow time decay

Every answer submission decays existing traits; answers to "personality"
questions additionally bump (or insert) one trait per token. The set is
re-ranked by strength and capped at MAX_TRAITS.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Dict, List

from echosoul.schemas.profile import MAX_TRAITS, TRAIT_MAX, TRAIT_MIN, Trait
from echosoul.domain.nlp.normalizers import tokenize
from echosoul.utils.text import clip
from echosoul.utils.time import days_between

PERSONALITY_CATEGORY = "personality"

# per-day decay constant; half-life ~35 days
TRAIT_DECAY_PER_DAY = 0.02
NEW_TRAIT_STRENGTH = 5.0
TRAIT_INCREMENT = 1.0


def decay_traits(traits: List[Trait], now: datetime) -> None:
    """strength *= exp(-k * days since last update); resets the decay anchor."""
    for trait in traits:
        days = days_between(trait.last_updated, now)
        if days <= 0:
            continue
        trait.strength = clip(trait.strength * math.exp(-TRAIT_DECAY_PER_DAY * days), TRAIT_MIN, TRAIT_MAX)
        trait.last_updated = now


def rank_traits(traits: List[Trait]) -> List[Trait]:
    # stable sort: equal strengths keep insertion order
    return sorted(traits, key=lambda t: t.strength, reverse=True)[:MAX_TRAITS]


def absorb_tokens(traits: List[Trait], text: str, now: datetime) -> List[Trait]:
    by_name: Dict[str, Trait] = {t.name: t for t in traits}
    out = list(traits)
    for token in tokenize(text, bigrams=False):
        trait = by_name.get(token)
        if trait is None:
            trait = Trait(name=token, strength=NEW_TRAIT_STRENGTH, last_updated=now)
            by_name[token] = trait
            out.append(trait)
        else:
            trait.strength = clip(trait.strength + TRAIT_INCREMENT, TRAIT_MIN, TRAIT_MAX)
            trait.last_updated = now
    return out


def update_traits(traits: List[Trait], answer: str, category: str, now: datetime) -> List[Trait]:
    """
    Decay pass for every submission; token absorption only for the
    personality category. Mutates the given Trait objects and returns the
    re-ranked, truncated list.
    """
    decay_traits(traits, now)
    if (category or "").lower() == PERSONALITY_CATEGORY:
        traits = absorb_tokens(traits, answer, now)
    return rank_traits(traits)


def trait_names(traits: List[Trait], limit: int = MAX_TRAITS) -> List[str]:
    return [t.name for t in traits[:limit]]


__all__ = [
    "PERSONALITY_CATEGORY",
    "TRAIT_DECAY_PER_DAY",
    "NEW_TRAIT_STRENGTH",
    "decay_traits",
    "rank_traits",
    "absorb_tokens",
    "update_traits",
    "trait_names",
]
