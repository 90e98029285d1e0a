# backend/tests/test_traits.py
import math
from datetime import timedelta

import pytest

from echosoul.domain.personality.traits import (
    MAX_TRAITS,
    NEW_TRAIT_STRENGTH,
    TRAIT_DECAY_PER_DAY,
    decay_traits,
    update_traits,
)
from echosoul.schemas.profile import Trait


def test_personality_answer_creates_and_bumps_traits(now):
    traits = update_traits([], "I love hiking and hiking outdoors", "personality", now)
    by_name = {t.name: t.strength for t in traits}
    assert by_name == {"love": 5.0, "hik": 6.0, "outdoors": 5.0}
    # ranked strongest first, insertion order on ties
    assert [t.name for t in traits] == ["hik", "love", "outdoors"]


def test_other_categories_only_decay(now):
    old = Trait(name="calm", strength=8.0, last_updated=now - timedelta(days=5))
    traits = update_traits([old], "I value honesty above everything", "values", now)
    assert [t.name for t in traits] == ["calm"]
    assert traits[0].strength == pytest.approx(8.0 * math.exp(-TRAIT_DECAY_PER_DAY * 5))


def test_decay_is_slow_and_resets_anchor(now):
    trait = Trait(name="curious", strength=10.0, last_updated=now - timedelta(days=10))
    decay_traits([trait], now)
    assert trait.strength == pytest.approx(10.0 * math.exp(-0.2))
    assert trait.last_updated == now
    # a second pass at the same instant changes nothing
    decay_traits([trait], now)
    assert trait.strength == pytest.approx(10.0 * math.exp(-0.2))


def test_strength_caps_at_ten(now):
    traits = update_traits([], " ".join(["music"] * 12), "personality", now)
    assert len(traits) == 1
    assert traits[0].strength == 10.0


def test_trait_set_is_bounded_and_unique(now):
    words = [f"word{chr(97 + i)}x" for i in range(20)]
    traits = update_traits([], " ".join(words), "personality", now)
    traits = update_traits(traits, " ".join(words[:5]), "Personality", now)
    names = [t.name for t in traits]
    assert len(traits) == MAX_TRAITS
    assert len(set(names)) == len(names)
    assert all(0.0 <= t.strength <= 10.0 for t in traits)
    # the re-mentioned words outrank the rest
    assert names[:5] == words[:5]
    assert all(t.strength == NEW_TRAIT_STRENGTH for t in traits[5:])


def test_trait_strength_is_clamped_on_assignment():
    trait = Trait(name="bold", strength=42)
    assert trait.strength == 10.0
    trait.strength = -3
    assert trait.strength == 0.0
