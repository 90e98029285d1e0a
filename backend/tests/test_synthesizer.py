# backend/tests/test_synthesizer.py
import pytest

from echosoul.domain.responses.synthesizer import ResponseSynthesizer
from echosoul.schemas.profile import KnowledgeEntry, Memory, Preferences, Trait

CURIOUS = "I'm still learning about you. Could you tell me more?"


@pytest.fixture
def synth():
    return ResponseSynthesizer()


def test_compose_with_nothing_known(synth):
    assert synth.compose([], None, None, "none") == CURIOUS


def test_compose_uses_every_fragment(synth):
    traits = [Trait(name="calm"), Trait(name="music")]
    memory = Memory(id=1, content="I grew up by the sea.")
    text = synth.compose(traits, memory, "travel", "happy")
    assert text == (
        "I know you value calm, music. "
        'I remember you said "I grew up by the sea.". '
        "We were just talking about travel. "
        "That's wonderful to hear, tell me more!"
    )


@pytest.mark.parametrize("emotion,key", [
    ("happy", "upbeat"),
    ("excited", "upbeat"),
    ("sad", "empathetic"),
    ("angry", "empathetic"),
    ("neutral", "curious"),
    (None, "curious"),
])
def test_follow_up_by_emotion(synth, emotion, key):
    assert synth.follow_up(emotion) == ResponseSynthesizer.FOLLOW_UPS[key]


def test_long_memories_are_truncated(synth):
    memory = Memory(id=1, content="word " * 60)
    sentence = synth.memory_sentence(memory)
    assert sentence.endswith('…".')
    assert len(sentence) < 170


def test_from_entry_bumps_usage(synth, now):
    entry = KnowledgeEntry(question_id=3, answer="I stay calm and listen.")
    assert synth.from_entry(entry, now) == "I stay calm and listen."
    assert entry.usage_count == 1
    assert entry.last_used == now


def test_default_preferences_leave_text_alone(synth):
    assert synth.format("Plain reply. Second part.", Preferences(), "none") == "Plain reply. Second part."


def test_depth_one_keeps_first_sentence(synth):
    prefs = Preferences(depth_level=1)
    assert synth.format("First one. Second one!", prefs, None) == "First one."


def test_depth_three_elaborates(synth):
    prefs = Preferences(depth_level=3)
    out = synth.format("That sounds like a problem.", prefs, None)
    assert out == "That sounds like a problem. " + ResponseSynthesizer.ELABORATIONS["problem"]
    out = synth.format("Nice.", prefs, None)
    assert out.endswith(ResponseSynthesizer.ELABORATIONS["default"])


def test_formality_wraps_or_relaxes(synth):
    formal = synth.format("Thank You.", Preferences(formality=5), None)
    assert formal == "Greetings. Thank You. Kind regards."
    casual = synth.format("Thank You.", Preferences(formality=1), None)
    assert casual == "hey! thank you."


def test_emoji_prefix_goes_outermost(synth):
    out = synth.format("Good news.", Preferences(formality=4), "happy")
    assert out == "😊 Greetings. Good news. Kind regards."
    assert synth.format("Hm.", Preferences(), "neutral") == "Hm."
