"""
Response Synthesizer
Turns a matched knowledge entry, or the profile's traits / top memory / last
topic, into a reply shaped by the owner's preferences and the detected emotion.

Key Features:
- Matched path returns the stored answer (usage bookkeeping on the entry)
- Fallback path composes sentence fragments; empty fragments are skipped
- Depth (1-3) trims or elaborates, formality (1-5) wraps or relaxes
- Emotion emoji prefix

Identical inputs give identical replies.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from echosoul.schemas.profile import KnowledgeEntry, Memory, Preferences, Trait
from echosoul.domain.nlp.normalizers import split_sentences
from echosoul.domain.nlp.service import emotion_emoji
from echosoul.utils.text import squash_ws, truncate

MEMORY_QUOTE_CHARS = 140


class ResponseSynthesizer:
    """Compose and format persona replies."""

    # Closing follow-up by detected emotion
    FOLLOW_UPS: Dict[str, str] = {
        "upbeat": "That's wonderful to hear, tell me more!",
        "empathetic": "I'm sorry you're going through that. Do you want to talk about it?",
        "curious": "I'm still learning about you. Could you tell me more?",
    }

    # depth_level 3 elaboration, keyed by a keyword in the reply
    ELABORATIONS: Dict[str, str] = {
        "happy": "Holding on to the things that make you happy is worth it.",
        "problem": "Working through a problem one step at a time usually helps.",
        "default": "There is always more to explore here.",
    }

    FORMAL_SALUTATION = "Greetings."
    FORMAL_CLOSING = "Kind regards."
    CASUAL_GREETING = "hey!"

    # ---- fragments ----------------------------------------------------------
    @staticmethod
    def traits_sentence(traits: Sequence[Trait]) -> str:
        names = [t.name for t in traits]
        if not names:
            return ""
        return f"I know you value {', '.join(names)}."

    @staticmethod
    def memory_sentence(memory: Optional[Memory]) -> str:
        if memory is None or not memory.content.strip():
            return ""
        quote = truncate(squash_ws(memory.content), MEMORY_QUOTE_CHARS)
        return f'I remember you said "{quote}".'

    @staticmethod
    def topic_sentence(topic: Optional[str]) -> str:
        if not topic:
            return ""
        return f"We were just talking about {topic}."

    def follow_up(self, emotion: Optional[str]) -> str:
        if emotion in ("happy", "excited"):
            return self.FOLLOW_UPS["upbeat"]
        if emotion in ("sad", "angry"):
            return self.FOLLOW_UPS["empathetic"]
        return self.FOLLOW_UPS["curious"]

    # ---- public -------------------------------------------------------------
    def compose(
        self,
        traits: Sequence[Trait],
        memory: Optional[Memory],
        topic: Optional[str],
        emotion: Optional[str],
    ) -> str:
        """Fallback reply built from whatever the profile has; never empty."""
        parts: List[str] = [
            self.traits_sentence(traits),
            self.memory_sentence(memory),
            self.topic_sentence(topic),
            self.follow_up(emotion),
        ]
        return " ".join(p for p in parts if p)

    def from_entry(self, entry: KnowledgeEntry, now: datetime) -> str:
        """Matched path. Bumps usage on the (caller-owned) entry."""
        entry.usage_count += 1
        entry.last_used = now
        return entry.answer

    def elaboration_for(self, text: str) -> str:
        low = text.lower()
        if "happy" in low:
            return self.ELABORATIONS["happy"]
        if "problem" in low:
            return self.ELABORATIONS["problem"]
        return self.ELABORATIONS["default"]

    def format(self, text: str, preferences: Preferences, emotion: Optional[str]) -> str:
        out = text.strip()

        if preferences.depth_level <= 1:
            sentences = split_sentences(out)
            out = sentences[0] if sentences else out
        elif preferences.depth_level >= 3:
            out = f"{out} {self.elaboration_for(out)}"

        if preferences.formality >= 4:
            out = f"{self.FORMAL_SALUTATION} {out} {self.FORMAL_CLOSING}"
        elif preferences.formality <= 2:
            out = f"{self.CASUAL_GREETING} {out.lower()}"

        emoji = emotion_emoji(emotion)
        if emoji:
            out = f"{emoji} {out}"
        return out


__all__ = ["ResponseSynthesizer"]
