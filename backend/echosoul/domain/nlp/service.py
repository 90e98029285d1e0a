# backend/echosoul/domain/nlp/service.py
"""
Lexicon classifiers: emotion (emoji table, then sentiment lexicon) and
communication style (keyword-category vote). Pure functions, no model files.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional, Tuple

import numpy as np

from echosoul.schemas.profile import Emotion, Style
from .normalizers import stem, tokenize

# ---------- Emotion ----------

# Scanned in insertion order; first emoji found in the text wins.
EMOJI_EMOTIONS: Dict[str, Emotion] = {
    "😊": "happy",
    "😀": "happy",
    "😄": "happy",
    "😂": "happy",
    "❤️": "happy",
    "🥰": "happy",
    "🎉": "excited",
    "🤩": "excited",
    "🔥": "excited",
    "🚀": "excited",
    "😢": "sad",
    "😭": "sad",
    "💔": "sad",
    "😞": "sad",
    "😠": "angry",
    "😡": "angry",
    "🤬": "angry",
}

# Emoji used to prefix replies for a detected emotion.
EMOTION_EMOJI: Dict[str, str] = {
    "happy": "😊",
    "excited": "🎉",
    "sad": "😢",
    "angry": "😠",
}

_SENTIMENT_WORDS: List[Tuple[str, float]] = [
    ("love", 0.9), ("loved", 0.9), ("loving", 0.9),
    ("wonderful", 0.9), ("amazing", 0.9), ("fantastic", 0.9),
    ("happy", 0.8), ("joy", 0.8), ("great", 0.7), ("awesome", 0.8),
    ("excited", 0.6), ("exciting", 0.6), ("glad", 0.6), ("fun", 0.5),
    ("good", 0.4), ("nice", 0.4), ("enjoy", 0.5), ("proud", 0.6),
    ("hope", 0.3), ("calm", 0.3), ("grateful", 0.7), ("thankful", 0.7),
    ("okay", 0.1), ("fine", 0.1),
    ("tired", -0.3), ("bored", -0.3), ("worried", -0.4), ("worry", -0.4),
    ("anxious", -0.4), ("stressed", -0.4), ("lonely", -0.5),
    ("sad", -0.6), ("unhappy", -0.6), ("cry", -0.6), ("crying", -0.6),
    ("depressed", -0.7), ("miserable", -0.8), ("awful", -0.7),
    ("terrible", -0.8), ("horrible", -0.8), ("bad", -0.4),
    ("annoyed", -0.5), ("frustrated", -0.6), ("angry", -0.8),
    ("hate", -0.9), ("hated", -0.9), ("furious", -0.9), ("rage", -0.9),
]

# keyed by the same suffix-stripped form the tokenizer produces
SENTIMENT_LEXICON: Dict[str, float] = {stem(w): s for w, s in _SENTIMENT_WORDS}


def detect_emoji_emotion(text: str) -> Optional[Emotion]:
    for emoji, emotion in EMOJI_EMOTIONS.items():
        if emoji in text:
            return emotion
    return None


def sentiment_score(text: str) -> Optional[float]:
    """Mean lexicon score over known tokens; None when no token is known."""
    scores = [SENTIMENT_LEXICON[t] for t in tokenize(text, bigrams=False) if t in SENTIMENT_LEXICON]
    if not scores:
        return None
    return float(np.mean(scores))


def classify_emotion(text: str) -> Emotion:
    """
    Emoji first, then lexicon average banded into
    happy (>0.5) / excited (>0.2) / angry (<-0.5) / sad (<-0.2) / neutral.
    """
    if not text:
        return "none"
    found = detect_emoji_emotion(text)
    if found:
        return found
    score = sentiment_score(text)
    if score is None:
        return "none"
    if score > 0.5:
        return "happy"
    if score > 0.2:
        return "excited"
    if score < -0.5:
        return "angry"
    if score < -0.2:
        return "sad"
    return "neutral"


def emotion_emoji(emotion: Optional[str]) -> Optional[str]:
    return EMOTION_EMOJI.get(emotion or "")


# ---------- Communication style ----------

def _stems(*words: str) -> FrozenSet[str]:
    return frozenset(stem(w) for w in words)

STYLE_KEYWORDS: Dict[Style, FrozenSet[str]] = {
    "casual": _stems(
        "hey", "hello", "hiya", "sup", "yeah", "yep", "cool", "dude", "gonna",
        "wanna", "kinda", "chill", "buddy", "stuff",
    ),
    "formal": _stems(
        "regards", "sincerely", "dear", "respectfully", "furthermore",
        "therefore", "kindly", "appreciate", "cordially", "pleased",
        "accordingly", "consequently",
    ),
    "technical": _stems(
        "algorithm", "system", "data", "code", "coding", "function", "software",
        "api", "database", "network", "server", "debugging", "compute",
        "program", "programming", "engineer", "logic", "analysis", "python",
        "architecture",
    ),
    "humorous": _stems(
        "lol", "haha", "hahaha", "lmao", "rofl", "joke", "joking", "funny",
        "hilarious", "kidding", "pun", "laugh",
    ),
    "empathetic": _stems(
        "feel", "feelings", "understand", "sorry", "care", "support", "empathy",
        "listen", "compassion", "hug", "comfort", "together", "hear",
    ),
}

# tie-break order, strongest first
STYLE_PRECEDENCE: Tuple[Style, ...] = ("technical", "humorous", "empathetic", "formal", "casual")


def style_counts(text: str) -> Dict[Style, int]:
    tokens = tokenize(text, bigrams=False)
    return {style: sum(1 for t in tokens if t in words) for style, words in STYLE_KEYWORDS.items()}


def classify_style(text: str) -> Optional[Style]:
    """
    Category with the most keyword hits; ties go to the earlier entry in
    STYLE_PRECEDENCE. Returns None when nothing matched at all.
    """
    counts = style_counts(text)
    best = max(counts.values()) if counts else 0
    if best == 0:
        return None
    for style in STYLE_PRECEDENCE:
        if counts[style] == best:
            return style
    return None


__all__ = [
    "EMOJI_EMOTIONS",
    "EMOTION_EMOJI",
    "SENTIMENT_LEXICON",
    "STYLE_KEYWORDS",
    "STYLE_PRECEDENCE",
    "classify_emotion",
    "classify_style",
    "detect_emoji_emotion",
    "emotion_emoji",
    "sentiment_score",
    "style_counts",
]
