from .normalizers import tokenize, split_sentences
from .service import classify_emotion, classify_style, emotion_emoji

__all__ = ["tokenize", "split_sentences", "classify_emotion", "classify_style", "emotion_emoji"]
