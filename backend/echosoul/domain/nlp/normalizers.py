# -*- coding: utf-8 -*-
"""
normalizers.py: tokenizer + small text helpers for the personality engine

Goals
- Pure stdlib (regex/unicodedata)
- Exact suffix stripping, no real stemmer; the knowledge matcher threshold
  assumes this behavior

Public API
----------
tokenize(text, *, bigrams=True)
stem(token)
make_bigrams(tokens)
basic_clean(text)
collapse_ws(text)
strip_emoji(text)
split_sentences(text)
"""

from __future__ import annotations

import re
import unicodedata
from typing import List

# ---------- regexes (compiled once) ----------

RE_WS_MULTI = re.compile(r"\s+", re.UNICODE)
RE_CTRL = re.compile(r"[\u0000-\u001F\u007F-\u009F]")
RE_SEPARATORS = re.compile(r"[\s.,!?;:\"'()\[\]{}<>/\\|*&^%$#@~`+=_\-…“”‘’]+", re.UNICODE)
RE_EMOJI = re.compile(
    "["
    "\U0001F300-\U0001F5FF"   # symbols & pictographs
    "\U0001F600-\U0001F64F"   # emoticons
    "\U0001F680-\U0001F6FF"   # transport & map
    "\U0001F900-\U0001F9FF"
    "\U0001FA00-\U0001FAFF"
    "\U00002600-\U000027BF"   # misc symbols + dingbats
    "\uFE0F"                 # variation selector
    "]",
    re.UNICODE,
)
RE_SENT_SPLIT = re.compile(r"(?<=[.!?])\s+")

MIN_TOKEN_LEN = 3
SUFFIXES = ("ing", "ly", "ed")

STOP_WORDS = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "your", "yours", "all",
    "any", "can", "had", "has", "have", "her", "hers", "him", "his", "how",
    "its", "our", "out", "she", "they", "them", "their", "this", "that",
    "these", "those", "was", "were", "what", "when", "where", "which", "who",
    "whom", "why", "with", "would", "could", "should", "will", "just", "than",
    "then", "there", "here", "from", "into", "onto", "about", "over", "under",
    "also", "very", "too", "some", "such", "only", "own", "same", "been",
    "being", "did", "does", "doing", "off", "once", "more", "most", "other",
    "each", "few", "both", "because", "while", "until", "again", "further",
    "myself", "yourself", "itself", "ourselves", "themselves",
    "don", "doesn", "didn", "isn", "aren", "wasn", "won",
    "let", "get", "got",
})

# ---------- core steps ----------

def basic_clean(text: str) -> str:
    """
    NFKC normalize + strip control chars.
    """
    if text is None:
        return ""
    t = unicodedata.normalize("NFKC", str(text))
    return RE_CTRL.sub("", t)

def collapse_ws(text: str) -> str:
    """
    Collapse all whitespace runs to a single space and trim ends.
    """
    return RE_WS_MULTI.sub(" ", text).strip()

def strip_emoji(text: str) -> str:
    return RE_EMOJI.sub("", text)

def stem(token: str) -> str:
    """Strip one of -ing / -ly / -ed when the token ends with it exactly."""
    for suf in SUFFIXES:
        if token.endswith(suf):
            return token[: -len(suf)]
    return token

def make_bigrams(tokens: List[str]) -> List[str]:
    return [f"{a} {b}" for a, b in zip(tokens, tokens[1:])]

def tokenize(text: str, *, bigrams: bool = True) -> List[str]:
    """
    Lowercase, split on whitespace/punctuation, strip suffixes, drop short
    and stop-word tokens, then append adjacent-pair bigrams (order kept).
    """
    if not text:
        return []
    t = strip_emoji(basic_clean(text)).lower()
    tokens: List[str] = []
    for raw in RE_SEPARATORS.split(t):
        if not raw or raw in STOP_WORDS:
            continue
        tok = stem(raw)
        if len(tok) < MIN_TOKEN_LEN or tok in STOP_WORDS:
            continue
        tokens.append(tok)
    if bigrams and len(tokens) >= 2:
        tokens = tokens + make_bigrams(tokens)
    return tokens

def split_sentences(text: str) -> List[str]:
    """
    Very lightweight sentence splitter (no heavy NLP dep).
    """
    if not text:
        return []
    parts = RE_SENT_SPLIT.split(collapse_ws(text))
    return [p.strip() for p in parts if p.strip()]


__all__ = [
    "tokenize",
    "stem",
    "make_bigrams",
    "basic_clean",
    "collapse_ws",
    "strip_emoji",
    "split_sentences",
    "STOP_WORDS",
    "MIN_TOKEN_LEN",
]
