from __future__ import annotations

import re
from typing import Iterable, List

__all__ = [
    "clip",
    "truncate",
    "squash_ws",
    "unique_preserve",
]

_WS_RE = re.compile(r"\s+")

def clip(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    try:
        f = float(x)
    except (TypeError, ValueError):
        return lo
    return max(lo, min(hi, f))

def truncate(text: str, max_len: int, ellipsis: str = "…") -> str:
    if not text or max_len <= 0:
        return ""
    if len(text) <= max_len:
        return text
    cut = max_len - len(ellipsis)
    return (text[:cut].rsplit(" ", 1)[0] if cut > 4 else text[:cut]) + ellipsis

def squash_ws(s: str) -> str:
    """Collapse whitespace to single spaces; trim ends."""
    return _WS_RE.sub(" ", (s or "")).strip()

def unique_preserve(items: Iterable[str]) -> List[str]:
    """Deduplicate while preserving order."""
    seen = set()
    out: List[str] = []
    for it in items or []:
        if it not in seen:
            seen.add(it)
            out.append(it)
    return out
