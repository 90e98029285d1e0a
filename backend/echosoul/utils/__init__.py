from .time import utc_now, as_utc, days_between
from .text import clip, truncate, squash_ws, unique_preserve

__all__ = [
    "utc_now", "as_utc", "days_between",
    "clip", "truncate", "squash_ws", "unique_preserve",
]
