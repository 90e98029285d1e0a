from .service import (
    remember,
    decay_memories,
    top_memory,
    touch,
    reinforce,
    is_significant,
)
from .context_builder import record_turn, tracked_topics, last_topic, extract_topic
