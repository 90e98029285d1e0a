from .profile import (
    TrainingQuestion,
    KnowledgeEntry,
    Trait,
    Memory,
    Preferences,
    ConversationContext,
    FeedbackRecord,
    AnalysisReport,
    UserProfile,
)
