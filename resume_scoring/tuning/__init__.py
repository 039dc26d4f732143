from .stores import (
    DEFAULT_CONFIGURATION_ID,
    FeedbackStore,
    InMemoryFeedbackStore,
    InMemoryWeightConfigStore,
    SQLiteFeedbackStore,
    SQLiteWeightConfigStore,
    WeightConfigStore,
    default_configuration,
)
from .tuner import COMMENT_THEMES, AdaptiveWeightTuner, extract_comment_themes, shift_weight_from

__all__ = [
    "AdaptiveWeightTuner",
    "COMMENT_THEMES",
    "DEFAULT_CONFIGURATION_ID",
    "FeedbackStore",
    "WeightConfigStore",
    "InMemoryFeedbackStore",
    "InMemoryWeightConfigStore",
    "SQLiteFeedbackStore",
    "SQLiteWeightConfigStore",
    "default_configuration",
    "extract_comment_themes",
    "shift_weight_from",
]
