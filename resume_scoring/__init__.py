from resume_scoring.core.errors import (
    ConfigurationIntegrityError,
    ConfigurationNotFoundError,
    ExternalCallError,
    ScoringError,
    ValidationError,
)
from resume_scoring.engine import calculate_pro_plus_score, calculate_pro_score
from resume_scoring.schemas import FeedbackRecord, ScoringOptions, ScoringResult, WeightProfile
from resume_scoring.tuning import AdaptiveWeightTuner

__all__ = [
    "AdaptiveWeightTuner",
    "ConfigurationIntegrityError",
    "ConfigurationNotFoundError",
    "ExternalCallError",
    "FeedbackRecord",
    "ScoringError",
    "ScoringOptions",
    "ScoringResult",
    "ValidationError",
    "WeightProfile",
    "calculate_pro_plus_score",
    "calculate_pro_score",
]
