from .keywords import (
    FrequencyComparison,
    IndustryTerms,
    JDMatchResult,
    KeywordAnalysis,
    KeywordScore,
    PhraseFrequency,
)
from .scoring import (
    COMPONENTS,
    AISummary,
    ATSPassPrediction,
    ComponentScore,
    FormatIssue,
    ImprovementAction,
    ImprovementRoadmap,
    KeywordGapAnalysis,
    KeywordTierGap,
    ResumeStats,
    ScoringMetadata,
    ScoringOptions,
    ScoringResult,
    ThreeAxisScore,
    WeightProfile,
)
from .tuning import (
    FEEDBACK_COMPONENT_TO_WEIGHT,
    ConfigStatus,
    FeedbackAnalytics,
    FeedbackRecord,
    WeightConfiguration,
)

__all__ = [
    "KeywordScore",
    "PhraseFrequency",
    "FrequencyComparison",
    "KeywordAnalysis",
    "JDMatchResult",
    "IndustryTerms",
    "COMPONENTS",
    "WeightProfile",
    "ComponentScore",
    "ThreeAxisScore",
    "FormatIssue",
    "ATSPassPrediction",
    "KeywordTierGap",
    "KeywordGapAnalysis",
    "ImprovementAction",
    "ImprovementRoadmap",
    "ResumeStats",
    "AISummary",
    "ScoringOptions",
    "ScoringMetadata",
    "ScoringResult",
    "FEEDBACK_COMPONENT_TO_WEIGHT",
    "ConfigStatus",
    "FeedbackRecord",
    "WeightConfiguration",
    "FeedbackAnalytics",
]
