from .ai_strategy import AISuggestionStrategy, request_ai_insights, truncate_prompt
from .base import InsightsOutcome, SuggestionOutcome, SuggestionStrategy
from .generator import FallbackSuggestionStrategy, generate_insights, generate_phrase_suggestions
from .templates import (
    ALIGNMENT_SUGGESTION,
    TemplateSuggestionStrategy,
    build_template_insights,
    build_template_suggestions,
)

__all__ = [
    "SuggestionStrategy",
    "SuggestionOutcome",
    "InsightsOutcome",
    "TemplateSuggestionStrategy",
    "AISuggestionStrategy",
    "FallbackSuggestionStrategy",
    "ALIGNMENT_SUGGESTION",
    "build_template_suggestions",
    "build_template_insights",
    "generate_phrase_suggestions",
    "generate_insights",
    "request_ai_insights",
    "truncate_prompt",
]
