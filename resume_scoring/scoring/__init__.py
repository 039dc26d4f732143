from .components import (
    score_ats_compatibility,
    score_content_quality,
    score_format_structure,
    score_impact_metrics,
    score_pro_components,
)
from .overall import GRADE_BANDS, calculate_grade, calculate_overall_score, with_weights
from .report import analyze_keyword_gaps, build_improvement_roadmap, predict_ats_pass
from .three_axis import calculate_three_axis_score
from .weights import (
    ROLE_WEIGHT_REGISTRY,
    apply_adaptive_weights,
    available_roles,
    get_role_weights,
    renormalize_weights,
    weights_sum_to_total,
)

__all__ = [
    "score_content_quality",
    "score_ats_compatibility",
    "score_format_structure",
    "score_impact_metrics",
    "score_pro_components",
    "GRADE_BANDS",
    "calculate_grade",
    "calculate_overall_score",
    "with_weights",
    "analyze_keyword_gaps",
    "build_improvement_roadmap",
    "predict_ats_pass",
    "calculate_three_axis_score",
    "ROLE_WEIGHT_REGISTRY",
    "apply_adaptive_weights",
    "available_roles",
    "get_role_weights",
    "renormalize_weights",
    "weights_sum_to_total",
]
