from .jd_match import (
    analyze_jd_match,
    calculate_keyword_density,
    calculate_match_score,
    extract_industry_terms,
    quick_keyword_check,
)

__all__ = [
    "analyze_jd_match",
    "calculate_keyword_density",
    "calculate_match_score",
    "extract_industry_terms",
    "quick_keyword_check",
]
