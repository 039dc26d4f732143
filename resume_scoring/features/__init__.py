from .resume_signals import (
    BulletPoint,
    KeywordMatches,
    ResumeTextAnalysis,
    SectionReport,
    VerbBreakdown,
    analyze_resume_text,
    average_words_per_bullet,
    categorize_action_verb,
    categorize_action_verbs,
    count_quantified_bullets,
    detect_bullet_points,
    detect_format_issues,
    detect_sections,
    estimate_page_count,
    estimate_years_of_experience,
    find_matching_keywords,
    is_quantified,
    quantification_ratio,
    validate_resume_text,
)

__all__ = [
    "BulletPoint",
    "KeywordMatches",
    "ResumeTextAnalysis",
    "SectionReport",
    "VerbBreakdown",
    "analyze_resume_text",
    "average_words_per_bullet",
    "categorize_action_verb",
    "categorize_action_verbs",
    "count_quantified_bullets",
    "detect_bullet_points",
    "detect_format_issues",
    "detect_sections",
    "estimate_page_count",
    "estimate_years_of_experience",
    "find_matching_keywords",
    "is_quantified",
    "quantification_ratio",
    "validate_resume_text",
]
