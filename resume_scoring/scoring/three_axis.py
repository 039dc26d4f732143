from __future__ import annotations

import logging

from resume_scoring.core.scoring_config import get_scoring_value
from resume_scoring.core.utils import round_half_up
from resume_scoring.features.resume_signals import (
    average_words_per_bullet,
    categorize_action_verbs,
    detect_bullet_points,
    detect_sections,
    quantification_ratio,
)
from resume_scoring.matching.jd_match import analyze_jd_match
from resume_scoring.schemas.keywords import JDMatchResult
from resume_scoring.schemas.scoring import ComponentScore, ThreeAxisScore
from resume_scoring.taxonomy import get_default_catalog

logger = logging.getLogger(__name__)

ESSENTIAL_SECTIONS = ("experience", "skills", "education", "summary", "contact")


def calculate_three_axis_score(
    resume_text: str,
    job_role: str = "General",
    job_description: str | None = None,
    *,
    jd_match: JDMatchResult | None = None,
) -> ThreeAxisScore:
    """Structure (0-40), content (0-60) and tailoring (0-40) combined 30/40/30.

    Tailoring comes from the JD match score and stays 0 without a job description,
    so a resume scored without one tops out at 70 overall.
    """
    structure_max = float(get_scoring_value("three_axis.structure_max", 40))
    content_max = float(get_scoring_value("three_axis.content_max", 60))
    tailoring_max = float(get_scoring_value("three_axis.tailoring_max", 40))
    axis_weights = get_scoring_value("three_axis.weights", {}) or {}

    catalog = get_default_catalog()
    sections = [section.lower() for section in detect_sections(resume_text, catalog).found]
    found = [name for name in ESSENTIAL_SECTIONS if any(name in section for section in sections)]
    missing = [name for name in ESSENTIAL_SECTIONS if name not in found]
    structure = round_half_up(len(found) / len(ESSENTIAL_SECTIONS) * structure_max)

    bullets = detect_bullet_points(resume_text, catalog)
    ratio = quantification_ratio(bullets)
    verbs = categorize_action_verbs(bullets, catalog)
    strong_pct = len(verbs.strong) / verbs.categorized_count * 100 if verbs.categorized_count else 0.0
    avg_words = average_words_per_bullet(bullets)
    clarity = 100.0 if 15 <= avg_words <= 25 else max(0.0, 100 - abs(avg_words - 20) * 3)
    impact = ratio * 100 * 0.6 + strong_pct * 0.4
    content = round_half_up(ratio * 25 + strong_pct / 100 * 20 + clarity / 100 * 10 + impact / 100 * 5)
    content = min(content, int(content_max))

    tailoring = 0
    keyword_match = 0
    missing_keywords: list[str] = []
    if job_description is not None:
        match = jd_match or analyze_jd_match(resume_text, job_description)
        keyword_match = match.match_score
        missing_keywords = list(match.missing_critical)
        tailoring = round_half_up(match.match_score / 100 * tailoring_max)

    overall = round_half_up(
        (
            structure / structure_max * float(axis_weights.get("structure", 0.3))
            + content / content_max * float(axis_weights.get("content", 0.4))
            + tailoring / tailoring_max * float(axis_weights.get("tailoring", 0.3))
        )
        * 100
    )
    logger.debug(
        "three_axis_scored structure=%s content=%s tailoring=%s overall=%s",
        structure,
        content,
        tailoring,
        overall,
    )

    return ThreeAxisScore(
        structure=ComponentScore(score=structure, max=structure_max),
        content=ComponentScore(score=content, max=content_max),
        tailoring=ComponentScore(score=tailoring, max=tailoring_max),
        overall=min(overall, 100),
        breakdown={
            "structure": {
                "sections_found": found,
                "sections_missing": missing,
                "completeness_percentage": round_half_up(len(found) / len(ESSENTIAL_SECTIONS) * 100),
            },
            "content": {
                "quantification_ratio": round_half_up(ratio * 100),
                "strong_verb_percentage": round_half_up(strong_pct),
                "clarity_score": round_half_up(clarity),
                "impact_score": round_half_up(impact),
            },
            "tailoring": {
                "keyword_match_percentage": keyword_match,
                "missing_keywords": missing_keywords,
            },
        },
    )
