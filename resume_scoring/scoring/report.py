from __future__ import annotations

import math
from typing import Iterable, Mapping

from resume_scoring.features.resume_signals import detect_sections, find_matching_keywords
from resume_scoring.schemas.scoring import (
    ATSPassPrediction,
    ComponentScore,
    FormatIssue,
    ImprovementAction,
    ImprovementRoadmap,
    KeywordGapAnalysis,
    KeywordTierGap,
)
from resume_scoring.taxonomy import get_default_catalog

# (minimum ATS score, pass probability, confidence, reasoning)
ATS_PASS_BANDS = (
    (85, 95, "high", "Excellent ATS compatibility. Very likely to pass automated screening."),
    (70, 80, "high", "Good ATS compatibility. Minor improvements could increase pass rate."),
    (60, 65, "medium", "Fair ATS compatibility. Missing some keywords and formatting needs work."),
    (50, 40, "medium", "Needs work. Missing critical keywords or has formatting issues."),
)
ATS_FAIL_BAND = (15, "low", "Poor ATS compatibility. Major keyword gaps and formatting issues detected.")

_PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def predict_ats_pass(
    ats_score: float,
    *,
    format_issues: Iterable[FormatIssue] = (),
    missing_critical: Iterable[str] = (),
) -> ATSPassPrediction:
    probability, confidence, reasoning = ATS_FAIL_BAND
    for minimum, band_probability, band_confidence, band_reasoning in ATS_PASS_BANDS:
        if ats_score >= minimum:
            probability, confidence, reasoning = band_probability, band_confidence, band_reasoning
            break

    risk_factors = [issue.issue for issue in format_issues]
    missing = list(missing_critical)
    if missing:
        risk_factors.append(f"Missing critical keywords: {', '.join(missing[:5])}")

    return ATSPassPrediction(
        probability=probability,
        confidence=confidence,
        reasoning=reasoning,
        risk_factors=risk_factors,
    )


def _tier_gap(resume_text: str, keywords: tuple[str, ...]) -> tuple[KeywordTierGap, dict[str, int]]:
    matches = find_matching_keywords(resume_text, keywords)
    gap = KeywordTierGap(
        found=len(matches.found),
        total=len(keywords),
        missing=matches.missing[:10],
        found_keywords=matches.found[:15],
    )
    return gap, matches.frequency


def analyze_keyword_gaps(resume_text: str, job_role: str) -> KeywordGapAnalysis:
    catalog = get_default_catalog()
    keywords = catalog.keywords_for_role(job_role)
    must_have, must_freq = _tier_gap(resume_text, keywords.must_have)
    important, important_freq = _tier_gap(resume_text, keywords.important)
    nice_to_have, nice_freq = _tier_gap(resume_text, keywords.nice_to_have)
    return KeywordGapAnalysis(
        role=keywords.role,
        must_have=must_have,
        important=important,
        nice_to_have=nice_to_have,
        keyword_frequency={**must_freq, **important_freq, **nice_freq},
    )


def _candidate_actions(
    resume_text: str,
    component_scores: Mapping[str, ComponentScore],
    keyword_gaps: KeywordGapAnalysis,
) -> list[ImprovementAction]:
    actions: list[ImprovementAction] = []
    content = component_scores["content_quality"].breakdown
    ats = component_scores["ats_compatibility"].breakdown
    fmt = component_scores["format_structure"].breakdown

    missing_critical = keyword_gaps.must_have.missing
    if missing_critical:
        actions.append(
            ImprovementAction(
                action=f"Add critical keywords: {', '.join(missing_critical[:3])}",
                points_gain=min(len(missing_critical) * 2, 10),
                time_minutes=30,
                priority="high",
                category="ATS Compatibility",
            )
        )

    quantification = content.get("quantification", {})
    if quantification.get("percentage", 0) < 60:
        needed = math.ceil(
            quantification.get("total_bullets", 0) * 0.6 - quantification.get("quantified_bullets", 0)
        )
        if needed > 0:
            actions.append(
                ImprovementAction(
                    action=f"Add metrics to {needed} more bullet points",
                    points_gain=min(needed * 1.5, 8),
                    time_minutes=20,
                    priority="high",
                    category="Content Quality",
                )
            )

    weak_verbs = content.get("action_verbs", {}).get("weak_verbs_found", [])
    if weak_verbs:
        actions.append(
            ImprovementAction(
                action=f"Replace weak verbs ({', '.join(weak_verbs[:2])}) with strong action verbs",
                points_gain=4,
                time_minutes=15,
                priority="medium",
                category="Content Quality",
            )
        )

    format_issues = ats.get("format_compatibility", {}).get("issues", [])
    if format_issues:
        top_issue = format_issues[0]
        actions.append(
            ImprovementAction(
                action=f"Fix: {top_issue['issue']}",
                points_gain=math.ceil(top_issue["penalty"] / 2),
                time_minutes=10,
                priority="medium",
                category="ATS Compatibility",
            )
        )

    length = fmt.get("length", {})
    if length and length.get("verdict") != "optimal":
        pages = length.get("recommended_pages", 1)
        actions.append(
            ImprovementAction(
                action=(
                    f"Reduce to {pages} pages"
                    if length.get("verdict") == "too_long"
                    else f"Expand to {pages} pages with more details"
                ),
                points_gain=3,
                time_minutes=25,
                priority="low",
                category="Format & Structure",
            )
        )

    sections = [section.lower() for section in detect_sections(resume_text).found]
    if not any(marker in section for section in sections for marker in ("summary", "profile")):
        actions.append(
            ImprovementAction(
                action="Add professional summary at the top",
                points_gain=4,
                time_minutes=15,
                priority="medium",
                category="Content Quality",
            )
        )

    actions.sort(key=lambda item: (_PRIORITY_ORDER[item.priority], -item.points_gain))
    return actions


def build_improvement_roadmap(
    resume_text: str,
    overall_score: int,
    component_scores: Mapping[str, ComponentScore],
    keyword_gaps: KeywordGapAnalysis,
) -> ImprovementRoadmap:
    """Order fixes by priority and expected gain, then split them by the score each one helps reach."""
    actions = _candidate_actions(resume_text, component_scores, keyword_gaps)

    cumulative = float(overall_score)
    to_reach_80: list[ImprovementAction] = []
    only_to_90: list[ImprovementAction] = []
    for action in actions:
        if cumulative < 80:
            to_reach_80.append(action)
        elif cumulative < 90:
            only_to_90.append(action)
        cumulative += action.points_gain

    quick_wins = [action for action in actions if action.points_gain >= 4 and action.time_minutes <= 20][:3]
    return ImprovementRoadmap(
        to_reach_80=to_reach_80,
        to_reach_90=to_reach_80 + only_to_90,
        quick_wins=quick_wins,
    )
