from __future__ import annotations

from typing import Mapping, Sequence

from resume_scoring.schemas.scoring import AISummary, ComponentScore, OutputSource
from resume_scoring.scoring.overall import calculate_grade

TARGETED_LIMIT = 5
PREVIEW_LIMIT = 3
ALIGNMENT_SUGGESTION = (
    "Review the job description and align your experience bullet points with the required qualifications"
)

_COMPONENT_LABELS = {
    "content_quality": "content quality",
    "ats_compatibility": "ATS compatibility",
    "format_structure": "format and structure",
    "impact_metrics": "impact and metrics",
}


def build_template_suggestions(missing_keywords: Sequence[str]) -> list[str]:
    suggestions = [
        f'Add "{keyword}" to your skills section or incorporate it into relevant bullet points'
        for keyword in missing_keywords[:TARGETED_LIMIT]
    ]
    remaining = list(missing_keywords[TARGETED_LIMIT:])
    if remaining:
        preview = ", ".join(remaining[:PREVIEW_LIMIT])
        suggestions.append(f"Consider adding {len(remaining)} more keywords: {preview}")
    suggestions.append(ALIGNMENT_SUGGESTION)
    return suggestions


class TemplateSuggestionStrategy:
    name: OutputSource = "template"

    async def suggest(
        self,
        resume_text: str,
        job_description: str,
        missing_keywords: Sequence[str],
    ) -> list[str]:
        return build_template_suggestions(missing_keywords)


def build_template_insights(
    *,
    job_role: str,
    overall_score: int,
    component_scores: Mapping[str, ComponentScore],
    improvement_actions: Sequence[str] = (),
) -> tuple[AISummary, list[str]]:
    strengths = [
        f"Strong {_COMPONENT_LABELS.get(name, name)} ({round(score.score)}/100)"
        for name, score in component_scores.items()
        if score.score >= 75
    ]
    weaknesses = [
        f"Weak {_COMPONENT_LABELS.get(name, name)} ({round(score.score)}/100)"
        for name, score in component_scores.items()
        if score.score < 60
    ]
    summary = (
        f"Resume scores {overall_score}/100 ({calculate_grade(overall_score)}) for a {job_role} role"
        f" with {len(strengths)} strong and {len(weaknesses)} weak areas."
    )
    return AISummary(summary=summary, strengths=strengths, weaknesses=weaknesses), list(improvement_actions)
