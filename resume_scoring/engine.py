from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from resume_scoring.ai import AIClient, ai_available, get_ai_client
from resume_scoring.core.scoring_config import get_scoring_value
from resume_scoring.features.resume_signals import (
    detect_bullet_points,
    detect_format_issues,
    estimate_page_count,
    estimate_years_of_experience,
)
from resume_scoring.matching.jd_match import analyze_jd_match
from resume_scoring.normalize.text import count_words, ensure_min_length
from resume_scoring.schemas.scoring import (
    ResumeStats,
    ScoringMetadata,
    ScoringOptions,
    ScoringResult,
    WeightProfile,
    WeightsSource,
)
from resume_scoring.scoring import (
    analyze_keyword_gaps,
    apply_adaptive_weights,
    build_improvement_roadmap,
    calculate_grade,
    calculate_overall_score,
    calculate_three_axis_score,
    get_role_weights,
    predict_ats_pass,
    renormalize_weights,
    score_pro_components,
    with_weights,
)
from resume_scoring.suggestions import generate_insights, generate_phrase_suggestions

if TYPE_CHECKING:
    from resume_scoring.tuning import AdaptiveWeightTuner

logger = logging.getLogger(__name__)


def _validate_inputs(resume_text: str, job_description: str | None) -> None:
    ensure_min_length(
        resume_text,
        field_name="resume_text",
        minimum=int(get_scoring_value("validation.min_resume_chars", 100)),
    )
    if job_description is not None:
        ensure_min_length(
            job_description,
            field_name="job_description",
            minimum=int(get_scoring_value("validation.min_job_description_chars", 50)),
        )


async def _select_weights(
    options: ScoringOptions,
    tuner: AdaptiveWeightTuner | None,
) -> tuple[WeightProfile, WeightsSource, str | None]:
    if options.custom_weights is not None:
        return renormalize_weights(options.custom_weights), "custom", None

    base = get_role_weights(options.job_role)
    if options.use_adaptive_weights:
        learned = await tuner.get_active_configuration(options.job_role) if tuner is not None else None
        weights = apply_adaptive_weights(
            base,
            options.adaptive_variance,
            learned.weights if learned is not None else None,
        )
        return weights, "adaptive", learned.id if learned is not None else None

    return base, "role_profile", None


def _score_locally(
    resume_text: str,
    options: ScoringOptions,
    weights: WeightProfile,
    weights_source: WeightsSource,
    weight_configuration_id: str | None,
    started: float,
) -> ScoringResult:
    job_role = options.job_role
    job_description = options.job_description

    components = with_weights(score_pro_components(resume_text, job_role), weights)
    jd_match = analyze_jd_match(resume_text, job_description) if job_description is not None else None
    three_axis = calculate_three_axis_score(resume_text, job_role, job_description, jd_match=jd_match)

    if options.score_model == "three_axis":
        overall_score = three_axis.overall
    else:
        overall_score = calculate_overall_score(components, weights)

    format_issues = detect_format_issues(resume_text)
    keyword_gaps = analyze_keyword_gaps(resume_text, job_role)
    ats_pass_prediction = predict_ats_pass(
        components["ats_compatibility"].score,
        format_issues=format_issues,
        missing_critical=keyword_gaps.must_have.missing,
    )

    return ScoringResult(
        overall_score=overall_score,
        grade=calculate_grade(overall_score),
        score_model=options.score_model,
        component_scores=components,
        three_axis=three_axis,
        weights_used=weights,
        ats_pass_prediction=ats_pass_prediction,
        keyword_gaps=keyword_gaps,
        format_issues=format_issues,
        improvement_roadmap=build_improvement_roadmap(resume_text, overall_score, components, keyword_gaps),
        jd_match=jd_match,
        metadata=ScoringMetadata(
            job_role=job_role,
            processing_time_ms=int((time.perf_counter() - started) * 1000),
            weights_source=weights_source,
            weight_configuration_id=weight_configuration_id,
            features={
                "jd_match": jd_match is not None,
                "adaptive_weights": weights_source == "adaptive",
                "custom_weights": weights_source == "custom",
                "suggestions": False,
                "ai_insights": False,
            },
            resume_stats=ResumeStats(
                total_words=count_words(resume_text),
                total_bullets=len(detect_bullet_points(resume_text)),
                page_count=estimate_page_count(resume_text),
                years_experience=estimate_years_of_experience(resume_text),
            ),
        ),
    )


def calculate_pro_score(resume_text: str, job_role: str = "General") -> ScoringResult:
    """Synchronous PRO score with the role's weight profile and no JD or AI calls."""
    started = time.perf_counter()
    options = ScoringOptions(job_role=job_role, include_suggestions=False)
    _validate_inputs(resume_text, None)
    return _score_locally(resume_text, options, get_role_weights(options.job_role), "role_profile", None, started)


async def calculate_pro_plus_score(
    resume_text: str,
    options: ScoringOptions | None = None,
    *,
    tuner: AdaptiveWeightTuner | None = None,
    ai_client: AIClient | None = None,
) -> ScoringResult:
    """Score a resume, optionally against a job description.

    Input validation raises `ValidationError`; AI failures never surface because both
    suggestions and insights fall back to deterministic templates.
    """
    started = time.perf_counter()
    options = options or ScoringOptions()
    _validate_inputs(resume_text, options.job_description)

    weights, weights_source, config_id = await _select_weights(options, tuner)
    result = _score_locally(resume_text, options, weights, weights_source, config_id, started)

    wants_suggestions = options.include_suggestions and result.jd_match is not None
    if ai_client is None and (wants_suggestions or options.include_ai_insights) and ai_available():
        ai_client = get_ai_client()

    metadata_update: dict = {}
    result_update: dict = {}
    if wants_suggestions:
        outcome = await generate_phrase_suggestions(
            resume_text,
            options.job_description or "",
            result.jd_match.missing_critical,
            ai_client=ai_client,
        )
        result_update["ai_suggestions"] = outcome.suggestions
        metadata_update["suggestions_source"] = outcome.source

    if options.include_ai_insights:
        insights = await generate_insights(
            resume_text=resume_text,
            job_role=options.job_role,
            overall_score=result.overall_score,
            component_scores=result.component_scores,
            missing_keywords=result.keyword_gaps.must_have.missing,
            improvement_actions=[action.action for action in result.improvement_roadmap.to_reach_80],
            ai_client=ai_client,
        )
        result_update["ai_summary"] = insights.summary
        if "ai_suggestions" not in result_update:
            result_update["ai_suggestions"] = insights.improvement_suggestions
        metadata_update["insights_source"] = insights.source

    features = {
        **result.metadata.features,
        "suggestions": wants_suggestions,
        "ai_insights": options.include_ai_insights,
    }
    metadata_update["features"] = features
    metadata_update["processing_time_ms"] = int((time.perf_counter() - started) * 1000)
    result = result.model_copy(update={**result_update, "metadata": result.metadata.model_copy(update=metadata_update)})

    logger.info(
        "resume_scored role=%s model=%s overall=%s grade=%s weights=%s jd=%s ms=%s",
        options.job_role,
        options.score_model,
        result.overall_score,
        result.grade,
        weights_source,
        result.jd_match is not None,
        result.metadata.processing_time_ms,
    )
    return result
