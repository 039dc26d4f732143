from __future__ import annotations

import re

from resume_scoring.core.scoring_config import get_scoring_value
from resume_scoring.core.utils import round_half_up
from resume_scoring.features.resume_signals import (
    average_words_per_bullet,
    categorize_action_verbs,
    count_quantified_bullets,
    detect_bullet_points,
    detect_format_issues,
    detect_sections,
    estimate_page_count,
    estimate_years_of_experience,
    find_matching_keywords,
)
from resume_scoring.schemas.scoring import ComponentScore
from resume_scoring.taxonomy import LocalRoleKeywordCatalog, get_default_catalog

_PHONE_RE = re.compile(r"\d{3}[-.]?\d{3}[-.]?\d{4}")


def _weights(section: str) -> dict[str, float]:
    return {key: float(value) for key, value in (get_scoring_value(f"{section}.weights", {}) or {}).items()}


def _weighted(parts: dict[str, float], weights: dict[str, float]) -> int:
    return round_half_up(sum(parts[name] * weights.get(name, 0.0) for name in parts))


def _count_occurrences(text: str, words: tuple[str, ...]) -> int:
    lowered = text.lower()
    return sum(lowered.count(word) for word in words)


# ---------------------------------------------------------------- content quality


def _achievement_quantification(bullets: list[str]) -> dict:
    quantified = count_quantified_bullets(bullets)
    ratio = quantified / len(bullets) if bullets else 0.0
    target = float(get_scoring_value("content_quality.quantification_target_ratio", 0.60))
    return {
        "score": min(round_half_up(ratio / target * 100), 100),
        "total_bullets": len(bullets),
        "quantified_bullets": quantified,
        "percentage": round_half_up(ratio * 100),
    }


def _action_verb_strength(bullets: list[str], catalog: LocalRoleKeywordCatalog) -> dict:
    if not bullets:
        return {
            "score": 0,
            "strong_percentage": 0,
            "medium_percentage": 0,
            "weak_percentage": 0,
            "strong_verbs_found": [],
            "weak_verbs_found": [],
            "total_bullets": 0,
        }

    verbs = categorize_action_verbs(bullets, catalog)
    total = len(bullets)
    strong_pct = len(verbs.strong) / total * 100
    medium_pct = len(verbs.medium) / total * 100
    weak_pct = len(verbs.weak) / total * 100
    score = round_half_up(strong_pct * 1.0 + medium_pct * 0.7 + weak_pct * 0.3)
    return {
        "score": min(score, 100),
        "strong_percentage": round_half_up(strong_pct),
        "medium_percentage": round_half_up(medium_pct),
        "weak_percentage": round_half_up(weak_pct),
        "strong_verbs_found": list(dict.fromkeys(verbs.strong))[:10],
        "weak_verbs_found": list(dict.fromkeys(verbs.weak))[:5],
        "total_bullets": total,
    }


def _skill_relevance(resume_text: str, job_role: str, catalog: LocalRoleKeywordCatalog) -> dict:
    expected = catalog.keywords_for_role(job_role).expected()
    matches = find_matching_keywords(resume_text, expected)
    pct = len(matches.found) / len(expected) * 100 if expected else 0.0
    return {
        "score": round_half_up(pct),
        "found_count": len(matches.found),
        "expected_count": len(expected),
        "found": matches.found[:15],
        "missing": matches.missing[:10],
    }


def _clarity_readability(bullets: list[str]) -> dict:
    avg_words = average_words_per_bullet(bullets)
    if avg_words < 10:
        score = 60
    elif avg_words < 15:
        score = 80
    elif avg_words <= 25:
        score = 100
    elif avg_words <= 30:
        score = 85
    else:
        score = 70

    long_limit = int(get_scoring_value("content_quality.long_bullet_words", 35))
    long_bullets = sum(1 for bullet in bullets if len(bullet.split()) > long_limit)
    if long_bullets:
        per_bullet = int(get_scoring_value("content_quality.long_bullet_penalty", 5))
        cap = int(get_scoring_value("content_quality.long_bullet_penalty_cap", 25))
        score -= min(long_bullets * per_bullet, cap)

    return {
        "score": max(score, 0),
        "avg_words_per_bullet": avg_words,
        "long_bullets": long_bullets,
    }


def score_content_quality(
    resume_text: str,
    job_role: str = "General",
    catalog: LocalRoleKeywordCatalog | None = None,
) -> ComponentScore:
    catalog = catalog or get_default_catalog()
    bullets = detect_bullet_points(resume_text, catalog)
    breakdown = {
        "quantification": _achievement_quantification(bullets),
        "action_verbs": _action_verb_strength(bullets, catalog),
        "skill_relevance": _skill_relevance(resume_text, job_role, catalog),
        "clarity": _clarity_readability(bullets),
    }
    score = _weighted({name: part["score"] for name, part in breakdown.items()}, _weights("content_quality"))
    return ComponentScore(score=score, breakdown=breakdown)


# ---------------------------------------------------------------- ATS compatibility


def _role_keyword_density(resume_text: str, job_role: str, catalog: LocalRoleKeywordCatalog) -> dict:
    keywords = catalog.keywords_for_role(job_role)
    tiers = {
        "must_have": keywords.must_have,
        "important": keywords.important,
        "nice_to_have": keywords.nice_to_have,
    }
    tier_weights = {
        name: float(value)
        for name, value in (get_scoring_value("ats_compatibility.keyword_tiers", {}) or {}).items()
    }

    match_pct: dict[str, float] = {}
    frequency: dict[str, int] = {}
    missing_critical: list[str] = []
    for name, terms in tiers.items():
        matches = find_matching_keywords(resume_text, terms)
        match_pct[name] = len(matches.found) / len(terms) * 100 if terms else 0.0
        frequency.update(matches.frequency)
        if name == "must_have":
            missing_critical = matches.missing[:10]

    return {
        "score": _weighted(match_pct, tier_weights),
        "must_have_match": round_half_up(match_pct["must_have"]),
        "important_match": round_half_up(match_pct["important"]),
        "nice_to_have_match": round_half_up(match_pct["nice_to_have"]),
        "missing_critical": missing_critical,
        "keyword_frequency": frequency,
    }


def _format_compatibility(resume_text: str) -> dict:
    issues = detect_format_issues(resume_text)
    score = max(100 - sum(issue.penalty for issue in issues), 0)
    return {
        "score": score,
        "issues": [issue.model_dump() for issue in issues],
        "is_ats_friendly": score >= 70,
    }


def _section_headers(resume_text: str, catalog: LocalRoleKeywordCatalog) -> dict:
    sections = detect_sections(resume_text, catalog)
    if not sections.found:
        score = int(get_scoring_value("ats_compatibility.no_sections_score", 50))
    else:
        score = round_half_up(len(sections.standard) / len(sections.found) * 100)
        standard = [section.lower() for section in sections.standard]
        has_key_sections = all(
            any(marker in section for section in standard) for marker in ("experience", "education", "skill")
        )
        if has_key_sections:
            score = min(score + int(get_scoring_value("ats_compatibility.key_sections_bonus", 10)), 100)
    return {
        "score": score,
        "standard_found": sections.standard,
        "non_standard": sections.non_standard,
    }


def _file_format(resume_text: str) -> dict:
    page_count = estimate_page_count(resume_text)
    extractable = bool(resume_text.strip())
    if not extractable:
        score = 30
    elif page_count > int(get_scoring_value("ats_compatibility.max_pages_before_penalty", 3)):
        score = 85
    else:
        score = 100
    return {"score": score, "text_extractable": extractable, "page_count": page_count}


def score_ats_compatibility(
    resume_text: str,
    job_role: str = "General",
    catalog: LocalRoleKeywordCatalog | None = None,
) -> ComponentScore:
    catalog = catalog or get_default_catalog()
    breakdown = {
        "keyword_density": _role_keyword_density(resume_text, job_role, catalog),
        "format_compatibility": _format_compatibility(resume_text),
        "section_headers": _section_headers(resume_text, catalog),
        "file_format": _file_format(resume_text),
    }
    score = _weighted({name: part["score"] for name, part in breakdown.items()}, _weights("ats_compatibility"))
    return ComponentScore(score=score, breakdown=breakdown)


# ---------------------------------------------------------------- format & structure


def _length_optimization(resume_text: str) -> dict:
    page_count = estimate_page_count(resume_text)
    years = estimate_years_of_experience(resume_text)
    if years > 20:
        recommended = 3
    elif years > 10:
        recommended = 2
    else:
        recommended = 1

    if page_count < recommended - 0.5:
        verdict, score = "too_short", 70
    elif page_count > recommended + 1:
        verdict, score = "too_long", 75
    else:
        verdict, score = "optimal", 100

    return {
        "score": score,
        "page_count": page_count,
        "years_experience": years,
        "verdict": verdict,
        "recommended_pages": recommended,
    }


def _contact_info(resume_text: str) -> dict:
    window = resume_text[: int(get_scoring_value("format_structure.contact_window_chars", 500))]
    has_email = "@" in window
    has_phone = bool(_PHONE_RE.search(window))
    if has_email and has_phone:
        score = 100
    elif has_email or has_phone:
        score = 80
    else:
        score = 60
    return {"score": score, "has_email": has_email, "has_phone": has_phone}


def score_format_structure(resume_text: str, catalog: LocalRoleKeywordCatalog | None = None) -> ComponentScore:
    catalog = catalog or get_default_catalog()
    bullets = detect_bullet_points(resume_text, catalog)
    breakdown = {
        "length": _length_optimization(resume_text),
        "section_order": {"score": int(get_scoring_value("format_structure.section_order_score", 85))},
        "visual_hierarchy": {"score": 80 if len(bullets) > 5 else 70, "bullet_count": len(bullets)},
        "contact_info": _contact_info(resume_text),
    }
    score = _weighted({name: part["score"] for name, part in breakdown.items()}, _weights("format_structure"))
    return ComponentScore(score=score, breakdown=breakdown)


# ---------------------------------------------------------------- impact & metrics


def score_impact_metrics(resume_text: str, catalog: LocalRoleKeywordCatalog | None = None) -> ComponentScore:
    catalog = catalog or get_default_catalog()
    bullets = detect_bullet_points(resume_text, catalog)
    quantified = count_quantified_bullets(bullets)
    ratio = quantified / len(bullets) if bullets else 0.0
    target = float(get_scoring_value("impact_metrics.quantification_target_ratio", 0.70))

    scale_hits = _count_occurrences(resume_text, catalog.word_list("scale_words"))
    recognition_hits = _count_occurrences(resume_text, catalog.word_list("recognition_words"))
    scale_points = int(get_scoring_value("impact_metrics.scale_points_per_hit", 15))
    recognition_points = int(get_scoring_value("impact_metrics.recognition_points_per_hit", 20))

    breakdown = {
        "quantified_results": {
            "score": min(round_half_up(ratio / target * 100), 100),
            "percentage": round_half_up(ratio * 100),
        },
        "scale_indicators": {"score": min(scale_hits * scale_points, 100), "found": scale_hits},
        "recognition": {"score": min(recognition_hits * recognition_points, 100), "found": recognition_hits},
    }
    score = _weighted({name: part["score"] for name, part in breakdown.items()}, _weights("impact_metrics"))
    return ComponentScore(score=score, breakdown=breakdown)


def score_pro_components(resume_text: str, job_role: str = "General") -> dict[str, ComponentScore]:
    catalog = get_default_catalog()
    return {
        "content_quality": score_content_quality(resume_text, job_role, catalog),
        "ats_compatibility": score_ats_compatibility(resume_text, job_role, catalog),
        "format_structure": score_format_structure(resume_text, catalog),
        "impact_metrics": score_impact_metrics(resume_text, catalog),
    }
