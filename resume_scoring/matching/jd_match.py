from __future__ import annotations

import logging
import re
from typing import Iterable

from resume_scoring.core.scoring_config import get_scoring_value
from resume_scoring.core.utils import round_half_up, unique_in_order
from resume_scoring.keywords.extractor import extract_keywords_with_tfidf
from resume_scoring.normalize.text import STOP_WORDS, count_words, ensure_min_length, keyword_pattern
from resume_scoring.schemas.keywords import (
    FrequencyComparison,
    IndustryTerms,
    JDMatchResult,
    KeywordAnalysis,
)
from resume_scoring.taxonomy import get_default_catalog

logger = logging.getLogger(__name__)

_ACRONYM_RE = re.compile(r"\b[A-Z]{2,}\b")
_JS_FRAMEWORK_RE = re.compile(r"\b\w+\.js\b")
_SCRIPT_LANGUAGE_RE = re.compile(r"\b\w+Script\b")
_CAPITALIZED_TOKEN_RE = re.compile(r"\b[A-Z][\w.+#-]*")


def _cfg(path: str, default):
    return get_scoring_value(f"jd_match.{path}", default)


def calculate_match_score(match_ratio: float, missing_count: int, underrepresented_count: int) -> int:
    """Match ratio as a percentage minus capped penalties for missing and underrepresented keywords."""
    missing_penalty = min(
        missing_count * float(_cfg("missing_penalty_per_keyword", 2)),
        float(_cfg("missing_penalty_cap", 20)),
    )
    under_penalty = min(
        underrepresented_count * float(_cfg("underrepresented_penalty_per_keyword", 1)),
        float(_cfg("underrepresented_penalty_cap", 10)),
    )
    return max(0, min(100, round_half_up(match_ratio * 100 - missing_penalty - under_penalty)))


def analyze_jd_match(resume_text: str, job_description: str) -> JDMatchResult:
    """Compare resume keywords with job-description keywords and score the overlap.

    Every JD keyword lands in exactly one bucket: missing (absent from the resume's
    top keywords), underrepresented (present but scored below half of its JD score)
    or matched. Underrepresented keywords still count toward the match ratio.
    """
    ensure_min_length(
        resume_text,
        field_name="resume_text",
        minimum=int(get_scoring_value("validation.min_resume_chars", 100)),
    )
    ensure_min_length(
        job_description,
        field_name="job_description",
        minimum=int(get_scoring_value("validation.min_job_description_chars", 50)),
    )

    resume_keywords = extract_keywords_with_tfidf(resume_text, int(_cfg("resume_top_n", 50)))
    jd_keywords = extract_keywords_with_tfidf(job_description, int(_cfg("jd_top_n", 40)))
    resume_scores = {item.term: item.score for item in resume_keywords}
    factor = float(_cfg("underrepresented_factor", 0.5))

    missing: list[str] = []
    underrepresented: list[str] = []
    comparisons: list[FrequencyComparison] = []
    for item in jd_keywords:
        resume_score = resume_scores.get(item.term)
        if resume_score is None:
            status = "missing"
            missing.append(item.term)
        elif resume_score < item.score * factor:
            status = "underrepresented"
            underrepresented.append(item.term)
        else:
            status = "matched"
        comparisons.append(
            FrequencyComparison(
                keyword=item.term,
                jd_score=round(item.score, 4),
                resume_score=round(resume_score or 0.0, 4),
                status=status,
            )
        )

    total = len(jd_keywords)
    matched = total - len(missing)
    match_ratio = matched / total if total else 0.0

    match_score = calculate_match_score(match_ratio, len(missing), len(underrepresented))

    jd_terms = {item.term for item in jd_keywords}
    min_score = float(_cfg("irrelevant_min_score", 0.1))
    irrelevant = [
        item.term
        for item in resume_keywords
        if item.score > min_score and item.term not in jd_terms
    ][: int(_cfg("irrelevant_cap", 10))]

    logger.debug(
        "jd_match_scored score=%s matched=%s total=%s missing=%s underrepresented=%s",
        match_score,
        matched,
        total,
        len(missing),
        len(underrepresented),
    )

    return JDMatchResult(
        match_score=match_score,
        missing_critical=missing,
        underrepresented=underrepresented,
        irrelevant=irrelevant,
        keyword_analysis=KeywordAnalysis(
            total_jd_keywords=total,
            matched_keywords=matched,
            match_ratio=round(match_ratio, 2),
            frequency_comparison=comparisons[: int(_cfg("frequency_comparison_limit", 20))],
        ),
    )


def quick_keyword_check(resume_text: str, required_keywords: Iterable[str]) -> int:
    """Percentage of required keywords present as whole words, case-insensitively."""
    keywords = [keyword for keyword in required_keywords if keyword and keyword.strip()]
    if not keywords:
        return 0
    found = sum(1 for keyword in keywords if keyword_pattern(keyword).search(resume_text or ""))
    return round_half_up(found / len(keywords) * 100)


def calculate_keyword_density(text: str, keywords: Iterable[str]) -> int:
    """Score keyword density: under 2% scales up to 50, 2-5% is 100, over 5% loses 10 per point."""
    total_words = count_words(text)
    if total_words == 0:
        return 0

    keyword_words = 0
    for keyword in keywords:
        if not keyword or not keyword.strip():
            continue
        hits = len(keyword_pattern(keyword).findall(text))
        keyword_words += hits * len(keyword.split())

    density = keyword_words / total_words * 100
    optimal_min = float(get_scoring_value("keyword_density.optimal_min_percent", 2.0))
    optimal_max = float(get_scoring_value("keyword_density.optimal_max_percent", 5.0))

    if density < optimal_min:
        return round_half_up(density * float(get_scoring_value("keyword_density.low_density_multiplier", 25)))
    if density > optimal_max:
        penalty = float(get_scoring_value("keyword_density.overuse_penalty_per_percent", 10))
        floor = int(get_scoring_value("keyword_density.overuse_floor", 50))
        return max(floor, round_half_up(100 - (density - optimal_max) * penalty))
    return 100


def extract_industry_terms(job_description: str, *, limit: int = 15) -> IndustryTerms:
    text = job_description or ""
    technical = unique_in_order(
        match
        for pattern in (_ACRONYM_RE, _JS_FRAMEWORK_RE, _SCRIPT_LANGUAGE_RE)
        for match in pattern.findall(text)
    )

    lowered = text.lower()
    soft_skills = [skill for skill in get_default_catalog().word_list("soft_skills") if skill in lowered]

    tools = unique_in_order(
        token.rstrip(".")
        for token in _CAPITALIZED_TOKEN_RE.findall(text)
        if len(token.rstrip(".")) > 2 and token.lower() not in STOP_WORDS
    )

    return IndustryTerms(
        technical=technical[:limit],
        soft_skills=soft_skills,
        tools=tools[:limit],
    )
