from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Literal

from pydantic import BaseModel, Field

from resume_scoring.normalize.text import count_words, extract_words, keyword_pattern
from resume_scoring.schemas.scoring import FormatIssue
from resume_scoring.taxonomy import LocalRoleKeywordCatalog, get_default_catalog

VerbCategory = Literal["strong", "medium", "weak"]

WORDS_PER_PAGE = 500
MAX_PAGES = 10
MAX_YEARS_EXPERIENCE = 40
MIN_BULLET_LINE_CHARS = 10

_BULLET_RE = re.compile(r"^[-•*○●►▪▸‣⦿⦾⁃]\s+(.+)$")
_NUMBERED_RE = re.compile(r"^\d+[.)]\s+(.+)$")
_SECTION_RE = re.compile(r"^[A-Z][A-Za-z\s&]+$")
_NON_WORD_RE = re.compile(r"[^\w]")

_PERCENT_RE = re.compile(r"%|percent", re.IGNORECASE)
_CURRENCY_RE = re.compile(r"[$€£¥]|\b(?:USD|EUR|GBP)\b", re.IGNORECASE)
_MAGNITUDE_RE = re.compile(r"\d+\.?\d*[KMB]\b", re.IGNORECASE)
_SCALE_NUMBER_RE = re.compile(r"\d+\.?\d*\s*(?:million|billion|thousand|hundred)", re.IGNORECASE)
_MULTIPLIER_RE = re.compile(r"\d+x\b", re.IGNORECASE)
_DIGIT_RE = re.compile(r"\d")

_TABLE_RE = re.compile(r"\t{2,}|\|.*\|.*\|")
_SPECIAL_BULLET_RE = re.compile(r"[★☆■□▲△◆◇]")
_SPECIAL_CHAR_RE = re.compile(r"[^\w\s\-.,;:!()?'\"]")
_YEAR_RANGE_RE = re.compile(r"(\d{4})\s*[-–—to]+\s*(\d{4}|present|current)", re.IGNORECASE)


@dataclass(frozen=True)
class VerbBreakdown:
    strong: list[str] = field(default_factory=list)
    medium: list[str] = field(default_factory=list)
    weak: list[str] = field(default_factory=list)
    uncategorized: list[str] = field(default_factory=list)

    @property
    def categorized_count(self) -> int:
        return len(self.strong) + len(self.medium) + len(self.weak)


@dataclass(frozen=True)
class KeywordMatches:
    found: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    frequency: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class SectionReport:
    found: list[str] = field(default_factory=list)
    standard: list[str] = field(default_factory=list)
    non_standard: list[str] = field(default_factory=list)


class BulletPoint(BaseModel):
    text: str
    is_quantified: bool
    first_word: str
    verb_category: VerbCategory | None = None
    word_count: int


class ResumeTextAnalysis(BaseModel):
    total_words: int
    total_bullets: int
    bullet_points: list[BulletPoint] = Field(default_factory=list)
    words: list[str] = Field(default_factory=list)
    sections: list[str] = Field(default_factory=list)
    page_count: int
    years_experience: int


def _first_word(text: str) -> str:
    parts = text.split()
    return _NON_WORD_RE.sub("", parts[0]) if parts else ""


def _weak_phrase_prefix(text: str, catalog: LocalRoleKeywordCatalog) -> str | None:
    lowered = " ".join(text.lower().split())
    for phrase in catalog.action_verbs.weak:
        candidate = phrase.lower()
        if " " in candidate and (lowered == candidate or lowered.startswith(candidate + " ")):
            return phrase
    return None


def categorize_action_verb(
    word: str, catalog: LocalRoleKeywordCatalog | None = None
) -> VerbCategory | None:
    catalog = catalog or get_default_catalog()
    verbs = catalog.action_verbs
    normalized = _NON_WORD_RE.sub("", word.lower())
    if not normalized:
        return None
    if any(verb.lower() == normalized for verb in verbs.strong):
        return "strong"
    if any(verb.lower() == normalized for verb in verbs.medium):
        return "medium"
    if any(verb.lower() == normalized for verb in verbs.weak):
        return "weak"
    # "Helpedwith", "assisted," and similar glued forms
    if any(verb.lower().replace(" ", "") in normalized for verb in verbs.weak):
        return "weak"
    return None


def is_action_verb(word: str, catalog: LocalRoleKeywordCatalog | None = None) -> bool:
    catalog = catalog or get_default_catalog()
    verbs = catalog.action_verbs
    normalized = _NON_WORD_RE.sub("", word.lower())
    return any(verb.lower() == normalized for verb in verbs.strong + verbs.medium + verbs.weak)


def detect_bullet_points(text: str, catalog: LocalRoleKeywordCatalog | None = None) -> list[str]:
    """Bulleted, numbered, or verb-led lines of at least ten characters."""
    catalog = catalog or get_default_catalog()
    bullets: list[str] = []
    for line in (text or "").splitlines():
        stripped = line.strip()
        if len(stripped) < MIN_BULLET_LINE_CHARS:
            continue
        match = _BULLET_RE.match(stripped) or _NUMBERED_RE.match(stripped)
        if match:
            bullets.append(match.group(1).strip())
            continue
        first = stripped.split()[0]
        if is_action_verb(first, catalog) or _weak_phrase_prefix(stripped, catalog):
            bullets.append(stripped)
    return bullets


def is_quantified(text: str, catalog: LocalRoleKeywordCatalog | None = None) -> bool:
    if _PERCENT_RE.search(text) or _CURRENCY_RE.search(text):
        return True
    if _MAGNITUDE_RE.search(text) or _SCALE_NUMBER_RE.search(text) or _MULTIPLIER_RE.search(text):
        return True
    if _DIGIT_RE.search(text):
        catalog = catalog or get_default_catalog()
        lowered = text.lower()
        return any(word in lowered for word in catalog.word_list("quantification_context_words"))
    return False


def count_quantified_bullets(bullets: Iterable[str]) -> int:
    catalog = get_default_catalog()
    return sum(1 for bullet in bullets if is_quantified(bullet, catalog))


def quantification_ratio(bullets: list[str]) -> float:
    if not bullets:
        return 0.0
    return count_quantified_bullets(bullets) / len(bullets)


def categorize_action_verbs(
    bullets: Iterable[str], catalog: LocalRoleKeywordCatalog | None = None
) -> VerbBreakdown:
    catalog = catalog or get_default_catalog()
    breakdown = VerbBreakdown()
    for bullet in bullets:
        weak_phrase = _weak_phrase_prefix(bullet, catalog)
        if weak_phrase:
            breakdown.weak.append(weak_phrase)
            continue
        first = _first_word(bullet)
        if not first:
            continue
        category = categorize_action_verb(first, catalog)
        if category is None:
            breakdown.uncategorized.append(first)
        else:
            getattr(breakdown, category).append(first)
    return breakdown


def average_words_per_bullet(bullets: list[str]) -> int:
    if not bullets:
        return 0
    total = sum(len(bullet.split()) for bullet in bullets)
    return round(total / len(bullets))


def find_matching_keywords(text: str, keywords: Iterable[str]) -> KeywordMatches:
    matches = KeywordMatches()
    for keyword in keywords:
        if not keyword.strip():
            continue
        hits = keyword_pattern(keyword).findall(text or "")
        if hits:
            matches.found.append(keyword)
            matches.frequency[keyword] = len(hits)
        else:
            matches.missing.append(keyword)
    return matches


def detect_sections(text: str, catalog: LocalRoleKeywordCatalog | None = None) -> SectionReport:
    catalog = catalog or get_default_catalog()
    standard_headers = {header.lower() for header in catalog.word_list("standard_section_headers")}
    report = SectionReport()
    for line in (text or "").splitlines():
        candidate = line.strip().rstrip(":").strip()
        if len(candidate) < 3 or len(candidate) > 50:
            continue
        if not _SECTION_RE.match(candidate):
            continue
        report.found.append(candidate)
        if candidate.lower() in standard_headers:
            report.standard.append(candidate)
        else:
            report.non_standard.append(candidate)
    return report


def detect_format_issues(text: str) -> list[FormatIssue]:
    issues: list[FormatIssue] = []
    text = text or ""

    if _TABLE_RE.search(text):
        issues.append(
            FormatIssue(
                severity="error",
                issue="Tables detected",
                penalty=20,
                fix="Convert tables to bullet points or plain text",
            )
        )

    if text.count("\t") > 20:
        issues.append(
            FormatIssue(
                severity="warning",
                issue="Multiple columns detected (high tab usage)",
                penalty=15,
                fix="Use single-column layout",
            )
        )

    if _SPECIAL_BULLET_RE.search(text):
        issues.append(
            FormatIssue(
                severity="warning",
                issue="Special bullet characters detected",
                penalty=10,
                fix="Use standard bullets (-, •, or *)",
            )
        )

    long_lines = [line for line in text.split("\n") if len(line) > 200]
    if len(long_lines) > 3:
        issues.append(
            FormatIssue(
                severity="info",
                issue="Very long text lines detected",
                penalty=5,
                fix="Ensure proper line breaks",
            )
        )

    if len(_SPECIAL_CHAR_RE.findall(text)) > len(text) * 0.05:
        issues.append(
            FormatIssue(
                severity="warning",
                issue="Excessive special characters",
                penalty=10,
                fix="Remove decorative characters",
            )
        )

    return issues


def estimate_page_count(text: str) -> int:
    pages = math.ceil(count_words(text) / WORDS_PER_PAGE)
    return max(1, min(pages, MAX_PAGES))


def estimate_years_of_experience(text: str, *, current_year: int | None = None) -> int:
    """Sum dated ranges; without any, assume two years per five bullets."""
    year_now = current_year or datetime.now(timezone.utc).year
    total = 0
    for match in _YEAR_RANGE_RE.finditer(text or ""):
        start = int(match.group(1))
        end_raw = match.group(2).lower()
        end = year_now if end_raw in {"present", "current"} else int(end_raw)
        if end >= start:
            total += end - start

    if total == 0:
        total = (len(detect_bullet_points(text)) // 5) * 2

    return max(0, min(total, MAX_YEARS_EXPERIENCE))


def analyze_bullet_point(bullet: str, catalog: LocalRoleKeywordCatalog | None = None) -> BulletPoint:
    catalog = catalog or get_default_catalog()
    first = _first_word(bullet)
    category: VerbCategory | None = "weak" if _weak_phrase_prefix(bullet, catalog) else None
    if category is None and first:
        category = categorize_action_verb(first, catalog)
    return BulletPoint(
        text=bullet,
        is_quantified=is_quantified(bullet, catalog),
        first_word=first,
        verb_category=category,
        word_count=len(bullet.split()),
    )


def analyze_resume_text(text: str) -> ResumeTextAnalysis:
    catalog = get_default_catalog()
    bullets = detect_bullet_points(text, catalog)
    return ResumeTextAnalysis(
        total_words=count_words(text),
        total_bullets=len(bullets),
        bullet_points=[analyze_bullet_point(bullet, catalog) for bullet in bullets],
        words=extract_words(text),
        sections=detect_sections(text, catalog).found,
        page_count=estimate_page_count(text),
        years_experience=estimate_years_of_experience(text),
    )


def validate_resume_text(text: str) -> list[str]:
    """Return human-readable problems; an empty list means the text is usable."""
    errors: list[str] = []
    if not text or not text.strip():
        errors.append("Resume text is empty")
    if len(text or "") < 100:
        errors.append("Resume text is too short (minimum 100 characters)")
    if count_words(text) < 50:
        errors.append("Resume contains too few words (minimum 50 words)")
    if len(detect_bullet_points(text)) < 3:
        errors.append("Resume should contain at least 3 bullet points")
    return errors
