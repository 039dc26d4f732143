from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from resume_scoring.core.errors import ValidationError

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
        "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
        "to", "was", "will", "with", "have", "this", "but", "they", "his",
    }
)

MIN_TOKEN_LENGTH = 3

_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^\w\s-]")


def normalize(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", (text or "").lower().strip())


def strip_punctuation(token: str) -> str:
    return _NON_WORD_RE.sub("", token)


def tokenize(text: str) -> list[str]:
    """Lowercased, punctuation-stripped tokens with stop words kept."""
    tokens = (strip_punctuation(token) for token in normalize(text).split(" "))
    return [token for token in tokens if token]


def remove_stop_words(tokens: Iterable[str]) -> list[str]:
    return [token for token in tokens if token.lower() not in STOP_WORDS]


def extract_words(text: str) -> list[str]:
    return [token for token in remove_stop_words(tokenize(text)) if len(token) >= MIN_TOKEN_LENGTH]


def count_words(text: str) -> int:
    return len((text or "").split())


def keyword_pattern(keyword: str) -> re.Pattern[str]:
    """Whole-word, case-insensitive pattern; inner whitespace matches any whitespace run."""
    parts = [re.escape(part) for part in keyword.strip().split()]
    return re.compile(r"(?<!\w)" + r"\s+".join(parts) + r"(?!\w)", re.IGNORECASE)


def ensure_min_length(text: str | None, *, field_name: str, minimum: int) -> str:
    """Raise ValidationError when the trimmed text is shorter than `minimum` characters."""
    stripped = (text or "").strip()
    if len(stripped) < minimum:
        raise ValidationError(field_name, minimum, actual=len(stripped))
    return text or ""


@dataclass(frozen=True)
class Document:
    text: str
    tokens: list[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "Document":
        return cls(text=text, tokens=extract_words(text))

    def __len__(self) -> int:
        return len(self.tokens)
