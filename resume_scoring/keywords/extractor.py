from __future__ import annotations

import math
from collections import Counter

from resume_scoring.core.scoring_config import get_scoring_value
from resume_scoring.normalize.text import MIN_TOKEN_LENGTH, extract_words, tokenize
from resume_scoring.schemas.keywords import KeywordScore, PhraseFrequency


def _tfidf(count: int, total: int) -> float:
    # Single-document IDF: ln((N+1)/(c+1)) rises with rarity inside the document.
    tf = count / total
    idf = math.log((total + 1) / (count + 1))
    return tf * idf


def score_terms(tokens: list[str]) -> list[KeywordScore]:
    """Score every unique term of a token list, ordered by score, frequency, then term."""
    if not tokens:
        return []
    counts = Counter(token for token in tokens if len(token) >= MIN_TOKEN_LENGTH)
    total = len(tokens)
    scored = [
        KeywordScore(term=term, frequency=count, score=_tfidf(count, total))
        for term, count in counts.items()
    ]
    scored.sort(key=lambda item: (-item.score, -item.frequency, item.term))
    return scored


def extract_keywords_with_tfidf(text: str, top_n: int | None = None) -> list[KeywordScore]:
    """Rank the terms of one document by TF x single-document IDF.

    TF(t) = count(t) / |tokens| and IDF(t) = ln((|tokens| + 1) / (count(t) + 1)).
    Without a corpus the IDF term only dampens terms that dominate the document:
    the score grows with frequency until a term makes up roughly 37% of the tokens
    and shrinks past that. A document made only of distinct words gives every term
    the same score, so the order falls back to the term itself.
    """
    limit = int(get_scoring_value("keywords.default_top_n", 30)) if top_n is None else top_n
    if limit <= 0:
        return []
    return score_terms(extract_words(text))[:limit]


def extract_phrases(text: str, min_frequency: int | None = None) -> list[PhraseFrequency]:
    """Count 2- and 3-word sliding windows and keep those seen at least `min_frequency` times."""
    threshold = (
        int(get_scoring_value("keywords.phrase_min_frequency", 2)) if min_frequency is None else min_frequency
    )
    threshold = max(1, threshold)
    words = [token for token in tokenize(text) if len(token) >= MIN_TOKEN_LENGTH]

    counts: Counter[str] = Counter()
    for size in (2, 3):
        for start in range(len(words) - size + 1):
            counts[" ".join(words[start : start + size])] += 1

    phrases = [
        PhraseFrequency(phrase=phrase, frequency=count)
        for phrase, count in counts.items()
        if count >= threshold
    ]
    phrases.sort(key=lambda item: (-item.frequency, item.phrase))
    return phrases
