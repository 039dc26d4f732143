from .text import (
    STOP_WORDS,
    Document,
    count_words,
    ensure_min_length,
    extract_words,
    keyword_pattern,
    normalize,
    remove_stop_words,
    tokenize,
)

__all__ = [
    "STOP_WORDS",
    "Document",
    "normalize",
    "tokenize",
    "remove_stop_words",
    "extract_words",
    "keyword_pattern",
    "count_words",
    "ensure_min_length",
]
