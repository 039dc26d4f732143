from .extractor import extract_keywords_with_tfidf, extract_phrases, score_terms

__all__ = ["extract_keywords_with_tfidf", "extract_phrases", "score_terms"]
