import os
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["AI_ENABLED"] = "0"

from resume_scoring.keywords import extract_keywords_with_tfidf, extract_phrases  # noqa: E402

SAMPLE = (
    "Backend engineer building Python services. Python APIs, Python tooling and SQL reporting. "
    "Designed data pipelines, tuned SQL queries, mentored engineers on testing and observability."
)


class KeywordExtractionTests(unittest.TestCase):
    def test_every_term_is_longer_than_two_characters(self):
        keywords = extract_keywords_with_tfidf(SAMPLE)
        self.assertTrue(keywords)
        self.assertTrue(all(len(item.term) > 2 for item in keywords))

    def test_results_are_ordered_by_descending_score(self):
        scores = [item.score for item in extract_keywords_with_tfidf(SAMPLE)]
        self.assertEqual(scores, sorted(scores, reverse=True))

    def test_more_frequent_term_ranks_higher_below_dominance(self):
        keywords = extract_keywords_with_tfidf("python python java scala kotlin rust golang swift")
        self.assertEqual(keywords[0].term, "python")
        self.assertEqual(keywords[0].frequency, 2)
        self.assertGreater(keywords[0].score, keywords[1].score)

    def test_all_unique_terms_fall_back_to_lexical_order(self):
        terms = [item.term for item in extract_keywords_with_tfidf("zebra apple mango kiwi")]
        self.assertEqual(terms, ["apple", "kiwi", "mango", "zebra"])

    def test_top_n_limits_results(self):
        self.assertEqual(len(extract_keywords_with_tfidf(SAMPLE, top_n=3)), 3)
        self.assertEqual(extract_keywords_with_tfidf(SAMPLE, top_n=0), [])
        self.assertEqual(extract_keywords_with_tfidf(""), [])

    def test_extract_phrases_keeps_repeated_ngrams(self):
        phrases = extract_phrases("machine learning models and machine learning pipelines")
        self.assertEqual(len(phrases), 1)
        self.assertEqual(phrases[0].phrase, "machine learning")
        self.assertEqual(phrases[0].frequency, 2)

    def test_extract_phrases_with_lower_threshold_orders_by_frequency(self):
        phrases = extract_phrases("machine learning models and machine learning pipelines", min_frequency=1)
        self.assertEqual(phrases[0].phrase, "machine learning")
        self.assertIn("machine learning pipelines", [item.phrase for item in phrases])


if __name__ == "__main__":
    unittest.main()
