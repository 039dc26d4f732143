import os
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["AI_ENABLED"] = "0"

from resume_scoring.core.errors import ValidationError  # noqa: E402
from resume_scoring.normalize.text import (  # noqa: E402
    Document,
    extract_words,
    keyword_pattern,
    remove_stop_words,
    tokenize,
)
from resume_scoring.normalize.text import ensure_min_length  # noqa: E402


class TextNormalizationTests(unittest.TestCase):
    def test_tokenize_lowercases_and_strips_punctuation_but_keeps_hyphens(self):
        self.assertEqual(tokenize("Hello, World!  The  follow-up."), ["hello", "world", "the", "follow-up"])

    def test_extract_words_drops_stop_words_and_short_tokens(self):
        words = extract_words("The cat and a dog ran to Python, JS")
        self.assertEqual(words, ["cat", "dog", "ran", "python"])

    def test_remove_stop_words_is_case_insensitive(self):
        self.assertEqual(remove_stop_words(["The", "API", "with", "tests"]), ["API", "tests"])

    def test_keyword_pattern_matches_whole_words_across_whitespace(self):
        self.assertIsNotNone(keyword_pattern("machine learning").search("Applied Machine\nLearning daily"))
        self.assertIsNone(keyword_pattern("java").search("Wrote JavaScript services"))
        self.assertIsNotNone(keyword_pattern("C++").search("Modern C++ and Rust"))

    def test_ensure_min_length_raises_validation_error(self):
        with self.assertRaises(ValidationError) as ctx:
            ensure_min_length("   too short   ", field_name="resume_text", minimum=100)
        self.assertEqual(ctx.exception.code, "validation_error")
        self.assertEqual(ctx.exception.field, "resume_text")
        self.assertEqual(ctx.exception.actual, 9)

    def test_document_from_text_uses_extracted_words(self):
        document = Document.from_text("Built the billing API")
        self.assertEqual(document.tokens, ["built", "billing", "api"])
        self.assertEqual(len(document), 3)


if __name__ == "__main__":
    unittest.main()
