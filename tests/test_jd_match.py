import os
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["AI_ENABLED"] = "0"

from resume_scoring.core.errors import ValidationError  # noqa: E402
from resume_scoring.matching import (  # noqa: E402
    analyze_jd_match,
    calculate_keyword_density,
    calculate_match_score,
    extract_industry_terms,
    quick_keyword_check,
)

JOB_DESCRIPTION = (
    "We are hiring a backend engineer with strong Python and SQL skills. Experience with AWS, "
    "Docker and Kubernetes is required. You will design APIs and mentor engineers."
)

GENERIC_RESUME = (
    "Friendly professional with many years spent in retail stores and restaurants. Greeted guests, "
    "organized shelves, counted inventory, opened and closed shops, trained new staff on register "
    "procedures, kept floors tidy, answered phones, scheduled shifts, ordered supplies, handled "
    "deliveries, planned seasonal displays, resolved complaints politely and kept records tidy daily."
)

# six JD terms; "terraform" dominates the JD but appears once in the resume
TERRAFORM_JOB_DESCRIPTION = (
    "Terraform terraform terraform terraform deploy pipelines using terraform modules daily."
)

TERRAFORM_RESUME = (
    "Platform engineer maintaining terraform state. Built deploy pipelines using reusable modules daily, "
    "reduced release failures, mentored juniors, automated backups, documented runbooks."
)


class JDMatchTests(unittest.TestCase):
    def test_resume_repeating_the_job_description_scores_100(self):
        result = analyze_jd_match(f"{JOB_DESCRIPTION}\n{JOB_DESCRIPTION}", JOB_DESCRIPTION)
        self.assertEqual(result.match_score, 100)
        self.assertEqual(result.missing_critical, [])
        self.assertEqual(result.underrepresented, [])
        self.assertEqual(result.keyword_analysis.match_ratio, 1.0)

    def test_generic_resume_misses_technical_keywords(self):
        jd = "Requires Python, SQL, AWS, Docker, Kubernetes, leadership, communication"
        result = analyze_jd_match(GENERIC_RESUME, jd)
        technical = {"python", "sql", "aws", "docker", "kubernetes"}
        self.assertGreaterEqual(len(technical & set(result.missing_critical)), 4)
        self.assertLess(result.match_score, 50)

    def test_every_jd_keyword_lands_in_one_bucket(self):
        resume = (
            "Backend engineer writing Python services and tuning SQL. Shipped APIs on AWS and mentored "
            "two engineers. Maintained Docker images for staging environments and reviewed pull requests."
        )
        result = analyze_jd_match(resume, JOB_DESCRIPTION)
        analysis = result.keyword_analysis
        self.assertEqual(analysis.matched_keywords, analysis.total_jd_keywords - len(result.missing_critical))
        self.assertFalse(set(result.missing_critical) & set(result.underrepresented))
        self.assertGreaterEqual(result.match_score, 0)
        self.assertLessEqual(result.match_score, 100)
        self.assertGreaterEqual(analysis.match_ratio, 0.0)
        self.assertLessEqual(analysis.match_ratio, 1.0)
        self.assertLessEqual(len(result.irrelevant), 10)
        self.assertLessEqual(len(analysis.frequency_comparison), 20)

    def test_keyword_repeated_in_jd_but_mentioned_once_is_underrepresented(self):
        result = analyze_jd_match(TERRAFORM_RESUME, TERRAFORM_JOB_DESCRIPTION)
        self.assertEqual(result.missing_critical, [])
        self.assertEqual(result.underrepresented, ["terraform"])
        self.assertEqual(result.keyword_analysis.total_jd_keywords, 6)
        self.assertEqual(result.keyword_analysis.matched_keywords, 6)
        self.assertEqual(result.match_score, 99)

    def test_frequency_comparison_status_follows_half_score_rule(self):
        for resume, jd in ((TERRAFORM_RESUME, TERRAFORM_JOB_DESCRIPTION), (GENERIC_RESUME, JOB_DESCRIPTION)):
            result = analyze_jd_match(resume, jd)
            for row in result.keyword_analysis.frequency_comparison:
                if row.status == "missing":
                    self.assertIn(row.keyword, result.missing_critical)
                    self.assertEqual(row.resume_score, 0.0)
                elif row.status == "underrepresented":
                    self.assertIn(row.keyword, result.underrepresented)
                    self.assertLess(row.resume_score, row.jd_score * 0.5)
                else:
                    self.assertEqual(row.status, "matched")
                    self.assertGreaterEqual(row.resume_score, row.jd_score * 0.5)

    def test_match_score_never_rises_with_more_gaps(self):
        for ratio in (0.0, 0.25, 0.6, 1.0):
            by_missing = [calculate_match_score(ratio, count, 0) for count in range(15)]
            by_under = [calculate_match_score(ratio, 0, count) for count in range(15)]
            for scores in (by_missing, by_under):
                self.assertEqual(scores, sorted(scores, reverse=True))
                self.assertTrue(all(0 <= score <= 100 for score in scores))
        self.assertEqual(calculate_match_score(1.0, 30, 0), 80)
        self.assertEqual(calculate_match_score(1.0, 0, 15), 90)
        self.assertEqual(calculate_match_score(0.1, 10, 10), 0)

    def test_short_inputs_are_rejected(self):
        with self.assertRaises(ValidationError):
            analyze_jd_match("too short", JOB_DESCRIPTION)
        with self.assertRaises(ValidationError) as ctx:
            analyze_jd_match(GENERIC_RESUME, "Python and SQL")
        self.assertEqual(ctx.exception.field, "job_description")

    def test_quick_keyword_check_rounds_to_nearest_percent(self):
        score = quick_keyword_check("Senior analyst, Python and SQL expert with reporting experience", ["Python", "SQL", "AWS"])
        self.assertEqual(score, 67)
        self.assertEqual(quick_keyword_check("anything", []), 0)

    def test_keyword_density_in_optimal_band_scores_100(self):
        text = " ".join(["data pipeline"] * 20 + ["filler"] * 960)
        self.assertEqual(calculate_keyword_density(text, ["data pipeline"]), 100)

    def test_keyword_density_low_and_high_bands(self):
        sparse = " ".join(["python"] + ["filler"] * 99)
        self.assertEqual(calculate_keyword_density(sparse, ["python"]), 25)
        dense = " ".join(["python"] * 10 + ["filler"] * 90)
        self.assertEqual(calculate_keyword_density(dense, ["python"]), 50)
        self.assertEqual(calculate_keyword_density("", ["python"]), 0)

    def test_extract_industry_terms(self):
        terms = extract_industry_terms(
            "Build React and Node.js apps in TypeScript on AWS. Strong communication and leadership."
        )
        self.assertIn("AWS", terms.technical)
        self.assertIn("Node.js", terms.technical)
        self.assertIn("TypeScript", terms.technical)
        self.assertEqual(terms.soft_skills, ["leadership", "communication"])
        self.assertIn("React", terms.tools)


if __name__ == "__main__":
    unittest.main()
