import os
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["AI_ENABLED"] = "0"

from resume_scoring import (  # noqa: E402
    AdaptiveWeightTuner,
    ScoringOptions,
    ValidationError,
    WeightProfile,
    calculate_pro_plus_score,
    calculate_pro_score,
)
from resume_scoring.core.errors import ExternalCallError  # noqa: E402
from resume_scoring.schemas.tuning import WeightConfiguration  # noqa: E402
from resume_scoring.scoring import calculate_grade  # noqa: E402
from resume_scoring.suggestions import ALIGNMENT_SUGGESTION  # noqa: E402
from resume_scoring.tuning import InMemoryFeedbackStore, InMemoryWeightConfigStore  # noqa: E402

RESUME = """Jane Doe
jane.doe@example.com | 555-123-4567

Professional Summary
Software engineer with 8 years of experience building scalable web platforms.

Experience
Senior Software Engineer, Acme Corp (2018 - 2024)
- Led migration of 40 services to Kubernetes, reducing deployment time by 60%
- Developed REST API for billing platform serving 2 million users
- Optimized database queries with Python and SQL, cutting costs by $120K per year
- Implemented code review and testing practices across 5 teams
- Responsible for on-call rotation and debugging production incidents

Education
B.S. Computer Science, State University

Skills
Python, Java, Git, Docker, AWS, algorithms, data structures, object-oriented design
"""

JOB_DESCRIPTION = (
    "Backend engineer with Python, SQL and Kubernetes experience. Build REST APIs, improve database "
    "performance and mentor engineers. AWS and Terraform preferred."
)


class FailingAIClient:
    def __init__(self):
        self.calls = 0

    async def complete_json(self, messages, *, temperature=0.2, max_output_tokens=900):
        self.calls += 1
        raise ExternalCallError("provider down")


class ProScoreTests(unittest.TestCase):
    def test_sync_pro_score(self):
        result = calculate_pro_score(RESUME, "Software Engineer")
        self.assertGreaterEqual(result.overall_score, 0)
        self.assertLessEqual(result.overall_score, 100)
        self.assertEqual(result.grade, calculate_grade(result.overall_score))
        self.assertIsNone(result.jd_match)
        self.assertIsNone(result.ai_suggestions)
        self.assertEqual(result.weights_used.total(), 100)
        contributions = sum(score.weighted_contribution for score in result.component_scores.values())
        self.assertLessEqual(abs(contributions - result.overall_score), 1)

    def test_short_resume_is_rejected(self):
        with self.assertRaises(ValidationError):
            calculate_pro_score("Too short to score.")


class ProPlusScoreTests(unittest.IsolatedAsyncioTestCase):
    async def test_defaults_without_job_description(self):
        result = await calculate_pro_plus_score(RESUME)
        self.assertEqual(result.metadata.weights_source, "role_profile")
        self.assertEqual(result.metadata.job_role, "General")
        self.assertFalse(result.metadata.features["jd_match"])
        self.assertFalse(result.metadata.features["suggestions"])
        self.assertIsNone(result.metadata.suggestions_source)
        self.assertEqual(result.metadata.resume_stats.total_bullets, 5)
        self.assertEqual(result.metadata.resume_stats.years_experience, 6)
        self.assertEqual(result.three_axis.tailoring.score, 0)

    async def test_short_job_description_is_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            await calculate_pro_plus_score(RESUME, ScoringOptions(job_description="Python role"))
        self.assertEqual(ctx.exception.field, "job_description")
        with self.assertRaises(ValidationError):
            await calculate_pro_plus_score(RESUME, ScoringOptions(job_description="   "))

    async def test_job_description_adds_match_and_template_suggestions(self):
        options = ScoringOptions(job_role="Backend Engineer", job_description=JOB_DESCRIPTION)
        result = await calculate_pro_plus_score(RESUME, options)
        self.assertIsNotNone(result.jd_match)
        self.assertEqual(result.metadata.suggestions_source, "template")
        self.assertEqual(result.ai_suggestions[-1], ALIGNMENT_SUGGESTION)
        self.assertTrue(result.metadata.features["suggestions"])

    async def test_ai_failure_never_surfaces(self):
        client = FailingAIClient()
        options = ScoringOptions(job_description=JOB_DESCRIPTION, include_ai_insights=True)
        result = await calculate_pro_plus_score(RESUME, options, ai_client=client)
        self.assertEqual(client.calls, 2)
        self.assertEqual(result.metadata.suggestions_source, "template")
        self.assertEqual(result.metadata.insights_source, "template")
        self.assertIsNotNone(result.ai_summary)

    async def test_insights_without_job_description(self):
        result = await calculate_pro_plus_score(RESUME, ScoringOptions(include_ai_insights=True))
        self.assertEqual(result.metadata.insights_source, "template")
        self.assertIn(f"{result.overall_score}/100", result.ai_summary.summary)
        self.assertIsNotNone(result.ai_suggestions)

    async def test_custom_weights_are_renormalized(self):
        custom = WeightProfile(content_quality=1, ats_compatibility=1, format_structure=1, impact_metrics=1)
        result = await calculate_pro_plus_score(RESUME, ScoringOptions(custom_weights=custom))
        self.assertEqual(result.metadata.weights_source, "custom")
        self.assertEqual(
            result.weights_used,
            WeightProfile(content_quality=25, ats_compatibility=25, format_structure=25, impact_metrics=25),
        )

    async def test_adaptive_weights_follow_active_configuration(self):
        configs = InMemoryWeightConfigStore()
        tuner = AdaptiveWeightTuner(InMemoryFeedbackStore(), configs)
        configs.save(
            WeightConfiguration(
                id="config_learned",
                name="learned",
                weights=WeightProfile(content_quality=20, ats_compatibility=45, format_structure=25, impact_metrics=10),
            )
        )
        await tuner.activate_weight_configuration("config_learned")

        options = ScoringOptions(use_adaptive_weights=True, adaptive_variance=0.5)
        result = await calculate_pro_plus_score(RESUME, options, tuner=tuner)
        self.assertEqual(result.metadata.weights_source, "adaptive")
        self.assertEqual(result.metadata.weight_configuration_id, "config_learned")
        self.assertEqual(
            result.weights_used,
            WeightProfile(content_quality=30, ats_compatibility=40, format_structure=20, impact_metrics=10),
        )

    async def test_adaptive_without_tuner_uses_role_profile_weights(self):
        result = await calculate_pro_plus_score(RESUME, ScoringOptions(use_adaptive_weights=True))
        self.assertEqual(result.metadata.weights_source, "adaptive")
        self.assertIsNone(result.metadata.weight_configuration_id)
        self.assertEqual(
            result.weights_used,
            WeightProfile(content_quality=40, ats_compatibility=35, format_structure=15, impact_metrics=10),
        )

    async def test_three_axis_model_drives_overall(self):
        options = ScoringOptions(job_description=JOB_DESCRIPTION, score_model="three_axis")
        result = await calculate_pro_plus_score(RESUME, options)
        self.assertEqual(result.score_model, "three_axis")
        self.assertEqual(result.overall_score, result.three_axis.overall)
        self.assertEqual(result.grade, calculate_grade(result.three_axis.overall))


if __name__ == "__main__":
    unittest.main()
