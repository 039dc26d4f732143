import os
import sys
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["AI_ENABLED"] = "0"

from resume_scoring.core.errors import ConfigurationNotFoundError  # noqa: E402
from resume_scoring.schemas import WeightProfile  # noqa: E402
from resume_scoring.schemas.tuning import ConfigStatus, FeedbackRecord, WeightConfiguration  # noqa: E402
from resume_scoring.tuning import (  # noqa: E402
    DEFAULT_CONFIGURATION_ID,
    SQLiteFeedbackStore,
    SQLiteWeightConfigStore,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class SQLiteWeightConfigStoreTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.db_path = Path(self._tmp.name) / "nested" / "feedback.db"
        self.store = SQLiteWeightConfigStore(self.db_path)

    def tearDown(self):
        self.store.close()
        self._tmp.cleanup()

    def _proposal(self, config_id, role=None):
        return WeightConfiguration(
            id=config_id,
            name=f"proposal {config_id}",
            weights=WeightProfile(content_quality=45, ats_compatibility=30, format_structure=15, impact_metrics=10),
            role=role,
            created_at=NOW,
        )

    def test_default_configuration_is_seeded_active(self):
        default = self.store.get_active(None)
        self.assertEqual(default.id, DEFAULT_CONFIGURATION_ID)
        self.assertEqual(default.weights.as_dict(), {
            "content_quality": 40.0,
            "ats_compatibility": 35.0,
            "format_structure": 15.0,
            "impact_metrics": 10.0,
        })

    def test_activation_supersedes_previous_in_same_scope(self):
        self.store.save(self._proposal("config_a"))
        activated = self.store.activate("config_a")
        self.assertEqual(activated.status, ConfigStatus.ACTIVE)
        self.assertEqual(self.store.get(DEFAULT_CONFIGURATION_ID).status, ConfigStatus.SUPERSEDED)
        active = [config.id for config in self.store.list_configurations() if config.active]
        self.assertEqual(active, ["config_a"])

    def test_activation_is_idempotent_and_role_scoped(self):
        self.store.save(self._proposal("config_role", role="Data Analyst"))
        self.store.activate("config_role")
        self.store.activate("config_role")
        self.assertEqual(self.store.get_active("Data Analyst").id, "config_role")
        self.assertEqual(self.store.get_active(None).id, DEFAULT_CONFIGURATION_ID)
        self.assertEqual([config.id for config in self.store.list_configurations("Data Analyst")], ["config_role"])

    def test_unknown_id_rolls_back(self):
        with self.assertRaises(ConfigurationNotFoundError):
            self.store.activate("config_missing")
        self.assertEqual(self.store.get_active(None).id, DEFAULT_CONFIGURATION_ID)
        self.store.save(self._proposal("config_b"))
        self.assertEqual(self.store.activate("config_b").id, "config_b")

    def test_mark_validated_only_moves_proposed_rows(self):
        self.store.save(self._proposal("config_a"))
        weights = WeightProfile(content_quality=50, ats_compatibility=25, format_structure=15, impact_metrics=10)
        validated = self.store.mark_validated("config_a", weights)
        self.assertEqual(validated.status, ConfigStatus.VALIDATED)
        self.assertEqual(validated.weights, weights)

        default = self.store.mark_validated(DEFAULT_CONFIGURATION_ID, weights)
        self.assertEqual(default.status, ConfigStatus.ACTIVE)
        self.assertEqual(default.weights.content_quality, 40)

    def test_activation_stores_checked_weights(self):
        self.store.save(self._proposal("config_a"))
        weights = WeightProfile(content_quality=50, ats_compatibility=25, format_structure=15, impact_metrics=10)
        activated = self.store.activate("config_a", weights)
        self.assertEqual(activated.weights, weights)

    def test_saving_active_configuration_is_rejected(self):
        active = self._proposal("config_a").model_copy(update={"status": ConfigStatus.ACTIVE})
        with self.assertRaises(ValueError):
            self.store.save(active)
        self.assertIsNone(self.store.get("config_a"))

    def test_reopening_keeps_state_without_reseeding(self):
        self.store.save(self._proposal("config_a"))
        self.store.activate("config_a")
        self.store.close()

        self.store = SQLiteWeightConfigStore(self.db_path)
        self.assertEqual(len(self.store.list_configurations()), 2)
        self.assertEqual(self.store.get_active(None).id, "config_a")


class SQLiteFeedbackStoreTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store = SQLiteFeedbackStore(Path(self._tmp.name) / "feedback.db")

    def tearDown(self):
        self.store.close()
        self._tmp.cleanup()

    def test_round_trip_preserves_fields(self):
        record = FeedbackRecord(
            resume_id="resume-1",
            job_role="Software Engineer",
            score=72,
            component_scores={"content_quality": 80.0, "ats_compatibility": 64.0},
            rating=3,
            helpful=False,
            comment="  ATS score too low  ",
            inaccurate_component="ats",
            expected_score=85,
            timestamp=NOW,
        )
        self.store.add(record)
        stored = self.store.list_between(NOW - timedelta(days=1), NOW)
        self.assertEqual(stored, [record])
        self.assertEqual(stored[0].comment, "ATS score too low")
        self.assertEqual(stored[0].timestamp.tzinfo, timezone.utc)

    def test_window_and_role_queries(self):
        for index, days_ago in enumerate((1, 3, 40)):
            self.store.add(
                FeedbackRecord(
                    resume_id=f"resume-{index}",
                    job_role="Data Analyst" if index == 1 else "Software Engineer",
                    score=60,
                    rating=4,
                    helpful=True,
                    timestamp=NOW - timedelta(days=days_ago),
                )
            )
        window = self.store.list_between(NOW - timedelta(days=30), NOW)
        self.assertEqual([record.resume_id for record in window], ["resume-1", "resume-0"])
        scoped = self.store.list_between(NOW - timedelta(days=30), NOW, role="Software Engineer")
        self.assertEqual([record.resume_id for record in scoped], ["resume-0"])
        latest = self.store.list_by_role("Software Engineer", limit=5)
        self.assertEqual([record.resume_id for record in latest], ["resume-0", "resume-2"])


if __name__ == "__main__":
    unittest.main()
