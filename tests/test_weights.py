import os
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["AI_ENABLED"] = "0"

from resume_scoring.core.errors import ConfigurationIntegrityError  # noqa: E402
from resume_scoring.schemas import WeightProfile  # noqa: E402
from resume_scoring.scoring import (  # noqa: E402
    ROLE_WEIGHT_REGISTRY,
    apply_adaptive_weights,
    get_role_weights,
    renormalize_weights,
    weights_sum_to_total,
)


def _profile(content, ats, fmt, impact):
    return WeightProfile(
        content_quality=content,
        ats_compatibility=ats,
        format_structure=fmt,
        impact_metrics=impact,
    )


class RoleWeightTests(unittest.TestCase):
    def test_every_registered_profile_sums_to_100(self):
        self.assertEqual(len(ROLE_WEIGHT_REGISTRY), 11)
        for role, weights in ROLE_WEIGHT_REGISTRY.items():
            self.assertTrue(weights_sum_to_total(weights), role)

    def test_role_lookup_falls_back_to_general(self):
        self.assertEqual(get_role_weights("senior software engineer"), _profile(35, 40, 15, 10))
        self.assertEqual(get_role_weights("Astronaut"), _profile(40, 35, 15, 10))

    def test_returned_profile_is_a_copy(self):
        weights = get_role_weights("Product Manager")
        weights.content_quality = 0
        self.assertEqual(ROLE_WEIGHT_REGISTRY["Product Manager"].content_quality, 50)


class RenormalizeTests(unittest.TestCase):
    def test_largest_remainder_keeps_exact_total(self):
        weights = renormalize_weights({"content_quality": 1, "ats_compatibility": 1, "format_structure": 1})
        self.assertEqual(weights, _profile(34, 33, 33, 0))
        self.assertEqual(weights.total(), 100)

    def test_scales_arbitrary_totals(self):
        self.assertEqual(renormalize_weights(_profile(20, 20, 5, 5)), _profile(40, 40, 10, 10))

    def test_invalid_weights_raise_integrity_error(self):
        with self.assertRaises(ConfigurationIntegrityError) as ctx:
            renormalize_weights(_profile(0, 0, 0, 0))
        self.assertEqual(ctx.exception.code, "weights_invalid")
        with self.assertRaises(ConfigurationIntegrityError):
            renormalize_weights({"content_quality": -5, "ats_compatibility": 50})
        with self.assertRaises(ConfigurationIntegrityError):
            renormalize_weights({"content_quality": float("nan"), "ats_compatibility": 50})


class AdaptiveWeightTests(unittest.TestCase):
    def test_without_learned_profile_returns_base(self):
        base = _profile(40, 35, 15, 10)
        self.assertEqual(apply_adaptive_weights(base, 0.5), base)
        self.assertEqual(apply_adaptive_weights(base, 0.0, _profile(10, 10, 40, 40)), base)

    def test_blends_toward_learned_profile(self):
        blended = apply_adaptive_weights(_profile(40, 35, 15, 10), 0.5, _profile(20, 45, 25, 10))
        self.assertEqual(blended, _profile(30, 40, 20, 10))

    def test_extreme_profiles_still_sum_to_100(self):
        blended = apply_adaptive_weights(_profile(40, 35, 15, 10), 1.0, _profile(100, 0, 0, 0))
        self.assertEqual(blended.total(), 100)
        self.assertTrue(all(value >= 5 for value in blended.as_dict().values()))


if __name__ == "__main__":
    unittest.main()
