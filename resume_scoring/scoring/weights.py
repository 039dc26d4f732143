from __future__ import annotations

import math
from typing import Mapping

from resume_scoring.core.errors import ConfigurationIntegrityError
from resume_scoring.core.scoring_config import get_scoring_value
from resume_scoring.core.utils import clamp
from resume_scoring.schemas.scoring import COMPONENTS, WeightProfile
from resume_scoring.taxonomy import DEFAULT_ROLE, match_role_name

WEIGHT_TOTAL = 100
WEIGHT_TOLERANCE = 1e-6


def _profile(content: int, ats: int, fmt: int, impact: int) -> WeightProfile:
    return WeightProfile(
        content_quality=content,
        ats_compatibility=ats,
        format_structure=fmt,
        impact_metrics=impact,
    )


# content quality / ATS compatibility / format & structure / impact metrics
ROLE_WEIGHT_REGISTRY: dict[str, WeightProfile] = {
    "Product Manager": _profile(50, 30, 10, 10),
    "Software Engineer": _profile(35, 40, 15, 10),
    "Frontend Engineer": _profile(35, 40, 15, 10),
    "Backend Engineer": _profile(35, 40, 15, 10),
    "Data Analyst": _profile(40, 35, 15, 10),
    "Data Scientist": _profile(40, 35, 15, 10),
    "DevOps Engineer": _profile(35, 40, 15, 10),
    "UX Designer": _profile(45, 30, 15, 10),
    "Marketing Manager": _profile(45, 30, 15, 10),
    "Sales Manager": _profile(40, 30, 15, 15),
    DEFAULT_ROLE: _profile(40, 35, 15, 10),
}


def available_roles() -> list[str]:
    return list(ROLE_WEIGHT_REGISTRY)


def resolve_weight_role(role: str) -> str:
    return match_role_name(role, ROLE_WEIGHT_REGISTRY, default=DEFAULT_ROLE)


def get_role_weights(role: str) -> WeightProfile:
    """Weight profile for `role`; unknown roles get the General profile."""
    return ROLE_WEIGHT_REGISTRY[resolve_weight_role(role)].model_copy()


def weights_sum_to_total(weights: WeightProfile, tolerance: float = WEIGHT_TOLERANCE) -> bool:
    return abs(weights.total() - WEIGHT_TOTAL) <= tolerance


def renormalize_weights(weights: WeightProfile | Mapping[str, float]) -> WeightProfile:
    """Scale weights to integers summing to exactly 100 (largest-remainder rounding).

    Raises ConfigurationIntegrityError when the input cannot be normalized.
    """
    values = weights.as_dict() if isinstance(weights, WeightProfile) else {
        name: float(weights.get(name, 0.0)) for name in COMPONENTS
    }
    for name, value in values.items():
        if not math.isfinite(value) or value < 0:
            raise ConfigurationIntegrityError(f"weight '{name}' must be a finite non-negative number, got {value}")
    total = sum(values.values())
    if total <= 0:
        raise ConfigurationIntegrityError("weights must not all be zero")

    scaled = {name: values[name] / total * WEIGHT_TOTAL for name in COMPONENTS}
    floors = {name: math.floor(scaled[name]) for name in COMPONENTS}
    remainder = WEIGHT_TOTAL - sum(floors.values())
    by_fraction = sorted(COMPONENTS, key=lambda name: (-(scaled[name] - floors[name]), COMPONENTS.index(name)))
    for name in by_fraction[:remainder]:
        floors[name] += 1

    profile = WeightProfile.from_mapping(floors)
    if not weights_sum_to_total(profile):
        raise ConfigurationIntegrityError(f"weights sum to {profile.total()} after renormalization")
    return profile


def apply_adaptive_weights(
    base: WeightProfile,
    variance: float | None = None,
    learned: WeightProfile | None = None,
) -> WeightProfile:
    """Move `base` a `variance` fraction of the way toward `learned`, then renormalize.

    Components are clamped to the configured bounds before renormalizing. Without a
    learned profile the base profile is only renormalized.
    """
    step = float(get_scoring_value("weights.default_variance", 0.1)) if variance is None else variance
    step = clamp(step, 0.0, 1.0)
    if learned is None or step == 0.0:
        return renormalize_weights(base)

    lower = float(get_scoring_value("weights.min_component", 5))
    upper = float(get_scoring_value("weights.max_component", 60))
    base_values = base.as_dict()
    learned_values = learned.as_dict()
    blended = {
        name: clamp(base_values[name] + step * (learned_values[name] - base_values[name]), lower, upper)
        for name in COMPONENTS
    }
    return renormalize_weights(blended)
