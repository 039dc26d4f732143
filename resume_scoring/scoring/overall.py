from __future__ import annotations

from typing import Mapping

from resume_scoring.core.utils import clamp, round_half_up
from resume_scoring.schemas.scoring import COMPONENTS, ComponentScore, WeightProfile

# Lower bound of each band, highest first; anything under the last band is F.
GRADE_BANDS: tuple[tuple[int, str], ...] = (
    (97, "A+"),
    (93, "A"),
    (90, "A-"),
    (87, "B+"),
    (83, "B"),
    (80, "B-"),
    (77, "C+"),
    (73, "C"),
    (70, "C-"),
    (67, "D+"),
    (63, "D"),
    (60, "D-"),
)
FAILING_GRADE = "F"


def _normalized_component(value: ComponentScore | float) -> float:
    if isinstance(value, ComponentScore):
        return value.score / value.max * 100
    return float(value)


def calculate_overall_score(
    component_scores: Mapping[str, ComponentScore | float],
    weights: WeightProfile,
) -> int:
    """Sum of score/100 x weight over the four PRO components, clamped to [0, 100]."""
    missing = [name for name in COMPONENTS if name not in component_scores]
    if missing:
        raise ValueError(f"missing component scores: {', '.join(missing)}")

    weight_values = weights.as_dict()
    total = sum(
        clamp(_normalized_component(component_scores[name]), 0.0, 100.0) / 100 * weight_values[name]
        for name in COMPONENTS
    )
    return int(clamp(round_half_up(total), 0, 100))


def calculate_grade(score: float) -> str:
    for lower_bound, grade in GRADE_BANDS:
        if score >= lower_bound:
            return grade
    return FAILING_GRADE


def with_weights(
    component_scores: Mapping[str, ComponentScore],
    weights: WeightProfile,
) -> dict[str, ComponentScore]:
    """Copy component scores with their weight and weighted contribution filled in."""
    weight_values = weights.as_dict()
    return {
        name: score.model_copy(
            update={
                "weight": weight_values[name],
                "weighted_contribution": round(score.score * weight_values[name] / 100, 2),
            }
        )
        for name, score in component_scores.items()
    }
