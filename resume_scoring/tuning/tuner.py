from __future__ import annotations

import asyncio
import logging
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

from resume_scoring.core.config import Settings
from resume_scoring.core.config import settings as default_settings
from resume_scoring.core.errors import ConfigurationIntegrityError, ConfigurationNotFoundError
from resume_scoring.core.scoring_config import get_scoring_value
from resume_scoring.schemas.scoring import COMPONENTS, WeightProfile
from resume_scoring.schemas.tuning import (
    FEEDBACK_COMPONENT_TO_WEIGHT,
    AnalyticsPeriod,
    ComponentAccuracy,
    ConfigPerformance,
    ConfigStatus,
    FeedbackAnalytics,
    FeedbackRecord,
    ScoreAccuracy,
    ThemeCount,
    WeightConfiguration,
)
from resume_scoring.scoring.weights import get_role_weights, renormalize_weights, weights_sum_to_total

from .stores import FeedbackStore, WeightConfigStore

logger = logging.getLogger(__name__)

COMMENT_THEMES: tuple[str, ...] = (
    "accurate",
    "helpful",
    "too high",
    "too low",
    "missing",
    "ats",
    "keywords",
    "format",
    "score",
    "content",
    "suggestions",
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def extract_comment_themes(comments: Sequence[str], limit: int | None = None) -> list[ThemeCount]:
    """Count comments mentioning each theme; most frequent first, ties in theme order."""
    top_n = int(get_scoring_value("tuning.top_themes", 5)) if limit is None else limit
    counts = Counter()
    for comment in comments:
        lowered = comment.lower()
        for theme in COMMENT_THEMES:
            if theme in lowered:
                counts[theme] += 1
    ranked = sorted(
        (theme for theme in COMMENT_THEMES if counts[theme] > 0),
        key=lambda theme: (-counts[theme], COMMENT_THEMES.index(theme)),
    )
    return [ThemeCount(theme=theme, count=counts[theme]) for theme in ranked[:top_n]]


def shift_weight_from(weights: WeightProfile, component: str, points: float, floor: float) -> WeightProfile:
    """Take up to `points` from `component` (never below `floor`) and spread them proportionally."""
    values = weights.as_dict()
    shift = max(0.0, min(points, values[component] - floor))
    if shift == 0.0:
        return renormalize_weights(values)

    others = [name for name in COMPONENTS if name != component]
    others_total = sum(values[name] for name in others)
    values[component] -= shift
    for name in others:
        share = values[name] / others_total if others_total > 0 else 1 / len(others)
        values[name] += shift * share
    return renormalize_weights(values)


class AdaptiveWeightTuner:
    """Learns component weights from user feedback.

    Configurations move proposed -> validated -> active -> superseded; a superseded
    configuration can be activated again to roll back. Store calls run in a worker
    thread so the event loop is never blocked on I/O.
    """

    def __init__(
        self,
        feedback_store: FeedbackStore,
        config_store: WeightConfigStore,
        *,
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._feedback = feedback_store
        self._configs = config_store
        self._settings = settings or default_settings
        self._clock = clock or _utc_now

    async def store_feedback(self, record: FeedbackRecord) -> FeedbackRecord:
        await asyncio.to_thread(self._feedback.add, record)
        return record

    async def get_feedback(
        self,
        start: datetime,
        end: datetime,
        role: str | None = None,
    ) -> list[FeedbackRecord]:
        return await asyncio.to_thread(self._feedback.list_between, start, end, role)

    async def get_feedback_by_role(self, role: str, limit: int = 50) -> list[FeedbackRecord]:
        return await asyncio.to_thread(self._feedback.list_by_role, role, limit)

    async def generate_feedback_analytics(self, start: datetime, end: datetime) -> FeedbackAnalytics:
        records = await self.get_feedback(start, end)
        report = FeedbackAnalytics(period=AnalyticsPeriod(start=start, end=end))
        total = len(records)
        if total == 0:
            return report

        flagged = Counter(record.inaccurate_component for record in records if record.inaccurate_component)
        report.total_feedback = total
        report.avg_rating = round(sum(record.rating for record in records) / total, 2)
        report.helpful_percentage = round(sum(1 for record in records if record.helpful) / total * 100, 2)
        report.inaccurate_component_counts = {label: flagged[label] for label in FEEDBACK_COMPONENT_TO_WEIGHT}
        report.component_accuracy = {
            label: ComponentAccuracy(
                complaint_count=flagged[label],
                complaint_rate=round(flagged[label] / total, 4),
            )
            for label in FEEDBACK_COMPONENT_TO_WEIGHT
        }

        threshold = float(get_scoring_value("tuning.over_under_threshold", 5))
        differences = [record.expected_score - record.score for record in records if record.expected_score is not None]
        if differences:
            samples = len(differences)
            report.score_accuracy = ScoreAccuracy(
                samples=samples,
                avg_difference=round(sum(differences) / samples, 2),
                # positive difference means the user expected more than we scored
                overestimation_rate=round(sum(1 for diff in differences if diff < -threshold) / samples, 4),
                underestimation_rate=round(sum(1 for diff in differences if diff > threshold) / samples, 4),
            )

        report.common_themes = extract_comment_themes([record.comment for record in records if record.comment])
        return report

    async def update_weights_based_on_feedback(
        self,
        min_feedback_count: int | None = None,
        role: str | None = None,
    ) -> WeightConfiguration | None:
        minimum = self._settings.tuning_min_feedback if min_feedback_count is None else min_feedback_count
        end = self._clock()
        start = end - timedelta(days=self._settings.tuning_window_days)
        records = await self.get_feedback(start, end, role)
        if len(records) < minimum:
            logger.info(
                "weight_tuning_skipped role=%s feedback=%s required=%s",
                role or "global",
                len(records),
                minimum,
            )
            return None

        active = await self.get_active_configuration(role)
        current = active.weights if active is not None else get_role_weights(role or "General")

        flagged = Counter(record.inaccurate_component for record in records if record.inaccurate_component)
        if flagged:
            top_label = max(FEEDBACK_COMPONENT_TO_WEIGHT, key=lambda label: flagged[label])
            proposed = shift_weight_from(
                current,
                FEEDBACK_COMPONENT_TO_WEIGHT[top_label],
                points=float(get_scoring_value("tuning.shift_points", 5)),
                floor=float(get_scoring_value("weights.min_component", 5)),
            )
        else:
            top_label = None
            proposed = renormalize_weights(current)

        total = len(records)
        config = WeightConfiguration(
            name=f"Feedback tuned {role or 'global'} {end.date().isoformat()}",
            weights=proposed,
            role=role,
            created_at=end,
            status=ConfigStatus.PROPOSED,
            performance=ConfigPerformance(
                avg_rating=round(sum(record.rating for record in records) / total, 2),
                feedback_count=total,
                accuracy_score=round((1 - sum(flagged.values()) / total) * 100, 2),
            ),
        )
        await asyncio.to_thread(self._configs.save, config)
        logger.info(
            "weight_config_proposed id=%s role=%s feedback=%s shifted_from=%s",
            config.id,
            role or "global",
            total,
            top_label and FEEDBACK_COMPONENT_TO_WEIGHT[top_label],
        )
        return config

    async def _require(self, config_id: str) -> WeightConfiguration:
        config = await asyncio.to_thread(self._configs.get, config_id)
        if config is None:
            raise ConfigurationNotFoundError(config_id)
        return config

    @staticmethod
    def _checked_weights(config: WeightConfiguration) -> WeightProfile:
        weights = renormalize_weights(config.weights)
        if not weights_sum_to_total(weights):
            raise ConfigurationIntegrityError(f"configuration '{config.id}' weights sum to {weights.total()}")
        return weights

    async def validate_weight_configuration(self, config_id: str) -> WeightConfiguration:
        """Run the final renormalization pass; only a proposed configuration changes state."""
        config = await self._require(config_id)
        weights = self._checked_weights(config)
        if config.status != ConfigStatus.PROPOSED:
            return config

        validated = await asyncio.to_thread(self._configs.mark_validated, config_id, weights)
        logger.info("weight_config_validated id=%s status=%s", config_id, validated.status.value)
        return validated

    async def activate_weight_configuration(self, config_id: str) -> WeightConfiguration:
        config = await self._require(config_id)
        if config.active:
            return config
        if config.status == ConfigStatus.PROPOSED:
            config = await self.validate_weight_configuration(config_id)

        # every promotion, including rollback of a superseded config, gets the integrity check
        weights = self._checked_weights(config)
        activated = await asyncio.to_thread(self._configs.activate, config_id, weights)
        logger.info("weight_config_activated id=%s role=%s", config_id, activated.role or "global")
        return activated

    async def get_active_configuration(self, role: str | None = None) -> WeightConfiguration | None:
        if role is not None:
            config = await asyncio.to_thread(self._configs.get_active, role)
            if config is not None:
                return config
        return await asyncio.to_thread(self._configs.get_active, None)

    async def list_configurations(self, role: str | None = None) -> list[WeightConfiguration]:
        return await asyncio.to_thread(self._configs.list_configurations, role)
