from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .scoring import WeightProfile

InaccurateComponent = Literal["content", "ats", "format", "impact"]

# Feedback names a component by its short label; weights use the long name.
FEEDBACK_COMPONENT_TO_WEIGHT: dict[str, str] = {
    "content": "content_quality",
    "ats": "ats_compatibility",
    "format": "format_structure",
    "impact": "impact_metrics",
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ConfigStatus(str, Enum):
    PROPOSED = "proposed"
    VALIDATED = "validated"
    ACTIVE = "active"
    SUPERSEDED = "superseded"


class FeedbackRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    feedback_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    resume_id: str
    job_role: str
    score: int
    component_scores: dict[str, float] = Field(default_factory=dict)
    rating: int
    helpful: bool
    comment: str | None = None
    inaccurate_component: InaccurateComponent | None = None
    expected_score: int | None = None
    timestamp: datetime = Field(default_factory=_utc_now)

    @field_validator("rating")
    @classmethod
    def _validate_rating(cls, value: int) -> int:
        if value < 1 or value > 5:
            raise ValueError("rating must be between 1 and 5")
        return value

    @field_validator("score")
    @classmethod
    def _validate_score(cls, value: int) -> int:
        if value < 0 or value > 100:
            raise ValueError("score must be between 0 and 100")
        return value

    @field_validator("expected_score")
    @classmethod
    def _validate_expected_score(cls, value: int | None) -> int | None:
        if value is not None and (value < 0 or value > 100):
            raise ValueError("expected_score must be between 0 and 100")
        return value

    @field_validator("comment")
    @classmethod
    def _strip_comment(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return _as_utc(value)


class ConfigPerformance(BaseModel):
    avg_rating: float
    feedback_count: int
    # percentage 0-100 of feedback that flagged no component, same scale as helpful_percentage
    accuracy_score: float = Field(ge=0, le=100)


class WeightConfiguration(BaseModel):
    id: str = Field(default_factory=lambda: f"config_{uuid.uuid4().hex[:12]}")
    name: str
    weights: WeightProfile
    role: str | None = None
    created_at: datetime = Field(default_factory=_utc_now)
    status: ConfigStatus = ConfigStatus.PROPOSED
    performance: ConfigPerformance | None = None

    @field_validator("created_at")
    @classmethod
    def _normalize_created_at(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @property
    def active(self) -> bool:
        return self.status == ConfigStatus.ACTIVE


class AnalyticsPeriod(BaseModel):
    start: datetime
    end: datetime


class ComponentAccuracy(BaseModel):
    complaint_count: int = 0
    complaint_rate: float = 0.0


class ScoreAccuracy(BaseModel):
    samples: int = 0
    avg_difference: float = 0.0
    overestimation_rate: float = 0.0
    underestimation_rate: float = 0.0


class ThemeCount(BaseModel):
    theme: str
    count: int


class FeedbackAnalytics(BaseModel):
    period: AnalyticsPeriod
    total_feedback: int = 0
    avg_rating: float = 0.0
    helpful_percentage: float = 0.0
    inaccurate_component_counts: dict[str, int] = Field(default_factory=dict)
    component_accuracy: dict[str, ComponentAccuracy] = Field(default_factory=dict)
    score_accuracy: ScoreAccuracy = Field(default_factory=ScoreAccuracy)
    common_themes: list[ThemeCount] = Field(default_factory=list)
