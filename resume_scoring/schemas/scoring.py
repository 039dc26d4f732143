from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Mapping

from pydantic import BaseModel, Field, field_validator, model_validator

from .keywords import JDMatchResult

COMPONENTS: tuple[str, ...] = (
    "content_quality",
    "ats_compatibility",
    "format_structure",
    "impact_metrics",
)

Confidence = Literal["low", "medium", "high"]
Priority = Literal["high", "medium", "low"]
Severity = Literal["error", "warning", "info"]
WeightsSource = Literal["role_profile", "adaptive", "custom"]
OutputSource = Literal["ai", "template"]
ScoreModel = Literal["pro", "three_axis"]


class WeightProfile(BaseModel):
    content_quality: float
    ats_compatibility: float
    format_structure: float
    impact_metrics: float

    @field_validator("content_quality", "ats_compatibility", "format_structure", "impact_metrics")
    @classmethod
    def _validate_non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("component weights must be non-negative")
        return value

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "WeightProfile":
        return cls(**{name: float(values.get(name, 0.0)) for name in COMPONENTS})

    def as_dict(self) -> dict[str, float]:
        return {name: float(getattr(self, name)) for name in COMPONENTS}

    def total(self) -> float:
        return sum(self.as_dict().values())


class ComponentScore(BaseModel):
    score: float
    max: float = 100.0
    weight: float | None = None
    weighted_contribution: float | None = None
    breakdown: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_bounds(self) -> "ComponentScore":
        if self.max <= 0:
            raise ValueError("max must be positive")
        if self.score < 0 or self.score > self.max:
            raise ValueError(f"score must be between 0 and {self.max}")
        return self


class ThreeAxisScore(BaseModel):
    structure: ComponentScore
    content: ComponentScore
    tailoring: ComponentScore
    overall: int
    breakdown: dict[str, Any] = Field(default_factory=dict)


class FormatIssue(BaseModel):
    severity: Severity
    issue: str
    penalty: int
    fix: str | None = None


class ATSPassPrediction(BaseModel):
    probability: int
    confidence: Confidence
    reasoning: str
    risk_factors: list[str] = Field(default_factory=list)


class KeywordTierGap(BaseModel):
    found: int
    total: int
    missing: list[str] = Field(default_factory=list)
    found_keywords: list[str] = Field(default_factory=list)


class KeywordGapAnalysis(BaseModel):
    role: str
    must_have: KeywordTierGap
    important: KeywordTierGap
    nice_to_have: KeywordTierGap
    keyword_frequency: dict[str, int] = Field(default_factory=dict)


class ImprovementAction(BaseModel):
    action: str
    points_gain: float
    time_minutes: int
    priority: Priority = "low"
    category: str


class ImprovementRoadmap(BaseModel):
    to_reach_80: list[ImprovementAction] = Field(default_factory=list)
    to_reach_90: list[ImprovementAction] = Field(default_factory=list)
    quick_wins: list[ImprovementAction] = Field(default_factory=list)


class ResumeStats(BaseModel):
    total_words: int
    total_bullets: int
    page_count: int
    years_experience: int


class AISummary(BaseModel):
    summary: str
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    ai_final_score: int | None = None


class ScoringOptions(BaseModel):
    job_role: str = "General"
    job_description: str | None = None
    score_model: ScoreModel = "pro"
    include_ai_insights: bool = False
    include_suggestions: bool = True
    use_adaptive_weights: bool = False
    adaptive_variance: float = 0.1
    custom_weights: WeightProfile | None = None

    @field_validator("job_role")
    @classmethod
    def _normalize_job_role(cls, value: str) -> str:
        cleaned = " ".join(value.split())
        return cleaned or "General"


class ScoringMetadata(BaseModel):
    job_role: str
    processing_time_ms: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    weights_source: WeightsSource
    weight_configuration_id: str | None = None
    suggestions_source: OutputSource | None = None
    insights_source: OutputSource | None = None
    features: dict[str, bool] = Field(default_factory=dict)
    resume_stats: ResumeStats


class ScoringResult(BaseModel):
    overall_score: int
    grade: str
    score_model: ScoreModel = "pro"
    component_scores: dict[str, ComponentScore]
    three_axis: ThreeAxisScore
    weights_used: WeightProfile
    ats_pass_prediction: ATSPassPrediction
    keyword_gaps: KeywordGapAnalysis
    format_issues: list[FormatIssue] = Field(default_factory=list)
    improvement_roadmap: ImprovementRoadmap
    jd_match: JDMatchResult | None = None
    ai_summary: AISummary | None = None
    ai_suggestions: list[str] | None = None
    metadata: ScoringMetadata
