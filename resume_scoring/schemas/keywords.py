from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

MatchStatus = Literal["matched", "missing", "underrepresented"]


class KeywordScore(BaseModel):
    term: str
    frequency: int = Field(ge=0)
    score: float = Field(ge=0.0)


class PhraseFrequency(BaseModel):
    phrase: str
    frequency: int = Field(ge=1)


class FrequencyComparison(BaseModel):
    keyword: str
    jd_score: float
    resume_score: float
    status: MatchStatus


class KeywordAnalysis(BaseModel):
    total_jd_keywords: int = Field(ge=0)
    matched_keywords: int = Field(ge=0)
    match_ratio: float
    frequency_comparison: list[FrequencyComparison] = Field(default_factory=list)

    @field_validator("match_ratio")
    @classmethod
    def _validate_match_ratio(cls, value: float) -> float:
        if value < 0.0 or value > 1.0:
            raise ValueError("match_ratio must be between 0 and 1")
        return value


class JDMatchResult(BaseModel):
    match_score: int
    missing_critical: list[str] = Field(default_factory=list)
    underrepresented: list[str] = Field(default_factory=list)
    irrelevant: list[str] = Field(default_factory=list)
    keyword_analysis: KeywordAnalysis

    @field_validator("match_score")
    @classmethod
    def _validate_match_score(cls, value: int) -> int:
        if value < 0 or value > 100:
            raise ValueError("match_score must be between 0 and 100")
        return value

    @model_validator(mode="after")
    def _validate_bucket_accounting(self) -> "JDMatchResult":
        analysis = self.keyword_analysis
        if analysis.matched_keywords != analysis.total_jd_keywords - len(self.missing_critical):
            raise ValueError("matched_keywords must equal total_jd_keywords minus missing_critical")
        return self


class IndustryTerms(BaseModel):
    technical: list[str] = Field(default_factory=list)
    soft_skills: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
