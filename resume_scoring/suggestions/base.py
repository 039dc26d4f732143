from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from resume_scoring.schemas.scoring import AISummary, OutputSource


class SuggestionStrategy(Protocol):
    name: OutputSource

    async def suggest(
        self,
        resume_text: str,
        job_description: str,
        missing_keywords: Sequence[str],
    ) -> list[str]:
        """Return an ordered list of actionable suggestions."""


@dataclass(frozen=True)
class SuggestionOutcome:
    suggestions: list[str]
    source: OutputSource


@dataclass(frozen=True)
class InsightsOutcome:
    summary: AISummary
    source: OutputSource
    improvement_suggestions: list[str] = field(default_factory=list)
