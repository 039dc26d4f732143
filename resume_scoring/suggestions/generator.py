from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Sequence

from resume_scoring.ai.types import AIClient
from resume_scoring.core.config import settings
from resume_scoring.core.errors import ExternalCallError
from resume_scoring.schemas.scoring import ComponentScore, OutputSource

from .ai_strategy import AISuggestionStrategy, request_ai_insights
from .base import InsightsOutcome, SuggestionOutcome, SuggestionStrategy
from .templates import TemplateSuggestionStrategy, build_template_insights

logger = logging.getLogger(__name__)


class FallbackSuggestionStrategy:
    """Try `primary` under a timeout and use `fallback` on timeout or failure."""

    def __init__(
        self,
        primary: SuggestionStrategy | None,
        fallback: SuggestionStrategy | None = None,
        *,
        timeout_s: float | None = None,
    ):
        self._primary = primary
        self._fallback = fallback or TemplateSuggestionStrategy()
        self._timeout_s = settings.ai_timeout_s if timeout_s is None else timeout_s

    @property
    def name(self) -> OutputSource:
        return self._primary.name if self._primary is not None else self._fallback.name

    async def generate(
        self,
        resume_text: str,
        job_description: str,
        missing_keywords: Sequence[str],
    ) -> SuggestionOutcome:
        if self._primary is not None:
            try:
                suggestions = await asyncio.wait_for(
                    self._primary.suggest(resume_text, job_description, missing_keywords),
                    timeout=self._timeout_s,
                )
                return SuggestionOutcome(suggestions=suggestions, source=self._primary.name)
            except asyncio.TimeoutError:
                logger.warning("suggestions_primary_timeout timeout_s=%s", self._timeout_s)
            except ExternalCallError as exc:
                logger.warning("suggestions_primary_failed code=%s: %s", exc.code, exc)
            except Exception as exc:  # noqa: BLE001 - deterministic fallback is expected
                logger.warning("suggestions_primary_error: %s", exc)

        suggestions = await self._fallback.suggest(resume_text, job_description, missing_keywords)
        return SuggestionOutcome(suggestions=suggestions, source=self._fallback.name)

    async def suggest(
        self,
        resume_text: str,
        job_description: str,
        missing_keywords: Sequence[str],
    ) -> list[str]:
        outcome = await self.generate(resume_text, job_description, missing_keywords)
        return outcome.suggestions


async def generate_phrase_suggestions(
    resume_text: str,
    job_description: str,
    missing_keywords: Sequence[str],
    *,
    ai_client: AIClient | None = None,
    timeout_s: float | None = None,
) -> SuggestionOutcome:
    primary = AISuggestionStrategy(ai_client) if ai_client is not None else None
    strategy = FallbackSuggestionStrategy(primary, timeout_s=timeout_s)
    return await strategy.generate(resume_text, job_description, missing_keywords)


async def generate_insights(
    *,
    resume_text: str,
    job_role: str,
    overall_score: int,
    component_scores: Mapping[str, ComponentScore],
    missing_keywords: Sequence[str] = (),
    improvement_actions: Sequence[str] = (),
    ai_client: AIClient | None = None,
    timeout_s: float | None = None,
) -> InsightsOutcome:
    timeout = settings.ai_timeout_s if timeout_s is None else timeout_s
    if ai_client is not None:
        try:
            summary, suggestions = await asyncio.wait_for(
                request_ai_insights(
                    ai_client,
                    resume_text=resume_text,
                    job_role=job_role,
                    overall_score=overall_score,
                    component_scores=component_scores,
                    missing_keywords=missing_keywords,
                ),
                timeout=timeout,
            )
            return InsightsOutcome(summary=summary, source="ai", improvement_suggestions=suggestions)
        except asyncio.TimeoutError:
            logger.warning("insights_ai_timeout timeout_s=%s", timeout)
        except ExternalCallError as exc:
            logger.warning("insights_ai_failed code=%s: %s", exc.code, exc)
        except Exception as exc:  # noqa: BLE001 - deterministic fallback is expected
            logger.warning("insights_ai_error: %s", exc)

    summary, suggestions = build_template_insights(
        job_role=job_role,
        overall_score=overall_score,
        component_scores=component_scores,
        improvement_actions=improvement_actions,
    )
    return InsightsOutcome(summary=summary, source="template", improvement_suggestions=suggestions)
