from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Sequence

from resume_scoring.ai.types import AIClient, ChatMessage
from resume_scoring.core.errors import ExternalCallError
from resume_scoring.schemas.scoring import AISummary, ComponentScore, OutputSource

logger = logging.getLogger(__name__)

MAX_PROMPT_CHARS = 12000
MAX_SUGGESTIONS = 8

_SUGGESTION_SYSTEM_PROMPT = (
    "You are an expert resume coach. Given a resume, a job description and the job keywords "
    "missing from the resume, return JSON of the form {\"suggestions\": [string, ...]} with at most "
    f"{MAX_SUGGESTIONS} short, specific, actionable edits ordered by impact. Return JSON only."
)
_INSIGHTS_SYSTEM_PROMPT = (
    "You are an expert resume analyst. Review the locally computed scores and the resume text and "
    "return JSON with keys ai_final_score (integer 0-100), summary (string), strengths (list of "
    "strings), weaknesses (list of strings) and improvement_suggestions (list of strings). "
    "Return JSON only."
)


def truncate_prompt(prompt: str, max_chars: int = MAX_PROMPT_CHARS) -> str:
    """Cut at a paragraph break near the limit when there is one, otherwise hard-cut."""
    if len(prompt) <= max_chars:
        return prompt
    truncated = prompt[:max_chars]
    last_break = truncated.rfind("\n\n")
    if last_break > max_chars * 0.8:
        return truncated[:last_break] + "\n\n[Content truncated for length...]"
    return truncated + "\n[Content truncated...]"


def _string_list(value: Any, limit: int) -> list[str]:
    if not isinstance(value, list):
        return []
    items = [str(item).strip() for item in value if isinstance(item, (str, int, float))]
    return [item for item in items if item][:limit]


class AISuggestionStrategy:
    name: OutputSource = "ai"

    def __init__(self, client: AIClient, *, temperature: float = 0.3):
        self._client = client
        self._temperature = temperature

    async def suggest(
        self,
        resume_text: str,
        job_description: str,
        missing_keywords: Sequence[str],
    ) -> list[str]:
        prompt = truncate_prompt(
            f"Missing keywords: {', '.join(missing_keywords) or 'none'}\n\n"
            f"Job description:\n{job_description}\n\n"
            f"Resume:\n{resume_text}"
        )
        payload = await self._client.complete_json(
            [
                ChatMessage(role="system", content=_SUGGESTION_SYSTEM_PROMPT),
                ChatMessage(role="user", content=prompt),
            ],
            temperature=self._temperature,
        )
        suggestions = _string_list(payload.get("suggestions"), MAX_SUGGESTIONS)
        if not suggestions:
            raise ExternalCallError("AI response contained no suggestions", code="ai_invalid")
        return suggestions


async def request_ai_insights(
    client: AIClient,
    *,
    resume_text: str,
    job_role: str,
    overall_score: int,
    component_scores: Mapping[str, ComponentScore],
    missing_keywords: Sequence[str] = (),
) -> tuple[AISummary, list[str]]:
    scores = {name: round(score.score) for name, score in component_scores.items()}
    prompt = truncate_prompt(
        f"Target role: {job_role}\n"
        f"Local overall score: {overall_score}\n"
        f"Component scores: {json.dumps(scores)}\n"
        f"Missing keywords: {', '.join(missing_keywords) or 'none'}\n\n"
        f"Resume:\n{resume_text}"
    )
    payload = await client.complete_json(
        [
            ChatMessage(role="system", content=_INSIGHTS_SYSTEM_PROMPT),
            ChatMessage(role="user", content=prompt),
        ],
        temperature=0.3,
    )

    summary = str(payload.get("summary") or "").strip()
    if not summary:
        raise ExternalCallError("AI response contained no summary", code="ai_invalid")

    final_score = payload.get("ai_final_score")
    try:
        final_score = max(0, min(100, int(final_score))) if final_score is not None else None
    except (TypeError, ValueError):
        logger.debug("ai_insights_score_unparsed value=%r", final_score)
        final_score = None

    return (
        AISummary(
            summary=summary,
            strengths=_string_list(payload.get("strengths"), 6),
            weaknesses=_string_list(payload.get("weaknesses"), 6),
            ai_final_score=final_score,
        ),
        _string_list(payload.get("improvement_suggestions"), MAX_SUGGESTIONS),
    )
