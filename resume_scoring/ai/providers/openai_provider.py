from __future__ import annotations

import json
import logging
import os
import time
from typing import Any, Optional, Sequence

from openai import AsyncOpenAI

from resume_scoring.ai.types import ChatMessage
from resume_scoring.core.errors import ExternalCallError

logger = logging.getLogger(__name__)


class OpenAIProvider:
    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: float = 20.0,
        max_retries: int = 2,
    ):
        self._model = model
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=float(os.getenv("OPENAI_TIMEOUT_S", str(timeout_s))),
            max_retries=int(os.getenv("OPENAI_MAX_RETRIES", str(max_retries))),
        )

    @property
    def model(self) -> str:
        return self._model

    async def complete_json(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.2,
        max_output_tokens: int = 900,
    ) -> dict[str, Any]:
        payload = [{"role": m.role, "content": m.content} for m in messages]
        started = time.perf_counter()
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=payload,
                temperature=temperature,
                response_format={"type": "json_object"},
                max_tokens=max_output_tokens,
            )
        except Exception as exc:  # noqa: BLE001 - callers fall back on ExternalCallError
            logger.warning("ai_json_failed model=%s prompt_len=%s: %s", self._model, len(payload), exc)
            raise ExternalCallError(f"AI request failed: {exc}", code="ai_unavailable") from exc

        content = response.choices[0].message.content if response.choices else ""
        latency_ms = int((time.perf_counter() - started) * 1000)
        if not content:
            logger.warning("ai_json_empty model=%s latency_ms=%s", self._model, latency_ms)
            raise ExternalCallError("AI returned an empty response", code="ai_invalid")

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as exc:
            logger.warning("ai_json_invalid model=%s latency_ms=%s: %s", self._model, latency_ms, exc)
            raise ExternalCallError("AI returned malformed JSON", code="ai_invalid") from exc

        if not isinstance(parsed, dict):
            raise ExternalCallError("AI returned JSON that is not an object", code="ai_invalid")

        logger.debug("ai_json_ok model=%s latency_ms=%s", self._model, latency_ms)
        return parsed

