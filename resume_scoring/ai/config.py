import os
from dataclasses import dataclass

from resume_scoring.core.config import settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    timeout_s: float
    enabled: bool


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def load_ai_config() -> AIConfig:
    return AIConfig(
        provider=settings.ai_provider,
        model=settings.ai_model,
        timeout_s=settings.ai_timeout_s,
        enabled=settings.ai_enabled,
    )


def ai_available(cfg: AIConfig | None = None) -> bool:
    cfg = cfg or load_ai_config()
    if not cfg.enabled:
        return False
    if cfg.provider != "openai":
        return False
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    return bool(api_key) and not _looks_like_placeholder(api_key)
