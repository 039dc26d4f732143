from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    ai_enabled: bool
    ai_provider: str
    ai_model: str
    ai_timeout_s: float
    feedback_db_path: str
    tuning_min_feedback: int
    tuning_window_days: int
    scoring_config_path: str | None


def load_settings() -> Settings:
    return Settings(
        log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        ai_enabled=_get_env_bool("AI_ENABLED", True),
        ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
        ai_model=(_get_env("AI_MODEL", "gpt-4o-mini") or "gpt-4o-mini").strip(),
        ai_timeout_s=_get_env_float("AI_TIMEOUT_S", 20.0),
        feedback_db_path=_get_env("FEEDBACK_DB_PATH", "data/feedback.db") or "data/feedback.db",
        tuning_min_feedback=_get_env_int("TUNING_MIN_FEEDBACK", 50),
        tuning_window_days=_get_env_int("TUNING_WINDOW_DAYS", 30),
        scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
    )


settings = load_settings()
