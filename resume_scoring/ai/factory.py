from resume_scoring.ai.config import AIConfig, load_ai_config
from resume_scoring.ai.types import AIClient

from resume_scoring.ai.providers.openai_provider import OpenAIProvider


def get_ai_client(cfg: AIConfig | None = None) -> AIClient:
    cfg = cfg or load_ai_config()

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model, timeout_s=cfg.timeout_s)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
