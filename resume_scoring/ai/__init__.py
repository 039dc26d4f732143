from .config import AIConfig, ai_available, load_ai_config
from .factory import get_ai_client
from .types import AIClient, ChatMessage

__all__ = ["AIConfig", "AIClient", "ChatMessage", "ai_available", "get_ai_client", "load_ai_config"]
