import os
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["AI_ENABLED"] = "0"

from resume_scoring.ai import AIConfig, ChatMessage, ai_available, get_ai_client  # noqa: E402
from resume_scoring.ai.providers.openai_provider import OpenAIProvider  # noqa: E402
from resume_scoring.core.errors import ExternalCallError  # noqa: E402


def _completions(content=None, exc=None):
    async def create(**kwargs):
        if exc is not None:
            raise exc
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


class AIConfigTests(unittest.TestCase):
    def test_ai_available_requires_enabled_provider_and_real_key(self):
        enabled = AIConfig(provider="openai", model="gpt-4o-mini", timeout_s=5, enabled=True)
        with mock.patch.dict(os.environ, {"OPENAI_API_KEY": "sk-live"}):
            self.assertTrue(ai_available(enabled))
            self.assertFalse(ai_available(AIConfig("openai", "gpt-4o-mini", 5, False)))
            self.assertFalse(ai_available(AIConfig("other", "model", 5, True)))
        with mock.patch.dict(os.environ, {"OPENAI_API_KEY": "your_key_here"}):
            self.assertFalse(ai_available(enabled))

    def test_factory_rejects_unknown_provider(self):
        with self.assertRaises(ValueError):
            get_ai_client(AIConfig(provider="other", model="model", timeout_s=5, enabled=True))


class OpenAIProviderTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.provider = OpenAIProvider(model="gpt-4o-mini", api_key="sk-test")
        self.messages = [ChatMessage(role="user", content="Return JSON")]

    async def test_parses_json_object(self):
        self.provider._client = _completions('{"suggestions": ["Add metrics"]}')
        payload = await self.provider.complete_json(self.messages)
        self.assertEqual(payload, {"suggestions": ["Add metrics"]})

    async def test_transport_errors_become_external_call_errors(self):
        self.provider._client = _completions(exc=RuntimeError("connection reset"))
        with self.assertRaises(ExternalCallError) as ctx:
            await self.provider.complete_json(self.messages)
        self.assertEqual(ctx.exception.code, "ai_unavailable")

    async def test_invalid_payloads_are_rejected(self):
        for content in ("", "not json", "[1, 2]"):
            self.provider._client = _completions(content)
            with self.assertRaises(ExternalCallError) as ctx:
                await self.provider.complete_json(self.messages)
            self.assertEqual(ctx.exception.code, "ai_invalid", content)


if __name__ == "__main__":
    unittest.main()
