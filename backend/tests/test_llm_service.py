import asyncio
import unittest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import helpers  # noqa: F401

from app.config import get_settings
from app.exceptions import UpstreamModelError, UpstreamTimeoutError
from app.models import Record
from app.prompts import ANALYSIS_FALLBACK, CHAT_FALLBACK, fatigue_label
from app.services.llm_service import GeminiProvider, LLMService, format_records


def fake_response(*texts):
    parts = [MagicMock(text=t) for t in texts]
    candidate = MagicMock()
    candidate.content.parts = parts
    response = MagicMock()
    response.candidates = [candidate]
    return response


class FormatRecordsTests(unittest.TestCase):
    def test_one_line_per_record(self):
        records = [
            Record(user_id="u1", date=date(2025, 9, 1), fatigue=1, notes="headache"),
            Record(user_id="u1", date=date(2025, 9, 2), fatigue=5, notes=None),
        ]
        self.assertEqual(
            format_records(records),
            "2025-09-01: Condition Very Bad (headache)\n"
            "2025-09-02: Condition Very Good (No notes)",
        )

    def test_label_falls_back_to_number(self):
        self.assertEqual(fatigue_label(3), "Okay")
        self.assertEqual(fatigue_label(8), "8")


class GeminiProviderTests(unittest.TestCase):
    def make_provider(self, generate, timeout=1.0):
        provider = GeminiProvider(api_key="dummy", timeout_seconds=timeout)
        provider._client = MagicMock()
        provider._client.aio.models.generate_content = generate
        return provider

    def test_returns_joined_text_of_first_candidate(self):
        generate = AsyncMock(return_value=fake_response("Hello ", "there"))
        provider = self.make_provider(generate)

        text = asyncio.run(provider.complete(
            "hi", model="m", system_instruction="be kind", temperature=0.3, max_tokens=42
        ))

        self.assertEqual(text, "Hello there")
        kwargs = generate.await_args.kwargs
        self.assertEqual(kwargs["model"], "m")
        self.assertEqual(kwargs["config"].temperature, 0.3)
        self.assertEqual(kwargs["config"].max_output_tokens, 42)

    def test_empty_response_returns_none(self):
        response = MagicMock()
        response.candidates = []
        provider = self.make_provider(AsyncMock(return_value=response))

        self.assertIsNone(asyncio.run(provider.complete("hi", model="m")))

    def test_provider_failure_is_wrapped(self):
        provider = self.make_provider(AsyncMock(side_effect=RuntimeError("quota exceeded")))

        with self.assertRaises(UpstreamModelError) as ctx:
            asyncio.run(provider.complete("hi", model="m"))

        self.assertEqual(ctx.exception.to_dict()["details"], "quota exceeded")

    def test_slow_provider_times_out(self):
        async def slow(**kwargs):
            await asyncio.sleep(1)

        provider = self.make_provider(slow, timeout=0.01)

        with self.assertRaises(UpstreamTimeoutError) as ctx:
            asyncio.run(provider.complete("hi", model="m"))

        self.assertEqual(ctx.exception.service, "model")

    def test_missing_api_key(self):
        provider = GeminiProvider(api_key="")
        with self.assertRaises(UpstreamModelError):
            asyncio.run(provider.complete("hi", model="m"))


class LLMServiceTests(unittest.TestCase):
    def setUp(self):
        self.provider = MagicMock()
        self.service = LLMService(provider=self.provider)
        self.settings = get_settings()

    def test_analysis_uses_analysis_sampling(self):
        self.provider.complete = AsyncMock(return_value="Looks fine.")
        records = [Record(user_id="u1", date=date(2025, 9, 1), fatigue=3, notes=None)]

        result = asyncio.run(self.service.analyze_records(records))

        self.assertEqual(result, "Looks fine.")
        args, kwargs = self.provider.complete.await_args
        self.assertIn("2025-09-01: Condition Okay (No notes)", args[0])
        self.assertEqual(kwargs["model"], self.settings.analysis_model)
        self.assertEqual(kwargs["max_tokens"], self.settings.analysis_max_tokens)
        self.assertEqual(kwargs["temperature"], self.settings.analysis_temperature)

    def test_analysis_fallback(self):
        self.provider.complete = AsyncMock(return_value=None)
        self.assertEqual(asyncio.run(self.service.analyze_records([])), ANALYSIS_FALLBACK)

    def test_chat_uses_chat_sampling_and_fallback(self):
        self.provider.complete = AsyncMock(return_value=None)

        self.assertEqual(asyncio.run(self.service.chat_reply("hello")), CHAT_FALLBACK)
        args, kwargs = self.provider.complete.await_args
        self.assertEqual(args[0], "hello")
        self.assertEqual(kwargs["model"], self.settings.chat_model)
        self.assertEqual(kwargs["max_tokens"], self.settings.chat_max_tokens)
        self.assertEqual(kwargs["temperature"], self.settings.chat_temperature)


if __name__ == "__main__":
    unittest.main()
