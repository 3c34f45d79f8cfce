import asyncio
import logging
from typing import List, Optional

from google import genai
from google.genai import types

from app.config import get_settings
from app.exceptions import UpstreamModelError, UpstreamTimeoutError
from app.models import Record
from app.prompts import (
    ANALYSIS_FALLBACK,
    CHAT_FALLBACK,
    analysis_system_prompt,
    analysis_user_prompt,
    chat_system_prompt,
    fatigue_label,
)

logger = logging.getLogger(__name__)


def format_records(records: List[Record]) -> str:
    """One line per record: ``2025-09-01: Condition Okay (slept badly)``."""
    return "\n".join(
        f"{r.date.isoformat()}: Condition {fatigue_label(r.fatigue)} ({r.notes or 'No notes'})"
        for r in records
    )


class GeminiProvider:
    """Gemini provider using the google-genai SDK."""

    def __init__(self, api_key: Optional[str] = None, timeout_seconds: Optional[float] = None):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.timeout_seconds = timeout_seconds or settings.llm_timeout_seconds
        self._client = None

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise UpstreamModelError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def complete(
        self,
        prompt: str,
        model: str,
        system_instruction: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> Optional[str]:
        """
        Single-turn completion.

        Returns the first candidate's text, or None when the response has no
        text. No retries: failures raise UpstreamModelError and timeouts raise
        UpstreamTimeoutError.
        """
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
            max_output_tokens=max_tokens,
            candidate_count=1,
        )
        contents = [
            types.Content(role="user", parts=[types.Part.from_text(text=prompt)])
        ]

        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=model,
                    contents=contents,
                    config=config,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning("Gemini call to %s timed out after %ss", model, self.timeout_seconds)
            raise UpstreamTimeoutError("model") from e
        except UpstreamModelError:
            raise
        except Exception as e:
            logger.error("Gemini error from %s: %s", model, e)
            raise UpstreamModelError(str(e)) from e

        if not response.candidates:
            return None

        cand = response.candidates[0]
        if not cand.content or not cand.content.parts:
            return None

        text = "".join(part.text for part in cand.content.parts if part.text)
        return text or None


class LLMService:
    """Domain-level prompts and sampling parameters on top of the provider."""

    def __init__(self, provider: Optional[GeminiProvider] = None):
        self.settings = get_settings()
        self.provider = provider or GeminiProvider()

    async def analyze_records(self, records: List[Record]) -> str:
        """Natural-language analysis of a list of daily records."""
        text = await self.provider.complete(
            analysis_user_prompt(format_records(records)),
            model=self.settings.analysis_model,
            system_instruction=analysis_system_prompt(),
            temperature=self.settings.analysis_temperature,
            max_tokens=self.settings.analysis_max_tokens,
        )
        return text or ANALYSIS_FALLBACK

    async def chat_reply(self, message: str) -> str:
        """Reply to one free-text chat message."""
        text = await self.provider.complete(
            message,
            model=self.settings.chat_model,
            system_instruction=chat_system_prompt(),
            temperature=self.settings.chat_temperature,
            max_tokens=self.settings.chat_max_tokens,
        )
        return text or CHAT_FALLBACK
