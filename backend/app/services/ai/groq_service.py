"""
Groq index builder - secondary language-model tier.

Talks to Groq's OpenAI-compatible chat-completions endpoint and walks an
ordered list of models: a decommissioned/unknown model or a 429 moves on to
the next model, anything else fails the whole tier.

API docs: https://console.groq.com/docs/api-reference
"""
import asyncio
import json
from typing import Optional, List, Tuple

import aiohttp
from loguru import logger

from app.config import get_settings
from app.services.ai.base import (
    AIAnalysisError,
    RateLimitError,
    ModelUnavailableError,
    IndexProposal,
    ResponseParser,
)
from app.services.ai.prompts import SYSTEM_PROMPT_INDEX_BUILDER, build_index_prompt

GROQ_CHAT_URL = "https://api.groq.com/openai/v1/chat/completions"

# Error-body fragments that mean "this model is gone, try another"
MODEL_UNAVAILABLE_MARKERS = (
    "decommissioned",
    "model_decommissioned",
    "model_not_found",
    "does not exist",
    "not found",
)


def _error_message(body: str) -> str:
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return body or ""
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return " ".join(str(error.get(k, "")) for k in ("code", "type", "message"))
    return body


class GroqIndexService:
    """Proposes index constituents through Groq, rotating across models."""

    name = "groq"

    def __init__(self, settings=None, models: Optional[List[str]] = None):
        self.settings = settings or get_settings()
        self.api_key = self.settings.GROQ_API_KEY
        self.models = list(models or self.settings.GROQ_MODELS)
        self.parser = ResponseParser()
        self._session: Optional[aiohttp.ClientSession] = None

    def is_available(self) -> bool:
        return bool(self.api_key) and bool(self.models)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.AI_PROVIDER_TIMEOUT_SECONDS)
            )
        return self._session

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    async def _post(self, model: str, prompt: str) -> Tuple[int, str]:
        """POST one chat completion; returns (status, raw body)."""
        session = await self._get_session()
        payload = {
            "model": model,
            "temperature": 0.3,
            "max_tokens": 2048,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT_INDEX_BUILDER},
                {"role": "user", "content": prompt},
            ],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        async with session.post(GROQ_CHAT_URL, json=payload, headers=headers) as resp:
            return resp.status, await resp.text()

    async def _complete(self, model: str, prompt: str) -> str:
        """Completion text for one model, or a typed failure."""
        try:
            status, body = await self._post(model, prompt)
        except asyncio.TimeoutError as e:
            raise AIAnalysisError(f"Groq request timed out for {model}") from e
        except aiohttp.ClientError as e:
            raise AIAnalysisError(f"Groq request failed for {model}: {e}") from e

        if status == 429:
            raise RateLimitError()

        if status in (400, 404):
            message = _error_message(body)
            if any(marker in message.lower() for marker in MODEL_UNAVAILABLE_MARKERS):
                raise ModelUnavailableError(model, message.strip())
            raise AIAnalysisError(f"Groq rejected request ({status}): {message.strip()}")

        if status != 200:
            raise AIAnalysisError(f"Groq returned status {status}")

        try:
            data = json.loads(body)
            return data["choices"][0]["message"]["content"]
        except (json.JSONDecodeError, KeyError, IndexError, TypeError) as e:
            raise AIAnalysisError(f"Unexpected Groq payload: {e}") from e

    async def propose(self, prompt: str) -> IndexProposal:
        if not self.is_available():
            raise AIAnalysisError("Groq service not available")

        user_prompt = build_index_prompt(prompt)
        for model in self.models:
            try:
                text = await self._complete(model, user_prompt)
            except (ModelUnavailableError, RateLimitError) as e:
                logger.warning(f"Groq model {model} skipped: {e}")
                continue

            logger.info(f"Groq model {model} answered")
            return self.parser.parse_index_proposal(text, source=f"{self.name}:{model}")

        raise AIAnalysisError(f"No Groq model available (tried {', '.join(self.models)})")


_groq_service: Optional[GroqIndexService] = None


def get_groq_service() -> GroqIndexService:
    global _groq_service
    if _groq_service is None:
        _groq_service = GroqIndexService()
    return _groq_service
