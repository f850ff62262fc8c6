# lavajato/core/llm.py

import json
from typing import Optional

from fastapi import Request
from openai import AsyncOpenAI

from lavajato.utils.logger import get_logger

logger = get_logger(__name__)


class LLMResponseError(ValueError):
    """The model answered, but not with the JSON object we asked for."""


class LLMClient:
    """Thin wrapper over `AsyncOpenAI`, owned by the application lifespan."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gpt-4o-mini",
        timeout: float = 60,
        max_retries: int = 2,
    ):
        self.model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            timeout=timeout,
            max_retries=max_retries,
        )

    async def generate_json(
        self,
        system: str,
        user: str,
        *,
        temperature: float = 0.8,
        max_tokens: int = 4000,
    ) -> dict:
        completion = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
            response_format={"type": "json_object"},
        )

        text = (completion.choices[0].message.content or "").strip()
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise LLMResponseError(f"Model returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise LLMResponseError("Model returned JSON that is not an object")

        return data

    async def close(self):
        await self._client.close()
        logger.info("LLM client closed")


# =====================================================
# DEPENDENCY
# =====================================================
def get_llm(request: Request) -> Optional[LLMClient]:
    return getattr(request.app.state, "llm", None)
