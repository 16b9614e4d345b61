from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional, Protocol

from loguru import logger
from openai import AsyncOpenAI, OpenAIError

from seniormatch.config.settings import settings

from .errors import GenerationError

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class Generator(Protocol):
    async def generate_ranked(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]: ...


def parse_ranked_payload(content: Optional[str]) -> Dict[str, Any]:
    """
    Pull the `{recommendations: [...]}` object out of a completion.
    Raises GenerationError when nothing usable is found.
    """
    if not content or not content.strip():
        raise GenerationError("LLM 응답이 비어 있습니다.")
    m = _JSON_OBJECT.search(content)
    if not m:
        raise GenerationError("No JSON object found in model output.", data={"raw_excerpt": content[:400]})
    try:
        data = json.loads(m.group(0))
    except json.JSONDecodeError as exc:
        raise GenerationError(
            f"Failed to parse JSON: {exc}", data={"raw_excerpt": content[:400]}
        ) from exc
    if not isinstance(data, dict) or not isinstance(data.get("recommendations"), list):
        raise GenerationError("Parsed JSON has no 'recommendations' list.", data={"raw_excerpt": content[:400]})
    return data


class OpenAIGenerator:
    def __init__(self, client: AsyncOpenAI, *, model: Optional[str] = None) -> None:
        self._client = client
        self.model = model or settings.openai_model_rerank

    @classmethod
    def from_settings(cls) -> "OpenAIGenerator":
        return cls(AsyncOpenAI(base_url=settings.openai_base_url, max_retries=settings.openai_max_retries))

    async def generate_ranked(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        temperature = 0.2
        if "gpt-5" in self.model:
            # gpt-5 models only accept the default temperature
            temperature = 1
        try:
            resp = await self._client.chat.completions.create(
                model=self.model,
                temperature=temperature,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except OpenAIError as exc:
            raise GenerationError(f"Re-rank request failed: {type(exc).__name__}: {exc}") from exc
        content = resp.choices[0].message.content if resp.choices else None
        data = parse_ranked_payload(content)
        logger.debug("Re-rank model {} returned {} entries", self.model, len(data["recommendations"]))
        return data
