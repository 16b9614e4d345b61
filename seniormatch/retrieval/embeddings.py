from __future__ import annotations

from typing import List, Literal, Optional, Protocol

from loguru import logger
from openai import AsyncOpenAI, OpenAIError

from seniormatch.config.settings import settings
from seniormatch.matching.errors import EmbeddingError

EmbedMode = Literal["query", "passage"]


class Embedder(Protocol):
    async def embed(self, text: str, mode: EmbedMode) -> List[float]: ...


class OpenAIEmbedder:
    """
    Embeddings through any OpenAI-compatible endpoint. Query and passage text
    may use different models (asymmetric embedding pairs).
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        *,
        query_model: Optional[str] = None,
        passage_model: Optional[str] = None,
    ) -> None:
        self._client = client
        self.query_model = query_model or settings.embedding_model_query
        self.passage_model = passage_model or settings.embedding_model_passage

    @classmethod
    def from_settings(cls) -> "OpenAIEmbedder":
        client = AsyncOpenAI(
            api_key=settings.embedding_api_key,
            base_url=settings.embedding_base_url,
            max_retries=settings.openai_max_retries,
        )
        return cls(client)

    def model_for(self, mode: EmbedMode) -> str:
        return self.query_model if mode == "query" else self.passage_model

    async def embed(self, text: str, mode: EmbedMode) -> List[float]:
        model = self.model_for(mode)
        try:
            resp = await self._client.embeddings.create(model=model, input=text)
        except OpenAIError as exc:
            raise EmbeddingError(f"Embedding request failed ({model}): {exc}") from exc
        if not resp.data or not resp.data[0].embedding:
            raise EmbeddingError(f"Empty embedding returned by {model}")
        vector = list(resp.data[0].embedding)
        logger.debug("Embedded {} chars with {} (mode={}, dim={})", len(text), model, mode, len(vector))
        return vector
