from __future__ import annotations

import asyncio
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from seniormatch.matching.errors import EmbeddingError, GenerationError
from seniormatch.matching.llm_client import OpenAIGenerator
from seniormatch.retrieval.embeddings import OpenAIEmbedder


class _FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class _FakeEmbeddings:
    def __init__(self, vector=None, error=None):
        self.vector = vector
        self.error = error
        self.models = []

    async def create(self, model, input):
        self.models.append(model)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=[SimpleNamespace(embedding=self.vector)] if self.vector else [])


def _chat_client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def _connection_error():
    return APIConnectionError(request=httpx.Request("POST", "https://api.example.com/v1/chat/completions"))


def test_generator_requests_json_mode():
    completions = _FakeCompletions('{"recommendations": [{"id": "job_1", "score": 0.8, "reason": "ok"}]}')
    generator = OpenAIGenerator(_chat_client(completions), model="gpt-4o-mini")
    data = asyncio.run(generator.generate_ranked("system", "user"))
    assert data["recommendations"][0]["id"] == "job_1"
    assert completions.kwargs["response_format"] == {"type": "json_object"}
    assert completions.kwargs["temperature"] == 0.2
    assert completions.kwargs["messages"][0] == {"role": "system", "content": "system"}


def test_generator_wraps_empty_and_network_failures():
    empty = OpenAIGenerator(_chat_client(_FakeCompletions(content=None)), model="gpt-5")
    with pytest.raises(GenerationError):
        asyncio.run(empty.generate_ranked("s", "u"))
    down = OpenAIGenerator(_chat_client(_FakeCompletions(error=_connection_error())), model="gpt-5")
    with pytest.raises(GenerationError):
        asyncio.run(down.generate_ranked("s", "u"))


def test_embedder_uses_model_per_mode():
    embeddings = _FakeEmbeddings(vector=[0.1, 0.2, 0.3])
    embedder = OpenAIEmbedder(
        SimpleNamespace(embeddings=embeddings),
        query_model="embedding-query",
        passage_model="embedding-passage",
    )
    assert asyncio.run(embedder.embed("부산", "query")) == [0.1, 0.2, 0.3]
    asyncio.run(embedder.embed("부산", "passage"))
    assert embeddings.models == ["embedding-query", "embedding-passage"]


def test_embedder_wraps_failures():
    failing = OpenAIEmbedder(SimpleNamespace(embeddings=_FakeEmbeddings(error=_connection_error())))
    with pytest.raises(EmbeddingError):
        asyncio.run(failing.embed("text", "query"))
    empty = OpenAIEmbedder(SimpleNamespace(embeddings=_FakeEmbeddings(vector=None)))
    with pytest.raises(EmbeddingError):
        asyncio.run(empty.embed("text", "query"))


def test_clients_from_settings_do_not_retry(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    assert OpenAIGenerator.from_settings()._client.max_retries == 0
    assert OpenAIEmbedder.from_settings()._client.max_retries == 0
