from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

try:
    from dotenv import load_dotenv

    load_dotenv()
except Exception:
    pass


def _env(*names: str, default: str | None = None) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value is not None and value != "":
            return value
    return default


def _env_bool(*names: str, default: bool) -> bool:
    value = _env(*names, default=None)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_int(*names: str, default: int) -> int:
    value = _env(*names, default=None)
    return int(value) if value is not None else default


@dataclass(frozen=True)
class Settings:
    """
    Central runtime settings. Values can be overridden via env vars.
    """

    # Matching
    default_region: str = _env("SENIORMATCH_DEFAULT_REGION", "DEFAULT_REGION", default="부산") or "부산"
    rerank_top_k: int = _env_int("SENIORMATCH_RERANK_TOP_K", default=3)
    job_candidate_limit: int = _env_int("SENIORMATCH_JOB_CANDIDATE_LIMIT", default=12)
    policy_limit: int = _env_int("SENIORMATCH_POLICY_LIMIT", default=5)
    education_limit: int = _env_int("SENIORMATCH_EDUCATION_LIMIT", default=5)

    # LLM re-rank
    openai_model_rerank: str = _env(
        "SENIORMATCH_OPENAI_MODEL_RERANK",
        "OPENAI_LLM_MODEL",
        default="gpt-5",
    ) or "gpt-5"
    openai_base_url: str | None = _env("SENIORMATCH_OPENAI_BASE_URL", default=None)
    # a failed external call goes straight to the fallback path
    openai_max_retries: int = _env_int("SENIORMATCH_OPENAI_MAX_RETRIES", default=0)

    # Embeddings / retrieval
    use_rag: bool = _env_bool("SENIORMATCH_USE_RAG", default=True)
    embedding_model_query: str = _env(
        "SENIORMATCH_EMBEDDING_MODEL_QUERY",
        "OPENAI_EMBEDDING_MODEL",
        default="text-embedding-3-small",
    ) or "text-embedding-3-small"
    embedding_model_passage: str = _env(
        "SENIORMATCH_EMBEDDING_MODEL_PASSAGE",
        "OPENAI_EMBEDDING_MODEL",
        default="text-embedding-3-small",
    ) or "text-embedding-3-small"
    embedding_api_key: str | None = _env("SENIORMATCH_EMBEDDING_API_KEY", "OPENAI_API_KEY2", default=None)
    embedding_base_url: str | None = _env("SENIORMATCH_EMBEDDING_BASE_URL", default=None)
    retrieval_limit: int = _env_int("SENIORMATCH_RETRIEVAL_LIMIT", default=10)
    index_on_startup: bool = _env_bool("SENIORMATCH_INDEX_ON_STARTUP", default=False)

    # Paths
    data_dir: Path = Path(_env("SENIORMATCH_DATA_DIR", default="data") or "data")


settings = Settings()
