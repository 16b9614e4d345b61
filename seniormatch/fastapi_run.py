from __future__ import annotations

import os
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from loguru import logger
from openai import OpenAIError
from pydantic import ValidationError

from seniormatch.api.schemas import (
    EmbedProgramsRequest,
    EmbedProgramsResponse,
    EmbedStaticDataResponse,
    Health,
    ProgramsResponse,
    RecommendationRequest,
)
from seniormatch.common.logging_ctx import request_ctx_scope
from seniormatch.config.catalog_store import load_catalog
from seniormatch.config.settings import Settings, settings
from seniormatch.matching.llm_client import OpenAIGenerator
from seniormatch.matching.matcher import Matcher
from seniormatch.matching.models import MatchOptions, RecommendationResponse, SeniorProfile
from seniormatch.matching.rerank import FallbackRanker, GenerativeRanker
from seniormatch.retrieval import InMemoryVectorIndex, OpenAIEmbedder, index_programs


def build_matcher(app_settings: Settings = settings) -> Matcher:
    """
    Construct the matcher and its external clients once. Missing API keys
    leave the matching path on rule-based ranking rather than failing startup.
    """
    catalog = load_catalog(app_settings.data_dir)

    generative: Optional[GenerativeRanker] = None
    try:
        generative = GenerativeRanker(OpenAIGenerator.from_settings())
    except OpenAIError as exc:
        logger.warning("LLM re-rank disabled: {}", exc)

    embedder = None
    index = None
    if app_settings.use_rag:
        try:
            embedder = OpenAIEmbedder.from_settings()
            index = InMemoryVectorIndex()
        except OpenAIError as exc:
            logger.warning("Vector retrieval disabled: {}", exc)

    return Matcher(catalog, FallbackRanker(generative), embedder=embedder, index=index, settings=app_settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    matcher = build_matcher(settings)
    app.state.matcher = matcher
    if settings.index_on_startup and matcher.rag_available:
        await index_programs(matcher.catalog.all_programs(), matcher.embedder, matcher.index)
    yield


app = FastAPI(title="Senior Match (jobs · policies · education)", version="0.1.0", lifespan=lifespan)


def get_matcher(request: Request) -> Matcher:
    matcher = getattr(request.app.state, "matcher", None)
    if matcher is None:
        raise HTTPException(status_code=503, detail="Matcher not initialised")
    return matcher


# -------------------------
# Health
# -------------------------

@app.get("/health", response_model=Health)
async def health(matcher: Matcher = Depends(get_matcher)):
    index = matcher.index
    return Health(
        ok=True,
        rag_available=matcher.rag_available,
        llm_available=matcher.ranker.primary is not None,
        indexed_points=len(index) if isinstance(index, InMemoryVectorIndex) else None,
        catalog=matcher.catalog.breakdown(),
        message="ready",
    )


# -------------------------
# Recommendations
# -------------------------

@app.post("/api/recommendations", response_model=RecommendationResponse)
async def recommendations(req: RecommendationRequest, matcher: Matcher = Depends(get_matcher)):
    if req.profile is None:
        raise HTTPException(status_code=400, detail="profile 필드가 필요합니다.")
    try:
        profile = SeniorProfile(**req.profile)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=f"profile 형식이 올바르지 않습니다: {exc.error_count()}개 오류")

    with request_ctx_scope(request_id=uuid.uuid4().hex[:12]):
        try:
            return await matcher.match(profile, MatchOptions(top_k=req.topK, use_rag=req.useRAG))
        except Exception:
            logger.exception("recommendations error")
            raise HTTPException(status_code=500, detail="추천 생성 중 오류가 발생했습니다.")


# -------------------------
# Catalog
# -------------------------

@app.get("/api/programs", response_model=ProgramsResponse)
async def programs(matcher: Matcher = Depends(get_matcher)):
    items = matcher.catalog.all_programs()
    return ProgramsResponse(total=len(items), breakdown=matcher.catalog.breakdown(), programs=items)


@app.post("/api/embed-static-data", response_model=EmbedStaticDataResponse)
async def embed_static_data(matcher: Matcher = Depends(get_matcher)):
    if not matcher.rag_available:
        raise HTTPException(status_code=503, detail="Vector retrieval is not configured")
    catalog = matcher.catalog
    programs_all = catalog.all_programs()
    logger.info("Embedding {} programs", len(programs_all))
    report = await index_programs(programs_all, matcher.embedder, matcher.index)
    return EmbedStaticDataResponse(
        message=f"{report.success}개 프로그램 임베딩 완료 (실패: {report.failed})",
        total=report.total,
        success=report.success,
        failed=report.failed,
        breakdown=catalog.breakdown(),
        results=report.results,
    )


@app.post("/api/embed-programs", response_model=EmbedProgramsResponse)
async def embed_programs(req: EmbedProgramsRequest, matcher: Matcher = Depends(get_matcher)):
    if not req.programs:
        raise HTTPException(status_code=400, detail="No programs provided")
    if not matcher.rag_available:
        raise HTTPException(status_code=503, detail="Vector retrieval is not configured")
    report = await index_programs(req.programs, matcher.embedder, matcher.index)
    return EmbedProgramsResponse(
        message=f"{report.success}개 프로그램 임베딩 완료 (실패: {report.failed})",
        total=report.total,
        success=report.success,
        failed=report.failed,
        results=report.results,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("seniormatch.fastapi_run:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
