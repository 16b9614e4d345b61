from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Protocol, Sequence, Union

from loguru import logger

from seniormatch.common.logging_ctx import get_request_ctx

from .llm_client import Generator
from .models import JobItem, ProgramItem, Recommendation, SeniorProfile
from .prompts import RERANK_SYSTEM_PROMPT, build_rerank_user_prompt

FALLBACK_REASON = "규칙 기반 매칭 결과입니다."
FALLBACK_CAP = 0.98
FALLBACK_BASE = 0.6
FALLBACK_SCORE_WEIGHT = 0.05
FALLBACK_RANK_DECAY = 0.02


@dataclass(frozen=True)
class Candidate:
    """One entry handed to a ranker: the program view, the native item and its initial score."""

    program: ProgramItem
    item: Union[JobItem, ProgramItem]
    score: float = 0.0
    point_id: Optional[str] = None

    @property
    def keys(self) -> FrozenSet[str]:
        ids = {self.program.id, self.program.native_id, self.point_id}
        return frozenset(i for i in ids if i)


@dataclass
class RankOutcome:
    ok: bool
    recommendations: List[Recommendation] = field(default_factory=list)
    ranker: str = "heuristic"
    error_type: Optional[str] = None
    error_message: Optional[str] = None


class Ranker(Protocol):
    async def rank(self, profile: SeniorProfile, candidates: Sequence[Candidate], top_k: int) -> RankOutcome: ...


def fallback_score(heuristic_score: float, rank_index: int) -> float:
    score = FALLBACK_BASE + heuristic_score * FALLBACK_SCORE_WEIGHT - rank_index * FALLBACK_RANK_DECAY
    return max(0.0, min(FALLBACK_CAP, score))


def _recommend(cand: Candidate, score: float, reason: str) -> Recommendation:
    return Recommendation(type=cand.program.type, item=cand.item, score=score, reason=reason)


class HeuristicRanker:
    """Keeps the incoming (heuristic) order and maps scores into a 0..0.98 band."""

    async def rank(self, profile: SeniorProfile, candidates: Sequence[Candidate], top_k: int) -> RankOutcome:
        recs = [
            _recommend(cand, fallback_score(cand.score, idx), FALLBACK_REASON)
            for idx, cand in enumerate(list(candidates)[:top_k])
        ]
        return RankOutcome(ok=True, recommendations=recs, ranker="heuristic")


class GenerativeRanker:
    """
    Asks the generator for a top-k with reasons. Never raises: failures come
    back as a RankOutcome with ok=False.
    """

    def __init__(self, generator: Generator) -> None:
        self.generator = generator

    def _resolve(self, data: Dict[str, Any], candidates: Sequence[Candidate], top_k: int) -> List[Recommendation]:
        by_key: Dict[str, Candidate] = {}
        for cand in candidates:
            for key in cand.keys:
                by_key.setdefault(key, cand)
        recs: List[Recommendation] = []
        seen = set()
        for entry in data.get("recommendations") or []:
            if not isinstance(entry, dict):
                continue
            cand = by_key.get(str(entry.get("id")))
            if cand is None or id(cand) in seen:
                continue
            seen.add(id(cand))
            try:
                score = float(entry.get("score") or 0)
            except (TypeError, ValueError):
                score = 0.0
            recs.append(_recommend(cand, score, str(entry.get("reason") or "")))
        return recs[:top_k]

    async def rank(self, profile: SeniorProfile, candidates: Sequence[Candidate], top_k: int) -> RankOutcome:
        if not candidates:
            return RankOutcome(ok=True, ranker="generative")
        user_prompt = build_rerank_user_prompt(profile, candidates, top_k)
        try:
            data = await self.generator.generate_ranked(RERANK_SYSTEM_PROMPT, user_prompt)
            recs = self._resolve(data, candidates, top_k)
        except Exception as exc:
            logger.bind(**get_request_ctx()).warning("LLM rerank failed: {}: {}", type(exc).__name__, exc)
            return RankOutcome(
                ok=False,
                ranker="generative",
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
        dropped = len(data.get("recommendations") or []) - len(recs)
        if dropped > 0:
            logger.bind(**get_request_ctx()).debug("Dropped {} re-ranked ids with no matching candidate", dropped)
        return RankOutcome(ok=True, recommendations=recs, ranker="generative")


class FallbackRanker:
    """Tries the generative ranker first; on any failure ranks the fallback candidates heuristically."""

    def __init__(self, primary: Optional[GenerativeRanker], fallback: Optional[HeuristicRanker] = None) -> None:
        self.primary = primary
        self.fallback = fallback or HeuristicRanker()

    async def rank(
        self,
        profile: SeniorProfile,
        candidates: Sequence[Candidate],
        top_k: int,
        *,
        fallback_candidates: Optional[Sequence[Candidate]] = None,
    ) -> RankOutcome:
        if self.primary is not None:
            outcome = await self.primary.rank(profile, candidates, top_k)
            if outcome.ok:
                return outcome
            logger.bind(**get_request_ctx()).info("LLM rerank fallback ({})", outcome.error_type)
            result = await self.fallback.rank(
                profile, candidates if fallback_candidates is None else fallback_candidates, top_k
            )
            result.error_type = outcome.error_type
            result.error_message = outcome.error_message
            return result
        return await self.fallback.rank(
            profile, candidates if fallback_candidates is None else fallback_candidates, top_k
        )
