from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from loguru import logger

from seniormatch.common.logging_ctx import get_request_ctx, request_ctx_scope
from seniormatch.config.catalog_store import Catalog
from seniormatch.config.settings import Settings, settings as default_settings
from seniormatch.retrieval.embeddings import Embedder
from seniormatch.retrieval.vector_index import SearchHit, VectorIndex

from .candidates import filter_educations, filter_jobs, filter_policies
from .errors import InvalidProfileError
from .models import PARTITIONS, MatchOptions, ProgramItem, RecommendationResponse, SeniorProfile
from .programs import education_to_program, job_to_program, policy_to_program, query_text
from .rerank import Candidate, FallbackRanker, RankOutcome
from .scoring import HEURISTIC_SCORING_VERSION


def _program_candidate(program: ProgramItem) -> Candidate:
    return Candidate(program=program, item=program)


@dataclass
class PartitionResult:
    partition: str
    outcome: RankOutcome
    used_retrieval: bool = False

    @property
    def rag_succeeded(self) -> bool:
        return self.used_retrieval and self.outcome.ranker == "generative" and bool(self.outcome.recommendations)


class Matcher:
    """
    Matching pipeline: candidates (vector search or rule filter) -> re-rank
    -> per-type assembly. Built once per process and shared across requests;
    holds no per-request state.
    """

    def __init__(
        self,
        catalog: Catalog,
        ranker: FallbackRanker,
        *,
        embedder: Optional[Embedder] = None,
        index: Optional[VectorIndex] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.catalog = catalog
        self.ranker = ranker
        self.embedder = embedder
        self.index = index
        self.settings = settings or default_settings

    @property
    def rag_available(self) -> bool:
        return self.embedder is not None and self.index is not None

    # ---- candidates -------------------------------------------------------

    def rule_candidates(self, profile: SeniorProfile) -> Dict[str, List[Candidate]]:
        s = self.settings
        jobs = filter_jobs(profile, self.catalog.jobs, s.job_candidate_limit, default_region=s.default_region)
        policies = filter_policies(profile, self.catalog.policies, s.policy_limit, default_region=s.default_region)
        educations = filter_educations(
            profile, self.catalog.educations, s.education_limit, default_region=s.default_region
        )
        return {
            "job": [Candidate(program=job_to_program(sj.job), item=sj.job, score=sj.score) for sj in jobs],
            "policy": [_program_candidate(policy_to_program(pol)) for pol in policies],
            "education": [_program_candidate(education_to_program(edu)) for edu in educations],
        }

    def _hit_to_candidate(self, hit: SearchHit) -> Candidate:
        program = hit.payload
        item = (self.catalog.job_by_id(program.native_id) if program.type == "job" else None) or program
        return Candidate(program=program, item=item, score=hit.score, point_id=hit.id)

    async def _search_partition(self, vector: List[float], partition: str) -> Optional[List[Candidate]]:
        with request_ctx_scope(partition=partition):
            log = logger.bind(**get_request_ctx())
            try:
                hits = await self.index.search(vector, partition, self.settings.retrieval_limit)
            except Exception as exc:
                log.warning("Vector search failed for {}: {}: {}", partition, type(exc).__name__, exc)
                return None
            if not hits:
                log.info("Vector search returned no {} hits; using rule-based candidates", partition)
                return None
            return [self._hit_to_candidate(hit) for hit in hits]

    async def retrieval_candidates(self, profile: SeniorProfile) -> Dict[str, Optional[List[Candidate]]]:
        """Vector candidates per partition; None marks a partition that must use the rule filter."""
        log = logger.bind(**get_request_ctx())
        try:
            vector = await self.embedder.embed(query_text(profile, self.settings.default_region), "query")
        except Exception as exc:
            log.warning("Profile embedding failed, falling back to rule-based candidates: {}: {}", type(exc).__name__, exc)
            return {name: None for name in PARTITIONS}
        results = await asyncio.gather(*(self._search_partition(vector, name) for name in PARTITIONS))
        return dict(zip(PARTITIONS, results))

    # ---- ranking ----------------------------------------------------------

    async def _rank_partition(
        self,
        profile: SeniorProfile,
        partition: str,
        retrieved: Optional[List[Candidate]],
        rule: List[Candidate],
        top_k: int,
    ) -> PartitionResult:
        with request_ctx_scope(partition=partition):
            if retrieved:
                outcome = await self.ranker.rank(profile, retrieved, top_k, fallback_candidates=rule)
                return PartitionResult(partition, outcome, used_retrieval=outcome.ok and outcome.ranker == "generative")
            outcome = await self.ranker.rank(profile, rule, top_k)
            return PartitionResult(partition, outcome)

    async def match(self, profile: Optional[SeniorProfile], options: Optional[MatchOptions] = None) -> RecommendationResponse:
        if profile is None:
            raise InvalidProfileError("profile is required")
        opts = options or MatchOptions(top_k=self.settings.rerank_top_k)
        log = logger.bind(**get_request_ctx())

        rule = self.rule_candidates(profile)
        retrieved: Dict[str, Optional[List[Candidate]]] = {name: None for name in PARTITIONS}
        if opts.use_rag and self.rag_available:
            retrieved = await self.retrieval_candidates(profile)

        results: Tuple[PartitionResult, ...] = tuple(
            await asyncio.gather(
                *(self._rank_partition(profile, name, retrieved[name], rule[name], opts.top_k) for name in PARTITIONS)
            )
        )
        by_name = {r.partition: r for r in results}
        source = "rag" if any(r.rag_succeeded for r in results) else "rule-based"

        log.info(
            "match done source={} jobs={} policies={} educations={} fallbacks={} scoring={}",
            source,
            len(by_name["job"].outcome.recommendations),
            len(by_name["policy"].outcome.recommendations),
            len(by_name["education"].outcome.recommendations),
            [r.partition for r in results if r.outcome.error_type],
            HEURISTIC_SCORING_VERSION,
        )
        return RecommendationResponse(
            jobRecommendations=by_name["job"].outcome.recommendations,
            policies=by_name["policy"].outcome.recommendations,
            educations=by_name["education"].outcome.recommendations,
            source=source,
        )
