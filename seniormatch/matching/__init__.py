from .candidates import ScoredJob, filter_educations, filter_jobs, filter_policies
from .errors import EmbeddingError, GenerationError, InvalidProfileError, MatchingError, RetrievalError
from .models import (
    EducationItem,
    JobItem,
    MatchOptions,
    PolicyItem,
    ProgramItem,
    Recommendation,
    RecommendationResponse,
    SeniorProfile,
)
from .normalize import is_close_region, normalize, parse_salary
from .rerank import FallbackRanker, GenerativeRanker, HeuristicRanker
from .scoring import score_job

__all__ = [
    "ScoredJob",
    "filter_educations",
    "filter_jobs",
    "filter_policies",
    "EmbeddingError",
    "GenerationError",
    "InvalidProfileError",
    "MatchingError",
    "RetrievalError",
    "EducationItem",
    "JobItem",
    "MatchOptions",
    "PolicyItem",
    "ProgramItem",
    "Recommendation",
    "RecommendationResponse",
    "SeniorProfile",
    "is_close_region",
    "normalize",
    "parse_salary",
    "FallbackRanker",
    "GenerativeRanker",
    "HeuristicRanker",
    "score_job",
]
