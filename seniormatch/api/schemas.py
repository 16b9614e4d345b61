from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from seniormatch.matching.models import ProgramItem


class _Base(BaseModel):
    model_config = ConfigDict(extra="allow")


# --- Requests --------------------------------------------------------------


class RecommendationRequest(_Base):
    """
    Body of POST /api/recommendations. The profile is validated by the
    handler so a missing or malformed profile maps to a 400.
    """

    profile: Optional[Dict[str, Any]] = None
    topK: int = Field(default=3, ge=1, le=20)
    useRAG: bool = True


# --- Responses --------------------------------------------------------------


class Health(_Base):
    ok: bool
    rag_available: bool
    llm_available: bool
    indexed_points: Optional[int] = None
    catalog: Dict[str, int] = {}
    message: Optional[str] = None


class ProgramsResponse(_Base):
    total: int
    breakdown: Dict[str, int]
    programs: List[ProgramItem]


class EmbedProgramsRequest(_Base):
    programs: List[ProgramItem] = []


class EmbedProgramsResponse(_Base):
    message: str
    total: int
    success: int
    failed: int
    results: List[Dict[str, Any]] = []


class EmbedStaticDataResponse(_Base):
    message: str
    total: int
    success: int
    failed: int
    breakdown: Dict[str, int]
    results: List[Dict[str, Any]] = []
