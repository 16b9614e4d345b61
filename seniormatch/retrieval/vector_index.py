from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

import numpy as np

from seniormatch.matching.errors import RetrievalError
from seniormatch.matching.models import ProgramItem


@dataclass(frozen=True)
class VectorPoint:
    id: str
    vector: Sequence[float]
    payload: ProgramItem


@dataclass(frozen=True)
class SearchHit:
    id: str
    payload: ProgramItem
    score: float


class VectorIndex(Protocol):
    async def upsert(self, points: Iterable[VectorPoint]) -> None: ...

    async def search(self, vector: Sequence[float], type_filter: Optional[str], limit: int) -> List[SearchHit]: ...


def _unit(vector: Sequence[float], partition: Optional[str] = None) -> np.ndarray:
    arr = np.asarray(vector, dtype=np.float32)
    if arr.ndim != 1 or arr.size == 0 or not np.all(np.isfinite(arr)):
        raise RetrievalError("Vector must be a non-empty finite 1-D sequence", partition=partition)
    norm = float(np.linalg.norm(arr))
    return arr / norm if norm else arr


class InMemoryVectorIndex:
    """
    Cosine-similarity index held in process memory. Points are keyed by their
    point id; re-upserting an id replaces the previous vector and payload.
    """

    def __init__(self, dimension: Optional[int] = None) -> None:
        self.dimension = dimension
        self._vectors: Dict[str, np.ndarray] = {}
        self._payloads: Dict[str, ProgramItem] = {}

    def __len__(self) -> int:
        return len(self._vectors)

    def _check_dim(self, arr: np.ndarray, partition: Optional[str] = None) -> None:
        if self.dimension is None:
            self.dimension = int(arr.size)
        elif arr.size != self.dimension:
            raise RetrievalError(
                f"Vector dimension {arr.size} does not match index dimension {self.dimension}",
                partition=partition,
                data={"dimension": int(arr.size)},
            )

    async def upsert(self, points: Iterable[VectorPoint]) -> None:
        for point in points:
            arr = _unit(point.vector, point.payload.type)
            self._check_dim(arr, point.payload.type)
            self._vectors[point.id] = arr
            self._payloads[point.id] = point.payload

    async def search(self, vector: Sequence[float], type_filter: Optional[str], limit: int) -> List[SearchHit]:
        query = _unit(vector, type_filter)
        if not self._vectors or limit <= 0:
            return []
        self._check_dim(query, type_filter)
        ids = [pid for pid, payload in self._payloads.items() if type_filter is None or payload.type == type_filter]
        if not ids:
            return []
        matrix = np.stack([self._vectors[pid] for pid in ids])
        sims = matrix @ query
        # stable so equal similarities keep insertion order
        order = np.argsort(-sims, kind="stable")[:limit]
        return [SearchHit(id=ids[i], payload=self._payloads[ids[i]], score=float(sims[i])) for i in order]
