from __future__ import annotations

import hashlib
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from seniormatch.config.catalog_store import Catalog
from seniormatch.matching.errors import EmbeddingError, GenerationError
from seniormatch.matching.models import EducationItem, JobItem, PolicyItem, SeniorProfile


def make_profile(**overrides) -> SeniorProfile:
    base = {
        "previous_job": "경리",
        "skills": ["장부 정리", "전화 응대"],
        "activity_level": "중간",
        "work_posture": "",
        "weekly_work_days": 3,
        "salary_expectation": "200만원",
        "social_preference": "같이",
        "learning_preference": "직접 배우기",
        "digital_literacy": "높음",
        "motivation": "용돈 벌이",
        "persona_summary": "꼼꼼한 전직 경리",
        "region": "부산",
    }
    base.update(overrides)
    return SeniorProfile(**base)


def make_job(**overrides) -> JobItem:
    base = {
        "id": "job_x",
        "title": "행정 지원",
        "region": "부산",
        "work_days": 3,
        "work_type": "시간제",
        "activity_level": "중간",
        "posture": "",
        "min_salary": 1800000,
        "max_salary": 2200000,
        "social_level": "높음",
        "requires_digital": False,
        "tags": [],
        "description": "",
        "deadline": "2026-12-31",
    }
    base.update(overrides)
    return JobItem(**base)


def make_policy(**overrides) -> PolicyItem:
    base = {"id": "policy_x", "title": "지원사업", "region": "전국", "benefit": "활동비", "description": ""}
    base.update(overrides)
    return PolicyItem(**base)


def make_education(**overrides) -> EducationItem:
    base = {
        "id": "edu_x",
        "title": "교육",
        "region": "부산",
        "mode": "오프라인",
        "duration": "4주",
        "requires_digital": False,
        "tags": [],
        "summary": "",
    }
    base.update(overrides)
    return EducationItem(**base)


class HashEmbedder:
    """Deterministic token-hash embedder for tests."""

    def __init__(self, dim: int = 16) -> None:
        self.dim = dim
        self.calls: List[tuple] = []

    async def embed(self, text: str, mode: str) -> List[float]:
        self.calls.append((mode, text))
        vector = [0.0] * self.dim
        for token in text.split():
            h = int(hashlib.md5(token.encode("utf-8")).hexdigest()[:8], 16)
            vector[h % self.dim] += 1.0
        vector[0] += 0.1
        return vector


class FailingEmbedder:
    async def embed(self, text: str, mode: str) -> List[float]:
        raise EmbeddingError("embedding service down")


class ScriptedGenerator:
    """Returns a canned payload, or raises when `error` is set."""

    def __init__(self, payload: Dict[str, Any] | None = None, error: Exception | None = None) -> None:
        self.payload = payload or {"recommendations": []}
        self.error = error
        self.prompts: List[str] = []

    async def generate_ranked(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        self.prompts.append(user_prompt)
        if self.error is not None:
            raise self.error
        return self.payload


class AlwaysFailingGenerator(ScriptedGenerator):
    def __init__(self) -> None:
        super().__init__(error=GenerationError("model unavailable"))


@pytest.fixture
def profile() -> SeniorProfile:
    return make_profile()


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(
        jobs=(
            make_job(id="job_busan", title="시장 행정 지원"),
            make_job(id="job_seoul", title="서울 경비", region="서울", work_days=6, activity_level="높음"),
            make_job(id="job_haeundae", title="도서관 보조", region="부산 해운대구", work_days=2),
        ),
        policies=(
            make_policy(id="policy_all", region="전국"),
            make_policy(id="policy_busan", region="부산"),
            make_policy(id="policy_seoul", region="서울"),
        ),
        educations=(
            make_education(id="edu_online", region="온라인", requires_digital=True),
            make_education(id="edu_busan", region="부산 연제구"),
            make_education(id="edu_seoul", region="서울"),
        ),
    )
