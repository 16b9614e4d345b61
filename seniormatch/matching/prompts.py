from __future__ import annotations

import json
from typing import TYPE_CHECKING, Sequence

from .models import SeniorProfile

if TYPE_CHECKING:
    from .rerank import Candidate

RERANK_SYSTEM_PROMPT = """
너는 시니어에게 맞는 일자리, 정책, 교육 프로그램을 점수화하는 랭커다.
입력: 시니어 프로필 JSON과 후보 목록.
출력: JSON만, 형식은 {"recommendations": [{"id": "...", "score": 0.0, "reason": "..."}]}.
- id는 후보 목록에 있는 id를 그대로 사용한다.
- score는 0~1 사이 숫자, 소수 2자리까지.
- reason은 1~2문장 한국어로, 왜 맞는지 설명.
""".strip()


def _line(label: str, value) -> str:
    return f"  {label}: {value}" if value not in (None, "", []) else ""


def build_candidate_text(candidates: Sequence["Candidate"]) -> str:
    blocks = []
    for idx, cand in enumerate(candidates, start=1):
        p = cand.program
        lines = [
            f"{idx}. id: {p.native_id}",
            _line("title", p.title),
            _line("type", p.type),
            _line("region", p.region),
            _line("description", p.description),
            _line("benefits", p.benefits),
            _line("requirements", p.requirements),
            _line("tags", ", ".join(p.tags or [])),
            _line("initial_score", f"{cand.score:.2f}"),
        ]
        blocks.append("\n".join(line for line in lines if line))
    return "\n\n".join(blocks)


def build_rerank_user_prompt(profile: SeniorProfile, candidates: Sequence["Candidate"], top_n: int = 3) -> str:
    profile_json = json.dumps(profile.model_dump(mode="json"), ensure_ascii=False, indent=2)
    return f"""프로필:
{profile_json}

후보 목록:
{build_candidate_text(candidates)}

위 후보 중 최상위 {top_n}개를 골라 JSON으로 반환해라:
{{
  "recommendations": [
    {{ "id": "job_001", "score": 0.92, "reason": "간단한 이유" }}
  ]
}}"""
