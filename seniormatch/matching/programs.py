from __future__ import annotations

import uuid
from typing import List, Optional, Tuple

from .models import EducationItem, JobItem, PolicyItem, ProgramItem, SeniorProfile

# Fixed namespace so point ids stay stable across processes.
POINT_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "seniormatch/programs")

TYPE_LABELS = {"job": "일자리", "policy": "정책", "education": "교육", "other": "기타"}


def _digital_label(requires_digital: bool) -> str:
    return "필요" if requires_digital else "불필요"


def job_to_program(job: JobItem) -> ProgramItem:
    return ProgramItem(
        id=job.id,
        title=job.title,
        type="job",
        region=job.region,
        description=job.description,
        benefits=f"급여: {job.min_salary:,}~{job.max_salary:,}원",
        requirements=(
            f"활동량: {job.activity_level}, 자세: {job.posture}, "
            f"디지털: {_digital_label(job.requires_digital)}"
        ),
        duration=f"주 {job.work_days}일",
        deadline=job.deadline,
        tags=list(job.tags),
        original_id=job.id,
    )


def policy_to_program(policy: PolicyItem) -> ProgramItem:
    return ProgramItem(
        id=policy.id,
        title=policy.title,
        type="policy",
        region=policy.region,
        target_age=policy.target_age,
        description=policy.description,
        benefits=policy.benefit,
        deadline=policy.deadline,
        link=policy.link,
        tags=list(policy.tags or []),
        original_id=policy.id,
    )


def education_to_program(education: EducationItem) -> ProgramItem:
    return ProgramItem(
        id=education.id,
        title=education.title,
        type="education",
        region=education.region,
        description=education.summary,
        requirements=f"디지털: {_digital_label(education.requires_digital)}",
        duration=education.duration,
        cost=education.cost,
        start_date=education.start_date,
        tags=list(education.tags),
        provider=education.provider,
        original_id=education.id,
    )


def point_id(original_id: str) -> str:
    """Deterministic UUID for a catalog id; vector stores only take int/UUID keys."""
    return str(uuid.uuid5(POINT_NAMESPACE, original_id))


def passage_text(program: ProgramItem) -> str:
    fields: List[Tuple[str, Optional[str]]] = [
        ("제목", program.title),
        ("유형", TYPE_LABELS.get(program.type, "기타")),
        ("지역", program.region),
        ("설명", program.description),
        ("대상연령", program.target_age),
        ("혜택", program.benefits),
        ("요건", program.requirements),
        ("기간", program.duration),
        ("비용", program.cost),
        ("제공기관", program.provider),
        ("태그", ", ".join(program.tags or [])),
    ]
    return "\n".join(f"{label}: {value}" for label, value in fields if value)


def query_text(profile: SeniorProfile, default_region: str) -> str:
    """Search text for a profile. Line order is part of the embedding input; keep it fixed."""
    lines = [
        f"지역: {profile.region or default_region}",
        f"이전 직업: {profile.previous_job}",
        f"보유 기술: {', '.join(profile.skills)}",
        f"활동 수준: {profile.activity_level}",
        f"근무 자세: {profile.work_posture}",
        f"희망 근무일수: 주 {profile.weekly_work_days}일",
        f"희망 급여: {profile.salary_expectation}",
        f"사회적 선호: {profile.social_preference}",
        f"학습 선호: {profile.learning_preference}",
        f"디지털 역량: {profile.digital_literacy}",
        f"동기: {profile.motivation}",
    ]
    return "\n".join(lines)
