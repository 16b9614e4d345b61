from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from seniormatch.config.settings import settings

from .models import EducationItem, JobItem, PolicyItem, SeniorProfile
from .normalize import DEFAULT_SIGNALS, TextSignals, is_close_region, normalize
from .scoring import score_job

NATIONWIDE = "전국"
ONLINE = "온라인"


@dataclass(frozen=True)
class ScoredJob:
    job: JobItem
    score: float


def _profile_region(profile: SeniorProfile, default_region: Optional[str]) -> str:
    return profile.region or default_region or settings.default_region


def _region_matches(item_region: str, region: str) -> bool:
    return is_close_region(item_region, region) or normalize(item_region) in normalize(region)


def filter_jobs(
    profile: SeniorProfile,
    jobs: Iterable[JobItem],
    limit: int = 20,
    *,
    default_region: Optional[str] = None,
    signals: TextSignals = DEFAULT_SIGNALS,
) -> List[ScoredJob]:
    scored = [
        ScoredJob(job=job, score=score_job(profile, job, default_region=default_region, signals=signals))
        for job in jobs
    ]
    # sorted() is stable: equal scores keep catalog order
    scored = sorted(scored, key=lambda s: s.score, reverse=True)
    return scored[: max(0, limit)]


def filter_policies(
    profile: SeniorProfile,
    policies: Iterable[PolicyItem],
    limit: int = 5,
    *,
    default_region: Optional[str] = None,
) -> List[PolicyItem]:
    region = _profile_region(profile, default_region)
    kept = [p for p in policies if p.region == NATIONWIDE or _region_matches(p.region, region)]
    return kept[: max(0, limit)]


def filter_educations(
    profile: SeniorProfile,
    educations: Iterable[EducationItem],
    limit: int = 5,
    *,
    default_region: Optional[str] = None,
    signals: TextSignals = DEFAULT_SIGNALS,
) -> List[EducationItem]:
    region = _profile_region(profile, default_region)
    digital_low = signals.low_digital(profile.digital_literacy)
    kept = [
        e
        for e in educations
        if (e.region == ONLINE or _region_matches(e.region, region))
        and not (e.requires_digital and digital_low)
    ]
    return kept[: max(0, limit)]
