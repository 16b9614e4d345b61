from __future__ import annotations

from typing import Dict, Optional

from seniormatch.config.settings import settings

from .models import JobItem, SeniorProfile
from .normalize import DEFAULT_SIGNALS, TextSignals, is_close_region, normalize

HEURISTIC_SCORING_VERSION = "1.0.0"

LEVEL_ORDER: Dict[str, int] = {"낮음": 1, "중간": 2, "높음": 3}
DEFAULT_LEVEL = 2
DEFAULT_WEEKLY_DAYS = 3
SALARY_NEAR_GAP = 200_000

REGION_BONUS = 3.0
POSTURE_BONUS = 1.5
SOCIAL_BONUS = 1.0
SALARY_IN_RANGE_BONUS = 2.0
SALARY_NEAR_BONUS = 1.0
DIGITAL_PENALTY = -2.0


def _level(value: Optional[str]) -> int:
    return LEVEL_ORDER.get((value or "").strip(), DEFAULT_LEVEL)


def apply_region(profile: SeniorProfile, job: JobItem, default_region: str) -> float:
    region = profile.region or default_region
    return REGION_BONUS if is_close_region(job.region, region) else 0.0


def apply_work_days(profile: SeniorProfile, job: JobItem) -> float:
    desired = profile.weekly_work_days or DEFAULT_WEEKLY_DAYS
    diff = abs(job.work_days - desired)
    if diff == 0:
        return 2.0
    if diff == 1:
        return 1.0
    return 0.0


def apply_activity(profile: SeniorProfile, job: JobItem) -> float:
    diff = abs(_level(profile.activity_level) - _level(job.activity_level))
    if diff == 0:
        return 2.0
    if diff == 1:
        return 1.0
    return -1.0


def apply_posture(profile: SeniorProfile, job: JobItem) -> float:
    pref = normalize(profile.work_posture)
    if pref and pref in normalize(job.posture):
        return POSTURE_BONUS
    return 0.0


def apply_social(profile: SeniorProfile, job: JobItem, signals: TextSignals) -> float:
    if signals.prefers_alone(profile.social_preference) and job.social_level == "낮음":
        return SOCIAL_BONUS
    if signals.prefers_together(profile.social_preference) and job.social_level != "낮음":
        return SOCIAL_BONUS
    return 0.0


def apply_salary(profile: SeniorProfile, job: JobItem, signals: TextSignals) -> float:
    expected = signals.expected_salary(profile.salary_expectation)
    if not expected:
        return 0.0
    if job.min_salary <= expected <= job.max_salary:
        return SALARY_IN_RANGE_BONUS
    gap = job.min_salary - expected if expected < job.min_salary else expected - job.max_salary
    return SALARY_NEAR_BONUS if gap < SALARY_NEAR_GAP else 0.0


def apply_digital(profile: SeniorProfile, job: JobItem, signals: TextSignals) -> float:
    if job.requires_digital and signals.low_digital(profile.digital_literacy):
        return DIGITAL_PENALTY
    return 0.0


def score_job_components(
    profile: SeniorProfile,
    job: JobItem,
    *,
    default_region: Optional[str] = None,
    signals: TextSignals = DEFAULT_SIGNALS,
) -> Dict[str, float]:
    """
    Per-rule contributions of the job fit score, keyed by rule name.
    """
    region = default_region or settings.default_region
    return {
        "region": apply_region(profile, job, region),
        "work_days": apply_work_days(profile, job),
        "activity": apply_activity(profile, job),
        "posture": apply_posture(profile, job),
        "social": apply_social(profile, job, signals),
        "salary": apply_salary(profile, job, signals),
        "digital": apply_digital(profile, job, signals),
    }


def score_job(
    profile: SeniorProfile,
    job: JobItem,
    *,
    default_region: Optional[str] = None,
    signals: TextSignals = DEFAULT_SIGNALS,
) -> float:
    """
    Additive compatibility score of one job for one profile. Only meaningful
    relative to other jobs scored against the same profile.
    """
    components = score_job_components(profile, job, default_region=default_region, signals=signals)
    return float(sum(components.values()))
