from __future__ import annotations

from seniormatch.matching.scoring import score_job, score_job_components

from conftest import make_job, make_profile


def test_reference_profile_scores_ten():
    profile = make_profile(work_posture="")
    job = make_job()
    components = score_job_components(profile, job)
    assert components == {
        "region": 3.0,
        "work_days": 2.0,
        "activity": 2.0,
        "posture": 0.0,
        "social": 1.0,
        "salary": 2.0,
        "digital": 0.0,
    }
    assert score_job(profile, job) == 10


def test_exact_work_days_never_scores_lower():
    profile = make_profile(weekly_work_days=3)
    exact = make_job(work_days=3)
    for days in (0, 1, 2, 4, 5, 6, 7):
        assert score_job(profile, exact) >= score_job(profile, make_job(work_days=days))


def test_missing_weekly_days_defaults_to_three():
    profile = make_profile(weekly_work_days=0)
    assert score_job_components(profile, make_job(work_days=3))["work_days"] == 2.0


def test_digital_penalty_is_exactly_two():
    profile = make_profile(digital_literacy="낮은 편")
    with_digital = make_job(requires_digital=True)
    without_digital = make_job(requires_digital=False)
    assert score_job(profile, without_digital) - score_job(profile, with_digital) == 2


def test_no_digital_penalty_for_capable_profile():
    profile = make_profile(digital_literacy="높음")
    assert score_job(profile, make_job(requires_digital=True)) == score_job(profile, make_job())


def test_activity_mismatch_is_penalised():
    profile = make_profile(activity_level="낮음")
    assert score_job_components(profile, make_job(activity_level="높음"))["activity"] == -1.0
    assert score_job_components(profile, make_job(activity_level="중간"))["activity"] == 1.0
    # unknown levels count as 중간
    assert score_job_components(make_profile(activity_level="모름"), make_job(activity_level="중간"))["activity"] == 2.0


def test_posture_substring_bonus():
    profile = make_profile(work_posture="앉아서")
    assert score_job_components(profile, make_job(posture="주로 앉아서 근무"))["posture"] == 1.5
    assert score_job_components(profile, make_job(posture="서서"))["posture"] == 0.0


def test_social_preference():
    alone = make_profile(social_preference="혼자가 편해요")
    assert score_job_components(alone, make_job(social_level="낮음"))["social"] == 1.0
    assert score_job_components(alone, make_job(social_level="높음"))["social"] == 0.0
    together = make_profile(social_preference="같이 하는 일")
    assert score_job_components(together, make_job(social_level="낮음"))["social"] == 0.0


def test_salary_near_range_gets_partial_credit():
    profile = make_profile(salary_expectation="월 1,700,000원")
    assert score_job_components(profile, make_job())["salary"] == 1.0
    far = make_profile(salary_expectation="월 1,000,000원")
    assert score_job_components(far, make_job())["salary"] == 0.0


def test_unparseable_salary_contributes_nothing():
    profile = make_profile(salary_expectation="협의 가능")
    assert score_job_components(profile, make_job())["salary"] == 0.0


def test_missing_region_uses_default_region():
    profile = make_profile(region=None)
    assert score_job_components(profile, make_job(region="부산"), default_region="부산")["region"] == 3.0
    assert score_job_components(profile, make_job(region="부산"), default_region="서울")["region"] == 0.0
