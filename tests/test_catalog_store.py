from __future__ import annotations

import json
from pathlib import Path

import pytest

from seniormatch.config.catalog_store import load_catalog

DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def _write(path: Path, payload) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def test_load_catalog_with_parsed_programs(tmp_path: Path):
    _write(tmp_path / "jobs.json", [{"id": "job_1", "title": "경비", "region": "부산", "work_days": 3}])
    _write(tmp_path / "policies.json", [{"id": "policy_1", "title": "지원", "region": "전국"}])
    _write(
        tmp_path / "parsed" / "flyer.json",
        {"programs": [{"id": "parsed_1", "title": "문화센터 강좌", "type": "education", "region": "부산"}]},
    )
    (tmp_path / "parsed" / "broken.json").write_text("{not json", encoding="utf-8")

    catalog = load_catalog(tmp_path)

    assert catalog.breakdown() == {"jobs": 1, "policies": 1, "educations": 0, "parsed": 1}
    programs = catalog.all_programs()
    assert [p.type for p in programs] == ["job", "policy", "education"]
    assert programs[0].duration == "주 3일"
    assert catalog.job_by_id("job_1").title == "경비"
    assert catalog.job_by_id("missing") is None


def test_catalog_rejects_non_array(tmp_path: Path):
    _write(tmp_path / "jobs.json", {"id": "job_1"})
    with pytest.raises(ValueError):
        load_catalog(tmp_path)


def test_bundled_sample_catalog_loads():
    catalog = load_catalog(DATA_DIR)
    assert catalog.jobs and catalog.policies and catalog.educations
    assert all(job.min_salary <= job.max_salary for job in catalog.jobs)
