from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from seniormatch.matching.models import EducationItem, JobItem, PolicyItem, ProgramItem
from seniormatch.matching.programs import education_to_program, job_to_program, policy_to_program

JOBS_FILE = "jobs.json"
POLICIES_FILE = "policies.json"
EDUCATIONS_FILE = "educations.json"
PARSED_DIR = "parsed"


@dataclass(frozen=True)
class Catalog:
    """Read-only snapshot of every catalog entry, loaded once per process."""

    jobs: Tuple[JobItem, ...] = ()
    policies: Tuple[PolicyItem, ...] = ()
    educations: Tuple[EducationItem, ...] = ()
    parsed_programs: Tuple[ProgramItem, ...] = ()

    def all_programs(self) -> List[ProgramItem]:
        return [
            *(job_to_program(j) for j in self.jobs),
            *(policy_to_program(p) for p in self.policies),
            *(education_to_program(e) for e in self.educations),
            *self.parsed_programs,
        ]

    def job_by_id(self, job_id: Optional[str]) -> Optional[JobItem]:
        if not job_id:
            return None
        for job in self.jobs:
            if job.id == job_id:
                return job
        return None

    def breakdown(self) -> Dict[str, int]:
        return {
            "jobs": len(self.jobs),
            "policies": len(self.policies),
            "educations": len(self.educations),
            "parsed": len(self.parsed_programs),
        }


def _read_array(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        logger.warning("Catalog file missing: {}", path)
        return []
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Catalog file {path} must hold a JSON array")
    return data


def _read_parsed_programs(parsed_dir: Path) -> List[ProgramItem]:
    if not parsed_dir.is_dir():
        return []
    programs: List[ProgramItem] = []
    for file in sorted(parsed_dir.glob("*.json")):
        try:
            payload = json.loads(file.read_text(encoding="utf-8"))
            items = payload.get("programs") if isinstance(payload, dict) else None
            if isinstance(items, list):
                programs.extend(ProgramItem(**item) for item in items)
        except Exception as exc:
            # one broken upload should not hide the rest of the catalog
            logger.warning("Failed to read parsed file {}: {}", file.name, exc)
    return programs


def load_catalog(data_dir: Path) -> Catalog:
    data_dir = Path(data_dir)
    catalog = Catalog(
        jobs=tuple(JobItem(**row) for row in _read_array(data_dir / JOBS_FILE)),
        policies=tuple(PolicyItem(**row) for row in _read_array(data_dir / POLICIES_FILE)),
        educations=tuple(EducationItem(**row) for row in _read_array(data_dir / EDUCATIONS_FILE)),
        parsed_programs=tuple(_read_parsed_programs(data_dir / PARSED_DIR)),
    )
    logger.info("Loaded catalog from {}: {}", data_dir, catalog.breakdown())
    return catalog
