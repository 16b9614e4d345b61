from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

ActivityLevel = str  # 낮음 | 중간 | 높음, free text tolerated
ProgramType = Literal["job", "policy", "education", "other"]
PARTITIONS: tuple[str, ...] = ("job", "policy", "education")


class SeniorProfile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    previous_job: str = ""
    skills: List[str] = []
    activity_level: ActivityLevel = "중간"
    work_posture: str = ""
    weekly_work_days: int = Field(default=0, ge=0)
    salary_expectation: str = ""
    social_preference: str = ""
    learning_preference: str = ""
    digital_literacy: str = ""
    motivation: str = ""
    persona_summary: str = ""
    region: Optional[str] = None  # None -> settings.default_region


class JobItem(BaseModel):
    id: str
    title: str
    region: str
    work_days: int
    work_type: str = ""
    activity_level: ActivityLevel = "중간"
    posture: str = ""
    min_salary: int = 0
    max_salary: int = 0
    social_level: str = ""
    requires_digital: bool = False
    tags: List[str] = []
    description: str = ""
    deadline: str = ""

    @field_validator("max_salary")
    @classmethod
    def _salary_bounds(cls, v, info):
        low = info.data.get("min_salary")
        if low is not None and v < low:
            raise ValueError("max_salary must be >= min_salary")
        return v


class PolicyItem(BaseModel):
    id: str
    title: str
    region: str
    target_age: str = ""
    benefit: str = ""
    description: str = ""
    link: Optional[str] = None
    deadline: Optional[str] = None
    tags: Optional[List[str]] = None


class EducationItem(BaseModel):
    id: str
    title: str
    region: str
    mode: Literal["오프라인", "온라인", "혼합", "offline", "online", "hybrid"] = "오프라인"
    duration: str = ""
    cost: Optional[str] = None
    start_date: Optional[str] = None
    requires_digital: bool = False
    tags: List[str] = []
    summary: str = ""
    provider: Optional[str] = None


class ProgramItem(BaseModel):
    """Type-discriminated view over jobs, policies and education used by retrieval."""

    model_config = ConfigDict(extra="allow")

    id: str
    title: str
    type: ProgramType = "other"
    region: str = ""
    target_age: Optional[str] = None
    description: Optional[str] = None
    benefits: Optional[str] = None
    requirements: Optional[str] = None
    duration: Optional[str] = None
    deadline: Optional[str] = None
    link: Optional[str] = None
    cost: Optional[str] = None
    start_date: Optional[str] = None
    provider: Optional[str] = None
    tags: Optional[List[str]] = None
    original_id: Optional[str] = None

    @property
    def native_id(self) -> str:
        return self.original_id or self.id


class Recommendation(BaseModel):
    type: ProgramType
    item: Union[JobItem, ProgramItem] = Field(union_mode="left_to_right")
    score: float
    reason: str = ""


class MatchOptions(BaseModel):
    top_k: int = Field(default=3, ge=1)
    use_rag: bool = True


class RecommendationResponse(BaseModel):
    jobRecommendations: List[Recommendation] = []
    policies: List[Recommendation] = []
    educations: List[Recommendation] = []
    source: Literal["rag", "rule-based"] = "rule-based"
