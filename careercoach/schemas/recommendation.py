# recommendation.py
from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clamp_score(value: Any, *, low: int = 0, high: int = 100) -> int:
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"score must be a number, got {type(value).__name__}")
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
    number = float(value)
    if not math.isfinite(number):
        raise ValueError("score must be finite")
    return max(low, min(high, int(round(number))))


def _coerce_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"expected a list of strings, got {type(value).__name__}")
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


class CareerRecommendation(BaseModel):
    """One recommended career.

    The AI path and the fallback path both produce exactly this shape.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    description: str
    match_percentage: int = Field(ge=0, le=100)
    salary_range: str
    growth_outlook: str
    key_skills: list[str]
    daily_tasks: list[str]
    learning_path: list[str]
    time_to_proficiency: str
    difficulty_level: str
    industry_demand: str
    reasons: list[str]

    @field_validator("match_percentage", mode="before")
    @classmethod
    def _clamp_match(cls, v: Any) -> int:
        return _clamp_score(v)

    @field_validator("key_skills", "daily_tasks", "learning_path", "reasons", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[str]:
        return _coerce_str_list(v)


class CareerRecommendationSet(BaseModel):
    recommendations: list[CareerRecommendation] = Field(min_length=1)


class RoadmapPhase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    phase: str = Field(min_length=1)
    duration: str
    description: str
    milestones: list[str] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)

    @field_validator("milestones", "resources", "projects", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[str]:
        return _coerce_str_list(v)


class SalaryProgression(BaseModel):
    entry_level: str = ""
    mid_level: str = ""
    senior_level: str = ""


class CareerRoadmap(BaseModel):
    model_config = ConfigDict(extra="ignore")

    career_path: str = Field(min_length=1)
    overview: str
    total_duration: str
    phases: list[RoadmapPhase] = Field(min_length=1)
    key_skills: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    salary_progression: SalaryProgression = Field(default_factory=SalaryProgression)
    next_steps: list[str] = Field(default_factory=list)

    @field_validator("key_skills", "certifications", "next_steps", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[str]:
        return _coerce_str_list(v)


class InterviewQuestion(BaseModel):
    model_config = ConfigDict(extra="ignore")

    question: str = Field(min_length=1)
    category: str = "general"
    difficulty: str = "intermediate"
    tips: list[str] = Field(default_factory=list)
    follow_ups: list[str] = Field(default_factory=list)

    @field_validator("tips", "follow_ups", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [v.strip()] if v.strip() else []
        return _coerce_str_list(v)


class InterviewQuestionSet(BaseModel):
    questions: list[InterviewQuestion] = Field(min_length=1)


class ResumeAnalysis(BaseModel):
    model_config = ConfigDict(extra="ignore")

    overall_score: int = Field(ge=0, le=100)
    ats_compatibility: int = Field(ge=0, le=100)
    summary: str = ""
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)
    section_feedback: dict[str, str] = Field(default_factory=dict)
    formatting_suggestions: list[str] = Field(default_factory=list)
    content_suggestions: list[str] = Field(default_factory=list)
    keywords_to_add: list[str] = Field(default_factory=list)

    @field_validator("overall_score", "ats_compatibility", mode="before")
    @classmethod
    def _clamp_scores(cls, v: Any) -> int:
        return _clamp_score(v)

    @field_validator(
        "strengths",
        "areas_for_improvement",
        "formatting_suggestions",
        "content_suggestions",
        "keywords_to_add",
        mode="before",
    )
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[str]:
        return _coerce_str_list(v)


class LearningResource(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    type: str = "course"
    url: str | None = None
    description: str = ""


class LearningMilestone(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    description: str = ""
    duration: str = ""
    skills: list[str] = Field(default_factory=list)
    resources: list[LearningResource] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)

    @field_validator("skills", "projects", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[str]:
        return _coerce_str_list(v)


class LearningPath(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    overview: str = ""
    total_duration: str = ""
    learning_style: str = ""
    skill_gaps: list[str] = Field(default_factory=list)
    milestones: list[LearningMilestone] = Field(min_length=1)
    weekly_commitment: str = ""

    @field_validator("skill_gaps", mode="before")
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[str]:
        return _coerce_str_list(v)
