from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CareerOptionRead(BaseModel):
    id: int
    title: str
    category: str
    description: str
    salary_min: int | None = None
    salary_max: int | None = None
    difficulty_level: str | None = None
    required_skills: list[str] = Field(default_factory=list)
    growth_outlook: str | None = None
    is_active: bool = True
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class CareerOptionPage(BaseModel):
    items: list[CareerOptionRead]
    total: int
    limit: int
    offset: int


class CareerSkillRead(BaseModel):
    id: int
    skill_name: str
    skill_type: str
    importance_level: int
    difficulty: str | None = None
    description: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CareerCourseRead(BaseModel):
    id: int
    title: str
    description: str | None = None
    provider: str | None = None
    url: str | None = None
    difficulty: str
    duration: str | None = None
    is_free: bool = True

    model_config = ConfigDict(from_attributes=True)


class CareerProjectRead(BaseModel):
    id: int
    title: str
    description: str | None = None
    difficulty: str
    technologies: list[str] | None = None
    estimated_duration: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CareerResourceRead(BaseModel):
    id: int
    resource_type: str
    title: str
    description: str | None = None
    url: str | None = None
    is_free: bool = True
    difficulty: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CareerPathSummary(BaseModel):
    id: int
    title: str
    category: str
    description: str | None = None
    growth_outlook: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CareerPathDetail(CareerPathSummary):
    overview: str | None = None
    day_in_life: str | None = None
    salary_expectations: str | None = None
    skills: list[CareerSkillRead] = Field(default_factory=list)
    courses: list[CareerCourseRead] = Field(default_factory=list)
    projects: list[CareerProjectRead] = Field(default_factory=list)
    resources: list[CareerResourceRead] = Field(default_factory=list)
