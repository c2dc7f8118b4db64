from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from careercoach.database import Base


DIFFICULTY_TIERS = ("Beginner", "Intermediate", "Advanced")


class CareerPath(Base):
    __tablename__ = "career_paths"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    category = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    overview = Column(Text, nullable=True)
    day_in_life = Column(Text, nullable=True)
    salary_expectations = Column(Text, nullable=True)
    growth_outlook = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    skills = relationship(
        "CareerSkill",
        back_populates="career_path",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CareerSkill.id",
    )
    courses = relationship(
        "CareerCourse",
        back_populates="career_path",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: [CareerCourse.sort_order, CareerCourse.id],
    )
    projects = relationship(
        "CareerProject",
        back_populates="career_path",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: [CareerProject.sort_order, CareerProject.id],
    )
    resources = relationship(
        "CareerResource",
        back_populates="career_path",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CareerResource.id",
    )


class CareerSkill(Base):
    __tablename__ = "career_skills"

    id = Column(Integer, primary_key=True, index=True)
    career_path_id = Column(Integer, ForeignKey("career_paths.id", ondelete="CASCADE"), nullable=False, index=True)
    skill_name = Column(String(255), nullable=False)
    skill_type = Column(String(16), nullable=False, default="technical")  # technical | soft
    importance_level = Column(Integer, nullable=False, default=3)  # 1..5
    difficulty = Column(String(16), nullable=True)
    description = Column(Text, nullable=True)

    career_path = relationship("CareerPath", back_populates="skills")


class CareerCourse(Base):
    __tablename__ = "career_courses"

    id = Column(Integer, primary_key=True, index=True)
    career_path_id = Column(Integer, ForeignKey("career_paths.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    provider = Column(String(255), nullable=True)
    url = Column(String(1024), nullable=True)
    difficulty = Column(String(16), nullable=False, default="Beginner")
    duration = Column(String(64), nullable=True)
    is_free = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)

    career_path = relationship("CareerPath", back_populates="courses")


class CareerProject(Base):
    __tablename__ = "career_projects"

    id = Column(Integer, primary_key=True, index=True)
    career_path_id = Column(Integer, ForeignKey("career_paths.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    difficulty = Column(String(16), nullable=False, default="Beginner")
    technologies = Column(JSON, nullable=True)
    estimated_duration = Column(String(64), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    career_path = relationship("CareerPath", back_populates="projects")


class CareerResource(Base):
    __tablename__ = "career_resources"

    id = Column(Integer, primary_key=True, index=True)
    career_path_id = Column(Integer, ForeignKey("career_paths.id", ondelete="CASCADE"), nullable=False, index=True)
    resource_type = Column(String(32), nullable=False)  # book | website | certification | community
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String(1024), nullable=True)
    is_free = Column(Boolean, nullable=False, default=True)
    difficulty = Column(String(16), nullable=True)

    career_path = relationship("CareerPath", back_populates="resources")
