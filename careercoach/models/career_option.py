from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String, Text
from sqlalchemy.sql import func

from careercoach.database import Base


class CareerOption(Base):
    __tablename__ = "career_options"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    category = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)

    # Annual salary in rupees.
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)

    difficulty_level = Column(String(32), nullable=True)

    # Ordered list[str]; the first entries are treated as the key skills.
    required_skills = Column(JSON, nullable=False, default=list)

    growth_outlook = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
