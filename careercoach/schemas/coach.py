# coach.py
from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


CoachingType = Literal["general", "interview", "resume", "learning_path"]
InterviewType = Literal["technical", "behavioral", "system_design", "hr"]
Difficulty = Literal["beginner", "intermediate", "advanced"]
LearningStyle = Literal["visual", "hands-on", "theoretical", "mixed"]


class CoachRequestModel(BaseModel):
    """Base for request bodies: camelCase on the wire, snake_case in Python.

    Whitespace is stripped before length checks, so "   " counts as empty.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class ConversationTurn(CoachRequestModel):
    role: Literal["user", "assistant"]
    content: str


class UserProfileContext(CoachRequestModel):
    current_role: str | None = None
    experience: str | None = None
    skills: list[str] = Field(default_factory=list)
    goals: list[str] = Field(default_factory=list)
    education: str | None = None
    location: str | None = None


class CareerCoachRequest(CoachRequestModel):
    message: str = Field(min_length=1)
    # The chat widget historically posted snake_case history; accept both.
    conversation_history: list[ConversationTurn] = Field(
        default_factory=list,
        validation_alias=AliasChoices("conversationHistory", "conversation_history"),
    )
    coaching_type: CoachingType = "general"
    user_profile: UserProfileContext | None = None
    context_data: Any = None


class MockInterviewRequest(CoachRequestModel):
    role: str = Field(min_length=1)
    experience: str = Field(min_length=1)
    interview_type: InterviewType
    difficulty: Difficulty
    company_type: str | None = None
    previous_questions: list[str] = Field(default_factory=list)


class ResumeAnalysisRequest(CoachRequestModel):
    resume_text: str = Field(min_length=50)
    target_role: str | None = None
    target_company: str | None = None
    job_description: str | None = None


class LearningPathRequest(CoachRequestModel):
    current_skills: list[Annotated[str, Field(min_length=1)]] = Field(min_length=1)
    target_role: str = Field(min_length=1)
    timeframe: str = Field(min_length=1)
    learning_style: LearningStyle
    experience: str = Field(min_length=1)


class AssessmentAnalysisRequest(CoachRequestModel):
    message: str = Field(min_length=1)
    context: Any = None


class RoadmapRequest(CoachRequestModel):
    message: str = Field(min_length=1)
    career: str = Field(min_length=1)
    context: Any = None
