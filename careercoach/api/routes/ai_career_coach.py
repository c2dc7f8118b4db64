from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from careercoach.errors import InternalError
from careercoach.schemas.coach import (
    AssessmentAnalysisRequest,
    CareerCoachRequest,
    LearningPathRequest,
    MockInterviewRequest,
    ResumeAnalysisRequest,
    RoadmapRequest,
)
from careercoach.services.coach_service import CareerCoachService, get_coach_service


router = APIRouter(prefix="/ai-career-coach", tags=["ai-career-coach"])


FEATURES: dict[str, Any] = {
    "features": {
        "generalCoaching": {
            "name": "General Career Coaching",
            "description": "Career guidance, exploration and planning advice",
            "endpoint": "/chat",
        },
        "interviewCoaching": {
            "name": "Interview Preparation",
            "description": "Mock interview questions with answer tips",
            "endpoint": "/mock-interview",
        },
        "resumeOptimization": {
            "name": "Resume Optimization",
            "description": "Resume scoring, ATS checks and improvement suggestions",
            "endpoint": "/analyze-resume",
        },
        "learningPath": {
            "name": "Personalized Learning Path",
            "description": "Milestone-based learning plans toward a target role",
            "endpoint": "/learning-path",
        },
    },
    "supportedRoles": [
        "Software Developer",
        "Data Scientist",
        "Product Manager",
        "UX/UI Designer",
        "Digital Marketing Specialist",
        "Cybersecurity Analyst",
        "DevOps Engineer",
        "Business Analyst",
    ],
    "interviewTypes": ["technical", "behavioral", "system_design", "hr"],
    "difficulties": ["beginner", "intermediate", "advanced"],
    "learningStyles": ["visual", "hands-on", "theoretical", "mixed"],
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@contextmanager
def _endpoint_failure(message: str) -> Iterator[None]:
    try:
        yield
    except InternalError as exc:
        raise InternalError(str(exc), public_message=message) from exc
    except SQLAlchemyError as exc:
        raise InternalError(f"database error: {type(exc).__name__}", public_message=message) from exc


@router.post("/chat", summary="Conversational career coaching")
def chat(payload: CareerCoachRequest, service: CareerCoachService = Depends(get_coach_service)) -> dict[str, Any]:
    with _endpoint_failure("Failed to process career coaching request"):
        result = service.chat(payload)

    return {
        "success": True,
        "response": result.payload,
        "message": result.payload,
        "coachingType": payload.coaching_type,
        "source": result.source,
    }


@router.post("/mock-interview", summary="Generate mock interview questions")
def mock_interview(
    payload: MockInterviewRequest,
    service: CareerCoachService = Depends(get_coach_service),
) -> dict[str, Any]:
    with _endpoint_failure("Failed to generate mock interview questions"):
        result = service.mock_interview(payload)

    questions = [q.model_dump(mode="json") for q in result.payload]
    return {
        "success": True,
        "questions": questions,
        "sessionInfo": {
            "role": payload.role,
            "type": payload.interview_type,
            "difficulty": payload.difficulty,
            "questionCount": len(questions),
        },
        "source": result.source,
    }


@router.post("/analyze-resume", summary="Score and critique a resume")
def analyze_resume(
    payload: ResumeAnalysisRequest,
    service: CareerCoachService = Depends(get_coach_service),
) -> dict[str, Any]:
    with _endpoint_failure("Failed to analyze resume"):
        result = service.analyze_resume(payload)

    return {
        "success": True,
        "analysis": result.payload.model_dump(mode="json"),
        "timestamp": _now(),
        "source": result.source,
    }


@router.post("/learning-path", summary="Build a personalised learning path")
def learning_path(
    payload: LearningPathRequest,
    service: CareerCoachService = Depends(get_coach_service),
) -> dict[str, Any]:
    with _endpoint_failure("Failed to generate learning path"):
        result = service.learning_path(payload)

    return {
        "success": True,
        "learningPath": result.payload.model_dump(mode="json"),
        "generatedAt": _now(),
        "profile": {
            "targetRole": payload.target_role,
            "timeframe": payload.timeframe,
            "currentSkillCount": len(payload.current_skills),
        },
        "source": result.source,
    }


@router.post("/analyze", summary="Recommend careers from an assessment")
def analyze_assessment(
    payload: AssessmentAnalysisRequest,
    service: CareerCoachService = Depends(get_coach_service),
) -> dict[str, Any]:
    with _endpoint_failure("Failed to analyze career assessment"):
        result = service.analyze_assessment(payload.message, payload.context)

    return {
        "success": True,
        "recommendations": [rec.model_dump(mode="json") for rec in result.payload],
        "rawResponse": result.raw_response,
        "source": result.source,
    }


@router.post("/roadmap", summary="Generate a career roadmap")
def roadmap(payload: RoadmapRequest, service: CareerCoachService = Depends(get_coach_service)) -> dict[str, Any]:
    with _endpoint_failure("Failed to generate career roadmap"):
        result = service.roadmap(payload.career, payload.message, payload.context)

    return {
        "success": True,
        "roadmap": result.payload.model_dump(mode="json"),
        "rawResponse": result.raw_response,
        "source": result.source,
    }


@router.get("/features", summary="Describe the coach's capabilities")
def features() -> dict[str, Any]:
    return {"success": True, **FEATURES}
