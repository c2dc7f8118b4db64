from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Literal, TypeVar

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careercoach.database import get_db
from careercoach.errors import InternalError, UpstreamUnavailable
from careercoach.schemas.coach import (
    CareerCoachRequest,
    LearningPathRequest,
    MockInterviewRequest,
    ResumeAnalysisRequest,
)
from careercoach.schemas.recommendation import (
    CareerRecommendation,
    CareerRoadmap,
    InterviewQuestion,
    InterviewQuestionSet,
    LearningPath,
    ResumeAnalysis,
)
from careercoach.services import prompts
from careercoach.services.ai_gateway import AIGateway, CoachContext, get_ai_gateway
from careercoach.services.coach_fallbacks import build_chat_reply, build_interview_questions, build_resume_analysis
from careercoach.services.fallback_recommender import (
    MAX_RECOMMENDATIONS,
    JitterSource,
    detect_interest_bucket,
    recommend_careers,
)
from careercoach.services.response_parser import ParseResult, parse_model, parse_recommendations, parse_roadmap
from careercoach.services.roadmap_builder import build_fallback_learning_path, build_fallback_roadmap


logger = logging.getLogger(__name__)

T = TypeVar("T")
Source = Literal["ai", "fallback"]


@dataclass(frozen=True)
class CoachResult(Generic[T]):
    payload: T
    source: Source
    raw_response: str | None = None


def _context_text(context: Any) -> str:
    if context is None:
        return ""
    if isinstance(context, str):
        return context
    return json.dumps(context, ensure_ascii=False, default=str)


class CareerCoachService:
    """Runs every coach task as: AI attempt -> validated parse -> fallback.

    Provider failures and unusable provider output are both handled here;
    only database failures escape, as `InternalError`.
    """

    def __init__(self, db: Session, gateway: AIGateway, *, jitter: JitterSource | None = None) -> None:
        self.db = db
        self.gateway = gateway
        self.jitter = jitter

    def _attempt(
        self,
        task: str,
        prompt: str,
        context: CoachContext,
        parser: Callable[[str], ParseResult[T]],
    ) -> tuple[T | None, str | None]:
        try:
            text = self.gateway.complete(prompt, context)
        except UpstreamUnavailable as exc:
            logger.warning("coach.fallback task=%s reason=upstream_unavailable detail=%s", task, exc)
            return None, None

        parsed = parser(text)
        if not parsed.ok:
            logger.warning("coach.fallback task=%s reason=parse_error detail=%s", task, parsed.error)
            return None, text
        return parsed.value, text

    def _fallback(self, task: str, build: Callable[[], T]) -> T:
        try:
            return build()
        except SQLAlchemyError as exc:
            logger.exception("coach.fallback task=%s database failure", task)
            raise InternalError(f"{task} fallback could not read the career catalogue") from exc

    def chat(self, request: CareerCoachRequest) -> CoachResult[str]:
        context = CoachContext(
            system_prompt=prompts.system_prompt(request.coaching_type, request.user_profile),
            mode=request.coaching_type,
            history=[turn.model_dump() for turn in request.conversation_history],
            profile=request.user_profile.model_dump() if request.user_profile else None,
        )
        try:
            text = self.gateway.complete(prompts.chat_prompt(request), context)
            return CoachResult(payload=text, source="ai", raw_response=text)
        except UpstreamUnavailable as exc:
            logger.warning("coach.fallback task=chat reason=upstream_unavailable detail=%s", exc)

        def build() -> str:
            recommendations: list[CareerRecommendation] = []
            if request.coaching_type == "general" and detect_interest_bucket(request.message) is not None:
                recommendations = recommend_careers(self.db, request.message, jitter=self.jitter)
            return build_chat_reply(request, recommendations)

        return CoachResult(payload=self._fallback("chat", build), source="fallback")

    def mock_interview(self, request: MockInterviewRequest) -> CoachResult[list[InterviewQuestion]]:
        context = CoachContext(
            system_prompt=prompts.system_prompt("interview"),
            mode="interview",
            expect_json=True,
        )
        parsed, raw = self._attempt(
            "mock_interview",
            prompts.mock_interview_prompt(request),
            context,
            lambda text: parse_model(text, InterviewQuestionSet),
        )
        if parsed is not None:
            return CoachResult(payload=parsed.questions, source="ai", raw_response=raw)
        return CoachResult(payload=build_interview_questions(request), source="fallback", raw_response=raw)

    def analyze_resume(self, request: ResumeAnalysisRequest) -> CoachResult[ResumeAnalysis]:
        context = CoachContext(
            system_prompt=prompts.system_prompt("resume"),
            mode="resume",
            expect_json=True,
            temperature=0.5,
        )
        parsed, raw = self._attempt(
            "analyze_resume",
            prompts.resume_prompt(request),
            context,
            lambda text: parse_model(text, ResumeAnalysis, envelope="analysis"),
        )
        if parsed is not None:
            return CoachResult(payload=parsed, source="ai", raw_response=raw)
        return CoachResult(payload=build_resume_analysis(request), source="fallback", raw_response=raw)

    def learning_path(self, request: LearningPathRequest) -> CoachResult[LearningPath]:
        context = CoachContext(
            system_prompt=prompts.system_prompt("learning_path"),
            mode="learning_path",
            expect_json=True,
        )
        parsed, raw = self._attempt(
            "learning_path",
            prompts.learning_path_prompt(request),
            context,
            lambda text: parse_model(text, LearningPath, envelope="learningPath"),
        )
        if parsed is not None:
            return CoachResult(payload=parsed, source="ai", raw_response=raw)
        payload = self._fallback("learning_path", lambda: build_fallback_learning_path(self.db, request))
        return CoachResult(payload=payload, source="fallback", raw_response=raw)

    def analyze_assessment(self, message: str, context_data: Any = None) -> CoachResult[list[CareerRecommendation]]:
        context = CoachContext(
            system_prompt=prompts.system_prompt("general"),
            mode="general",
            expect_json=True,
        )
        parsed, raw = self._attempt(
            "analyze_assessment",
            prompts.assessment_prompt(message, context_data),
            context,
            parse_recommendations,
        )
        if parsed is not None:
            return CoachResult(payload=parsed[:MAX_RECOMMENDATIONS], source="ai", raw_response=raw)

        text = " ".join(filter(None, [message, _context_text(context_data)]))
        payload = self._fallback("analyze_assessment", lambda: recommend_careers(self.db, text, jitter=self.jitter))
        return CoachResult(payload=payload, source="fallback", raw_response=raw)

    def roadmap(self, career: str, message: str, context_data: Any = None) -> CoachResult[CareerRoadmap]:
        context = CoachContext(
            system_prompt=prompts.system_prompt("learning_path"),
            mode="learning_path",
            expect_json=True,
        )
        parsed, raw = self._attempt(
            "roadmap",
            prompts.roadmap_prompt(career, message, context_data),
            context,
            parse_roadmap,
        )
        if parsed is not None:
            return CoachResult(payload=parsed, source="ai", raw_response=raw)
        payload = self._fallback("roadmap", lambda: build_fallback_roadmap(self.db, career))
        return CoachResult(payload=payload, source="fallback", raw_response=raw)


def get_coach_service(
    request: Request,
    db: Session = Depends(get_db),
    gateway: AIGateway = Depends(get_ai_gateway),
) -> CareerCoachService:
    jitter = getattr(request.app.state, "jitter_source", None)
    return CareerCoachService(db, gateway, jitter=jitter)
