# __init__.py
from careercoach.schemas.careers import CareerOptionPage, CareerOptionRead, CareerPathDetail, CareerPathSummary
from careercoach.schemas.coach import (
	AssessmentAnalysisRequest,
	CareerCoachRequest,
	ConversationTurn,
	LearningPathRequest,
	MockInterviewRequest,
	ResumeAnalysisRequest,
	RoadmapRequest,
	UserProfileContext,
)
from careercoach.schemas.recommendation import (
	CareerRecommendation,
	CareerRoadmap,
	InterviewQuestion,
	LearningPath,
	ResumeAnalysis,
	RoadmapPhase,
)

__all__ = [
	"AssessmentAnalysisRequest",
	"CareerCoachRequest",
	"ConversationTurn",
	"LearningPathRequest",
	"MockInterviewRequest",
	"ResumeAnalysisRequest",
	"RoadmapRequest",
	"UserProfileContext",
	"CareerRecommendation",
	"CareerRoadmap",
	"InterviewQuestion",
	"LearningPath",
	"ResumeAnalysis",
	"RoadmapPhase",
	"CareerOptionPage",
	"CareerOptionRead",
	"CareerPathDetail",
	"CareerPathSummary",
]
