from __future__ import annotations

import json
from typing import Any

from careercoach.schemas.coach import (
    CareerCoachRequest,
    LearningPathRequest,
    MockInterviewRequest,
    ResumeAnalysisRequest,
    UserProfileContext,
)


BASE_PERSONA = (
    "You are an expert AI career coach for Indian Gen Z students and early-career professionals. "
    "Be supportive, specific and practical. Tailor advice to the Indian job market and education system "
    "and prefer resources that are accessible in India. Keep answers concise."
)

MODE_INSTRUCTIONS = {
    "general": "Give broad career guidance: exploring paths, skills, industry insights and salary expectations.",
    "interview": "Focus on interview preparation: likely questions, answer strategies and negotiation tips.",
    "resume": "Focus on resume and LinkedIn improvements: structure, ATS keywords and impact statements.",
    "learning_path": "Focus on learning plans: skill gaps, milestones, resources and portfolio projects.",
}

RECOMMENDATION_FIELDS = (
    "title, description, match_percentage (integer 0-100), salary_range (in LPA), growth_outlook, "
    "key_skills (list), daily_tasks (list), learning_path (list), time_to_proficiency, difficulty_level, "
    "industry_demand, reasons (list)"
)


def system_prompt(mode: str, profile: UserProfileContext | None = None) -> str:
    parts = [BASE_PERSONA, MODE_INSTRUCTIONS.get(mode, MODE_INSTRUCTIONS["general"])]
    if profile is not None:
        details = []
        if profile.current_role:
            details.append(f"- Current role: {profile.current_role}")
        if profile.experience:
            details.append(f"- Experience: {profile.experience}")
        if profile.skills:
            details.append(f"- Skills: {', '.join(profile.skills)}")
        if profile.goals:
            details.append(f"- Goals: {', '.join(profile.goals)}")
        if profile.education:
            details.append(f"- Education: {profile.education}")
        if profile.location:
            details.append(f"- Location: {profile.location}")
        if details:
            parts.append("Information about the user:\n" + "\n".join(details))
    return "\n\n".join(parts)


def _context_block(context: Any) -> str:
    if context in (None, "", {}, []):
        return ""
    if isinstance(context, str):
        return f"\n\nAdditional context:\n{context}"
    return f"\n\nAdditional context (JSON):\n{json.dumps(context, ensure_ascii=False, default=str)}"


def chat_prompt(request: CareerCoachRequest) -> str:
    return request.message + _context_block(request.context_data)


def assessment_prompt(message: str, context: Any) -> str:
    return (
        "Analyse this career assessment and recommend exactly 3 careers.\n\n"
        f"{message}{_context_block(context)}\n\n"
        'Respond with ONLY a JSON object of the form {"recommendations": [...]} where every item has: '
        f"{RECOMMENDATION_FIELDS}."
    )


def roadmap_prompt(career: str, message: str, context: Any) -> str:
    return (
        f"Create a step-by-step career roadmap for becoming a {career}.\n\n"
        f"{message}{_context_block(context)}\n\n"
        "Respond with ONLY a JSON object with keys: career_path, overview, total_duration, "
        "phases (list of {phase, duration, description, milestones, resources, projects}), key_skills, "
        "certifications, salary_progression ({entry_level, mid_level, senior_level}), next_steps."
    )


def mock_interview_prompt(request: MockInterviewRequest) -> str:
    lines = [
        f"Generate 5 {request.difficulty} {request.interview_type.replace('_', ' ')} interview questions "
        f"for a {request.role} candidate with {request.experience} of experience.",
    ]
    if request.company_type:
        lines.append(f"The company is a {request.company_type}.")
    if request.previous_questions:
        lines.append("Do not repeat any of these questions:\n- " + "\n- ".join(request.previous_questions))
    lines.append(
        'Respond with ONLY a JSON object {"questions": [...]} where each item has: question, category, '
        "difficulty, tips (list), follow_ups (list)."
    )
    return "\n".join(lines)


def resume_prompt(request: ResumeAnalysisRequest) -> str:
    lines = ["Review this resume.", "", "Resume:", request.resume_text]
    if request.target_role:
        lines += ["", f"Target role: {request.target_role}"]
    if request.target_company:
        lines += [f"Target company: {request.target_company}"]
    if request.job_description:
        lines += ["", "Job description:", request.job_description]
    lines += [
        "",
        "Respond with ONLY a JSON object with keys: overall_score (0-100), ats_compatibility (0-100), summary, "
        "strengths, areas_for_improvement, section_feedback (object with header, education, experience, skills, "
        "projects), formatting_suggestions, content_suggestions, keywords_to_add.",
    ]
    return "\n".join(lines)


def learning_path_prompt(request: LearningPathRequest) -> str:
    return (
        f"Create a personalised learning path to become a {request.target_role}.\n"
        f"- Current skills: {', '.join(request.current_skills)}\n"
        f"- Experience: {request.experience}\n"
        f"- Timeframe: {request.timeframe}\n"
        f"- Learning style: {request.learning_style}\n\n"
        "Respond with ONLY a JSON object with keys: title, overview, total_duration, learning_style, "
        "skill_gaps (list), milestones (list of {title, description, duration, skills, "
        "resources: [{title, type, url, description}], projects}), weekly_commitment."
    )
