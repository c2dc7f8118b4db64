from __future__ import annotations

import json

import pytest
from sqlalchemy.exc import OperationalError

from conftest import FakeGateway, seed_career_options, seed_data_scientist_path


PREFIX = "/api/ai-career-coach"

RESUME = (
    "Jane Doe\njane@example.com\n\nExperience\nBuilt and launched a Django app used by 2,000 students, "
    "reducing manual registration work by 40%.\n\nEducation\nB.Tech Computer Science, 2024\n\n"
    "Skills\nPython, SQL, Django, Git\n\nProjects\nCampus events portal"
)


def _recommendation(title: str) -> dict:
    return {
        "title": title,
        "description": "d",
        "match_percentage": 91,
        "salary_range": "₹6-12 LPA",
        "growth_outlook": "Excellent",
        "key_skills": ["Python"],
        "daily_tasks": ["Build things"],
        "learning_path": ["Basics"],
        "time_to_proficiency": "6-12 months",
        "difficulty_level": "Intermediate",
        "industry_demand": "High",
        "reasons": ["Fits you"],
    }


def test_chat_fallback_always_has_a_response(client, gateway: FakeGateway) -> None:
    r = client.post(f"{PREFIX}/chat", json={"message": "What career suits me?"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["source"] == "fallback"
    assert body["coachingType"] == "general"
    assert body["response"].strip()
    assert body["message"] == body["response"]
    assert len(gateway.calls) == 1


def test_chat_fallback_mentions_catalogue_careers(client, db) -> None:
    seed_career_options(db)

    r = client.post(f"{PREFIX}/chat", json={"message": "I love programming", "coachingType": "general"})

    assert r.status_code == 200
    assert "Cloud Engineer" in r.json()["response"]


def test_chat_uses_ai_reply_and_history(client, gateway: FakeGateway) -> None:
    gateway.responses.append("Focus on SQL and build a dashboard.")
    payload = {
        "message": "What next?",
        "coachingType": "interview",
        "conversation_history": [
            {"role": "user", "content": "I am a fresher"},
            {"role": "assistant", "content": "Great, tell me more."},
        ],
        "userProfile": {"currentRole": "Intern", "skills": ["Python"]},
    }

    r = client.post(f"{PREFIX}/chat", json=payload)

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "ai"
    assert body["response"] == "Focus on SQL and build a dashboard."
    assert body["coachingType"] == "interview"

    prompt, context = gateway.calls[0]
    assert prompt == "What next?"
    assert [turn["role"] for turn in context.history] == ["user", "assistant"]
    assert "Current role: Intern" in context.system_prompt


def test_chat_rejects_blank_message_and_bad_mode(client) -> None:
    r = client.post(f"{PREFIX}/chat", json={"message": "   ", "coachingType": "astrology"})

    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Invalid request data"
    fields = {e["field"] for e in body["errors"]}
    assert fields == {"message", "coachingType"}
    assert all({"field", "message", "type"} <= set(e) for e in body["errors"])


def test_mock_interview_question_count_matches(client) -> None:
    payload = {
        "role": "Backend Engineer",
        "experience": "2 years",
        "interviewType": "technical",
        "difficulty": "intermediate",
    }

    r = client.post(f"{PREFIX}/mock-interview", json=payload)

    assert r.status_code == 200
    body = r.json()
    assert len(body["questions"]) > 0
    assert body["sessionInfo"] == {
        "role": "Backend Engineer",
        "type": "technical",
        "difficulty": "intermediate",
        "questionCount": len(body["questions"]),
    }
    assert body["source"] == "fallback"


def test_mock_interview_skips_previous_questions(client) -> None:
    asked = "Design a URL shortener."
    payload = {
        "role": "Backend Engineer",
        "experience": "1 year",
        "interviewType": "system_design",
        "difficulty": "beginner",
        "previousQuestions": [asked],
    }

    r = client.post(f"{PREFIX}/mock-interview", json=payload)

    questions = [q["question"] for q in r.json()["questions"]]
    assert asked not in questions
    assert len(questions) == 5


def test_mock_interview_uses_parsed_ai_questions(client, gateway: FakeGateway) -> None:
    gateway.responses.append(
        'Here are your questions: {"questions": [{"question": "Explain REST.", "category": "technical"}]}'
    )
    payload = {"role": "Backend Engineer", "experience": "2 years", "interviewType": "technical", "difficulty": "beginner"}

    body = client.post(f"{PREFIX}/mock-interview", json=payload).json()

    assert body["source"] == "ai"
    assert [q["question"] for q in body["questions"]] == ["Explain REST."]
    assert body["sessionInfo"]["questionCount"] == 1
    assert gateway.calls[0][1].expect_json is True


def test_mock_interview_unparseable_ai_output_falls_back(client, gateway: FakeGateway) -> None:
    gateway.responses.append("Sorry, I cannot help with that.")
    payload = {"role": "Analyst", "experience": "1 year", "interviewType": "hr", "difficulty": "advanced"}

    body = client.post(f"{PREFIX}/mock-interview", json=payload).json()

    assert body["source"] == "fallback"
    assert body["sessionInfo"]["questionCount"] == len(body["questions"]) == 5


def test_analyze_resume_rejects_short_text(client) -> None:
    r = client.post(f"{PREFIX}/analyze-resume", json={"resumeText": "x" * 40})

    assert r.status_code == 400
    errors = r.json()["errors"]
    assert [e["field"] for e in errors] == ["resumeText"]


def test_analyze_resume_fallback(client) -> None:
    r = client.post(f"{PREFIX}/analyze-resume", json={"resumeText": RESUME, "targetRole": "Backend Developer"})

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "fallback"
    assert body["timestamp"]
    analysis = body["analysis"]
    assert 0 <= analysis["overall_score"] <= 100
    assert 0 <= analysis["ats_compatibility"] <= 100
    assert analysis["strengths"]


def test_learning_path_rejects_empty_skills(client) -> None:
    payload = {
        "currentSkills": [],
        "targetRole": "Data Scientist",
        "timeframe": "6 months",
        "learningStyle": "visual",
        "experience": "Fresher",
    }

    r = client.post(f"{PREFIX}/learning-path", json=payload)

    assert r.status_code == 400
    assert "currentSkills" in {e["field"] for e in r.json()["errors"]}


def test_learning_path_fallback_from_catalogue(client, db) -> None:
    seed_data_scientist_path(db)
    payload = {
        "currentSkills": ["Python"],
        "targetRole": "Data Scientist",
        "timeframe": "6 months",
        "learningStyle": "mixed",
        "experience": "Fresher",
    }

    r = client.post(f"{PREFIX}/learning-path", json=payload)

    assert r.status_code == 200
    body = r.json()
    assert body["profile"] == {"targetRole": "Data Scientist", "timeframe": "6 months", "currentSkillCount": 1}
    assert body["learningPath"]["skill_gaps"] == ["Statistics", "Machine Learning", "Deep Learning"]
    assert body["generatedAt"]


def test_analyze_falls_back_when_ai_text_is_not_json(client, db, gateway: FakeGateway) -> None:
    seed_career_options(db)
    gateway.responses.append("I think you would be great at many things!")

    r = client.post(f"{PREFIX}/analyze", json={"message": "I enjoy design and drawing"})

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "fallback"
    assert body["rawResponse"] == "I think you would be great at many things!"
    assert body["recommendations"][0]["title"] == "UX Designer"
    assert len(body["recommendations"]) <= 3
    assert all(70 <= rec["match_percentage"] <= 95 for rec in body["recommendations"])


def test_analyze_uses_ai_recommendations_capped_at_three(client, gateway: FakeGateway) -> None:
    text = json.dumps({"recommendations": [_recommendation(f"Role {i}") for i in range(5)]})
    gateway.responses.append(text)

    body = client.post(f"{PREFIX}/analyze", json={"message": "assessment", "context": {"answers": [1, 2]}}).json()

    assert body["source"] == "ai"
    assert [r["title"] for r in body["recommendations"]] == ["Role 0", "Role 1", "Role 2"]
    assert body["rawResponse"] == text


def test_analyze_with_empty_catalogue_returns_empty_list(client) -> None:
    body = client.post(f"{PREFIX}/analyze", json={"message": "anything"}).json()

    assert body["success"] is True
    assert body["recommendations"] == []
    assert body["rawResponse"] is None


def test_analyze_database_failure_is_500(client, monkeypatch: pytest.MonkeyPatch) -> None:
    from careercoach.services import coach_service

    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is down"))

    monkeypatch.setattr(coach_service, "recommend_careers", broken)

    r = client.post(f"{PREFIX}/analyze", json={"message": "programming"})

    assert r.status_code == 500
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Failed to analyze career assessment"
    assert "database is down" not in body["error"]


def test_roadmap_without_catalogue_is_generic(client) -> None:
    r = client.post(f"{PREFIX}/roadmap", json={"message": "help", "career": "Marine Biologist"})

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "fallback"
    assert body["roadmap"]["career_path"] == "Marine Biologist"
    assert len(body["roadmap"]["phases"]) == 3


def test_roadmap_uses_ai_roadmap(client, gateway: FakeGateway) -> None:
    gateway.responses.append(
        json.dumps(
            {
                "roadmap": {
                    "career_path": "Data Engineer",
                    "overview": "o",
                    "total_duration": "12 months",
                    "phases": [{"phase": "Basics", "duration": "3 months", "description": "SQL"}],
                }
            }
        )
    )

    body = client.post(f"{PREFIX}/roadmap", json={"message": "help", "career": "Data Engineer"}).json()

    assert body["source"] == "ai"
    assert body["roadmap"]["phases"][0]["phase"] == "Basics"


def test_roadmap_requires_career(client) -> None:
    r = client.post(f"{PREFIX}/roadmap", json={"message": "help"})
    assert r.status_code == 400
    assert [e["field"] for e in r.json()["errors"]] == ["career"]


def test_features(client) -> None:
    body = client.get(f"{PREFIX}/features").json()

    assert body["success"] is True
    assert set(body["features"]) == {"generalCoaching", "interviewCoaching", "resumeOptimization", "learningPath"}
    assert body["interviewTypes"] == ["technical", "behavioral", "system_design", "hr"]
    assert "hands-on" in body["learningStyles"]


def test_analyze_falls_back_when_ai_fields_have_wrong_types(client, db, gateway: FakeGateway) -> None:
    seed_career_options(db)
    bad = _recommendation("Data Analyst")
    bad["match_percentage"] = None
    bad["key_skills"] = 5
    text = json.dumps({"recommendations": [bad]})
    gateway.responses.append(text)

    r = client.post(f"{PREFIX}/analyze", json={"message": "I enjoy design and drawing"})

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "fallback"
    assert body["rawResponse"] == text
    assert body["recommendations"][0]["title"] == "UX Designer"


def test_analyze_falls_back_on_non_finite_match(client, gateway: FakeGateway) -> None:
    text = json.dumps({"recommendations": [_recommendation("Data Analyst")]}).replace(
        '"match_percentage": 91', '"match_percentage": Infinity'
    )
    gateway.responses.append(text)

    r = client.post(f"{PREFIX}/analyze", json={"message": "anything"})

    assert r.status_code == 200
    assert r.json()["source"] == "fallback"


def test_mock_interview_falls_back_when_tips_are_not_a_list(client, gateway: FakeGateway) -> None:
    gateway.responses.append('{"questions": [{"question": "Explain REST.", "tips": 3}]}')
    payload = {"role": "Backend Engineer", "experience": "2 years", "interviewType": "technical", "difficulty": "beginner"}

    r = client.post(f"{PREFIX}/mock-interview", json=payload)

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "fallback"
    assert "Explain REST." not in [q["question"] for q in body["questions"]]


def test_analyze_resume_falls_back_on_null_score(client, gateway: FakeGateway) -> None:
    gateway.responses.append('{"analysis": {"overall_score": null, "ats_compatibility": 80, "summary": "ok"}}')

    r = client.post(f"{PREFIX}/analyze-resume", json={"resumeText": RESUME})

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "fallback"
    assert 0 <= body["analysis"]["overall_score"] <= 100


def test_learning_path_falls_back_when_milestone_skills_are_numbers(client, db, gateway: FakeGateway) -> None:
    seed_data_scientist_path(db)
    gateway.responses.append(
        '{"learningPath": {"title": "Plan", "milestones": [{"title": "Start", "skills": 7}]}}'
    )
    payload = {
        "currentSkills": ["Python"],
        "targetRole": "Data Scientist",
        "timeframe": "6 months",
        "learningStyle": "mixed",
        "experience": "Fresher",
    }

    r = client.post(f"{PREFIX}/learning-path", json=payload)

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "fallback"
    assert body["learningPath"]["skill_gaps"] == ["Statistics", "Machine Learning", "Deep Learning"]


def test_learning_path_rejects_whitespace_only_skill(client) -> None:
    payload = {
        "currentSkills": ["   "],
        "targetRole": "Data Scientist",
        "timeframe": "6 months",
        "learningStyle": "visual",
        "experience": "Fresher",
    }

    r = client.post(f"{PREFIX}/learning-path", json=payload)

    assert r.status_code == 400
    assert "currentSkills.0" in {e["field"] for e in r.json()["errors"]}


def test_unexpected_error_is_json_500(db, gateway: FakeGateway, monkeypatch: pytest.MonkeyPatch) -> None:
    from fastapi.testclient import TestClient

    from careercoach.main import create_app
    from careercoach.services.coach_service import CareerCoachService

    def broken(self, *args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(CareerCoachService, "roadmap", broken)
    app = create_app()
    app.state.ai_gateway = gateway

    with TestClient(app, raise_server_exceptions=False) as c:
        r = c.post(f"{PREFIX}/roadmap", json={"message": "plan", "career": "Data Scientist"})

    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "An unexpected error occurred", "error": "Internal server error"}
