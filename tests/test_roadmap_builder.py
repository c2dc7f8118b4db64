from __future__ import annotations

from careercoach.schemas.coach import LearningPathRequest
from careercoach.services.roadmap_builder import (
    build_fallback_learning_path,
    build_fallback_roadmap,
    find_career_path,
    generic_roadmap,
)
from conftest import seed_data_scientist_path


def test_unknown_role_gets_generic_three_phase_roadmap(db) -> None:
    roadmap = build_fallback_roadmap(db, "Underwater Basket Weaver")

    assert roadmap.career_path == "Underwater Basket Weaver"
    assert [p.phase for p in roadmap.phases] == ["Foundation", "Skill Development", "Professional Readiness"]
    assert roadmap.total_duration == "9-14 months"
    assert all(p.milestones for p in roadmap.phases)
    assert roadmap.next_steps


def test_generic_roadmap_matches_fallback_for_empty_catalogue(db) -> None:
    assert build_fallback_roadmap(db, "Chef") == generic_roadmap("Chef")


def test_find_career_path_matches_either_direction(db) -> None:
    seed_data_scientist_path(db)

    assert find_career_path(db, "data scientist").title == "Data Scientist"
    assert find_career_path(db, "Senior Data Scientist at Acme").title == "Data Scientist"
    assert find_career_path(db, "  ") is None
    assert find_career_path(db, "Chef") is None


def test_roadmap_from_career_path_uses_curriculum(db) -> None:
    seed_data_scientist_path(db)

    roadmap = build_fallback_roadmap(db, "Data Scientist")

    assert [p.phase for p in roadmap.phases] == [
        "Foundation",
        "Skill Development",
        "Advanced Specialization",
        "Professional Readiness",
    ]
    foundation = roadmap.phases[0]
    assert "Learn Python" in foundation.milestones
    assert "Python for Everybody" in foundation.resources
    assert foundation.projects == ["Exploratory analysis of a public dataset"]
    assert roadmap.phases[2].projects == ["Image classifier"]
    assert "Strengthen Communication" in roadmap.phases[-1].milestones
    assert roadmap.certifications == ["Google Data Analytics Certificate"]
    assert roadmap.key_skills[:2] == ["Python", "Machine Learning"]
    assert "Communication" not in roadmap.key_skills
    assert roadmap.total_duration == "10-15 months"
    assert "Join Kaggle" in roadmap.next_steps


def test_learning_path_fallback_lists_skill_gaps(db) -> None:
    seed_data_scientist_path(db)
    request = LearningPathRequest(
        current_skills=["python", "Excel"],
        target_role="Data Scientist",
        timeframe="6 months",
        learning_style="hands-on",
        experience="Fresher",
    )

    path = build_fallback_learning_path(db, request)

    assert path.skill_gaps == ["Statistics", "Machine Learning", "Deep Learning"]
    assert len(path.milestones) == 4
    assert path.milestones[-1].title == "Professional Readiness"
    # hands-on surfaces projects before courses
    assert path.milestones[0].resources[0].type == "project"
    assert all(m.duration for m in path.milestones)


def test_learning_path_fallback_without_catalogue(db) -> None:
    request = LearningPathRequest(
        current_skills=["HTML"],
        target_role="Game Designer",
        timeframe="1 year",
        learning_style="visual",
        experience="Student",
    )

    path = build_fallback_learning_path(db, request)

    assert path.title == "Game Designer learning path"
    assert len(path.milestones) == 3
    assert path.total_duration == "1 year"
