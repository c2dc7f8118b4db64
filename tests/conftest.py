from __future__ import annotations

import os
from typing import Any

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Ensure the SQLAlchemy engine is created against sqlite for tests.
    os.environ.setdefault("DB_URL", "sqlite:///./test.db")

    # Ensure a local .env cannot point tests at a real AI provider.
    os.environ["ENVIRONMENT"] = "test"
    os.environ["OPENAI_API_KEY"] = ""


class FakeGateway:
    """Scripted AI provider: pops one queued reply per call, then fails."""

    name = "fake"

    def __init__(self, responses: list[str] | None = None, error: str | None = None) -> None:
        self.responses = list(responses or [])
        self.error = error
        self.calls: list[tuple[str, Any]] = []

    @property
    def configured(self) -> bool:
        return self.error is None

    def complete(self, prompt: str, context: Any) -> str:
        from careercoach.errors import UpstreamUnavailable

        self.calls.append((prompt, context))
        if self.error is not None:
            raise UpstreamUnavailable(self.error, provider=self.name)
        if not self.responses:
            raise UpstreamUnavailable("no scripted response left", provider=self.name)
        return self.responses.pop(0)


CAREER_OPTIONS: list[dict[str, Any]] = [
    {
        "title": "Software Developer",
        "category": "Technology",
        "description": "Design, build and maintain software applications.",
        "salary_min": 400000,
        "salary_max": 1200000,
        "difficulty_level": "Intermediate",
        "required_skills": ["JavaScript", "Python", "Git", "SQL", "React", "Testing"],
        "growth_outlook": "Excellent - high demand across industries",
    },
    {
        "title": "Data Scientist",
        "category": "Data Science",
        "description": "Turn data into insights and predictive models.",
        "salary_min": 600000,
        "salary_max": 1800000,
        "difficulty_level": "Advanced",
        "required_skills": ["Python", "Statistics", "Machine Learning", "SQL"],
        "growth_outlook": "Excellent - one of the fastest growing roles",
    },
    {
        "title": "UX Designer",
        "category": "Design",
        "description": "Research users and design intuitive product experiences.",
        "salary_min": 350000,
        "salary_max": 1000000,
        "difficulty_level": "Intermediate",
        "required_skills": ["Figma", "User Research", "Prototyping"],
        "growth_outlook": "Good - steady demand from product companies",
    },
    {
        "title": "Digital Marketing Specialist",
        "category": "Marketing",
        "description": "Plan and run campaigns across digital channels.",
        "salary_min": 300000,
        "salary_max": 800000,
        "difficulty_level": "Beginner",
        "required_skills": ["SEO", "Content Strategy", "Analytics"],
        "growth_outlook": "Good",
    },
    {
        "title": "Cybersecurity Analyst",
        "category": "Security",
        "description": "Protect systems and data from threats.",
        "salary_min": 500000,
        "salary_max": 1500000,
        "difficulty_level": "Advanced",
        "required_skills": ["Networking", "Linux", "Threat Analysis"],
        "growth_outlook": "Very good - critical shortage of talent",
    },
    {
        "title": "Product Manager",
        "category": "Business",
        "description": "Decide what to build and why, with engineering and design.",
        "salary_min": 800000,
        "salary_max": 2500000,
        "difficulty_level": "Intermediate",
        "required_skills": ["Roadmapping", "Communication", "Analytics"],
        "growth_outlook": "Good",
    },
    {
        "title": "Cloud Engineer",
        "category": "Technology",
        "description": "Build and operate cloud infrastructure.",
        "salary_min": 600000,
        "salary_max": 2000000,
        "difficulty_level": "Intermediate",
        "required_skills": ["AWS", "Docker", "Kubernetes", "Terraform"],
        "growth_outlook": "Excellent",
    },
]


def reset_database() -> None:
    from careercoach.database import Base, engine
    import careercoach.models  # noqa: F401 - registers tables on Base.metadata

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def seed_career_options(session, options: list[dict[str, Any]] | None = None) -> list[Any]:
    from careercoach.models import CareerOption

    rows = [CareerOption(**data) for data in (options if options is not None else CAREER_OPTIONS)]
    session.add_all(rows)
    session.commit()
    return rows


def seed_data_scientist_path(session) -> Any:
    from careercoach.models import CareerCourse, CareerPath, CareerProject, CareerResource, CareerSkill

    path = CareerPath(
        title="Data Scientist",
        category="Data Science",
        description="Analyse data and build predictive models.",
        overview="From Python basics to production machine learning.",
        growth_outlook="Excellent",
    )
    path.skills = [
        CareerSkill(skill_name="Python", skill_type="technical", importance_level=5, difficulty="Beginner"),
        CareerSkill(skill_name="Statistics", skill_type="technical", importance_level=4, difficulty="Beginner"),
        CareerSkill(skill_name="Machine Learning", skill_type="technical", importance_level=5, difficulty="Intermediate"),
        CareerSkill(skill_name="Deep Learning", skill_type="technical", importance_level=3, difficulty="Advanced"),
        CareerSkill(skill_name="Communication", skill_type="soft", importance_level=4, difficulty="Beginner"),
    ]
    path.courses = [
        CareerCourse(title="Python for Everybody", provider="Coursera", difficulty="Beginner", sort_order=1),
        CareerCourse(title="Machine Learning Specialization", provider="Coursera", difficulty="Intermediate", sort_order=2),
    ]
    path.projects = [
        CareerProject(title="Exploratory analysis of a public dataset", difficulty="Beginner", technologies=["pandas"]),
        CareerProject(title="Churn prediction model", difficulty="Intermediate", technologies=["scikit-learn"]),
        CareerProject(title="Image classifier", difficulty="Advanced", technologies=["PyTorch"]),
    ]
    path.resources = [
        CareerResource(resource_type="book", title="Python for Data Analysis", difficulty="Beginner"),
        CareerResource(resource_type="certification", title="Google Data Analytics Certificate", difficulty="Beginner"),
        CareerResource(resource_type="community", title="Kaggle", difficulty="Beginner"),
    ]
    session.add(path)
    session.commit()
    return path


@pytest.fixture()
def db():
    from careercoach.database import SessionLocal

    reset_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def gateway() -> FakeGateway:
    # No scripted replies: every coach call takes the fallback path.
    return FakeGateway()


@pytest.fixture()
def client(db, gateway: FakeGateway) -> Any:
    from careercoach.main import create_app
    from careercoach.services.fallback_recommender import no_jitter

    app = create_app()
    app.state.ai_gateway = gateway
    app.state.jitter_source = no_jitter
    with TestClient(app) as c:
        yield c
