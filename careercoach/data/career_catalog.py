from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from careercoach.models.career_option import CareerOption
from careercoach.models.career_path import CareerCourse, CareerPath, CareerProject, CareerResource, CareerSkill


logger = logging.getLogger(__name__)


class CareerOptionSeed(BaseModel):
    title: str
    category: str
    description: str
    salary_min: int | None = None
    salary_max: int | None = None
    difficulty_level: str = "Intermediate"
    required_skills: list[str] = Field(default_factory=list)
    growth_outlook: str | None = None


class SkillSeed(BaseModel):
    name: str
    difficulty: str = "Beginner"
    skill_type: str = "technical"
    importance: int = 4


class CourseSeed(BaseModel):
    title: str
    difficulty: str
    provider: str = "Various Platforms"
    url: str | None = None
    duration: str = "Self-paced"
    is_free: bool = True


class ProjectSeed(BaseModel):
    title: str
    difficulty: str
    technologies: list[str] = Field(default_factory=list)
    estimated_duration: str = "2-4 weeks"


class ResourceSeed(BaseModel):
    title: str
    resource_type: str
    difficulty: str | None = None
    url: str | None = None
    is_free: bool = True


class CareerPathSeed(BaseModel):
    title: str
    category: str
    description: str
    overview: str
    day_in_life: list[str] = Field(default_factory=list)
    salary_expectations: str | None = None
    growth_outlook: str | None = None
    skills: list[SkillSeed] = Field(default_factory=list)
    courses: list[CourseSeed] = Field(default_factory=list)
    projects: list[ProjectSeed] = Field(default_factory=list)
    resources: list[ResourceSeed] = Field(default_factory=list)


CAREER_OPTIONS: list[CareerOptionSeed] = [
    CareerOptionSeed(
        title="Full Stack Developer",
        category="Software Development",
        description="Design and develop both front-end and back-end components of web applications",
        salary_min=400000,
        salary_max=2000000,
        difficulty_level="Intermediate",
        required_skills=["JavaScript", "HTML/CSS", "Node.js", "React", "Databases", "Git"],
        growth_outlook="Excellent - High demand across all industries with remote work opportunities",
    ),
    CareerOptionSeed(
        title="Data Scientist",
        category="Data & AI",
        description="Analyze complex data to derive insights and build predictive models",
        salary_min=600000,
        salary_max=3000000,
        difficulty_level="Advanced",
        required_skills=["Python", "Statistics", "Machine Learning", "SQL", "Data Visualization", "Mathematics"],
        growth_outlook="Excellent - AI/ML boom creating massive opportunities in India and globally",
    ),
    CareerOptionSeed(
        title="UI/UX Designer",
        category="Design & Product",
        description="Design user interfaces and experiences for digital products",
        salary_min=350000,
        salary_max=1500000,
        difficulty_level="Intermediate",
        required_skills=["Figma", "User Research", "Prototyping", "Design Systems", "HTML/CSS", "Psychology"],
        growth_outlook="Very Good - Growing focus on user experience across industries",
    ),
    CareerOptionSeed(
        title="DevOps Engineer",
        category="Software Development",
        description="Manage infrastructure and deployment pipelines for applications",
        salary_min=500000,
        salary_max=2500000,
        difficulty_level="Advanced",
        required_skills=["Docker", "Kubernetes", "AWS/Azure", "CI/CD", "Linux", "Scripting"],
        growth_outlook="Excellent - Critical for modern software development and cloud adoption",
    ),
    CareerOptionSeed(
        title="Product Manager",
        category="Design & Product",
        description="Define product strategy and coordinate development efforts",
        salary_min=800000,
        salary_max=4000000,
        difficulty_level="Advanced",
        required_skills=["Product Strategy", "Analytics", "User Research", "Project Management", "Communication"],
        growth_outlook="Excellent - High-growth startups and tech companies need strong PMs",
    ),
    CareerOptionSeed(
        title="Mobile App Developer",
        category="Software Development",
        description="Develop native and cross-platform mobile applications",
        salary_min=400000,
        salary_max=2000000,
        difficulty_level="Intermediate",
        required_skills=["React Native", "Flutter", "iOS/Android", "API Integration", "Mobile UI"],
        growth_outlook="Very Good - Mobile-first approach driving demand across sectors",
    ),
    CareerOptionSeed(
        title="Cybersecurity Analyst",
        category="Cybersecurity",
        description="Protect organizations from cyber threats and security vulnerabilities",
        salary_min=450000,
        salary_max=2200000,
        difficulty_level="Advanced",
        required_skills=["Network Security", "Penetration Testing", "Risk Assessment", "Incident Response"],
        growth_outlook="Excellent - Rising cyber threats creating urgent need for security professionals",
    ),
    CareerOptionSeed(
        title="Digital Marketing Specialist",
        category="Marketing & Growth",
        description="Plan and execute digital marketing campaigns across multiple channels",
        salary_min=300000,
        salary_max=1200000,
        difficulty_level="Beginner",
        required_skills=["Google Ads", "Social Media Marketing", "SEO", "Content Marketing", "Analytics"],
        growth_outlook="Very Good - Digital transformation driving marketing spend online",
    ),
    CareerOptionSeed(
        title="Cloud Architect",
        category="Web & Cloud",
        description="Design and implement cloud infrastructure solutions",
        salary_min=800000,
        salary_max=3500000,
        difficulty_level="Advanced",
        required_skills=["AWS/Azure/GCP", "System Architecture", "Security", "Microservices", "Infrastructure as Code"],
        growth_outlook="Excellent - Cloud adoption accelerating across all business sizes",
    ),
    CareerOptionSeed(
        title="Business Intelligence Developer",
        category="Data & AI",
        description="Build data warehouses and reporting solutions for business insights",
        salary_min=500000,
        salary_max=2000000,
        difficulty_level="Intermediate",
        required_skills=["SQL", "ETL", "Power BI", "Tableau", "Data Warehousing", "Business Analysis"],
        growth_outlook="Very Good - Data-driven decision making becoming standard practice",
    ),
]


CAREER_PATHS: list[CareerPathSeed] = [
    CareerPathSeed(
        title="Full Stack Developer",
        category="Software Development",
        description="Design and develop both front-end and back-end components of web applications",
        overview=(
            "Full Stack Developers work on every layer of an application. In India's growing tech industry "
            "they are sought after for their ability to handle end-to-end development."
        ),
        day_in_life=[
            "Develop user-facing features with HTML, CSS and JavaScript",
            "Build server-side applications with Node.js or Python",
            "Design and manage SQL and NoSQL databases",
            "Debug across the entire stack",
        ],
        salary_expectations="₹4-20 LPA depending on experience",
        growth_outlook="Excellent",
        skills=[
            SkillSeed(name="JavaScript/TypeScript", difficulty="Beginner", importance=5),
            SkillSeed(name="Git", difficulty="Beginner", importance=4),
            SkillSeed(name="React/Angular/Vue", difficulty="Intermediate", importance=5),
            SkillSeed(name="Node.js/Django/Flask", difficulty="Intermediate", importance=4),
            SkillSeed(name="SQL/NoSQL Databases", difficulty="Intermediate", importance=4),
            SkillSeed(name="REST/GraphQL APIs", difficulty="Advanced", importance=4),
            SkillSeed(name="DevOps basics", difficulty="Advanced", importance=3),
            SkillSeed(name="Problem-solving", skill_type="soft", importance=3),
            SkillSeed(name="Communication", skill_type="soft", importance=3),
        ],
        courses=[
            CourseSeed(title="MERN Stack Bootcamp", difficulty="Beginner"),
            CourseSeed(title="Full Stack Development with JavaScript", difficulty="Intermediate"),
            CourseSeed(title="Advanced Web Applications Architecture", difficulty="Advanced"),
        ],
        projects=[
            ProjectSeed(title="Personal Portfolio Website", difficulty="Beginner", technologies=["HTML/CSS", "JavaScript"]),
            ProjectSeed(title="E-commerce Platform", difficulty="Intermediate", technologies=["React", "Node.js", "PostgreSQL"]),
            ProjectSeed(title="Social Media Application", difficulty="Advanced", technologies=["WebSockets", "Cloud Deployment"]),
        ],
        resources=[
            ResourceSeed(title="MDN Web Docs", resource_type="website", difficulty="Beginner", url="https://developer.mozilla.org"),
            ResourceSeed(title="Full Stack Developers India", resource_type="community"),
            ResourceSeed(title="Stack Overflow", resource_type="community"),
            ResourceSeed(title="AWS Certified Developer - Associate", resource_type="certification", is_free=False),
        ],
    ),
    CareerPathSeed(
        title="Data Scientist",
        category="Data & AI",
        description="Apply advanced analytics and machine learning to solve complex business problems",
        overview=(
            "Data Science combines statistics, programming and domain expertise to extract insights from data. "
            "Data Scientists are in high demand across Indian industries."
        ),
        day_in_life=[
            "Analyze datasets using Python, R or SQL",
            "Build and optimize machine learning models",
            "Present insights to non-technical stakeholders",
        ],
        salary_expectations="₹6-30 LPA depending on experience",
        growth_outlook="Excellent",
        skills=[
            SkillSeed(name="Python", difficulty="Beginner", importance=5),
            SkillSeed(name="SQL", difficulty="Beginner", importance=4),
            SkillSeed(name="Statistics", difficulty="Beginner", importance=5),
            SkillSeed(name="Machine Learning", difficulty="Intermediate", importance=5),
            SkillSeed(name="Data Visualization", difficulty="Intermediate", importance=4),
            SkillSeed(name="Big Data Tools", difficulty="Advanced", importance=3),
            SkillSeed(name="Communication", skill_type="soft", importance=4),
            SkillSeed(name="Business Acumen", skill_type="soft", importance=3),
        ],
        courses=[
            CourseSeed(title="Data Science Specialization by IIT Madras", difficulty="Beginner"),
            CourseSeed(title="Machine Learning by Andrew Ng", difficulty="Intermediate"),
            CourseSeed(title="Deep Learning Specialization", difficulty="Advanced"),
        ],
        projects=[
            ProjectSeed(title="Customer Segmentation Analysis", difficulty="Beginner", technologies=["Python", "Pandas"]),
            ProjectSeed(title="Predictive Analytics Dashboard", difficulty="Intermediate", technologies=["scikit-learn", "SQL"]),
            ProjectSeed(title="Natural Language Processing Application", difficulty="Advanced", technologies=["NLP", "Deep Learning"]),
        ],
        resources=[
            ResourceSeed(title="Python for Data Analysis", resource_type="book", difficulty="Beginner", is_free=False),
            ResourceSeed(title="Kaggle", resource_type="community"),
            ResourceSeed(title="Analytics Vidhya", resource_type="community"),
            ResourceSeed(title="Google Data Analytics Certificate", resource_type="certification", is_free=False),
        ],
    ),
    CareerPathSeed(
        title="UI/UX Designer",
        category="Design & Product",
        description="Create user-centered designs and experiences for digital products",
        overview=(
            "UI/UX designers create intuitive, enjoyable experiences for websites and applications. "
            "As India's digital economy grows, companies increasingly value designers."
        ),
        day_in_life=[
            "Create wireframes, prototypes and mockups",
            "Conduct user research and usability testing",
            "Iterate based on user feedback",
        ],
        salary_expectations="₹3.5-15 LPA depending on experience",
        growth_outlook="Very Good",
        skills=[
            SkillSeed(name="Figma/Adobe XD", difficulty="Beginner", importance=5),
            SkillSeed(name="Wireframing", difficulty="Beginner", importance=4),
            SkillSeed(name="Prototyping", difficulty="Intermediate", importance=4),
            SkillSeed(name="User Research", difficulty="Intermediate", importance=5),
            SkillSeed(name="Information Architecture", difficulty="Advanced", importance=3),
            SkillSeed(name="Empathy", skill_type="soft", importance=4),
            SkillSeed(name="Collaboration", skill_type="soft", importance=3),
        ],
        courses=[
            CourseSeed(title="UI/UX Design Fundamentals", difficulty="Beginner"),
            CourseSeed(title="User Research and Testing Methods", difficulty="Intermediate"),
            CourseSeed(title="Advanced Interaction Design", difficulty="Advanced"),
        ],
        projects=[
            ProjectSeed(title="Mobile App Redesign", difficulty="Beginner", technologies=["Figma"]),
            ProjectSeed(title="E-commerce User Experience Project", difficulty="Intermediate", technologies=["User Research", "Prototyping"]),
            ProjectSeed(title="Design System Creation", difficulty="Advanced", technologies=["Design Systems"]),
        ],
        resources=[
            ResourceSeed(title="Laws of UX", resource_type="website", difficulty="Beginner", url="https://lawsofux.com"),
            ResourceSeed(title="Dribbble", resource_type="community"),
            ResourceSeed(title="Behance", resource_type="community"),
            ResourceSeed(title="Google UX Design Certificate", resource_type="certification", is_free=False),
        ],
    ),
]


@dataclass
class SeedReport:
    options_inserted: int = 0
    options_skipped: int = 0
    paths_inserted: int = 0
    paths_skipped: int = 0


def _build_path(seed: CareerPathSeed) -> CareerPath:
    path = CareerPath(
        title=seed.title,
        category=seed.category,
        description=seed.description,
        overview=seed.overview,
        day_in_life="\n".join(seed.day_in_life),
        salary_expectations=seed.salary_expectations,
        growth_outlook=seed.growth_outlook,
        is_active=True,
    )
    path.skills = [
        CareerSkill(
            skill_name=s.name,
            skill_type=s.skill_type,
            importance_level=s.importance,
            difficulty=s.difficulty,
            description=f"{s.skill_type.capitalize()} skill for {seed.title}",
        )
        for s in seed.skills
    ]
    path.courses = [
        CareerCourse(
            title=c.title,
            description=f"{c.difficulty} level course for {seed.title}",
            provider=c.provider,
            url=c.url,
            difficulty=c.difficulty,
            duration=c.duration,
            is_free=c.is_free,
            sort_order=idx,
        )
        for idx, c in enumerate(seed.courses, start=1)
    ]
    path.projects = [
        CareerProject(
            title=p.title,
            description=f"{p.difficulty} level project to practice {', '.join(p.technologies)}",
            difficulty=p.difficulty,
            technologies=p.technologies,
            estimated_duration=p.estimated_duration,
            sort_order=idx,
        )
        for idx, p in enumerate(seed.projects, start=1)
    ]
    path.resources = [
        CareerResource(
            resource_type=r.resource_type,
            title=r.title,
            url=r.url,
            is_free=r.is_free,
            difficulty=r.difficulty,
        )
        for r in seed.resources
    ]
    return path


def seed_catalog(
    db: Session,
    options: list[CareerOptionSeed] | None = None,
    paths: list[CareerPathSeed] | None = None,
) -> SeedReport:
    """Insert catalogue rows whose title is not present yet. Safe to re-run."""

    report = SeedReport()

    existing_options = {t for (t,) in db.query(CareerOption.title).all()}
    for seed in options if options is not None else CAREER_OPTIONS:
        if seed.title in existing_options:
            report.options_skipped += 1
            continue
        db.add(CareerOption(**seed.model_dump(), is_active=True))
        existing_options.add(seed.title)
        report.options_inserted += 1

    existing_paths = {t for (t,) in db.query(CareerPath.title).all()}
    for seed in paths if paths is not None else CAREER_PATHS:
        if seed.title in existing_paths:
            report.paths_skipped += 1
            continue
        db.add(_build_path(seed))
        existing_paths.add(seed.title)
        report.paths_inserted += 1

    db.commit()
    logger.info("catalog.seed %s", report)
    return report
