from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from careercoach.models.career_path import CareerPath
from careercoach.schemas.coach import LearningPathRequest
from careercoach.schemas.recommendation import (
    CareerRoadmap,
    LearningMilestone,
    LearningPath,
    LearningResource,
    RoadmapPhase,
    SalaryProgression,
)


logger = logging.getLogger(__name__)

GENERIC_SALARY_PROGRESSION = SalaryProgression(
    entry_level="₹4-8 LPA",
    mid_level="₹8-20 LPA",
    senior_level="₹20-40 LPA",
)

_DURATION_RE = re.compile(r"^(\d+)-(\d+) months$")


@dataclass
class TierContent:
    skills: list[str] = field(default_factory=list)
    courses: list[str] = field(default_factory=list)
    projects: list[str] = field(default_factory=list)
    reading: list[str] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (self.skills or self.courses or self.projects or self.reading)


@dataclass
class PathPartition:
    tiers: dict[str, TierContent]
    soft_skills: list[str]
    certifications: list[str]
    communities: list[str]


def _tier(value: str | None, default: str = "Beginner") -> str:
    text = (value or "").strip().capitalize()
    return text if text in {"Beginner", "Intermediate", "Advanced"} else default


def find_career_path(db: Session, role: str | None) -> CareerPath | None:
    """First active CareerPath whose title contains `role` (case-insensitive).

    When nothing contains the role, a title that the role itself contains is
    accepted, so "Senior Data Scientist at Acme" still finds "Data Scientist".
    """

    needle = " ".join((role or "").lower().split())
    if not needle:
        return None

    query = (
        db.query(CareerPath)
        .options(
            selectinload(CareerPath.skills),
            selectinload(CareerPath.courses),
            selectinload(CareerPath.projects),
            selectinload(CareerPath.resources),
        )
        .filter(CareerPath.is_active.is_(True))
    )
    path = query.filter(func.lower(CareerPath.title).contains(needle, autoescape=True)).order_by(CareerPath.id).first()
    if path is not None:
        return path

    for candidate in query.order_by(CareerPath.id).all():
        title = (candidate.title or "").strip().lower()
        if title and title in needle:
            return candidate
    return None


def partition_path(path: CareerPath) -> PathPartition:
    tiers = {name: TierContent() for name in ("Beginner", "Intermediate", "Advanced")}
    soft_skills: list[str] = []
    certifications: list[str] = []
    communities: list[str] = []

    for skill in path.skills:
        if (skill.skill_type or "").lower() == "soft":
            soft_skills.append(skill.skill_name)
            continue
        tiers[_tier(skill.difficulty)].skills.append(skill.skill_name)

    for course in path.courses:
        tiers[_tier(course.difficulty)].courses.append(course.title)

    for project in path.projects:
        tiers[_tier(project.difficulty)].projects.append(project.title)

    for resource in path.resources:
        kind = (resource.resource_type or "").lower()
        if kind == "certification":
            certifications.append(resource.title)
        elif kind == "community":
            communities.append(resource.title)
        else:
            tiers[_tier(resource.difficulty)].reading.append(resource.title)

    return PathPartition(tiers=tiers, soft_skills=soft_skills, certifications=certifications, communities=communities)


def total_duration(phases: list[RoadmapPhase]) -> str:
    low = high = 0
    for phase in phases:
        match = _DURATION_RE.match(phase.duration)
        if match is None:
            return "12-18 months"
        low += int(match.group(1))
        high += int(match.group(2))
    return f"{low}-{high} months"


def build_roadmap_from_path(path: CareerPath) -> CareerRoadmap:
    parts = partition_path(path)
    title = path.title
    beginner = parts.tiers["Beginner"]
    intermediate = parts.tiers["Intermediate"]
    advanced = parts.tiers["Advanced"]

    phases = [
        RoadmapPhase(
            phase="Foundation",
            duration="2-3 months",
            description=f"Build the fundamentals every {title} relies on",
            milestones=[f"Learn {s}" for s in beginner.skills[:4]]
            + [f"Complete {c}" for c in beginner.courses[:2]]
            or ["Complete introductory courses", "Understand core concepts", "Set up your tools"],
            resources=(beginner.courses + beginner.reading)[:5] or ["Official documentation", "Beginner tutorials"],
            projects=beginner.projects[:3] or ["Small practice exercises"],
        ),
        RoadmapPhase(
            phase="Skill Development",
            duration="3-5 months",
            description=f"Develop the core skills used day to day as a {title}",
            milestones=[f"Become comfortable with {s}" for s in intermediate.skills[:4]]
            + [f"Complete {c}" for c in intermediate.courses[:2]]
            or ["Master the key tools of the role", "Build complete projects", "Join a learning community"],
            resources=(intermediate.courses + intermediate.reading)[:5] or ["Intermediate courses", "Books"],
            projects=intermediate.projects[:3] or ["Portfolio project", "Real-world application"],
        ),
    ]

    if not advanced.empty:
        phases.append(
            RoadmapPhase(
                phase="Advanced Specialization",
                duration="3-4 months",
                description=f"Go deep on advanced {title} topics",
                milestones=[f"Specialize in {s}" for s in advanced.skills[:4]]
                + [f"Complete {c}" for c in advanced.courses[:2]]
                or ["Choose a specialization", "Study advanced topics"],
                resources=(advanced.courses + advanced.reading)[:5] or ["Specialized courses", "Industry blogs"],
                projects=advanced.projects[:3] or ["Specialized project"],
            )
        )

    readiness_milestones = [f"Strengthen {s}" for s in parts.soft_skills[:3]]
    readiness_milestones += ["Complete your portfolio", "Practice interviews", "Build your professional network"]
    phases.append(
        RoadmapPhase(
            phase="Professional Readiness",
            duration="2-3 months",
            description="Prepare for the job market and your first role",
            milestones=readiness_milestones,
            resources=(parts.certifications + parts.communities)[:5] or ["Mock interviews", "Professional networks"],
            projects=["Capstone project", "Professional portfolio"],
        )
    )

    technical = sorted(
        (s for s in path.skills if (s.skill_type or "").lower() != "soft"),
        key=lambda s: (-(s.importance_level or 0), s.id or 0),
    )
    next_steps = ["Start with the Foundation phase", "Set a weekly learning schedule"]
    if beginner.courses:
        next_steps.append(f"Enrol in {beginner.courses[0]}")
    if parts.communities:
        next_steps.append(f"Join {parts.communities[0]}")

    return CareerRoadmap(
        career_path=title,
        overview=path.overview
        or path.description
        or f"A structured plan for becoming a {title}, from fundamentals to job readiness.",
        total_duration=total_duration(phases),
        phases=phases,
        key_skills=[s.skill_name for s in technical[:6]],
        certifications=parts.certifications,
        salary_progression=GENERIC_SALARY_PROGRESSION,
        next_steps=next_steps,
    )


def generic_roadmap(career: str) -> CareerRoadmap:
    phases = [
        RoadmapPhase(
            phase="Foundation",
            duration="2-3 months",
            description="Build fundamental knowledge and understanding",
            milestones=["Complete basic courses", "Understand core concepts", "Set up your working environment"],
            resources=["Online tutorials", "Documentation", "Community forums"],
            projects=["Hello World projects", "Basic exercises", "Small practice applications"],
        ),
        RoadmapPhase(
            phase="Skill Development",
            duration="4-6 months",
            description="Develop core technical and soft skills",
            milestones=["Master key technologies", "Build complex projects", "Join communities"],
            resources=["Advanced courses", "Books", "Mentorship"],
            projects=["Portfolio website", "Real-world applications", "Open source contributions"],
        ),
        RoadmapPhase(
            phase="Professional Readiness",
            duration="3-5 months",
            description="Prepare for the job market and career advancement",
            milestones=["Complete portfolio", "Interview preparation", "Network building"],
            resources=["Mock interviews", "Career coaching", "Professional networks"],
            projects=["Capstone project", "Industry collaboration", "Professional portfolio"],
        ),
    ]
    return CareerRoadmap(
        career_path=career,
        overview=(
            f"This roadmap will guide you through becoming a successful {career}. The journey covers "
            "core skills, hands-on projects and practical experience in structured phases."
        ),
        total_duration=total_duration(phases),
        phases=phases,
        key_skills=["Technical proficiency", "Problem solving", "Communication", "Continuous learning"],
        certifications=["Industry-standard certifications", "Platform-specific credentials"],
        salary_progression=GENERIC_SALARY_PROGRESSION,
        next_steps=[
            "Start with the Foundation phase",
            "Set up a learning schedule",
            "Join relevant communities",
            "Begin your first project",
        ],
    )


def build_fallback_roadmap(db: Session, career: str) -> CareerRoadmap:
    path = find_career_path(db, career)
    if path is None:
        logger.info("fallback.roadmap no career_path for career=%r; using generic template", career)
        return generic_roadmap(career)
    return build_roadmap_from_path(path)


# Learning style -> order in which resource kinds are surfaced.
_STYLE_PRIORITY = {
    "visual": ("course", "website", "book"),
    "hands-on": ("project", "course", "website"),
    "theoretical": ("book", "course", "website"),
    "mixed": ("course", "project", "book", "website"),
}

_WEEKLY_COMMITMENT = {
    "visual": "6-8 hours per week of video lessons and diagrams",
    "hands-on": "8-10 hours per week, mostly building",
    "theoretical": "6-8 hours per week of reading and exercises",
    "mixed": "8 hours per week split across lessons, reading and projects",
}


def _normalize_skill(value: str) -> str:
    return " ".join(value.lower().split())


def _milestone_resources(path: CareerPath, tier: str, style: str) -> list[LearningResource]:
    by_kind: dict[str, list[LearningResource]] = {"course": [], "project": [], "book": [], "website": []}
    for course in path.courses:
        if _tier(course.difficulty) == tier:
            by_kind["course"].append(
                LearningResource(title=course.title, type="course", url=course.url, description=course.description or "")
            )
    for project in path.projects:
        if _tier(project.difficulty) == tier:
            by_kind["project"].append(
                LearningResource(title=project.title, type="project", description=project.description or "")
            )
    for resource in path.resources:
        kind = (resource.resource_type or "").lower()
        if kind in {"book", "website"} and _tier(resource.difficulty) == tier:
            by_kind[kind].append(
                LearningResource(title=resource.title, type=kind, url=resource.url, description=resource.description or "")
            )

    ordered: list[LearningResource] = []
    for kind in _STYLE_PRIORITY.get(style, _STYLE_PRIORITY["mixed"]):
        ordered.extend(by_kind.get(kind, []))
    return ordered[:4]


def build_fallback_learning_path(db: Session, request: LearningPathRequest) -> LearningPath:
    known = {_normalize_skill(s) for s in request.current_skills if s and s.strip()}
    path = find_career_path(db, request.target_role)
    style = request.learning_style

    if path is None:
        gaps: list[str] = []
        milestones = [
            LearningMilestone(
                title="Strengthen your foundation",
                description=f"Consolidate {', '.join(request.current_skills[:3])} and fill basic gaps for {request.target_role}",
                duration="First quarter of your timeframe",
                skills=request.current_skills[:3],
                resources=[LearningResource(title="Official documentation and beginner tutorials", type="website")],
                projects=["Small project using your current skills"],
            ),
            LearningMilestone(
                title=f"Core {request.target_role} skills",
                description="Learn the tools and practices used every day in the role",
                duration="Middle half of your timeframe",
                resources=[LearningResource(title="Structured intermediate course", type="course")],
                projects=["End-to-end portfolio project"],
            ),
            LearningMilestone(
                title="Job readiness",
                description="Polish your portfolio, practice interviews and network",
                duration="Final quarter of your timeframe",
                resources=[LearningResource(title="Mock interviews and community events", type="community")],
                projects=["Capstone project"],
            ),
        ]
    else:
        parts = partition_path(path)
        gaps = [
            s
            for tier in ("Beginner", "Intermediate", "Advanced")
            for s in parts.tiers[tier].skills
            if _normalize_skill(s) not in known
        ]
        milestones = []
        labels = {"Beginner": "Foundation", "Intermediate": "Skill Development", "Advanced": "Advanced Specialization"}
        for tier in ("Beginner", "Intermediate", "Advanced"):
            content = parts.tiers[tier]
            if content.empty:
                continue
            tier_gaps = [s for s in content.skills if _normalize_skill(s) not in known]
            milestones.append(
                LearningMilestone(
                    title=f"{labels[tier]}: {path.title}",
                    description=(
                        f"Close {len(tier_gaps)} {tier.lower()} skill gap(s)"
                        if tier_gaps
                        else f"Reinforce {tier.lower()} skills you already have with practice"
                    ),
                    duration="",
                    skills=tier_gaps or content.skills[:3],
                    resources=_milestone_resources(path, tier, style),
                    projects=content.projects[:2],
                )
            )
        milestones.append(
            LearningMilestone(
                title="Professional Readiness",
                description="Portfolio, interview practice and networking",
                skills=parts.soft_skills[:3],
                resources=[LearningResource(title=t, type="certification") for t in parts.certifications[:2]],
                projects=["Capstone project"],
            )
        )

    share = _split_timeframe(request.timeframe, len(milestones))
    if share:
        milestones = [m.model_copy(update={"duration": m.duration or share}) for m in milestones]

    return LearningPath(
        title=f"{request.target_role} learning path",
        overview=(
            f"A {request.learning_style} learning plan from your current skills "
            f"({', '.join(request.current_skills[:5])}) to {request.target_role} over {request.timeframe}."
        ),
        total_duration=request.timeframe,
        learning_style=request.learning_style,
        skill_gaps=gaps,
        milestones=milestones,
        weekly_commitment=_WEEKLY_COMMITMENT.get(style, _WEEKLY_COMMITMENT["mixed"]),
    )


def _split_timeframe(timeframe: str, parts: int) -> str:
    match = re.search(r"(\d+)\s*(week|month|year)", timeframe.lower())
    if match is None or parts <= 0:
        return ""
    amount = int(match.group(1))
    unit = match.group(2)
    if unit == "year":
        amount, unit = amount * 12, "month"
    per = max(1, round(amount / parts))
    return f"~{per} {unit}{'s' if per != 1 else ''}"
