# fallback_recommender.py
from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from typing import Callable, Sequence

from sqlalchemy.orm import Session

from careercoach.config import settings
from careercoach.models.career_option import CareerOption
from careercoach.schemas.recommendation import CareerRecommendation


logger = logging.getLogger(__name__)

# index -> penalty in [0, 4] subtracted from the synthesized match percentage.
JitterSource = Callable[[int], int]

MAX_RECOMMENDATIONS = 3
UNFILTERED_FALLBACK_SIZE = 6
PADDING_POOL_SIZE = 5

PRIMARY_SCORE_START = 95
PRIMARY_SCORE_FLOOR = 75
PADDING_SCORE_START = 80
PADDING_SCORE_FLOOR = 70
SCORE_STEP = 5


@dataclass(frozen=True)
class InterestBucket:
    key: str
    label: str
    # Terms looked for in the user's free text.
    keywords: tuple[str, ...]
    # Terms looked for in a CareerOption's category/title.
    catalogue_terms: tuple[str, ...]


# Precedence is the tuple order: the first bucket with any keyword hit wins.
INTEREST_BUCKETS: tuple[InterestBucket, ...] = (
    InterestBucket(
        key="tech",
        label="technology",
        keywords=(
            "programming", "coding", "code", "software", "developer", "development", "computer",
            "computers", "technology", "tech", "web", "app", "apps", "javascript", "java", "cloud",
            "devops", "engineering",
        ),
        catalogue_terms=("software", "developer", "development", "engineer", "web", "cloud", "devops", "mobile"),
    ),
    InterestBucket(
        key="data",
        label="data and analytics",
        keywords=(
            "data", "analytics", "analysis", "statistics", "machine learning", "ai",
            "artificial intelligence", "math", "mathematics", "numbers", "excel", "sql",
        ),
        catalogue_terms=("data", "ai", "machine learning", "analyst", "scientist", "analytics"),
    ),
    InterestBucket(
        key="design",
        label="design",
        keywords=("design", "designing", "creative", "ui", "ux", "art", "drawing", "visual", "graphics", "figma"),
        catalogue_terms=("design", "designer", "ux", "ui"),
    ),
    InterestBucket(
        key="business",
        label="business",
        keywords=(
            "business", "management", "finance", "strategy", "entrepreneur", "startup", "leadership",
            "sales", "product",
        ),
        catalogue_terms=("business", "product", "management", "manager", "consultant", "finance"),
    ),
    InterestBucket(
        key="marketing",
        label="marketing",
        keywords=("marketing", "social media", "content", "brand", "branding", "seo", "advertising", "influencer"),
        catalogue_terms=("marketing", "growth", "content", "seo"),
    ),
    InterestBucket(
        key="security",
        label="cybersecurity",
        keywords=("security", "cyber", "cybersecurity", "hacking", "hacker", "privacy", "encryption"),
        catalogue_terms=("security", "cyber", "hacker"),
    ),
)

_PROFICIENCY_BY_DIFFICULTY = {
    "beginner": "3-6 months",
    "intermediate": "6-12 months",
    "advanced": "12-18 months",
}


def _term_pattern(term: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])")


_PATTERN_CACHE: dict[str, re.Pattern[str]] = {}


def _contains_term(haystack: str, term: str) -> bool:
    pattern = _PATTERN_CACHE.get(term)
    if pattern is None:
        pattern = _term_pattern(term)
        _PATTERN_CACHE[term] = pattern
    return pattern.search(haystack) is not None


def no_jitter(index: int) -> int:
    return 0


def random_jitter(seed: int | None = None) -> JitterSource:
    rng = random.Random(seed)

    def _jitter(index: int) -> int:
        return rng.randint(0, 4)

    return _jitter


def detect_interest_bucket(text: str | None) -> InterestBucket | None:
    normalized = " ".join((text or "").lower().split())
    if not normalized:
        return None
    for bucket in INTEREST_BUCKETS:
        if any(_contains_term(normalized, kw) for kw in bucket.keywords):
            return bucket
    return None


def option_matches_bucket(option: CareerOption, bucket: InterestBucket) -> bool:
    haystack = f"{option.category or ''} {option.title or ''}".lower()
    return any(_contains_term(haystack, term) for term in bucket.catalogue_terms)


def load_candidate_options(db: Session, *, limit: int | None = None) -> list[CareerOption]:
    cap = limit or settings.fallback_candidate_limit
    return (
        db.query(CareerOption)
        .filter(CareerOption.is_active.is_(True))
        .order_by(CareerOption.created_at.desc(), CareerOption.id.desc())
        .limit(cap)
        .all()
    )


def select_candidates(options: Sequence[CareerOption], bucket: InterestBucket | None) -> list[CareerOption]:
    """Rows eligible for the primary (high-score) slots, before truncation to 3."""

    if bucket is not None:
        filtered = [opt for opt in options if option_matches_bucket(opt, bucket)]
        if filtered:
            return filtered
    return list(options[:UNFILTERED_FALLBACK_SIZE])


def primary_score(index: int, jitter: JitterSource) -> int:
    return max(PRIMARY_SCORE_FLOOR, min(PRIMARY_SCORE_START, PRIMARY_SCORE_START - SCORE_STEP * index - jitter(index)))


def padding_score(index: int, jitter: JitterSource) -> int:
    return max(PADDING_SCORE_FLOOR, min(PADDING_SCORE_START, PADDING_SCORE_START - SCORE_STEP * index - jitter(index)))


def format_salary_range(salary_min: int | None, salary_max: int | None) -> str:
    def lpa(value: int) -> str:
        lakhs = round(value / 100_000, 1)
        return f"{lakhs:g}"

    if salary_min and salary_max:
        return f"₹{lpa(salary_min)}-{lpa(salary_max)} LPA"
    if salary_min:
        return f"₹{lpa(salary_min)}+ LPA"
    if salary_max:
        return f"Up to ₹{lpa(salary_max)} LPA"
    return "Varies by experience and location"


def industry_demand_from_outlook(outlook: str | None) -> str:
    text = (outlook or "").strip().lower()
    if text.startswith(("excellent", "very good")) or "high demand" in text:
        return "High"
    return "Medium"


def to_recommendation(
    option: CareerOption,
    *,
    match_percentage: int,
    bucket: InterestBucket | None,
    padded: bool = False,
) -> CareerRecommendation:
    skills = [str(s) for s in (option.required_skills or []) if s]
    key_skills = skills[:5]
    difficulty = (option.difficulty_level or "Intermediate").strip() or "Intermediate"
    demand = industry_demand_from_outlook(option.growth_outlook)

    daily_tasks = [f"Work hands-on with {skill}" for skill in key_skills[:2]]
    daily_tasks.append(f"Collaborate with teams on {option.category.lower()} projects")

    learning_path: list[str] = []
    for idx, skill in enumerate(key_skills[:4]):
        learning_path.append(f"{skill} fundamentals" if idx == 0 else f"Practical {skill}")
    learning_path.append(f"Build a portfolio project as a {option.title}")

    reasons: list[str] = []
    if bucket is not None and not padded:
        reasons.append(f"Matches your interest in {bucket.label}")
    elif padded:
        reasons.append("Broadens your options with a closely related path")
    if key_skills:
        reasons.append(f"Builds on in-demand skills such as {', '.join(key_skills[:2])}")
    reasons.append(f"{demand} industry demand")

    return CareerRecommendation(
        title=option.title,
        description=option.description,
        match_percentage=match_percentage,
        salary_range=format_salary_range(option.salary_min, option.salary_max),
        growth_outlook=option.growth_outlook or "Steady demand across industries",
        key_skills=key_skills,
        daily_tasks=daily_tasks,
        learning_path=learning_path,
        time_to_proficiency=_PROFICIENCY_BY_DIFFICULTY.get(difficulty.lower(), "6-12 months"),
        difficulty_level=difficulty,
        industry_demand=demand,
        reasons=reasons,
    )


def build_recommendations(
    options: Sequence[CareerOption],
    text: str | None,
    *,
    jitter: JitterSource = no_jitter,
) -> list[CareerRecommendation]:
    bucket = detect_interest_bucket(text)
    candidates = select_candidates(options, bucket)

    recommendations: list[CareerRecommendation] = []
    chosen_titles: set[str] = set()
    for idx, option in enumerate(candidates[:MAX_RECOMMENDATIONS]):
        recommendations.append(
            to_recommendation(option, match_percentage=primary_score(idx, jitter), bucket=bucket)
        )
        chosen_titles.add(option.title.strip().lower())

    pad_index = 0
    for option in options[:PADDING_POOL_SIZE]:
        if len(recommendations) >= MAX_RECOMMENDATIONS:
            break
        key = option.title.strip().lower()
        if key in chosen_titles:
            continue
        recommendations.append(
            to_recommendation(option, match_percentage=padding_score(pad_index, jitter), bucket=bucket, padded=True)
        )
        chosen_titles.add(key)
        pad_index += 1

    return recommendations


def recommend_careers(
    db: Session,
    text: str | None,
    *,
    jitter: JitterSource | None = None,
    limit: int | None = None,
) -> list[CareerRecommendation]:
    """Deterministic, database-driven career recommendations.

    Returns 0..3 items. An empty catalogue yields an empty list rather than an error.
    """

    options = load_candidate_options(db, limit=limit)
    recommendations = build_recommendations(options, text, jitter=jitter or random_jitter())
    logger.info(
        "fallback.recommend candidates=%s returned=%s",
        len(options),
        len(recommendations),
    )
    return recommendations
