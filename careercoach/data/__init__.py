# __init__.py
from careercoach.data.career_catalog import (
    CAREER_OPTIONS,
    CAREER_PATHS,
    CareerOptionSeed,
    CareerPathSeed,
    SeedReport,
    seed_catalog,
)

__all__ = [
    "CAREER_OPTIONS",
    "CAREER_PATHS",
    "CareerOptionSeed",
    "CareerPathSeed",
    "SeedReport",
    "seed_catalog",
]
