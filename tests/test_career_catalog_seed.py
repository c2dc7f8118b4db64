from __future__ import annotations

from careercoach.data.career_catalog import CAREER_OPTIONS, CAREER_PATHS, seed_catalog
from careercoach.models import CareerOption, CareerPath
from careercoach.services.roadmap_builder import build_fallback_roadmap


def test_seed_catalog_is_idempotent_by_title(db) -> None:
    first = seed_catalog(db)
    second = seed_catalog(db)

    assert first.options_inserted == len(CAREER_OPTIONS)
    assert first.paths_inserted == len(CAREER_PATHS)
    assert second.options_inserted == 0
    assert second.options_skipped == len(CAREER_OPTIONS)
    assert second.paths_inserted == 0
    assert db.query(CareerOption).count() == len(CAREER_OPTIONS)
    assert db.query(CareerPath).count() == len(CAREER_PATHS)


def test_seeded_paths_drive_the_roadmap_fallback(db) -> None:
    seed_catalog(db)

    roadmap = build_fallback_roadmap(db, "Full Stack Developer")

    assert roadmap.career_path == "Full Stack Developer"
    assert len(roadmap.phases) == 4
    assert "AWS Certified Developer - Associate" in roadmap.certifications
    assert roadmap.phases[0].projects == ["Personal Portfolio Website"]
