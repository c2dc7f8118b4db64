from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    # Allow running as: python scripts/seed_career_catalog.py
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from careercoach.config import build_sqlalchemy_db_url, settings  # noqa: E402
from careercoach.data.career_catalog import seed_catalog  # noqa: E402
from careercoach.database import Base, SessionLocal, engine, mask_db_url  # noqa: E402
from careercoach.models import CareerOption, CareerPath  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed career options and career path curricula into the ORM DB.")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Run Base.metadata.create_all before seeding (sqlite/dev convenience).",
    )
    parser.add_argument(
        "--truncate",
        action="store_true",
        help="Delete existing career options and career paths before seeding",
    )
    args = parser.parse_args(argv)

    print("seeding career catalogue on:", mask_db_url(build_sqlalchemy_db_url(settings)))
    if args.create_tables:
        Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        if args.truncate:
            for path in db.query(CareerPath).all():
                db.delete(path)
            db.query(CareerOption).delete()
            db.commit()

        report = seed_catalog(db)

    print(
        f"career_options inserted={report.options_inserted} skipped={report.options_skipped}; "
        f"career_paths inserted={report.paths_inserted} skipped={report.paths_skipped}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
