from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from sqlalchemy import create_engine  # noqa: E402

from careercoach.config import build_sqlalchemy_db_url, settings  # noqa: E402
from careercoach.database import Base, _build_connect_args, mask_db_url  # noqa: E402
import careercoach.models  # noqa: F401,E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create the career catalogue tables (career_options, career_paths and their skills, courses, projects and resources). Existing tables are left untouched."
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="Database to create the catalogue tables in. Defaults to the app's DB_URL / DB_* settings.",
    )
    parser.add_argument(
        "--i-understand",
        action="store_true",
        help="Confirm that DDL should run. MySQL deployments never create tables on app startup.",
    )
    args = parser.parse_args(argv)

    if not args.i_understand:
        print("No tables created: pass --i-understand to run DDL.")
        return 2

    url = args.db_url or build_sqlalchemy_db_url(settings)
    engine = create_engine(url, pool_pre_ping=True, future=True, connect_args=_build_connect_args(url))
    Base.metadata.create_all(bind=engine)
    print(f"catalogue tables ready on {mask_db_url(url)}: {', '.join(sorted(Base.metadata.tables))}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
