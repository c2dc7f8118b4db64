from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from careercoach.database import get_db
from careercoach.models.career_option import CareerOption
from careercoach.models.career_path import CareerPath
from careercoach.schemas.careers import CareerOptionPage, CareerOptionRead, CareerPathDetail, CareerPathSummary


router = APIRouter(prefix="/careers", tags=["careers"])


@router.get("/options", response_model=CareerOptionPage, summary="List career options, newest first")
def list_career_options(
    category: str | None = Query(default=None),
    active: bool | None = Query(default=True),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
) -> CareerOptionPage:
    q = db.query(CareerOption)
    if category and category.strip():
        q = q.filter(func.lower(CareerOption.category) == category.strip().lower())
    if active is not None:
        q = q.filter(CareerOption.is_active.is_(active))

    total = q.count()
    rows = (
        q.order_by(CareerOption.created_at.desc(), CareerOption.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return CareerOptionPage(
        items=[CareerOptionRead.model_validate(r) for r in rows],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/paths", response_model=list[CareerPathSummary], summary="List active career paths")
def list_career_paths(
    category: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[CareerPathSummary]:
    q = db.query(CareerPath).filter(CareerPath.is_active.is_(True))
    if category and category.strip():
        q = q.filter(func.lower(CareerPath.category) == category.strip().lower())
    rows = q.order_by(CareerPath.title.asc(), CareerPath.id.asc()).all()
    return [CareerPathSummary.model_validate(r) for r in rows]


@router.get("/paths/{path_id}", response_model=CareerPathDetail, summary="Career path with its curriculum")
def get_career_path(path_id: int, db: Session = Depends(get_db)) -> CareerPathDetail:
    path = (
        db.query(CareerPath)
        .options(
            selectinload(CareerPath.skills),
            selectinload(CareerPath.courses),
            selectinload(CareerPath.projects),
            selectinload(CareerPath.resources),
        )
        .filter(CareerPath.id == path_id)
        .first()
    )
    if path is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Career path not found")
    return CareerPathDetail.model_validate(path)
