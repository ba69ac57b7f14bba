"""Exercise catalog endpoints (append-only: list, get, create)."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.enums import ExerciseCategory
from liftlog.core.errors import ExerciseAlreadyExists
from liftlog.db.session import get_db
from liftlog.schemas.exercise import ExerciseCreate, ExerciseRead
from liftlog.services import catalog

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    category: ExerciseCategory | None = None,
    db: AsyncSession = Depends(get_db),
):
    """List exercises in category tile order, then by name. Optional category filter."""
    return await catalog.list_exercises(db, category)


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Define a new exercise. Names are unique (409 on collision)."""
    try:
        return await catalog.create_exercise(db, payload)
    except ExerciseAlreadyExists as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{name:path}", response_model=ExerciseRead)
async def get_exercise(
    name: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a single exercise by name."""
    exercise = await catalog.get_exercise(db, name)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise
