"""Muscle group reference list for the "define new exercise" selector."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.db.session import get_db
from liftlog.schemas.muscle_group import MuscleGroupRead
from liftlog.services import catalog

router = APIRouter()


@router.get("", response_model=list[MuscleGroupRead])
async def list_muscle_groups(db: AsyncSession = Depends(get_db)):
    """List all muscle groups, by name. Populated by scripts/seed_library.py."""
    return await catalog.list_muscle_groups(db)
